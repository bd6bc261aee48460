class TrainingSessionError(Exception):
    pass


class TrainingValidationError(TrainingSessionError):
    pass


class InvalidGameTypeError(TrainingValidationError):
    pass


class InvalidAnswerPayloadError(TrainingValidationError):
    pass


class ItemNotInSessionError(TrainingValidationError):
    pass


class ItemOutOfOrderError(TrainingValidationError):
    pass


class DuplicateAnswerError(TrainingValidationError):
    pass


class IncompleteSubmissionError(TrainingValidationError):
    pass


class ItemTimeBudgetExceededError(TrainingValidationError):
    pass


class SessionNotFoundError(TrainingSessionError):
    pass


class SessionAlreadyCompletedError(TrainingSessionError):
    pass


class InvalidSessionSizeError(TrainingValidationError):
    pass
