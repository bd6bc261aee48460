class ResultStoreError(Exception):
    pass


class ResultAlreadyRecordedError(ResultStoreError):
    pass
