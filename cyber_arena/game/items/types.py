from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class RedFlag:
    type: str
    description: str
    severity: str = "medium"


@dataclass(frozen=True, slots=True)
class EmailParty:
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class EmailAttachment:
    name: str
    type: str
    suspicious: bool = False


@dataclass(frozen=True, slots=True)
class PhishingEmail:
    sender: EmailParty
    recipient: EmailParty
    subject: str
    body: str
    attachments: tuple[EmailAttachment, ...] = ()


@dataclass(frozen=True, slots=True)
class ScenarioChoice:
    text: str
    is_correct: bool
    feedback: str
    points: int = 0


@dataclass(frozen=True, slots=True)
class QuizItem:
    item_id: str
    category: str
    difficulty: str
    question: str
    options: tuple[str, ...]
    correct_option: int
    explanation: str
    kind: Literal["quiz"] = "quiz"

    @property
    def prompt(self) -> str:
        return self.question


@dataclass(frozen=True, slots=True)
class PhishingItem:
    item_id: str
    category: str
    difficulty: str
    title: str
    description: str
    email: PhishingEmail
    is_phishing: bool
    explanation: str
    red_flags: tuple[RedFlag, ...] = ()
    kind: Literal["phishing"] = "phishing"

    @property
    def prompt(self) -> str:
        return self.description


@dataclass(frozen=True, slots=True)
class ScenarioItem:
    item_id: str
    category: str
    difficulty: str
    title: str
    description: str
    situation: str
    choices: tuple[ScenarioChoice, ...]
    explanation: str = ""
    kind: Literal["scenario"] = "scenario"

    @property
    def prompt(self) -> str:
        return self.situation

    @property
    def correct_choice_index(self) -> int | None:
        for index, choice in enumerate(self.choices):
            if choice.is_correct:
                return index
        return None


TrainingItem = QuizItem | PhishingItem | ScenarioItem
