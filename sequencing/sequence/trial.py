from dataclasses import dataclass

from ..constants import MAIN_TRIAL, PRACTICE, REST_BREAK
from ..questions.models import NO_QUESTION, Question


@dataclass(frozen=True)
class Trial:

    index: int
    maze: str
    question: Question = NO_QUESTION

    @property
    def is_question_trial(self) -> bool:
        return self.maze in (PRACTICE, MAIN_TRIAL)

    @property
    def is_rest_break(self) -> bool:
        return self.maze == REST_BREAK
