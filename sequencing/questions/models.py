from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Answer:

    text: str
    is_correct: bool = False


@dataclass(frozen=True)
class Question:

    prompt: str
    answers: tuple[Answer, ...] = ()
    stimulus: str = ""

    @property
    def answer_texts(self) -> list[str]:
        return [answer.text for answer in self.answers]

    @property
    def correct_answer(self) -> str:
        """Text of the answer flagged as correct, or ``""`` if there is none."""
        for answer in self.answers:
            if answer.is_correct:
                return answer.text
        return ""

    @property
    def is_empty(self) -> bool:
        return not self.prompt and not self.answers


# administrative screens and rest breaks carry no question
NO_QUESTION = Question(prompt="")
