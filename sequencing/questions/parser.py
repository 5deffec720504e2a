from __future__ import annotations

from typing import Any, Mapping

from .models import Answer, Question


def parse_question(record: Mapping[str, Any], label: str = "question") -> Question:
    """Parse one question record as found in the question bank YAML.

    The record is expected to have the following keys:
    - prompt: the question text shown to the participant
    - answers: a list of ``{text: str, correct: bool}`` options
    - stimulus (optional): reference to an image or scene shown with the question

    Raises ValueError if the prompt is missing or if the question has answer
    options but not exactly one of them is flagged as correct.
    """
    if not isinstance(record, Mapping):
        raise ValueError(f"{label}: expected a mapping, got {type(record).__name__}.")

    prompt = record.get("prompt")
    if not prompt or not isinstance(prompt, str):
        raise ValueError(f"{label}: every question needs a non-empty 'prompt'.")

    answers = []
    for i, option in enumerate(record.get("answers") or []):
        if not isinstance(option, Mapping) or "text" not in option:
            raise ValueError(f"{label}: answer {i} needs a 'text' entry.")
        answers.append(Answer(text=str(option["text"]), is_correct=bool(option.get("correct", False))))

    n_correct = sum(answer.is_correct for answer in answers)
    if answers and n_correct != 1:
        raise ValueError(
            f"{label}: exactly one answer must be marked correct, found {n_correct} "
            f"in {prompt[:40]!r}."
        )

    return Question(prompt=prompt, answers=tuple(answers), stimulus=str(record.get("stimulus") or ""))


def place_correct_answer(question: Question, position: int) -> Question:
    """Return a copy of ``question`` with the correct answer moved to ``position``.

    The remaining answers keep their relative order, so for two options this
    decides whether the correct answer appears on the left or on the right.
    """
    if not question.answers:
        return question
    correct = [a for a in question.answers if a.is_correct]
    others = [a for a in question.answers if not a.is_correct]
    others.insert(position, correct[0])
    return Question(prompt=question.prompt, answers=tuple(others), stimulus=question.stimulus)
