"""Loading the practice and main question pools.

The question texts live in a YAML file (``sequencing/data/questions.yaml`` by
default) rather than in code. The first answer listed for each question does
not have to be the correct one; the ``correct`` flag decides.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..constants import DEFAULT_QUESTION_BANK
from ..randomness import NumpyRandomSource, RandomSource
from .io import read_question_file
from .models import Question
from .parser import parse_question, place_correct_answer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionBank:

    practice: tuple[Question, ...]
    main: tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.practice) + len(self.main)


def load_question_bank(
        path: Path | str | None = None,
        rng: RandomSource | None = None,
        randomise_answer_order: bool = True,
) -> QuestionBank:
    """Read the question bank and optionally shuffle the answer positions.

    Parameters
    ----------
    path : Path | str, optional
        YAML file with ``practice`` and ``main`` lists. Defaults to the bank
        shipped with the package.
    rng : RandomSource, optional
        Used to place each correct answer. A fresh unseeded source is created if
        not given.
    randomise_answer_order : bool
        If True, the correct answer of every question is moved to a random
        position among the options. If False, answers keep their file order.

    Returns
    -------
    QuestionBank

    Raises
    ------
    ValueError
        If the file is malformed or a question has no unique correct answer.
    """
    path = Path(path) if path is not None else DEFAULT_QUESTION_BANK
    content = read_question_file(path)

    unknown = set(content) - {"practice", "main"}
    if unknown:
        raise ValueError(f"Unknown sections in question bank {path}: {sorted(unknown)}")

    if randomise_answer_order and rng is None:
        rng = NumpyRandomSource()

    pools = {}
    for section in ("practice", "main"):
        records = content.get(section) or []
        if not isinstance(records, list):
            raise ValueError(f"Section '{section}' in {path} must be a list of questions.")
        questions = []
        for i, record in enumerate(records):
            question = parse_question(record, label=f"{path.name}: {section}[{i}]")
            if randomise_answer_order and question.answers:
                question = place_correct_answer(question, rng.next_int(len(question.answers)))
            questions.append(question)
        pools[section] = tuple(questions)

    logger.info(
        f"Loaded {len(pools['practice'])} practice and {len(pools['main'])} main questions from {path}."
    )
    return QuestionBank(practice=pools["practice"], main=pools["main"])
