"""Question bank: question records, their YAML source and sequence export.

Provide focused helpers to:
- parse question records (prompt, answer options, correct flag, stimulus),
- load the practice and main question pools from a YAML file,
- randomise the on-screen position of the correct answer,
- write a built trial sequence to CSV.
"""

from .models import Answer, Question, NO_QUESTION
from .bank import QuestionBank, load_question_bank
from .io import write_sequence, load_sequence

__all__ = [
    "Answer",
    "Question",
    "NO_QUESTION",
    "QuestionBank",
    "load_question_bank",
    "write_sequence",
    "load_sequence",
]
