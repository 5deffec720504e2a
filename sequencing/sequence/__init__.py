"""Trial sequence submodule: layout arithmetic, the builder and the built sequence."""

from .layout import SequenceLayout
from .trial import Trial
from .builder import SequenceBuilder
from .trial_sequence import TrialSequence

__all__ = [
    "SequenceLayout",
    "Trial",
    "SequenceBuilder",
    "TrialSequence",
]
