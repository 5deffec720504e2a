from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

import polars as pl

from ..constants import DATA_RECORD_FREQUENCY
from ..diagnostics import Diagnostic
from ..presets import ExperimentPreset
from ..timing import TimingParameters
from .layout import SequenceLayout
from .trial import Trial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialSequence:
    """The ordered, read-only trial list of one session.

    Accessors take the trial index, counted from 0 over all trials including
    the setup screens.
    """

    trials: tuple[Trial, ...]
    preset: ExperimentPreset
    layout: SequenceLayout
    timing: TimingParameters
    diagnostics: tuple[Diagnostic, ...] = ()

    def __len__(self) -> int:
        return len(self.trials)

    def __iter__(self):
        for trial in self.trials:
            yield trial

    def __getitem__(self, index: int) -> Trial:
        return self.trials[index]

    def get_total_trials(self) -> int:
        return len(self.trials)

    def get_data_frequency(self) -> float:
        return DATA_RECORD_FREQUENCY

    def get_trial_maze(self, trial: int) -> str:
        return self.trials[trial].maze

    def get_stimulus(self, trial: int) -> str:
        return self.trials[trial].question.stimulus

    def get_question(self, trial: int) -> str:
        return self.trials[trial].question.prompt

    def get_possible_answers(self, trial: int) -> list[str]:
        return self.trials[trial].question.answer_texts

    def get_answer(self, trial: int) -> str:
        return self.trials[trial].question.correct_answer

    def maze_counts(self) -> Counter:
        return Counter(trial.maze for trial in self.trials)

    def to_frame(self) -> pl.DataFrame:
        """One row per trial with the maze, question, answer options and correct answer."""
        return pl.DataFrame(
            {
                "trial": [t.index for t in self.trials],
                "maze": [t.maze for t in self.trials],
                "question": [t.question.prompt for t in self.trials],
                "possible_answers": [t.question.answer_texts for t in self.trials],
                "correct_answer": [t.question.correct_answer for t in self.trials],
                "stimulus": [t.question.stimulus for t in self.trials],
            },
            schema={
                "trial": pl.Int64,
                "maze": pl.Utf8,
                "question": pl.Utf8,
                "possible_answers": pl.List(pl.Utf8),
                "correct_answer": pl.Utf8,
                "stimulus": pl.Utf8,
            },
        )

    def log_sequence(self, level: int = logging.DEBUG) -> None:
        """Log the sequence in readable text, e.g. to check a new preset by eye."""
        for trial in self.trials:
            logger.log(level, f"Trial {trial.index}, Maze: {trial.maze}, Stimulus: {trial.question.stimulus}")
