"""Assembling the trial sequence of one experiment session.

The builder lays out the administrative screens at fixed offsets, adds the
practice trials in the order they appear in the question bank, and fills the
main part with shuffled blocks of questions separated by rest breaks.
None of the steps raise: inconsistencies are reported as warnings and recorded
on the returned :class:`TrialSequence`.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .. import constants
from ..diagnostics import ConfigurationWarning, Diagnostic, InsufficientPoolWarning, emit
from ..presets import ExperimentPreset
from ..questions.bank import QuestionBank
from ..questions.models import NO_QUESTION, Question
from ..randomness import RandomSource
from ..timing import TimingParameters
from .layout import SequenceLayout
from .trial import Trial
from .trial_sequence import TrialSequence

logger = logging.getLogger(__name__)


class SequenceBuilder:
    """Build the trial sequence for one preset.

    Parameters
    ----------
    preset : ExperimentPreset
        Trial counts, rest break frequency and block length.
    question_bank : QuestionBank
        Practice and main question pools. The builder shuffles its own copy of
        the main pool; the bank itself is not modified.
    rng : RandomSource
        Source of all random draws made while shuffling.
    timing : TimingParameters, optional
        Durations passed through to the sequence. Derived from the preset if not
        given.
    timing_overrides : Mapping, optional
        Timing parameters replacing the defaults when ``timing`` is not given.

    Raises
    ------
    ValueError
        If a pool needed by the preset is empty, as no sequence can be produced.
    """

    def __init__(
            self,
            preset: ExperimentPreset,
            question_bank: QuestionBank,
            rng: RandomSource,
            timing: TimingParameters | None = None,
            timing_overrides: Mapping[str, float] | None = None,
    ):
        if preset.main_trial_count > 0 and not question_bank.main:
            raise ValueError(f"Preset '{preset.name}' needs main trials but the main question pool is empty.")
        if preset.practice_count > 0 and not question_bank.practice:
            raise ValueError(
                f"Preset '{preset.name}' needs practice trials but the practice question pool is empty."
            )

        self.preset = preset
        self.rng = rng
        self.diagnostics: list[Diagnostic] = []
        self.layout = SequenceLayout.from_preset(preset, self.diagnostics)
        if timing is None:
            timing = TimingParameters.for_preset(preset, self.diagnostics, **(timing_overrides or {}))
        self.timing = timing

        self.practice_questions = list(question_bank.practice)
        self.questions = list(question_bank.main)
        self.slots: list[Trial | None] = [None] * self.layout.total_trials
        self.next_trial = 0

    def build(self) -> TrialSequence:
        self.add_administrative_trials()
        self.next_trial = self.add_practice_trials()
        self.next_trial = self.add_main_trials(self.next_trial)
        return self._finalise()

    def add_administrative_trials(self) -> None:
        for index, maze in enumerate(constants.SETUP_MAZES):
            self.slots[index] = Trial(index, maze)
        self.slots[self.layout.get_ready_index] = Trial(self.layout.get_ready_index, constants.GET_READY)
        self.slots[self.layout.exit_index] = Trial(self.layout.exit_index, constants.EXIT)

    def add_practice_trials(self) -> int:
        """Write the practice questions in their original order.

        Returns the first slot after the get ready screen.
        """
        n_practice = len(self.practice_questions)
        if 0 < n_practice < self.preset.practice_count:
            emit(
                self.diagnostics,
                InsufficientPoolWarning,
                f"Only {n_practice} practice questions for {self.preset.practice_count} practice trials. "
                f"Practice questions will repeat.",
            )
        for offset, index in enumerate(self.layout.practice_range):
            self.set_trial(index, self.practice_questions[offset % n_practice], constants.PRACTICE)
        return self.layout.main_start

    def add_main_trials(self, next_trial: int) -> int:
        """Fill the main part with shuffled blocks, inserting rest breaks.

        A rest break is taken after every ``preset.rest_spacing`` main trials
        while breaks remain. A block that would run over a rest break is cut at
        the break and the next block starts after it.
        """
        remaining = self.preset.main_trial_count
        breaks_left = self.layout.n_rest_breaks
        since_break = 0

        while remaining > 0:
            block_length = min(self.preset.block_length, remaining)
            if breaks_left:
                block_length = min(block_length, self.preset.rest_spacing - since_break)

            next_trial = self.shuffle_and_store_block(next_trial, block_length)
            remaining -= block_length
            since_break += block_length

            if breaks_left and since_break == self.preset.rest_spacing:
                next_trial = self.rest_break_here(next_trial)
                breaks_left -= 1
                since_break = 0

        return next_trial

    def shuffle_and_store_block(self, first_trial: int, block_length: int) -> int:
        """Shuffle the main question pool and store the first ``block_length`` questions.

        The whole pool is shuffled in place (Fisher-Yates), so the order carries
        over between blocks. If the pool holds fewer questions than the block,
        the remaining slots are each filled with a question drawn uniformly from
        the pool, so repeats are possible.

        Returns the slot after the block.
        """
        n = len(self.questions)
        if n == 0 and block_length > 0:
            emit(
                self.diagnostics,
                InsufficientPoolWarning,
                f"No questions to fill a block of {block_length} trials; the block is left empty.",
            )
            return first_trial + block_length
        if n < block_length:
            emit(
                self.diagnostics,
                InsufficientPoolWarning,
                f"Only {n} unique questions to fill a block of {block_length} trials. Trials will repeat.",
            )

        for i in range(n):
            k = i + self.rng.next_int(n - i)
            self.questions[i], self.questions[k] = self.questions[k], self.questions[i]

        for i in range(block_length):
            if i < n:
                question = self.questions[i]
            else:
                question = self.questions[self.rng.next_int(n)]
            self.set_trial(first_trial + i, question, constants.MAIN_TRIAL)

        return first_trial + block_length

    def rest_break_here(self, next_trial: int) -> int:
        self._write(Trial(next_trial, constants.REST_BREAK))
        return next_trial + 1

    def set_trial(self, index: int, question: Question, maze: str) -> None:
        if index < constants.SETUP_SLOTS:
            emit(
                self.diagnostics,
                ConfigurationWarning,
                f"Cannot write trial {index}: slots 0-{constants.SETUP_SLOTS - 1} are reserved for setup screens.",
            )
            return
        self._write(Trial(index, maze, question))

    def _write(self, trial: Trial) -> None:
        if not 0 <= trial.index < len(self.slots):
            emit(
                self.diagnostics,
                ConfigurationWarning,
                f"Cannot write trial {trial.index}: the sequence has {len(self.slots)} trials.",
            )
            return
        if self.slots[trial.index] is not None:
            emit(
                self.diagnostics,
                ConfigurationWarning,
                f"Trial {trial.index} is already set to {self.slots[trial.index].maze}; "
                f"not overwriting with {trial.maze}.",
            )
            return
        self.slots[trial.index] = trial

    def _finalise(self) -> TrialSequence:
        trials = []
        for index, trial in enumerate(self.slots):
            if trial is None:
                emit(
                    self.diagnostics,
                    ConfigurationWarning,
                    f"Trial {index} was never written; the sequence layout is malformed.",
                )
                trial = Trial(index, constants.UNSET, NO_QUESTION)
            trials.append(trial)

        logger.info(
            f"Built trial sequence for '{self.preset.name}': {len(trials)} trials, "
            f"{self.layout.n_rest_breaks} rest breaks, {len(self.diagnostics)} warnings."
        )
        return TrialSequence(
            trials=tuple(trials),
            preset=self.preset,
            layout=self.layout,
            timing=self.timing,
            diagnostics=tuple(self.diagnostics),
        )
