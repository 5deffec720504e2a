from __future__ import annotations

from dataclasses import dataclass

from ..constants import SETUP_AND_CLOSE_SLOTS, SETUP_SLOTS
from ..diagnostics import ConfigurationWarning, Diagnostic, emit
from ..presets import ExperimentPreset


@dataclass(frozen=True)
class SequenceLayout:
    """Slot counts and fixed offsets of a trial sequence.

    The sequence is laid out as::

        0..5                          setup screens
        practice_start..get_ready-1   practice trials
        get_ready_index               get ready screen
        main_start..exit_index-1      main trials and rest breaks
        exit_index                    exit screen
    """

    practice_slots: int
    main_trial_count: int
    rest_frequency: int
    block_length: int
    n_rest_breaks: int
    total_trials: int

    @classmethod
    def from_preset(
            cls,
            preset: ExperimentPreset,
            diagnostics: list[Diagnostic] | None = None,
    ) -> SequenceLayout:
        if preset.rest_spacing < preset.block_length:
            emit(
                diagnostics,
                ConfigurationWarning,
                f"Rest breaks not allocated properly in trial sequence: a rest break every "
                f"{preset.rest_spacing} trials falls inside blocks of {preset.block_length} trials.",
            )

        n_rest_breaks = max(preset.main_trial_count // preset.rest_frequency, 0)
        total_trials = (
            preset.main_trial_count + SETUP_AND_CLOSE_SLOTS + preset.practice_slots + n_rest_breaks
        )
        return cls(
            practice_slots=preset.practice_slots,
            main_trial_count=preset.main_trial_count,
            rest_frequency=preset.rest_frequency,
            block_length=preset.block_length,
            n_rest_breaks=n_rest_breaks,
            total_trials=total_trials,
        )

    @property
    def practice_start(self) -> int:
        return SETUP_SLOTS

    @property
    def get_ready_index(self) -> int:
        return SETUP_SLOTS + self.practice_slots - 1

    @property
    def main_start(self) -> int:
        return self.get_ready_index + 1

    @property
    def exit_index(self) -> int:
        return self.total_trials - 1

    @property
    def practice_range(self) -> range:
        return range(self.practice_start, self.get_ready_index)

    @property
    def main_range(self) -> range:
        """Slots holding main trials and rest breaks."""
        return range(self.main_start, self.exit_index)
