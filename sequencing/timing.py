from __future__ import annotations

from dataclasses import dataclass, fields, replace

from . import constants
from .diagnostics import ConfigurationWarning, Diagnostic, emit
from .presets import ExperimentPreset
from .randomness import RandomSource


@dataclass(frozen=True)
class TimingParameters:
    """Durations in seconds used by the scenes when presenting trials."""

    rest_break_duration: float
    max_response_time: float = constants.MAX_RESPONSE_TIME
    pre_display_cue_time: float = constants.PRE_DISPLAY_CUE_TIME
    display_cue_time: float = constants.DISPLAY_CUE_TIME
    go_cue_delay: float = constants.GO_CUE_DELAY
    final_goal_hit_pause_time: float = constants.FINAL_GOAL_HIT_PAUSE_TIME
    display_message_time: float = constants.DISPLAY_MESSAGE_TIME
    error_dwell_time: float = constants.ERROR_DWELL_TIME
    pause_prior_feedback_time: float = constants.PAUSE_PRIOR_FEEDBACK_TIME
    feedback_flash_duration: float = constants.FEEDBACK_FLASH_DURATION
    get_ready_duration: float = constants.GET_READY_DURATION

    @classmethod
    def for_preset(
            cls,
            preset: ExperimentPreset,
            diagnostics: list[Diagnostic] | None = None,
            **overrides: float,
    ) -> TimingParameters:
        unknown = sorted(set(overrides) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown timing parameters: {unknown}")
        timing = replace(cls(rest_break_duration=float(preset.rest_duration)), **overrides)
        if timing.error_dwell_time < timing.display_message_time:
            emit(
                diagnostics,
                ConfigurationWarning,
                f"error_dwell_time ({timing.error_dwell_time}s) is shorter than "
                f"display_message_time ({timing.display_message_time}s); error messages will be cut off.",
            )
        return timing


def jitter_time(time: float, rng: RandomSource) -> float:
    """Jitter uniformly from ``time`` up to 50% above it."""
    return time + constants.JITTER_FRACTION * time * rng.next_float()
