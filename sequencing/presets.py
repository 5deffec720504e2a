"""Experiment presets: how many practice and main trials, and where rest breaks go."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping

from .constants import GET_READY_SLOTS, REST_BREAK_OFFSET


class ExperimentVersion(str, Enum):
    MTURK_PILOT = "mturk_pilot"
    SINGLEBLOCK_LABPILOT = "singleblock_labpilot"
    MICRO_DEBUG = "micro_debug"


@dataclass(frozen=True)
class ExperimentPreset:
    """Structured configuration of one experiment version.

    ``rest_frequency`` includes the rest break offset: a value of 32 means a
    rest break is taken after every 31 main trials.
    """

    name: str
    practice_count: int
    main_trial_count: int
    rest_frequency: int
    rest_duration: float
    block_length: int

    @property
    def practice_slots(self) -> int:
        return self.practice_count + GET_READY_SLOTS

    @property
    def rest_spacing(self) -> int:
        """Number of main trials between two rest breaks."""
        return self.rest_frequency - REST_BREAK_OFFSET

    @classmethod
    def from_dict(cls, name: str, values: Mapping[str, Any]) -> ExperimentPreset:
        """Build and validate a preset from a mapping such as a YAML section."""
        values = {str(k).lower(): v for k, v in values.items()}
        expected = [f.name for f in fields(cls) if f.name != "name"]

        missing = [k for k in expected if k not in values]
        if missing:
            raise ValueError(f"Preset '{name}' is missing required fields: {missing}")
        unknown = sorted(set(values) - set(expected))
        if unknown:
            raise ValueError(f"Preset '{name}' has unknown fields: {unknown}")

        preset = cls(
            name=name,
            practice_count=values["practice_count"],
            main_trial_count=values["main_trial_count"],
            rest_frequency=values["rest_frequency"],
            rest_duration=values["rest_duration"],
            block_length=values["block_length"],
        )
        preset.validate()
        return preset

    def validate(self) -> None:
        for attr in ("practice_count", "main_trial_count", "rest_frequency", "block_length"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Preset '{self.name}': {attr} must be a non-negative integer, got {value!r}.")
        if self.block_length < 1:
            raise ValueError(f"Preset '{self.name}': block_length must be at least 1.")
        if self.rest_frequency <= REST_BREAK_OFFSET:
            raise ValueError(
                f"Preset '{self.name}': rest_frequency must be larger than {REST_BREAK_OFFSET}, "
                f"got {self.rest_frequency}."
            )
        if isinstance(self.rest_duration, bool) or not isinstance(self.rest_duration, (int, float)) \
                or self.rest_duration < 0:
            raise ValueError(
                f"Preset '{self.name}': rest_duration must be a non-negative number, got {self.rest_duration!r}."
            )


PRESETS = {
    # full learning experiment, one block of 30 questions
    ExperimentVersion.MTURK_PILOT.value: ExperimentPreset(
        name=ExperimentVersion.MTURK_PILOT.value,
        practice_count=2,
        main_trial_count=30,
        rest_frequency=31 + REST_BREAK_OFFSET,
        rest_duration=30.0,
        block_length=30,
    ),
    # mini single block lab test
    ExperimentVersion.SINGLEBLOCK_LABPILOT.value: ExperimentPreset(
        name=ExperimentVersion.SINGLEBLOCK_LABPILOT.value,
        practice_count=1,
        main_trial_count=16,
        rest_frequency=20 + REST_BREAK_OFFSET,
        rest_duration=5.0,
        block_length=16,
    ),
    ExperimentVersion.MICRO_DEBUG.value: ExperimentPreset(
        name=ExperimentVersion.MICRO_DEBUG.value,
        practice_count=2,
        main_trial_count=3,
        rest_frequency=5 + REST_BREAK_OFFSET,
        rest_duration=5.0,
        block_length=3,
    ),
}


def parse_presets(raw: Mapping[str, Mapping[str, Any]] | None) -> dict[str, ExperimentPreset]:
    """Validate user-defined presets, e.g. the ``presets`` section of a config file."""
    if not raw:
        return {}
    if not isinstance(raw, Mapping):
        raise ValueError("Custom presets must be a mapping of preset name to preset fields.")
    parsed = {}
    for name, values in raw.items():
        if isinstance(values, ExperimentPreset):
            values.validate()
            parsed[str(name)] = values
        elif isinstance(values, Mapping):
            parsed[str(name)] = ExperimentPreset.from_dict(str(name), values)
        else:
            raise ValueError(f"Preset '{name}' must be a mapping, got {type(values).__name__}.")
    return parsed


def get_preset(
        name: str | ExperimentVersion,
        custom_presets: Mapping[str, Any] | None = None,
) -> ExperimentPreset:
    """Return the preset called ``name``.

    Custom presets take precedence over the built-in ones of the same name.

    Raises
    ------
    ValueError
        If no preset with that name exists.
    """
    if isinstance(name, ExperimentVersion):
        name = name.value
    available = {**PRESETS, **parse_presets(custom_presets)}
    if name not in available:
        raise ValueError(
            f"Unknown experiment version '{name}'. Available versions are: {sorted(available)}"
        )
    return available[name]
