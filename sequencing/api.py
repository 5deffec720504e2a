"""API for building experiment trial sequences"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from .presets import ExperimentPreset, ExperimentVersion, get_preset
from .questions.bank import QuestionBank, load_question_bank
from .randomness import NumpyRandomSource, RandomSource
from .sequence.builder import SequenceBuilder
from .sequence.trial_sequence import TrialSequence
from .timing import TimingParameters, jitter_time
from .checks.sequence_checks import check_sequence_layout, check_scene_catalog


def build_trial_sequence(
        experiment_version: str | ExperimentVersion | ExperimentPreset,
        rng: RandomSource | None = None,
        question_bank: QuestionBank | Path | str | None = None,
        custom_presets: Mapping[str, Any] | None = None,
        timing_overrides: Mapping[str, float] | None = None,
        randomise_answer_order: bool = True,
) -> TrialSequence:
    """Build the full trial sequence of one session.

    Parameters
    ----------
    experiment_version : str | ExperimentVersion | ExperimentPreset
        Name of a built-in or custom preset, or a preset object.
    rng : RandomSource, optional
        Source of all random draws. An unseeded numpy source is used if not given.
    question_bank : QuestionBank | Path | str, optional
        A loaded bank, or the path of a YAML bank. Defaults to the bundled bank.
        The bank is loaded with the same random source, before shuffling.
    custom_presets : Mapping, optional
        Additional presets, e.g. from the ``presets`` section of the config file.
    timing_overrides : Mapping, optional
        Timing parameters that replace the defaults.
    randomise_answer_order : bool
        Whether to randomise the position of the correct answer when loading a bank.
    """
    if rng is None:
        rng = NumpyRandomSource()

    if isinstance(experiment_version, ExperimentPreset):
        preset = experiment_version
        preset.validate()
    else:
        preset = get_preset(experiment_version, custom_presets)

    if not isinstance(question_bank, QuestionBank):
        question_bank = load_question_bank(question_bank, rng=rng, randomise_answer_order=randomise_answer_order)

    builder = SequenceBuilder(preset, question_bank, rng, timing_overrides=timing_overrides)
    return builder.build()


__all__ = [
    "build_trial_sequence",
    "get_preset",
    "load_question_bank",
    "jitter_time",
    "check_sequence_layout",
    "check_scene_catalog",
    "NumpyRandomSource",
    "SequenceBuilder",
    "TrialSequence",
    "TimingParameters",
    "ExperimentPreset",
    "ExperimentVersion",
    "QuestionBank",
]
