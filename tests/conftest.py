from __future__ import annotations

import logging
import warnings
from pathlib import Path

import pytest
import yaml

from sequencing.presets import ExperimentPreset
from sequencing.questions.bank import QuestionBank
from sequencing.questions.models import Answer, Question
from sequencing.randomness import NumpyRandomSource


class ScriptedRandomSource:
    """Random source returning pre-set values, 0 once the script runs out."""

    def __init__(self, ints=(), floats=()):
        self.ints = list(ints)
        self.floats = list(floats)
        self.int_calls: list[int] = []

    def next_int(self, bound: int) -> int:
        self.int_calls.append(bound)
        value = self.ints.pop(0) if self.ints else 0
        assert 0 <= value < bound, f"scripted value {value} out of range for bound {bound}"
        return value

    def next_float(self) -> float:
        return self.floats.pop(0) if self.floats else 0.0


def make_question(i: int, prefix: str = "Q") -> Question:
    return Question(
        prompt=f"{prefix}{i} prompt",
        answers=(Answer(f"{prefix}{i} right", True), Answer(f"{prefix}{i} wrong", False)),
        stimulus=f"{prefix.lower()}{i}.png",
    )


@pytest.fixture(name="scripted_rng")
def fixture_scripted_rng():
    return ScriptedRandomSource


@pytest.fixture(name="seeded_rng")
def fixture_seeded_rng():
    return NumpyRandomSource(seed=1234)


@pytest.fixture(name="make_bank")
def fixture_make_bank():
    """Return a factory building a bank with ``n_practice`` and ``n_main`` distinct questions."""

    def _make_bank(n_practice: int = 2, n_main: int = 5) -> QuestionBank:
        return QuestionBank(
            practice=tuple(make_question(i, "P") for i in range(n_practice)),
            main=tuple(make_question(i, "Q") for i in range(n_main)),
        )

    return _make_bank


@pytest.fixture(name="make_preset")
def fixture_make_preset():
    def _make_preset(
        practice_count: int = 2,
        main_trial_count: int = 5,
        rest_frequency: int = 100,
        rest_duration: float = 5.0,
        block_length: int | None = None,
    ) -> ExperimentPreset:
        return ExperimentPreset(
            name="test_preset",
            practice_count=practice_count,
            main_trial_count=main_trial_count,
            rest_frequency=rest_frequency,
            rest_duration=rest_duration,
            block_length=main_trial_count if block_length is None else block_length,
        )

    return _make_preset


@pytest.fixture(name="make_yaml_file", scope="function")
def fixture_make_yaml_file(tmp_path: Path):
    """Dump ``content`` as YAML to ``filename`` in a temporary directory and return the Path."""

    def _make_yaml_file(filename: str | Path, content) -> Path:
        filepath = tmp_path / Path(filename)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            yaml.safe_dump(content, f)
        return filepath

    return _make_yaml_file


@pytest.fixture(name="quiet_warnings")
def fixture_quiet_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        yield


@pytest.fixture(autouse=True)
def reset_package_logging():
    """Remove handlers added by ``setup_logging`` so that tests do not leak into each other."""
    yield
    for name in ("sequencing", "py.warnings"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
    logging.captureWarnings(False)
