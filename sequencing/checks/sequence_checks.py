from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .. import constants
from ..sequence.trial_sequence import TrialSequence


def _report_warning(message: str, report_file: Path | None):
    if report_file is None:
        return
    assert isinstance(report_file, Path)
    report_file.parent.mkdir(parents=True, exist_ok=True)
    with open(report_file, "a", encoding="utf-8") as f:
        f.write(f"{message}\n")


def check_sequence_layout(sequence: TrialSequence, report_file: Path = None) -> list[str]:
    """
    checking that the administrative screens sit at their fixed offsets, that every slot was written
    and that the number of rest breaks matches the layout
    :param sequence: the built trial sequence
    :param report_file: optional Path object where to write the report
    :return: list of problems found, empty if the layout is fine
    """
    layout = sequence.layout
    problems = []

    expected = {index: maze for index, maze in enumerate(constants.SETUP_MAZES)}
    expected[layout.get_ready_index] = constants.GET_READY
    expected[layout.exit_index] = constants.EXIT
    for index, maze in sorted(expected.items()):
        if index >= len(sequence) or sequence.get_trial_maze(index) != maze:
            problems.append(f"Trial {index}: expected {maze} screen.")

    for index in layout.practice_range:
        if sequence.get_trial_maze(index) != constants.PRACTICE:
            problems.append(f"Trial {index}: expected a practice trial, found {sequence.get_trial_maze(index)!r}.")

    for trial in sequence:
        if trial.maze == constants.UNSET:
            problems.append(f"Trial {trial.index} was never written.")
        elif trial.is_question_trial and trial.question.is_empty:
            problems.append(f"Trial {trial.index} is a {trial.maze} without a question.")

    n_breaks = sequence.maze_counts()[constants.REST_BREAK]
    if n_breaks != layout.n_rest_breaks:
        problems.append(f"Found {n_breaks} rest breaks, expected {layout.n_rest_breaks}.")

    for message in problems:
        _report_warning(message, report_file)
    return problems


def check_scene_catalog(
        sequence: TrialSequence,
        available_scenes: Iterable[str],
        report_file: Path = None,
) -> list[str]:
    """
    checking that every maze/scene used in the sequence exists in the application's scene catalog
    :param sequence: the built trial sequence
    :param available_scenes: names of the scenes that can be loaded, e.g. from the build settings
    :param report_file: optional Path object where to write the report
    :return: sorted list of scene names that are used but not available
    """
    available = set(available_scenes)
    missing = sorted({trial.maze for trial in sequence if trial.maze not in available})
    for maze in missing:
        _report_warning(f"Scene {maze!r} is used in the trial sequence but not in the scene catalog.", report_file)
    return missing
