from __future__ import annotations

from argparse import ArgumentParser
from pathlib import Path

import sequencing
from sequencing import constants
from sequencing.checks.sequence_checks import check_scene_catalog, check_sequence_layout
from sequencing.config import Settings
from sequencing.questions.io import write_sequence
from sequencing.randomness import NumpyRandomSource
from sequencing.utils.logging import captured_warnings, get_logger

logger = get_logger(__name__)


def run_build_trial_sequence(
        settings: Settings,
        output: Path | None = None,
        scenes: list[str] | None = None,
) -> sequencing.TrialSequence:
    rng = NumpyRandomSource(settings.RANDOM_SEED)

    sequence = sequencing.build_trial_sequence(
        settings.EXPERIMENT_VERSION,
        rng=rng,
        question_bank=settings.QUESTION_BANK_PATH,
        custom_presets=settings.PRESETS,
        timing_overrides=settings.TIMING,
        randomise_answer_order=settings.RANDOMISE_ANSWER_ORDER,
    )
    sequence.log_sequence()

    output_folder = Path(settings.OUTPUT_DIR)
    report_file = output_folder / f"{sequence.preset.name}_sequence_report.txt"
    if report_file.exists():
        report_file.unlink()

    problems = check_sequence_layout(sequence, report_file=report_file)
    if scenes:
        problems += check_scene_catalog(sequence, scenes, report_file=report_file)
    for problem in problems:
        logger.warning(problem)

    if output is None:
        output = output_folder / f"{sequence.preset.name}_sequence.csv"
    write_sequence(sequence.to_frame(), Path(output))
    logger.info(f"Trial sequence written to {output}")

    return sequence


def main(argv: list[str] | None = None) -> None:
    """Build a trial sequence and write it to CSV."""
    parser = ArgumentParser(description="Build the trial sequence of one experiment session.")
    parser.add_argument(
        "--experiment-version",
        type=str,
        default=None,
        help="Name of the preset to build, e.g. mturk_pilot, singleblock_labpilot or micro_debug.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    parser.add_argument(
        "--question-bank",
        type=Path,
        default=None,
        help="YAML file with the practice and main questions. Defaults to the bundled bank.",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML config file.")
    parser.add_argument("--output", type=Path, default=None, help="CSV file to write the sequence to.")
    parser.add_argument("--log-file", type=Path, default=None, help="File to write the log to.")
    parser.add_argument(
        "--scenes",
        nargs="*",
        default=None,
        help="Names of the scenes available in the application, to check the sequence against.",
    )
    args = parser.parse_args(argv)

    settings = Settings()
    overrides = {
        "EXPERIMENT_VERSION": args.experiment_version,
        "RANDOM_SEED": args.seed,
        "QUESTION_BANK_PATH": args.question_bank,
    }
    settings.load(args.config)
    settings.update({k: v for k, v in overrides.items() if v is not None})
    settings._validate()
    settings.setup_logging(log_file=args.log_file)

    sequence = run_build_trial_sequence(settings, output=args.output, scenes=args.scenes)

    counts = sequence.maze_counts()
    print(
        f"Built '{sequence.preset.name}': {len(sequence)} trials "
        f"({counts[constants.PRACTICE]} practice, {counts[constants.MAIN_TRIAL]} main, {counts[constants.REST_BREAK]} rest breaks), "
        f"{len(captured_warnings())} warnings."
    )


if __name__ == "__main__":
    main()
