from collections import Counter

import pytest

from sequencing import constants
from sequencing.diagnostics import ConfigurationWarning, InsufficientPoolWarning
from sequencing.presets import PRESETS
from sequencing.questions.bank import QuestionBank, load_question_bank
from sequencing.questions.models import NO_QUESTION
from sequencing.randomness import NumpyRandomSource
from sequencing.sequence.builder import SequenceBuilder


def _main_questions(sequence):
    return [t.question for t in sequence if t.maze == constants.MAIN_TRIAL]


@pytest.mark.parametrize("preset_name", sorted(PRESETS))
def test_builtin_presets_fill_every_slot(preset_name):
    rng = NumpyRandomSource(seed=7)
    bank = load_question_bank(rng=rng)
    preset = PRESETS[preset_name]

    sequence = SequenceBuilder(preset, bank, rng).build()

    assert len(sequence) == (
        preset.main_trial_count + 7 + preset.practice_slots + sequence.layout.n_rest_breaks
    )
    assert all(t is not None and t.maze != constants.UNSET for t in sequence)
    assert [t.index for t in sequence] == list(range(len(sequence)))
    assert sequence.diagnostics == ()


@pytest.mark.parametrize("preset_name", sorted(PRESETS))
def test_administrative_offsets(preset_name, make_bank):
    preset = PRESETS[preset_name]
    sequence = SequenceBuilder(preset, make_bank(2, 40), NumpyRandomSource(1)).build()

    assert [sequence.get_trial_maze(i) for i in range(6)] == list(constants.SETUP_MAZES)
    assert sequence.get_trial_maze(6 + preset.practice_slots - 1) == constants.GET_READY
    assert sequence.get_trial_maze(len(sequence) - 1) == constants.EXIT
    for index in (*range(6), sequence.layout.get_ready_index, sequence.layout.exit_index):
        assert sequence[index].question is NO_QUESTION


def test_practice_trials_keep_bank_order(make_bank, make_preset):
    bank = make_bank(n_practice=3, n_main=5)
    sequence = SequenceBuilder(make_preset(practice_count=3), bank, NumpyRandomSource(3)).build()

    practice = [t for t in sequence if t.maze == constants.PRACTICE]
    assert [t.index for t in practice] == [6, 7, 8]
    assert [t.question for t in practice] == list(bank.practice)


def test_short_practice_pool_repeats_in_order(make_bank, make_preset):
    bank = make_bank(n_practice=2, n_main=5)
    builder = SequenceBuilder(make_preset(practice_count=5), bank, NumpyRandomSource(3))

    with pytest.warns(InsufficientPoolWarning, match="practice questions"):
        sequence = builder.build()

    practice = [t.question for t in sequence if t.maze == constants.PRACTICE]
    assert practice == [bank.practice[i % 2] for i in range(5)]


def test_identity_shuffle_keeps_pool_order(make_bank, make_preset, scripted_rng):
    bank = make_bank(n_main=5)
    sequence = SequenceBuilder(make_preset(main_trial_count=5), bank, scripted_rng()).build()

    assert _main_questions(sequence) == list(bank.main)


def test_fisher_yates_swaps(make_bank, make_preset, scripted_rng):
    bank = make_bank(n_main=3)
    rng = scripted_rng(ints=[2, 0, 0])
    sequence = SequenceBuilder(make_preset(main_trial_count=3), bank, rng).build()

    q0, q1, q2 = bank.main
    assert _main_questions(sequence) == [q2, q1, q0]
    # one draw per pool element with shrinking bounds
    assert rng.int_calls == [3, 2, 1]


def test_pool_of_five_block_of_three(make_bank, make_preset):
    bank = make_bank(n_main=5)
    builder = SequenceBuilder(make_preset(main_trial_count=3), bank, NumpyRandomSource(11))

    sequence = builder.build()

    main = _main_questions(sequence)
    assert len(main) == 3
    assert len(set(main)) == 3
    assert set(main) <= set(bank.main)
    # the block is the prefix of a single permutation of the whole pool
    assert main == builder.questions[:3]
    assert Counter(builder.questions) == Counter(bank.main)


def test_pool_of_two_block_of_five_repeats(make_bank, make_preset, scripted_rng):
    bank = make_bank(n_main=2)
    rng = scripted_rng(ints=[1, 0, 0, 1, 1])
    builder = SequenceBuilder(make_preset(main_trial_count=5), bank, rng)

    with pytest.warns(InsufficientPoolWarning, match="Trials will repeat"):
        sequence = builder.build()

    q0, q1 = bank.main
    assert _main_questions(sequence) == [q1, q0, q1, q0, q0]
    assert rng.int_calls == [2, 1, 2, 2, 2]
    assert any(d.category is InsufficientPoolWarning for d in sequence.diagnostics)


@pytest.mark.parametrize("seed", range(5))
def test_repeat_fallback_prefix_is_permutation(make_bank, make_preset, quiet_warnings, seed):
    bank = make_bank(n_main=3)
    sequence = SequenceBuilder(make_preset(main_trial_count=8), bank, NumpyRandomSource(seed)).build()

    main = _main_questions(sequence)
    assert len(main) == 8
    assert Counter(main[:3]) == Counter(bank.main)
    assert all(q in bank.main for q in main[3:])
    assert NO_QUESTION not in main


@pytest.mark.parametrize("n", range(7))
def test_shuffle_is_a_permutation(make_bank, make_preset, n):
    bank = make_bank(n_main=n)
    builder = SequenceBuilder(make_preset(main_trial_count=0), bank, NumpyRandomSource(n))

    for _ in range(3):
        builder.shuffle_and_store_block(builder.layout.main_start, 0)

    assert Counter(builder.questions) == Counter(bank.main)


def test_shuffle_and_store_block_returns_next_free_slot(make_bank, make_preset):
    builder = SequenceBuilder(make_preset(main_trial_count=4), make_bank(n_main=6), NumpyRandomSource(0))
    start = builder.layout.main_start

    assert builder.shuffle_and_store_block(start, 4) == start + 4
    assert all(builder.slots[i].maze == constants.MAIN_TRIAL for i in range(start, start + 4))


def test_shuffle_does_not_modify_bank(make_bank, make_preset):
    bank = make_bank(n_main=6)
    original = tuple(bank.main)

    SequenceBuilder(make_preset(main_trial_count=6), bank, NumpyRandomSource(5)).build()

    assert bank.main == original


def test_rest_breaks_inserted_after_spacing(make_bank, make_preset):
    preset = make_preset(main_trial_count=10, rest_frequency=5, block_length=4)
    sequence = SequenceBuilder(preset, make_bank(n_main=10), NumpyRandomSource(2)).build()

    main_part = [sequence.get_trial_maze(i) for i in sequence.layout.main_range]
    m, r = constants.MAIN_TRIAL, constants.REST_BREAK
    assert main_part == [m, m, m, m, r, m, m, m, m, r, m, m]
    assert sequence.maze_counts()[r] == 2
    assert all(t.question is NO_QUESTION for t in sequence if t.is_rest_break)


def test_rest_break_inside_block_cuts_block(make_bank, make_preset):
    preset = make_preset(main_trial_count=6, rest_frequency=3, block_length=4)

    with pytest.warns(ConfigurationWarning, match="Rest breaks not allocated properly"):
        builder = SequenceBuilder(preset, make_bank(n_main=6), NumpyRandomSource(2))
    sequence = builder.build()

    main_part = [sequence.get_trial_maze(i) for i in sequence.layout.main_range]
    m, r = constants.MAIN_TRIAL, constants.REST_BREAK
    assert main_part == [m, m, r, m, m, r, m, m]
    assert sequence.get_trial_maze(sequence.layout.exit_index) == constants.EXIT


def test_each_block_reshuffles_whole_pool(make_bank, make_preset, scripted_rng):
    preset = make_preset(main_trial_count=4, block_length=2)
    rng = scripted_rng()
    SequenceBuilder(preset, make_bank(n_main=3), rng).build()

    assert rng.int_calls == [3, 2, 1, 3, 2, 1]


def test_writing_into_setup_slot_is_refused(make_bank, make_preset):
    builder = SequenceBuilder(make_preset(), make_bank(), NumpyRandomSource(0))
    builder.add_administrative_trials()

    with pytest.warns(ConfigurationWarning, match="reserved for setup screens"):
        builder.set_trial(3, builder.questions[0], constants.MAIN_TRIAL)

    assert builder.slots[3].maze == constants.CONSENT_SCREEN


def test_writing_twice_is_refused(make_bank, make_preset):
    builder = SequenceBuilder(make_preset(), make_bank(), NumpyRandomSource(0))
    builder.add_administrative_trials()

    with pytest.warns(ConfigurationWarning, match="already set to Exit"):
        builder.set_trial(builder.layout.exit_index, builder.questions[0], constants.MAIN_TRIAL)

    assert builder.slots[builder.layout.exit_index].maze == constants.EXIT


def test_unwritten_slots_are_reported(make_bank, make_preset):
    builder = SequenceBuilder(make_preset(main_trial_count=3), make_bank(), NumpyRandomSource(0))
    builder.add_administrative_trials()
    builder.add_practice_trials()

    with pytest.warns(ConfigurationWarning, match="never written"):
        sequence = builder._finalise()

    unset = [t.index for t in sequence if t.maze == constants.UNSET]
    assert unset == list(builder.layout.main_range)
    assert len(sequence.diagnostics) == 3


@pytest.mark.parametrize(
    "n_practice, n_main, practice_count, main_trial_count, message",
    [
        (2, 0, 2, 3, "main question pool is empty"),
        (0, 5, 2, 3, "practice question pool is empty"),
    ],
)
def test_empty_pool_is_rejected(n_practice, n_main, practice_count, main_trial_count, message, make_bank,
                                make_preset):
    preset = make_preset(practice_count=practice_count, main_trial_count=main_trial_count)

    with pytest.raises(ValueError, match=message):
        SequenceBuilder(preset, make_bank(n_practice, n_main), NumpyRandomSource(0))


def test_empty_pools_without_trials_build(make_preset):
    preset = make_preset(practice_count=0, main_trial_count=0)
    sequence = SequenceBuilder(preset, QuestionBank((), ()), NumpyRandomSource(0)).build()

    assert [t.maze for t in sequence] == [*constants.SETUP_MAZES, constants.GET_READY, constants.EXIT]


def test_same_seed_same_sequence(make_bank):
    preset = PRESETS["micro_debug"]
    first = SequenceBuilder(preset, make_bank(2, 10), NumpyRandomSource(99)).build()
    second = SequenceBuilder(preset, make_bank(2, 10), NumpyRandomSource(99)).build()

    assert first.trials == second.trials
