import pytest

from sortviz.bars import generate, BarState, MIN_VALUE, MAX_VALUE
from sortviz.errors import InvalidConfiguration


def test_generate_length_and_bounds():
    values = generate(200, 5, 9, seed=1)
    assert len(values) == 200
    assert all(5 <= v <= 9 for v in values)
    assert all(isinstance(v, int) for v in values)


def test_generate_defaults_match_control_panel_bounds():
    values = generate(500, seed=3)
    assert min(values) >= MIN_VALUE
    assert max(values) <= MAX_VALUE


def test_generate_single_element():
    assert len(generate(1)) == 1


def test_generate_same_seed_is_reproducible():
    assert generate(30, seed=42) == generate(30, seed=42)


def test_regeneration_keeps_only_length_and_bounds():
    first, second = generate(40, 0, 1000), generate(40, 0, 1000)
    assert len(first) == len(second) == 40
    assert all(0 <= v <= 1000 for v in first + second)


def test_degenerate_bounds_give_constant_sequence():
    assert generate(5, 7, 7) == [7] * 5


@pytest.mark.parametrize("n", [0, -3, 2.5, "10", True])
def test_generate_rejects_bad_size(n):
    with pytest.raises(InvalidConfiguration):
        generate(n)


def test_generate_rejects_negative_magnitudes():
    with pytest.raises(InvalidConfiguration):
        generate(5, -1, 10)


def test_generate_rejects_inverted_bounds():
    with pytest.raises(InvalidConfiguration):
        generate(5, 10, 1)


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        generate(0)


def test_bar_state_parse():
    assert BarState.parse("pivot") is BarState.PIVOT
    assert BarState.parse(BarState.SORTED) is BarState.SORTED
    with pytest.raises(ValueError):
        BarState.parse("glowing")
