"""
Tests for the randomness helpers.
"""

import random

import pytest
from core.rng import RandomSource, ScriptedRandom, ensure_source, roll_between, roll_chance


def test_scripted_random_replays_values_in_order():
    rng = ScriptedRandom([0.1, 0.5, 0.9])
    assert [rng.random() for _ in range(3)] == [0.1, 0.5, 0.9]
    assert rng.consumed == 3
    assert rng.remaining == 0


def test_scripted_random_raises_when_exhausted():
    rng = ScriptedRandom([0.2])
    rng.random()
    with pytest.raises(RuntimeError):
        rng.random()


@pytest.mark.parametrize("value", [-0.1, 1.0, 1.5])
def test_scripted_random_rejects_values_outside_unit_interval(value):
    with pytest.raises(ValueError):
        ScriptedRandom([value])


def test_random_random_satisfies_protocol():
    assert isinstance(random.Random(1), RandomSource)
    assert isinstance(ScriptedRandom([]), RandomSource)


def test_ensure_source_keeps_given_source():
    rng = ScriptedRandom([0.3])
    assert ensure_source(rng) is rng


def test_ensure_source_creates_private_source():
    first = ensure_source(None)
    second = ensure_source(None)
    assert first is not second
    assert 0.0 <= first.random() < 1.0


def test_roll_chance_is_strictly_below():
    rng = ScriptedRandom([0.29, 0.3])
    assert roll_chance(rng, 0.3) is True
    assert roll_chance(rng, 0.3) is False


def test_roll_between_covers_both_bounds():
    rng = ScriptedRandom([0.0, 0.999999])
    assert roll_between(rng, 3, 7) == 3
    assert roll_between(rng, 3, 7) == 7


def test_roll_between_maps_draw_to_bucket():
    # floor(0.5 * 5) + 3
    assert roll_between(ScriptedRandom([0.5]), 3, 7) == 5


def test_roll_between_single_value_still_draws():
    rng = ScriptedRandom([0.7])
    assert roll_between(rng, 4, 4) == 4
    assert rng.consumed == 1


def test_roll_between_degenerate_range_does_not_draw():
    rng = ScriptedRandom([])
    assert roll_between(rng, 10, 5) == 10
    assert rng.consumed == 0
