"""Lossless-victory power search."""
import pytest
from battles import CANONICAL, LOSSLESS, WALLED_OFF
from combat.errors import ParseError, PowerSearchExhausted
from combat.model import Faction
from combat.search import find_min_power_for_lossless_victory


@pytest.mark.parametrize("grid,power,rounds,score", LOSSLESS)
def test_min_power(grid, power, rounds, score):
    result = find_min_power_for_lossless_victory(grid)
    assert result.power == power
    assert result.rounds == rounds
    assert result.score == score


def test_search_starts_at_min_power():
    result = find_min_power_for_lossless_victory(CANONICAL, min_power=15)
    assert result.power == 15
    assert result.score == 4988


def test_exhausted_range_is_reported():
    with pytest.raises(PowerSearchExhausted) as exc:
        find_min_power_for_lossless_victory(CANONICAL, max_power=10)
    assert exc.value.min_power == 4
    assert exc.value.max_power == 10


def test_deadlocked_runs_never_qualify():
    with pytest.raises(PowerSearchExhausted):
        find_min_power_for_lossless_victory(WALLED_OFF, max_power=6)


def test_goblins_can_be_searched_too():
    """Goblins already win the canonical battle at baseline power without a loss."""
    result = find_min_power_for_lossless_victory(CANONICAL, faction=Faction.GOBLIN, min_power=3)
    assert result.power == 3
    assert result.rounds == 47
    assert result.score == 27730


def test_bad_grid_fails_before_searching():
    with pytest.raises(ParseError):
        find_min_power_for_lossless_victory("#####\n#EX.#\n#####\n")
