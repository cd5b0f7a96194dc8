import pytest

from ecocycle.core.gamification import Level, get_level_by_coins


@pytest.mark.parametrize(
    "coins,level,next_level,next_at,progress",
    [
        (0, Level.BRONZE, Level.SILVER, 200, 0.0),
        (100, Level.BRONZE, Level.SILVER, 200, 0.5),
        (200, Level.SILVER, Level.GOLD, 600, 0.0),
        (400, Level.SILVER, Level.GOLD, 600, 0.5),
        (900, Level.GOLD, Level.PLATINUM, 1200, 0.5),
        (5000, Level.PLATINUM, Level.PLATINUM, 1200, 1.0),
    ],
)
def test_level_by_coins(coins, level, next_level, next_at, progress) -> None:
    result = get_level_by_coins(coins)

    assert result.level == level
    assert result.next_level == next_level
    assert result.next_at == next_at
    assert result.progress == pytest.approx(progress)


def test_level_values_are_display_names() -> None:
    assert Level.PLATINUM.value == "Platinum"
