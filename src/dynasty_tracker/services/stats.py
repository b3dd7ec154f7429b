"""Career aggregates computed from a coach's season list.

Nothing here is persisted. Every function is a pure fold over the seasons,
so the result does not depend on the order they are passed in.
"""

from collections.abc import Iterable

from dynasty_tracker.models.season import PlayoffResult, Position, PostSeason, Season

# Seeds 1-4 skip the first round of the 12-team bracket
BYE_SEEDS = range(1, 5)

# (wins, losses) credited for each playoff result
_PLAYOFF_RECORD = {
    PlayoffResult.FIRST_ROUND_LOSS: (0, 1),
    PlayoffResult.SECOND_ROUND_LOSS: (1, 1),
    PlayoffResult.SEMIFINAL_LOSS: (2, 1),
    PlayoffResult.CHAMPIONSHIP_LOSS: (3, 1),
    PlayoffResult.CHAMPION: (4, 0),
}

_BYE_PLAYOFF_RECORD = {
    PlayoffResult.FIRST_ROUND_LOSS: (0, 1),
    PlayoffResult.SECOND_ROUND_LOSS: (0, 1),
    PlayoffResult.SEMIFINAL_LOSS: (1, 1),
    PlayoffResult.CHAMPIONSHIP_LOSS: (2, 1),
    PlayoffResult.CHAMPION: (3, 0),
}


def win_percentage(wins: int, losses: int) -> float:
    """Return wins / games * 100 rounded to one decimal, or 0 with no games."""
    total = wins + losses
    if total == 0:
        return 0.0
    return round(wins / total * 100, 1)


def career_record(seasons: Iterable[Season]) -> tuple[int, int]:
    """Return total (wins, losses) across all seasons."""
    wins = 0
    losses = 0
    for season in seasons:
        wins += season.wins
        losses += season.losses
    return wins, losses


def playoff_record(seed: int | None, result: str) -> tuple[int, int]:
    """Return the (wins, losses) a playoff run contributes.

    A missing seed is treated as a non-bye team.
    """
    if result == PlayoffResult.NONE:
        return 0, 0
    table = _BYE_PLAYOFF_RECORD if seed in BYE_SEEDS else _PLAYOFF_RECORD
    return table.get(PlayoffResult(result), (0, 0))


def postseason_record(seasons: Iterable[Season]) -> tuple[int, int]:
    """Return total postseason (wins, losses) from bowls and playoff runs."""
    wins = 0
    losses = 0
    for season in seasons:
        if season.post_season == PostSeason.BOWL:
            if season.bowl_result:
                wins += 1
            else:
                losses += 1
        elif season.post_season == PostSeason.PLAYOFF:
            w, l = playoff_record(season.playoff_seed, season.playoff_result)
            wins += w
            losses += l
    return wins, losses


def position_records(seasons: Iterable[Season]) -> dict[str, dict[str, float]]:
    """Return wins, losses and win percentage split by coaching position."""
    totals = {position.value: [0, 0] for position in Position}
    for season in seasons:
        bucket = totals.get(season.position)
        if bucket is None:
            continue
        bucket[0] += season.wins
        bucket[1] += season.losses

    return {
        position: {
            "wins": wins,
            "losses": losses,
            "win_percentage": win_percentage(wins, losses),
        }
        for position, (wins, losses) in totals.items()
    }


def conference_titles(seasons: Iterable[Season]) -> int:
    """Count seasons that ended with a conference championship."""
    return sum(1 for season in seasons if season.conf_champ)
