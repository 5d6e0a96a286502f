import random
from typing import Iterable

from backend.config import MAX_PLAYING, STATION_CAPACITY
from backend.schemas import Participant


def playable_count(n_players: int) -> int:
    return min(n_players // STATION_CAPACITY * STATION_CAPACITY, MAX_PLAYING)


def select_sit_outs(
    pool: list[Participant],
    sat_out_last_round: Iterable[str] | None = None,
    rng: random.Random | None = None,
) -> tuple[list[Participant], list[Participant]]:
    """
    Split the eligible pool into (sitting_out, playing).

    Lowest sit_out_count sits out first; among those, players who did not
    sit out last round are preferred so nobody sits out twice in a row
    while an alternative exists. Ties are broken by a uniform shuffle.
    """
    rng = rng or random.Random()
    last = set(sat_out_last_round or [])

    must_sit_out = len(pool) - playable_count(len(pool))
    if must_sit_out <= 0:
        return [], list(pool)

    ordered = list(pool)
    rng.shuffle(ordered)
    ordered.sort(key=lambda p: p.sit_out_count)

    min_count = ordered[0].sit_out_count
    min_group = [p for p in ordered if p.sit_out_count == min_count]
    preferred = [p for p in min_group if p.id not in last]

    if len(preferred) >= must_sit_out:
        chosen = preferred[:must_sit_out]
    else:
        chosen = preferred + [p for p in min_group if p.id in last]
        chosen = chosen[:must_sit_out]
        chosen_ids = {p.id for p in chosen}

        for p in ordered:
            if len(chosen) >= must_sit_out:
                break
            if p.id in last and p.id not in chosen_ids:
                chosen.append(p)
                chosen_ids.add(p.id)

        for p in ordered:
            if len(chosen) >= must_sit_out:
                break
            if p.id not in chosen_ids:
                chosen.append(p)
                chosen_ids.add(p.id)

    chosen_ids = {p.id for p in chosen}
    playing = [p for p in pool if p.id not in chosen_ids]
    return chosen, playing
