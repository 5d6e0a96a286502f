import random

from backend.config import STATION_COUNT, TEAMS_PER_STATION
from backend.schemas import Assignment
from backend.services.pairings_service import Team


def pack_stations(
    teams: list[Team],
    round_id: str,
    rng: random.Random | None = None,
    station_count: int = STATION_COUNT,
) -> list[Assignment]:
    rng = rng or random.Random()
    order = list(teams)
    rng.shuffle(order)

    rows = []
    for station in range(1, station_count + 1):
        start = (station - 1) * TEAMS_PER_STATION
        group = order[start:start + TEAMS_PER_STATION]
        if len(group) < TEAMS_PER_STATION:
            break
        player_ids = [p.id for team in group for p in team]
        rows.append(Assignment(station_number=station, round_id=round_id, player_ids=player_ids))
    return rows
