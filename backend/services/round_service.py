import logging
import random
import time
from dataclasses import dataclass, field
from typing import Iterable

from backend.config import RECENT_ROUNDS_LIMIT
from backend.schemas import Assignment, Participant
from backend.services.ledger_service import PartnershipLedger
from backend.services.pairings_service import Team, pair_teams, recency_window, round_ids
from backend.services.sit_out_service import select_sit_outs
from backend.services.station_service import pack_stations


logger = logging.getLogger(__name__)


class NoEligibleParticipants(Exception):
    pass


@dataclass
class RoundResult:
    round_id: str
    assignments: list[Assignment]
    history: list[Assignment]
    ledger: PartnershipLedger
    participants: list[Participant]
    sit_out_ids: list[str] = field(default_factory=list)
    fallback_pairs: list[tuple[str, str]] = field(default_factory=list)


def current_round(history: list[Assignment]) -> list[Assignment]:
    if not history:
        return []
    latest = history[-1].round_id
    return [a for a in history if a.round_id == latest]


def new_round_id(history: list[Assignment]) -> str:
    ts = time.time_ns()
    if history:
        try:
            ts = max(ts, int(history[-1].round_id) + 1)
        except ValueError:
            logger.debug("Round id %r is not numeric, using the clock", history[-1].round_id)
    return str(ts)


def trim_history(history: list[Assignment], keep_rounds: int = RECENT_ROUNDS_LIMIT) -> list[Assignment]:
    keep = set(round_ids(history)[-keep_rounds:]) if keep_rounds > 0 else set()
    return [a for a in history if a.round_id in keep]


def run_round(
    participants: list[Participant],
    ledger: PartnershipLedger,
    history: list[Assignment],
    rng: random.Random | None = None,
    round_id: str | None = None,
    keep_rounds: int = RECENT_ROUNDS_LIMIT,
    last_sit_outs: Iterable[str] | None = None,
) -> RoundResult:
    """
    Compute one full round from a snapshot of (participants, ledger, history).
    last_sit_outs holds the ids that sat out the previous round.

    Nothing passed in is modified; the caller persists the returned values.
    Raises NoEligibleParticipants when no one is active and unpaused.
    """
    rng = rng or random.Random()
    pool = [p for p in participants if p.is_eligible]
    if not pool:
        raise NoEligibleParticipants("No active players available for a new round.")

    round_id = round_id or new_round_id(history)
    window = recency_window(history)

    sitting_out, playing = select_sit_outs(pool, last_sit_outs, rng=rng)

    fallbacks: list[Team] = []
    teams = pair_teams(playing, ledger, window, rng=rng, fallbacks=fallbacks)
    rows = pack_stations(teams, round_id, rng=rng)

    new_ledger = ledger
    for row in rows:
        new_ledger = new_ledger.record_station(row.player_ids, round_id)

    sit_out_ids = [p.id for p in sitting_out]
    bump = set(sit_out_ids)
    updated = [
        p.model_copy(update={"sit_out_count": p.sit_out_count + 1}) if p.id in bump else p
        for p in participants
    ]

    logger.info(
        "Round %s: %s courts, %s playing, %s sitting out",
        round_id,
        len(rows),
        len(playing),
        len(sit_out_ids),
    )

    return RoundResult(
        round_id=round_id,
        assignments=rows,
        history=trim_history(list(history) + rows, keep_rounds),
        ledger=new_ledger,
        participants=updated,
        sit_out_ids=sit_out_ids,
        fallback_pairs=[(a.id, b.id) for a, b in fallbacks],
    )
