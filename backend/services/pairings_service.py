import logging
import random

from backend.config import RECENT_ROUNDS_LIMIT
from backend.schemas import Assignment, Participant
from backend.services.ledger_service import PartnershipLedger


logger = logging.getLogger(__name__)

Team = tuple[Participant, Participant]


def round_ids(history: list[Assignment]) -> list[str]:
    """Distinct round ids in order of first appearance."""
    return list(dict.fromkeys(a.round_id for a in history))


def recency_window(history: list[Assignment], size: int = RECENT_ROUNDS_LIMIT) -> list[str]:
    return round_ids(history)[-size:] if size > 0 else []


def scan_order(playing: list[Participant], rng: random.Random) -> list[Participant]:
    order = list(playing)
    rng.shuffle(order)
    order.sort(key=lambda p: p.name.casefold())
    return order


def _lowest(current: Participant, candidates: list[Participant], ledger: PartnershipLedger) -> Participant | None:
    best = None
    best_count = None
    for c in candidates:
        n = ledger.count_together(current.id, c.id)
        if best is None or n < best_count:
            best, best_count = c, n
    return best


def pair_teams(
    playing: list[Participant],
    ledger: PartnershipLedger,
    window: list[str] | None = None,
    rng: random.Random | None = None,
    fallbacks: list[Team] | None = None,
) -> list[Team]:
    """
    Greedy teammate pairing: each player in name order takes the unclaimed
    partner they have shared a court with least often, skipping partners
    seen within the recency window while any other partner is left.

    Pairs that could only be formed by ignoring the window are appended
    to `fallbacks` when a list is given.
    """
    rng = rng or random.Random()
    recent = set(window or [])
    order = scan_order(playing, rng)

    claimed: set[str] = set()
    teams: list[Team] = []

    for current in order:
        if current.id in claimed:
            continue

        candidates = [c for c in order if c.id != current.id and c.id not in claimed]
        if not candidates:
            logger.warning("No partner left for %s, pool size %s is odd", current.name, len(order))
            break

        fresh = [c for c in candidates if not recent.intersection(ledger.recent_rounds(current.id, c.id))]
        partner = _lowest(current, fresh, ledger)

        if partner is None:
            partner = _lowest(current, candidates, ledger)
            logger.info(
                "Recency fallback: %s paired with %s (played together in one of the last %s rounds)",
                current.name,
                partner.name,
                len(recent),
            )
            if fallbacks is not None:
                fallbacks.append((current, partner))

        claimed.add(current.id)
        claimed.add(partner.id)
        teams.append((current, partner))

    return teams
