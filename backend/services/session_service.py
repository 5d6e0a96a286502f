import random
from typing import Any

from backend.config import RECENT_ROUNDS_LIMIT, STATION_CAPACITY, TEAM_SIZE
from backend.schemas import SessionState
from backend.services.ledger_service import PartnershipLedger
from backend.services.round_service import RoundResult, current_round, run_round


def shuffle(
    state: SessionState,
    rng: random.Random | None = None,
    keep_rounds: int = RECENT_ROUNDS_LIMIT,
) -> tuple[SessionState, RoundResult]:
    result = run_round(
        state.participants,
        PartnershipLedger(state.partnerships),
        state.assignments,
        rng=rng,
        keep_rounds=keep_rounds,
        last_sit_outs=state.last_sit_out_ids,
    )
    new_state = SessionState(
        participants=result.participants,
        partnerships=result.ledger.to_partnerships(),
        assignments=result.history,
        last_sit_out_ids=result.sit_out_ids,
    )
    return new_state, result


def current_courts(state: SessionState) -> list[dict[str, Any]]:
    by_id = {p.id: p for p in state.participants}
    courts = []
    for a in sorted(current_round(state.assignments), key=lambda a: a.station_number):
        players = [
            {"id": pid, "name": by_id[pid].name}
            for pid in a.player_ids
            if pid in by_id
        ]
        courts.append({
            "court_number": a.station_number,
            "round_id": a.round_id,
            "team_a": players[:TEAM_SIZE],
            "team_b": players[TEAM_SIZE:STATION_CAPACITY],
            "occupancy": f"{len(players)}/{STATION_CAPACITY}",
        })
    return courts


def sitting_out(state: SessionState) -> dict[str, list[dict[str, Any]]]:
    placed = {pid for a in current_round(state.assignments) for pid in a.player_ids}
    waiting = []
    paused = []
    for p in state.participants:
        if not p.is_active:
            continue
        row = {"id": p.id, "name": p.name, "sit_out_count": p.sit_out_count}
        if p.is_paused:
            paused.append(row)
        elif p.id not in placed:
            waiting.append(row)
    return {"waiting": waiting, "paused": paused}


def session_view(state: SessionState) -> dict[str, Any]:
    return {
        "players": [p.model_dump() for p in state.participants],
        "active_count": len([p for p in state.participants if p.is_active]),
        "courts": current_courts(state),
        "sitting_out": sitting_out(state),
    }
