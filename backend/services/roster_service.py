import uuid

from backend.schemas import Assignment, Participant, SessionState
from backend.services.ledger_service import PartnershipLedger
from backend.services.round_service import current_round


class RosterError(Exception):
    pass


class ParticipantNotFound(RosterError):
    pass


def find_participant(state: SessionState, participant_id: str) -> Participant:
    for p in state.participants:
        if p.id == participant_id:
            return p
    raise ParticipantNotFound(f"Unknown player id: {participant_id}")


def drop_from_rows(rows: list[Assignment], participant_id: str, only_round: str | None = None) -> list[Assignment]:
    out = []
    for a in rows:
        if participant_id not in a.player_ids or (only_round is not None and a.round_id != only_round):
            out.append(a)
            continue
        ids = [pid for pid in a.player_ids if pid != participant_id]
        if ids:
            out.append(a.model_copy(update={"player_ids": ids}))
    return out


def _leave_current_round(state: SessionState, participant_id: str) -> list[Assignment]:
    rows = current_round(state.assignments)
    if not rows:
        return list(state.assignments)
    return drop_from_rows(state.assignments, participant_id, only_round=rows[0].round_id)


def _replace(state: SessionState, updated: Participant) -> list[Participant]:
    return [updated if p.id == updated.id else p for p in state.participants]


def add_participant(state: SessionState, name: str) -> tuple[SessionState, Participant]:
    name = (name or "").strip()
    if not name:
        raise RosterError("Player name must not be empty.")
    p = Participant(id=uuid.uuid4().hex, name=name)
    return state.model_copy(update={"participants": state.participants + [p]}), p


def remove_participant(state: SessionState, participant_id: str) -> SessionState:
    find_participant(state, participant_id)
    ledger = PartnershipLedger(state.partnerships).without(participant_id)
    return SessionState(
        participants=[p for p in state.participants if p.id != participant_id],
        partnerships=ledger.to_partnerships(),
        assignments=drop_from_rows(state.assignments, participant_id),
        last_sit_out_ids=[pid for pid in state.last_sit_out_ids if pid != participant_id],
    )


def toggle_active(state: SessionState, participant_id: str) -> SessionState:
    p = find_participant(state, participant_id)
    updated = p.model_copy(update={"is_active": not p.is_active})
    assignments = state.assignments if updated.is_active else _leave_current_round(state, participant_id)
    return state.model_copy(update={"participants": _replace(state, updated), "assignments": assignments})


def pause(state: SessionState, participant_id: str) -> SessionState:
    p = find_participant(state, participant_id)
    updated = p.model_copy(update={"is_paused": True})
    return state.model_copy(
        update={
            "participants": _replace(state, updated),
            "assignments": _leave_current_round(state, participant_id),
        }
    )


def resume(state: SessionState, participant_id: str) -> SessionState:
    p = find_participant(state, participant_id)
    updated = p.model_copy(update={"is_paused": False})
    return state.model_copy(update={"participants": _replace(state, updated)})


def clear_courts(state: SessionState) -> SessionState:
    return state.model_copy(update={"assignments": [], "last_sit_out_ids": []})


def clear_all(state: SessionState) -> SessionState:
    return SessionState()
