import logging
from urllib.parse import quote_plus

import uvicorn
from fastapi import Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from backend.app_factory import configure_logging, create_app
from backend.repositories.session_repository import load_session, write_session
from backend.schemas import PlayerCreate, SessionState
from backend.services import roster_service
from backend.services.round_service import NoEligibleParticipants
from backend.services.session_service import session_view, shuffle
from backend.services.settings_service import load_settings
#python -m uvicorn backend.main:app --reload --host 0.0.0.0 --port 8000

settings, settings_meta = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)
if settings_meta["error"]:
    logger.warning("Settings fell back to defaults: %s", settings_meta["error"])

app, templates = create_app(settings)


def _load() -> SessionState:
    return load_session(app.state.session_file)


def _save(state: SessionState) -> None:
    write_session(app.state.session_file, state)


def _apply_roster(op, *args) -> SessionState:
    state = _load()
    try:
        new_state = op(state, *args)
    except roster_service.ParticipantNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except roster_service.RosterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    _save(new_state)
    return new_state


async def _run_round() -> dict:
    async with app.state.round_lock:
        state = _load()
        try:
            new_state, result = shuffle(state, keep_rounds=app.state.settings.history_rounds)
        except NoEligibleParticipants as exc:
            logger.info("Round request ignored: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc))
        _save(new_state)
    view = session_view(new_state)
    view["round_id"] = result.round_id
    view["fallback_pairs"] = [list(p) for p in result.fallback_pairs]
    return view


@app.get("/", response_class=HTMLResponse)
async def index(request: Request, error: str | None = None):
    """
    Courts of the current round plus waiting and paused players.
    """
    view = session_view(_load())
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": app.state.settings.title,
            "error": error,
            **view,
        },
    )


def _back(error: str | None = None) -> RedirectResponse:
    if error:
        return RedirectResponse(url=f"/?error={quote_plus(error)}", status_code=303)
    return RedirectResponse(url="/", status_code=303)


def _roster_form(op, *args) -> RedirectResponse:
    try:
        _apply_roster(op, *args)
    except HTTPException as exc:
        return _back(str(exc.detail))
    return _back()


@app.post("/players")
async def add_player_form(name: str = Form("")):
    return _roster_form(lambda s, n: roster_service.add_participant(s, n)[0], name)


@app.post("/players/{player_id}/toggle")
async def toggle_player_form(player_id: str):
    return _roster_form(roster_service.toggle_active, player_id)


@app.post("/players/{player_id}/pause")
async def pause_player_form(player_id: str):
    return _roster_form(roster_service.pause, player_id)


@app.post("/players/{player_id}/resume")
async def resume_player_form(player_id: str):
    return _roster_form(roster_service.resume, player_id)


@app.post("/players/{player_id}/delete")
async def remove_player_form(player_id: str):
    return _roster_form(roster_service.remove_participant, player_id)


@app.post("/shuffle")
async def shuffle_form():
    try:
        await _run_round()
    except HTTPException as exc:
        return _back(str(exc.detail))
    return _back()


@app.post("/courts/clear")
async def clear_courts_form():
    return _roster_form(roster_service.clear_courts)


@app.post("/reset")
async def reset_form():
    logger.info("Clearing all session data")
    return _roster_form(roster_service.clear_all)


@app.get("/api/state")
async def get_state():
    return session_view(_load())


@app.post("/api/players", status_code=201)
async def add_player(payload: PlayerCreate):
    state = _load()
    try:
        new_state, player = roster_service.add_participant(state, payload.name)
    except roster_service.RosterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    _save(new_state)
    logger.info("Added player %s (%s)", player.name, player.id)
    return player.model_dump()


@app.delete("/api/players/{player_id}")
async def remove_player(player_id: str):
    return session_view(_apply_roster(roster_service.remove_participant, player_id))


@app.post("/api/players/{player_id}/toggle")
async def toggle_player(player_id: str):
    return session_view(_apply_roster(roster_service.toggle_active, player_id))


@app.post("/api/players/{player_id}/pause")
async def pause_player(player_id: str):
    return session_view(_apply_roster(roster_service.pause, player_id))


@app.post("/api/players/{player_id}/resume")
async def resume_player(player_id: str):
    return session_view(_apply_roster(roster_service.resume, player_id))


@app.post("/api/rounds")
async def new_round():
    return await _run_round()


@app.post("/api/courts/clear")
async def clear_courts():
    return session_view(_apply_roster(roster_service.clear_courts))


@app.post("/api/reset")
async def reset():
    logger.info("Clearing all session data")
    return session_view(_apply_roster(roster_service.clear_all))


if __name__ == "__main__":
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000)
