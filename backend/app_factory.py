import asyncio
import logging

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from backend.config import LOG_FORMAT, STATIC_DIR, TEMPLATES_DIR
from backend.services.settings_service import AppSettings


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def create_app(settings: AppSettings) -> tuple[FastAPI, Jinja2Templates]:
    app = FastAPI(title=settings.title)

    if STATIC_DIR.exists() and STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.state.settings = settings
    app.state.session_file = settings.session_file
    app.state.round_lock = asyncio.Lock()

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    return app, templates
