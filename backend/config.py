from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent

SESSION_FILE_PATH = Path("session.json")
SETTINGS_FILE_PATH = Path("settings.json")

STATIC_DIR = BASE_DIR / "frontend"
TEMPLATES_DIR = BASE_DIR / "frontend"

APP_TITLE = "Badminton Courts"
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Court topology
TEAM_SIZE = 2
TEAMS_PER_STATION = 2
STATION_CAPACITY = TEAM_SIZE * TEAMS_PER_STATION
STATION_COUNT = 4
MAX_PLAYING = STATION_CAPACITY * STATION_COUNT

RECENT_ROUNDS_LIMIT = 3
