"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(
    os.environ.get("ARTISAN_DB_PATH", str(PROJECT_ROOT / "data" / "db" / "artisan-calendar.db"))
)
OUTPUT_DIR = Path(os.environ.get("OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

# Zone used to turn event instants into the viewer's local day/hour
CALENDAR_TIMEZONE = os.environ.get("CALENDAR_TIMEZONE", "Europe/Paris")

DEFAULT_GRANULARITY = "month"
MAX_CHIPS_PER_DAY = 2

# Week view hour axis (inclusive)
DAY_START_HOUR = 7
DAY_END_HOUR = 20
SCROLL_TO_HOUR = 8

WEEKDAY_LABELS = ["Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim"]
MONTH_NAMES = [
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
]
WEEKDAY_NAMES = ["lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"]

# =============================================================================
# STATUS CODES
# =============================================================================

STATUS_LABELS = {
    "planifiee": "Planifiée",
    "en_cours": "En cours",
    "terminee": "Terminée",
    "annulee": "Annulée",
}
STATUS_COLORS = {
    "planifiee": "blue",
    "en_cours": "yellow",
    "terminee": "green",
    "annulee": "red",
}
UNKNOWN_STATUS_COLOR = "gray"

# =============================================================================
# EXPORT CONFIGURATION
# =============================================================================

EXPORT_HEADERS = ["Titre", "Date début", "Date fin", "Technicien", "Adresse", "Statut"]
EXPORT_SEPARATOR = ";"
AGENDA_TODAY_LIMIT = 3
AGENDA_WEEK_LIMIT = 5

# =============================================================================
# API CONFIGURATION
# =============================================================================

ARTISAN_API_KEY = os.environ.get("ARTISAN_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_EVENTS_PER_REQUEST = int(os.environ.get("MAX_EVENTS_PER_REQUEST", "5000"))
API_VERSION = "1.0.0"
