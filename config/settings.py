"""
settings.py - Central configuration for the Field Guide search & gallery app

All asset locations are derived from ASSET_ROOT (or ASSET_BASE_URL when the
images and data files are served over HTTP) to ensure consistent structure.
"""

import os
import logging
from dotenv import load_dotenv
from pathlib import Path


# --- Load .env ---

load_dotenv()


# --- Helper Functions ---

def normalize_root(env_var: str, default: str) -> Path:
    """
    Resolve a filesystem path from an environment variable, falling back to a default.
    """
    raw = os.getenv(env_var, default)
    if not (raw.startswith(os.sep) or raw.startswith('.') or raw.startswith('~')):
        raw = os.sep + raw
    return Path(raw).expanduser().resolve()


def env_list(env_var: str, default: str) -> list[str]:
    """
    Read a comma-separated environment variable into a list of trimmed values.
    """
    raw = os.getenv(env_var, default)
    return [part.strip() for part in raw.split(',') if part.strip()]


# --- Core Paths ---

ASSET_ROOT = normalize_root('ASSET_ROOT', './site')
ASSET_BASE_URL = os.getenv('ASSET_BASE_URL') or None

# Relative locations, resolved against ASSET_ROOT or ASSET_BASE_URL
KEYWORD_INDEX_PATH = os.getenv('KEYWORD_INDEX_PATH', 'data/biterdata_index.json')
DETAIL_DATA_PATH = os.getenv('DETAIL_DATA_PATH', 'data/Biterdata.json')
IMAGE_DIR = os.getenv('IMAGE_DIR', 'images')
MANIFEST_CANDIDATES = env_list('MANIFEST_CANDIDATES', 'images/{category}/manifest.json')

# --- Search Behaviour ---

MAX_RESULTS = int(os.getenv('MAX_RESULTS', 40))
DUPLICATE_KEYWORDS = os.getenv('DUPLICATE_KEYWORDS', 'reject').lower()

KEYWORD_SCORE = int(os.getenv('KEYWORD_SCORE', 10000))
ALIAS_SCORE = int(os.getenv('ALIAS_SCORE', 9000))
TOKEN_WEIGHT = int(os.getenv('TOKEN_WEIGHT', 100))
DISTANCE_WEIGHT = int(os.getenv('DISTANCE_WEIGHT', 10))
MAX_TOKEN_DISTANCE = int(os.getenv('MAX_TOKEN_DISTANCE', 1))

# --- Environment & HTTP ---

DEBUG = os.getenv('DEBUG', 'False').lower() in ('true', '1', 'yes')
ENVIRONMENT = os.getenv('ENV', 'development')
HTTP_TIMEOUT = float(os.getenv('HTTP_TIMEOUT', 10))
USER_AGENT = os.getenv('USER_AGENT', 'FieldGuideBot/1.0 (example@example.com)')
HEADERS = {
    "User-Agent": USER_AGENT
}

# --- Logging ---

LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
