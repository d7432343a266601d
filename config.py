"""Environment-driven settings."""

import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.environ.get("DATABASE_URL")
DATABASE_INIT_SCHEMA = os.environ.get("DATABASE_INIT_SCHEMA", "false").lower() in ("1", "true", "yes")
GOOGLE_API_KEY = os.environ.get("GOOGLE_API_KEY")

COMMENTARY_MODEL = os.environ.get("COMMENTARY_MODEL", "gemini-2.5-flash")
COMMENTARY_TIMEOUT_SECONDS = float(os.environ.get("COMMENTARY_TIMEOUT_SECONDS", "5.0"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
