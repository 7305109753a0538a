# expensepro/core/config.py
# Simple config loader: environment variables (optionally from .env) with defaults
import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class SimpleSettings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./expensepro.db")
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
    REMEMBER_ME_EXPIRE_DAYS = int(os.getenv("REMEMBER_ME_EXPIRE_DAYS", "30"))
    SEED_DEFAULTS = _as_bool(os.getenv("SEED_DEFAULTS", "true"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if o.strip()
    ]

    # bump when tables/indexes are added; RecordStore.open() upgrades older stores
    SCHEMA_VERSION = 2


settings = SimpleSettings()
