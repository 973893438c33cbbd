# =============================================================================
# File: shedsite/config.py
# Purpose: Environment-backed configuration for the Flask app.
# =============================================================================
from __future__ import annotations

import os
from typing import Any, Dict

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_config() -> Dict[str, Any]:
    """Build the Flask config mapping from the environment."""
    return {
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev-secret-change-me"),
        "SESSION_COOKIE_SAMESITE": os.getenv("SESSION_COOKIE_SAMESITE", "Lax"),
        "SESSION_COOKIE_HTTPONLY": True,
        "DATABASE_URL": os.getenv("DATABASE_URL", "sqlite:///shedsite.db"),

        # Object storage: one directory per bucket under UPLOAD_FOLDER
        "UPLOAD_FOLDER": os.getenv("UPLOAD_FOLDER", "instance/uploads"),
        "STORAGE_BUCKETS": _env_list("STORAGE_BUCKETS", "images"),
        "MAX_CONTENT_LENGTH": int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024))),

        # Public base URL used for the sitemap
        "SITE_URL": os.getenv("SITE_URL", "http://localhost:5000"),
        "SITEMAP_PING_TIMEOUT": float(os.getenv("SITEMAP_PING_TIMEOUT", "10")),

        # Admin panel
        "ADMIN_ENABLED": _env_bool("ADMIN_ENABLED", True),
        "ADMIN_EMAIL": os.getenv("ADMIN_EMAIL"),
        "ADMIN_PASSWORD": os.getenv("ADMIN_PASSWORD"),

        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "SEED_DEFAULTS": _env_bool("SEED_DEFAULTS", True),
    }
