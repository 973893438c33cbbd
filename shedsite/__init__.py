# shedsite/__init__.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from flask import Flask

from .config import load_config
from .db import init_db, SessionLocal
from .seed import ensure_defaults_seeded, ensure_admin_user
from .storage import IMAGES_BUCKET, LocalStorage, public_url
from .routes import register_routes
from .frontend import frontend_bp
from .services.content import get_settings
from .services.hours import format_business_hours, format_detailed_hours

from shedsite.admin import admin_bp


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)

    app.config.update(load_config())
    if config:
        app.config.update(config)

    configure_logging(app.config["LOG_LEVEL"])

    init_db(app.config["DATABASE_URL"])

    # Object storage: one directory per configured bucket
    storage = LocalStorage(Path(app.config["UPLOAD_FOLDER"]).resolve())
    for bucket in app.config["STORAGE_BUCKETS"]:
        storage.ensure_bucket(bucket)
    app.extensions["shedsite.storage"] = storage

    if app.config.get("SEED_DEFAULTS", True):
        ensure_defaults_seeded()
    ensure_admin_user(app.config.get("ADMIN_EMAIL"), app.config.get("ADMIN_PASSWORD"))

    register_routes(app)
    app.register_blueprint(frontend_bp)

    # Admin panel
    app.register_blueprint(admin_bp)

    @app.context_processor
    def site_context():
        # Header / footer data for every page
        with SessionLocal() as s:
            settings = get_settings(s)
        hours = settings.hours if settings else None
        return {
            "site_settings": settings,
            "hours_summary": format_business_hours(hours),
            "hours_detailed": format_detailed_hours(hours),
            "image_url": lambda path: public_url(IMAGES_BUCKET, path),
        }

    return app
