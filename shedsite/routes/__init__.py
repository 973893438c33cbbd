# =============================================================================
# File: shedsite/routes/__init__.py
# Purpose: Group and register the JSON API blueprints.
# =============================================================================
from __future__ import annotations

from flask import Flask

from .api_misc import bp as misc_bp
from .api_sheds import bp as sheds_bp
from .api_settings import bp as settings_bp

def register_routes(app: Flask) -> None:
    """Register every API blueprint on the Flask app."""
    app.register_blueprint(misc_bp,     url_prefix="/api")
    app.register_blueprint(sheds_bp,    url_prefix="/api")
    app.register_blueprint(settings_bp, url_prefix="/api")
