# File: shedsite/seed.py
# Purpose: Load default content from data/defaults.yml and make sure the
#          singleton rows (business settings, home sections) and the admin
#          account exist.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml
from werkzeug.security import generate_password_hash

from .db import SessionLocal
from .models import AdminUser, BusinessSettings, HomeContent

log = logging.getLogger(__name__)

CONFIG_PATH = (
    Path(__file__)
    .resolve()
    .parent        # shedsite/
    / "data"
    / "defaults.yml"
)


def _fallback_defaults() -> Dict[str, Any]:
    """Used when defaults.yml is missing or invalid."""
    return {
        "business_settings": {"business_name": "Our Company", "hours": {}},
        "home_content": [],
    }


def load_defaults(path: Path | None = None) -> Dict[str, Any]:
    path = path or CONFIG_PATH

    if not path.exists():
        log.warning("defaults.yml not found (%s), using fallback defaults.", path)
        return _fallback_defaults()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        log.error("Failed to load %s: %s", path, e)
        return _fallback_defaults()

    if not isinstance(raw, dict):
        log.error("defaults.yml must contain a top-level mapping, using fallback defaults.")
        return _fallback_defaults()

    return raw


def ensure_defaults_seeded(path: Path | None = None) -> int:
    """Insert the settings singleton and home sections when they are missing.

    Existing rows are never overwritten. Returns the number of inserted rows.
    """
    cfg = load_defaults(path)
    inserted = 0

    with SessionLocal() as s:
        settings_cfg = cfg.get("business_settings") or {}
        if settings_cfg and s.query(BusinessSettings).first() is None:
            s.add(BusinessSettings(
                business_name=settings_cfg.get("business_name") or "Our Company",
                phone=settings_cfg.get("phone"),
                email=settings_cfg.get("email"),
                address=settings_cfg.get("address"),
                hours=settings_cfg.get("hours") or {},
                facebook_url=settings_cfg.get("facebook_url") or "",
                instagram_url=settings_cfg.get("instagram_url") or "",
            ))
            inserted += 1

        existing = {h.section_name for h in s.query(HomeContent).all()}
        for section in cfg.get("home_content") or []:
            if not isinstance(section, dict):
                continue
            name = (section.get("section_name") or "").strip()
            if not name or name in existing:
                continue
            s.add(HomeContent(
                section_name=name,
                title=section.get("title") or name,
                subtitle=section.get("subtitle"),
                content=section.get("content"),
                image_url=section.get("image_url"),
                cta_text=section.get("cta_text"),
                cta_link=section.get("cta_link"),
                is_active=bool(section.get("is_active", True)),
            ))
            existing.add(name)
            inserted += 1

        s.commit()

    log.info("ensure_defaults_seeded: %s rows inserted.", inserted)
    return inserted


def ensure_admin_user(email: str | None, password: str | None) -> AdminUser | None:
    """Create the admin account from config if it does not exist yet."""
    if not email or not password:
        return None

    email = email.strip().lower()
    with SessionLocal() as s:
        user = s.query(AdminUser).filter_by(email=email).first()
        if user is None:
            user = AdminUser(email=email, password_hash=generate_password_hash(password))
            s.add(user)
            s.commit()
            log.info("Admin account created for %s", email)
        return user
