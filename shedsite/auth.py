# shedsite/auth.py
from flask import session as flask_session
from werkzeug.security import check_password_hash

from .models import AdminUser

SESSION_KEY = "admin_id"


def get_current_admin(session):
    """Return the logged-in AdminUser (signed session cookie) or None."""
    admin_id = flask_session.get(SESSION_KEY)
    if not admin_id:
        return None
    try:
        admin_id = int(admin_id)
    except (TypeError, ValueError):
        return None
    return session.get(AdminUser, admin_id)


def authenticate(session, email: str, password: str):
    """AdminUser for valid credentials, else None."""
    user = session.query(AdminUser).filter_by(email=(email or "").strip().lower()).first()
    if not user or not check_password_hash(user.password_hash, password or ""):
        return None
    return user


def login_admin(user) -> None:
    flask_session.clear()
    flask_session[SESSION_KEY] = user.id


def logout_admin() -> None:
    flask_session.pop(SESSION_KEY, None)
