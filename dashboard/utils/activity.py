"""Audit trail helpers."""

from __future__ import annotations

from typing import Optional

from flask import current_app
from flask_login import current_user

from dashboard.models import ActivityLog, db


def log_activity(activity: str, user_id: Optional[str] = None) -> None:
    """Record an activity performed by a user.

    The entry is committed immediately and mirrored to the application
    logger. When ``user_id`` is omitted the logged in user is used.
    """
    if user_id is None:
        if current_user and not current_user.is_anonymous:
            user_id = current_user.id

    db.session.add(ActivityLog(user_id=user_id, activity=activity))
    db.session.commit()
    current_app.logger.info("%s (user=%s)", activity, user_id)
