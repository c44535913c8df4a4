"""Credential based sign-in built on Flask-Login."""

from __future__ import annotations

from typing import Dict, Mapping, Optional
from urllib.parse import urlparse

from flask import current_app, redirect, url_for
from flask_login import login_user, logout_user
from werkzeug.security import check_password_hash

from dashboard.forms import LoginForm, as_formdata
from dashboard.models import User


class AuthError(Exception):
    """Base class for sign-in failures."""

    type = "AuthError"

    def __str__(self) -> str:
        detail = super().__str__()
        return f"{self.type}: {detail}" if detail else self.type


class CredentialsSignin(AuthError):
    """Raised when submitted credentials do not match an active user."""

    type = "CredentialsSignin"


class CredentialsProvider:
    """Email and password provider backed by the ``users`` table."""

    id = "credentials"

    def authorize(self, credentials: Mapping) -> Optional[User]:
        form = LoginForm(formdata=as_formdata(credentials), meta={"csrf": False})
        if not form.validate():
            return None

        user = User.query.filter_by(email=form.email.data.strip()).first()
        if user is None or not user.active:
            return None
        if not check_password_hash(user.password, form.password.data):
            return None
        return user


PROVIDERS: Dict[str, CredentialsProvider] = {
    CredentialsProvider.id: CredentialsProvider(),
}


def safe_next_url(target: Optional[str]) -> Optional[str]:
    """Return ``target`` only when it points back into this site."""
    if not target:
        return None
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith("/"):
        return None
    return target


def sign_in(provider_id: str, credentials: Mapping):
    """Authenticate with ``provider_id`` and start a session.

    Returns a redirect to the ``next`` URL from ``credentials`` when it is
    local, otherwise to the dashboard. Raises :class:`CredentialsSignin` when
    the provider rejects the credentials.
    """
    provider = PROVIDERS.get(provider_id)
    if provider is None:
        raise AuthError(f"Unknown sign-in provider {provider_id!r}")

    user = provider.authorize(credentials)
    if user is None:
        current_app.logger.info("Rejected sign-in via %s", provider_id)
        raise CredentialsSignin()

    login_user(user)
    destination = safe_next_url(credentials.get("next")) or url_for(
        "main.overview"
    )
    return redirect(destination)


def sign_out():
    logout_user()
    return redirect(url_for("auth.login"))
