import os
import secrets
from datetime import datetime, timedelta

from dotenv import load_dotenv
from flask import Flask, Response, g, redirect, render_template, request, url_for
from flask_bootstrap import Bootstrap
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError
from werkzeug.security import generate_password_hash

load_dotenv()
db = SQLAlchemy()
login_manager = LoginManager()
login_manager.login_view = "auth.login"
storage_uri = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
limiter = Limiter(key_func=get_remote_address, storage_uri=storage_uri)


def _get_bool_env(var_name: str, default: bool = False) -> bool:
    """Return a boolean environment variable value."""

    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


DEFAULT_CSP_TEMPLATE = (
    "default-src 'self'; "
    "img-src 'self' data: https:; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "script-src 'self' https://cdn.jsdelivr.net 'nonce-{nonce}'; "
    "font-src 'self' data:; "
    "frame-ancestors 'self'; "
    "form-action 'self'; "
    "object-src 'none'; "
    "base-uri 'self'"
)
NAV_LINKS = {
    "main.overview": "Home",
    "invoices.view_invoices": "Invoices",
}


@login_manager.user_loader
def load_user(user_id):
    """Retrieve a user by ID for Flask-Login."""
    from dashboard.models import User

    return db.session.get(User, user_id)


def create_admin_user():
    """Ensure an admin user exists for the application."""
    from dashboard.models import User

    db.create_all()

    admin_exists = User.query.filter_by(is_admin=True).first()
    if not admin_exists:
        admin_email = os.getenv("ADMIN_EMAIL")
        raw_password = os.getenv("ADMIN_PASS")
        if raw_password is None:
            raise RuntimeError("ADMIN_PASS environment variable not set")
        admin_user = User(
            name="Admin",
            email=admin_email,
            password=generate_password_hash(raw_password),
            is_admin=True,
            active=True,
        )

        db.session.add(admin_user)
        db.session.commit()
        print("Admin user created.")


def _database_uri(base_dir: str) -> str:
    """Return the SQLAlchemy URL from ``DATABASE_URL`` or a SQLite path."""

    url = os.getenv("DATABASE_URL")
    if url:
        # Hosted Postgres providers still hand out the legacy scheme.
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        return url

    default_db_path = os.path.join(base_dir, "dashboard.db")
    db_path = os.getenv("DATABASE_PATH", default_db_path)
    if os.path.isdir(db_path):
        db_path = os.path.join(db_path, "dashboard.db")
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    return f"sqlite:///{os.path.abspath(db_path)}"


def create_app(args: list):
    """Application factory used by Flask."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY")
    default_secure_cookies = "--demo" not in args
    session_cookie_secure = _get_bool_env(
        "SESSION_COOKIE_SECURE", default=default_secure_cookies
    )
    app.config["ENFORCE_HTTPS"] = _get_bool_env("ENFORCE_HTTPS", default=False)
    app.config["PAGE_CACHE_ENABLED"] = _get_bool_env(
        "PAGE_CACHE_ENABLED", default=True
    )
    app.config["PAGE_CACHE_MAX_ENTRIES"] = int(
        os.getenv("PAGE_CACHE_MAX_ENTRIES", "256")
    )
    app.config.update(
        SESSION_COOKIE_SECURE=session_cookie_secure,
        REMEMBER_COOKIE_SECURE=session_cookie_secure,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=timedelta(minutes=30),
    )
    app.config["START_TIME"] = datetime.utcnow()
    app.config["DEMO"] = "--demo" in args
    # Resolve the database location eagerly so a later change of working
    # directory (the test suite does this) keeps pointing at the same file.
    app.config["SQLALCHEMY_DATABASE_URI"] = _database_uri(os.getcwd())

    db.init_app(app)
    from flask_migrate import Migrate

    Migrate(app, db)
    login_manager.init_app(app)
    app.config["RATELIMIT_ENABLED"] = _get_bool_env(
        "RATELIMIT_ENABLED", default=True
    )
    limiter.init_app(app)
    Bootstrap(app)

    from dashboard.utils.formatting import format_currency, format_date

    app.jinja_env.filters["currency"] = format_currency
    app.jinja_env.filters["format_date"] = format_date

    @app.context_processor
    def inject_nav_links():
        """Provide navigation labels to templates."""
        return dict(NAV_LINKS=NAV_LINKS)

    @app.before_request
    def set_csp_nonce():
        """Generate a nonce for inline scripts allowed by the CSP."""

        g.csp_nonce = secrets.token_urlsafe(16)

    @app.after_request
    def apply_security_headers(response):
        """Attach standard security headers to every response."""
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        if request.is_secure or app.config.get("ENFORCE_HTTPS", False):
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        nonce = getattr(g, "csp_nonce", "") or secrets.token_urlsafe(16)
        csp_template = app.config.get(
            "CONTENT_SECURITY_POLICY", DEFAULT_CSP_TEMPLATE
        )
        try:
            csp = csp_template.format(nonce=nonce)
        except (KeyError, IndexError, ValueError):
            csp = csp_template
        response.headers.setdefault("Content-Security-Policy", csp)
        return response

    @app.context_processor
    def inject_csp_nonce():
        """Expose the CSP nonce to templates for inline scripts."""

        return {"csp_nonce": getattr(g, "csp_nonce", "")}

    @app.before_request
    def block_http_options():
        """Return a 405 for HTTP OPTIONS requests to reduce information leakage."""
        if request.method == "OPTIONS":
            return Response(status=405)

    @app.route("/")
    def index():
        return redirect(url_for("main.overview"))

    with app.app_context():
        # Import the models so create_all() sees every table even when
        # migrations have not been run yet.
        from . import models  # noqa: F401

        db.create_all()

        from dashboard.routes.auth_routes import auth
        from dashboard.routes.invoice_routes import invoices
        from dashboard.routes.main_routes import main

        app.register_blueprint(auth)
        app.register_blueprint(main)
        app.register_blueprint(invoices)

        CSRFProtect(app)

        @app.errorhandler(CSRFError)
        def handle_csrf_error(error):
            """Render a helpful page when CSRF validation fails."""
            return (
                render_template(
                    "errors/csrf_error.html",
                    reason=error.description,
                ),
                400,
            )

    return app
