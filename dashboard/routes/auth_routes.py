from flask import Blueprint, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from dashboard import limiter
from dashboard.actions import authenticate
from dashboard.auth import sign_out
from dashboard.forms import LoginForm
from dashboard.utils.activity import log_activity

auth = Blueprint("auth", __name__)


@auth.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute", methods=["POST"])
def login():
    """Authenticate a user and start their session."""
    if current_user.is_authenticated:
        return redirect(url_for("main.overview"))

    form = LoginForm()
    error_code = None
    if request.method == "POST":
        result = authenticate(None, request.form)
        if not isinstance(result, str):
            return result
        error_code = result
    else:
        form.next_url.data = request.args.get("next", "")

    return render_template("auth/login.html", form=form, error_code=error_code)


@auth.route("/logout", methods=["GET", "POST"])
@login_required
def logout():
    """Log the current user out."""
    user_id = current_user.id
    response = sign_out()
    log_activity("Logged out", user_id)
    return response
