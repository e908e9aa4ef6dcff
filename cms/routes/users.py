"""
Sign-in, sign-up and sign-out routes.
"""
from flask import Blueprint, request, render_template, redirect, url_for, current_app
from cms.auth import get_session_context
from cms.services import get_credential_store
from cms.utils.validators import ValidationError

bp = Blueprint('users', __name__, url_prefix='/users')


@bp.route('/signin', methods=['GET'])
def signin_form():
    return render_template('signin.html')


@bp.route('/signin', methods=['POST'])
def signin():
    """Verify credentials and start a session."""
    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')

    if get_credential_store().verify(username, password):
        get_session_context().sign_in(username)
        current_app.logger.info(f"User {username} signed in")
        return redirect(url_for('main.index'))

    current_app.logger.warning(f"Failed sign-in for {username or '<empty>'}")
    return render_template('signin.html', username=username, error='Invalid Credentials'), 422


@bp.route('/signup', methods=['GET'])
def signup_form():
    return render_template('signup.html')


@bp.route('/signup', methods=['POST'])
def signup():
    """Register a new user and sign them in."""
    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')

    try:
        get_credential_store().register(username, password)
    except ValidationError as e:
        return render_template('signup.html', username=username, error=str(e)), 422

    get_session_context().sign_in(username)
    return redirect(url_for('main.index'))


@bp.route('/signout', methods=['POST'])
def signout():
    ctx = get_session_context()
    username = ctx.username
    ctx.sign_out()
    if username:
        current_app.logger.info(f"User {username} signed out")
    return redirect(url_for('main.index'))
