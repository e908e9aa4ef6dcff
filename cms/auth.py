"""
Session state and the sign-in gate.

The signed-in username and a single pending flash message live in Flask's
cookie session. Handlers reach them through a SessionContext rather than
touching the session directly.
"""
from functools import wraps
from typing import Optional

from flask import g, redirect, session, url_for

SIGN_IN_REQUIRED_MESSAGE = "You must be signed in to do that."

USERNAME_KEY = 'username'
MESSAGE_KEY = 'message'


class SessionContext:
    """Request-scoped view of the session."""

    def __init__(self, store):
        self._store = store

    @property
    def username(self) -> Optional[str]:
        return self._store.get(USERNAME_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.username)

    def sign_in(self, username: str):
        self._store[USERNAME_KEY] = username
        self.flash("Welcome!")

    def sign_out(self):
        self._store.pop(USERNAME_KEY, None)
        self.flash("You have been signed out.")

    def flash(self, message: str):
        """Queue a message for the next rendered page, replacing any pending one."""
        self._store[MESSAGE_KEY] = message

    def take_flash(self) -> Optional[str]:
        """Return the pending message and clear it."""
        return self._store.pop(MESSAGE_KEY, None)


def get_session_context() -> SessionContext:
    """Get the SessionContext for the current request."""
    if 'session_context' not in g:
        g.session_context = SessionContext(session)
    return g.session_context


def login_required(f):
    """Redirect to the index with a flash message unless a user is signed in."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        ctx = get_session_context()
        if not ctx.is_authenticated():
            ctx.flash(SIGN_IN_REQUIRED_MESSAGE)
            return redirect(url_for('main.index'))
        return f(*args, **kwargs)
    return wrapper
