"""
User credentials kept in a YAML file mapping username to password hash.
"""
import logging
from pathlib import Path
from typing import Dict, Union

import yaml
from werkzeug.security import generate_password_hash, check_password_hash

from cms.utils.validators import ValidationError, validate_credentials

logger = logging.getLogger(__name__)


class CredentialStore:
    """Registers users and verifies sign-in attempts."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        with open(self.path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False)

    def exists(self, username: str) -> bool:
        return username in self._load()

    def verify(self, username: str, password: str) -> bool:
        """True iff the user exists and the password matches its salted hash."""
        password_hash = self._load().get(username)
        if not password_hash:
            return False
        return check_password_hash(password_hash, password)

    def register(self, username: str, password: str):
        """
        Add a new user.

        Raises:
            ValidationError if a field is empty or the username is taken
        """
        validate_credentials(username, password)
        data = self._load()
        if username in data:
            raise ValidationError(f"The username {username} is already taken.")
        data[username] = generate_password_hash(password)
        self._save(data)
        logger.info(f"Registered user {username}")
