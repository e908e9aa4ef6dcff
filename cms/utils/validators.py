"""
Validation utilities for document names, uploads and credentials.
"""
from pathlib import Path
from typing import Set


class ValidationError(Exception):
    """Validation error exception."""
    pass


def validate_name(filename: str, allowed_extensions: Set[str]) -> bool:
    """
    Validate a document name before it is created or used as a rename target.

    Args:
        filename: Filename to validate
        allowed_extensions: Set of allowed extensions (without dot)

    Returns:
        True if valid

    Raises:
        ValidationError if the name is empty or has no supported extension
    """
    if not filename:
        raise ValidationError("A name is required.")

    ext = Path(filename).suffix.lstrip('.').lower()
    if not ext:
        raise ValidationError("A file extension is required.")
    if ext not in allowed_extensions:
        raise ValidationError(
            f"Invalid file extension '.{ext}'. Allowed types: {', '.join(sorted(allowed_extensions))}"
        )
    if '/' in filename or '\\' in filename or filename.startswith('.'):
        raise ValidationError("Names cannot contain path separators or start with a dot.")
    return True


def validate_credentials(username: str, password: str) -> bool:
    """
    Validate sign-up fields.

    Raises:
        ValidationError if either field is empty
    """
    if not username:
        raise ValidationError("A username is required.")
    if not password:
        raise ValidationError("A password is required.")
    return True
