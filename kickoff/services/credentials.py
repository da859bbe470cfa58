"""Password hashing, checking and generation."""

import secrets
import string

from werkzeug.security import generate_password_hash, check_password_hash

from kickoff.constants import MIN_PASSWORD_LENGTH, GENERATED_PASSWORD_LENGTH
from kickoff.exceptions import ValidationError


# No look-alike characters; temporary passwords get read out and typed in
PASSWORD_ALPHABET = ''.join(
    c for c in string.ascii_letters + string.digits + '!@#$%&*' if c not in 'Il1O0o'
)


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    return ''.join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


def validate_new_password(password: str, confirmation: str):
    """Raise ValidationError unless the new password is acceptable."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f'Passwort muss mindestens {MIN_PASSWORD_LENGTH} Zeichen lang sein.')
    if password != confirmation:
        raise ValidationError('Passwörter stimmen nicht überein.')
