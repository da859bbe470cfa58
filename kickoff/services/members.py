"""Member administration and login checks."""

from flask import current_app

from kickoff import db
from kickoff.exceptions import ValidationError
from kickoff.models import Member
from kickoff.services.credentials import (
    generate_password,
    hash_password,
    verify_password,
    validate_new_password,
)


def create_member(nickname: str, email: str, is_admin: bool = False):
    """Create a member with a temporary password.

    Returns (member, password). The password is only available here; the
    member must replace it on first login.
    """
    nickname = (nickname or '').strip()
    email = (email or '').strip().lower()
    if not nickname or not email:
        raise ValidationError('Bitte Nickname und E-Mail eingeben.')
    if '@' not in email:
        raise ValidationError('Bitte eine gültige E-Mail eingeben.')
    if Member.get_by_email(email):
        raise ValidationError(f'{email} ist bereits registriert.')

    password = generate_password()
    member = Member(
        nickname=nickname,
        email=email,
        password_hash=hash_password(password),
        is_active=True,
        is_admin=is_admin,
        must_change_password=True,
    )
    db.session.add(member)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(f"Created member {member.id} ({member.nickname}), admin={is_admin}")
    return member, password


def set_member_active(member, active: bool):
    member.is_active = active
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"Member {member.id} active={active}")
    return member


def change_password(member, new_password: str, confirmation: str):
    """Replace a member's password and clear the forced-change flag."""
    validate_new_password(new_password, confirmation)
    member.password_hash = hash_password(new_password)
    member.must_change_password = False
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return member


def authenticate(email: str, password: str):
    """Member for the credentials, or None. Inactive members may log in read-only."""
    member = Member.get_by_email(email)
    if not member or not verify_password(password, member.password_hash):
        return None
    return member
