"""
Login, logout and the forced password change.

Members log in with email and password. A member created by an admin
gets a temporary password and must replace it before using the grid.
"""

from functools import wraps
from urllib.parse import urlparse
from flask import Blueprint, render_template, request, redirect, url_for, session, flash, current_app

from kickoff.constants import LOGIN_MAX_ATTEMPTS, LOGIN_WINDOW_MINUTES
from kickoff.exceptions import ValidationError
from kickoff.models import Member, RateLimit
from kickoff.services.members import authenticate, change_password

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

LOGIN_FAILED = 'login_failed'


def get_current_member():
    """Get the currently logged-in member."""
    member_id = session.get('member_id')
    if member_id:
        return Member.query.get(member_id)
    return None


def set_member_session(member):
    """Set session variables for a logged-in member."""
    session['member_id'] = member.id
    session['member_name'] = member.nickname
    session['is_admin'] = bool(member.is_admin)
    session.permanent = True


def clear_member_session():
    session.pop('member_id', None)
    session.pop('member_name', None)
    session.pop('is_admin', None)


def member_required(f):
    """Decorator to require a logged-in member with a final password."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        member = get_current_member()
        if not member:
            clear_member_session()
            return redirect(url_for('auth.login', next=request.url))
        if member.must_change_password:
            return redirect(url_for('auth.change_password_form'))
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator to require an admin member."""
    @wraps(f)
    @member_required
    def decorated_function(*args, **kwargs):
        member = get_current_member()
        if not member.is_admin or not member.is_active:
            flash('Kein Zugriff auf den Admin-Bereich.', 'error')
            return redirect(url_for('member.grid'))
        return f(*args, **kwargs)
    return decorated_function


def _safe_next(next_url):
    """Only same-site paths; anything else lands on the grid."""
    if not next_url or not next_url.startswith('/') or next_url.startswith(('//', '/\\')):
        return url_for('member.grid')
    parsed = urlparse(next_url.replace('\\', '/'))
    if parsed.scheme or parsed.netloc:
        return url_for('member.grid')
    return next_url


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Member login page."""
    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Bitte E-Mail und Passwort eingeben.', 'error')
            return render_template('auth/login.html', email=email)

        allowed, _, retry_after = RateLimit.check_rate_limit(
            email, LOGIN_FAILED, LOGIN_MAX_ATTEMPTS, LOGIN_WINDOW_MINUTES
        )
        if not allowed:
            minutes = max(1, (retry_after or 0) // 60)
            flash(f'Zu viele Fehlversuche. Bitte in {minutes} Minuten erneut versuchen.', 'error')
            return render_template('auth/login.html', email=email), 429

        member = authenticate(email, password)
        if not member:
            RateLimit.record_request(email, LOGIN_FAILED)
            current_app.logger.info(f"Failed login for {email}")
            # Same message whether or not the email exists
            flash('E-Mail oder Passwort falsch.', 'error')
            return render_template('auth/login.html', email=email), 401

        RateLimit.clear(email, LOGIN_FAILED)
        set_member_session(member)

        if member.must_change_password:
            return redirect(url_for('auth.change_password_form'))

        return redirect(_safe_next(request.args.get('next')))

    if get_current_member():
        return redirect(url_for('member.grid'))
    return render_template('auth/login.html', email='')


@auth_bp.route('/change-password')
def change_password_form():
    if not get_current_member():
        return redirect(url_for('auth.login'))
    return render_template('auth/change_password.html')


@auth_bp.route('/change-password', methods=['POST'])
def submit_password_change():
    member = get_current_member()
    if not member:
        return redirect(url_for('auth.login'))

    try:
        change_password(
            member,
            request.form.get('new_password', ''),
            request.form.get('confirm_password', ''),
        )
    except ValidationError as e:
        flash(str(e), 'error')
        return render_template('auth/change_password.html'), 400

    flash('Passwort geändert.', 'success')
    return redirect(url_for('member.grid'))


@auth_bp.route('/logout')
def logout():
    """Log out member."""
    clear_member_session()
    flash('Abgemeldet.', 'success')
    return redirect(url_for('auth.login'))
