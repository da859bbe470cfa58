from flask import Blueprint, redirect, url_for, session

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Send members to the grid, everyone else to the login."""
    if session.get('member_id'):
        return redirect(url_for('member.grid'))
    return redirect(url_for('auth.login'))


@main_bp.route('/health')
def health():
    """Health check endpoint for Railway."""
    return {'status': 'healthy', 'app': 'Kickoff'}
