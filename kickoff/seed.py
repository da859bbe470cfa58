"""First-run setup: creates the initial admin and stores a season."""
import click
from flask import current_app

from kickoff.models import Member
from kickoff.services.members import create_member
from kickoff.services.season import seed_season


def seed_admin(email=None, nickname=None):
    """Create the first admin if missing. Returns summary."""
    email = (email or current_app.config.get('ADMIN_EMAIL') or '').strip().lower()
    nickname = nickname or current_app.config.get('ADMIN_NICKNAME') or 'Admin'

    if not email:
        raise click.UsageError('Set ADMIN_EMAIL or pass --email.')

    season = seed_season()

    existing = Member.get_by_email(email)
    if existing:
        return {'created': False, 'member': existing, 'password': None, 'season': season}

    member, password = create_member(nickname, email, is_admin=True)
    return {'created': True, 'member': member, 'password': password, 'season': season}


def register_commands(app):
    @app.cli.command('seed-admin')
    @click.option('--email', default=None, help='Login email of the admin.')
    @click.option('--nickname', default=None, help='Display name of the admin.')
    def seed_admin_command(email, nickname):
        """Create the first admin account."""
        result = seed_admin(email, nickname)
        if result['created']:
            click.echo(f"Created admin {result['member'].email} with password {result['password']}")
        else:
            click.echo(f"{result['member'].email} already exists")
        click.echo(f"Season: {result['season']}")
