from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from sqlalchemy.exc import SQLAlchemyError

from kickoff.constants import SEASONS, WEEKDAY_NAMES
from kickoff.exceptions import ValidationError
from kickoff.models import Member, Event, Registration
from kickoff.routes.auth import admin_required, get_current_member
from kickoff.services.aggregation import summarize_event
from kickoff.services.email_service import email_service
from kickoff.services.events import generate_events, create_events, create_event, delete_event
from kickoff.services.members import create_member, set_member_active
from kickoff.services.season import get_current_season, set_current_season, season_settings

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


@admin_bp.route('/')
@admin_required
def dashboard():
    """Main admin dashboard: members, upcoming events, season."""
    members = Member.list_all()
    events = Event.list(only_future=True)
    registrations = Registration.list_all()
    season = get_current_season()

    summaries = [summarize_event(event, registrations, members, season) for event in events]

    return render_template('admin/dashboard.html',
                           current=get_current_member(),
                           members=members,
                           summaries=summaries,
                           season=season,
                           seasons=SEASONS,
                           season_config=season_settings(season),
                           weekday_names=list(enumerate(WEEKDAY_NAMES)))


# ============== MEMBERS ==============

@admin_bp.route('/members/add', methods=['POST'])
@admin_required
def add_member():
    """Create a member and mail them a temporary password."""
    try:
        member, password = create_member(
            request.form.get('nickname', ''),
            request.form.get('email', ''),
            is_admin=request.form.get('is_admin') == 'on',
        )
    except ValidationError as e:
        flash(str(e), 'error')
        return redirect(url_for('admin.dashboard'))
    except SQLAlchemyError as e:
        current_app.logger.error(f"Creating member failed: {e}")
        flash('Fehler beim Erstellen des Mitglieds.', 'error')
        return redirect(url_for('admin.dashboard'))

    result = email_service.send_welcome_email(member, password)
    if result['success']:
        flash(f'{member.nickname} angelegt, Zugangsdaten wurden per E-Mail verschickt.', 'success')
    else:
        # Admin passes the password on by hand
        flash(f'{member.nickname} angelegt. Initial-Passwort: {password}', 'success')
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/members/<int:member_id>/toggle', methods=['POST'])
@admin_required
def toggle_member(member_id):
    """Deactivate or reactivate a member."""
    member = Member.query.get_or_404(member_id)
    if member.id == get_current_member().id:
        flash('Du kannst dich nicht selbst deaktivieren.', 'error')
        return redirect(url_for('admin.dashboard'))

    try:
        set_member_active(member, not member.is_active)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Toggling member {member_id} failed: {e}")
        flash('Fehler beim Ändern des Status.', 'error')
        return redirect(url_for('admin.dashboard'))

    state = 'aktiviert' if member.is_active else 'deaktiviert'
    flash(f'{member.nickname} {state}.', 'success')
    return redirect(url_for('admin.dashboard'))


# ============== EVENTS ==============

@admin_bp.route('/events/add', methods=['POST'])
@admin_required
def add_event():
    """Create a single event."""
    try:
        event = create_event(
            request.form.get('date'),
            request.form.get('time_from'),
            request.form.get('time_to'),
            request.form.get('location'),
            name=request.form.get('name'),
        )
    except ValidationError as e:
        flash(str(e), 'error')
        return redirect(url_for('admin.dashboard'))
    except SQLAlchemyError as e:
        current_app.logger.error(f"Creating event failed: {e}")
        flash('Fehler beim Erstellen des Events.', 'error')
        return redirect(url_for('admin.dashboard'))

    flash(f'Event am {event.date.strftime("%d.%m.%Y")} erstellt.', 'success')
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/events/generate', methods=['POST'])
@admin_required
def generate_series():
    """Create events on the chosen weekdays of a date range."""
    try:
        events = generate_events(
            request.form.get('date_from'),
            request.form.get('date_to'),
            request.form.getlist('weekdays'),
            request.form.get('time_from'),
            request.form.get('time_to'),
            request.form.get('location'),
            name=request.form.get('name'),
        )
        create_events(events)
    except ValidationError as e:
        flash(str(e), 'error')
        return redirect(url_for('admin.dashboard'))
    except SQLAlchemyError as e:
        current_app.logger.error(f"Creating event series failed: {e}")
        flash('Fehler beim Erstellen der Events.', 'error')
        return redirect(url_for('admin.dashboard'))

    if events:
        flash(f'{len(events)} Events erstellt.', 'success')
    else:
        flash('Im gewählten Zeitraum liegt keiner der gewählten Wochentage.', 'error')
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/events/<int:event_id>/delete', methods=['POST'])
@admin_required
def remove_event(event_id):
    """Delete an event and its registrations."""
    event = Event.query.get_or_404(event_id)
    label = f'{event.date.strftime("%d.%m.%Y")} {event.label}'
    try:
        delete_event(event)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Deleting event {event_id} failed: {e}")
        flash('Fehler beim Löschen des Events.', 'error')
        return redirect(url_for('admin.dashboard'))

    flash(f'Event {label} gelöscht.', 'success')
    return redirect(url_for('admin.dashboard'))


# ============== SETTINGS ==============

@admin_bp.route('/season', methods=['POST'])
@admin_required
def change_season():
    """Switch between summer and winter equipment lists."""
    try:
        set_current_season(request.form.get('season', ''))
    except ValidationError as e:
        flash(str(e), 'error')
        return redirect(url_for('admin.dashboard'))
    except SQLAlchemyError as e:
        current_app.logger.error(f"Saving season failed: {e}")
        flash('Fehler beim Speichern der Saison.', 'error')
        return redirect(url_for('admin.dashboard'))

    flash('Saison gespeichert.', 'success')
    return redirect(url_for('admin.dashboard'))
