"""
Member portal routes - the registration grid.

Rows are active members, columns are upcoming events. A cell holds one
member's answer for one event: yes/no/pending, guests, a comment and the
equipment they bring.
"""

from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from sqlalchemy.exc import SQLAlchemyError

from kickoff.constants import STATUSES, STATUS_PENDING, MAX_GUESTS, NO_BRINGER_MARKER
from kickoff.exceptions import ValidationError
from kickoff.models import Member, Event, Registration
from kickoff.routes.auth import member_required, get_current_member
from kickoff.services.aggregation import build_grid, summarize_event, can_edit_registration, is_event_locked
from kickoff.services.season import get_current_season, get_items_for_season, get_item_key

member_bp = Blueprint('member', __name__, url_prefix='/member')


def parse_guests(raw) -> int:
    """Guest count from the form, clamped to 0..MAX_GUESTS."""
    try:
        guests = int(raw or 0)
    except (TypeError, ValueError):
        raise ValidationError('Ungültige Anzahl Gäste.')
    return max(0, min(MAX_GUESTS, guests))


@member_bp.route('/')
@member_required
def grid():
    """Registration grid for all upcoming events."""
    current = get_current_member()
    season = get_current_season()
    items = get_items_for_season(season)

    members = Member.list_all()
    events = Event.list(only_future=True)
    registrations = Registration.list_all()

    roster, rows = build_grid(members, events, registrations, current)
    summaries = [summarize_event(event, registrations, members, season) for event in events]

    return render_template('member/grid.html',
                           current=current,
                           season=season,
                           items=[(label, get_item_key(label)) for label in items],
                           events=events,
                           roster=roster,
                           rows=rows,
                           summaries=summaries,
                           statuses=STATUSES,
                           max_guests=MAX_GUESTS,
                           no_bringer=NO_BRINGER_MARKER)


@member_bp.route('/registrations/<int:event_id>/<int:member_id>', methods=['POST'])
@member_required
def save_registration(event_id, member_id):
    """Save one grid cell."""
    current = get_current_member()
    event = Event.query.get_or_404(event_id)
    member = Member.query.get_or_404(member_id)

    if not current.is_active:
        flash('Dein Account ist inaktiv. Du kannst keine Änderungen vornehmen.', 'error')
        return redirect(url_for('member.grid'))

    if not can_edit_registration(current, member, event):
        if not member.is_active:
            flash(f'{member.nickname} ist inaktiv und kann nicht angemeldet werden.', 'error')
        elif is_event_locked(event) and not current.is_admin:
            flash('Event ist gesperrt (weniger als 1 Stunde bis Start).', 'error')
        else:
            flash('Du kannst nur deine eigene Anmeldung ändern.', 'error')
        return redirect(url_for('member.grid'))

    status = request.form.get('status', STATUS_PENDING)
    comment = request.form.get('comment', '').strip()
    checked = set(request.form.getlist('items'))
    season_keys = [get_item_key(label) for label in get_items_for_season(get_current_season())]
    items = {key: True for key in season_keys if key in checked}

    try:
        guests = parse_guests(request.form.get('guests'))
        Registration.upsert(member.id, event.id, status, comment=comment, guests=guests, items=items)
    except ValidationError as e:
        flash(str(e), 'error')
        return redirect(url_for('member.grid'))
    except SQLAlchemyError as e:
        current_app.logger.error(f"Saving registration member={member.id} event={event.id} failed: {e}")
        flash('Fehler beim Speichern.', 'error')
        return redirect(url_for('member.grid'))

    flash('Gespeichert.', 'success')
    return redirect(url_for('member.grid'))
