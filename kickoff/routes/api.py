"""
API routes for AJAX/JSON endpoints.

Includes:
- Per-event totals, lock state and equipment bringers
- Current season configuration
"""

from flask import Blueprint, jsonify

from kickoff.models import Member, Event, Registration
from kickoff.routes.auth import member_required
from kickoff.services.aggregation import summarize_event
from kickoff.services.season import get_current_season, season_settings

api_bp = Blueprint('api', __name__, url_prefix='/api')


@api_bp.route('/events/<int:event_id>/summary')
@member_required
def event_summary(event_id):
    """
    Totals for one event.

    Returns:
        JSON with 'success' and an 'event' object holding totals, lock
        state and the bringers per item
    """
    event = Event.query.get_or_404(event_id)
    season = get_current_season()
    summary = summarize_event(event, Registration.query.filter_by(event_id=event_id).all(),
                              Member.list_all(), season)

    return jsonify({
        'success': True,
        'event': {
            'id': event.id,
            'date': event.date.isoformat(),
            'time_from': event.time_from.strftime('%H:%M'),
            'time_to': event.time_to.strftime('%H:%M'),
            'location': event.location,
            'name': event.name,
            'locked': summary.locked,
            'members': summary.totals.members,
            'guests': summary.totals.guests,
            'total': summary.totals.total,
            'min_players': summary.min_players,
            'enough_players': summary.enough_players,
            'bringers': [{'item': label, 'members': names} for label, names in summary.bringers],
        }
    })


@api_bp.route('/season')
@member_required
def season():
    """Current season with its items and minimum players."""
    current = get_current_season()
    config = season_settings(current)
    return jsonify({
        'season': current,
        'items': config.items,
        'min_players': config.min_players,
    })
