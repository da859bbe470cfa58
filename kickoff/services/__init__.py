# Business logic services
from kickoff.services.email_service import email_service
from kickoff.services.aggregation import (
    is_event_locked,
    can_edit_registration,
    count_attendance,
    bringers_of,
    summarize_event,
    build_grid,
)
from kickoff.services.season import (
    get_items_for_season,
    get_item_key,
    get_current_season,
    set_current_season,
    season_settings,
)
from kickoff.services.events import generate_events, create_events, create_event, delete_event

__all__ = [
    'email_service',
    'is_event_locked',
    'can_edit_registration',
    'count_attendance',
    'bringers_of',
    'summarize_event',
    'build_grid',
    'get_items_for_season',
    'get_item_key',
    'get_current_season',
    'set_current_season',
    'season_settings',
    'generate_events',
    'create_events',
    'create_event',
    'delete_event',
]
