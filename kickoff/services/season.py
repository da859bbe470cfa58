"""
Season configuration: which equipment the grid asks for and how many
players an event needs.

The active season is an admin setting persisted in the settings table.
The month heuristic only seeds that setting on a fresh install.
"""

from collections import namedtuple
from datetime import date

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from kickoff import db
from kickoff.constants import SUMMER, WINTER, SEASONS, DEFAULT_SEASON, SEASON_SETTING_KEY
from kickoff.exceptions import ValidationError


SeasonSettings = namedtuple('SeasonSettings', ['items', 'min_players'])

# Order is display order
SEASON_ITEMS = {
    SUMMER: ('Schlüssel', 'Ball', 'Pumpe', 'Überzieher', 'Handschuhe'),
    WINTER: ('Hallenball', 'Pumpe', 'Überzieher'),
}

MIN_PLAYERS = {
    SUMMER: 12,
    WINTER: 8,
}

UMLAUTS = (('ü', 'ue'), ('ä', 'ae'), ('ö', 'oe'))


def _check_season(season: str):
    if season not in SEASONS:
        raise ValidationError(f'Unknown season: {season}')


def get_items_for_season(season: str) -> list:
    """Equipment labels for a season, in display order."""
    _check_season(season)
    return list(SEASON_ITEMS[season])


def season_settings(season: str) -> SeasonSettings:
    _check_season(season)
    return SeasonSettings(items=list(SEASON_ITEMS[season]), min_players=MIN_PLAYERS[season])


def get_item_key(label: str) -> str:
    """Map an item label to the key stored in a registration's items.

    'Überzieher' -> 'ueberzieher'. Must stay stable: existing
    registrations are keyed by it.
    """
    key = label.lower()
    for umlaut, digraph in UMLAUTS:
        key = key.replace(umlaut, digraph)
    return key


def season_for_month(month: int) -> str:
    """April to September is summer."""
    return SUMMER if 4 <= month <= 9 else WINTER


def get_current_season() -> str:
    """Season chosen by the admin, summer if unset or unreadable."""
    try:
        value = _read_season_setting()
    except SQLAlchemyError as e:
        # A failed read leaves the transaction aborted on PostgreSQL
        db.session.rollback()
        current_app.logger.warning(f"Could not read season setting, using {DEFAULT_SEASON}: {e}")
        return DEFAULT_SEASON

    if value not in SEASONS:
        if value is not None:
            current_app.logger.warning(f"Ignoring invalid season setting {value!r}")
        return DEFAULT_SEASON
    return value


def set_current_season(season: str):
    """Persist the admin's season choice. Write errors propagate."""
    _check_season(season)
    from kickoff.models import Setting
    Setting.set(SEASON_SETTING_KEY, season)
    current_app.logger.info(f"Season set to {season}")


def seed_season(today: date = None) -> str:
    """Store the calendar season unless a season is already set."""
    from kickoff.models import Setting
    existing = Setting.get(SEASON_SETTING_KEY)
    if existing in SEASONS:
        return existing
    season = season_for_month((today or date.today()).month)
    Setting.set(SEASON_SETTING_KEY, season)
    return season


def _read_season_setting():
    from kickoff.models import Setting
    return Setting.get(SEASON_SETTING_KEY)
