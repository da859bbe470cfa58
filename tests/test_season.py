import pytest
from sqlalchemy.exc import SQLAlchemyError

from kickoff.exceptions import ValidationError
from kickoff.models import Setting
from kickoff.services import season as season_module
from kickoff.services.season import (
    get_items_for_season,
    get_item_key,
    season_settings,
    season_for_month,
    get_current_season,
    set_current_season,
    seed_season,
)


def test_items_for_summer_in_display_order():
    assert get_items_for_season('summer') == ['Schlüssel', 'Ball', 'Pumpe', 'Überzieher', 'Handschuhe']


def test_items_for_winter_in_display_order():
    assert get_items_for_season('winter') == ['Hallenball', 'Pumpe', 'Überzieher']


def test_items_list_is_a_copy():
    items = get_items_for_season('winter')
    items.append('Trikot')
    assert get_items_for_season('winter') == ['Hallenball', 'Pumpe', 'Überzieher']


def test_season_settings_min_players():
    assert season_settings('summer').min_players == 12
    assert season_settings('winter').min_players == 8


def test_unknown_season_rejected():
    with pytest.raises(ValidationError):
        get_items_for_season('spring')


@pytest.mark.parametrize('label, key', [
    ('Überzieher', 'ueberzieher'),
    ('Schlüssel', 'schluessel'),
    ('Ball', 'ball'),
    ('Hallenball', 'hallenball'),
    ('Größe', 'groeße'),
    ('Ärmel', 'aermel'),
])
def test_item_key(label, key):
    assert get_item_key(label) == key


def test_item_key_idempotent_on_ascii():
    assert get_item_key(get_item_key('Überzieher')) == 'ueberzieher'
    assert get_item_key('pumpe') == 'pumpe'


@pytest.mark.parametrize('month', [4, 5, 6, 7, 8, 9])
def test_summer_months(month):
    assert season_for_month(month) == 'summer'


@pytest.mark.parametrize('month', [1, 2, 3, 10, 11, 12])
def test_winter_months(month):
    assert season_for_month(month) == 'winter'


def test_current_season_defaults_to_summer(app):
    assert get_current_season() == 'summer'


def test_current_season_reads_setting(app):
    set_current_season('winter')
    assert Setting.get('current_season') == 'winter'
    assert get_current_season() == 'winter'

    set_current_season('summer')
    assert get_current_season() == 'summer'


def test_invalid_stored_season_falls_back(app):
    Setting.set('current_season', 'monsoon')
    assert get_current_season() == 'summer'


def test_read_error_falls_back_to_summer(app, monkeypatch):
    def broken():
        raise SQLAlchemyError('connection lost')

    rollbacks = []
    rollback = season_module.db.session.rollback

    def tracked_rollback():
        rollbacks.append(True)
        rollback()

    monkeypatch.setattr(season_module, '_read_season_setting', broken)
    monkeypatch.setattr(season_module.db.session, 'rollback', tracked_rollback)
    assert get_current_season() == 'summer'
    assert rollbacks == [True]

    # The session stays usable after the failed read
    Setting.set('current_season', 'winter')
    assert Setting.get('current_season') == 'winter'


def test_set_invalid_season_writes_nothing(app):
    with pytest.raises(ValidationError):
        set_current_season('autumn')
    assert Setting.get('current_season') is None


def test_seed_uses_calendar_only_when_unset(app):
    from datetime import date

    assert seed_season(date(2025, 11, 3)) == 'winter'
    assert seed_season(date(2025, 6, 3)) == 'winter'
