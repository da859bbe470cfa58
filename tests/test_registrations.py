import pytest

from kickoff.exceptions import ValidationError
from kickoff.models import Registration
from kickoff.services.aggregation import count_attendance


def test_upsert_creates_then_replaces(app, make_member, make_event):
    anna = make_member('Anna')
    event = make_event()

    Registration.upsert(anna.id, event.id, 'yes', comment='komme später', guests=2,
                        items={'ball': True, 'pumpe': True})
    Registration.upsert(anna.id, event.id, 'no', guests=0, items={'ball': True})

    rows = Registration.query.filter_by(member_id=anna.id, event_id=event.id).all()
    assert len(rows) == 1
    assert rows[0].status == 'no'
    assert rows[0].comment is None
    assert rows[0].guests == 0
    assert rows[0].items == {'ball': True}


def test_upsert_drops_unchecked_items(app, make_member, make_event):
    anna = make_member('Anna')
    event = make_event()

    registration = Registration.upsert(anna.id, event.id, 'yes', items={'ball': True, 'pumpe': False})

    assert registration.items == {'ball': True}


def test_invalid_status_rejected(app, make_member, make_event):
    anna = make_member('Anna')
    event = make_event()

    with pytest.raises(ValidationError):
        Registration.upsert(anna.id, event.id, 'maybe')
    assert Registration.query.count() == 0


def test_negative_guests_rejected(app, make_member, make_event):
    anna = make_member('Anna')
    event = make_event()

    with pytest.raises(ValidationError):
        Registration.upsert(anna.id, event.id, 'yes', guests=-1)


def test_totals_from_stored_rows(app, make_member, make_event):
    anna, tom, lisa = make_member('Anna'), make_member('Tom'), make_member('Lisa')
    event = make_event()
    Registration.upsert(anna.id, event.id, 'yes', guests=2)
    Registration.upsert(tom.id, event.id, 'no', guests=3)
    Registration.upsert(lisa.id, event.id, 'yes', guests=1)

    totals = count_attendance(Registration.list_all(), event.id)

    assert tuple(totals) == (2, 3, 5)
