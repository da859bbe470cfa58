"""
Event creation helpers: single events, recurring series and deletion.

generate_events() only builds unsaved Event objects so a series can be
checked before anything is written; create_events() stores them.
"""

from datetime import date, datetime, time, timedelta

from flask import current_app

from kickoff import db
from kickoff.constants import DATE_FORMAT, TIME_FORMAT
from kickoff.exceptions import ValidationError
from kickoff.models import Event, Registration


def parse_date(value, field='Datum') -> date:
    """Accept a date or an ISO 'YYYY-MM-DD' string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f'{field} fehlt.')
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f'{field} ist ungültig: {value}')


def parse_time(value, field='Uhrzeit') -> time:
    """Accept a time or an 'HH:MM' string."""
    if isinstance(value, time):
        return value
    if not value:
        raise ValidationError(f'{field} fehlt.')
    try:
        return datetime.strptime(str(value).strip()[:5], TIME_FORMAT).time()
    except ValueError:
        raise ValidationError(f'{field} ist ungültig: {value}')


def sunday_based_weekday(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def _event_fields(time_from, time_to, location):
    location = (location or '').strip()
    if not location:
        raise ValidationError('Ort fehlt.')
    return parse_time(time_from, 'Startzeit'), parse_time(time_to, 'Endzeit'), location


def generate_events(date_from, date_to, weekdays, time_from, time_to, location, name=None) -> list:
    """Build one event per matching weekday between two dates, inclusive.

    Weekdays use 0 = Sunday. Events come back in date order and are not
    added to the session. Existing events on the same dates are not
    checked for, so running a series twice creates duplicates.
    """
    start = parse_date(date_from, 'Startdatum')
    end = parse_date(date_to, 'Enddatum')
    if start > end:
        raise ValidationError('Startdatum liegt nach dem Enddatum.')

    try:
        selected = {int(day) for day in (weekdays or [])}
    except (TypeError, ValueError):
        raise ValidationError('Ungültiger Wochentag.')
    if not selected:
        raise ValidationError('Bitte mindestens einen Wochentag wählen.')
    if not selected <= set(range(7)):
        raise ValidationError('Ungültiger Wochentag.')

    time_from, time_to, location = _event_fields(time_from, time_to, location)
    name = (name or '').strip() or None

    events = []
    day = start
    while day <= end:
        if sunday_based_weekday(day) in selected:
            events.append(Event(date=day, time_from=time_from, time_to=time_to,
                                location=location, name=name))
        day += timedelta(days=1)
    return events


def create_events(events) -> list:
    """Store a batch of events in one transaction."""
    try:
        db.session.add_all(events)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"Created {len(events)} events")
    return events


def create_event(event_date, time_from, time_to, location, name=None) -> Event:
    day = parse_date(event_date)
    time_from, time_to, location = _event_fields(time_from, time_to, location)
    event = Event(date=day, time_from=time_from, time_to=time_to, location=location,
                  name=(name or '').strip() or None)
    create_events([event])
    return event


def delete_event(event):
    """Delete an event together with all its registrations."""
    event_id = event.id
    try:
        Registration.query.filter_by(event_id=event_id).delete()
        db.session.delete(event)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info(f"Deleted event {event_id}")
