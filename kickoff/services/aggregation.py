"""
Attendance aggregation for the registration grid.

Pure functions over members, events and registrations as loaded from the
database. Nothing here queries or writes; routes load the three lists and
pass them in. A registration whose member or event is no longer in the
lists is ignored.

A missing registration and a 'pending' one mean the same thing.
"""

from collections import namedtuple
from datetime import datetime, timedelta

from kickoff.constants import STATUS_YES, STATUS_PENDING, LOCK_MINUTES
from kickoff.services.season import season_settings, get_item_key


AttendanceTotals = namedtuple('AttendanceTotals', ['members', 'guests', 'total'])

CellState = namedtuple('CellState', ['member', 'event', 'status', 'comment', 'guests', 'items',
                                     'locked', 'editable'])

EventSummary = namedtuple('EventSummary', ['event', 'totals', 'locked', 'bringers',
                                           'min_players', 'enough_players'])


# ============== LOCKING ==============

def is_event_locked(event, now: datetime = None) -> bool:
    """True from one hour before the event starts, including past events.

    Start is the event date combined with time_from as local wall-clock
    time. The boundary is inclusive: exactly 60 minutes before is locked.
    """
    if now is None:
        now = datetime.now()
    starts_at = datetime.combine(event.date, event.time_from)
    return now >= starts_at - timedelta(minutes=LOCK_MINUTES)


def can_edit_registration(actor, member, event, now: datetime = None) -> bool:
    """Whether actor may change member's answer for event.

    Members edit only their own row and only before the lock. Admins edit
    any row and are not bound by the lock. Inactive accounts edit nothing,
    and nobody edits an inactive member's row.
    """
    if actor is None or not actor.is_active or not member.is_active:
        return False
    if actor.is_admin:
        return True
    if actor.id != member.id:
        return False
    return not is_event_locked(event, now)


# ============== TOTALS ==============

def count_attendance(registrations, event_id) -> AttendanceTotals:
    """Members and guests coming to an event.

    Only 'yes' rows count. Guests stored on 'no' or 'pending' rows are
    ignored.
    """
    coming = [r for r in registrations if r.event_id == event_id and r.status == STATUS_YES]
    members = len(coming)
    guests = sum(r.guests or 0 for r in coming)
    return AttendanceTotals(members=members, guests=guests, total=members + guests)


# ============== ITEMS ==============

def bringers_of(registrations, members, event_id, item_key: str) -> list:
    """Nicknames of members bringing an item, sorted by nickname.

    An empty list means nobody; the template decides what to show.
    """
    members_by_id = {m.id: m for m in members}
    names = []
    for registration in registrations:
        if registration.event_id != event_id or registration.status != STATUS_YES:
            continue
        if not (registration.items or {}).get(item_key):
            continue
        member = members_by_id.get(registration.member_id)
        if member is None:
            continue
        names.append(member.nickname)
    return sorted(names, key=str.lower)


# ============== GRID ==============

def registration_lookup(registrations) -> dict:
    """Index registrations by (member_id, event_id)."""
    return {(r.member_id, r.event_id): r for r in registrations}


def cell_state(lookup, member, event, actor, now: datetime = None) -> CellState:
    registration = lookup.get((member.id, event.id))
    locked = is_event_locked(event, now)
    editable = can_edit_registration(actor, member, event, now)
    if registration is None:
        return CellState(member=member, event=event, status=STATUS_PENDING, comment='', guests=0,
                         items={}, locked=locked, editable=editable)
    return CellState(
        member=member,
        event=event,
        status=registration.status or STATUS_PENDING,
        comment=registration.comment or '',
        guests=registration.guests or 0,
        items=dict(registration.items or {}),
        locked=locked,
        editable=editable,
    )


def summarize_event(event, registrations, members, season: str, now: datetime = None) -> EventSummary:
    """Totals, lock state and bringers for one event column."""
    known = {m.id for m in members}
    relevant = [r for r in registrations if r.event_id == event.id and r.member_id in known]
    settings = season_settings(season)

    totals = count_attendance(relevant, event.id)
    bringers = [
        (label, bringers_of(relevant, members, event.id, get_item_key(label)))
        for label in settings.items
    ]
    return EventSummary(
        event=event,
        totals=totals,
        locked=is_event_locked(event, now),
        bringers=bringers,
        min_players=settings.min_players,
        enough_players=totals.total >= settings.min_players,
    )


def build_grid(members, events, registrations, actor, now: datetime = None):
    """Rows of cell states, one row per active member sorted by nickname.

    Returns (roster, rows) where rows[i] holds the cells of roster[i] in
    event order.
    """
    event_ids = {e.id for e in events}
    lookup = registration_lookup(r for r in registrations if r.event_id in event_ids)

    roster = sorted((m for m in members if m.is_active), key=lambda m: m.nickname.lower())
    rows = [
        [cell_state(lookup, member, event, actor, now) for event in events]
        for member in roster
    ]
    return roster, rows
