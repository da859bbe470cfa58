from datetime import date, time, timedelta

import pytest

from kickoff import create_app, db
from kickoff.models import Member, Event
from kickoff.services.credentials import hash_password


PASSWORD = 'secret123'


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv('BREVO_API_KEY', raising=False)
    monkeypatch.delenv('RAILWAY_ENVIRONMENT', raising=False)
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_member(app):
    def _make(nickname, email=None, is_admin=False, is_active=True, must_change_password=False):
        member = Member(
            nickname=nickname,
            email=email or f'{nickname.lower()}@example.com',
            password_hash=hash_password(PASSWORD),
            is_admin=is_admin,
            is_active=is_active,
            must_change_password=must_change_password,
        )
        db.session.add(member)
        db.session.commit()
        return member
    return _make


@pytest.fixture
def make_event(app):
    def _make(days_ahead=7, time_from=time(18, 0), time_to=time(20, 0), location='Sportplatz'):
        event = Event(
            date=date.today() + timedelta(days=days_ahead),
            time_from=time_from,
            time_to=time_to,
            location=location,
        )
        db.session.add(event)
        db.session.commit()
        return event
    return _make


@pytest.fixture
def login(client):
    def _login(member, password=PASSWORD, next_url=None):
        query = {'next': next_url} if next_url else None
        return client.post('/auth/login', query_string=query,
                           data={'email': member.email, 'password': password})
    return _login
