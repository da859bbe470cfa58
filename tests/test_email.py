from types import SimpleNamespace

from kickoff.models import EmailLog
from kickoff.services.email_service import EmailService


class FakeBrevo:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send_transac_email(self, send_smtp_email):
        if self.error:
            raise self.error
        self.sent.append(send_smtp_email)
        return SimpleNamespace(message_id='<msg-1@brevo>')


def configured_service(monkeypatch, api):
    monkeypatch.setenv('BREVO_API_KEY', 'test-key')
    service = EmailService()
    service._api_instance = api
    return service


def test_welcome_email_skipped_without_api_key(make_member):
    tom = make_member('Tom')

    result = EmailService().send_welcome_email(tom, 'Xy12345678ab')

    assert result['success'] is False
    log = EmailLog.query.one()
    assert log.status == 'skipped'
    assert log.member_id == tom.id


def test_welcome_email_contains_credentials(app, make_member, monkeypatch):
    app.config['APP_URL'] = 'https://kickoff.example'
    tom = make_member('Tom')
    api = FakeBrevo()

    result = configured_service(monkeypatch, api).send_welcome_email(tom, 'Xy12345678ab')

    assert result == {'success': True, 'message_id': '<msg-1@brevo>', 'error': None}
    html = api.sent[0].html_content
    assert 'Hallo Tom' in html
    assert 'Xy12345678ab' in html
    assert 'https://kickoff.example/auth/login' in html
    log = EmailLog.query.one()
    assert log.status == 'sent'
    assert log.brevo_message_id == '<msg-1@brevo>'


def test_welcome_email_failure_is_logged(make_member, monkeypatch):
    tom = make_member('Tom')
    api = FakeBrevo(error=RuntimeError('upstream down'))

    result = configured_service(monkeypatch, api).send_welcome_email(tom, 'Xy12345678ab')

    assert result['success'] is False
    assert result['error'] == 'upstream down'
    log = EmailLog.query.one()
    assert log.status == 'failed'
    assert log.error_message == 'upstream down'
