"""
Welcome emails via the Brevo API.

Every attempt is written to EmailLog. Without BREVO_API_KEY nothing is
sent and the log row is marked skipped.
"""

import os
from flask import current_app, render_template
import sib_api_v3_sdk

from kickoff import db
from kickoff.models import EmailLog

WELCOME_SUBJECT = 'Dein Zugang zur Anmeldeliste'


class EmailService:
    """Service for sending emails via Brevo."""

    def __init__(self):
        self._api_instance = None

    def is_configured(self) -> bool:
        return bool(os.environ.get('BREVO_API_KEY'))

    @property
    def api_instance(self):
        """Get or create Brevo API instance."""
        if self._api_instance is None:
            configuration = sib_api_v3_sdk.Configuration()
            configuration.api_key['api-key'] = os.environ['BREVO_API_KEY']
            self._api_instance = sib_api_v3_sdk.TransactionalEmailsApi(
                sib_api_v3_sdk.ApiClient(configuration)
            )
        return self._api_instance

    def send_welcome_email(self, member, password: str) -> dict:
        """
        Send a new member their login email and temporary password.

        Returns:
            dict with 'success', 'message_id', and 'error' keys
        """
        result = {'success': False, 'message_id': None, 'error': None}

        email_log = EmailLog(
            email_type='welcome',
            recipient_email=member.email,
            recipient_name=member.nickname,
            subject=WELCOME_SUBJECT,
            member_id=member.id,
            status='pending'
        )
        db.session.add(email_log)

        if not self.is_configured():
            email_log.status = 'skipped'
            email_log.error_message = 'BREVO_API_KEY not set'
            db.session.commit()
            result['error'] = 'Email not configured'
            current_app.logger.info(f"Welcome email to {member.email} skipped: Brevo not configured")
            return result

        app_url = current_app.config.get('APP_URL', 'http://localhost:5000')
        html_content = render_template('emails/welcome.html', params={
            'NICKNAME': member.nickname,
            'EMAIL': member.email,
            'PASSWORD': password,
            'LOGIN_URL': f"{app_url}/auth/login",
        })

        try:
            send_smtp_email = sib_api_v3_sdk.SendSmtpEmail(
                sender={"name": "Kickoff", "email": current_app.config['MAIL_SENDER']},
                to=[{"email": member.email, "name": member.nickname}],
                subject=WELCOME_SUBJECT,
                html_content=html_content
            )
            api_response = self.api_instance.send_transac_email(send_smtp_email)
        except Exception as e:
            # The member already exists; the admin hands the password over instead
            email_log.status = 'failed'
            email_log.error_message = str(e)
            db.session.commit()
            result['error'] = str(e)
            current_app.logger.error(f"Welcome email to {member.email} failed: {e}")
            return result

        email_log.brevo_message_id = api_response.message_id
        email_log.status = 'sent'
        db.session.commit()

        result['success'] = True
        result['message_id'] = api_response.message_id
        return result


# Global instance
email_service = EmailService()
