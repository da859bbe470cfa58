from datetime import datetime
from kickoff import db


class EmailLog(db.Model):
    """Track all sent emails."""
    __tablename__ = 'email_logs'

    id = db.Column(db.Integer, primary_key=True)
    email_type = db.Column(db.String(50), nullable=False)  # welcome
    recipient_email = db.Column(db.String(255), nullable=False)
    recipient_name = db.Column(db.String(100), nullable=True)
    subject = db.Column(db.String(255), nullable=False)

    # Member the email was about, if any
    member_id = db.Column(db.Integer, db.ForeignKey('members.id', ondelete='SET NULL'), nullable=True)

    # Brevo tracking
    brevo_message_id = db.Column(db.String(100), nullable=True)

    # Status tracking
    status = db.Column(db.String(20), default='pending')  # pending, sent, failed, skipped
    error_message = db.Column(db.Text, nullable=True)

    # Timestamps
    sent_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<EmailLog {self.email_type} to {self.recipient_email}>'
