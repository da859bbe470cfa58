from datetime import datetime
from kickoff import db
from kickoff.constants import STATUSES, STATUS_PENDING
from kickoff.exceptions import ValidationError


class Registration(db.Model):
    """One member's answer for one event."""
    __tablename__ = 'registrations'

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey('members.id', ondelete='CASCADE'), nullable=False, index=True)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)  # yes, no, pending
    comment = db.Column(db.Text, nullable=True)
    guests = db.Column(db.Integer, nullable=False, default=0)
    items = db.Column(db.JSON, nullable=False, default=dict)  # item key -> bool
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Unique constraint: one registration per member per event
    __table_args__ = (
        db.UniqueConstraint('member_id', 'event_id', name='unique_registration'),
        db.CheckConstraint("status IN ('yes', 'no', 'pending')", name='valid_status'),
        db.CheckConstraint('guests >= 0', name='non_negative_guests'),
    )

    def __repr__(self):
        return f'<Registration member={self.member_id} event={self.event_id} status={self.status}>'

    @classmethod
    def list_all(cls):
        return cls.query.all()

    @classmethod
    def upsert(cls, member_id: int, event_id: int, status: str, comment: str = None,
               guests: int = 0, items: dict = None):
        """Create or fully overwrite the registration for (member, event)."""
        if status not in STATUSES:
            raise ValidationError(f'Unknown status: {status}')
        guests = guests or 0
        if guests < 0:
            raise ValidationError('Guests cannot be negative.')

        registration = cls.query.filter_by(member_id=member_id, event_id=event_id).first()
        if not registration:
            registration = cls(member_id=member_id, event_id=event_id)
            db.session.add(registration)

        registration.status = status
        registration.comment = comment or None
        registration.guests = guests
        # New dict so SQLAlchemy sees the JSON change
        registration.items = {key: bool(value) for key, value in (items or {}).items() if value}
        registration.updated_at = datetime.utcnow()

        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return registration
