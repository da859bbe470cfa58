from datetime import date as date_type, datetime
from kickoff import db


class Event(db.Model):
    """A scheduled training or match members register for."""
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Date, nullable=False, index=True)
    time_from = db.Column(db.Time, nullable=False)
    time_to = db.Column(db.Time, nullable=False)
    location = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    registrations = db.relationship('Registration', backref='event', lazy='dynamic',
                                    cascade='all, delete')

    @property
    def starts_at(self):
        """Start as a naive local datetime."""
        return datetime.combine(self.date, self.time_from)

    @property
    def label(self):
        return self.name or self.location

    def __repr__(self):
        return f'<Event {self.date} {self.time_from}>'

    @classmethod
    def list(cls, only_future=False, today=None):
        """Events ordered by start. With only_future, events from today on."""
        query = cls.query
        if only_future:
            query = query.filter(cls.date >= (today or date_type.today()))
        return query.order_by(cls.date, cls.time_from).all()
