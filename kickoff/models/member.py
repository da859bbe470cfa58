from datetime import datetime
from kickoff import db


class Member(db.Model):
    """Club member with a login."""
    __tablename__ = 'members'

    id = db.Column(db.Integer, primary_key=True)
    nickname = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False, index=True)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    must_change_password = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    registrations = db.relationship('Registration', backref='member', lazy='dynamic')

    def __repr__(self):
        return f'<Member {self.nickname}>'

    @classmethod
    def get_by_email(cls, email: str):
        """Look up a member by login email (case-insensitive)."""
        if not email:
            return None
        return cls.query.filter_by(email=email.strip().lower()).first()

    @classmethod
    def list_all(cls):
        return cls.query.order_by(cls.nickname).all()

    @classmethod
    def roster(cls):
        """Active members in display order."""
        return cls.query.filter_by(is_active=True).order_by(cls.nickname).all()
