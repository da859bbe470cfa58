"""
Rate limiting model for tracking request counts.

Used to slow down password guessing on the login form.
"""

from datetime import datetime, timedelta
from kickoff import db


class RateLimit(db.Model):
    """Track rate-limited actions by key (e.g., email address)."""
    __tablename__ = 'rate_limits'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(255), nullable=False, index=True)  # e.g., email
    action = db.Column(db.String(50), nullable=False, index=True)  # e.g., 'login_failed'
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    @classmethod
    def check_rate_limit(cls, key, action, max_requests, window_minutes):
        """
        Check if the key has exceeded the rate limit for the given action.

        Args:
            key: The identifier to rate limit (e.g., email address)
            action: The action being rate limited (e.g., 'login_failed')
            max_requests: Maximum number of requests allowed in the window
            window_minutes: Time window in minutes

        Returns:
            tuple: (is_allowed: bool, requests_remaining: int, retry_after_seconds: int or None)
        """
        window_start = datetime.utcnow() - timedelta(minutes=window_minutes)

        in_window = cls.query.filter(
            cls.key == key.lower(),
            cls.action == action,
            cls.timestamp >= window_start
        )
        request_count = in_window.count()

        if request_count >= max_requests:
            # Oldest request in the window decides when the next one is allowed
            oldest_in_window = in_window.order_by(cls.timestamp.asc()).first()

            if oldest_in_window:
                retry_after = (oldest_in_window.timestamp + timedelta(minutes=window_minutes) - datetime.utcnow()).total_seconds()
                retry_after = max(0, int(retry_after))
            else:
                retry_after = window_minutes * 60

            return (False, 0, retry_after)

        return (True, max_requests - request_count - 1, None)

    @classmethod
    def record_request(cls, key, action):
        """Record a request for rate limiting purposes."""
        record = cls(
            key=key.lower(),
            action=action,
            timestamp=datetime.utcnow()
        )
        db.session.add(record)
        db.session.commit()

    @classmethod
    def clear(cls, key, action):
        """Forget recorded requests, e.g. after a successful login."""
        cls.query.filter_by(key=key.lower(), action=action).delete()
        db.session.commit()
