# Import all models here so they're registered with SQLAlchemy
from kickoff.models.member import Member
from kickoff.models.event import Event
from kickoff.models.registration import Registration
from kickoff.models.setting import Setting
from kickoff.models.email_log import EmailLog
from kickoff.models.rate_limit import RateLimit

__all__ = ['Member', 'Event', 'Registration', 'Setting', 'EmailLog', 'RateLimit']
