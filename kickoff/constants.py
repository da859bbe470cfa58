"""Shared constants for attendance, seasons and credentials."""

# Registration status
STATUS_YES = 'yes'
STATUS_NO = 'no'
STATUS_PENDING = 'pending'
STATUSES = (STATUS_YES, STATUS_NO, STATUS_PENDING)

# Seasons
SUMMER = 'summer'
WINTER = 'winter'
SEASONS = (SUMMER, WINTER)
DEFAULT_SEASON = SUMMER
SEASON_SETTING_KEY = 'current_season'

# Edits close this many minutes before an event starts
LOCK_MINUTES = 60

# Guest counter limit in the edit form
MAX_GUESTS = 10

# Credentials
MIN_PASSWORD_LENGTH = 6
GENERATED_PASSWORD_LENGTH = 12

# Failed logins allowed per email address within the window
LOGIN_MAX_ATTEMPTS = 5
LOGIN_WINDOW_MINUTES = 15

# Weekdays as used by the recurring event form (0 = Sunday)
WEEKDAY_NAMES = ['So', 'Mo', 'Di', 'Mi', 'Do', 'Fr', 'Sa']

# Shown in the grid when nobody brings an item
NO_BRINGER_MARKER = '–'

DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'
