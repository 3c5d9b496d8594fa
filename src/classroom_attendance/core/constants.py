"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

TOKEN_COOKIE_NAME = "token"
DEFAULT_SESSION_DAYS = 7
TOKEN_ALGORITHM = "HS256"

MIN_GRADE = 1
MAX_GRADE = 6

MIN_PASSWORD_LENGTH = 6

NIS_PATTERN = r"^[0-9.]+$"

DB_MAX_RETRIES = 2
DB_RETRY_BASE_DELAY = 0.5

DEFAULT_CACHE_TTL_SECONDS = 300
RECENT_ATTENDANCE_LIMIT = 5

SHEET_TITLE_MAX_LENGTH = 31
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
