"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3001/api/persons"
USER_AGENT = "phonedir/1.0"

#: Seconds a notification stays visible unless superseded.
NOTIFICATION_TIMEOUT: float = 5.0
#: Total seconds allowed for a single HTTP request.
REQUEST_TIMEOUT: float = 10.0
