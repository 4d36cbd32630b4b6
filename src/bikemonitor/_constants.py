"""Internal constants shared across the library."""

FEED_URL = "http://fiets.openov.nl/locaties.json"
USER_AGENT = "bikemonitor/1.0"

DEFAULT_STATION_CODE = "ASD002"  # Amsterdam Centraal Oost
DEFAULT_THRESHOLD = 20
DEFAULT_STATE_FILE = "notification_state.json"
DEFAULT_TIME_ZONE = "Europe/Amsterdam"
DEFAULT_REQUEST_TIMEOUT = 30.0

# ------------------------------------------------------------------
# Slack attachment presentation
# ------------------------------------------------------------------

ALERT_TITLE = "🚲 OV-fiets Availability Alert"
ALERT_FOOTER = "Bike Monitor"
TEST_TITLE = "🧪 Test Notification"
TEST_FOOTER = "Bike Monitor Test"

COLOR_DEFAULT = "#ff9500"
COLOR_LOW = "#ff0000"
COLOR_RECOVERY = "#00ff00"
COLOR_ERROR = "#ff0000"

# Human readable local time, e.g. "Monday, 10/19/2026, 08:45"
DISPLAY_TIME_FORMAT = "%A, %m/%d/%Y, %H:%M"
