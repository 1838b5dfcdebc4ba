import os

APP_TITLE = "Dog Treat Focus"
APPDATA_DIR = os.path.join(os.getenv("APPDATA") or os.path.expanduser("~"), "TreatFocus")

SETTINGS_FILE = os.path.join(APPDATA_DIR, "settings.json")

LOG_DIR = os.path.join(APPDATA_DIR, "logs")
LOG_FILE = os.path.join(LOG_DIR, "treat_focus.log")

TICK_INTERVAL_MS = 1000

# Persisted keys
KEY_DURATION = "dtf_duration"
KEY_STRICT = "dtf_strict"
KEY_TREATS_PER_SUCCESS = "dtf_treatsPerSuccess"
KEY_PLEDGE_RATE_CENTS = "dtf_pledgeRateCents"
KEY_SHELTER = "dtf_shelter"
KEY_TREATS = "dtf_treats"
KEY_DONATED_CENTS = "dtf_donatedCents"
KEY_HISTORY = "dtf_history"

# Defaults
DEFAULT_DURATION_SEC = 25 * 60
DEFAULT_STRICT_MODE = True
DEFAULT_TREATS_PER_SUCCESS = 5
DEFAULT_PLEDGE_RATE_CENTS = 2
SHELTER_URL_PLACEHOLDER = "https://"
DEFAULT_SHELTER = {"name": "Local Dog Shelter", "url": SHELTER_URL_PLACEHOLDER}

# Settings input ranges
MIN_DURATION_MIN = 1
MAX_DURATION_MIN = 180
MAX_TREATS_PER_SUCCESS = 100
MAX_PLEDGE_RATE_CENTS = 1000

# Messages
MSG_FAILED = "Failed"
MSG_STOPPED_EARLY = "Stopped early"
MSG_LEFT_TAB = "Left tab — tree died."
