"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

APP_NAME = "CareerPassport"

EARTH_RADIUS_M = 6371000.0
DEFAULT_CHECKIN_RADIUS_M = 100
LATE_GRACE_MINUTES = 15

LOCATION_HIGH_ACCURACY = True
LOCATION_TIMEOUT_MS = 5000

DEFAULT_START_TIME = "09:00"
DEFAULT_CAPACITY = 20
DEFAULT_INSTRUCTOR = "TBD"
DEFAULT_ENTRY_TAG = "learning-record"
MAX_ENTRY_IMAGE_BYTES = 2 * 1024 * 1024

DEFAULT_CATEGORIES = [
    "Self discovery",
    "Career experience",
    "Volunteering",
    "Skill building",
    "Technology",
    "Arts",
]

DEFAULT_LANDING_TITLE = "Explore your future,\nstarting here."
DEFAULT_LANDING_SUBTITLE = (
    "CareerPassport is a career-exploration record for young people. "
    "Collect your learning journey and discover what you can become."
)
DEFAULT_LANDING_IMAGE_URL = "https://images.unsplash.com/photo-1522202176988-66273c2fd55f?auto=format&fit=crop&w=1351&q=80"

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
COURSE_IMAGE_URL_TEMPLATE = "https://picsum.photos/seed/{seed}/800/600"

SCRIPT_URL_PREFIX = "https://script.google.com/"
SCRIPT_URL_SUFFIX = "/exec"
