from . import split_emails

SECRET_KEY = "test-secret"

REMOTE_CONFIG = {
    "url": "https://script.google.com/macros/s/test-deployment/exec",
    "timeout": 5,
}

ADMIN_EMAIL = ""
ADMIN_PASSWORD_HASH = ""

AUTHORIZED_WORKER_EMAILS = split_emails("worker@example.org")

WORKSPACE_IDLE_TTL = 3600

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
