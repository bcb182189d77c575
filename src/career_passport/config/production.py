import os

from . import split_emails

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

REMOTE_CONFIG = {
    "url": os.getenv("SCRIPT_URL", ""),
    "timeout": float(os.getenv("SCRIPT_TIMEOUT")) if os.getenv("SCRIPT_TIMEOUT") else None,
}

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

AUTHORIZED_WORKER_EMAILS = split_emails(os.getenv("AUTHORIZED_WORKER_EMAILS", ""))

# Seconds before an untouched login workspace is dropped from memory.
WORKSPACE_IDLE_TTL = float(os.getenv("WORKSPACE_IDLE_TTL", "28800"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
