import os

from . import split_emails

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Google Apps Script web app ("/exec" URL) backing the sheet.
REMOTE_CONFIG = {
    "url": os.getenv("SCRIPT_URL", ""),
    "timeout": float(os.getenv("SCRIPT_TIMEOUT")) if os.getenv("SCRIPT_TIMEOUT") else None,
}

# Fail-safe administrator. Generate the hash with scripts/hash_password.py
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

AUTHORIZED_WORKER_EMAILS = split_emails(os.getenv("AUTHORIZED_WORKER_EMAILS", ""))

# Seconds before an untouched login workspace is dropped from memory.
WORKSPACE_IDLE_TTL = float(os.getenv("WORKSPACE_IDLE_TTL", "28800"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
