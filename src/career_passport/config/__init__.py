import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "career_passport.config.production"

    if env in {"test", "testing"}:
        return "career_passport.config.testing"

    return "career_passport.config.development"


def split_emails(raw: str) -> list[str]:
    """Comma separated env value -> list of lowercase emails."""
    return [e.strip().lower() for e in (raw or "").split(",") if e.strip()]
