"""Print a werkzeug hash for ADMIN_PASSWORD_HASH.

Usage: python scripts/hash_password.py  (prompts for the password)
"""

from __future__ import annotations

from getpass import getpass

from werkzeug.security import generate_password_hash


def main() -> None:
    password = getpass("Admin password: ")
    if not password:
        raise SystemExit("Empty password")
    if password != getpass("Repeat: "):
        raise SystemExit("Passwords do not match")
    print(generate_password_hash(password))


if __name__ == "__main__":
    main()
