"""Check that the configured script endpoint answers a login call.

Usage: python scripts/check_remote.py <email>  (prompts for the password)
"""

from __future__ import annotations

import importlib
import sys
from getpass import getpass

from dotenv import load_dotenv

from career_passport.config import get_settings_module
from career_passport.remote.connection import RemoteConfig, ScriptConnection
from career_passport.remote.envelope import login_payload


def main() -> None:
    load_dotenv(override=False)
    if len(sys.argv) < 2:
        raise SystemExit(__doc__)

    settings = importlib.import_module(get_settings_module())
    remote = dict(settings.REMOTE_CONFIG)
    conn = ScriptConnection(RemoteConfig(url=remote.get("url") or "", timeout=remote.get("timeout") or 15))

    res = conn.call(login_payload(sys.argv[1], getpass("Password: ")))
    if not res.ok:
        raise SystemExit(f"FAIL ({res.status}): {res.message}")

    data = res.data if isinstance(res.data, dict) else {}
    counts = ", ".join(f"{k}={len(v)}" for k, v in data.items() if isinstance(v, list))
    print(f"OK: {conn.url} -> {counts}")


if __name__ == "__main__":
    main()
