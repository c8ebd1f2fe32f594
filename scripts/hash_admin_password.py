#!/usr/bin/env python3
"""Print a salted hash for ADMIN_PASSWORD_HASH.

Usage:
    python scripts/hash_admin_password.py            # prompts for the password
    python scripts/hash_admin_password.py --check    # also verifies against the configured admin

With ADMIN_PASSWORD_HASH set, the plain ADMIN_PASSWORD setting is ignored.
"""

import argparse
import getpass
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import get_settings
from app.security import hash_password, verify_admin_credentials


def main() -> int:
    parser = argparse.ArgumentParser(description="Hash the SpeedballHub admin password")
    parser.add_argument("--check", action="store_true", help="Verify the password against the current settings")
    args = parser.parse_args()

    password = getpass.getpass("Admin password: ")
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    if args.check:
        settings = get_settings()
        ok = verify_admin_credentials(settings.admin_email, password)
        print(f"Matches configured admin ({settings.admin_email}): {'yes' if ok else 'no'}")

    print(f"ADMIN_PASSWORD_HASH={hash_password(password)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
