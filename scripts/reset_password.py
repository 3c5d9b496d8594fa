"""Reset a teacher's password from the command line.

Usage: python scripts/reset_password.py teacher@example.com new-password
"""
from __future__ import annotations

import argparse
import importlib
import sys

from dotenv import load_dotenv

from classroom_attendance.container import build_container
from classroom_attendance.core.exceptions import DomainError
from classroom_attendance.settings import get_settings_module


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Reset a teacher's password")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    try:
        container.auth_service.reset_password(email=args.email, new_password=args.password)
    except DomainError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"OK: password updated for {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
