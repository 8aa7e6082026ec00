#!/usr/bin/env python3
"""
Print an ADMIN_PASSWORD_HASH line for the demo account.
Usage: python scripts/hash_password.py [password]

Without an argument the password is prompted for twice.
"""

import getpass
import sys

from app.auth import hash_password, verify_password


def read_password(argv) -> str:
    if len(argv) == 2:
        return argv[1]
    if len(argv) > 2:
        print("Usage: python scripts/hash_password.py [password]")
        sys.exit(1)

    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        print("Passwords do not match")
        sys.exit(1)
    return password


def main():
    password = read_password(sys.argv)
    if not password:
        print("Password must not be empty")
        sys.exit(1)

    hashed = hash_password(password)
    if not verify_password(password, hashed):
        print("Generated hash failed verification")
        sys.exit(2)

    print(f"ADMIN_PASSWORD_HASH={hashed}")


if __name__ == "__main__":
    main()
