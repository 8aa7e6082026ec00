#!/usr/bin/env python3
"""
Decode a session cookie value with the configured SESSION_SECRET.
Usage: python scripts/inspect_token.py <token>
"""

import sys
from datetime import datetime, timezone

from app.auth import SessionCodec, SigningContext
from app.auth.session import now_ms
from app.config import settings


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/inspect_token.py <token>")
        sys.exit(1)

    codec = SessionCodec(SigningContext.from_settings(settings))
    payload = codec.decode(sys.argv[1])

    if payload is None:
        print("Invalid token (malformed, wrong secret, or tampered)")
        sys.exit(2)

    remaining = payload.remaining_ms(now_ms()) / 1000
    expires_at = datetime.fromtimestamp(payload.expires / 1000, tz=timezone.utc)

    print("Signature:  valid")
    print(f"Schema:     v{payload.v}")
    print(f"User:       {payload.user.name if payload.user else '(anonymous)'}")
    print(f"Expires:    {expires_at.isoformat()}")
    if remaining > 0:
        print(f"Remaining:  {remaining:.0f}s")
    else:
        print(f"Expired:    {-remaining:.0f}s ago")


if __name__ == "__main__":
    main()
