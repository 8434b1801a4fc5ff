"""Print a bearer token for a user id.

Usage:
    python create_token.py <user_id> [lifetime_seconds]
"""
import sys

from focus_timer_api.app.core.security import create_access_token

if len(sys.argv) < 2:
    sys.exit("usage: create_token.py <user_id> [lifetime_seconds]")
lifetime = int(sys.argv[2]) if len(sys.argv) > 2 else 365 * 24 * 60 * 60
print(create_access_token({"sub": sys.argv[1]}, expires_delta=lifetime))
