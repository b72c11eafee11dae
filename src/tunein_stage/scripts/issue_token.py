# src/tunein_stage/scripts/issue_token.py
"""Mint a bearer token for local development.

Stands in for the authentication provider: prints a JWT whose subject is the
given (or a freshly created) user id.
"""
from __future__ import annotations

import argparse
import sys
import uuid

from sqlalchemy.orm import Session

from tunein_stage.core.security import create_access_token
from tunein_stage.db.session import SessionLocal
from tunein_stage.models import User


def ensure_user(db: Session, user_id: uuid.UUID | None, email: str | None) -> User:
    """Return the user with ``user_id``, creating it when missing."""
    if user_id is not None:
        user = db.get(User, user_id)
        if user is not None:
            return user
    user = User(id=user_id or uuid.uuid4(), email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def main() -> None:
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument("--user-id", type=uuid.UUID, default=None, help="Existing or new user id")
    parser.add_argument("--email", default=None, help="E-mail recorded for a new user")
    parser.add_argument("--minutes", type=int, default=None, help="Token lifetime override")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        user = ensure_user(db, args.user_id, args.email)
        token = create_access_token(user.id, expires_minutes=args.minutes)
    except Exception as exc:
        print(f"[issue_token] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    print(f"user_id={user.id}")
    print(token)


if __name__ == "__main__":
    main()
