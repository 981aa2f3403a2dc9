"""Utility script to issue an API access token for a user."""

from __future__ import annotations

import argparse
from datetime import timedelta

from notification_center.infrastructure.security import create_user_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for token creation."""

    parser = argparse.ArgumentParser(
        description="Issue a bearer token for the notification center API.",
    )
    parser.add_argument(
        "user_id",
        help="Identifier of the user in the host user directory",
    )
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )
    return parser.parse_args()


def main() -> None:
    """Print a token for the requested user."""

    args = parse_args()
    if not args.user_id.strip():
        raise SystemExit("A non-empty user id is required.")

    expires_delta = None
    if args.expires_minutes is not None:
        if args.expires_minutes <= 0:
            raise SystemExit("--expires-minutes must be positive.")
        expires_delta = timedelta(minutes=args.expires_minutes)

    print(create_user_token(args.user_id.strip(), expires_delta=expires_delta))


if __name__ == "__main__":
    main()
