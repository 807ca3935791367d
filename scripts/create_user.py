#!/usr/bin/env python
"""Create a login user with a given role."""

import asyncio
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from records_api.database import async_session_maker, engine
from records_api.exceptions import RecordsAPIError
from records_api.models.domain.user import UserRole
from records_api.services.auth_service import AuthService


async def create_user(email: str, password: str, role: UserRole) -> bool:
    """Create a user and report the outcome."""
    try:
        async with async_session_maker() as session:
            user = await AuthService(session).create_user(email, password, role)
    except RecordsAPIError as e:
        print(f"Could not create user: {e.message}")
        return False
    finally:
        await engine.dispose()

    print(f"User created: {user.email} ({user.role.value})")
    return True


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Create a login user")
    parser.add_argument("--email", required=True, help="Email address")
    parser.add_argument("--password", required=True, help="Password")
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.VIEWER.value,
        help="Access tier (default: VIEWER)",
    )
    args = parser.parse_args()

    ok = asyncio.run(create_user(args.email, args.password, UserRole(args.role)))
    sys.exit(0 if ok else 1)
