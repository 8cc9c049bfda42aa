"""Register a user from the command line (same rules as POST /auth/register)."""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pydantic import ValidationError

from src.database import async_session_maker, close_db, init_db
from src.kernel.errors import AppError
from src.kernel.identity.auth_service import AuthService
from src.schemas.auth import RegisterRequest


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("email", help="Unique email address for login")
    parser.add_argument("first_name", help="First name (at least 2 characters)")
    parser.add_argument("last_name", help="Last name (at least 2 characters)")
    return parser.parse_args()


def prompt_for_password() -> str:
    for _ in range(3):
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match. Try again.", file=sys.stderr)
            continue
        return password
    raise SystemExit("Failed to set password after three attempts.")


async def create_user(data: RegisterRequest) -> int:
    await init_db()
    try:
        async with async_session_maker() as session:
            try:
                user = await AuthService(session).register(
                    email=data.email,
                    password=data.password,
                    first_name=data.first_name,
                    last_name=data.last_name,
                )
                await session.commit()
            except AppError as exc:
                await session.rollback()
                print(f"Error: {exc.message}", file=sys.stderr)
                return 1
    finally:
        await close_db()

    print(f"Created user {user.id}: {user.first_name} {user.last_name} <{user.email}>")
    return 0


def main() -> int:
    args = parse_args()
    password = prompt_for_password()

    try:
        data = RegisterRequest(
            email=args.email,
            password=password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(p) for p in error["loc"])
            print(f"Error: {field}: {error['msg']}", file=sys.stderr)
        return 1

    return asyncio.run(create_user(data))


if __name__ == "__main__":
    raise SystemExit(main())
