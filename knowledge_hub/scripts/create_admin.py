"""Создание первого администратора.

    knowledge-hub-create-admin --email admin@example.com --name Admin

Пароль запрашивается интерактивно. Если пользователь уже существует,
он получает роль администратора.
"""

import argparse
import asyncio
import getpass

from knowledge_hub.core.db import SessionLocal, engine
from knowledge_hub.db.repositories import UserRepository
from knowledge_hub.domains.identity.services import IdentityService


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote a Knowledge Hub administrator")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--password", help="prompted when omitted")
    return parser.parse_args(argv)


async def create_admin(name: str, email: str, password: str) -> None:
    async with SessionLocal() as session:
        user = await IdentityService(UserRepository(session)).ensure_admin(name, email, password)
    await engine.dispose()
    print(f"Administrator ready: {user.email} ({user.id})")


def main(argv=None) -> None:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    asyncio.run(create_admin(args.name, args.email, password))


if __name__ == "__main__":
    main()
