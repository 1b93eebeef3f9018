"""Create test accounts and default booking data.

Run after database migration:

    python scripts/create_test_accounts.py

Seeds the initial admin, the default service catalog and availability
settings, then creates customer accounts with temporary passwords.
"""

import asyncio
import secrets

from sqlalchemy import select

from app.core.security import hash_password
from app.db.init_db import init_db
from app.db.session import AsyncSessionLocal
from app.models.user import User, UserRole

TEST_CUSTOMERS = [
    {
        "email": "customer1@test.booking.local",
        "name": "Test Customer One",
        "phone": "+1 555 010 0001",
    },
    {
        "email": "customer2@test.booking.local",
        "name": "Test Customer Two",
        "phone": "+1 555 010 0002",
    },
]


def generate_temp_password() -> str:
    """Generate a temporary password for test accounts."""
    return f"Test{secrets.token_urlsafe(8)}!"


async def create_customers_db() -> tuple[list[dict], list[str]]:
    """Create test customers in database."""
    async with AsyncSessionLocal() as session:
        created = []
        skipped = []

        for account in TEST_CUSTOMERS:
            existing = await session.scalar(
                select(User).where(User.email == account["email"])
            )
            if existing:
                skipped.append(account["email"])
                continue

            temp_password = generate_temp_password()
            session.add(
                User(
                    name=account["name"],
                    email=account["email"],
                    phone=account["phone"],
                    role=UserRole.CUSTOMER.value,
                    hashed_password=hash_password(temp_password),
                    is_active=True,
                )
            )
            created.append({"email": account["email"], "password": temp_password})

        await session.commit()
        return created, skipped


def print_accounts(created: list[dict], skipped: list[str]) -> None:
    """Print created accounts summary."""
    print("=" * 60)
    print("TEST CUSTOMERS")
    print("=" * 60)

    if created:
        print(f"{'Email':<40} {'Password':<20}")
        print("-" * 60)
        for acc in created:
            print(f"{acc['email']:<40} {acc['password']:<20}")
        print()
        print("Save these passwords - they are shown only once.")

    if skipped:
        print("SKIPPED (already exist):")
        for email in skipped:
            print(f"  - {email}")


async def main() -> None:
    print("Seeding admin, services and availability...")
    async with AsyncSessionLocal() as session:
        await init_db(session)

    created, skipped = await create_customers_db()
    print_accounts(created, skipped)


if __name__ == "__main__":
    asyncio.run(main())
