"""Seed script — populates the database with sample users for testing."""

import asyncio

from users_api.config import settings
from users_api.database.engine import Database
from users_api.models.user import User
from users_api.services.state_lookup import StateLookupService

SAMPLE_USERS = [
    {
        "email": "alice@example.com",
        "address": "1 Market Street",
        "city": "San Francisco",
        "state": "California",
        "zip": "94105",
        "billing_name": "Alice Johnson",
        "billing_address": "1 Market Street",
        "billing_city": "San Francisco",
        "billing_state": "California",
        "billing_zip": "94105",
        "work_phone": "+1(415) 555-0101",
        "home_phone": "415-555-0102",
        "mobile_phone": "+1 415 555 0103",
    },
    {
        "email": "bob@example.com",
        "address": "2 Congress Avenue",
        "city": "Austin",
        "state": "Texas",
        "zip": "78701",
        "billing_name": "Bob Smith",
        "billing_address": "PO Box 2210",
        "billing_city": "Austin",
        "billing_state": "Texas",
        "billing_zip": "78701",
        "work_phone": "+1(512) 555-0201",
        "home_phone": "512-555-0202",
        "mobile_phone": "+1 512 555 0203",
    },
    {
        "email": "carol@example.com",
        "address": "3 Mission Street",
        "city": "Los Angeles",
        "state": "California",
        "zip": "90012",
        "billing_name": "Carol Davis",
        "billing_address": "3 Mission Street",
        "billing_city": "Los Angeles",
        "billing_state": "California",
        "billing_zip": "90012",
        "work_phone": "+1(213) 555-0301",
        "home_phone": "213-555-0302",
        "mobile_phone": "+1 213 555 0303",
    },
]


async def seed() -> None:
    """Insert sample users (and their states) into the database."""
    database = Database(settings.database_url)
    await database.create_all()
    lookup = StateLookupService(database)
    for data in SAMPLE_USERS:
        await lookup.ensure(data["state"])
    async with database.session() as session:
        session.add_all(User(**data) for data in SAMPLE_USERS)
        await session.commit()
    await database.close()
    print(f"✅ Seeded {len(SAMPLE_USERS)} users into the database.")


if __name__ == "__main__":
    asyncio.run(seed())
