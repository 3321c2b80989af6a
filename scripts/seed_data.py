"""
Data Seeder for Work Log.
Populates the configured stores with realistic data for testing and demo purposes.
"""

import asyncio
import sys
import random
import logging
from datetime import date, timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.services.session import WorkLogSession

ACCOUNT_NAMES = ["Client A", "Internal Tools"]


async def seed(days: int = 60):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("Starting data seeding...")

    session = WorkLogSession.from_settings()
    await session.open()

    existing_names = {a.name for a in session.registry.accounts}
    for name in ACCOUNT_NAMES:
        if name not in existing_names:
            print(f"Creating account: {name}")
            await session.create_account(name)

    for account in list(session.registry.accounts):
        await session.switch_account(account.id)
        today = date.today()
        created = 0
        for offset in range(days):
            day = today - timedelta(days=offset)
            if day.weekday() > 4 or session.calendar.is_holiday(day):
                continue
            start_hour = random.choice([8, 9, 9, 10])
            end_hour = start_hour + random.choice([8, 9, 9, 10])
            session.save_log(
                day,
                f"{start_hour:02d}:{random.choice(['00', '15', '30'])}",
                f"{end_hour % 24:02d}:{random.choice(['00', '30', '45'])}",
                break_minutes=random.choice([45, 60, 60, 90]),
                is_office=random.random() < 0.4,
            )
            created += 1
        print(f"{account.name}: {created} entries")

    await session.close()
    print("Seeding complete.")


if __name__ == "__main__":
    asyncio.run(seed())
