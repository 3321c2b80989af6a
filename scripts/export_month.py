"""
Script to export one month of an account's work log as CSV.

Usage: python export_month.py <account id or name> <YYYY-MM> [output.csv]
"""

import sys
import asyncio
import datetime
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.services.session import WorkLogSession


async def main():
    if len(sys.argv) < 3:
        print("Usage: python export_month.py <account> <YYYY-MM> [output.csv]")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    account_ref, period = sys.argv[1], sys.argv[2]
    try:
        year, month = map(int, period.split('-'))
        month_date = datetime.date(year, month, 1)
    except ValueError:
        print(f"Error: period '{period}' is not in YYYY-MM format.")
        sys.exit(1)

    session = WorkLogSession.from_settings()
    await session.open()

    account = next((a for a in session.registry.accounts
                    if a.id == account_ref or a.name == account_ref), None)
    if account is None:
        print(f"Error: account '{account_ref}' not found.")
        await session.close()
        sys.exit(1)

    await session.switch_account(account.id)
    file_name, content = session.export_csv(month_date)

    output_file = Path(sys.argv[3]) if len(sys.argv) > 3 else Path.cwd() / file_name
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_bytes(content)

    summary = session.monthly_summary(month_date)
    print(f"{account.name} {period}: {summary.total_hours:.2f}h on {summary.active_days} days "
          f"({summary.office_days} in office)")
    print(f"Report successfully saved to: {output_file.absolute()}")

    await session.close()


if __name__ == "__main__":
    asyncio.run(main())
