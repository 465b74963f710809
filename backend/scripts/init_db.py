"""
Create the clinic tables on the configured database.
Run with: python -m scripts.init_db [--reset]

--reset drops every clinic table first. All rows are lost.
"""

import argparse
import asyncio
from clinic.config import get_settings
from clinic.database import engine, Base
import clinic.models  # noqa: F401


async def init_tables(reset: bool = False) -> list[str]:
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    return sorted(Base.metadata.tables)


def main():
    parser = argparse.ArgumentParser(description="Create clinic database tables")
    parser.add_argument("--reset", action="store_true", help="Drop existing tables first")
    args = parser.parse_args()

    print(f"Database: {get_settings().database_url}")
    if args.reset:
        print("Dropping existing tables...")
    for name in asyncio.run(init_tables(reset=args.reset)):
        print(f"  ready: {name}")
    print("Done.")


if __name__ == "__main__":
    main()
