"""
Standalone database initialization script.
Usage: python scripts/init_db.py [--db-path PATH]
"""
import argparse
import asyncio
import logging

from core_svc.database import init_db

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(db_path: str):
    db = await init_db(db_path)
    logger.info("Database initialized at %s", db_path)
    await db.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--db-path", default="./memorylane.db")
    args = parser.parse_args()
    asyncio.run(main(args.db_path))
