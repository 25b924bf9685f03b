import argparse
from typing import List

from loguru import logger
from sqlalchemy import MetaData, Table, inspect

from config import ACCOUNTS_TABLE, TABLE_KEY
from database import SessionLocal, engine, init_db
from models import Account


def clear_accounts(db) -> int:
    """Delete every account in the current schema version's table."""
    deleted = db.query(Account).delete()
    db.commit()
    return deleted


def inert_tables(bind, key: str = TABLE_KEY) -> List[str]:
    """Account tables left behind by earlier schema versions."""
    prefix = f"{key}_users_"
    return sorted(
        name
        for name in inspect(bind).get_table_names()
        if name.startswith(prefix) and name[len(prefix):].isdigit() and name != ACCOUNTS_TABLE
    )


def drop_inert_tables(bind, key: str = TABLE_KEY) -> List[str]:
    """Drop the account tables of older schema versions and return their names."""
    dropped = inert_tables(bind, key)
    for name in dropped:
        Table(name, MetaData()).drop(bind)
    return dropped


def main() -> None:
    """
    Local/dev maintenance: clear registered accounts, or with
    --drop-inert remove tables of older schema versions.
    """
    parser = argparse.ArgumentParser(description="Skill Bridge account maintenance")
    parser.add_argument("--drop-inert", action="store_true", help="drop tables of older schema versions")
    args = parser.parse_args()

    if args.drop_inert:
        for name in drop_inert_tables(engine):
            logger.info("Dropped {}", name)
        return

    init_db()
    db = SessionLocal()
    try:
        deleted = clear_accounts(db)
        logger.info("Deleted {} accounts from {}", deleted, ACCOUNTS_TABLE)
    finally:
        db.close()


if __name__ == "__main__":
    main()
