#!/usr/bin/env python3
"""Initialize the ledger database schema.

Creates the ledger tables (see db/models/ledger.py) in the database pointed
to by DATABASE_URL, and writes the initial configuration row from the
SKILLMARKET_* settings when the store is empty.

Usage:
  python -m db.init_db

Requirements:
  - DATABASE_URL must be set
  - SKILLMARKET_ADMIN must be set
"""

from __future__ import annotations

import logging
import os

from core.ledger.settings import MarketSettings
from core.ledger.state import LedgerState
from core.storage.sql import SqlLedgerStore, SqlStoreConfig

logger = logging.getLogger(__name__)


def init_db(database_url: str, settings: MarketSettings) -> SqlLedgerStore:
    """Create the schema and seed the configuration row if missing."""
    store = SqlLedgerStore(config=SqlStoreConfig(database_url=database_url))
    store.create_schema()

    if store.load_state() is None:
        state = LedgerState(administrator=settings.administrator, parameters=settings.parameters())
        store.initialize(state.snapshot())
        logger.info("Ledger configuration row created")
    else:
        logger.info("Ledger already initialized, schema verified")

    return store


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        raise SystemExit("DATABASE_URL is not set")

    try:
        settings = MarketSettings.from_env()
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    init_db(database_url, settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
