"""SQL storage for the ledger (SQLAlchemy).

Notes
- We avoid logging connection URLs to prevent accidental secret leakage.
- PostgreSQL is the intended backend; SQLite works for tests and local use.
"""

from .config import SqlStoreConfig
from .stores import SqlLedgerStore
