"""Storage implementations.

Concrete implementations of the persistence interfaces, kept separate from
the ledger core.
"""

from .memory import InMemoryLedgerStore
from .sql import SqlLedgerStore, SqlStoreConfig
