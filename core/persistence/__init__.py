"""Persistence interfaces.

These protocols define the persistence boundary of the ledger. Implementations
can be backed by PostgreSQL (recommended), SQLite, or other stores.
"""

from .interfaces import LedgerStore
