"""Core domain modules.

- ledger: configuration, balances, offers, reserve and exchange logic
- persistence: persistence boundary (interfaces)
- storage: concrete persistence implementations (SQLAlchemy)
"""
