"""Skill-hour marketplace ledger.

Configuration store, balance ledger, offer book, reserve accounting and the
exchange engine, behind the atomic ``SkillMarket`` facade.
"""

from .balances import BalanceLedger
from .config_store import ConfigurationStore
from .errors import LedgerError, LedgerErrorCode
from .exchange import ExchangeEngine
from .fees import ServiceFeeModel
from .market import SkillMarket
from .offers import OfferBook
from .reserve import ReserveAccountant
from .results import LedgerResult
from .settings import MarketSettings
from .state import LedgerState, StagedState

__all__ = [
    # Facade
    "SkillMarket",
    "MarketSettings",
    "LedgerResult",
    # Errors
    "LedgerError",
    "LedgerErrorCode",
    # Components
    "BalanceLedger",
    "ConfigurationStore",
    "ExchangeEngine",
    "OfferBook",
    "ReserveAccountant",
    "ServiceFeeModel",
    # State
    "LedgerState",
    "StagedState",
]
