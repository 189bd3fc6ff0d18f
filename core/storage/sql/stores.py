from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from core.persistence.interfaces import LedgerStore
from core.storage.sql.config import SqlStoreConfig
from core.types import LedgerChangeSet, LedgerSnapshot, MarketParameters, Offer
from db.models.ledger import (
    CONFIG_ROW_ID,
    Base,
    CurrencyBalanceRow,
    MarketConfigRow,
    SkillBalanceRow,
    SkillOfferRow,
)

logger = logging.getLogger(__name__)


class SqlLedgerStore(LedgerStore):
    """SQLAlchemy-backed ledger persistence.

    One database transaction per committed ledger call; map entries are
    upserted with ``Session.merge``.
    """

    def __init__(self, *, config: SqlStoreConfig, engine: Optional[Engine] = None) -> None:
        self._config = config
        self._engine: Engine | None = engine
        self._sessions: sessionmaker[Session] | None = None

    def _get_engine(self) -> Engine:
        if self._engine is None:
            # Do not log the URL (it may contain secrets).
            self._engine = create_engine(self._config.database_url, echo=self._config.echo, pool_pre_ping=True)
        return self._engine

    def _session_factory(self) -> sessionmaker[Session]:
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self._get_engine(), expire_on_commit=False)
        return self._sessions

    def create_schema(self) -> None:
        """Create ledger tables if they do not exist."""
        Base.metadata.create_all(self._get_engine())

    def load_state(self) -> Optional[LedgerSnapshot]:
        with self._session_factory()() as session:
            config_row = session.get(MarketConfigRow, CONFIG_ROW_ID)
            if config_row is None:
                return None

            skill_balances = {row.participant: int(row.balance) for row in session.scalars(select(SkillBalanceRow))}
            currency_balances = {
                row.participant: int(row.balance) for row in session.scalars(select(CurrencyBalanceRow))
            }
            offers = {
                row.participant: Offer(hours_offered=int(row.hours_offered), price_per_hour=int(row.price_per_hour))
                for row in session.scalars(select(SkillOfferRow))
            }

            snapshot = LedgerSnapshot(
                administrator=config_row.administrator,
                parameters=MarketParameters(
                    skill_rate=int(config_row.skill_rate),
                    service_fee_percent=int(config_row.service_fee_percent),
                    max_skills_per_user=int(config_row.max_skills_per_user),
                    reserve_limit=int(config_row.reserve_limit),
                ),
                total_skill_reserve=int(config_row.total_skill_reserve),
                skill_balances=skill_balances,
                currency_balances=currency_balances,
                offers=offers,
            )

        logger.info(
            f"Loaded ledger state: {len(skill_balances)} skill balances, "
            f"{len(currency_balances)} currency balances, {len(offers)} offers"
        )
        return snapshot

    def initialize(self, snapshot: LedgerSnapshot) -> None:
        with self._session_factory().begin() as session:
            session.merge(
                MarketConfigRow(
                    id=CONFIG_ROW_ID,
                    administrator=snapshot.administrator,
                    total_skill_reserve=snapshot.total_skill_reserve,
                    **_parameter_columns(snapshot.parameters),
                )
            )
            _merge_maps(
                session,
                skill_balances=snapshot.skill_balances,
                currency_balances=snapshot.currency_balances,
                offers=snapshot.offers,
            )

    def apply_changes(self, changes: LedgerChangeSet) -> None:
        with self._session_factory().begin() as session:
            if changes.parameters is not None or changes.total_skill_reserve is not None:
                config_row = session.get(MarketConfigRow, CONFIG_ROW_ID)
                if config_row is None:
                    raise RuntimeError("Ledger store is not initialized")
                if changes.parameters is not None:
                    for column, value in _parameter_columns(changes.parameters).items():
                        setattr(config_row, column, value)
                if changes.total_skill_reserve is not None:
                    config_row.total_skill_reserve = changes.total_skill_reserve

            _merge_maps(
                session,
                skill_balances=changes.skill_balances,
                currency_balances=changes.currency_balances,
                offers=changes.offers,
            )


def _parameter_columns(parameters: MarketParameters) -> dict[str, Any]:
    return {
        "skill_rate": parameters.skill_rate,
        "service_fee_percent": parameters.service_fee_percent,
        "max_skills_per_user": parameters.max_skills_per_user,
        "reserve_limit": parameters.reserve_limit,
    }


def _merge_maps(session: Session, *, skill_balances, currency_balances, offers) -> None:
    for participant, balance in skill_balances.items():
        session.merge(SkillBalanceRow(participant=participant, balance=balance))
    for participant, balance in currency_balances.items():
        session.merge(CurrencyBalanceRow(participant=participant, balance=balance))
    for participant, offer in offers.items():
        session.merge(
            SkillOfferRow(
                participant=participant,
                hours_offered=offer.hours_offered,
                price_per_hour=offer.price_per_hour,
            )
        )
