"""Tests for the SQLAlchemy ledger store (SQLite file database)."""

import pytest

from core.ledger import MarketSettings, SkillMarket
from core.storage import SqlLedgerStore, SqlStoreConfig
from core.types import UINT_MAX, LedgerChangeSet, Offer
from db.init_db import init_db

ADMIN = "admin"


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'ledger.db'}"


@pytest.fixture
def store(database_url: str) -> SqlLedgerStore:
    sql_store = SqlLedgerStore(config=SqlStoreConfig(database_url=database_url))
    sql_store.create_schema()
    return sql_store


class TestSqlLedgerStore:
    """Round-trips through the database."""

    def test_empty_store_loads_none(self, store: SqlLedgerStore) -> None:
        assert store.load_state() is None

    def test_apply_before_initialize_raises(self, store: SqlLedgerStore) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            store.apply_changes(LedgerChangeSet(total_skill_reserve=1))

    def test_market_state_survives_reload(self, store: SqlLedgerStore) -> None:
        settings = MarketSettings(administrator=ADMIN, service_fee_percent=10)
        SkillMarket.from_store(store, settings)
        assert store.load_state() is not None

        # Seed through the store: the ledger itself never mints
        store.apply_changes(LedgerChangeSet(skill_balances={"alice": 50}, currency_balances={"bob": 1000}))
        market = SkillMarket.from_store(store, settings)

        assert market.offer_skills(caller="alice", hours=50, rate=5).ok
        assert market.exchange_skills(caller="bob", provider="alice", hours=10).ok

        reloaded = SkillMarket.from_store(store, settings)
        assert reloaded.snapshot() == market.snapshot()
        assert reloaded.get_currency_balance("bob") == 945
        assert reloaded.get_currency_balance(ADMIN) == 5
        assert reloaded.get_skills_for_exchange("alice") == Offer(40, 5)
        assert reloaded.get_total_skill_reserve() == 50

    def test_parameters_persisted(self, store: SqlLedgerStore) -> None:
        settings = MarketSettings(administrator=ADMIN)
        market = SkillMarket.from_store(store, settings)

        assert market.set_skill_rate(caller=ADMIN, rate=20).ok
        assert market.set_reserve_limit(caller=ADMIN, limit=1000).ok

        snapshot = store.load_state()
        assert snapshot.parameters.skill_rate == 20
        assert snapshot.parameters.reserve_limit == 1000
        assert snapshot.administrator == ADMIN

    def test_rejected_call_writes_nothing(self, store: SqlLedgerStore) -> None:
        market = SkillMarket.from_store(store, MarketSettings(administrator=ADMIN))
        before = store.load_state()

        assert not market.set_skill_rate(caller="mallory", rate=20).ok
        assert store.load_state() == before

    def test_full_uint_range_round_trips(self, store: SqlLedgerStore, database_url: str) -> None:
        """Values above the 64-bit range are stored exactly."""
        settings = MarketSettings(administrator=ADMIN, reserve_limit=UINT_MAX)
        SkillMarket.from_store(store, settings)
        store.apply_changes(LedgerChangeSet(skill_balances={"alice": UINT_MAX}, currency_balances={"bob": UINT_MAX}))
        market = SkillMarket.from_store(store, settings)

        assert market.set_skill_rate(caller=ADMIN, rate=UINT_MAX).ok
        assert market.set_max_skills_per_user(caller=ADMIN, limit=2**64).ok
        assert market.offer_skills(caller="alice", hours=UINT_MAX, rate=UINT_MAX).ok
        assert market.set_reserve_limit(caller=ADMIN, limit=UINT_MAX).ok

        fresh_store = SqlLedgerStore(config=SqlStoreConfig(database_url=database_url))
        reloaded = SkillMarket.from_store(fresh_store, settings)

        assert reloaded.snapshot() == market.snapshot()
        assert reloaded.get_skill_rate() == UINT_MAX
        assert reloaded.get_max_skills_per_user() == 2**64
        assert reloaded.get_skill_reserve_limit() == UINT_MAX
        assert reloaded.get_total_skill_reserve() == UINT_MAX
        assert reloaded.get_skill_balance("alice") == UINT_MAX
        assert reloaded.get_currency_balance("bob") == UINT_MAX
        assert reloaded.get_skills_for_exchange("alice") == Offer(UINT_MAX, UINT_MAX)


class TestInitDb:
    """Tests for db.init_db."""

    def test_creates_config_row(self, database_url: str) -> None:
        store = init_db(database_url, MarketSettings(administrator=ADMIN, skill_rate=3))

        snapshot = store.load_state()
        assert snapshot.administrator == ADMIN
        assert snapshot.parameters.skill_rate == 3
        assert snapshot.total_skill_reserve == 0

    def test_is_idempotent(self, database_url: str) -> None:
        init_db(database_url, MarketSettings(administrator=ADMIN, skill_rate=3))
        store = init_db(database_url, MarketSettings(administrator="other", skill_rate=9))

        snapshot = store.load_state()
        assert snapshot.administrator == ADMIN
        assert snapshot.parameters.skill_rate == 3
