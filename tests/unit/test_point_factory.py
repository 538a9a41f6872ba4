import pytest

from src.pt_point.application.locks import GlobalTransactionLock
from src.pt_point.application.service import PointApplicationService
from src.pt_point.infrastructure.factory import build_point_stores
from src.pt_point.infrastructure.ledger import StorePairLedger
from src.pt_point.infrastructure.memory import InMemoryBalanceStore, InMemoryHistoryStore


class TestBuildPointStores:
    def test_memory_backend(self) -> None:
        balances, histories, ledger = build_point_stores("memory")
        assert isinstance(balances, InMemoryBalanceStore)
        assert isinstance(histories, InMemoryHistoryStore)
        assert isinstance(ledger, StorePairLedger)
        assert ledger._balances is balances
        assert ledger._histories is histories

    def test_unknown_backend_raises(self) -> None:
        with pytest.raises(ValueError):
            build_point_stores("cassandra")


class TestServiceDefaults:
    async def test_defaults_from_settings(self) -> None:
        svc = PointApplicationService()

        assert svc.max_balance == 1_000_000
        assert isinstance(svc._lock, GlobalTransactionLock)
        assert isinstance(svc._ledger, StorePairLedger)
        assert (await svc.get_balance(1)).amount == 0

    async def test_injected_stores_get_a_ledger_over_them(self) -> None:
        balances = InMemoryBalanceStore()
        histories = InMemoryHistoryStore()

        svc = PointApplicationService(balance_store=balances, history_store=histories)

        assert svc._ledger._balances is balances
        assert svc._ledger._histories is histories
