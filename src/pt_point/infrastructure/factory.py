"""Build the configured store pair and the ledger that writes through it."""

from config.settings import settings
from src.pt_point.domain.repository import (
    BalanceStoreProtocol,
    HistoryStoreProtocol,
    PointLedgerProtocol,
)
from src.pt_point.infrastructure.ledger import StorePairLedger
from src.pt_point.infrastructure.memory import InMemoryBalanceStore, InMemoryHistoryStore
from src.pt_point.infrastructure.persistence import (
    BalanceRepository,
    HistoryRepository,
    PointLedgerRepository,
)


def build_point_stores(
    backend: str | None = None,
) -> tuple[BalanceStoreProtocol, HistoryStoreProtocol, PointLedgerProtocol]:
    backend = backend or settings.POINT_STORE_BACKEND
    if backend == "memory":
        latency = settings.POINT_STORE_LATENCY_SECONDS
        balances = InMemoryBalanceStore(latency)
        histories = InMemoryHistoryStore(latency)
        return balances, histories, StorePairLedger(balances, histories)
    if backend == "postgres":
        from src.pt_common.database import async_session_factory

        return (
            BalanceRepository(async_session_factory),
            HistoryRepository(async_session_factory),
            PointLedgerRepository(async_session_factory),
        )
    raise ValueError(f"Unknown point store backend: {backend!r}")
