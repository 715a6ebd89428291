# seeding/ports.py
from __future__ import annotations

from typing import Any, Protocol, Sequence

from seeding.models import OpenPositionResult, PositionState


# ========== Ledger handle: read-only queries against the deployed margin contract ==========
class MarginPort(Protocol):
    async def get_position(self, position_id: str) -> PositionState: ...
    async def get_position_balance(self, position_id: str) -> int: ...


# ========== Deploy driver: resolves deployed contract handles ==========
class Deployer(Protocol):
    async def margin(self) -> MarginPort: ...


# ========== Collaborators that mutate the ledger ==========
class PositionOpener(Protocol):
    async def open_position(self, accounts: Sequence[str], *, salt: int, nonce: int) -> OpenPositionResult: ...
    async def create_short_token(self, accounts: Sequence[str], *, nonce: int, trader: str) -> OpenPositionResult: ...


class OrderMaker(Protocol):
    async def create_buy_order_for_token(self, accounts: Sequence[str]) -> Any: ...
    async def create_sell_order_for_token(self, accounts: Sequence[str]) -> Any: ...


class SeedToolkit(PositionOpener, OrderMaker, Protocol):
    """Everything a seeding run calls besides the deployer."""
