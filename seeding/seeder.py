# seeding/seeder.py
import asyncio
from typing import Any, List, Sequence, Tuple

from seeding.config import SeedSettings
from seeding.models import SeedCounters, OpenPositionResult, PositionRecord
from seeding.ports import Deployer, MarginPort, PositionOpener, OrderMaker
from utils.logger import logger

PLAIN_POSITIONS = 3
TOKENIZED_POSITIONS = 2


class PositionSeeder:
    """
    Opens the seed positions and reads their state back.

    Opens run strictly one after another: they share the salt/nonce counters and
    mutate the same ledger. Read-back starts only once every open has settled and
    then fans out per position, pairing state and balance with the open result
    they belong to.
    """

    def __init__(self, opener: PositionOpener, deployer: Deployer, settings: SeedSettings) -> None:
        self._opener = opener
        self._deployer = deployer
        self._settings = settings

    async def run(self, accounts: Sequence[str]) -> List[PositionRecord]:
        counters = SeedCounters(salt=self._settings.counters.salt, nonce=self._settings.counters.nonce)
        trader = accounts[self._settings.trader_index]

        opened = await self._open_all(accounts, counters, trader)

        margin = await self._deployer.margin()
        records = await asyncio.gather(
            *(self._read_back(margin, res, tokenized, trader) for res, tokenized in opened)
        )
        logger.info(f"[PositionSeeder] seeded {len(records)} positions "
                    f"({sum(1 for r in records if r.isTokenized)} tokenized)")
        return list(records)

    async def _open_all(self,
                        accounts: Sequence[str],
                        counters: SeedCounters,
                        trader: str) -> List[Tuple[OpenPositionResult, bool]]:
        opened: List[Tuple[OpenPositionResult, bool]] = []

        for _ in range(PLAIN_POSITIONS):
            salt, nonce = counters.next_salt(), counters.next_nonce()
            res = await self._opener.open_position(accounts, salt=salt, nonce=nonce)
            logger.debug(f"[PositionSeeder] opened position id={res.id} tx={res.tx_hash} salt={salt} nonce={nonce}")
            opened.append((res, False))

        for _ in range(TOKENIZED_POSITIONS):
            nonce = counters.next_nonce()
            res = await self._opener.create_short_token(accounts, nonce=nonce, trader=trader)
            logger.debug(f"[PositionSeeder] tokenized short id={res.id} tx={res.tx_hash} nonce={nonce} trader={trader}")
            opened.append((res, True))

        return opened

    @staticmethod
    async def _read_back(margin: MarginPort,
                         res: OpenPositionResult,
                         tokenized: bool,
                         trader: str) -> PositionRecord:
        state, balance = await asyncio.gather(
            margin.get_position(res.id),
            margin.get_position_balance(res.id),
        )
        record = PositionRecord(state=state, id=res.id, balance=balance)
        if tokenized:
            record.isTokenized = True
            record.positionOpener = trader
        return record


class OrderSeeder:
    """Creates one buy and one sell order for the seed token, concurrently."""

    def __init__(self, maker: OrderMaker) -> None:
        self._maker = maker

    async def run(self, accounts: Sequence[str]) -> List[Any]:
        buy, sell = await asyncio.gather(
            self._maker.create_buy_order_for_token(accounts),
            self._maker.create_sell_order_for_token(accounts),
        )
        logger.info("[OrderSeeder] seeded buy and sell orders")
        return [buy, sell]
