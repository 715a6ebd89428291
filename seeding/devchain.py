# seeding/devchain.py
"""
In-memory development ledger.

Stands in for a local chain with a deployed margin contract so seeding can run
without a node. Positions are really stored and ids follow the on-chain rule
(hash of opener and nonce), so reusing a nonce fails the same way it would on a
chain.
"""
import asyncio
import hashlib
import hmac
import json
import random
from typing import Dict, List, Optional, Sequence

from seeding.errors import PositionExistsError, UnknownPositionError
from seeding.models import OpenPositionResult, OrderRecord, PositionState
from utils.logger import logger
from utils.time import utc_s

NULL_ADDRESS = "0x" + "0" * 40

# loan terms used for every seeded position
PRINCIPAL = 10 ** 20
REQUIRED_DEPOSIT = 10 ** 19
INTEREST_RATE = 600
CALL_TIME_LIMIT = 10 * 86400
MAX_DURATION = 365 * 86400
INTEREST_PERIOD = 86400

ORDER_TTL_S = 86400
ORDER_TOKEN_AMOUNT = 10 ** 18
ORDER_PRICE = 2


def _sha3_hex(*parts) -> str:
    payload = ":".join(str(p) for p in parts).encode("utf-8")
    return "0x" + hashlib.sha3_256(payload).hexdigest()


def _address(label: str) -> str:
    return _sha3_hex("address", label)[:42]


def make_dev_accounts(n: int = 10) -> List[str]:
    """Deterministic account addresses for a local chain."""
    return [_address(f"dev-account-{i}") for i in range(n)]


def position_id(opener: str, nonce: int) -> str:
    return _sha3_hex(opener.lower(), nonce)


class DevMargin:
    """
    In-memory margin ledger keyed by position id.
    """

    def __init__(self, address: str) -> None:
        self.address = address
        self._positions: Dict[str, PositionState] = {}
        self._balances: Dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def open(self, pid: str, state: PositionState, balance: int) -> None:
        async with self._lock:
            if pid in self._positions:
                raise PositionExistsError(pid)
            self._positions[pid] = state
            self._balances[pid] = balance

    async def get_position(self, position_id: str) -> PositionState:
        async with self._lock:
            state = self._positions.get(position_id)
        if state is None:
            raise UnknownPositionError(position_id)
        return state

    async def get_position_balance(self, position_id: str) -> int:
        async with self._lock:
            balance = self._balances.get(position_id)
        if balance is None:
            raise UnknownPositionError(position_id)
        return balance


class DevChain:
    """
    Deployer plus position/order helpers backed by a `DevMargin`.

    Account roles: accounts[1] lends, accounts[2] opens plain positions,
    accounts[5]/accounts[6] make the buy/sell orders.
    """

    def __init__(self, accounts: Optional[Sequence[str]] = None, *, num_accounts: int = 10) -> None:
        self.accounts = list(accounts) if accounts else make_dev_accounts(num_accounts)
        self.held_token = _address("HeldToken")
        self.owed_token = _address("OwedToken")
        self.exchange = _address("Exchange")
        self.seed_token = _address("ERC20Short:seed")
        self._margin = DevMargin(_address("Margin"))
        self._short_tokens: List[str] = []
        self._tx_seq = 0

    @property
    def short_tokens(self) -> List[str]:
        return list(self._short_tokens)

    async def margin(self) -> DevMargin:
        return self._margin

    # ---- positions -----------------------------------------------------------------
    async def open_position(self, accounts: Sequence[str], *, salt: int, nonce: int) -> OpenPositionResult:
        lender, trader = accounts[1], accounts[2]
        return await self._open(opener=trader, owner=trader, lender=lender, nonce=nonce, salt=salt)

    async def create_short_token(self, accounts: Sequence[str], *, nonce: int, trader: str) -> OpenPositionResult:
        token = _address(f"ERC20Short:{trader.lower()}:{nonce}")
        res = await self._open(opener=trader, owner=token, lender=accounts[1], nonce=nonce, salt=None)
        self._short_tokens.append(token)
        logger.debug(f"[DevChain] short token {token} wraps position {res.id}")
        return res

    async def _open(self, *, opener: str, owner: str, lender: str, nonce: int, salt: Optional[int]) -> OpenPositionResult:
        pid = position_id(opener, nonce)
        state = PositionState(
            owner=owner,
            lender=lender,
            heldToken=self.held_token,
            owedToken=self.owed_token,
            principal=PRINCIPAL,
            interestRate=INTEREST_RATE,
            requiredDeposit=REQUIRED_DEPOSIT,
            callTimeLimit=CALL_TIME_LIMIT,
            startTimestamp=utc_s(),
            callTimestamp=0,
            maxDuration=MAX_DURATION,
            interestPeriod=INTEREST_PERIOD,
        )
        await self._margin.open(pid, state, REQUIRED_DEPOSIT + PRINCIPAL)
        self._tx_seq += 1
        return OpenPositionResult(id=pid, tx_hash=_sha3_hex("tx", opener, nonce, salt, self._tx_seq))

    # ---- orders --------------------------------------------------------------------
    async def create_buy_order_for_token(self, accounts: Sequence[str]) -> OrderRecord:
        # maker pays held token to receive seed-token shares
        return self._signed_order(
            maker=accounts[5],
            maker_token=self.held_token,
            taker_token=self.seed_token,
            maker_amount=ORDER_TOKEN_AMOUNT * ORDER_PRICE,
            taker_amount=ORDER_TOKEN_AMOUNT,
        )

    async def create_sell_order_for_token(self, accounts: Sequence[str]) -> OrderRecord:
        return self._signed_order(
            maker=accounts[6],
            maker_token=self.seed_token,
            taker_token=self.held_token,
            maker_amount=ORDER_TOKEN_AMOUNT,
            taker_amount=ORDER_TOKEN_AMOUNT * ORDER_PRICE,
        )

    def _signed_order(self, *, maker: str, maker_token: str, taker_token: str,
                      maker_amount: int, taker_amount: int) -> OrderRecord:
        order = OrderRecord(
            exchangeContractAddress=self.exchange,
            maker=maker,
            taker=NULL_ADDRESS,
            feeRecipient=NULL_ADDRESS,
            makerTokenAddress=maker_token,
            takerTokenAddress=taker_token,
            makerTokenAmount=maker_amount,
            takerTokenAmount=taker_amount,
            makerFee=0,
            takerFee=0,
            expirationUnixTimestampSec=utc_s() + ORDER_TTL_S,
            salt=random.getrandbits(64),
        )
        order.signature = sign_order(order)
        return order


def order_hash(order: OrderRecord) -> str:
    fields = order.to_dict()
    fields.pop("signature", None)
    return _sha3_hex(json.dumps(fields, sort_keys=True, separators=(",", ":")))


def sign_order(order: OrderRecord) -> str:
    """HMAC over the order hash keyed by the maker address."""
    digest = hmac.new(order.maker.lower().encode("utf-8"), order_hash(order).encode("utf-8"), hashlib.sha256)
    return "0x" + digest.hexdigest()
