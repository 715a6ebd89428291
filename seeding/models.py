# seeding/models.py
from dataclasses import dataclass, asdict, field
from typing import Optional, Dict, Any, List


def _uint(x) -> str:
    # big numbers are written as decimal strings so JS consumers keep precision
    return str(int(x))


def to_jsonable(obj: Any) -> Any:
    """Convert a record (or plain container of records) into JSON-ready values."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, dict):
        return {k: to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj


@dataclass
class SeedCounters:
    """
    Salt/nonce allocator owned by one position seeding run.
    Every `next_*` call hands out the current value and advances it by one.
    """
    salt: int
    nonce: int

    def next_salt(self) -> int:
        value = self.salt
        self.salt += 1
        return value

    def next_nonce(self) -> int:
        value = self.nonce
        self.nonce += 1
        return value


@dataclass
class OpenPositionResult:
    id: str                       # position id (0x-prefixed hex)
    tx_hash: Optional[str] = None


@dataclass
class PositionState:
    # --- parties & tokens ---
    owner: str
    lender: str
    heldToken: str
    owedToken: str

    # --- loan terms ---
    principal: int
    interestRate: int
    requiredDeposit: int
    callTimeLimit: int

    # --- timing ---
    startTimestamp: int
    callTimestamp: int
    maxDuration: int
    interestPeriod: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "lender": self.lender,
            "heldToken": self.heldToken,
            "owedToken": self.owedToken,
            "principal": _uint(self.principal),
            "interestRate": _uint(self.interestRate),
            "requiredDeposit": _uint(self.requiredDeposit),
            "callTimeLimit": _uint(self.callTimeLimit),
            "startTimestamp": _uint(self.startTimestamp),
            "callTimestamp": _uint(self.callTimestamp),
            "maxDuration": _uint(self.maxDuration),
            "interestPeriod": _uint(self.interestPeriod),
        }


@dataclass
class PositionRecord:
    """Read-back position state merged with the metadata tracked while seeding."""
    state: Any                    # read-back state: PositionState or a plain mapping
    id: str
    balance: int
    isTokenized: Optional[bool] = None
    positionOpener: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out = dict(to_jsonable(self.state))
        out["id"] = self.id
        out["balance"] = _uint(self.balance)
        if self.isTokenized:
            out["isTokenized"] = True
            out["positionOpener"] = self.positionOpener
        return out


@dataclass
class OrderRecord:
    exchangeContractAddress: str
    maker: str
    taker: str
    feeRecipient: str
    makerTokenAddress: str
    takerTokenAddress: str
    makerTokenAmount: int
    takerTokenAmount: int
    makerFee: int
    takerFee: int
    expirationUnixTimestampSec: int
    salt: int
    signature: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        for k in ("makerTokenAmount", "takerTokenAmount", "makerFee", "takerFee",
                  "expirationUnixTimestampSec", "salt"):
            out[k] = _uint(out[k])
        return out


@dataclass
class Fixture:
    positions: List[PositionRecord] = field(default_factory=list)
    orders: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positions": [to_jsonable(p) for p in self.positions],
            "orders": [to_jsonable(o) for o in self.orders],
        }
