# tests/fakes.py
import asyncio

from seeding.models import OpenPositionResult, PositionState


def make_state(owner: str) -> PositionState:
    return PositionState(
        owner=owner, lender="0xlender", heldToken="0xheld", owedToken="0xowed",
        principal=100, interestRate=6, requiredDeposit=10, callTimeLimit=1,
        startTimestamp=1, callTimestamp=0, maxDuration=10, interestPeriod=1,
    )


class FakeMargin:
    """
    Records reads. With `barrier` set, every read blocks until `barrier` reads
    have started, so a run that serializes reads never finishes.
    `fail_balance_for` makes the balance read of that position id raise;
    `state_as_dict` returns plain mappings instead of `PositionState`.
    """
    def __init__(self, events, barrier=None, fail_balance_for=None, state_as_dict=False):
        self.events = events
        self.barrier = barrier
        self.fail_balance_for = fail_balance_for
        self.state_as_dict = state_as_dict
        self.started = 0
        self._all_in = asyncio.Event()

    async def _enter(self):
        self.started += 1
        if self.barrier is None:
            await asyncio.sleep(0)
            return
        if self.started >= self.barrier:
            self._all_in.set()
        await self._all_in.wait()

    async def get_position(self, position_id):
        self.events.append(("get_position", position_id))
        await self._enter()
        if self.state_as_dict:
            return {"owner": f"owner-of-{position_id}", "principal": "100"}
        return make_state(owner=f"owner-of-{position_id}")

    async def get_position_balance(self, position_id):
        self.events.append(("get_balance", position_id))
        await self._enter()
        if position_id == self.fail_balance_for:
            raise RuntimeError(f"balance read of {position_id} reverted")
        return int(position_id.split("-")[1]) * 1000


class FakeToolkit:
    def __init__(self, *, fail_on_call=None, fail_order=None, barrier=None, buy_delay=0.0, sell_delay=0.0,
                 fail_balance_for=None, state_as_dict=False):
        self.events = []
        self.opens = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.fail_on_call = fail_on_call
        self.fail_order = fail_order
        self.buy_delay = buy_delay
        self.sell_delay = sell_delay
        self._margin = FakeMargin(self.events, barrier=barrier,
                                  fail_balance_for=fail_balance_for, state_as_dict=state_as_dict)

    async def _tracked_open(self, kind, salt, nonce, trader):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0.001)
            self.opens.append((kind, salt, nonce, trader))
            self.events.append((kind, nonce))
            if self.fail_on_call == len(self.opens):
                raise RuntimeError(f"open #{len(self.opens)} reverted")
            return OpenPositionResult(id=f"pos-{len(self.opens)}")
        finally:
            self.in_flight -= 1

    async def open_position(self, accounts, *, salt, nonce):
        return await self._tracked_open("open", salt, nonce, None)

    async def create_short_token(self, accounts, *, nonce, trader):
        return await self._tracked_open("short", None, nonce, trader)

    async def margin(self):
        self.events.append(("margin", None))
        return self._margin

    async def _order(self, side, delay):
        await asyncio.sleep(delay)
        self.events.append((side, None))
        if self.fail_order == side:
            raise RuntimeError(f"{side} order rejected")
        return {"side": side}

    async def create_buy_order_for_token(self, accounts):
        return await self._order("buy", self.buy_delay)

    async def create_sell_order_for_token(self, accounts):
        return await self._order("sell", self.sell_delay)
