# tests/test_devchain.py
import dataclasses
import pytest

from seeding.devchain import DevChain, make_dev_accounts, position_id, order_hash, sign_order
from seeding.errors import PositionExistsError, UnknownPositionError


def test_dev_accounts_are_deterministic_addresses():
    a = make_dev_accounts(10)
    assert a == make_dev_accounts(10)
    assert len(set(a)) == 10
    assert all(x.startswith("0x") and len(x) == 42 for x in a)


@pytest.mark.asyncio
async def test_open_position_is_readable_with_balance():
    chain = DevChain()
    accounts = chain.accounts
    res = await chain.open_position(accounts, salt=1, nonce=7)
    margin = await chain.margin()

    state = await margin.get_position(res.id)
    assert res.id == position_id(accounts[2], 7)
    assert res.tx_hash.startswith("0x") and len(res.tx_hash) == 66
    assert state.owner == accounts[2]
    assert state.lender == accounts[1]
    assert await margin.get_position_balance(res.id) == state.requiredDeposit + state.principal


@pytest.mark.asyncio
async def test_reused_nonce_is_rejected():
    chain = DevChain()
    await chain.open_position(chain.accounts, salt=1, nonce=7)
    with pytest.raises(PositionExistsError):
        await chain.open_position(chain.accounts, salt=2, nonce=7)


@pytest.mark.asyncio
async def test_short_token_owns_position_opened_by_trader():
    chain = DevChain()
    trader = chain.accounts[8]
    res = await chain.create_short_token(chain.accounts, nonce=3, trader=trader)
    state = await (await chain.margin()).get_position(res.id)

    assert res.id == position_id(trader, 3)
    assert chain.short_tokens == [state.owner]
    assert state.owner != trader


@pytest.mark.asyncio
async def test_unknown_position_reads_fail():
    margin = await DevChain().margin()
    with pytest.raises(UnknownPositionError):
        await margin.get_position("0xdead")
    with pytest.raises(UnknownPositionError):
        await margin.get_position_balance("0xdead")


@pytest.mark.asyncio
async def test_orders_are_signed_by_their_makers():
    chain = DevChain()
    buy = await chain.create_buy_order_for_token(chain.accounts)
    sell = await chain.create_sell_order_for_token(chain.accounts)

    assert buy.maker == chain.accounts[5]
    assert sell.maker == chain.accounts[6]
    assert buy.takerTokenAddress == sell.makerTokenAddress == chain.seed_token
    for order in (buy, sell):
        assert order.signature == sign_order(order)

    forged = dataclasses.replace(sell, makerTokenAmount=1)
    assert sign_order(forged) != sell.signature
