from dataclasses import dataclass, replace

import pytest

from tradelab.client import BasicClient
from tradelab.client_updater import ClientUpdater
from tradelab.dispatcher import EventDispatcher
from tradelab.hash_id import make_hash_id
from tradelab.market_events import Result, SubmitFAK, SubmitQuoteDelete, SubmitQuoteUpdate
from tradelab.market_types import TOB, Side
from tradelab.order_book import OrderBook

PID = 1


@dataclass
class Setup:
    ob: OrderBook
    c1: BasicClient
    c2: BasicClient
    c3: BasicClient

    def hid(self, client, quote_id):
        return make_hash_id(client.client_id, PID, quote_id)

    def no_more_fills(self):
        return self.c1.get_fill() is None and self.c2.get_fill() is None and self.c3.get_fill() is None


@pytest.fixture
def s():
    updater = ClientUpdater(EventDispatcher())
    c1, c2, c3 = (BasicClient(lambda order: None) for _ in range(3))
    for client in (c1, c2, c3):
        updater.connect_client(client)
    ob = OrderBook(updater, 0.05)
    setup = Setup(ob, c1, c2, c3)
    h = setup.hid
    bids = {
        1.0: [(5, h(c1, 1)), (2, h(c2, 1)), (3, h(c1, 2))],
        0.95: [(8, h(c1, 3)), (4, h(c1, 8))],
        0.9: [(8, h(c1, 4))],
    }
    asks = {
        1.1: [(4, h(c1, 5)), (4, h(c2, 2))],
        1.15: [(4, h(c1, 6))],
        1.2: [(20, h(c1, 7))],
    }
    ob.set_book(bids, asks)
    return setup


def test_delete_quote(s):
    expected = s.ob.top_of_book()

    s.ob.quote_delete(SubmitQuoteDelete(1, s.c3.client_id, PID, 1))
    assert s.c3.get_response().result is Result.QUOTE_DOESNT_EXIST
    assert s.ob.top_of_book() == expected

    s.ob.quote_delete(SubmitQuoteDelete(12, s.c1.client_id, PID, 4))
    assert s.c1.get_response().result is Result.OK
    assert s.ob.top_of_book() == expected

    s.ob.quote_delete(SubmitQuoteDelete(12, s.c1.client_id, PID, 1))
    assert s.c1.get_response().result is Result.OK
    expected = replace(expected, bid_volume=expected.bid_volume - 5)
    assert s.ob.top_of_book() == expected
    assert s.ob.quote_details(s.hid(s.c1, 1)) is None


def test_fak(s):
    c1, c2 = s.c1, s.c2
    expected = s.ob.top_of_book()

    # Miss
    s.ob.fak(SubmitFAK(1, c1.client_id, PID, Side.SELL, 1.05, 1))
    assert c1.get_response().result is Result.OK
    assert s.ob.top_of_book() == expected
    s.ob.fak(SubmitFAK(2, c1.client_id, PID, Side.BUY, 1.05, 1))
    assert c1.get_response().result is Result.OK
    assert s.ob.top_of_book() == expected

    # Bad price
    s.ob.fak(SubmitFAK(3, c1.client_id, PID, Side.SELL, 0.98, 1))
    assert c1.get_response().result is Result.PRICE_NA_TICK
    s.ob.fak(SubmitFAK(4, c1.client_id, PID, Side.BUY, 1.28, 1))
    assert c1.get_response().result is Result.PRICE_NA_TICK

    # Hit top of book first quote
    s.ob.fak(SubmitFAK(5, c1.client_id, PID, Side.SELL, 1.0, 1))
    assert c1.get_response().result is Result.OK
    expected = replace(expected, bid_volume=expected.bid_volume - 1)
    assert s.ob.top_of_book() == expected
    assert s.ob.quote_details(s.hid(c1, 1)).volume == 4
    assert c1.get_fill().volume == 1
    assert c1.get_fill().volume == 1
    assert s.no_more_fills()

    s.ob.fak(SubmitFAK(6, c1.client_id, PID, Side.BUY, 1.1, 2))
    assert c1.get_response().result is Result.OK
    expected = replace(expected, ask_volume=expected.ask_volume - 2)
    assert s.ob.top_of_book() == expected
    assert s.ob.quote_details(s.hid(c1, 5)).volume == 2
    assert c1.get_fill().volume == 2
    assert c1.get_fill().volume == 2
    assert s.no_more_fills()

    # Clear level
    s.ob.fak(SubmitFAK(7, c1.client_id, PID, Side.SELL, 1.0, 12))
    assert c1.get_response().result is Result.OK
    expected = replace(expected, bid_volume=12, bid_price=0.95)
    assert s.ob.top_of_book() == expected
    assert c1.get_fill().volume == 4
    assert c2.get_fill().volume == 2
    assert c1.get_fill().volume == 3
    assert c1.get_fill().volume == 9
    assert s.no_more_fills()

    # Trade on two levels
    s.ob.fak(SubmitFAK(8, c1.client_id, PID, Side.BUY, 1.2, 9))
    assert c1.get_response().result is Result.OK
    expected = replace(expected, ask_volume=1, ask_price=1.15)
    assert s.ob.top_of_book() == expected
    assert c1.get_fill().volume == 2
    assert c2.get_fill().volume == 4
    assert c1.get_fill().volume == 6
    assert c1.get_fill().volume == 3
    assert c1.get_fill().volume == 3
    assert s.no_more_fills()

    # Fill one quote
    s.ob.fak(SubmitFAK(9, c1.client_id, PID, Side.SELL, 0.95, 8))
    assert c1.get_response().result is Result.OK
    expected = replace(expected, bid_volume=expected.bid_volume - 8)
    assert s.ob.top_of_book() == expected
    assert c1.get_fill().volume == 8
    assert c1.get_fill().volume == 8
    assert s.no_more_fills()
    assert s.ob.quote_details(s.hid(c1, 3)) is None
    assert s.ob.quote_details(s.hid(c1, 8)).volume == 4


def test_update_quote(s):
    c1, c2, c3 = s.c1, s.c2, s.c3
    expected = s.ob.top_of_book()

    # New top of book quote
    s.ob.quote_update(SubmitQuoteUpdate(1, c3.client_id, PID, Side.BUY, 1.05, 2, 1))
    assert c3.get_response().result is Result.OK
    expected = replace(expected, bid_price=1.05, bid_volume=2)
    assert s.ob.top_of_book() == expected

    # Update quote
    s.ob.quote_update(SubmitQuoteUpdate(0, c3.client_id, PID, Side.BUY, 1.05, 4, 1))
    assert c3.get_response().result is Result.OK
    assert c3.get_response() is None
    expected = replace(expected, bid_price=1.05, bid_volume=4)
    assert s.ob.top_of_book() == expected

    # Try to change side
    s.ob.quote_update(SubmitQuoteUpdate(0, c3.client_id, PID, Side.SELL, 1.05, 4, 1))
    assert c3.get_response().result is Result.CANNOT_AMEND_QUOTE_SIDE
    assert s.ob.top_of_book() == expected

    # Amend to bad price
    s.ob.quote_update(SubmitQuoteUpdate(0, c3.client_id, PID, Side.BUY, 1.02, 4, 1))
    assert c3.get_response().result is Result.PRICE_NA_TICK
    assert s.ob.top_of_book() == expected

    # Cross the book
    s.ob.quote_update(SubmitQuoteUpdate(0, c3.client_id, PID, Side.BUY, 1.2, 13, 1))
    assert c3.get_response().result is Result.OK
    expected = TOB(1.0, 10, 1.2, 19)
    assert s.ob.top_of_book() == expected
    assert c1.get_fill().volume == 4
    assert c2.get_fill().volume == 4
    assert c1.get_fill().volume == 4
    assert c1.get_fill().volume == 1
    assert c3.get_fill().volume == 8
    assert c3.get_fill().volume == 4
    assert c3.get_fill().volume == 1
    assert s.no_more_fills()
    assert s.ob.quote_details(s.hid(c3, 1)) is None

    # Set quote volume to zero
    s.ob.quote_update(SubmitQuoteUpdate(0, c1.client_id, PID, Side.BUY, 1.2, 0, 1))
    assert c1.get_response().result is Result.OK
    expected = replace(expected, bid_volume=expected.bid_volume - 5)
    assert s.ob.top_of_book() == expected
    assert s.ob.quote_details(s.hid(c1, 1)) is None


def test_quote_details_after_set_book(s):
    details = s.ob.quote_details(s.hid(s.c1, 7))
    assert details == (Side.SELL, 1.2, 20)


def test_set_book_twice_raises(s):
    with pytest.raises(ValueError):
        s.ob.set_book({}, {})


def test_set_book_rejects_duplicate_ids():
    ob = OrderBook(ClientUpdater(EventDispatcher()), 0.05)
    hid = make_hash_id(1, PID, 1)
    with pytest.raises(ValueError):
        ob.set_book({1.0: [(1, hid)]}, {1.1: [(1, hid)]})


def test_top_of_book_needs_both_sides():
    ob = OrderBook(ClientUpdater(EventDispatcher()), 0.05)
    with pytest.raises(ValueError):
        ob.top_of_book()