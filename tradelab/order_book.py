"""Price-time priority order book for one product."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

from tradelab.client_updater import ClientUpdater
from tradelab.hash_id import extract_hash_id, make_hash_id
from tradelab.market_events import (
    PrivateFill,
    Response,
    Result,
    SubmitFAK,
    SubmitQuoteDelete,
    SubmitQuoteUpdate,
)
from tradelab.market_types import TOB, Side

_PRICE_TOLERANCE = 1e-9


class QuoteDetails(NamedTuple):
    side: Side
    price: float
    volume: int


@dataclass
class _Details:
    side: Side
    price: float
    volume: int


@dataclass
class _Resting:
    volume: int
    hash_id: int


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


class OrderBook:
    """Resting quotes on both sides, matched against incoming orders."""

    def __init__(self, client_updater: ClientUpdater, tick_size: float) -> None:
        self._updater = client_updater
        self._tick_size = float(tick_size)
        self._quotes: Dict[int, _Details] = {}
        self._bids: Dict[float, List[_Resting]] = {}
        self._asks: Dict[float, List[_Resting]] = {}

    def _levels(self, side: Side) -> Dict[float, List[_Resting]]:
        return self._bids if side is Side.BUY else self._asks

    def _best_bid(self) -> float:
        return max(self._bids)

    def _best_ask(self) -> float:
        return min(self._asks)

    def _respond(self, client_id: int, msg_number: int, result: Result) -> None:
        self._updater.send_response(client_id, Response(msg_number, result))

    def _valid_price(self, price: float) -> bool:
        nearest = _round_half_away(price / self._tick_size) * self._tick_size
        return abs(price - nearest) < _PRICE_TOLERANCE

    def quote_details(self, hash_id: int) -> Optional[QuoteDetails]:
        """Side, price and volume of a resting quote, or ``None`` if it does not exist."""
        details = self._quotes.get(hash_id)
        if details is None:
            return None
        return QuoteDetails(details.side, details.price, details.volume)

    def quote_delete(self, quote_delete: SubmitQuoteDelete) -> None:
        """Remove a resting quote, answering the client."""
        qd = quote_delete
        hash_id = make_hash_id(qd.client_id, qd.product_id, qd.quote_id)
        details = self._quotes.get(hash_id)
        if details is None:
            self._respond(qd.client_id, qd.msg_number, Result.QUOTE_DOESNT_EXIST)
            return

        self._respond(qd.client_id, qd.msg_number, Result.OK)
        levels = self._levels(details.side)
        quotes = levels[details.price]
        position = next(i for i, quote in enumerate(quotes) if quote.hash_id == hash_id)
        del quotes[position]
        if not quotes:
            del levels[details.price]
        del self._quotes[hash_id]

    def quote_update(self, quote_update: SubmitQuoteUpdate) -> None:
        """Insert or replace a quote, trading any part that crosses the book."""
        qu = quote_update
        if not self._valid_price(qu.price):
            self._respond(qu.client_id, qu.msg_number, Result.PRICE_NA_TICK)
            return

        hash_id = make_hash_id(qu.client_id, qu.product_id, qu.quote_id)
        existing = self._quotes.get(hash_id)
        if existing is not None and existing.side != qu.side:
            self._respond(qu.client_id, qu.msg_number, Result.CANNOT_AMEND_QUOTE_SIDE)
            return

        if existing is not None:
            self.quote_delete(
                SubmitQuoteDelete(qu.msg_number, qu.client_id, qu.product_id, qu.quote_id)
            )
        else:
            self._respond(qu.client_id, qu.msg_number, Result.OK)

        remaining = self._cross(qu.client_id, qu.quote_id, qu.side, qu.price, qu.volume)
        if remaining == 0:
            return

        self._quotes[hash_id] = _Details(qu.side, qu.price, remaining)
        self._levels(qu.side).setdefault(qu.price, []).append(_Resting(remaining, hash_id))

    def fak(self, fak: SubmitFAK) -> None:
        """Trade a fill-and-kill order against the book; nothing rests."""
        if not self._valid_price(fak.price):
            self._respond(fak.client_id, fak.msg_number, Result.PRICE_NA_TICK)
            return
        self._respond(fak.client_id, fak.msg_number, Result.OK)
        self._cross(fak.client_id, 0, fak.side, fak.price, fak.volume)

    def top_of_book(self) -> TOB:
        """Best bid and ask prices with the total volume resting at each."""
        if not self._bids or not self._asks:
            raise ValueError("top of book needs quotes on both sides")
        bid_price = self._best_bid()
        ask_price = self._best_ask()
        return TOB(
            bid_price,
            sum(quote.volume for quote in self._bids[bid_price]),
            ask_price,
            sum(quote.volume for quote in self._asks[ask_price]),
        )

    def set_book(
        self,
        bid_quotes: Mapping[float, Iterable[Tuple[int, int]]],
        ask_quotes: Mapping[float, Iterable[Tuple[int, int]]],
    ) -> None:
        """Load an empty book from price levels of ``(volume, hash_id)`` pairs."""
        if self._quotes:
            raise ValueError("the book already holds quotes")
        quotes: Dict[int, _Details] = {}
        books = []
        for side, levels in ((Side.BUY, bid_quotes), (Side.SELL, ask_quotes)):
            book: Dict[float, List[_Resting]] = {}
            for price, entries in levels.items():
                level = [_Resting(int(volume), int(hash_id)) for volume, hash_id in entries]
                for quote in level:
                    if quote.hash_id in quotes:
                        raise ValueError(f"duplicate quote id {quote.hash_id}")
                    quotes[quote.hash_id] = _Details(side, price, quote.volume)
                book[price] = level
            books.append(book)
        self._quotes = quotes
        self._bids, self._asks = books

    def _cross(
        self, client_id: int, quote_id: int, side: Side, price: float, volume: int
    ) -> int:
        """Trade ``volume`` against the opposite side up to ``price``; return what is left."""
        if side is Side.BUY:
            levels, best, crosses = self._asks, self._best_ask, lambda level: price >= level
        else:
            levels, best, crosses = self._bids, self._best_bid, lambda level: price <= level

        while volume > 0 and levels:
            level_price = best()
            if not crosses(level_price):
                break
            quotes = levels[level_price]
            previous = volume
            consumed = 0
            partial: Optional[_Resting] = None
            for quote in quotes:
                if volume < quote.volume:
                    quote.volume -= volume
                    partial = quote
                    break
                volume -= quote.volume
                consumed += 1

            for quote in quotes[:consumed]:
                self._fill_whole(quote)
            if partial is not None:
                if volume:
                    self._fill_part(partial, volume)
                del quotes[:consumed]
                volume = 0
            else:
                del levels[level_price]
            self._updater.send_fill_private(
                client_id, PrivateFill(quote_id, price, previous - volume)
            )
        return volume

    def _fill_whole(self, quote: _Resting) -> None:
        client_id, _, quote_id = extract_hash_id(quote.hash_id)
        details = self._quotes.pop(quote.hash_id)
        self._updater.send_fill_private(
            client_id, PrivateFill(quote_id, details.price, details.volume)
        )

    def _fill_part(self, quote: _Resting, volume: int) -> None:
        client_id, _, quote_id = extract_hash_id(quote.hash_id)
        details = self._quotes[quote.hash_id]
        details.volume -= volume
        self._updater.send_fill_private(client_id, PrivateFill(quote_id, details.price, volume))