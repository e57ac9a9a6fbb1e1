"""A simulated exchange that processes client orders in arrival order."""

from __future__ import annotations

import queue
from typing import Dict

from tradelab.client import BasicClient
from tradelab.client_updater import ClientUpdater
from tradelab.dispatcher import EventDispatcher
from tradelab.market_events import (
    MarketOrder,
    Response,
    Result,
    SubmitFAK,
    SubmitQuoteDelete,
    SubmitQuoteUpdate,
)
from tradelab.order_book import OrderBook

_PRODUCT_ID = 1


class Market:
    """Queues orders from clients and processes ``lifetime`` of them when run."""

    def __init__(self, lifetime: int, tick_size: float) -> None:
        self._event_dispatcher = EventDispatcher()
        self._client_updater = ClientUpdater(self._event_dispatcher)
        self._lifetime = lifetime
        self._orders: "queue.Queue[MarketOrder]" = queue.Queue()
        self._order_books: Dict[int, OrderBook] = {
            _PRODUCT_ID: OrderBook(self._client_updater, tick_size)
        }

    @property
    def event_dispatcher(self) -> EventDispatcher:
        return self._event_dispatcher

    def order_book(self, product_id: int) -> OrderBook:
        """The order book trading ``product_id``."""
        return self._order_books[product_id]

    def add_client(self) -> BasicClient:
        """Create a client connected to this market."""
        client = BasicClient(self._add_to_orders)
        self._client_updater.connect_client(client)
        return client

    def run(self) -> None:
        """Process the next ``lifetime`` orders, waiting for each as needed."""
        for _ in range(self._lifetime):
            self._process_order(self._orders.get())

    def _add_to_orders(self, order: MarketOrder) -> None:
        self._orders.put(order)

    def _process_order(self, order: MarketOrder) -> None:
        book = self._order_books.get(order.product_id)
        if book is None:
            self._client_updater.send_response(
                order.client_id, Response(order.msg_number, Result.INVALID_PRODUCT)
            )
            return
        if isinstance(order, SubmitQuoteDelete):
            book.quote_delete(order)
        elif isinstance(order, SubmitFAK):
            book.fak(order)
        elif isinstance(order, SubmitQuoteUpdate):
            book.quote_update(order)
        else:
            raise TypeError(f"unknown order type {type(order).__name__}")