"""Market participants."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Optional

from tradelab.market_events import (
    MarketOrder,
    PrivateFill,
    Response,
    SubmitFAK,
    SubmitQuoteDelete,
    SubmitQuoteUpdate,
)


class Client(ABC):
    """Interface every market participant implements."""

    @property
    @abstractmethod
    def client_id(self) -> int:
        """The identifier the market knows this client by."""

    @abstractmethod
    def register_fak(self, fak: SubmitFAK) -> None:
        """Submit a fill-and-kill order."""

    @abstractmethod
    def register_quote_update(self, quote_update: SubmitQuoteUpdate) -> None:
        """Submit a quote insert or amendment."""

    @abstractmethod
    def register_quote_delete(self, quote_delete: SubmitQuoteDelete) -> None:
        """Submit a quote deletion."""

    @abstractmethod
    def send_response(self, response: Response) -> None:
        """Receive a response from the market."""

    @abstractmethod
    def fill_private(self, fill: PrivateFill) -> None:
        """Receive a private fill from the market."""


class BasicClient(Client):
    """A client that forwards orders to a callback and queues what comes back."""

    _ids = itertools.count(1)

    def __init__(self, add_to_orders: Callable[[MarketOrder], None]) -> None:
        self._client_id = next(BasicClient._ids)
        self._add_to_orders = add_to_orders
        self._responses: Deque[Response] = deque()
        self._fills: Deque[PrivateFill] = deque()

    @property
    def client_id(self) -> int:
        return self._client_id

    def register_fak(self, fak: SubmitFAK) -> None:
        self._add_to_orders(fak)

    def register_quote_update(self, quote_update: SubmitQuoteUpdate) -> None:
        self._add_to_orders(quote_update)

    def register_quote_delete(self, quote_delete: SubmitQuoteDelete) -> None:
        self._add_to_orders(quote_delete)

    def send_response(self, response: Response) -> None:
        self._responses.append(response)

    def fill_private(self, fill: PrivateFill) -> None:
        self._fills.append(fill)

    def get_response(self) -> Optional[Response]:
        """Pop the oldest queued response, or ``None`` if there is none."""
        return self._responses.popleft() if self._responses else None

    def get_fill(self) -> Optional[PrivateFill]:
        """Pop the oldest queued fill, or ``None`` if there is none."""
        return self._fills.popleft() if self._fills else None