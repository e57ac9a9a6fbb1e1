"""Routes market messages to connected clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from tradelab.client import Client
from tradelab.dispatcher import EventDispatcher
from tradelab.market_events import PrivateFill, Response


@dataclass(frozen=True)
class TradeNotice:
    """Public notice that a trade took place."""


@dataclass(frozen=True)
class TOBNotice:
    """Public notice that the top of book changed."""


class ClientUpdater:
    """Delivers private messages to clients and public notices to the dispatcher."""

    def __init__(self, event_dispatcher: EventDispatcher) -> None:
        self._event_dispatcher = event_dispatcher
        self._clients: Dict[int, Client] = {}

    def connect_client(self, client: Client) -> None:
        """Connect ``client``; its id must not already be connected."""
        if client.client_id in self._clients:
            raise ValueError(f"client {client.client_id} is already connected")
        self._clients[client.client_id] = client

    def _client(self, client_id: int) -> Client:
        try:
            return self._clients[client_id]
        except KeyError:
            raise KeyError(f"client {client_id} is not connected") from None

    def send_response(self, client_id: int, response: Response) -> None:
        self._client(client_id).send_response(response)

    def send_fill_private(self, client_id: int, fill: PrivateFill) -> None:
        self._client(client_id).fill_private(fill)

    def send_trade_public(self) -> None:
        self._event_dispatcher.dispatch(TradeNotice())

    def send_tob_public(self) -> None:
        self._event_dispatcher.dispatch(TOBNotice())