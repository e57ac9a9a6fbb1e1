"""Messages exchanged between market clients and the exchange."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from tradelab.market_types import Side


@dataclass(frozen=True)
class SubmitFAK:
    """A fill-and-kill order: trades what it can immediately, the rest is dropped."""

    msg_number: int
    client_id: int
    product_id: int
    side: Side
    price: float
    volume: int


@dataclass(frozen=True)
class SubmitQuoteUpdate:
    """Insert or amend a resting quote."""

    msg_number: int
    client_id: int
    product_id: int
    side: Side
    price: float
    volume: int
    quote_id: int


@dataclass(frozen=True)
class SubmitQuoteDelete:
    """Remove a resting quote."""

    msg_number: int
    client_id: int
    product_id: int
    quote_id: int


MarketOrder = Union[SubmitFAK, SubmitQuoteUpdate, SubmitQuoteDelete]


class Result(IntEnum):
    OK = 0
    INVALID_PRODUCT = 1
    QUOTE_DOESNT_EXIST = 2
    PRICE_NA_TICK = 3
    CANNOT_AMEND_QUOTE_SIDE = 4

    def __str__(self) -> str:
        return f"Result: {self.name}"


@dataclass(frozen=True)
class Response:
    """The exchange's answer to one submitted message."""

    msg_number: int
    result: Result


@dataclass(frozen=True)
class PrivateFill:
    """A trade reported privately to one of its participants."""

    quote_id: int
    price: float
    volume: int