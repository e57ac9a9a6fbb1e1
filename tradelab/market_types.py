"""Basic market value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Side(IntEnum):
    BUY = 0
    SELL = 1


@dataclass
class TOB:
    """Top of book: best bid and ask with their total volumes."""

    bid_price: float
    bid_volume: int
    ask_price: float
    ask_volume: int

    def __str__(self) -> str:
        return (
            f"Bid: @{self.bid_price:g}/{self.bid_volume} | "
            f"Ask: @{self.ask_price:g}/{self.ask_volume}"
        )