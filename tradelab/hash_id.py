"""Packing of client, product and quote identifiers into one integer."""

from __future__ import annotations

from typing import Tuple

_U16 = 0xFFFF
_U32 = 0xFFFFFFFF


def _check(value: int, limit: int, name: str) -> None:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} out of range: {value}")


def make_hash_id(client_id: int, product_id: int, quote_id: int) -> int:
    """Pack a 16-bit client id, 16-bit product id and 32-bit quote id."""
    _check(client_id, _U16, "client_id")
    _check(product_id, _U16, "product_id")
    _check(quote_id, _U32, "quote_id")
    return client_id | (product_id << 16) | (quote_id << 32)


def extract_hash_id(hash_id: int) -> Tuple[int, int, int]:
    """Unpack a hash id into ``(client_id, product_id, quote_id)``."""
    return hash_id & _U16, (hash_id >> 16) & _U16, (hash_id >> 32) & _U32