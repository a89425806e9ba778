from __future__ import annotations

import base58

from linker.core.errors import InvalidAddressError


PUBKEY_BYTES = 32


def is_valid_address(address: str) -> bool:
    """True if `address` is a base58 string decoding to a 32-byte public key."""
    if not isinstance(address, str) or not address:
        return False
    # 32 bytes never need more than 44 base58 chars
    if len(address) > 44:
        return False
    try:
        raw = base58.b58decode(address)
    except ValueError:
        return False
    return len(raw) == PUBKEY_BYTES


def require_valid_address(address: str) -> str:
    if not is_valid_address(address):
        raise InvalidAddressError(f"Invalid address: {address!r}")
    return address
