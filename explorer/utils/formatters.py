"""
Formatting helpers for chain values.

Normalizes hashes, addresses and quantities before they are
stored, and shortens them for log output.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from eth_utils import to_hex
from web3 import Web3

from explorer.config.constants import TX_FEE_DECIMAL_PLACES


def normalize_hex(value: Any) -> str:
    """
    Convert bytes / HexBytes / str to lowercase 0x-prefixed hex.

    Examples:
        >>> normalize_hex(b"\\x01\\x02")
        '0x0102'
        >>> normalize_hex("ABCD")
        '0xabcd'
    """
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value).lower()
    text = str(value).lower()
    if not text.startswith("0x"):
        text = f"0x{text}"
    return text


def normalize_address(address: Any) -> str | None:
    """Lowercase 0x address, None stays None."""
    if address is None:
        return None
    return normalize_hex(address)


def wei_to_ether(value: int) -> str:
    """
    Convert a wei amount to an ether decimal string.

    Examples:
        >>> wei_to_ether(1500000000000000000)
        '1.5'
        >>> wei_to_ether(0)
        '0'
    """
    ether = Web3.from_wei(int(value), "ether")
    return format(Decimal(ether).normalize(), "f")


def tx_fee(gas_price: int, gas_used: int) -> str:
    """
    Transaction fee in ether, rounded to a fixed number of places.

    Examples:
        >>> tx_fee(20_000_000_000, 21_000)
        '0.0004'
    """
    fee = Decimal(int(gas_price)) * Decimal(int(gas_used)) / Decimal(10**18)
    quantum = Decimal(1).scaleb(-TX_FEE_DECIMAL_PLACES)
    return str(fee.quantize(quantum, rounding=ROUND_HALF_UP))


def mask_address(address: str | None) -> str:
    """
    Shorten an address for log lines: 0x1234...5678

    Examples:
        >>> mask_address("0x1234567890abcdef1234567890abcdef12345678")
        '0x1234...5678'
        >>> mask_address(None)
        '***'
    """
    if not address or len(address) < 10:
        return "***"
    return f"{address[:6]}...{address[-4:]}"


def mask_tx_hash(tx_hash: str | None) -> str:
    """Shorten a transaction or block hash for log lines."""
    if not tx_hash or len(tx_hash) < 16:
        return "***"
    return f"{tx_hash[:10]}...{tx_hash[-6:]}"
