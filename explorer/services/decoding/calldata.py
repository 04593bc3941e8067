"""
Calldata decoding.

Selector extraction and fixed-width decoding of static parameter
layouts (selector followed by 32-byte words).
"""

from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector, to_bytes

from explorer.utils.exceptions import CalldataError
from explorer.utils.formatters import normalize_address

SELECTOR_SIZE = 4
WORD_SIZE = 32

STATIC_TYPES = ("address", "bool", "uint256", "bytes32")


def selector_of(signature: str) -> str:
    """
    4-byte selector of a function signature as 0x-hex.

    Examples:
        >>> selector_of("transfer(address,uint256)")
        '0xa9059cbb'
    """
    return "0x" + function_signature_to_4byte_selector(signature).hex()


def calldata_bytes(data: Any) -> bytes:
    """Transaction input as bytes (accepts hex str, bytes, HexBytes)."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if not data:
        return b""
    return to_bytes(hexstr=str(data))


def has_calldata(data: Any) -> bool:
    """Check the transaction carries input (not empty, not 0x)."""
    return len(calldata_bytes(data)) > 0


def selector_from(data: Any) -> str | None:
    """Selector of a call, None when input is shorter than 4 bytes."""
    raw = calldata_bytes(data)
    if len(raw) < SELECTOR_SIZE:
        return None
    return "0x" + raw[:SELECTOR_SIZE].hex()


def decode_static_args(data: Any, types: list[str]) -> tuple:
    """
    Decode the leading static arguments of a call.

    Args:
        data: Transaction input (selector + arguments)
        types: Static ABI types of the arguments, in order

    Returns:
        Decoded values, addresses lowercased

    Raises:
        CalldataError: If input is shorter than the layout or malformed
    """
    for abi_type in types:
        if abi_type not in STATIC_TYPES:
            raise CalldataError(f"Unsupported static type: {abi_type}")

    raw = calldata_bytes(data)
    needed = SELECTOR_SIZE + WORD_SIZE * len(types)
    if len(raw) < needed:
        raise CalldataError(
            f"Calldata truncated: {len(raw)} bytes, {needed} required"
        )

    try:
        values = abi_decode(types, raw[SELECTOR_SIZE:needed])
    except (DecodingError, ValueError) as e:
        raise CalldataError(f"Malformed calldata: {e}") from e

    return tuple(
        normalize_address(v) if t == "address" else v
        for t, v in zip(types, values)
    )
