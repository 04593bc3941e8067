"""
Log decoder.

Matches receipt logs against the event table and decodes their
indexed topics and data.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_bytes
from loguru import logger

from explorer.services.decoding.event_table import (
    EventSignature,
    EventTable,
    canonical_type,
)
from explorer.utils.exceptions import DecodeError
from explorer.utils.formatters import normalize_address, normalize_hex


@dataclass(frozen=True)
class EventParam:
    """Decoded event parameter."""

    name: str
    type: str
    value: Any


@dataclass(frozen=True)
class EventOccurrence:
    """One decoded log entry."""

    name: str
    log_index: int
    address: str | None
    params: tuple[EventParam, ...]

    @property
    def args(self) -> dict[str, Any]:
        """Parameter values by name."""
        return {param.name: param.value for param in self.params}


def is_hashed_when_indexed(abi_type: str) -> bool:
    """Indexed dynamic values are stored as their keccak hash."""
    return (
        abi_type in ("string", "bytes")
        or abi_type.endswith("]")
        or abi_type.startswith("(")
    )


def _as_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not value:
        return b""
    return to_bytes(hexstr=str(value))


def normalize_value(abi_type: str, value: Any) -> Any:
    """Lowercase addresses and hex-encode byte values."""
    if isinstance(value, (list, tuple)):
        inner = abi_type
        if abi_type.endswith("]"):
            inner = abi_type[: abi_type.rindex("[")]
        return [normalize_value(inner, item) for item in value]
    if abi_type == "address":
        return normalize_address(value)
    if isinstance(value, (bytes, bytearray)):
        return normalize_hex(value)
    return value


class LogDecoder:
    """Decodes receipts against an event table."""

    def __init__(self, table: EventTable) -> None:
        """
        Initialize decoder.

        Args:
            table: Event signature table
        """
        self.table = table

    def decode_log(self, entry: EventSignature, log: Mapping) -> EventOccurrence:
        """
        Decode one log entry against one table entry.

        Raises:
            DecodeError: If topics or data do not match the entry inputs
        """
        topics = [_as_bytes(t) for t in log.get("topics", [])][1:]
        indexed = [p for p in entry.inputs if p.get("indexed")]
        if len(indexed) != len(topics):
            raise DecodeError(
                f"{entry.name}: expected {len(indexed)} indexed topics, "
                f"got {len(topics)}"
            )

        plain = [p for p in entry.inputs if not p.get("indexed")]
        try:
            plain_values = list(
                abi_decode(
                    [canonical_type(p) for p in plain],
                    _as_bytes(log.get("data")),
                )
            )
            topic_values = []
            for param, topic in zip(indexed, topics):
                abi_type = canonical_type(param)
                if is_hashed_when_indexed(abi_type):
                    topic_values.append(normalize_hex(topic))
                else:
                    topic_values.append(abi_decode([abi_type], topic)[0])
        except (DecodingError, ValueError, TypeError) as e:
            raise DecodeError(f"{entry.name}: {e}") from e

        params = []
        for param in entry.inputs:
            abi_type = canonical_type(param)
            raw = topic_values.pop(0) if param.get("indexed") else plain_values.pop(0)
            params.append(
                EventParam(
                    name=param.get("name", ""),
                    type=abi_type,
                    value=normalize_value(abi_type, raw),
                )
            )

        return EventOccurrence(
            name=entry.name,
            log_index=int(log.get("logIndex", 0)),
            address=normalize_address(log.get("address")),
            params=tuple(params),
        )

    def decode(self, receipt: Mapping) -> list[EventOccurrence]:
        """
        Decode every recognised log of a receipt.

        A log that does not decode against a matching entry is skipped
        for that entry.

        Args:
            receipt: Transaction receipt

        Returns:
            Event occurrences in log order
        """
        occurrences = []
        for log in receipt.get("logs", []):
            topics = log.get("topics", [])
            if not topics:
                continue
            for entry in self.table.find_by_topic(normalize_hex(topics[0])):
                try:
                    occurrences.append(self.decode_log(entry, log))
                except DecodeError as e:
                    logger.warning(f"[Decoder] Skipping log: {e}")
        return occurrences
