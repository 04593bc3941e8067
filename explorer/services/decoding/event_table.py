"""
Event signature table.

Flattens the events of one or more interface descriptions into a
table of canonical signatures and topic hashes.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from eth_utils import keccak


@dataclass(frozen=True)
class EventSignature:
    """One decodable event."""

    name: str
    inputs: tuple[dict, ...]
    signature: str  # Name(type1,type2,...)
    topic: str  # keccak-256 of signature, lowercase 0x-hex


def canonical_type(param: dict) -> str:
    """
    Canonical ABI type of a parameter, tuples expanded.

    Examples:
        >>> canonical_type({"type": "uint256"})
        'uint256'
        >>> canonical_type({"type": "tuple[]", "components": [
        ...     {"type": "address"}, {"type": "uint8"}]})
        '(address,uint8)[]'
    """
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def event_signature(event: dict) -> str:
    """Canonical signature string of an event ABI entry."""
    types = ",".join(canonical_type(p) for p in event.get("inputs", []))
    return f"{event['name']}({types})"


def event_topic(signature: str) -> str:
    """Topic hash of a canonical event signature."""
    return "0x" + keccak(text=signature).hex()


class EventTable:
    """
    Ordered table of event signatures.

    The table is small (tens of entries), lookups scan linearly.
    """

    def __init__(self, entries: Iterable[EventSignature]) -> None:
        self.entries: list[EventSignature] = list(entries)

    def __iter__(self) -> Iterator[EventSignature]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find_by_name(self, name: str) -> EventSignature | None:
        """First entry with the given event name."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def find_by_topic(self, topic: str) -> list[EventSignature]:
        """All entries whose topic equals the given topic hash."""
        topic = topic.lower()
        return [entry for entry in self.entries if entry.topic == topic]


def build_event_table(*abis: list[dict]) -> EventTable:
    """
    Build the event table of the given interface descriptions.

    Events keep their declaration order, ABIs are merged in argument
    order. Anonymous events carry no signature topic and are skipped.

    Args:
        *abis: Interface descriptions (lists of ABI entries)

    Returns:
        Event table
    """
    entries = []
    for abi in abis:
        for item in abi:
            if item.get("type") != "event" or item.get("anonymous"):
                continue
            signature = event_signature(item)
            entries.append(
                EventSignature(
                    name=item["name"],
                    inputs=tuple(item.get("inputs", [])),
                    signature=signature,
                    topic=event_topic(signature),
                )
            )
    return EventTable(entries)
