"""
Capability prober.

Decides whether an address is a recognised contract and which
family it belongs to.
"""

from eth_utils import to_bytes
from loguru import logger

from explorer.config.constants import (
    ERC165_INTERFACE_ID,
    FAMILY_TAG_INTERFACE_ID,
    PROBER_CACHE_SIZE,
)
from explorer.models.enums import ContractFamily
from explorer.services.chain.abis import INTERFACE_ABI
from explorer.services.chain.client import ChainClient
from explorer.utils.formatters import mask_address


class CapabilityProber:
    """
    Probes contracts through ERC-165 and the family tag accessor.

    Probing plain accounts and foreign contracts is the common case,
    so every failure is logged and reported as "not recognised".
    Positive results are cached per address; negative ones are not.
    """

    def __init__(
        self, chain: ChainClient, cache_size: int = PROBER_CACHE_SIZE
    ) -> None:
        self.chain = chain
        self.cache_size = cache_size
        self._families: dict[str, ContractFamily] = {}

    async def _supports(self, address: str, interface_id: str) -> bool:
        result = await self.chain.call(
            address,
            INTERFACE_ABI,
            "supportsInterface",
            to_bytes(hexstr=interface_id),
        )
        return result is True

    async def is_recognized_contract(self, address: str) -> bool:
        """
        Check both interface ids are supported.

        Args:
            address: Candidate contract address

        Returns:
            True only if both probes answer true
        """
        try:
            return await self._supports(
                address, ERC165_INTERFACE_ID
            ) and await self._supports(address, FAMILY_TAG_INTERFACE_ID)
        except Exception as e:
            logger.debug(
                f"[Prober] {mask_address(address)} not recognised: {e}"
            )
            return False

    async def family_of(self, address: str) -> ContractFamily | None:
        """
        Read the family tag of a recognised contract.

        Args:
            address: Contract address

        Returns:
            Contract family or None for unknown tags and failed calls
        """
        try:
            tag = await self.chain.call(address, INTERFACE_ABI, "getDkargoPrefix")
        except Exception as e:
            logger.warning(
                f"[Prober] Family tag read failed for {mask_address(address)}: {e}"
            )
            return None

        family = ContractFamily.from_tag(str(tag))
        if family is None:
            logger.debug(f"[Prober] Unknown family tag {tag!r} at {address}")
        return family

    async def probe(self, address: str) -> ContractFamily | None:
        """Recognise then classify an address, with caching."""
        key = address.lower()
        cached = self._families.get(key)
        if cached is not None:
            return cached

        if not await self.is_recognized_contract(key):
            return None
        family = await self.family_of(key)
        if family is None:
            return None

        if len(self._families) >= self.cache_size:
            self._families.pop(next(iter(self._families)))
        self._families[key] = family
        return family
