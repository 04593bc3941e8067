"""
Network flavor wiring.

The logistics and token networks run the same pipeline over
different contract families and tables.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from explorer.models.enums import ContractFamily, NetworkFlavor
from explorer.repositories.event_log_repository import (
    EventLogRepository,
    LogisticsEventLogRepository,
    TokenEventLogRepository,
)
from explorer.repositories.transaction_repository import (
    ChainTransactionRepository,
    LogisticsTransactionRepository,
    TokenTransactionRepository,
)
from explorer.services.chain.abis import LOGISTICS_ABIS, TOKEN_ABIS
from explorer.services.chain.client import ChainClient
from explorer.services.chain.contracts import LogisticsContracts
from explorer.services.chain.prober import CapabilityProber
from explorer.services.classifier.base import FamilyHandler
from explorer.services.classifier.classifier import TransactionClassifier
from explorer.services.classifier.company import CompanyHandler
from explorer.services.classifier.order import OrderHandler
from explorer.services.classifier.service import ServiceHandler
from explorer.services.classifier.token import TokenHandler
from explorer.services.decoding.event_table import build_event_table
from explorer.services.decoding.log_decoder import LogDecoder
from explorer.services.sync.block_scanner import BlockScanner
from explorer.services.sync.checkpoint_manager import CheckpointManager


@dataclass(frozen=True)
class FlavorSpec:
    """Static description of a network flavor."""

    flavor: NetworkFlavor
    root_family: ContractFamily  # family of the genesis contract
    abis: tuple[list[dict], ...]
    transaction_repository: type[ChainTransactionRepository]
    event_log_repository: type[EventLogRepository]
    tracks_orders: bool


LOGISTICS = FlavorSpec(
    flavor=NetworkFlavor.LOGISTICS,
    root_family=ContractFamily.SERVICE,
    abis=LOGISTICS_ABIS,
    transaction_repository=LogisticsTransactionRepository,
    event_log_repository=LogisticsEventLogRepository,
    tracks_orders=True,
)

TOKEN = FlavorSpec(
    flavor=NetworkFlavor.TOKEN,
    root_family=ContractFamily.TOKEN,
    abis=TOKEN_ABIS,
    transaction_repository=TokenTransactionRepository,
    event_log_repository=TokenEventLogRepository,
    tracks_orders=False,
)

FLAVORS = {spec.flavor: spec for spec in (LOGISTICS, TOKEN)}


def get_flavor_spec(flavor: str | NetworkFlavor) -> FlavorSpec:
    """Look up a flavor, ValueError if unknown."""
    return FLAVORS[NetworkFlavor(flavor)]


def build_handlers(spec: FlavorSpec, chain: ChainClient) -> list[FamilyHandler]:
    """Family handlers of a flavor."""
    if spec.flavor == NetworkFlavor.TOKEN:
        return [TokenHandler()]
    contracts = LogisticsContracts(chain)
    return [
        ServiceHandler(contracts),
        CompanyHandler(contracts),
        OrderHandler(contracts),
    ]


@dataclass
class SyncPipeline:
    """Components of one running scanner."""

    spec: FlavorSpec
    prober: CapabilityProber
    classifier: TransactionClassifier
    checkpoints: CheckpointManager
    scanner: BlockScanner


def build_pipeline(
    flavor: str | NetworkFlavor,
    chain: ChainClient,
    session_maker: async_sessionmaker[AsyncSession],
) -> SyncPipeline:
    """
    Assemble prober, decoder, classifier, checkpoint manager and scanner.

    Args:
        flavor: Network flavor
        chain: Chain client of the flavor's network
        session_maker: Store session factory

    Returns:
        Ready-to-run pipeline
    """
    spec = get_flavor_spec(flavor)
    prober = CapabilityProber(chain)
    classifier = TransactionClassifier(
        prober=prober,
        decoder=LogDecoder(build_event_table(*spec.abis)),
        handlers=build_handlers(spec, chain),
    )
    return SyncPipeline(
        spec=spec,
        prober=prober,
        classifier=classifier,
        checkpoints=CheckpointManager(spec, chain, prober, session_maker),
        scanner=BlockScanner(spec, chain, classifier, session_maker),
    )
