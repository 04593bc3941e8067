"""
Sync process entry point.

Usage:
    explorer-sync logistics <service_address> <start_block>
    explorer-sync token <token_address> <start_block>

Both arguments fall back to the settings of the flavor.
"""

import argparse
import asyncio
import sys

from loguru import logger
from pydantic import ValidationError

from explorer.config.database import create_engine, create_session_maker
from explorer.config.settings import Settings, get_settings
from explorer.initialization.logging import setup_logging
from explorer.models.enums import NetworkFlavor
from explorer.services.chain.client import ChainClient, build_web3
from explorer.services.sync.flavors import build_pipeline
from explorer.utils.exceptions import FatalConfigError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="explorer-sync",
        description="Index logistics or token contract transactions.",
    )
    parser.add_argument(
        "flavor",
        choices=[flavor.value for flavor in NetworkFlavor],
        help="network to synchronize",
    )
    parser.add_argument(
        "address",
        nargs="?",
        help="root contract address (service contract or token contract)",
    )
    parser.add_argument(
        "start_block",
        nargs="?",
        type=int,
        help="block that deployed the root contract",
    )
    return parser


def resolve_arguments(
    args: argparse.Namespace, settings: Settings
) -> tuple[str, int]:
    """
    Root address and start block from arguments, then settings.

    Raises:
        FatalConfigError: If either value is missing
    """
    if args.flavor == NetworkFlavor.TOKEN:
        address = args.address or settings.token_address
        start_block = args.start_block
        if start_block is None:
            start_block = settings.token_start_block
    else:
        address = args.address or settings.logistics_service_address
        start_block = args.start_block
        if start_block is None:
            start_block = settings.logistics_start_block

    if not address:
        raise FatalConfigError("Root contract address is required")
    if start_block is None:
        raise FatalConfigError("Start block is required")
    return address.lower(), start_block


async def run_sync(flavor: str, settings: Settings, address: str, start_block: int) -> None:
    """Resolve the start block and scan until the subscription ends."""
    ws_url = settings.ws_url_for(flavor)
    if not ws_url:
        raise FatalConfigError(f"No WebSocket RPC URL configured for {flavor}")

    engine = create_engine(settings)
    session_maker = create_session_maker(engine)
    try:
        async with build_web3(ws_url, settings.poa_chain) as w3:
            chain = ChainClient(w3)
            pipeline = build_pipeline(flavor, chain, session_maker)
            start = await pipeline.checkpoints.resolve_start_block(address, start_block)
            await pipeline.scanner.run(start)
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    setup_logging(args.flavor, settings.log_level, settings.log_dir)

    try:
        address, start_block = resolve_arguments(args, settings)
        asyncio.run(run_sync(args.flavor, settings, address, start_block))
    except FatalConfigError as e:
        logger.error(f"Fatal configuration error: {e}")
        parser.print_usage(sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Sync stopped by user (KeyboardInterrupt)")
        return 0
    except Exception as e:
        logger.exception(f"Sync crashed: {e}")
        return 1

    logger.warning("Block subscription ended")
    return 1


if __name__ == "__main__":
    sys.exit(main())
