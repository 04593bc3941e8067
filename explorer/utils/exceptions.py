"""
Exception handling utilities.

Defines the explorer exception hierarchy and the categories used
to decide whether a failure is logged and skipped or raised.
"""

from sqlalchemy.exc import SQLAlchemyError
from web3.exceptions import Web3Exception


class ExplorerError(Exception):
    """Base class for explorer errors."""


class FatalConfigError(ExplorerError):
    """
    Raised when the scanner cannot start safely.

    Invalid genesis block, a checkpoint inconsistent with the stored
    records, or missing start arguments.
    """


class ChainCallError(ExplorerError):
    """Raised when a chain read needed to build a record fails."""


class DecodeError(ExplorerError):
    """Raised when a log or return value cannot be decoded."""


class CalldataError(DecodeError):
    """Raised when transaction calldata is truncated or malformed."""


# Exception categories based on handling strategy

# Must log but can continue - the transaction or block is skipped
RECOVERABLE = (
    ChainCallError,
    DecodeError,
    Web3Exception,     # Blockchain RPC errors
    SQLAlchemyError,   # Store errors (savepoint rolled back)
    TimeoutError,      # asyncio.wait_for on chain calls
    ConnectionError,
)

# Must raise - the process cannot continue
FATAL = (
    FatalConfigError,
)


def is_recoverable(exc: BaseException) -> bool:
    """
    Check if exception can be logged and skipped.

    Args:
        exc: Exception to check

    Returns:
        True if the failing unit of work may be skipped
    """
    return isinstance(exc, RECOVERABLE) and not is_fatal(exc)


def is_fatal(exc: BaseException) -> bool:
    """
    Check if exception must stop the process.

    Args:
        exc: Exception to check

    Returns:
        True if exception must be raised
    """
    return isinstance(exc, FATAL)
