"""
Application constants.

Centralized constants for the chain synchronization engine.
"""

# ========================================================================
# BLOCKCHAIN CONSTANTS
# ========================================================================

# Blockchain operation timeouts (in seconds)
BLOCKCHAIN_TIMEOUT = 30.0  # Head, receipts, eth_call
BLOCKCHAIN_LONG_TIMEOUT = 120.0  # Full blocks with many transactions

# ========================================================================
# CONTRACT RECOGNITION
# ========================================================================

# ERC-165 interface ids probed on every candidate contract
ERC165_INTERFACE_ID = "0x01ffc9a7"  # supportsInterface(bytes4)
FAMILY_TAG_INTERFACE_ID = "0x946edbed"  # getDkargoPrefix()

# Positive probe results kept in memory (a contract's family never changes)
PROBER_CACHE_SIZE = 4096

# Contract objects kept by the chain client, oldest dropped first
CONTRACT_CACHE_SIZE = 4096

# ========================================================================
# RECORD FORMATTING
# ========================================================================

# Transaction fee precision in ether (4 decimal places)
TX_FEE_DECIMAL_PLACES = 4

# Event log rows keep the first N decoded parameters
EVENT_LOG_MAX_PARAMS = 4

# Management operations are grouped under one category for clients
MANAGEMENT_CATEGORY = "MANAGEMENT"
