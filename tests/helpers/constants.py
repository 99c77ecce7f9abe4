"""Shared account and amount constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import OWNER, ETHER
    # or
    from tests.helpers.constants import OWNER, ETHER
"""

# =============================================================================
# Accounts
# =============================================================================

OWNER = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"  # First provider / trader
ADDR1 = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"  # Second provider
ADDR2 = "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc"  # Account that never deposits

# =============================================================================
# Amounts
# =============================================================================

ETHER = 10**18  # One whole unit with 18 decimals

# Starting balance minted to OWNER on both assets, approved to the pool
OWNER_BALANCE = 1_000_000 * ETHER
