"""Test helpers module for shared test utilities.

- constants: Account addresses and common amounts
- factories: Exchange factory functions
"""

from tests.helpers.constants import ADDR1, ADDR2, ETHER, OWNER, OWNER_BALANCE
from tests.helpers.factories import FailingLedger, fund, make_exchange, seeded_exchange

__all__ = [
    "ADDR1",
    "ADDR2",
    "ETHER",
    "FailingLedger",
    "OWNER",
    "OWNER_BALANCE",
    "fund",
    "make_exchange",
    "seeded_exchange",
]
