"""Pool constants.

Centralizes the fee and price-scale defaults used by the exchange.
"""

# Spot prices are reported as fixed-point integers with 18 decimals
PRICE_SCALE = 10**18

# Swap fee multiplier: 997/1000 of the input is priced, 0.3% stays in the pool
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000

# Asset identifiers within a pair
ASSET_A = "A"
ASSET_B = "B"

# Account under which the pool holds its reserves on both asset ledgers
POOL_ACCOUNT = "0x0000000000000000000000000000000000000001"
