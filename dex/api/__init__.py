"""HTTP interface to the exchange."""
