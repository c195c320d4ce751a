"""HTTP API for the exchange sandbox."""
