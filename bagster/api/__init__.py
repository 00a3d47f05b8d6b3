"""HTTP API of the carrier selection service."""
