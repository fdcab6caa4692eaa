"""Application layer for WhistleVault: ports and lifecycle services."""
