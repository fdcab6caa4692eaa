"""Infrastructure layer for WhistleVault: adapters, stubs and observability."""
