"""Adapters implementing the application ports against real services."""
