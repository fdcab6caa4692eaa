"""Domain layer for WhistleVault.

Pure models and errors. Imports nothing from the application,
infrastructure or bootstrap layers.
"""
