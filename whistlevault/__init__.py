"""
WhistleVault - Confidential Report Lifecycle Orchestrator

Coordinates the lifecycle of confidential disclosures whose sensitive
value never appears in clear form on a public ledger until it has been
revealed through a multi-party decryption protocol.

Operating Truths:
- The ledger is the single source of truth for verification state
- A report value becomes public exactly once, through a confirmed read
- Every operation ends with a visible status, never a silent failure
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
