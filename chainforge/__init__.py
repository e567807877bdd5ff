"""
ChainForge operator console
Token deployment requests, deployment ledger and verification workflow
"""

__version__ = "0.4.0"
