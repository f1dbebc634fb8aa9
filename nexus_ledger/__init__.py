"""Nexus Ledger: stock valuation and account balance bookkeeping."""

__version__ = "1.0.0"
