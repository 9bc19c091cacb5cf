"""Idle probe-replication economy: accrual core, reconciliation store, and clients."""

__version__ = "0.1.0"
