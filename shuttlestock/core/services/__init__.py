"""
Core business logic services.

Layer-pure services that depend only on:
- shuttlestock/core/entities/*
- shuttlestock/core/interfaces/*
- shuttlestock/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from shuttlestock.core.services.batch_ledger import BatchLedger, LedgerSlot
from shuttlestock.core.services.fifo_simulator import (
    FifoSimulator,
    ReplayStep,
    SimulationResult,
)
from shuttlestock.core.services.settlement_calculator import (
    SettlementCalculator,
    summarize_window,
)
from shuttlestock.core.services.stock_projector import StockSummaryProjector, tally

__all__ = [
    # Batch Ledger
    "BatchLedger",
    "LedgerSlot",
    # FIFO Simulator
    "FifoSimulator",
    "ReplayStep",
    "SimulationResult",
    # Window Cost Aggregator
    "SettlementCalculator",
    "summarize_window",
    # Stock Summary Projector
    "StockSummaryProjector",
    "tally",
]
