"""Sandbox module for Pulse auction simulation."""

from .simulator import SaleSimulator, SimulationResult

__all__ = [
    "SaleSimulator",
    "SimulationResult",
]
