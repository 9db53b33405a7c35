"""
Drivers domain package.

Public API:
- Domain model: Driver
- Reliability lookup: ReliabilityTable, reliability_for
"""
from .models import Driver
from .reliability import ReliabilityTable, reliability_for

__all__ = ["Driver", "ReliabilityTable", "reliability_for"]
