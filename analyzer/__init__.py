"""
Elevator Dispatch Analyzer

Recording and reporting tools fed by the engine's message broker.

Components:
- Statistics: event recorder, service-time summary, trajectory plot, JSONL log
"""

__version__ = "0.1.0"

from .statistics import Statistics

__all__ = ['Statistics']
