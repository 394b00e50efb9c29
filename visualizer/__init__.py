"""
HTTP bridge between the dispatch engine and a browser front end.
"""

from .runner import SimulationRunner
from .http_server import create_app

__all__ = ['SimulationRunner', 'create_app']
