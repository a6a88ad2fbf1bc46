"""
PokerArena Server - FastAPI service layer
"""

from pokerarena.server.app import app, create_app
from pokerarena.server.manager import TableManager

__all__ = ["app", "create_app", "TableManager"]
