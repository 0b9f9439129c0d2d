"""Rocket shooter - side-scrolling arcade shooter simulation"""

from .config import GameConfig, load_config
from .entities import Phase, PickupKind
from .persistence import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore
from .world import World, WorldListener

__all__ = [
    'GameConfig', 'load_config', 'Phase', 'PickupKind', 'HighScoreStore',
    'JsonHighScoreStore', 'MemoryHighScoreStore', 'World', 'WorldListener',
]
