"""
High score storage
"""

import json
import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Interface for storing the single persisted high score"""

    def load(self) -> int:
        raise NotImplementedError

    def save(self, score: int) -> None:
        raise NotImplementedError


class MemoryHighScoreStore(HighScoreStore):
    """Keeps the high score for the life of the process only"""

    def __init__(self, initial: int = 0):
        self.value = initial

    def load(self) -> int:
        return self.value

    def save(self, score: int) -> None:
        self.value = int(score)


class JsonHighScoreStore(HighScoreStore):
    """High score in a small JSON file: {"high_score": 1234}"""

    def __init__(self, path: Optional[str] = None):
        if path is None:
            path = os.path.join(os.path.expanduser("~"), ".rocket_shooter", "highscore.json")
        self.path = path

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return max(0, int(data.get("high_score", 0)))
        except (OSError, ValueError, TypeError, AttributeError, OverflowError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            return 0

    def save(self, score: int) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump({"high_score": int(score)}, f)
        os.replace(tmp_path, self.path)
