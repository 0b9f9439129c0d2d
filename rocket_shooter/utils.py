"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def heading_towards(x1: float, y1: float, x2: float, y2: float) -> Tuple[float, float]:
    """Unit vector pointing from (x1, y1) to (x2, y2)"""
    angle = math.atan2(y2 - y1, x2 - x1)
    return math.cos(angle), math.sin(angle)


def rect_collide(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges do not count)"""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def colliding(a, b) -> bool:
    """Rectangle overlap test for anything with x, y, width, height"""
    return rect_collide(a.x, a.y, a.width, a.height, b.x, b.y, b.width, b.height)
