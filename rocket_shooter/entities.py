"""
Game entity dataclasses

Positions are the top-left corner in a y-down field; speeds are in
pixels per tick.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .utils import heading_towards


@dataclass
class Straight:
    """Horizontal motion: +1 heading travels right, -1 travels left"""
    speed: float
    heading: float = 1.0

    def displacement(self) -> Tuple[float, float]:
        return self.heading * self.speed, 0.0


@dataclass
class Angled:
    """Motion along a unit direction (dx, dy) scaled by speed"""
    dx: float
    dy: float
    speed: float

    def displacement(self) -> Tuple[float, float]:
        return self.dx * self.speed, self.dy * self.speed


Kinematics = Union[Straight, Angled]


@dataclass
class Body:
    """Axis-aligned rectangle moved by its kinematics"""
    x: float
    y: float
    width: float
    height: float
    motion: Kinematics

    def advance(self):
        dx, dy = self.motion.displacement()
        self.x += dx
        self.y += dy

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Player:
    """Player craft"""
    x: float
    y: float
    width: float = 40.0
    height: float = 40.0
    speed: float = 5.0
    ammo: int = 20
    health: int = 100
    last_shot: Optional[float] = None  # world clock of the last primary shot
    last_special: Optional[float] = None  # world clock of the last spread shot


@dataclass
class Projectile(Body):
    """Player bullet, straight or part of a spread"""


@dataclass
class EnemyProjectile(Body):
    """Enemy bullet aimed at the player when fired"""


@dataclass
class Obstacle(Body):
    """Passive hazard drifting left; lethal on contact"""


@dataclass
class Enemy(Body):
    """Enemy that chases the player and shoots at it"""
    last_shot: Optional[float] = None

    def pursue(self, tx: float, ty: float, factor: float = 1.0):
        """Re-aim at (tx, ty) and move one tick at speed * factor"""
        dx, dy = heading_towards(self.x, self.y, tx, ty)
        self.motion = Angled(dx, dy, self.motion.speed)
        self.x += self.motion.dx * self.motion.speed * factor
        self.y += self.motion.dy * self.motion.speed * factor


class PickupKind(Enum):
    AMMO = "ammo"
    HEALTH = "health"


@dataclass
class Pickup(Body):
    """Ammo crate or health pack"""
    kind: PickupKind = PickupKind.AMMO


class Phase(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    GAME_OVER = "game_over"


@dataclass
class RunState:
    score: int = 0
    high_score: int = 0
    phase: Phase = Phase.IDLE

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


@dataclass
class DifficultyState:
    obstacle_speed: float
    enemy_speed: float
    enemy_bullet_speed: float
    level: int = 0  # number of ramps applied this run


@dataclass
class InputState:
    """Held movement keys, sampled once per tick"""
    up: bool = False
    down: bool = False


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of the world handed to presentation"""
    clock: float
    player: Player
    projectiles: Tuple[Projectile, ...]
    enemy_projectiles: Tuple[EnemyProjectile, ...]
    obstacles: Tuple[Obstacle, ...]
    enemies: Tuple[Enemy, ...]
    pickups: Tuple[Pickup, ...]
    run: RunState
    difficulty: DifficultyState
