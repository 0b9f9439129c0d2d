"""
Entity factories for the right-edge spawners and player/enemy fire.

All functions are pure with respect to the world: they build entities and
leave pool insertion to the caller. Randomness comes from the rng passed in.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable, List, Optional

from .config import GameConfig
from .entities import (
    Angled, Enemy, EnemyProjectile, Obstacle, Pickup, PickupKind, Player,
    Projectile, Straight,
)
from .utils import heading_towards, rect_collide

logger = logging.getLogger(__name__)


def spawn_obstacle(cfg: GameConfig, rng: random.Random, speed: float) -> Obstacle:
    y = rng.random() * (cfg.height - cfg.obstacle_height)
    return Obstacle(
        x=cfg.width, y=y,
        width=cfg.obstacle_width, height=cfg.obstacle_height,
        motion=Straight(speed, heading=-1.0),
    )


def spawn_enemy(cfg: GameConfig, rng: random.Random, speed: float) -> Enemy:
    y = rng.random() * (cfg.height - cfg.enemy_size)
    # velocity is set by pursuit every tick
    return Enemy(
        x=cfg.width, y=y,
        width=cfg.enemy_size, height=cfg.enemy_size,
        motion=Angled(0.0, 0.0, speed),
    )


def is_spawn_position_safe(x: float, y: float, width: float, height: float,
                           obstacles: Iterable[Obstacle]) -> bool:
    """True if the rectangle overlaps no obstacle"""
    for o in obstacles:
        if rect_collide(x, y, width, height, o.x, o.y, o.width, o.height):
            return False
    return True


def spawn_pickup(
    cfg: GameConfig,
    rng: random.Random,
    kind: PickupKind,
    obstacles: List[Obstacle],
) -> Optional[Pickup]:
    """Place a pickup clear of every obstacle, or give up after cfg.spawn_attempts tries"""
    size = cfg.pickup_size
    for _ in range(cfg.spawn_attempts):
        y = rng.random() * (cfg.height - size)
        if is_spawn_position_safe(cfg.width, y, size, size, obstacles):
            return Pickup(
                x=cfg.width, y=y, width=size, height=size,
                motion=Straight(cfg.obstacle_speed, heading=-1.0),
                kind=kind,
            )
    logger.debug("No safe spot for %s pickup after %d attempts", kind.value, cfg.spawn_attempts)
    return None


def _muzzle(player: Player):
    return player.x + player.width, player.y + player.height / 2 - 2.5


def primary_shot(cfg: GameConfig, player: Player) -> Projectile:
    x, y = _muzzle(player)
    return Projectile(
        x=x, y=y, width=cfg.bullet_width, height=cfg.bullet_height,
        motion=Straight(cfg.bullet_speed),
    )


def spread_shot(cfg: GameConfig, player: Player) -> List[Projectile]:
    """Fan of cfg.spread_bullets projectiles, evenly spaced across cfg.spread_angle"""
    x, y = _muzzle(player)
    n = cfg.spread_bullets
    if n == 1:
        angles = [0.0]
    else:
        step = cfg.spread_angle / (n - 1)
        angles = [-cfg.spread_angle / 2 + i * step for i in range(n)]
    return [
        Projectile(
            x=x, y=y, width=cfg.bullet_width, height=cfg.bullet_height,
            motion=Angled(math.cos(a), math.sin(a), cfg.bullet_speed),
        )
        for a in angles
    ]


def enemy_shot(cfg: GameConfig, enemy: Enemy, player: Player, speed: float) -> EnemyProjectile:
    """Bullet leaving the enemy's nose, aimed at the player's current position"""
    dx, dy = heading_towards(enemy.x, enemy.y, player.x, player.y)
    return EnemyProjectile(
        x=enemy.x, y=enemy.y + enemy.height / 2,
        width=cfg.enemy_bullet_width, height=cfg.enemy_bullet_height,
        motion=Angled(dx, dy, speed),
    )
