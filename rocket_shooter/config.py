"""
Game tunables

Distances are in pixels, speeds in pixels per tick, intervals and
cooldowns in seconds of world clock.
"""

import json
import math
from dataclasses import dataclass, fields, replace

# counts, costs and points; the rest may be int or float
INT_FIELDS = frozenset({
    "width", "height", "initial_ammo", "max_health", "spread_ammo_cost",
    "spread_bullets", "spawn_attempts", "crate_ammo", "health_pack_heal",
    "enemy_contact_damage", "enemy_bullet_damage", "kill_heal", "kill_score",
    "crate_score", "health_pack_score",
})


@dataclass(frozen=True)
class GameConfig:
    # Arena
    width: int = 800
    height: int = 600
    tick_interval: float = 1 / 60

    # Player
    player_x: float = 100.0
    player_size: float = 40.0
    player_speed: float = 5.0
    initial_ammo: int = 20
    max_health: int = 100

    # Player fire
    bullet_width: float = 15.0
    bullet_height: float = 8.0
    bullet_speed: float = 7.0
    shot_cooldown: float = 0.25
    spread_cooldown: float = 1.5
    spread_ammo_cost: int = 3
    spread_bullets: int = 5
    spread_angle: float = math.pi / 6  # total fan, radians

    # Hazards
    obstacle_width: float = 40.0
    obstacle_height: float = 80.0
    obstacle_speed: float = 3.0
    enemy_size: float = 40.0
    enemy_speed: float = 2.0
    enemy_pursuit_factor: float = 0.5
    enemy_shoot_interval: float = 2.0
    enemy_bullet_width: float = 10.0
    enemy_bullet_height: float = 4.0
    enemy_bullet_speed: float = 5.0

    # Pickups
    pickup_size: float = 30.0
    crate_ammo: int = 15
    health_pack_heal: int = 20
    spawn_attempts: int = 10

    # Spawn timers
    obstacle_spawn_interval: float = 1.0
    enemy_spawn_interval: float = 1.5
    crate_spawn_interval: float = 5.0
    health_pack_spawn_interval: float = 7.0

    # Difficulty ramp
    speed_increase_interval: float = 10.0
    speed_increase_factor: float = 1.1

    # Damage and scoring
    enemy_contact_damage: int = 20
    enemy_bullet_damage: int = 10
    kill_heal: int = 5
    kill_score: int = 100
    crate_score: int = 50
    health_pack_score: int = 30

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{f.name} must be a number, got {value!r}")
            if f.name in INT_FIELDS and not isinstance(value, int):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")

        positive = (
            "width", "height", "tick_interval", "player_size", "bullet_width",
            "bullet_height", "obstacle_width", "obstacle_height", "enemy_size",
            "pickup_size", "enemy_shoot_interval", "obstacle_spawn_interval",
            "enemy_spawn_interval", "crate_spawn_interval",
            "health_pack_spawn_interval", "speed_increase_interval",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.spread_bullets < 1 or self.spread_bullets % 2 == 0:
            raise ValueError(f"spread_bullets must be odd, got {self.spread_bullets}")
        if self.spawn_attempts < 1:
            raise ValueError("spawn_attempts must be at least 1")
        if min(self.initial_ammo, self.max_health, self.spread_ammo_cost) < 0:
            raise ValueError("ammo, health and costs cannot be negative")

    def with_overrides(self, **overrides) -> "GameConfig":
        unknown = set(overrides) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return replace(self, **overrides)


def load_config(path: str) -> GameConfig:
    """Build a GameConfig from a JSON file of overrides"""
    with open(path, "r", encoding="utf-8") as f:
        overrides = json.load(f)
    if not isinstance(overrides, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return GameConfig().with_overrides(**overrides)
