import random

import pytest

from rocket_shooter.config import GameConfig
from rocket_shooter.entities import (
    Angled, Enemy, EnemyProjectile, Obstacle, Pickup, PickupKind, Projectile,
    Straight,
)
from rocket_shooter.persistence import MemoryHighScoreStore
from rocket_shooter.world import World


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def store():
    return MemoryHighScoreStore()


@pytest.fixture
def world(config, store):
    """A world with a run in progress and empty pools"""
    w = World(config, store=store, rng=random.Random(1234))
    w.start_run()
    return w


def make_obstacle(x, y, speed=3.0):
    return Obstacle(x=x, y=y, width=40, height=80, motion=Straight(speed, heading=-1.0))


def make_enemy(x, y, speed=2.0):
    return Enemy(x=x, y=y, width=40, height=40, motion=Angled(0.0, 0.0, speed))


def make_bullet(x, y, speed=7.0):
    return Projectile(x=x, y=y, width=15, height=8, motion=Straight(speed))


def make_enemy_bullet(x, y, speed=5.0):
    return EnemyProjectile(x=x, y=y, width=10, height=4, motion=Angled(-1.0, 0.0, speed))


def make_pickup(x, y, kind=PickupKind.AMMO):
    return Pickup(x=x, y=y, width=30, height=30, motion=Straight(3.0, heading=-1.0), kind=kind)


def on_player(world, offset=5):
    """Top-left corner of a rectangle overlapping the player"""
    return world.player.x + offset, world.player.y + offset
