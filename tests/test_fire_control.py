import random

import pytest

from rocket_shooter.entities import Angled, Straight
from rocket_shooter.world import World

from .conftest import make_obstacle


def test_primary_fire_spends_one_round(world):
    assert world.fire_primary()
    assert world.player.ammo == 19
    assert len(world.projectiles) == 1
    bullet = world.projectiles[0]
    assert isinstance(bullet.motion, Straight)
    assert (bullet.x, bullet.y) == (140, 317.5)


def test_primary_fire_respects_cooldown(world):
    assert world.fire_primary()
    assert not world.fire_primary()
    assert world.player.ammo == 19
    assert len(world.projectiles) == 1

    world.advance(0.2)
    assert not world.fire_primary()

    world.advance(0.1)
    assert world.fire_primary()
    assert world.player.ammo == 18


def test_primary_fire_without_ammo_changes_nothing(world):
    world.player.ammo = 0
    assert not world.fire_primary()
    assert world.player.ammo == 0
    assert world.player.last_shot is None
    assert world.projectiles == []


def test_special_fire_fans_five_bullets(world):
    assert world.fire_special()
    assert world.player.ammo == 17
    assert len(world.projectiles) == 5
    assert all(isinstance(b.motion, Angled) for b in world.projectiles)
    assert sum(b.motion.dy for b in world.projectiles) == pytest.approx(0.0, abs=1e-9)


def test_special_fire_is_all_or_nothing(world):
    world.player.ammo = 2
    assert not world.fire_special()
    assert world.player.ammo == 2
    assert world.player.last_special is None
    assert world.projectiles == []


def test_special_fire_has_its_own_longer_cooldown(world):
    assert world.fire_special()
    assert world.fire_primary()  # independent timer
    world.advance(1.0)
    assert not world.fire_special()
    world.advance(0.6)
    assert world.fire_special()
    assert world.player.ammo == 20 - 3 - 1 - 3


def test_fire_ignored_outside_active_run():
    world = World(rng=random.Random(0))
    assert not world.fire_primary()
    assert not world.fire_special()
    assert world.player.ammo == 20


def test_fire_ignored_after_game_over(world):
    world.obstacles.append(make_obstacle(world.player.x, world.player.y))
    world.tick()
    assert world.run.game_over
    assert not world.fire_primary()
    assert not world.fire_special()
    assert world.projectiles == []


def test_restart_clears_cooldowns(world):
    assert world.fire_primary()
    assert world.fire_special()
    world.restart_run()
    assert world.player.last_shot is None
    assert world.player.last_special is None
    assert world.fire_primary()
    assert world.fire_special()


def test_ready_fractions(world):
    assert world.special_ready_fraction() == 1.0
    world.fire_special()
    assert world.special_ready_fraction() == 0.0
    world.advance(0.75)
    assert world.special_ready_fraction() == pytest.approx(0.5)
    world.fire_primary()
    assert world.primary_ready_fraction() == 0.0
