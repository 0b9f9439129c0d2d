"""
Collision resolution for one tick.

The passes run in a fixed order and the order is observable: a bullet
stopped by an obstacle never reaches the enemy behind it, and once a pass
ends the run, later passes are skipped for the tick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .entities import PickupKind
from .utils import colliding

if TYPE_CHECKING:
    from .world import World


def bullets_vs_hazards(world: "World"):
    """Player bullets against obstacles first, then enemies"""
    cfg = world.config
    bullets = world.projectiles
    for i in range(len(bullets) - 1, -1, -1):
        bullet = bullets[i]

        # obstacles soak bullets and survive
        if any(colliding(bullet, o) for o in world.obstacles):
            world.emit("on_explosion", bullet.x, bullet.y, "obstacle")
            del bullets[i]
            continue

        for j in range(len(world.enemies) - 1, -1, -1):
            enemy = world.enemies[j]
            if colliding(bullet, enemy):
                world.emit("on_explosion", *enemy.center, "enemy")
                del bullets[i]
                del world.enemies[j]
                world.run.score += cfg.kill_score
                world.heal(cfg.kill_heal)
                world.kills += 1
                break


def enemies_vs_player(world: "World"):
    player = world.player
    for i in range(len(world.enemies) - 1, -1, -1):
        enemy = world.enemies[i]
        if colliding(player, enemy):
            world.emit("on_explosion", *enemy.center, "enemy")
            del world.enemies[i]
            world.damage(world.config.enemy_contact_damage)
            if player.health <= 0:
                world.game_over()
                return


def obstacles_vs_player(world: "World"):
    for obstacle in world.obstacles:
        if colliding(world.player, obstacle):
            world.game_over()
            return


def pickups_vs_player(world: "World"):
    cfg = world.config
    player = world.player
    for i in range(len(world.pickups) - 1, -1, -1):
        pickup = world.pickups[i]
        if not colliding(player, pickup):
            continue
        if pickup.kind is PickupKind.AMMO:
            player.ammo += cfg.crate_ammo
            world.run.score += cfg.crate_score
        else:
            world.heal(cfg.health_pack_heal)
            world.run.score += cfg.health_pack_score
        del world.pickups[i]
        world.pickups_collected += 1


def enemy_bullets_vs_player(world: "World"):
    player = world.player
    for i in range(len(world.enemy_projectiles) - 1, -1, -1):
        if colliding(player, world.enemy_projectiles[i]):
            world.damage(world.config.enemy_bullet_damage)
            del world.enemy_projectiles[i]
            if player.health <= 0:
                world.game_over()
                return


COLLISION_PASSES = (
    bullets_vs_hazards,
    enemies_vs_player,
    obstacles_vs_player,
    pickups_vs_player,
    enemy_bullets_vs_player,
)


def resolve_collisions(world: "World"):
    for collision_pass in COLLISION_PASSES:
        collision_pass(world)
        if world.run.game_over:
            return
