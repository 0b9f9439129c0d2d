from rocket_shooter.collisions import COLLISION_PASSES, resolve_collisions
from rocket_shooter.entities import Phase, PickupKind

from .conftest import (
    make_bullet, make_enemy, make_enemy_bullet, make_obstacle, make_pickup,
    on_player,
)


def test_passes_run_in_fixed_order():
    names = [p.__name__ for p in COLLISION_PASSES]
    assert names == [
        "bullets_vs_hazards",
        "enemies_vs_player",
        "obstacles_vs_player",
        "pickups_vs_player",
        "enemy_bullets_vs_player",
    ]


def test_bullet_kills_enemy(world):
    world.player.health = 90
    enemy = make_enemy(500, 100)
    world.enemies.append(enemy)
    world.projectiles.append(make_bullet(505, 110))

    resolve_collisions(world)

    assert world.projectiles == []
    assert world.enemies == []
    assert world.run.score == 100
    assert world.player.health == 95
    assert world.kills == 1


def test_kill_heal_is_capped(world):
    world.enemies.append(make_enemy(500, 100))
    world.projectiles.append(make_bullet(505, 110))
    resolve_collisions(world)
    assert world.player.health == 100
    assert world.run.score == 100


def test_obstacle_stops_bullet_before_enemy(world):
    obstacle = make_obstacle(495, 80)
    enemy = make_enemy(500, 100)
    world.obstacles.append(obstacle)
    world.enemies.append(enemy)
    world.projectiles.append(make_bullet(505, 110))

    resolve_collisions(world)

    assert world.projectiles == []
    assert world.obstacles == [obstacle]
    assert world.enemies == [enemy]
    assert world.run.score == 0


def test_bullets_scanned_last_first(world):
    first = make_bullet(505, 110)
    last = make_bullet(510, 112)
    world.enemies.append(make_enemy(500, 100))
    world.projectiles.extend([first, last])

    resolve_collisions(world)

    # the later bullet takes the only enemy, the earlier one flies on
    assert world.projectiles == [first]
    assert world.projectiles[0] is first
    assert world.run.score == 100


def test_enemy_contact_damages_player(world):
    world.enemies.append(make_enemy(*on_player(world)))
    resolve_collisions(world)
    assert world.enemies == []
    assert world.player.health == 80
    assert world.phase is Phase.ACTIVE


def test_lethal_enemy_contact_skips_later_passes(world):
    world.player.health = 20
    world.enemies.append(make_enemy(*on_player(world)))
    crate = make_pickup(*on_player(world), kind=PickupKind.AMMO)
    bullet = make_enemy_bullet(*on_player(world))
    world.pickups.append(crate)
    world.enemy_projectiles.append(bullet)

    resolve_collisions(world)

    assert world.phase is Phase.GAME_OVER
    assert world.player.health == 0
    assert world.pickups == [crate]
    assert world.enemy_projectiles == [bullet]
    assert world.player.ammo == 20


def test_obstacle_contact_is_immediately_lethal(world):
    bullet = make_enemy_bullet(*on_player(world))
    world.obstacles.append(make_obstacle(*on_player(world)))
    world.enemy_projectiles.append(bullet)

    resolve_collisions(world)

    assert world.phase is Phase.GAME_OVER
    assert world.player.health == 100
    assert world.enemy_projectiles == [bullet]


def test_ammo_crate(world):
    world.pickups.append(make_pickup(*on_player(world), kind=PickupKind.AMMO))
    resolve_collisions(world)
    assert world.player.ammo == 35
    assert world.run.score == 50
    assert world.pickups == []


def test_health_pack_is_capped(world):
    world.player.health = 90
    world.pickups.append(make_pickup(*on_player(world), kind=PickupKind.HEALTH))
    resolve_collisions(world)
    assert world.player.health == 100
    assert world.run.score == 30
    assert world.pickups == []
    assert world.pickups_collected == 1


def test_pickups_resolve_before_enemy_bullets(world):
    world.player.health = 10
    world.pickups.append(make_pickup(*on_player(world), kind=PickupKind.HEALTH))
    world.enemy_projectiles.append(make_enemy_bullet(*on_player(world)))

    resolve_collisions(world)

    assert world.phase is Phase.ACTIVE
    assert world.player.health == 20
    assert world.enemy_projectiles == []


def test_enemy_bullet_damage(world):
    world.enemy_projectiles.append(make_enemy_bullet(*on_player(world)))
    resolve_collisions(world)
    assert world.player.health == 90
    assert world.enemy_projectiles == []
    assert world.damage_taken == 10


def test_enemy_bullet_kill_floors_health_at_zero(world):
    world.player.health = 5
    world.enemy_projectiles.append(make_enemy_bullet(*on_player(world)))
    world.enemy_projectiles.append(make_enemy_bullet(*on_player(world, offset=10)))

    resolve_collisions(world)

    assert world.phase is Phase.GAME_OVER
    assert world.player.health == 0
    # the second bullet is never charged
    assert len(world.enemy_projectiles) == 1


def test_touching_edges_do_not_collide(world):
    p = world.player
    world.obstacles.append(make_obstacle(p.x + p.width, p.y))
    world.enemies.append(make_enemy(p.x, p.y + p.height))
    resolve_collisions(world)
    assert world.phase is Phase.ACTIVE
    assert world.player.health == 100
