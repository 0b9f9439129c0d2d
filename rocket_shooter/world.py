"""
World - the single owner of all mutable game state
---------------------------------------------------
- Player, entity pools, run state and difficulty live here
- A Scheduler drives the simulation tick, the four spawners and the
  difficulty ramp; callers only feed it elapsed time through advance()
- Presentation, audio and persistence are collaborators: listeners get
  notified, the high score store gets read once and written on game over,
  and nothing they do can break a tick

Lifecycle: IDLE -> ACTIVE -> GAME_OVER, with restart_run() going back to
ACTIVE from anywhere and return_to_menu() going to IDLE.
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from .collisions import resolve_collisions
from .config import GameConfig
from .entities import (
    DifficultyState, Enemy, EnemyProjectile, InputState, Obstacle, Phase,
    Pickup, PickupKind, Player, Projectile, RunState, Snapshot,
)
from .persistence import HighScoreStore, MemoryHighScoreStore
from .scheduler import Scheduler
from .spawner import (
    enemy_shot, primary_shot, spawn_enemy, spawn_obstacle, spawn_pickup,
    spread_shot,
)
from .utils import clamp

logger = logging.getLogger(__name__)

# Timer names
TICK = "tick"
SPAWN_OBSTACLE = "spawn_obstacle"
SPAWN_ENEMY = "spawn_enemy"
SPAWN_CRATE = "spawn_crate"
SPAWN_HEALTH_PACK = "spawn_health_pack"
SPEED_RAMP = "speed_ramp"


class WorldListener:
    """Base class for collaborators; override only the hooks you need"""

    def on_frame(self, snapshot: Snapshot):
        pass

    def on_run_started(self):
        pass

    def on_primary_fire(self):
        pass

    def on_special_fire(self):
        pass

    def on_explosion(self, x: float, y: float, kind: str):
        pass

    def on_game_over(self, score: int, high_score: int):
        pass


class World:
    """Arcade shooter world stepped by an external clock"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        rng: Optional[random.Random] = None,
        listeners: Iterable[WorldListener] = (),
    ):
        self.config = config or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = rng or random.Random()
        self.listeners: List[WorldListener] = list(listeners)

        self.scheduler = Scheduler()
        self.input = InputState()
        self.run = RunState(high_score=self._load_high_score())

        # World state
        self.player: Player = None  # type: ignore
        self.projectiles: List[Projectile] = []
        self.enemy_projectiles: List[EnemyProjectile] = []
        self.obstacles: List[Obstacle] = []
        self.enemies: List[Enemy] = []
        self.pickups: List[Pickup] = []
        self.difficulty: DifficultyState = None  # type: ignore

        # Per-run counters, reported in info()
        self.kills = 0
        self.pickups_collected = 0
        self.damage_taken = 0
        self.ticks = 0

        self._reset_state()

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def clock(self) -> float:
        """Seconds of world time elapsed"""
        return self.scheduler.now

    @property
    def phase(self) -> Phase:
        return self.run.phase

    def start_run(self):
        """Menu -> playing. Ignored while a run is already active."""
        if self.run.phase is Phase.ACTIVE:
            logger.debug("start_run ignored, a run is already active")
            return
        self._begin_run()

    def restart_run(self):
        """Full reset into a fresh active run, from any phase"""
        self._begin_run()

    def return_to_menu(self):
        self.scheduler.cancel_all()
        self._reset_state()
        self.run.score = 0
        self.run.phase = Phase.IDLE

    def close(self):
        """Stop every timer and drop the collaborators"""
        self.scheduler.cancel_all()
        self.listeners.clear()

    def _reset_state(self):
        cfg = self.config
        self.player = Player(
            x=cfg.player_x,
            y=cfg.height / 2,
            width=cfg.player_size,
            height=cfg.player_size,
            speed=cfg.player_speed,
            ammo=cfg.initial_ammo,
            health=cfg.max_health,
        )
        self.projectiles = []
        self.enemy_projectiles = []
        self.obstacles = []
        self.enemies = []
        self.pickups = []
        self.difficulty = DifficultyState(
            obstacle_speed=cfg.obstacle_speed,
            enemy_speed=cfg.enemy_speed,
            enemy_bullet_speed=cfg.enemy_bullet_speed,
        )
        self.kills = 0
        self.pickups_collected = 0
        self.damage_taken = 0
        self.ticks = 0

    def _begin_run(self):
        cfg = self.config
        # old timers must never fire into the new run
        self.scheduler.cancel_all()
        self._reset_state()
        self.run.score = 0
        self.run.phase = Phase.ACTIVE

        every = self.scheduler.every
        every(TICK, cfg.tick_interval, self.tick)
        every(SPAWN_OBSTACLE, cfg.obstacle_spawn_interval, self.spawn_obstacle)
        every(SPAWN_ENEMY, cfg.enemy_spawn_interval, self.spawn_enemy)
        every(SPAWN_CRATE, cfg.crate_spawn_interval, lambda: self.spawn_pickup(PickupKind.AMMO))
        every(SPAWN_HEALTH_PACK, cfg.health_pack_spawn_interval,
              lambda: self.spawn_pickup(PickupKind.HEALTH))
        every(SPEED_RAMP, cfg.speed_increase_interval, self.increase_difficulty)

        logger.info("Run started (high score %d)", self.run.high_score)
        self.emit("on_run_started")
        if self.listeners:
            self.emit("on_frame", self.snapshot())

    def game_over(self):
        """Active -> game over. Stops every timer before anything else can run."""
        if self.run.phase is not Phase.ACTIVE:
            return
        self.run.phase = Phase.GAME_OVER
        self.scheduler.cancel_all()

        if self.run.score > self.run.high_score:
            self.run.high_score = self.run.score
            self._save_high_score(self.run.score)

        logger.info("Game over: score %d, high score %d", self.run.score, self.run.high_score)
        self.emit("on_explosion", *self._player_center(), "player")
        if self.listeners:
            self.emit("on_frame", self.snapshot())
        self.emit("on_game_over", self.run.score, self.run.high_score)

    # ----------------------------
    # Simulation
    # ----------------------------

    def advance(self, dt: float) -> int:
        """Feed dt seconds of clock to the timers; returns callbacks fired"""
        return self.scheduler.advance(dt)

    def tick(self):
        if self.run.phase is not Phase.ACTIVE:
            return

        self._move_player()
        self._advance_pools()
        self._enemies_fire()

        resolve_collisions(self)
        if self.run.game_over:
            return

        self.run.score += 1
        self.ticks += 1
        if self.listeners:
            self.emit("on_frame", self.snapshot())

    def _move_player(self):
        p = self.player
        if self.input.up:
            p.y -= p.speed
        if self.input.down:
            p.y += p.speed
        p.y = clamp(p.y, 0.0, self.config.height - p.height)

    def _advance_pools(self):
        cfg = self.config
        w, h = cfg.width, cfg.height

        for b in self.projectiles:
            b.advance()
        self.projectiles = [b for b in self.projectiles if 0 < b.x < w and 0 < b.y < h]

        for b in self.enemy_projectiles:
            b.advance()
        self.enemy_projectiles = [b for b in self.enemy_projectiles if 0 < b.x < w and 0 < b.y < h]

        for o in self.obstacles:
            o.advance()
        self.obstacles = [o for o in self.obstacles if o.x > -o.width]

        target_x, target_y = self.player.x, self.player.y
        for e in self.enemies:
            e.pursue(target_x, target_y, cfg.enemy_pursuit_factor)
        self.enemies = [e for e in self.enemies if e.x > -e.width]

        for p in self.pickups:
            p.advance()
        self.pickups = [p for p in self.pickups if p.x > -p.width]

    def _enemies_fire(self):
        cfg = self.config
        now = self.clock
        for e in self.enemies:
            if e.last_shot is None or now - e.last_shot >= cfg.enemy_shoot_interval:
                self.enemy_projectiles.append(
                    enemy_shot(cfg, e, self.player, self.difficulty.enemy_bullet_speed)
                )
                e.last_shot = now

    # ----------------------------
    # Spawners and difficulty
    # ----------------------------

    def spawn_obstacle(self):
        if self.run.phase is Phase.ACTIVE:
            self.obstacles.append(spawn_obstacle(self.config, self.rng, self.difficulty.obstacle_speed))

    def spawn_enemy(self):
        if self.run.phase is Phase.ACTIVE:
            self.enemies.append(spawn_enemy(self.config, self.rng, self.difficulty.enemy_speed))

    def spawn_pickup(self, kind: PickupKind) -> Optional[Pickup]:
        if self.run.phase is not Phase.ACTIVE:
            return None
        if any(p.kind is kind for p in self.pickups):
            return None
        pickup = spawn_pickup(self.config, self.rng, kind, self.obstacles)
        if pickup is not None:
            self.pickups.append(pickup)
        return pickup

    def increase_difficulty(self):
        if self.run.phase is not Phase.ACTIVE:
            return
        d = self.difficulty
        factor = self.config.speed_increase_factor
        d.obstacle_speed *= factor
        d.enemy_speed *= factor
        d.enemy_bullet_speed *= factor
        d.level += 1

        for o in self.obstacles:
            o.motion.speed = d.obstacle_speed
        for e in self.enemies:
            e.motion.speed = d.enemy_speed
        for b in self.enemy_projectiles:
            b.motion.speed = d.enemy_bullet_speed

        logger.info(
            "Speeds increased (level %d): obstacle %.2f, enemy %.2f, enemy bullet %.2f",
            d.level, d.obstacle_speed, d.enemy_speed, d.enemy_bullet_speed,
        )

    # ----------------------------
    # Player actions
    # ----------------------------

    def fire_primary(self) -> bool:
        """One straight shot. Returns False when refused (no state change)."""
        if self.run.phase is not Phase.ACTIVE:
            return False
        cfg = self.config
        p = self.player
        now = self.clock
        if p.last_shot is not None and now - p.last_shot < cfg.shot_cooldown:
            logger.debug("Primary fire cooling down")
            return False
        if p.ammo <= 0:
            logger.debug("Out of ammo")
            return False

        p.last_shot = now
        p.ammo -= 1
        self.projectiles.append(primary_shot(cfg, p))
        self.emit("on_primary_fire")
        return True

    def fire_special(self) -> bool:
        """Spread shot. Returns False when refused (no state change)."""
        if self.run.phase is not Phase.ACTIVE:
            return False
        cfg = self.config
        p = self.player
        now = self.clock
        if p.last_special is not None and now - p.last_special < cfg.spread_cooldown:
            logger.debug("Spread shot cooling down")
            return False
        if p.ammo < cfg.spread_ammo_cost:
            logger.debug("Not enough ammo for spread shot")
            return False

        p.last_special = now
        p.ammo -= cfg.spread_ammo_cost
        self.projectiles.extend(spread_shot(cfg, p))
        self.emit("on_special_fire")
        return True

    def special_ready_fraction(self) -> float:
        """Spread cooldown progress in [0, 1]; 1 means the cooldown has elapsed"""
        last = self.player.last_special
        if last is None:
            return 1.0
        return clamp((self.clock - last) / self.config.spread_cooldown, 0.0, 1.0)

    def primary_ready_fraction(self) -> float:
        last = self.player.last_shot
        if last is None:
            return 1.0
        return clamp((self.clock - last) / self.config.shot_cooldown, 0.0, 1.0)

    # ----------------------------
    # Resources
    # ----------------------------

    def heal(self, amount: int):
        p = self.player
        p.health = min(self.config.max_health, p.health + amount)

    def damage(self, amount: int):
        p = self.player
        taken = min(p.health, amount)
        p.health -= taken
        self.damage_taken += taken

    def _player_center(self):
        p = self.player
        return p.x + p.width / 2, p.y + p.height / 2

    # ----------------------------
    # Collaborators
    # ----------------------------

    def add_listener(self, listener: WorldListener):
        self.listeners.append(listener)

    def remove_listener(self, listener: WorldListener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def emit(self, hook: str, *args):
        """Call `hook` on every listener; a failing listener is logged and skipped"""
        for listener in list(self.listeners):
            method = getattr(listener, hook, None)
            if method is None:
                continue
            try:
                method(*args)
            except Exception:
                logger.exception("Listener %r failed in %s", listener, hook)

    def _load_high_score(self) -> int:
        try:
            return max(0, int(self.store.load()))
        except Exception:
            logger.exception("Could not load high score, starting from 0")
            return 0

    def _save_high_score(self, score: int):
        try:
            self.store.save(score)
        except Exception:
            logger.exception("Could not save high score %d", score)

    # ----------------------------
    # Read-only views
    # ----------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            clock=self.clock,
            player=replace(self.player),
            projectiles=tuple(copy.deepcopy(self.projectiles)),
            enemy_projectiles=tuple(copy.deepcopy(self.enemy_projectiles)),
            obstacles=tuple(copy.deepcopy(self.obstacles)),
            enemies=tuple(copy.deepcopy(self.enemies)),
            pickups=tuple(copy.deepcopy(self.pickups)),
            run=replace(self.run),
            difficulty=replace(self.difficulty),
        )

    def info(self) -> Dict[str, Any]:
        return {
            "score": self.run.score,
            "high_score": self.run.high_score,
            "health": self.player.health,
            "ammo": self.player.ammo,
            "kills": self.kills,
            "pickups_collected": self.pickups_collected,
            "damage_taken": self.damage_taken,
            "num_enemies": len(self.enemies),
            "num_obstacles": len(self.obstacles),
            "num_bullets": len(self.projectiles),
            "num_enemy_bullets": len(self.enemy_projectiles),
            "level": self.difficulty.level,
            "ticks": self.ticks,
            "phase": self.run.phase.value,
        }
