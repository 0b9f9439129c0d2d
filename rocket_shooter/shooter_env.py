"""
ShooterEnv - the rocket shooter as a Gymnasium environment
----------------------------------------------------------
- Wraps a World; one env step = one action + `dt` seconds of world clock
- Discrete MultiDiscrete action space: [move(3), fire(2), spread(2)]
- Vector observation: player state + K nearest obstacles + K nearest
  enemies + M nearest enemy bullets + the two pickups
- Reward shaped from score, kills, pickups, damage and death

Quick test:
    python -m rocket_shooter --headless
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .entities import Phase, PickupKind
from .persistence import MemoryHighScoreStore
from .utils import clamp
from .world import World

DEFAULT_REWARD = {
    "R_SURVIVE": 0.01,   # per tick alive
    "R_KILL": 1.0,       # enemy shot down
    "R_PICKUP": 0.5,     # crate or health pack collected
    "R_DAMAGE": 0.02,    # per health point lost
    "R_SHOT": 0.005,     # per shot actually fired
    "R_DEATH": 5.0,      # run ended
}


class ShooterEnv(gym.Env):
    """Side-scrolling rocket shooter environment"""

    metadata = {"render_modes": ["human"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 30,
        max_steps: int = 3600,  # 120s at 30 steps/s
        k_obstacles: int = 4,
        k_enemies: int = 3,
        m_bullets: int = 4,
        max_ammo_obs: int = 50,
        reward_config: Optional[Dict[str, float]] = None,
        game_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode

        self.dt = dt
        self.max_steps = max_steps
        self.k_obstacles = k_obstacles
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets
        self.max_ammo_obs = max_ammo_obs
        self.reward_config = dict(DEFAULT_REWARD)
        if reward_config:
            self.reward_config.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.config = GameConfig().with_overrides(**(game_config or {}))
        self.world = World(self.config, store=MemoryHighScoreStore(), rng=random.Random())

        # move: 0 stay, 1 up, 2 down
        # fire: 0/1, spread: 0/1
        self.action_space = spaces.MultiDiscrete([3, 2, 2])

        # Player: y(1) ammo(1) health(1) cooldowns(2)
        # Each obstacle / enemy / enemy bullet: rel pos(2)
        # Crate, health pack: rel pos(2) each
        obs_dim = 5 + 2 * (self.k_obstacles + self.k_enemies + self.m_bullets) + 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._last_counters: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self.world.rng.seed(seed)

        self._step_count = 0
        self.world.restart_run()
        self._last_counters = self._counters()

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire, spread = int(action[0]), int(action[1]), int(action[2])
        world = self.world

        world.input.up = move == 1
        world.input.down = move == 2
        shots = 0
        if spread and world.fire_special():
            shots += 1
        if fire and world.fire_primary():
            shots += 1

        world.advance(self.dt)

        reward = self._compute_reward(shots)

        terminated = world.phase is Phase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _nearest(self, bodies: Sequence, k: int, px: float, py: float) -> List[float]:
        w, h = self.config.width, self.config.height
        ordered = sorted(
            bodies,
            key=lambda b: (b.center[0] - px) ** 2 + (b.center[1] - py) ** 2,
        )
        parts: List[float] = []
        for i in range(k):
            if i < len(ordered):
                cx, cy = ordered[i].center
                parts += [clamp((cx - px) / w, -1, 1), clamp((cy - py) / h, -1, 1)]
            else:
                parts += [0.0, 0.0]
        return parts

    def _get_obs(self) -> np.ndarray:
        world = self.world
        cfg = self.config
        p = world.player
        px, py = p.x + p.width / 2, p.y + p.height / 2

        y = p.y / max(1e-6, cfg.height - p.height)
        ammo = min(p.ammo, self.max_ammo_obs) / self.max_ammo_obs
        health = p.health / max(1, cfg.max_health)

        obs_parts = [
            y * 2 - 1,
            ammo * 2 - 1,
            health * 2 - 1,
            world.primary_ready_fraction() * 2 - 1,
            world.special_ready_fraction() * 2 - 1,
        ]
        obs_parts += self._nearest(world.obstacles, self.k_obstacles, px, py)
        obs_parts += self._nearest(world.enemies, self.k_enemies, px, py)
        obs_parts += self._nearest(world.enemy_projectiles, self.m_bullets, px, py)
        for kind in (PickupKind.AMMO, PickupKind.HEALTH):
            live = [pk for pk in world.pickups if pk.kind is kind]
            obs_parts += self._nearest(live, 1, px, py)

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _counters(self) -> Dict[str, float]:
        w = self.world
        return {
            "ticks": w.ticks,
            "kills": w.kills,
            "pickups": w.pickups_collected,
            "damage": w.damage_taken,
        }

    def _compute_reward(self, shots: int) -> float:
        rc = self.reward_config
        now = self._counters()
        delta = {k: now[k] - self._last_counters.get(k, 0) for k in now}
        self._last_counters = now

        reward = 0.0
        reward += rc["R_SURVIVE"] * delta["ticks"]
        reward += rc["R_KILL"] * delta["kills"]
        reward += rc["R_PICKUP"] * delta["pickups"]
        reward -= rc["R_DAMAGE"] * delta["damage"]
        reward -= rc["R_SHOT"] * shots

        if self.world.phase is Phase.GAME_OVER:
            reward -= rc["R_DEATH"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        info = self.world.info()
        info["step"] = self._step_count
        return info

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None
        if self._window is None:
            # headless training never imports arcade
            from .window import ShooterWindow
            self._window = ShooterWindow(self.world, title="ShooterEnv - Arcade", interactive=False)
            self._window.presenter.on_frame(self.world.snapshot())
        self._window.draw_frame()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None
        self.world.close()


def run_random_episode(
    render: bool = False,
    seed: Optional[int] = None,
    game_config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Play one episode with random actions and return the final info dict"""
    env = ShooterEnv(render_mode="human" if render else None, game_config=game_config)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    info["return"] = total
    env.close()
    return info
