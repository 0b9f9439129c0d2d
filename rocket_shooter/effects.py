"""
Cosmetic effects for the window: scrolling starfield, explosion and
engine particles, screen shake. Nothing here touches the world.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

STAR_COUNT = 100
STAR_SPEED_MULTIPLIER = 0.5
EXPLOSION_PARTICLES = 30

EXPLOSION_COLORS = {
    "obstacle": (136, 136, 136),
    "enemy": (255, 51, 51),
    "player": (0, 255, 0),
}


@dataclass
class Star:
    x: float
    y: float
    size: float
    speed: float


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Tuple[int, int, int]
    life: float
    shrink: float = 1.0

    def update(self) -> bool:
        """Step one frame; False once the particle has faded out"""
        self.x += self.vx
        self.y += self.vy
        self.life -= 0.02
        self.size *= self.shrink
        return self.life > 0

    @property
    def alpha(self) -> int:
        return int(255 * max(0.0, min(1.0, self.life)))


class Starfield:
    def __init__(self, width: int, height: int, rng: random.Random, count: int = STAR_COUNT):
        self.width = width
        self.height = height
        self.rng = rng
        self.stars = [
            Star(
                x=rng.random() * width,
                y=rng.random() * height,
                size=rng.random() * 2 + 1,
                speed=rng.random() * 2 + 1,
            )
            for _ in range(count)
        ]

    def update(self):
        for star in self.stars:
            star.x -= star.speed * STAR_SPEED_MULTIPLIER
            if star.x < 0:
                star.x = self.width
                star.y = self.rng.random() * self.height


class ParticleSystem:
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.particles: List[Particle] = []
        self.shake_frames = 0
        self.shake_intensity = 0.0

    def explode(self, x: float, y: float, kind: str):
        color = EXPLOSION_COLORS.get(kind, (255, 255, 255))
        r = self.rng.random
        for _ in range(EXPLOSION_PARTICLES):
            self.particles.append(Particle(
                x=x, y=y,
                vx=(r() - 0.5) * 8, vy=(r() - 0.5) * 8,
                size=r() * 3 + 2, color=color, life=1.0,
            ))
        # player hits shake harder
        if kind == "player":
            self.shake(15, 8.0)
        else:
            self.shake(10, 5.0)

    def engine_trail(self, x: float, y: float):
        r = self.rng.random
        if r() < 0.3:
            self.particles.append(Particle(
                x=x, y=y + r() * 10 - 5,
                vx=-r() * 2 - 2, vy=(r() - 0.5) * 2,
                size=r() * 2 + 1, color=(255, int(100 + r() * 100), 0),
                life=0.5, shrink=0.95,
            ))

    def shake(self, frames: int, intensity: float):
        self.shake_frames = max(self.shake_frames, frames)
        self.shake_intensity = max(self.shake_intensity, intensity)

    def shake_offset(self) -> Tuple[float, float]:
        """Camera offset for this frame; decays the shake"""
        if self.shake_frames <= 0:
            return 0.0, 0.0
        k = self.shake_intensity
        offset = (self.rng.uniform(-k, k), self.rng.uniform(-k, k))
        self.shake_frames -= 1
        self.shake_intensity *= 0.9
        return offset

    def update(self):
        self.particles = [p for p in self.particles if p.update()]

    def clear(self):
        self.particles.clear()
        self.shake_frames = 0
        self.shake_intensity = 0.0
