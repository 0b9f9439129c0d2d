"""
Arcade front end: window, keyboard input, HUD and sounds.

The window owns no game state. It feeds elapsed time and key events to the
World and draws the latest Snapshot it was handed through the listener
interface. The simulation runs in a y-down field; arcade draws y-up, so
every coordinate is flipped on the way out.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import arcade

from .effects import ParticleSystem, Starfield
from .entities import Phase, PickupKind, Snapshot
from .utils import clamp
from .world import World, WorldListener

logger = logging.getLogger(__name__)

SHOOT_SOUND = ":resources:sounds/laser1.wav"
GAME_OVER_SOUND = ":resources:sounds/explosion2.wav"

# Colors
BG = (10, 10, 20)
PLAYER_C = (51, 102, 255)
FLAME_C = (255, 170, 0)
BULLET_C = (255, 255, 0)
ENEMY_C = (255, 51, 51)
ENEMY_BULLET_C = (255, 0, 255)
OBSTACLE_C = (110, 110, 110)
CRATER_C = (80, 80, 80)
CRATE_C = (139, 69, 19)
HEALTH_C = (255, 255, 255)
CROSS_C = (230, 30, 30)
HUD_C = (220, 220, 220)
GOOD_C = (0, 255, 0)
BAD_C = (255, 0, 0)
WAIT_C = (255, 165, 0)


class Presenter(WorldListener):
    """Keeps the last frame and turns world events into particles"""

    def __init__(self, rng: random.Random):
        self.snapshot: Optional[Snapshot] = None
        self.particles = ParticleSystem(rng)
        self.final_score: Optional[int] = None

    def on_frame(self, snapshot: Snapshot):
        self.snapshot = snapshot

    def on_run_started(self):
        self.particles.clear()
        self.final_score = None

    def on_explosion(self, x: float, y: float, kind: str):
        self.particles.explode(x, y, kind)

    def on_game_over(self, score: int, high_score: int):
        self.final_score = score


class ArcadeAudio(WorldListener):
    """Plays sounds for fire and game over; any failure mutes it"""

    def __init__(self, shoot_path: str = SHOOT_SOUND, game_over_path: str = GAME_OVER_SOUND):
        self.enabled = True
        self._shoot = self._load(shoot_path)
        self._game_over = self._load(game_over_path)

    def _load(self, path: str):
        try:
            return arcade.load_sound(path)
        except Exception as e:
            logger.warning("Sound %s unavailable, continuing without it: %s", path, e)
            return None

    def _play(self, sound, volume: float):
        if not self.enabled or sound is None:
            return
        try:
            arcade.play_sound(sound, volume=volume)
        except Exception:
            logger.exception("Sound playback failed, muting")
            self.enabled = False

    def on_primary_fire(self):
        self._play(self._shoot, 0.3)

    def on_special_fire(self):
        self._play(self._shoot, 0.3)

    def on_game_over(self, score: int, high_score: int):
        self._play(self._game_over, 0.5)


class ShooterWindow(arcade.Window):
    """Arcade window driving and rendering a World"""

    def __init__(
        self,
        world: World,
        title: str = "Rocket Shooter",
        audio: Optional[WorldListener] = None,
        max_frame_time: float = 0.25,
        rng: Optional[random.Random] = None,
        interactive: bool = True,
    ):
        cfg = world.config
        super().__init__(cfg.width, cfg.height, title)
        self.background_color = BG
        self.world = world
        self.max_frame_time = max_frame_time
        # a non-interactive window only mirrors a world someone else drives
        self.interactive = interactive

        rng = rng or random.Random()
        self.presenter = Presenter(rng)
        world.add_listener(self.presenter)
        if audio is not None:
            world.add_listener(audio)
        self.stars = Starfield(cfg.width, cfg.height, rng)
        self._ox = 0.0
        self._oy = 0.0

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, key, modifiers):
        if not self.interactive:
            return
        world = self.world
        phase = world.phase

        if phase is Phase.IDLE:
            if key in (arcade.key.ENTER, arcade.key.RETURN):
                world.start_run()
            return

        if phase is Phase.GAME_OVER:
            if key in (arcade.key.R, arcade.key.ENTER, arcade.key.RETURN):
                world.restart_run()
            elif key == arcade.key.M:
                world.return_to_menu()
            return

        if key == arcade.key.SPACE:
            world.fire_primary()
        elif key == arcade.key.X:
            world.fire_special()
        elif key == arcade.key.UP:
            world.input.up = True
        elif key == arcade.key.DOWN:
            world.input.down = True
        elif key == arcade.key.R:
            world.restart_run()

    def on_key_release(self, key, modifiers):
        if key == arcade.key.UP:
            self.world.input.up = False
        elif key == arcade.key.DOWN:
            self.world.input.down = False

    # ----------------------------
    # Update
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive:
            return
        # a stalled frame (window drag) should not replay seconds of game
        self.world.advance(min(delta_time, self.max_frame_time))
        self._update_effects()

    def draw_frame(self):
        """Pump events and show one frame without advancing the world"""
        self.dispatch_events()
        self._update_effects()
        self.on_draw()
        self.flip()

    def _update_effects(self):
        self.stars.update()
        snap = self.presenter.snapshot
        if self.world.phase is Phase.ACTIVE and snap is not None:
            p = snap.player
            self.presenter.particles.engine_trail(p.x, p.y + p.height * 0.3)
            self.presenter.particles.engine_trail(p.x, p.y + p.height * 0.7)
        self.presenter.particles.update()

    # ----------------------------
    # Drawing
    # ----------------------------

    def _rect(self, x, y, w, h, color):
        """Filled rectangle from y-down field coordinates"""
        top = self.height - y + self._oy
        left = x + self._ox
        arcade.draw_lrbt_rectangle_filled(left, left + w, top - h, top, color)

    def _circle(self, x, y, r, color):
        arcade.draw_circle_filled(x + self._ox, self.height - y + self._oy, r, color)

    def _poly(self, points, color):
        arcade.draw_polygon_filled(
            [(px + self._ox, self.height - py + self._oy) for px, py in points], color
        )

    def _text(self, text, x, y, color, size=14, anchor_x="left"):
        arcade.draw_text(text, x, self.height - y, color, size, anchor_x=anchor_x)

    def on_draw(self):
        self.clear()
        self._ox, self._oy = self.presenter.particles.shake_offset()

        for star in self.stars.stars:
            self._circle(star.x, star.y, star.size / 2, (255, 255, 255, 200))

        if self.world.phase is Phase.IDLE:
            self._ox = self._oy = 0.0
            self._draw_menu()
            return

        snap = self.presenter.snapshot
        if snap is not None:
            self._draw_world(snap)

        for part in self.presenter.particles.particles:
            r, g, b = part.color
            self._circle(part.x, part.y, max(part.size, 0.5), (r, g, b, part.alpha))

        self._ox = self._oy = 0.0
        if snap is not None:
            self._draw_hud(snap)
        if self.world.phase is Phase.GAME_OVER:
            self._draw_game_over()

    def _draw_world(self, snap: Snapshot):
        for pk in snap.pickups:
            if pk.kind is PickupKind.AMMO:
                self._rect(pk.x, pk.y, pk.width, pk.height, CRATE_C)
                self._poly([
                    (pk.x + pk.width * 0.55, pk.y + 4),
                    (pk.x + pk.width * 0.3, pk.y + pk.height * 0.55),
                    (pk.x + pk.width * 0.5, pk.y + pk.height * 0.55),
                    (pk.x + pk.width * 0.45, pk.y + pk.height - 4),
                    (pk.x + pk.width * 0.7, pk.y + pk.height * 0.45),
                    (pk.x + pk.width * 0.5, pk.y + pk.height * 0.45),
                ], BULLET_C)
            else:
                self._rect(pk.x, pk.y, pk.width, pk.height, HEALTH_C)
                self._rect(pk.x + pk.width * 0.4, pk.y + 5, pk.width * 0.2, pk.height - 10, CROSS_C)
                self._rect(pk.x + 5, pk.y + pk.height * 0.4, pk.width - 10, pk.height * 0.2, CROSS_C)

        for o in snap.obstacles:
            cx, cy = o.center
            arcade.draw_ellipse_filled(
                cx + self._ox, self.height - cy + self._oy, o.width, o.height, OBSTACLE_C
            )
            self._circle(cx - o.width * 0.15, cy - o.height * 0.2, o.width * 0.12, CRATER_C)
            self._circle(cx + o.width * 0.12, cy + o.height * 0.15, o.width * 0.1, CRATER_C)

        for e in snap.enemies:
            self._poly([
                (e.x, e.y + e.height / 2),
                (e.x + e.width, e.y),
                (e.x + e.width * 0.8, e.y + e.height / 2),
                (e.x + e.width, e.y + e.height),
            ], ENEMY_C)

        for b in snap.enemy_projectiles:
            self._rect(b.x, b.y, b.width, b.height, ENEMY_BULLET_C)

        for b in snap.projectiles:
            self._rect(b.x, b.y, b.width, b.height, BULLET_C)

        p = snap.player
        if self.world.phase is Phase.ACTIVE:
            self._poly([
                (p.x, p.y + p.height * 0.3),
                (p.x - 12, p.y + p.height / 2),
                (p.x, p.y + p.height * 0.7),
            ], FLAME_C)
        self._poly([
            (p.x, p.y + p.height * 0.2),
            (p.x + p.width * 0.7, p.y + p.height * 0.2),
            (p.x + p.width, p.y + p.height / 2),
            (p.x + p.width * 0.7, p.y + p.height * 0.8),
            (p.x, p.y + p.height * 0.8),
        ], PLAYER_C)
        self._poly([(p.x, p.y), (p.x + p.width * 0.3, p.y + p.height * 0.2), (p.x, p.y + p.height * 0.2)], PLAYER_C)
        self._poly([(p.x, p.y + p.height), (p.x + p.width * 0.3, p.y + p.height * 0.8),
                    (p.x, p.y + p.height * 0.8)], PLAYER_C)
        self._circle(p.x + p.width * 0.6, p.y + p.height / 2, p.height * 0.15, (135, 206, 235))

    def _draw_hud(self, snap: Snapshot):
        cfg = self.world.config
        p = snap.player

        self._text(f"Score: {snap.run.score}", 10, 30, HUD_C, 18)
        self._text(f"High Score: {snap.run.high_score}", 10, 56, HUD_C, 14)
        self._text(f"Ammo: {p.ammo}", 10, 84, HUD_C, 16)
        self._text(f"Bullets on screen: {len(snap.projectiles)}", 10, 108, HUD_C, 12)

        # Health bar
        bar_w, bar_h = 200, 20
        x0, y0 = cfg.width - bar_w - 20, 20
        self._rect(x0, y0, bar_w, bar_h, (60, 60, 60))
        frac = clamp(p.health / cfg.max_health, 0.0, 1.0)
        if frac > 0:
            color = GOOD_C if frac > 0.6 else WAIT_C if frac > 0.3 else BAD_C
            self._rect(x0, y0, bar_w * frac, bar_h, color)
        self._text(f"Health: {p.health}", x0 + bar_w / 2, y0 + 15, (255, 255, 255), 12, "center")

        # Spread shot readiness
        ready = self.world.special_ready_fraction()
        can_spread = p.ammo >= cfg.spread_ammo_cost and ready >= 1.0
        label = "Spread Shot [X]: READY" if can_spread else "Spread Shot [X]: NOT READY"
        self._text(label, 10, 128, GOOD_C if can_spread else BAD_C, 12)
        self._rect(10, 136, 200, 10, (60, 60, 60))
        self._rect(10, 136, 200 * ready, 10, GOOD_C if ready >= 1.0 else WAIT_C)
        if ready < 1.0:
            remaining = (1.0 - ready) * cfg.spread_cooldown
            self._text(f"{remaining:.1f}s", 215, 146, HUD_C, 10)

    def _draw_menu(self):
        cfg = self.world.config
        cx = cfg.width / 2
        self._text("ROCKET SHOOTER", cx, cfg.height * 0.3, (51, 102, 255), 40, "center")
        self._text("Press ENTER to start", cx, cfg.height * 0.45, HUD_C, 20, "center")
        controls = [
            "UP / DOWN  move",
            "SPACE  shoot",
            f"X  spread shot ({cfg.spread_ammo_cost} ammo)",
        ]
        for i, line in enumerate(controls):
            self._text(line, cx, cfg.height * 0.62 + i * 26, HUD_C, 14, "center")
        self._text(f"High Score: {self.world.run.high_score}", cx, cfg.height * 0.88, WAIT_C, 16, "center")

    def _draw_game_over(self):
        cfg = self.world.config
        cx = cfg.width / 2
        self._rect(0, 0, cfg.width, cfg.height, (0, 0, 0, 150))
        self._text("GAME OVER", cx, cfg.height * 0.4, BAD_C, 40, "center")
        score = self.presenter.final_score
        if score is None:
            score = self.world.run.score
        self._text(f"Final Score: {score}", cx, cfg.height * 0.5, HUD_C, 20, "center")
        self._text("R  restart      M  menu", cx, cfg.height * 0.6, HUD_C, 16, "center")


def play(world: World, mute: bool = False, rng: Optional[random.Random] = None):
    """Open the window and run the arcade event loop until it is closed"""
    audio = None if mute else ArcadeAudio()
    window = ShooterWindow(world, audio=audio, rng=rng)
    try:
        arcade.run()
    finally:
        world.close()
    return window
