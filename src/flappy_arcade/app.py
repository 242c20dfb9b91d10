"""
app.py: pygame host with window, input, rendering and sound around a SessionDriver.
"""

import argparse
import logging
import os
import random
import sys
from typing import Dict, Optional

import pygame

from .config import GameConfig, DEFAULT_CONFIG
from .data_models import GameEvent, GameSnapshot, ProgressionState, SessionState
from .driver import SessionDriver
from .game_session import GameSession

logger = logging.getLogger(__name__)

# RENDER_FPS only affects drawing; simulation steps come from the driver
RENDER_FPS = 60

SOUND_FILES = {
    GameEvent.COLLISION: "collision.wav",
    GameEvent.GAME_OVER: "game_over.wav",
    GameEvent.LEVEL_UP: "level_up.wav",
}
MUSIC_FILE = "music.ogg"


def setup_logging(level: str = "info"):
    """Configure the flappy_arcade logger with a compact stderr handler."""
    root = logging.getLogger("flappy_arcade")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname).1s] %(name)s: %(message)s", datefmt="%H:%M:%S"))
    root.addHandler(handler)


# ----------------- Audio (pygame.mixer) -----------------

class MixerAudioSink:
    """Plays a sound per event and loops music while a session is active."""

    def __init__(self, assets_dir: Optional[str] = None, muted: bool = False):
        self.sounds: Dict[GameEvent, "pygame.mixer.Sound"] = {}
        self.music_path: Optional[str] = None
        self.enabled = not muted
        if not self.enabled:
            return

        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            self.enabled = False
            return

        if not assets_dir:
            return
        for event, filename in SOUND_FILES.items():
            path = os.path.join(assets_dir, filename)
            if not os.path.exists(path):
                logger.info("No sound for %s (%s missing)", event.value, path)
                continue
            try:
                self.sounds[event] = pygame.mixer.Sound(path)
            except pygame.error as e:
                logger.warning("Skipping sound for %s (%s): %s", event.value, path, e)
        music = os.path.join(assets_dir, MUSIC_FILE)
        if os.path.exists(music):
            self.music_path = music

    def on_event(self, event: GameEvent, progression: ProgressionState) -> None:
        if not self.enabled:
            return
        if event is GameEvent.STARTED:
            self._play_music()
        sound = self.sounds.get(event)
        if sound:
            sound.stop()
            sound.play()

    def _play_music(self):
        if not self.music_path or pygame.mixer.music.get_busy():
            return
        pygame.mixer.music.load(self.music_path)
        pygame.mixer.music.set_volume(0.5)
        pygame.mixer.music.play(loops=-1)

    def close(self):
        if self.enabled:
            pygame.mixer.music.stop()
            pygame.mixer.quit()


# ----------------- Rendering -----------------

class PygameRenderer:
    """Presentation sink: keeps the latest snapshot and draws it once per frame."""

    def __init__(self, screen, config: GameConfig):
        self.screen = screen
        self.config = config
        self.snapshot: Optional[GameSnapshot] = None
        self.large_font = pygame.font.Font(None, 40)
        self.font = pygame.font.Font(None, 24)

    def present(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot

    def draw(self):
        cfg = self.config
        screen = self.screen
        screen.fill((173, 216, 230))
        white = (255, 255, 255)
        dark = (40, 40, 40)

        snap = self.snapshot
        if snap is None or snap.state is SessionState.NOT_STARTED:
            self._banner("Flappy Bird", "Press ENTER or click to start, SPACE to jump")
            pygame.display.flip()
            return

        pipe_color = (0, 150, 0) if not snap.progression.advanced_mode else (150, 60, 0)
        for pipe in snap.obstacles:
            pygame.draw.rect(screen, pipe_color, (pipe.x, 0, cfg.pipe_width, pipe.gap_y))
            bottom_y = pipe.gap_y + cfg.gap_size
            pygame.draw.rect(screen, pipe_color,
                             (pipe.x, bottom_y, cfg.pipe_width, cfg.playfield_height - bottom_y))

        # Bird tilts with its velocity
        size = int(cfg.bird_size)
        bird = pygame.Surface((size, size), pygame.SRCALPHA)
        pygame.draw.ellipse(bird, (255, 215, 0), (0, 0, size, size))
        pygame.draw.circle(bird, dark, (int(size * 0.7), int(size * 0.35)), 3)
        angle = max(-30.0, min(90.0, snap.bird.velocity * 3))
        rotated = pygame.transform.rotate(bird, -angle)
        center = (cfg.bird_x + size / 2, snap.bird.y + size / 2)
        screen.blit(rotated, rotated.get_rect(center=center))

        prog = snap.progression
        hud = self.large_font.render(f"Score: {prog.score}", True, dark)
        screen.blit(hud, (20, 20))
        level = self.font.render(f"Level {prog.level}  x{prog.speed_multiplier:.2f}", True, dark)
        screen.blit(level, (20, 55))
        if prog.advanced_mode:
            adv = self.font.render("ADVANCED MODE", True, (200, 30, 30))
            screen.blit(adv, (cfg.playfield_width - adv.get_width() - 20, 20))
        if snap.warming_up:
            ready = self.large_font.render("Get ready...", True, white)
            screen.blit(ready, (cfg.playfield_width // 2 - ready.get_width() // 2,
                                cfg.playfield_height // 3))

        if snap.state is SessionState.GAME_OVER:
            self._banner("Game Over!",
                         f"Final Score: {prog.score}  Best: {snap.best_score}  (ENTER to restart)")

        pygame.display.flip()

    def _banner(self, title: str, subtitle: str):
        cfg = self.config
        title_surf = self.large_font.render(title, True, (51, 51, 51))
        sub_surf = self.font.render(subtitle, True, (102, 102, 102))
        width = max(title_surf.get_width(), sub_surf.get_width()) + 40
        box = pygame.Rect(0, 0, width, 100)
        box.center = (cfg.playfield_width // 2, cfg.playfield_height // 2)
        pygame.draw.rect(self.screen, (255, 255, 255), box, border_radius=10)
        self.screen.blit(title_surf, (box.centerx - title_surf.get_width() // 2, box.y + 20))
        self.screen.blit(sub_surf, (box.centerx - sub_surf.get_width() // 2, box.y + 60))


# ----------------- Game Client -----------------

class FlappyApp:
    def __init__(self, config: GameConfig = DEFAULT_CONFIG, seed: Optional[int] = None,
                 assets_dir: Optional[str] = None, muted: bool = False):
        pygame.init()
        self.config = config
        self.screen = pygame.display.set_mode((config.playfield_width, config.playfield_height))
        pygame.display.set_caption("Flappy Bird")

        self.renderer = PygameRenderer(self.screen, config)
        self.audio = MixerAudioSink(assets_dir, muted=muted)
        self.session = GameSession(config, presentation=self.renderer, audio=self.audio,
                                   rng=random.Random(seed))
        self.driver = SessionDriver(self.session)
        self.clock = pygame.time.Clock()

    def handle_event(self, event) -> bool:
        """Maps one pygame event to a command. Returns False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            if event.key == pygame.K_SPACE:
                self.driver.jump()
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.driver.start()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.session.is_active:
                self.driver.jump()
            else:
                self.driver.start()
        return True

    def run(self):
        running = True
        while running:
            elapsed = self.clock.tick(RENDER_FPS)
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False

            # Long stalls (window drag) are capped so the bird doesn't teleport
            self.driver.advance(min(elapsed, 250))
            self.renderer.draw()

        self.driver.cancel()
        self.audio.close()
        pygame.quit()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Flappy Bird with levels and advanced mode")
    parser.add_argument("--seed", type=int, default=None, help="seed for pipe gaps")
    parser.add_argument("--warmup-ms", type=int, default=DEFAULT_CONFIG.warmup_ms)
    parser.add_argument("--assets", default=None, help="directory with optional sound files")
    parser.add_argument("--mute", action="store_true")
    parser.add_argument("--log-level", default="info")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    config = DEFAULT_CONFIG.with_overrides(warmup_ms=args.warmup_ms)
    FlappyApp(config, seed=args.seed, assets_dir=args.assets, muted=args.mute).run()
