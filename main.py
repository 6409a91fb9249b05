import argparse
import dataclasses
import logging
import time
from typing import Optional, Sequence, Tuple

import hsluv
import numpy as np
import pygame
import pygame.gfxdraw

import config
from config import SimulationConfig
from diagnostics import summarize
from logging_config import setup_logging
from seeding import make_rng
from world import World

logger = logging.getLogger(__name__)


def to_rgb255(color: Sequence[float]) -> Tuple[int, int, int]:
    return tuple(int(round(min(max(c, 0.0), 1.0) * 255)) for c in color)


class Renderer:
    """Draws bodies as filled disks through an orthographic projection.

    World x spans [-aspect, aspect] and y spans [-1, 1], with y pointing up.
    """

    def __init__(self, window_size, color_by_velocity: bool = False):
        self.window_size = window_size
        width, height = window_size
        self.aspect = width / height
        self.color_by_velocity = color_by_velocity
        self.background_color = to_rgb255(config.BACKGROUND_COLOR)
        self.body_color = to_rgb255(config.BODY_COLOR)

    def world_to_screen(self, positions: np.ndarray) -> np.ndarray:
        """Map ``(n, 2)`` world positions to pixel coordinates."""
        width, height = self.window_size
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 2)
        screen = np.empty_like(positions)
        screen[:, 0] = (positions[:, 0] / self.aspect + 1.0) * width / 2
        screen[:, 1] = (1.0 - positions[:, 1]) * height / 2
        return screen

    def radius_to_pixels(self, radii: np.ndarray) -> np.ndarray:
        return np.asarray(radii, dtype=np.float64) * self.window_size[1] / 2

    def _get_velocity_color(self, velocity: np.ndarray) -> tuple:
        """Convert velocity to color using HSLuv color space."""
        speed = np.linalg.norm(velocity)
        if not np.isfinite(speed):
            return self.body_color
        if speed == 0:
            return (255, 255, 255)  # White for stationary bodies

        # Hue from velocity direction
        angle = np.arctan2(velocity[1], velocity[0])
        hue = (angle + np.pi) * 180 / np.pi

        # Speeds here are tiny, so shift the log scale into a useful range
        log_speed = np.log10(speed) + 5.0
        saturation = min(100.0, max(0.0, 50.0 + log_speed * 20.0))
        lightness = max(20.0, min(80.0, 60.0 - log_speed * 10.0))

        rgb = hsluv.hsluv_to_rgb([hue, saturation, lightness])
        return to_rgb255(rgb)

    def draw(self, screen, world: World) -> None:
        screen.fill(self.background_color)
        screen_positions = self.world_to_screen(world.get_body_positions())
        screen_radii = self.radius_to_pixels(world.get_body_radii())
        velocities = world.get_body_velocities()

        width, height = self.window_size
        for pos, vel, radius in zip(screen_positions, velocities, screen_radii):
            if not (np.all(np.isfinite(pos)) and np.isfinite(radius)):
                continue
            color = self._get_velocity_color(vel) if self.color_by_velocity else self.body_color
            r = max(int(round(radius)), 1)
            x, y = int(pos[0]), int(pos[1])
            # Skip bodies entirely off screen
            if -r <= x <= width + r and -r <= y <= height + r:
                pygame.gfxdraw.filled_circle(screen, x, y, r, color)
                pygame.gfxdraw.aacircle(screen, x, y, r, color)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="N-body gravity simulation rendered as disks")
    p.add_argument("--bodies", type=int, default=config.N_BODIES, help="number of bodies")
    p.add_argument("--seed", type=int, default=None, help="random seed for initial conditions")
    p.add_argument("--dt", type=float, default=config.DT, help="timestep per frame")
    p.add_argument("--workers", type=int, default=1, help="threads for the force pass")
    p.add_argument("--color-by-velocity", action="store_true", help="color bodies by velocity (HSLuv)")
    p.add_argument("--steps", type=int, default=None,
                   help="run this many steps without a window, then exit")
    p.add_argument("--log-every", type=int, default=100, help="frames between diagnostics log lines")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--log-file", default=None, help="also write logs to this file")
    return p


def log_diagnostics(world: World) -> None:
    stats = summarize(world)
    logger.info(f"frame {stats['frame']} | E={stats['energy']:.6g} "
                f"(K={stats['kinetic']:.6g}, U={stats['potential']:.6g}) | |p|={stats['momentum']:.3g}")
    if stats["nonfinite"]:
        logger.warning(f"{stats['nonfinite']} bodies have non-finite state")


def run_headless(world: World, steps: int, dt: float, log_every: int) -> None:
    start = time.time()
    for _ in range(steps):
        world.tick(dt)
        if log_every and world.frame % log_every == 0:
            log_diagnostics(world)
    elapsed = time.time() - start
    logger.info(f"Ran {steps} steps in {elapsed:.2f}s")


def run_window(world: World, dt: float, log_every: int, color_by_velocity: bool) -> None:
    pygame.init()
    screen = pygame.display.set_mode(config.WINDOW_SIZE)
    pygame.display.set_caption("N-Body")

    renderer = Renderer(config.WINDOW_SIZE, color_by_velocity=color_by_velocity)
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 24)
    fps_update_interval = 0.5
    last_fps_update = time.time()
    fps_display = "FPS: 0"
    frame_count = 0
    physics_time = 0.0
    paused = False

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                    logger.info("Paused" if paused else "Resumed")

        if not paused:
            physics_start = time.time()
            world.tick(dt)
            physics_time = (time.time() - physics_start) * 1000
            if log_every and world.frame % log_every == 0:
                log_diagnostics(world)

        renderer.draw(screen, world)

        frame_count += 1
        current_time = time.time()
        if current_time - last_fps_update > fps_update_interval:
            fps = frame_count / (current_time - last_fps_update)
            fps_display = f"FPS: {fps:.1f} | Physics: {physics_time:.1f}ms | Bodies: {len(world):,}"
            frame_count = 0
            last_fps_update = current_time

        screen.blit(font.render(fps_display, True, (255, 255, 0)), (10, 10))
        pygame.display.flip()
        clock.tick(config.MAX_FPS)

    pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.workers < 1:
        parser.error("--workers must be at least 1")
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        sim_config = dataclasses.replace(SimulationConfig(), n_bodies=args.bodies, dt=args.dt)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    with World.seeded(sim_config, make_rng(args.seed), workers=args.workers) as world:
        if args.steps is not None:
            run_headless(world, args.steps, sim_config.dt, args.log_every)
        else:
            run_window(world, sim_config.dt, args.log_every, args.color_by_velocity)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
