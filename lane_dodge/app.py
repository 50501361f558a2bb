#!/usr/bin/env python3
"""Play Lane Dodge in a pygame window."""

import argparse
import logging
from concurrent.futures import ThreadPoolExecutor

import pygame

from lane_dodge.clock import PygameTicker
from lane_dodge.config import GameConfig
from lane_dodge.engine import SimulationEngine
from lane_dodge.input import GestureTracker, apply_command
from lane_dodge.persistence import DEFAULT_HIGHSCORE_FILE, BestScoreWriter, FileBestScoreStore, load_best_score
from lane_dodge.render import Renderer
from lane_dodge.rng import default_rng

logger = logging.getLogger(__name__)

FPS = 60


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Dodge falling blocks by switching lanes.")
    parser.add_argument("--width", type=int, help="Playfield width in pixels")
    parser.add_argument("--height", type=int, help="Playfield height in pixels")
    parser.add_argument("--tick-ms", type=int, help="Simulation tick period")
    parser.add_argument("--spawn-ms", type=int, help="Spawn decision period")
    parser.add_argument("--seed", type=int, help="Seed for obstacle generation")
    parser.add_argument(
        "--highscore-file",
        default=str(DEFAULT_HIGHSCORE_FILE),
        help="Where the best score is kept (default: %(default)s)",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: %(default)s)")
    return parser.parse_args(argv)


def build_config(args):
    return GameConfig().with_overrides(
        width=args.width,
        height=args.height,
        tick_ms=args.tick_ms,
        spawn_ms=args.spawn_ms,
    )


def run(config, store, seed=None):
    pygame.init()
    screen = pygame.display.set_mode((config.width, config.height))
    pygame.display.set_caption("Lane Dodge")
    frame_clock = pygame.time.Clock()

    sim_ticker = PygameTicker()
    spawn_ticker = PygameTicker()
    engine = SimulationEngine(
        config=config,
        rng=default_rng(seed),
        best_score=load_best_score(store),
        sim_ticker=sim_ticker,
        spawn_ticker=spawn_ticker,
    )
    writer = BestScoreWriter(store, executor=ThreadPoolExecutor(max_workers=1))
    engine.add_best_score_listener(writer)

    renderer = Renderer(config)
    tracker = GestureTracker(config.width, config.swipe_threshold)

    engine.start()
    running = True
    try:
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                    running = False
                    break
                if sim_ticker.dispatch(event) or spawn_ticker.dispatch(event):
                    continue
                command = tracker.handle(event, game_over=engine.snapshot().game_over)
                if command is not None:
                    apply_command(engine, command)

            renderer.draw(screen, engine.snapshot())
            pygame.display.flip()
            frame_clock.tick(FPS)
    finally:
        engine.stop()
        writer.close()
        pygame.quit()

    logger.info(f"Session finished, best score {engine.best_score}")
    return engine.best_score


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = build_config(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    run(config, FileBestScoreStore(args.highscore_file), seed=args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
