from __future__ import annotations

import argparse
import logging
from typing import Dict, Tuple

import pygame

from tetris_rl.env.tetris_env import Action, build_commands
from tetris_rl.game import Command, GameConfig, GameStatus, TetrisGame
from .input import FixedTimestep, KeyRepeat
from .renderer import Renderer


# Keys that auto-repeat while held
REPEAT_KEYS: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
}

# Keys that fire once per press
PRESS_KEYS: Dict[int, Action] = {
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
}


def key_bindings(config: GameConfig) -> Tuple[Dict[int, Command], Dict[int, Command]]:
    """Repeat and press key maps with commands bound to the game's config."""
    commands = build_commands(config)
    repeat = {key: commands[action] for key, action in REPEAT_KEYS.items()}
    press = {key: commands[action] for key, action in PRESS_KEYS.items()}
    return repeat, press


def _handle_flow_key(game: TetrisGame, key: int) -> bool:
    """Start / pause / restart keys. Returns True when the key was consumed."""
    status = game.status
    if key == pygame.K_SPACE and status is GameStatus.IDLE:
        game.start_game()
        return True
    if key == pygame.K_r and status is GameStatus.GAME_OVER:
        game.reset()
        game.start_game()
        return True
    if key == pygame.K_p:
        if status is GameStatus.PLAYING:
            game.pause()
        elif status is GameStatus.PAUSED:
            game.resume()
        return True
    return False


def run(seed: int | None = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed))
        repeat_commands, press_commands = key_bindings(game.config)
        renderer = Renderer(cell_size=28)
        repeat = KeyRepeat()
        timestep = FixedTimestep()

        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("Tetris - Human Play")

        running = True
        while running:
            frame_ms = clock.tick(60)

            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif _handle_flow_key(game, event.key):
                        repeat.clear()
                    elif event.key in PRESS_KEYS:
                        game.execute(press_commands[event.key])
                    elif event.key in REPEAT_KEYS:
                        repeat.press(event.key)
                elif event.type == pygame.KEYUP:
                    repeat.release(event.key)

            # Fixed-step logic: inputs first, then gravity
            for _ in range(timestep.advance(frame_ms)):
                for key in repeat.update(timestep.step_ms):
                    game.execute(repeat_commands[key])
                game.update(timestep.step_ms)

            renderer.draw(screen, game.get_state())
    finally:
        pygame.quit()
    stats = game.get_statistics()
    print(f"Final score: {stats.score}  level: {stats.level}  lines: {stats.lines}")


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
