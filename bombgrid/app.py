from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import pygame

from .components import Direction, GameStatus
from .constants import DEBUG, FPS, HUD_H, GameConfig
from .mapgen import MapGenerationError
from .events import EventBus, Quit, Restart, ToggleDebug
from .state import GameState, new_game
from .systems.ai import WanderAI
from .systems.bombs import BombSystem
from .systems.controller import PlayerController
from .systems.input import InputSystem
from .systems.outcome import OutcomeSystem
from .systems.render import RenderSystem

logger = logging.getLogger(__name__)


class Game:
    """
    Owns the current GameState and steps it one tick at a time:
    bombs -> explosions -> enemy AI (while playing) -> outcome.
    Ticking never stops on its own; a finished round just keeps its status.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        bus: Optional[EventBus] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self.config = config or (state.config if state is not None else GameConfig())
        self.bus = bus or EventBus()
        self.controller: Optional[PlayerController] = None
        self._load(state if state is not None else new_game(self.config))

    def _load(self, state: GameState) -> None:
        if self.controller is not None:
            self.controller.detach()
        self.state = state
        self.bombs = BombSystem(state, self.bus)
        self.ai = WanderAI(state)
        self.outcome = OutcomeSystem(state, self.bus)
        self.controller = PlayerController(state, self.bombs, self.bus)

    def restart(self) -> GameState:
        """Fresh round with the next seed."""
        seed = ((self.state.seed or 0) + 1) % 2**32
        self._load(new_game(replace(self.config, seed=seed)))
        return self.state

    # ---- Player entry points ----
    def try_move(self, direction: Direction) -> bool:
        return self.controller.try_move(direction)

    def place_bomb(self) -> Optional[int]:
        return self.controller.place_bomb()

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def status_text(self) -> str:
        return self.state.status_text

    # ---- Scheduler ----
    def tick(self) -> GameStatus:
        self.state.tick += 1
        self.bombs.advance_bombs()
        self.bombs.advance_explosions()
        if self.state.status is GameStatus.PLAYING:
            self.ai.update()
        return self.outcome.evaluate()

    def run_ticks(self, n: int) -> GameStatus:
        status = self.state.status
        for _ in range(n):
            status = self.tick()
        return status


def _build_parser() -> argparse.ArgumentParser:
    defaults = GameConfig()
    parser = argparse.ArgumentParser(description="Grid bomber arcade game")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible round")
    parser.add_argument("--enemies", type=int, default=defaults.enemy_count, help=f"Enemy count (default: {defaults.enemy_count})")
    parser.add_argument("--rows", type=int, default=defaults.rows, help=f"Board rows (default: {defaults.rows})")
    parser.add_argument("--cols", type=int, default=defaults.cols, help=f"Board columns (default: {defaults.cols})")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(rows=args.rows, cols=args.cols, enemy_count=args.enemies, seed=args.seed)


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, args.log_level),
    )

    bus = EventBus()
    try:
        game = Game(config_from_args(args), bus)
    except (ValueError, MapGenerationError) as exc:
        parser.error(str(exc))

    pygame.init()
    pygame.display.set_caption("bombgrid")
    map_w, map_h = game.state.grid.map_pixel_size()
    screen = pygame.display.set_mode((map_w, map_h + HUD_H))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas,menlo,monaco,dejavu sans mono", 20)

    input_sys = InputSystem(bus, lambda: game.controller.accepting_input())
    renderer = RenderSystem(screen, font)

    running = True

    def _on_quit(_: Quit) -> None:
        nonlocal running
        running = False

    def _on_toggle(_: ToggleDebug) -> None:
        DEBUG.show_stats = not DEBUG.show_stats

    bus.subscribe(Quit, _on_quit)
    bus.subscribe(ToggleDebug, _on_toggle)
    bus.subscribe(Restart, lambda _: game.restart())

    while running:
        for ev in pygame.event.get():
            input_sys.handle_event(ev)
        if not running:
            break

        game.tick()
        renderer.render(game.state.snapshot(), game.state.world.cache_stats)
        pygame.display.flip()

        # One simulation step per displayed frame
        clock.tick(FPS)

    pygame.quit()
    sys.exit(0)


if __name__ == "__main__":
    main()
