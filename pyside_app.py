import logging
import random
import sys
from typing import Dict, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QApplication, QMainWindow, QWidget

from combat import (
    BoardTheme,
    CombatAI,
    GameState,
    GameStateService,
    InteractionController,
    PersistenceError,
    Side,
)
from config import GameConfig, config_from_args
from ui.board_surface import BoardSurface
from ui.theme import window_stylesheet

logger = logging.getLogger(__name__)

SIDE_NAMES = {Side.PLAYER: "good", Side.ENEMY: "evil"}


class GameWindow(QMainWindow):
    """Host application: wires the surface, controller, AI and persistence."""

    def __init__(self, config: Optional[GameConfig] = None):
        super().__init__()
        self.config = config or GameConfig()
        self.setWindowTitle("Skirmish")
        self.setStyleSheet(window_stylesheet())

        self.rng = random.Random(self.config.seed)
        self.service = GameStateService(self.config.save_file)
        self.state = GameState.new_game(self.config.board_size, self.rng)
        self._generation = 0

        central = QWidget()
        self.setCentralWidget(central)
        self.surface = BoardSurface(
            self.config.board_size,
            damage_duration_ms=self.config.damage_duration_ms,
            projectile_steps=self.config.projectile_steps,
            projectile_interval_ms=self.config.projectile_interval_ms,
        )
        self.surface.bind(central)
        self.surface.render(BoardTheme(self.config.theme))

        human_sides = () if self.config.demo else (Side.PLAYER,)
        self.controller = InteractionController(
            self.surface, self.state, human_sides=human_sides, advance_turn=self.advance_turn,
        )
        self.controller.connect()
        self.ais: Dict[Side, CombatAI] = {
            side: CombatAI(self.controller, side, strategy=self.config.strategy, rng=self.rng)
            for side in Side if side not in human_sides
        }

        self.surface.add_new_game_listener(self.new_game)
        self.surface.add_save_game_listener(self.save_game)
        self.surface.add_load_game_listener(self.load_game)

        self._start()

    # ------------------------------------------------------------------
    # Turn flow
    # ------------------------------------------------------------------

    def _start(self) -> None:
        self._generation += 1
        self.surface.redraw_positions(self.state.positions)
        self._update_labels()
        self._schedule_ai()

    def _replace_state(self, state: GameState) -> None:
        self.surface.cancel_animations()
        self.state = state
        self.controller.reset(rules=state)
        self._start()

    def advance_turn(self) -> None:
        side = self.state.advance_turn()
        self._update_labels()
        if self.state.is_over():
            self._announce_winner()
            return
        if side not in self.ais and not self.state.can_act(side):
            if not self.state.can_act(side.opponent()):
                logger.info("Neither side can act")
                self.surface.show_message("Neither side can act; the game is a draw.")
                return
            logger.info("%s cannot act and passes", side.value)
            self.advance_turn()
            return
        logger.debug("Turn passes to %s", side.value)
        self._schedule_ai()

    def _schedule_ai(self) -> None:
        if self.state.current_side not in self.ais or self.state.is_over():
            return
        generation = self._generation
        QTimer.singleShot(self.config.ai_delay_ms, lambda: self._run_ai(generation))

    def _run_ai(self, generation: int) -> None:
        if generation != self._generation or self.state.is_over():
            return
        ai = self.ais.get(self.state.current_side)
        if ai is None:
            return
        result = ai.request_strategy()
        if not result.committed and not self.controller.busy and self.state.current_side is ai.side:
            logger.info("%s cannot act and passes", ai.side.value)
            self.advance_turn()

    def _update_labels(self) -> None:
        controls = self.surface.controls
        for side, label in ((Side.PLAYER, controls.player_label), (Side.ENEMY, controls.enemy_label)):
            marker = "▶ " if side is self.state.current_side else ""
            label.setText(f"{marker}{SIDE_NAMES[side]} ({len(self.state.owned_positions(side))})")

    def _announce_winner(self) -> None:
        winner = self.state.winner()
        if winner is None:
            self.surface.show_message("Nobody is left standing.")
        else:
            self.surface.show_message(f"Side '{SIDE_NAMES[winner]}' wins!")

    # ------------------------------------------------------------------
    # Lifecycle buttons
    # ------------------------------------------------------------------

    def new_game(self) -> None:
        logger.info("Starting a new game")
        self._replace_state(GameState.new_game(self.config.board_size, self.rng))

    def save_game(self) -> None:
        try:
            self.service.save(self.state)
        except PersistenceError as exc:
            self.surface.show_error(str(exc))
            return
        self.surface.show_message("Game saved.")

    def load_game(self) -> None:
        try:
            state = self.service.load()
        except PersistenceError as exc:
            self.surface.show_error(str(exc))
            return
        if state.board_size != self.surface.board_size:
            self.surface.show_error(
                f"Saved game uses a {state.board_size}x{state.board_size} board, "
                f"this window shows {self.surface.board_size}x{self.surface.board_size}."
            )
            return
        self._replace_state(state)


def main(argv=None):
    config = config_from_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    window = GameWindow(config)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
