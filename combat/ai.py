"""
Skirmish AI - autonomous turn procedure for a non-human side.

The AI is a plain client of the interaction controller: it activates a
character, arms an action and clicks a target through the same entry point
a human click reaches.

Usage:
    ai = CombatAI(controller, side=Side.ENEMY, strategy="random")
    result = ai.request_strategy()

Strategies:
    - "random": uniform draw of a character, then of a target (default)
    - "revenge": strike back at whoever hit us last turn, else "random"
"""

from __future__ import annotations

import logging
import random as _random
from concurrent.futures import Future
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .enums import ActionKind, Side

if TYPE_CHECKING:
    from .controller import InteractionController

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Strategy configuration
# ---------------------------------------------------------------------------

STRATEGY_DEFAULTS = {
    "random": {
        "retaliate": False,
    },
    "revenge": {
        "retaliate": True,
    },
}

DEFAULT_STRATEGY = "random"


@dataclass(frozen=True)
class StrategyResult:
    """Outcome of one ``request_strategy`` call.

    ``committed`` is False when the side had no legal action at all; the
    caller decides what a pass means for the game.
    """

    committed: bool
    action: Optional[ActionKind] = None
    source: Optional[int] = None
    target: Optional[int] = None
    future: Optional[Future] = None


# ---------------------------------------------------------------------------
# CombatAI
# ---------------------------------------------------------------------------

class CombatAI:
    """Autonomous decision maker for one side.

    Parameters
    ----------
    controller : InteractionController
        Controller whose click entry point the AI drives.
    side : Side
        The side this AI plays; bound for the AI's lifetime.
    strategy : str
        ``"random"`` (default) or ``"revenge"``. Unknown names fall back to
        ``"random"``.
    rng : random.Random | None
        Source of randomness, seedable for reproducible games.
    decision_log : list[str] | None
        Optional list to append decision explanations to (for UI transparency).
    """

    def __init__(
        self,
        controller: InteractionController,
        side: Side = Side.ENEMY,
        strategy: str = DEFAULT_STRATEGY,
        rng: Optional[_random.Random] = None,
        decision_log: Optional[List[str]] = None,
        show_decisions: bool = True,
    ) -> None:
        if strategy not in STRATEGY_DEFAULTS:
            logger.warning("Unknown strategy %r, using %r", strategy, DEFAULT_STRATEGY)
            strategy = DEFAULT_STRATEGY
        self.controller = controller
        self.side = side
        self.strategy = strategy
        self.config: Dict[str, Any] = dict(STRATEGY_DEFAULTS[strategy])
        self.rng = rng or _random.Random()
        self.decision_log: List[str] = decision_log if decision_log is not None else []
        self.show_decisions = show_decisions

    @property
    def rules(self):
        return self.controller.rules

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def request_strategy(self) -> StrategyResult:
        """Play exactly one action for ``self.side``, or report that none exists."""
        if self.rules.is_over():
            self._log("Game is over; nothing to do.")
            return StrategyResult(False)
        if self.controller.acting_side is not self.side:
            self._log(f"Not {self.side.value}'s turn; nothing to do.")
            return StrategyResult(False)
        if self.controller.busy:
            self._log("Previous action still animating; skipping request.")
            return StrategyResult(False)

        if self.config["retaliate"]:
            result = self._revenge_strategy()
            if result is not None:
                return result
        return self._random_strategy()

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _random_strategy(self) -> StrategyResult:
        """Draw characters at random until one has a legal action.

        Every character is drawn at most once, so a side with no legal
        action at all ends in a pass instead of spinning forever.
        """
        candidates = sorted(self.rules.owned_positions(self.side))
        self.rng.shuffle(candidates)
        for source in candidates:
            armed = self.controller.activate(source)
            attack_cells = sorted(armed.attack_cells)
            move_cells = sorted(armed.move_cells)
            if attack_cells:
                return self._issue(ActionKind.ATTACK, source, self.rng.choice(attack_cells))
            if move_cells:
                return self._issue(ActionKind.MOVE, source, self.rng.choice(move_cells))
            self._log(f"Decision (random): cell {source} is boxed in, drawing again.")

        self.controller.reset()
        self._log(f"Decision: {self.side.value} has no legal action, passing.")
        return StrategyResult(False)

    def _revenge_strategy(self) -> Optional[StrategyResult]:
        """Hit back from the cell that was attacked last turn, if still possible."""
        last = self.rules.last_turn()
        if last is None or last.action is not ActionKind.ATTACK:
            return None
        if last.to_index not in self.rules.owned_positions(self.side):
            return None
        armed = self.controller.activate(last.to_index)
        if last.from_index not in armed.attack_cells:
            self._log(f"Decision (revenge): attacker at {last.from_index} is out of reach.")
            return None
        self._log(f"Decision (revenge): retaliating from {last.to_index} on {last.from_index}.")
        return self._issue(ActionKind.ATTACK, last.to_index, last.from_index)

    def _issue(self, kind: ActionKind, source: int, target: int) -> StrategyResult:
        self.controller.arm(kind)
        self._log(f"Decision: {kind.value} from {source} to {target}.")
        future = self.controller.click(target)
        if future is None:
            raise RuntimeError(f"Controller rejected {kind.value} from {source} to {target}")
        return StrategyResult(True, kind, source, target, future)

    def _log(self, message: str) -> None:
        logger.info(message)
        if self.show_decisions:
            self.decision_log.append(message)
