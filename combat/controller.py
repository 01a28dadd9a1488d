"""
Interaction controller - turns raw cell indices into committed actions.

The controller is the single authority both human input and the strategy
procedure drive. It keeps its per-turn session as an immutable state value
(``Idle`` or ``Armed``) and swaps the whole value on every transition.

Presentation goes through the surface's public primitives only; game-rule
mutation goes through the rules collaborator (``GameState`` or anything with
the same methods).
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, replace
from typing import Any, Callable, FrozenSet, Iterable, Optional, Union

from .enums import ActionKind, CursorStyle, SelectColor, Side
from .map import chebyshev_distance

logger = logging.getLogger(__name__)

PROJECTILE_COLORS = {
    Side.PLAYER: "gold",
    Side.ENEMY: "crimson",
}


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Armed:
    source: int
    move_cells: FrozenSet[int]
    attack_cells: FrozenSet[int]
    action: Optional[ActionKind] = None

    @property
    def highlighted(self) -> FrozenSet[int]:
        return self.move_cells | self.attack_cells


ControllerState = Union[Idle, Armed]
IDLE = Idle()


# ---------------------------------------------------------------------------
# Future helpers
# ---------------------------------------------------------------------------

def completed_future(result: Any = None) -> Future:
    future: Future = Future()
    future.set_result(result)
    return future


def _transfer(source: Future, target: Future) -> None:
    if target.done():
        return
    if source.cancelled():
        target.cancel()
    elif source.exception() is not None:
        target.set_exception(source.exception())
    else:
        target.set_result(source.result())


def then(first: Future, step: Callable[[], Any]) -> Future:
    """Call ``step`` once ``first`` succeeds.

    If ``step`` returns a future the result is flattened into the returned
    future. Cancellation and errors of ``first`` skip ``step``.
    """
    outer: Future = Future()

    def _after_first(done: Future) -> None:
        if outer.done():
            return
        if done.cancelled() or done.exception() is not None:
            _transfer(done, outer)
            return
        try:
            result = step()
        except Exception as exc:
            outer.set_exception(exc)
            return
        if isinstance(result, Future):
            result.add_done_callback(lambda second: _transfer(second, outer))
        else:
            outer.set_result(result)

    first.add_done_callback(_after_first)
    return outer


# ---------------------------------------------------------------------------
# InteractionController
# ---------------------------------------------------------------------------

class InteractionController:
    """Interpret clicks against the armed action of the acting side.

    Parameters
    ----------
    surface
        Presentation surface (``ui.board_surface.BoardSurface`` or compatible).
    rules
        Rules/state collaborator (``combat.engine.GameState`` or compatible).
    human_sides
        Sides whose surface clicks are forwarded; other sides are driven by a
        strategy calling :meth:`click` directly.
    advance_turn
        Turn-advance collaborator called once per committed action after the
        visual choreography completes. Defaults to ``rules.advance_turn``.
    """

    def __init__(
        self,
        surface,
        rules,
        human_sides: Iterable[Side] = (Side.PLAYER,),
        advance_turn: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.surface = surface
        self.rules = rules
        self.human_sides = set(human_sides)
        self._advance_turn = advance_turn
        self.state: ControllerState = IDLE
        self._pending: Optional[Future] = None

    def connect(self) -> None:
        """Register the controller on the surface's cell channels."""
        self.surface.add_cell_enter_listener(self.on_cell_enter)
        self.surface.add_cell_leave_listener(self.on_cell_leave)
        self.surface.add_cell_click_listener(self.handle_surface_click)

    @property
    def acting_side(self) -> Side:
        return self.rules.current_side

    @property
    def busy(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def reset(self, rules=None) -> None:
        """Drop the session and return to Idle without committing anything."""
        if isinstance(self.state, Armed):
            self.surface.deselect(self.state.source)
        self.surface.dehighlight()
        self.state = IDLE
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
        if rules is not None:
            self.rules = rules

    def _is_own(self, index: int) -> bool:
        return index in self.rules.owned_positions(self.acting_side)

    # ------------------------------------------------------------------
    # Arming
    # ------------------------------------------------------------------

    def activate(self, index: int) -> Armed:
        """Arm on the acting side's character at ``index`` and show its ranges."""
        if not self._is_own(index):
            raise ValueError(f"Cell {index} holds no {self.acting_side.value} character")
        if isinstance(self.state, Armed):
            self.surface.deselect(self.state.source)
        self.surface.dehighlight()
        move_cells, attack_cells = self.rules.reachable(index)
        self.state = Armed(index, frozenset(move_cells), frozenset(attack_cells))
        self.surface.select(index, SelectColor.YELLOW)
        self.surface.highlight(self.state.highlighted)
        logger.debug("Armed on cell %d: %d moves, %d targets",
                     index, len(move_cells), len(attack_cells))
        return self.state

    def arm(self, kind: ActionKind) -> Armed:
        if not isinstance(self.state, Armed):
            raise RuntimeError("No activated source to arm an action on")
        self.state = replace(self.state, action=kind)
        return self.state

    # ------------------------------------------------------------------
    # Clicks
    # ------------------------------------------------------------------

    def handle_surface_click(self, index: int) -> Optional[Future]:
        if self.acting_side not in self.human_sides:
            return None
        return self.click(index)

    def click(self, index: int) -> Optional[Future]:
        """Interpret a click; return the turn future when an action is committed."""
        if self.busy or self.rules.is_over():
            return None
        state = self.state
        if isinstance(state, Armed):
            kind = self._interpret(state, index)
            if kind is not None:
                return self._commit(state, kind, index)
        if self._is_own(index):
            self.activate(index)
        return None

    @staticmethod
    def _interpret(state: Armed, index: int) -> Optional[ActionKind]:
        # Attack cells are enemy-occupied, so an attack there is always inferable
        if index in state.attack_cells:
            return ActionKind.ATTACK
        if index in state.move_cells:
            return ActionKind.MOVE
        return None

    def _commit(self, state: Armed, kind: ActionKind, target: int) -> Future:
        if state.action is not None and state.action is not kind:
            logger.debug("Armed %s but cell %d resolves to %s", state.action.value, target, kind.value)
        self.surface.deselect(state.source)
        self.surface.deselect(target)
        self.surface.dehighlight()
        self.state = IDLE
        side = self.acting_side

        if kind is ActionKind.ATTACK:
            positions = self.rules.commit_attack(state.source, target)
            record = self.rules.last_turn()
            damage = record.damage if record is not None and record.damage is not None else 0
            choreography = self._attack_choreography(side, state.source, target, damage, positions)
        else:
            positions = self.rules.commit_move(state.source, target)
            self.surface.redraw_positions(positions)
            choreography = completed_future()
        logger.info("%s %s %d -> %d", side.value, kind.value, state.source, target)

        turn: Future = Future()
        self._pending = turn

        def _finish(done: Future) -> None:
            if self._pending is turn:
                self._pending = None
            if turn.cancelled():
                return
            if done.cancelled():
                turn.cancel()
                return
            if done.exception() is not None:
                logger.error("Choreography for %s failed: %s", kind.value, done.exception())
            if not turn.done():
                turn.set_result(self.rules.last_turn())
            self._end_turn()

        choreography.add_done_callback(_finish)
        return turn

    def _attack_choreography(self, side: Side, source: int, target: int,
                             damage: int, positions) -> Future:
        if chebyshev_distance(source, target, self.rules.board_size) > 1:
            flight = self.surface.animate_projectile(source, target, PROJECTILE_COLORS[side])
        else:
            flight = completed_future()
        shown = then(flight, lambda: self.surface.animate_damage(target, damage))
        return then(shown, lambda: self.surface.redraw_positions(positions))

    def _end_turn(self) -> None:
        if self._advance_turn is not None:
            self._advance_turn()
        else:
            self.rules.advance_turn()

    # ------------------------------------------------------------------
    # Hover
    # ------------------------------------------------------------------

    def on_cell_enter(self, index: int) -> None:
        self.surface.enter(index)
        occupant = self.rules.character_at(index)
        if occupant is not None:
            self.surface.set_tooltip(index, occupant.character.describe())
        if self.acting_side not in self.human_sides or self.busy:
            return
        state = self.state
        armed = isinstance(state, Armed)
        if armed and index in state.attack_cells:
            self.surface.select(index, SelectColor.RED)
            self.surface.set_cursor(CursorStyle.CROSSHAIR)
        elif armed and index in state.move_cells:
            self.surface.select(index, SelectColor.GREEN)
            self.surface.set_cursor(CursorStyle.POINTER)
        elif self._is_own(index):
            self.surface.set_cursor(CursorStyle.POINTER)
        elif armed:
            self.surface.set_cursor(CursorStyle.NOT_ALLOWED)
        else:
            self.surface.set_cursor(CursorStyle.AUTO)

    def on_cell_leave(self, index: int) -> None:
        self.surface.leave(index)
        self.surface.clear_tooltip(index)
        state = self.state
        if isinstance(state, Armed) and index == state.source:
            return
        self.surface.deselect(index)
