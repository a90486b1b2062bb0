"""Turn order calculation for the active roster.

Wraps the initiative scheduler: the calculation either succeeds and replaces
the stored turn order, or is rejected before anything is touched so the
previous result stays on display.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ...core.events.event_manager import EventManager
    from ...core.engine.simulator_state import SimulatorState

from ...core.data import DataConverter, MAX_ROUNDS
from ...core.engine import (
    ROUND_LIMIT_ERROR,
    InitiativeScheduler,
    TurnOrderResult,
    is_sorted_by_quickness,
)
from ...core.errors import ConfigurationError
from ...core.events import (
    DebugMessage,
    LogMessage,
    ManagerInitialized,
    TurnCalculationFailed,
    TurnsCalculated,
)
from .log_manager import LogLevel


class TurnOrderManager:
    """Runs the scheduler over the roster and stores the result."""

    def __init__(
        self,
        state: "SimulatorState",
        event_manager: "EventManager",
        max_rounds: int = MAX_ROUNDS,
    ):
        self.state = state
        self.event_manager = event_manager
        self.scheduler = InitiativeScheduler(max_rounds=max_rounds)

        self.event_manager.publish(
            ManagerInitialized(manager_name="TurnOrderManager"),
            source="TurnOrderManager",
        )

    def _emit_log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        self.event_manager.publish(
            LogMessage(message=message, category="TURNS", level=level, source="TurnOrderManager"),
            source="TurnOrderManager",
        )

    def _emit_debug(self, message: str, context: Optional[dict] = None) -> None:
        self.event_manager.publish(
            DebugMessage(message=message, source="TurnOrderManager", context=context),
            source="TurnOrderManager",
        )

    def calculate(self, num_rounds: Any) -> TurnOrderResult:
        """Calculate turn order for the roster.

        Args:
            num_rounds: Rounds to simulate; None counts as zero

        Returns:
            Result with ``ok`` False and the reason when the run is rejected
        """
        rounds = 0 if num_rounds is None else DataConverter.parse_int(num_rounds)
        roster = self.state.roster

        try:
            order = self.scheduler.run(roster.dragons, roster.monsters, rounds)
        except ConfigurationError as e:
            if str(e) == ROUND_LIMIT_ERROR:
                self._emit_log(f"Max {self.scheduler.max_rounds} rounds allowed", LogLevel.ERROR)
            else:
                self._emit_log(f"Cannot calculate turns: {e}", LogLevel.ERROR)
            self.event_manager.publish(
                TurnCalculationFailed(num_rounds=rounds, reason=str(e)),
                source="TurnOrderManager",
            )
            return TurnOrderResult(turns=[], ok=False, error=str(e))

        if not is_sorted_by_quickness(roster.monsters):
            self._emit_log(
                f"Monsters are not listed slowest to fastest; turn cost {order.turn_cost} "
                f"comes from the last monster, {roster.monsters[-1].name}",
                LogLevel.WARNING,
            )

        self.state.turn.store(order, rounds)
        self._emit_debug(
            f"Turn cost {order.turn_cost}, final initiative {order.final_initiative}",
            context=self.scheduler.get_stats(),
        )
        self.event_manager.publish(
            TurnsCalculated(order=order, num_rounds=rounds),
            source="TurnOrderManager",
        )
        self._emit_log(f"Calculated {len(order)} turns over {rounds} rounds")
        return TurnOrderResult(turns=order.turns, ok=True, order=order)
