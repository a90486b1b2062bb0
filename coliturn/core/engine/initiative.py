"""Initiative scheduling for fixed-turn-cost combat.

This module implements the turn-order calculation. Dragons may open the fight
with ambush actions, then every combatant races on a shared initiative track
where acting always costs the same fixed amount.

Core Concepts:
- Initiative is discrete (integers) for deterministic scheduling
- Every round each combatant gains initiative equal to its quickness
- Acting costs a fixed turn cost, taken from the last monster in the roster
- Within a round the highest initiative acts first, repeatedly, until nobody
  can afford the turn cost; a combatant may act several times in one round
- Ties go to the combatant listed first in the pool (dragons, then monsters)
- Initiative is per-run scratch state and never stored on the combatants
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from ..data import MAX_ROUNDS, Combatant, CombatantCategory, Dragon, Monster, TurnPhase
from ..errors import ConfigurationError

ROUND_LIMIT_ERROR = "numRounds exceeds limit"
TURN_COST_ERROR = "turn cost must be positive"
QUICKNESS_RANGE_ERROR = "quickness out of range"


def quickness_limit(max_rounds: int = MAX_ROUNDS) -> int:
    """Largest quickness whose initiative stays within int64 for ``max_rounds`` rounds."""
    return int(np.iinfo(np.int64).max) // (max(max_rounds, 0) + 1)


@dataclass(frozen=True)
class TurnEntry:
    """A single turn in the calculated order."""

    name: str
    category: CombatantCategory
    phase: TurnPhase

    # 1-based round; ambush turns happen before round 1
    round_number: int = 0

    # Position of the combatant in the pool (dragons first, then monsters)
    pool_index: int = 0

    # Initiative left after paying for this turn (0 for ambush turns)
    initiative_after: int = 0


@dataclass
class TurnOrder:
    """The full event log of one scheduler run."""

    entries: list[TurnEntry] = field(default_factory=list)
    turn_cost: Optional[int] = None
    rounds_simulated: int = 0

    # Initiative of every pool member once the last round ends
    final_initiative: list[int] = field(default_factory=list)

    @property
    def turns(self) -> list[str]:
        """Combatant names in the order they act."""
        return [entry.name for entry in self.entries]

    @property
    def ambush_turns(self) -> list[str]:
        return [entry.name for entry in self.entries if entry.phase == TurnPhase.AMBUSH]

    def turns_in_round(self, round_number: int) -> list[str]:
        """Names acting during one round (1-based)."""
        return [
            entry.name
            for entry in self.entries
            if entry.phase == TurnPhase.ROUND and entry.round_number == round_number
        ]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class TurnOrderResult:
    """Outcome of :func:`calculate_turns` for callers that prefer no exceptions."""

    turns: list[str]
    ok: bool
    error: Optional[str] = None
    order: Optional[TurnOrder] = None


class InitiativeState:
    """Per-run initiative bookkeeping for a combatant pool.

    Values are held in numpy arrays indexed by pool position. ``np.argmax``
    returns the first maximal index, which is exactly the tie-break rule.
    """

    def __init__(self, pool: Sequence[Combatant]):
        self.pool: list[Combatant] = list(pool)
        self.quickness: NDArray[np.int64] = np.array(
            [combatant.quickness for combatant in self.pool], dtype=np.int64
        )
        self.initiative: NDArray[np.int64] = np.zeros(len(self.pool), dtype=np.int64)

    def advance_round(self) -> None:
        """Every combatant gains its quickness at once."""
        self.initiative += self.quickness

    def leader(self) -> int:
        """Index of the combatant with the greatest initiative."""
        return int(np.argmax(self.initiative))

    def spend(self, index: int, cost: int) -> int:
        """Pay for a turn and return the initiative left over."""
        self.initiative[index] -= cost
        return int(self.initiative[index])

    def snapshot(self) -> list[int]:
        return [int(value) for value in self.initiative]


class InitiativeScheduler:
    """Calculates turn order for a roster of dragons and monsters.

    The scheduler keeps no state between runs other than statistics, so one
    instance can be reused for any number of rosters.
    """

    def __init__(self, max_rounds: int = MAX_ROUNDS):
        self.max_rounds = max_rounds
        self._runs_completed = 0
        self._runs_rejected = 0
        self._turns_emitted = 0

    @staticmethod
    def determine_turn_cost(monsters: Sequence[Monster]) -> Optional[int]:
        """Turn cost for a roster: the quickness of the last monster listed.

        Returns:
            The turn cost, or None when there are no monsters
        """
        if not monsters:
            return None
        return monsters[-1].quickness

    def validate(
        self,
        dragons: Sequence[Dragon],
        monsters: Sequence[Monster],
        num_rounds: int,
    ) -> None:
        """Check run parameters before anything is calculated.

        Raises:
            ConfigurationError: If the rounds exceed the limit, a quickness
                is too large for the initiative track, or the turn cost is
                not positive while rounds would be simulated
        """
        if num_rounds > self.max_rounds:
            self._runs_rejected += 1
            raise ConfigurationError(ROUND_LIMIT_ERROR, parameter="num_rounds")

        if monsters:
            limit = quickness_limit(self.max_rounds)
            if any(abs(combatant.quickness) > limit for combatant in [*dragons, *monsters]):
                self._runs_rejected += 1
                raise ConfigurationError(QUICKNESS_RANGE_ERROR, parameter="quickness")

        turn_cost = self.determine_turn_cost(monsters)
        if turn_cost is not None and num_rounds > 0 and turn_cost <= 0:
            self._runs_rejected += 1
            raise ConfigurationError(TURN_COST_ERROR, parameter="turn_cost")

    def run(
        self,
        dragons: Sequence[Dragon],
        monsters: Sequence[Monster],
        num_rounds: int,
    ) -> TurnOrder:
        """Calculate the full turn order.

        Args:
            dragons: Dragons in roster order
            monsters: Monsters in roster order; the last one sets the turn cost
            num_rounds: Number of initiative rounds to simulate

        Returns:
            The turn order with ambush turns first, then round turns

        Raises:
            ConfigurationError: If the run parameters are rejected
        """
        self.validate(dragons, monsters, num_rounds)

        order = TurnOrder()
        self._ambush_phase(dragons, order)

        turn_cost = self.determine_turn_cost(monsters)
        if turn_cost is None:
            self._finish(order)
            return order

        order.turn_cost = turn_cost
        state = InitiativeState([*dragons, *monsters])

        for round_number in range(1, num_rounds + 1):
            state.advance_round()
            self._simulate_round(state, round_number, turn_cost, order)
            order.rounds_simulated = round_number

        order.final_initiative = state.snapshot()
        self._finish(order)
        return order

    def _ambush_phase(self, dragons: Sequence[Dragon], order: TurnOrder) -> None:
        """Append each dragon's ambush turns in roster order."""
        for index, dragon in enumerate(dragons):
            for _ in range(dragon.ambush_actions):
                order.entries.append(
                    TurnEntry(
                        name=dragon.name,
                        category=dragon.category,
                        phase=TurnPhase.AMBUSH,
                        pool_index=index,
                    )
                )

    def _simulate_round(
        self,
        state: InitiativeState,
        round_number: int,
        turn_cost: int,
        order: TurnOrder,
    ) -> None:
        """Let the current leader act until nobody can afford a turn."""
        while True:
            index = state.leader()
            if state.initiative[index] < turn_cost:
                return

            remaining = state.spend(index, turn_cost)
            combatant = state.pool[index]
            order.entries.append(
                TurnEntry(
                    name=combatant.name,
                    category=combatant.category,
                    phase=TurnPhase.ROUND,
                    round_number=round_number,
                    pool_index=index,
                    initiative_after=remaining,
                )
            )

    def _finish(self, order: TurnOrder) -> None:
        self._runs_completed += 1
        self._turns_emitted += len(order.entries)

    def get_stats(self) -> dict[str, Any]:
        """Get scheduler statistics for debugging/monitoring."""
        return {
            "max_rounds": self.max_rounds,
            "runs_completed": self._runs_completed,
            "runs_rejected": self._runs_rejected,
            "turns_emitted": self._turns_emitted,
        }


def calculate_turns(
    dragons: Sequence[Dragon],
    monsters: Sequence[Monster],
    num_rounds: int,
    max_rounds: int = MAX_ROUNDS,
) -> TurnOrderResult:
    """Calculate turn order, reporting configuration errors in the result."""
    scheduler = InitiativeScheduler(max_rounds=max_rounds)
    try:
        order = scheduler.run(dragons, monsters, num_rounds)
    except ConfigurationError as e:
        return TurnOrderResult(turns=[], ok=False, error=str(e))
    return TurnOrderResult(turns=order.turns, ok=True, order=order)


def is_sorted_by_quickness(monsters: Sequence[Monster]) -> bool:
    """Whether monsters are listed slowest to fastest.

    Only then is the last monster's quickness (the turn cost) also the
    highest quickness among the monsters.
    """
    return all(
        earlier.quickness <= later.quickness
        for earlier, later in zip(monsters, monsters[1:])
    )
