"""
Game State - Containers, prizes and the round plan for one game.

Design principles:
- One mutable state object per game, owned by the session
- All mutations go through the reducer
- Serializable: snapshot() produces the plain blob the persistence layer stores
- Observable: the session notifies listeners after every mutation
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


TOTAL_CONTAINERS = 16

DEFAULT_ROUND_PLAN = (3, 3, 3, 3, 2)


class Category(Enum):
    """Prize categories, ordered from lowest to highest."""
    NOVICE = "Novice"
    INTERMEDIATE = "Intermediate"
    ELITE = "Elite"
    PRESTIGE = "Prestige"
    LEGENDARY = "Legendary"

    @property
    def rank(self) -> int:
        return _CATEGORY_ORDER.index(self)


_CATEGORY_ORDER = list(Category)


class GamePhase(Enum):
    """Lifecycle of a game, in order."""
    SETUP = "SETUP"
    RULES = "RULES"
    PICK_OWN = "PICK_OWN"
    PLAYING = "PLAYING"
    SWAP_ROUND = "SWAP_ROUND"
    FINISHED = "FINISHED"


@dataclass
class Prize:
    """
    An authored prize.

    Identity is the id; the other fields are fixed for the game.
    Only `revealed` changes, when the container holding it is opened.
    """
    id: str
    name: str
    value: float
    category: Category
    image_url: str = ""
    revealed: bool = False

    def __eq__(self, other):
        if not isinstance(other, Prize):
            return False
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "imageUrl": self.image_url,
            "value": self.value,
            "category": self.category.value,
            "isRevealed": self.revealed,
        }


@dataclass
class Container:
    """A sealed case bound to one prize for the duration of a game."""
    id: int
    prize: Prize
    is_open: bool = False
    is_held: bool = False
    is_removed: bool = False  # Reserved, never changed by the engine

    @property
    def is_closed(self) -> bool:
        return not self.is_open

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "prize": self.prize.to_dict(),
            "isOpen": self.is_open,
            "isHeld": self.is_held,
            "isRemoved": self.is_removed,
        }


@dataclass(frozen=True)
class RoundPlan:
    """
    Number of containers to open in each elimination round.

    The plan plus the held container plus the last unopened one
    must account for every container.
    """
    quotas: tuple[int, ...] = DEFAULT_ROUND_PLAN

    def __post_init__(self):
        if not self.quotas:
            raise ValueError("Round plan must have at least one round")
        if any(q <= 0 for q in self.quotas):
            raise ValueError(f"Round quotas must be positive: {list(self.quotas)}")
        if sum(self.quotas) + 2 != TOTAL_CONTAINERS:
            raise ValueError(
                f"Round plan {list(self.quotas)} opens {sum(self.quotas)} containers; "
                f"expected {TOTAL_CONTAINERS - 2}"
            )

    @classmethod
    def parse(cls, text: str) -> RoundPlan:
        """Parse a comma separated plan such as "3,3,3,3,2"."""
        try:
            quotas = tuple(int(part) for part in text.split(",") if part.strip())
        except ValueError:
            raise ValueError(f"Invalid round plan: {text!r}")
        return cls(quotas=quotas)

    def __len__(self) -> int:
        return len(self.quotas)

    def __getitem__(self, index: int) -> int:
        return self.quotas[index]

    @property
    def last_round_index(self) -> int:
        return len(self.quotas) - 1


@dataclass(frozen=True)
class RiggingDirective:
    """
    Operator choice of the outcome delivered to the participant.

    A target prize id takes precedence over auto-win when both are set.
    The default directive does nothing: the game is left to chance.
    """
    target_prize_id: str | None = None
    auto_win: bool = False

    @property
    def is_active(self) -> bool:
        return bool(self.target_prize_id) or self.auto_win

    @property
    def mode(self) -> str:
        if self.target_prize_id:
            return "target"
        if self.auto_win:
            return "auto_win"
        return "none"


@dataclass
class GameState:
    """
    Complete state of the single game session.

    This is the canonical state that the reducer operates on.
    """
    phase: GamePhase = GamePhase.SETUP
    containers: list[Container] = field(default_factory=list)
    current_round_index: int = 0
    cases_opened_in_current_round: int = 0

    directive: RiggingDirective = field(default_factory=RiggingDirective)

    # Per-round reveal counts by category; reset every round, never persisted
    reveals_in_round: Counter = field(default_factory=Counter)

    def get_container(self, container_id: int) -> Container | None:
        """Get container by ID."""
        for c in self.containers:
            if c.id == container_id:
                return c
        return None

    def find_prize(self, prize_id: str) -> Container | None:
        """Get the container currently bound to a prize."""
        for c in self.containers:
            if c.prize.id == prize_id:
                return c
        return None

    @property
    def held_container(self) -> Container | None:
        for c in self.containers:
            if c.is_held:
                return c
        return None

    @property
    def board_containers(self) -> list[Container]:
        """Containers other than the held one, in id order."""
        return [c for c in self.containers if not c.is_held]

    @property
    def closed_board_containers(self) -> list[Container]:
        return [c for c in self.containers if not c.is_held and not c.is_open]

    def swap_prizes(self, first_id: int, second_id: int):
        """Exchange the prize bindings of two containers."""
        first = self.get_container(first_id)
        second = self.get_container(second_id)
        if first is None or second is None:
            raise KeyError(f"Unknown container in swap: {first_id}, {second_id}")
        first.prize, second.prize = second.prize, first.prize

    def reset_round_counters(self):
        self.cases_opened_in_current_round = 0
        self.reveals_in_round = Counter()

    def snapshot(self) -> dict[str, Any]:
        """Plain-data view of the game for presentation and persistence."""
        return {
            "containers": [c.to_dict() for c in self.containers],
            "gameState": self.phase.value,
            "currentRoundIndex": self.current_round_index,
            "casesOpenedInCurrentRound": self.cases_opened_in_current_round,
            "isAutoWin": self.directive.auto_win,
            "targetPrizeId": self.directive.target_prize_id,
        }
