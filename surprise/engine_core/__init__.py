"""
Engine Core - Game state, round flow and the rigging engine.

The engine is the runtime that:
1. Deals the prize catalog into sixteen containers
2. Manages GameState through the reducer
3. Schedules elimination rounds from a RoundPlan
4. Applies covert swaps via the RiggingEngine and its pacing table
"""

from .state import (
    Category,
    Container,
    GamePhase,
    GameState,
    Prize,
    RiggingDirective,
    RoundPlan,
    TOTAL_CONTAINERS,
)
from .catalog import PrizeCatalog
from .action import Action, ActionType, ActionResult, ErrorCode
from .pacing import (
    CategoryQuota,
    NoConstraint,
    PacingDecision,
    PacingRule,
    PacingTable,
    default_pacing_table,
    exactly,
    withhold,
)
from .random_source import RandomSource, create_random_source
from .rigging import RiggingEngine, RigSwap
from .reducer import Reducer, apply_action

__all__ = [
    "Category",
    "Container",
    "GamePhase",
    "GameState",
    "Prize",
    "RiggingDirective",
    "RoundPlan",
    "TOTAL_CONTAINERS",
    "PrizeCatalog",
    "Action",
    "ActionType",
    "ActionResult",
    "ErrorCode",
    "CategoryQuota",
    "NoConstraint",
    "PacingDecision",
    "PacingRule",
    "PacingTable",
    "default_pacing_table",
    "exactly",
    "withhold",
    "RandomSource",
    "create_random_source",
    "RiggingEngine",
    "RigSwap",
    "Reducer",
    "apply_action",
]
