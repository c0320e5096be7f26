"""
Pacing - Per-round limits on how often a category may be revealed.

Each round index maps to a PacingRule. Before a container is opened
the rule for the current round looks at the prize about to be
revealed and may ask the rigging engine to swap it for a prize
from another container. Rounds with no entry fall back to
NoConstraint, so the gap is visible in the table rather than hidden
in a branch.

Default table (5-round plan):
    round 0      Prestige withheld
    rounds 1, 2  exactly one Prestige
    rounds 3, 4  no constraint
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from .state import Category, Container, Prize


@dataclass(frozen=True)
class PacingDecision:
    """
    A request to swap the prize about to be revealed.

    `accepts` narrows the swap candidates; the rigging engine applies
    its own eligibility rules on top.
    """
    accepts: Callable[[Container], bool]
    reason: str


class PacingRule(ABC):
    """Decides whether the next reveal of a round must be changed."""

    @abstractmethod
    def decide(
        self,
        prize: Prize,
        reveals_in_round: Counter,
        shots_left: int,
    ) -> PacingDecision | None:
        """
        Args:
            prize: Prize bound to the container about to open
            reveals_in_round: Reveals so far this round, by category
            shots_left: Openings left in the round after this one

        Returns:
            PacingDecision if a swap is wanted, None otherwise
        """
        pass


class NoConstraint(PacingRule):
    """Reveal whatever is in the container."""

    def decide(self, prize, reveals_in_round, shots_left):
        return None

    def __repr__(self):
        return "NoConstraint()"


@dataclass(frozen=True)
class CategoryQuota(PacingRule):
    """
    Keep the reveals of one category within [minimum, maximum] per round.

    Over the maximum, the prize is swapped for one of another category.
    When only as many openings remain as reveals still missing, a prize
    of the category is swapped in.
    """
    category: Category
    minimum: int = 0
    maximum: int | None = None

    def decide(self, prize, reveals_in_round, shots_left):
        count = reveals_in_round[self.category]
        category = self.category

        if prize.category == category:
            if self.maximum is not None and count >= self.maximum:
                return PacingDecision(
                    accepts=lambda c: c.prize.category != category,
                    reason=f"{category.value} over quota",
                )
            return None

        missing = self.minimum - count
        if missing > 0 and shots_left < missing:
            return PacingDecision(
                accepts=lambda c: c.prize.category == category,
                reason=f"{category.value} under quota",
            )
        return None


def withhold(category: Category) -> CategoryQuota:
    """Never reveal `category` in the round."""
    return CategoryQuota(category=category, maximum=0)


def exactly(category: Category, count: int = 1) -> CategoryQuota:
    """Reveal `category` exactly `count` times in the round."""
    return CategoryQuota(category=category, minimum=count, maximum=count)


@dataclass
class PacingTable:
    """Round index -> pacing rule, defaulting to NoConstraint."""
    rules: dict[int, PacingRule] = field(default_factory=dict)
    default: PacingRule = field(default_factory=NoConstraint)

    def rule_for(self, round_index: int) -> PacingRule:
        return self.rules.get(round_index, self.default)

    def with_rule(self, round_index: int, rule: PacingRule) -> PacingTable:
        """Return a new table with one round's rule replaced."""
        new_rules = self.rules.copy()
        new_rules[round_index] = rule
        return PacingTable(rules=new_rules, default=self.default)


def default_pacing_table() -> PacingTable:
    """The show's standard pacing for the five-round plan."""
    return PacingTable(rules={
        0: withhold(Category.PRESTIGE),
        1: exactly(Category.PRESTIGE),
        2: exactly(Category.PRESTIGE),
        3: NoConstraint(),
        4: NoConstraint(),
    })
