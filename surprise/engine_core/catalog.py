"""
Prize Catalog - The authored prize list a game is dealt from.

The catalog outlives games: it is only changed by explicit edits
or a full reset. A game can start only when it holds exactly
TOTAL_CONTAINERS prizes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import uuid

from .state import Category, Prize, TOTAL_CONTAINERS


@dataclass
class PrizeCatalog:
    """Ordered list of authored prizes."""
    prizes: list[Prize] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.prizes)

    def __iter__(self):
        return iter(self.prizes)

    @property
    def is_complete(self) -> bool:
        return len(self.prizes) == TOTAL_CONTAINERS

    @property
    def is_full(self) -> bool:
        return len(self.prizes) >= TOTAL_CONTAINERS

    def get(self, prize_id: str) -> Prize | None:
        for p in self.prizes:
            if p.id == prize_id:
                return p
        return None

    def add_prize(
        self,
        name: str,
        value: float,
        category: Category = Category.NOVICE,
        image_url: str = "",
    ) -> Prize | None:
        """
        Add a prize to the catalog.

        Returns the new prize, or None if the name is empty, the value
        is not positive, or the catalog is already full.
        """
        if not name or not value or value < 0 or self.is_full:
            return None
        prize = Prize(
            id=str(uuid.uuid4()),
            name=name,
            value=value,
            category=category,
            image_url=image_url or "",
        )
        self.prizes.append(prize)
        return prize

    def remove_prize(self, index: int) -> Prize | None:
        """Remove the prize at a list position. Returns it, or None if out of range."""
        if index < 0 or index >= len(self.prizes):
            return None
        return self.prizes.pop(index)

    def sorted_by_value(self) -> list[Prize]:
        """The prize ladder, lowest value first."""
        return sorted(self.prizes, key=lambda p: p.value)

    def clear_revealed(self):
        for p in self.prizes:
            p.revealed = False

    def clear(self):
        self.prizes.clear()
