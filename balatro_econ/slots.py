"""Consumable and joker storage slots."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .cards import JokerCard
from .consumables import Consumable
from .enums import Edition

logger = logging.getLogger(__name__)


@dataclass
class ConsumableSlots:
    """Held consumables. Negative consumables do not occupy a slot."""
    max_slots: int = 2
    consumables: list[Consumable] = field(default_factory=list)

    @property
    def occupied(self) -> int:
        return sum(1 for c in self.consumables if not c.is_negative)

    @property
    def available(self) -> int:
        return max(0, self.max_slots - self.occupied)

    def is_full(self) -> bool:
        return self.available == 0

    def can_add(self, consumable: Consumable) -> bool:
        return consumable.is_negative or not self.is_full()

    def add(self, consumable: Consumable) -> bool:
        if not self.can_add(consumable):
            logger.debug("consumable slots full (%d/%d), rejected %s",
                         self.occupied, self.max_slots, consumable.id)
            return False
        self.consumables.append(consumable)
        return True

    def get(self, index: int) -> Optional[Consumable]:
        if 0 <= index < len(self.consumables):
            return self.consumables[index]
        return None

    def remove_at(self, index: int) -> Optional[Consumable]:
        if 0 <= index < len(self.consumables):
            return self.consumables.pop(index)
        return None

    def remove(self, consumable: Consumable) -> bool:
        for i, held in enumerate(self.consumables):
            if held is consumable:
                del self.consumables[i]
                return True
        return False

    def increase_max_slots(self, amount: int = 1) -> None:
        self.max_slots += amount

    def clear(self) -> None:
        self.consumables.clear()

    def get_state(self) -> dict:
        return {
            "consumables": [c.id for c in self.consumables],
            "negative": [c.is_negative for c in self.consumables],
            "sell_value_bonus": [c.sell_value_bonus for c in self.consumables],
            "max_slots": self.max_slots,
        }

    def restore_state(self, state: dict) -> None:
        from .catalog import require_consumable

        restored = []
        ids = state.get("consumables", [])
        negatives = state.get("negative", [False] * len(ids))
        bonuses = state.get("sell_value_bonus", [0] * len(ids))
        for cid, negative, bonus in zip(ids, negatives, bonuses):
            consumable = require_consumable(cid)
            consumable.is_negative = negative
            consumable.sell_value_bonus = bonus
            restored.append(consumable)
        self.consumables = restored
        self.max_slots = state.get("max_slots", self.max_slots)

    def __len__(self) -> int:
        return len(self.consumables)


@dataclass
class JokerSlots:
    """Owned jokers. Each negative joker brings its own slot."""
    max_slots: int = 5
    jokers: list[JokerCard] = field(default_factory=list)

    @property
    def occupied(self) -> int:
        return sum(1 for j in self.jokers if j.edition != Edition.NEGATIVE)

    @property
    def effective_max_slots(self) -> int:
        return self.max_slots + len(self.jokers) - self.occupied

    @property
    def available(self) -> int:
        return max(0, self.max_slots - self.occupied)

    def can_add(self, joker: Optional[JokerCard] = None) -> bool:
        if joker is not None and joker.edition == Edition.NEGATIVE:
            return True
        return self.available > 0

    def add(self, joker: JokerCard) -> bool:
        if not self.can_add(joker):
            logger.debug("joker slots full (%d/%d), rejected %s",
                         self.occupied, self.max_slots, joker.id)
            return False
        self.jokers.append(joker)
        return True

    def force_add(self, joker: JokerCard) -> None:
        self.jokers.append(joker)

    def remove_at(self, index: int) -> Optional[JokerCard]:
        if 0 <= index < len(self.jokers):
            return self.jokers.pop(index)
        return None

    def ids(self) -> list[str]:
        return [j.id for j in self.jokers]

    def has(self, joker_id: str) -> bool:
        return any(j.id == joker_id for j in self.jokers)

    def increase_max_slots(self, amount: int = 1) -> None:
        self.max_slots += amount

    def __len__(self) -> int:
        return len(self.jokers)

    def __iter__(self):
        return iter(self.jokers)
