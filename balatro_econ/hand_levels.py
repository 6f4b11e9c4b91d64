"""Hand levels and play counts: the scoring collaborator consumables talk to."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import HandType, HAND_BASE, PLANET_BONUS


@dataclass
class HandLevels:
    """Tracks planet upgrades and how often each hand type was played."""
    levels: dict[str, int] = field(default_factory=lambda: {ht.value: 1 for ht in HandType})
    played: dict[str, int] = field(default_factory=lambda: {ht.value: 0 for ht in HandType})

    def get_level(self, hand_type: HandType) -> int:
        return self.levels.get(hand_type.value, 1)

    def get_base(self, hand_type: HandType) -> tuple[int, int]:
        base_chips, base_mult = HAND_BASE[hand_type]
        bonus_chips, bonus_mult = PLANET_BONUS[hand_type]
        extra = self.get_level(hand_type) - 1
        return (base_chips + bonus_chips * extra, base_mult + bonus_mult * extra)

    def upgrade_hand(self, hand_type: HandType, amount: int = 1) -> int:
        self.levels[hand_type.value] = self.get_level(hand_type) + amount
        return self.levels[hand_type.value]

    def upgrade_all(self, amount: int = 1) -> None:
        for ht in HandType:
            self.upgrade_hand(ht, amount)

    def record_play(self, hand_type: HandType) -> None:
        self.played[hand_type.value] = self.played.get(hand_type.value, 0) + 1

    def most_played(self) -> Optional[HandType]:
        """Most-played hand type, or None before any hand was played.

        Ties go to the stronger hand.
        """
        best, best_count = None, 0
        for ht in HandType:
            count = self.played.get(ht.value, 0)
            if count > 0 and count >= best_count:
                best, best_count = ht, count
        return best

    def copy(self) -> "HandLevels":
        return HandLevels(levels=dict(self.levels), played=dict(self.played))
