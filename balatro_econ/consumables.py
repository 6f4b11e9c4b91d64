"""Consumable record and selection-count helpers.

Every catalog entry is a ``Consumable`` pairing an optional precondition
with an effect function. The catalog itself is assembled in ``catalog``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

from .effects import EffectContext, EffectResult
from .enums import ConsumableType, HandType

Effect = Callable[[EffectContext], EffectResult]
Precondition = Callable[[EffectContext], bool]


@dataclass
class Consumable:
    id: str
    name: str
    description: str
    type: ConsumableType
    cost: int
    effect: Effect
    precondition: Optional[Precondition] = None
    use_condition: str = ""
    is_negative: bool = False
    sell_value_bonus: int = 0
    # Only obtainable from packs; never offered for direct sale
    pack_exclusive: bool = False
    # Planet entries only
    hand_type: Optional[HandType] = None
    chips: int = 0
    mult: int = 0

    def can_use(self, ctx: EffectContext) -> bool:
        if self.precondition is None:
            return True
        return self.precondition(ctx)

    def use(self, ctx: EffectContext) -> EffectResult:
        return self.effect(ctx)

    @property
    def sell_price(self) -> int:
        return max(1, self.cost // 2) + self.sell_value_bonus

    def add_sell_value(self, amount: int) -> None:
        self.sell_value_bonus += amount

    def clone(self) -> Consumable:
        return replace(self)

    def __repr__(self) -> str:
        return f"Consumable<{self.id}>"


# ---------------------------------------------------------------------------
# Selection helpers
# ---------------------------------------------------------------------------

def selection_error(ctx: EffectContext, minimum: int, maximum: int) -> Optional[str]:
    """Failure message when the selected-card count is out of bounds."""
    n = ctx.selected_count
    if minimum == maximum:
        return None if n == minimum else f"需要选择{minimum}张牌"
    if n < minimum:
        return f"需要选择至少{minimum}张牌"
    if n > maximum:
        return f"最多选择{maximum}张牌"
    return None


def selects(minimum: int, maximum: Optional[int] = None) -> Precondition:
    """Precondition: between ``minimum`` and ``maximum`` cards are selected."""
    upper = minimum if maximum is None else maximum

    def check(ctx: EffectContext) -> bool:
        return minimum <= ctx.selected_count <= upper

    return check


def has_hand_cards(minimum: int = 1) -> Precondition:
    def check(ctx: EffectContext) -> bool:
        return len(ctx.hand_cards) >= minimum

    return check


def has_jokers(minimum: int = 1) -> Precondition:
    def check(ctx: EffectContext) -> bool:
        return len(ctx.jokers) >= minimum

    return check


def joker_slot_free(ctx: EffectContext) -> bool:
    if ctx.can_add_joker is None:
        return True
    return ctx.can_add_joker()


def selection_condition(minimum: int, maximum: Optional[int] = None) -> str:
    """Human-readable use condition for a selection bound."""
    if maximum is None or maximum == minimum:
        return f"需要选择{minimum}张手牌"
    return f"需要选择{minimum}-{maximum}张手牌"
