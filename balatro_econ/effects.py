"""Effect protocol shared by every consumable.

An effect reads an ``EffectContext`` and answers with an ``EffectResult``.
It may mutate the attributes of the cards it is handed and call the hooks
on the context; every other state change is described in the result and
applied later by the resolver.

Result fields have distinct meanings:

- ``affected_cards``: cards whose attributes changed. They stay where they are.
- ``destroyed_cards``: cards the resolver removes from the hand pile.
- ``new_cards``: cards the resolver adds to the hand, ignoring hand size.
- ``money_change`` / ``set_money``: delta or absolute money; absolute wins.
- ``new_consumable_ids``: catalog ids to create and try to store.
- ``copied_consumable_id``: another entry to replay against the same context.
- ``hand_type_upgrade`` / ``upgrade_all_hand_levels``: level-up requests.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .cards import Card, JokerView
from .enums import ConsumableType, Edition, HandType
from .rng import get_rng


@dataclass(frozen=True)
class LastUsed:
    """Identity of the most recently used consumable."""
    id: str
    type: ConsumableType


@dataclass(frozen=True)
class EffectContext:
    """Snapshot passed to ``can_use``/``use``. Build a fresh one per call."""
    hand_cards: Sequence[Card] = ()
    selected_cards: Sequence[Card] = ()
    money: int = 0
    jokers: Sequence[JokerView] = ()
    last_used: Optional[LastUsed] = None
    rng: random.Random = field(default_factory=get_rng)

    # Hooks into collaborator-owned state
    set_money: Optional[Callable[[int], None]] = None
    decrease_hand_size: Optional[Callable[[int], None]] = None
    add_joker: Optional[Callable[[Optional[str]], bool]] = None
    can_add_joker: Optional[Callable[[], bool]] = None
    add_edition_to_random_joker: Optional[Callable[[Edition], bool]] = None
    destroy_other_jokers: Optional[Callable[[], int]] = None
    copy_random_joker: Optional[Callable[[], Optional[str]]] = None

    @property
    def selected_count(self) -> int:
        return len(self.selected_cards)


@dataclass
class EffectResult:
    success: bool
    message: str = ""
    affected_cards: list[Card] = field(default_factory=list)
    destroyed_cards: list[Card] = field(default_factory=list)
    new_cards: list[Card] = field(default_factory=list)
    money_change: int = 0
    set_money: Optional[int] = None
    new_consumable_ids: list[str] = field(default_factory=list)
    copied_consumable_id: Optional[str] = None
    hand_type_upgrade: Optional[HandType] = None
    upgrade_all_hand_levels: bool = False

    @classmethod
    def ok(cls, message: str, **changes) -> EffectResult:
        return cls(success=True, message=message, **changes)

    @classmethod
    def fail(cls, message: str) -> EffectResult:
        return cls(success=False, message=message)
