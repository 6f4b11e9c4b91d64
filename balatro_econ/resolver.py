"""Effect resolution: validate, invoke, then apply the result.

Application order after a successful ``use``:

1. money (``set_money`` wins over ``money_change``)
2. hand-type upgrade / upgrade-all
3. removal of ``destroyed_cards`` from the hand, matched by identity
4. insertion of ``new_cards`` ignoring hand size
5. storage of ``new_consumable_ids`` (slot overflow is counted, not fatal)
6. replay of ``copied_consumable_id`` against the same context

Only ``destroyed_cards`` removes cards. ``affected_cards`` were mutated in
place and stay in the hand.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from .cards import HandPile
from .catalog import get_consumable_by_id
from .consumables import Consumable
from .effects import EffectContext, EffectResult, LastUsed
from .errors import UnknownConsumableError
from .hand_levels import HandLevels
from .slots import ConsumableSlots

logger = logging.getLogger(__name__)

# Fool cannot name itself, so real chains stop after one hop. The guard
# only trips on corrupted catalog data.
MAX_COPY_DEPTH = 8


@dataclass
class ResolutionTargets:
    """Collaborator-owned state the resolver writes to."""
    hand: HandPile
    slots: ConsumableSlots
    hand_levels: HandLevels
    get_money: Callable[[], int]
    set_money: Callable[[int], None]


@dataclass
class Resolution:
    success: bool
    message: str
    results: list[EffectResult] = field(default_factory=list)
    destroyed_count: int = 0
    new_card_count: int = 0
    consumables_added: int = 0
    consumables_skipped: int = 0


class EffectResolver:
    """Owns the "last used consumable" state that Fool reads."""

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.last_used: Optional[LastUsed] = None
        self.resolving = False

    def use_consumable(
        self,
        consumable_id: str,
        ctx: EffectContext,
        targets: ResolutionTargets,
        held: Optional[Consumable] = None,
    ) -> Resolution:
        """Resolve one consumable.

        ``held`` is the live instance in storage, if any; it is removed from
        the slots before generated consumables are stored so they can take
        its place.
        """
        if self.resolving:
            raise RuntimeError("use_consumable called while a resolution is in progress")

        entry = self._lookup(consumable_id)
        if entry is None:
            return Resolution(False, f"消耗牌不存在: {consumable_id}")
        if not entry.can_use(ctx):
            message = entry.use_condition or "当前条件不满足，无法使用此消耗牌"
            logger.info("cannot use %s: %s", entry.id, message)
            return Resolution(False, message)

        self.resolving = True
        try:
            result = entry.use(ctx)
            if not result.success:
                logger.info("%s failed: %s", entry.id, result.message)
                return Resolution(False, result.message, results=[result])

            resolution = Resolution(True, result.message)
            if held is not None:
                targets.slots.remove(held)
            self._apply(entry, result, ctx, targets, resolution, depth=0)
        finally:
            self.resolving = False

        logger.info("used %s: %s", entry.id, resolution.message)
        return resolution

    # ------------------------------------------------------------------

    def _lookup(self, consumable_id: str) -> Optional[Consumable]:
        entry = get_consumable_by_id(consumable_id)
        if entry is None:
            if self.strict:
                raise UnknownConsumableError(consumable_id)
            logger.error("consumable id not in catalog: %s", consumable_id)
        return entry

    def _apply(
        self,
        entry: Consumable,
        result: EffectResult,
        ctx: EffectContext,
        targets: ResolutionTargets,
        resolution: Resolution,
        depth: int,
    ) -> None:
        resolution.results.append(result)

        if result.set_money is not None:
            targets.set_money(result.set_money)
        elif result.money_change:
            targets.set_money(targets.get_money() + result.money_change)

        if result.hand_type_upgrade is not None:
            level = targets.hand_levels.upgrade_hand(result.hand_type_upgrade)
            logger.debug("%s -> level %d", result.hand_type_upgrade.value, level)
        if result.upgrade_all_hand_levels:
            targets.hand_levels.upgrade_all()

        if result.destroyed_cards:
            indices = [targets.hand.index_of(card) for card in result.destroyed_cards]
            removed = targets.hand.remove_cards(i for i in indices if i is not None)
            resolution.destroyed_count += len(removed)

        for card in result.new_cards:
            targets.hand.force_add_card(card)
        resolution.new_card_count += len(result.new_cards)

        if result.new_consumable_ids:
            self._store_consumables(result.new_consumable_ids, targets, resolution)

        self.last_used = LastUsed(entry.id, entry.type)

        if result.copied_consumable_id:
            self._replay(result.copied_consumable_id, ctx, targets, resolution, depth + 1)

    def _store_consumables(self, ids, targets: ResolutionTargets, resolution: Resolution) -> None:
        added = skipped = 0
        for cid in ids:
            consumable = self._lookup(cid)
            if consumable is None:
                skipped += 1
                continue
            if targets.slots.add(consumable):
                added += 1
            else:
                skipped += 1
        resolution.consumables_added += added
        resolution.consumables_skipped += skipped
        if skipped:
            resolution.message += (
                f"（生成{len(ids)}张消耗牌，成功添加{added}张，{skipped}张因槽位已满被跳过）"
            )

    def _replay(
        self,
        consumable_id: str,
        ctx: EffectContext,
        targets: ResolutionTargets,
        resolution: Resolution,
        depth: int,
    ) -> None:
        if depth > MAX_COPY_DEPTH:
            logger.warning("copy chain deeper than %d stopped at %s", MAX_COPY_DEPTH, consumable_id)
            resolution.message += f"（复制链过深，已停止: {consumable_id}）"
            return

        entry = self._lookup(consumable_id)
        if entry is None:
            resolution.message += f"（消耗牌不存在: {consumable_id}）"
            return
        if not entry.can_use(ctx):
            resolution.message += f"（{entry.name}: {entry.use_condition}）"
            return
        result = entry.use(ctx)
        if not result.success:
            resolution.message += f"（{result.message}）"
            return
        resolution.message += f" → {result.message}"
        self._apply(entry, result, ctx, targets, resolution, depth)
