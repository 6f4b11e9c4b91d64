"""Game session: the collaborator that owns everything effects touch.

``GameSession`` holds money, jokers, hand and deck piles, consumable
slots, hand levels, the shop and the resolver. It builds one
``EffectContext`` per consumable use and wires the joker hooks to its own
state, so effects never reach into these collections directly.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Optional

from .cards import DeckPile, HandPile, JokerCard
from .config import EconomyConfig
from .consumables import Consumable
from .effects import EffectContext
from .enums import Edition, HandType, JokerRarity, ShopItemCategory
from .hand_levels import HandLevels
from .jokers import GIFT_CARD_ID, HALLUCINATION_ID, SHOWMAN_ID, get_random_joker
from .pack_generator import PackContent, PackSession, generate_pack_contents
from .packs import BoosterPack
from .resolver import EffectResolver, Resolution, ResolutionTargets
from .rng import get_rng
from .shop import Shop, ShopConfig, ShopItem, ShopResult
from .slots import ConsumableSlots, JokerSlots

logger = logging.getLogger(__name__)

GIFT_CARD_BONUS = 1

DEFAULT_INTEREST_CAP = 5
INTEREST_STEP = 5
# Highest tier first
_INTEREST_CAP_VOUCHERS = (
    ("voucher_money_tree", 20),
    ("voucher_seed_money", 10),
)


@dataclass
class OpenedPack:
    pack: BoosterPack
    contents: list[PackContent]
    picks_left: int


class GameSession:
    def __init__(
        self,
        config: Optional[EconomyConfig] = None,
        rng: Optional[random.Random] = None,
        shop_config: Optional[ShopConfig] = None,
    ):
        self.config = config or EconomyConfig()
        self.rng = get_rng(rng)
        self.money = self.config.starting_money
        self.hand_size = self.config.hand_size
        self.jokers = JokerSlots(self.config.max_jokers)
        self.hand = HandPile(max_size=self.hand_size)
        self.deck = DeckPile.standard()
        self.deck.shuffle(self.rng)
        self.slots = ConsumableSlots(self.config.consumable_slots)
        self.hand_levels = HandLevels()
        self.resolver = EffectResolver(strict=self.config.strict_catalog)
        self.opened_pack: Optional[OpenedPack] = None
        self._protected: list[JokerCard] = []

        shop_config = shop_config or ShopConfig(base_reroll_cost=self.config.base_reroll_cost)
        self.shop = Shop(shop_config, self.rng)

    # ------------------------------------------------------------------
    # Hand
    # ------------------------------------------------------------------

    def deal(self) -> int:
        """Draw up to hand size. Returns cards drawn."""
        drawn = 0
        while len(self.hand) < self.hand_size and len(self.deck):
            self.hand.add_card(self.deck.draw(1)[0])
            drawn += 1
        return drawn

    def record_hand_played(self, hand_type: HandType) -> None:
        self.hand_levels.record_play(hand_type)

    @property
    def most_played_hand_type(self) -> Optional[HandType]:
        return self.hand_levels.most_played()

    # ------------------------------------------------------------------
    # Consumables
    # ------------------------------------------------------------------

    def build_context(self, selected: Iterable[int] = ()) -> EffectContext:
        """Fresh context for one use; ``selected`` are hand indices."""
        self._protected = []
        cards = self.hand.get_cards()
        return EffectContext(
            hand_cards=cards,
            selected_cards=[cards[i] for i in selected],
            money=self.money,
            jokers=[j.view() for j in self.jokers],
            last_used=self.resolver.last_used,
            rng=self.rng,
            set_money=self._set_money,
            decrease_hand_size=self.decrease_hand_size,
            add_joker=self.add_joker,
            can_add_joker=self.can_add_joker,
            add_edition_to_random_joker=self.add_edition_to_random_joker,
            destroy_other_jokers=self.destroy_other_jokers,
            copy_random_joker=self.copy_random_joker,
        )

    def use_consumable(self, index: int, selected: Iterable[int] = ()) -> Resolution:
        held = self.slots.get(index)
        if held is None:
            return Resolution(False, "消耗牌不存在")
        selected = list(selected)
        if not self._selection_valid(selected):
            return Resolution(False, "选择的手牌无效")
        ctx = self.build_context(selected)
        return self.resolver.use_consumable(held.id, ctx, self._targets(), held=held)

    def use_pack_consumable(self, consumable: Consumable, selected: Iterable[int] = ()) -> Resolution:
        """Use a consumable straight out of an opened pack."""
        selected = list(selected)
        if not self._selection_valid(selected):
            return Resolution(False, "选择的手牌无效")
        ctx = self.build_context(selected)
        return self.resolver.use_consumable(consumable.id, ctx, self._targets())

    def _selection_valid(self, selected: list[int]) -> bool:
        """Distinct indices into the current hand."""
        size = len(self.hand)
        if len(set(selected)) != len(selected):
            logger.info("duplicate hand indices: %s", selected)
            return False
        return all(0 <= i < size for i in selected)

    def sell_consumable(self, index: int) -> ShopResult:
        consumable = self.slots.remove_at(index)
        if consumable is None:
            return ShopResult(False, "消耗牌不存在")
        price = consumable.sell_price
        self.money += price
        logger.info("sold %s for $%d", consumable.id, price)
        return ShopResult(True, f"出售 {consumable.name} 获得 ${price}", remaining_money=self.money)

    def _targets(self) -> ResolutionTargets:
        return ResolutionTargets(
            hand=self.hand,
            slots=self.slots,
            hand_levels=self.hand_levels,
            get_money=lambda: self.money,
            set_money=self._set_money,
        )

    def _set_money(self, amount: int) -> None:
        logger.debug("money $%d -> $%d", self.money, amount)
        self.money = amount

    # ------------------------------------------------------------------
    # Joker hooks
    # ------------------------------------------------------------------

    @property
    def allow_duplicate_jokers(self) -> bool:
        return self.jokers.has(SHOWMAN_ID)

    def _excluded_joker_ids(self) -> list[str]:
        return [] if self.allow_duplicate_jokers else self.jokers.ids()

    def can_add_joker(self) -> bool:
        return self.jokers.can_add()

    def add_joker(self, rarity: Optional[str] = None) -> bool:
        """Create a random joker, optionally of a forced rarity."""
        if not self.jokers.can_add():
            return False
        joker = get_random_joker(
            self.rng,
            rarity=JokerRarity(rarity) if rarity else None,
            exclude_ids=self._excluded_joker_ids(),
            vouchers_used=self.shop.vouchers_used,
            roll_edition=False,
        )
        if joker is None:
            return False
        logger.info("joker created: %s", joker.id)
        return self.jokers.add(joker)

    def add_edition_to_random_joker(self, edition: Edition) -> bool:
        eligible = [j for j in self.jokers if not j.has_edition]
        if not eligible:
            return False
        target = self.rng.choice(eligible)
        target.edition = edition
        self._protected.append(target)
        logger.info("%s gained %s edition", target.id, edition.value)
        return True

    def copy_random_joker(self) -> Optional[str]:
        if not len(self.jokers):
            return None
        source = self.rng.choice(self.jokers.jokers)
        clone = source.clone()
        if clone.edition == Edition.NEGATIVE:
            clone.edition = Edition.NONE
        self.jokers.force_add(clone)
        self._protected.extend([source, clone])
        logger.info("joker copied: %s", source.id)
        return clone.id

    def destroy_other_jokers(self) -> int:
        """Destroy every joker except the ones this use touched and eternals."""
        keep = self._protected or self.jokers.jokers[-1:]
        survivors = [
            j for j in self.jokers
            if j.is_eternal or any(j is k for k in keep)
        ]
        destroyed = len(self.jokers) - len(survivors)
        self.jokers.jokers = survivors
        logger.info("destroyed %d jokers", destroyed)
        return destroyed

    def decrease_hand_size(self, amount: int = 1) -> None:
        self.hand_size = max(1, self.hand_size - amount)
        self.hand.max_size = self.hand_size

    def increase_hand_size(self, amount: int = 1) -> None:
        self.hand_size += amount
        self.hand.max_size = self.hand_size

    def sell_joker(self, index: int) -> ShopResult:
        if not 0 <= index < len(self.jokers):
            return ShopResult(False, "小丑牌不存在")
        joker = self.jokers.jokers[index]
        if joker.is_eternal:
            return ShopResult(False, "永恒小丑牌无法出售")
        self.jokers.remove_at(index)
        price = joker.sell_price
        self.money += price
        logger.info("sold %s for $%d", joker.id, price)
        return ShopResult(True, f"出售 {joker.name} 获得 ${price}", remaining_money=self.money)

    # ------------------------------------------------------------------
    # Shop
    # ------------------------------------------------------------------

    def buy(self, item_id: str) -> ShopResult:
        """Buy from the shop once the item is known to have somewhere to go."""
        shop_item = self.shop.get_item(item_id)
        if shop_item is not None and not shop_item.sold:
            error = self._storage_error(shop_item)
            if error is not None:
                logger.info("purchase of %s rejected: %s", shop_item.item_id, error)
                return ShopResult(False, error, shop_item, self.money)

        result = self.shop.buy(item_id, self.money)
        if result.success:
            self.money = result.remaining_money
            self._receive(result.item)
        return result

    def _storage_error(self, shop_item: ShopItem) -> Optional[str]:
        category = shop_item.category
        if category == ShopItemCategory.JOKER and not self.jokers.can_add(shop_item.item):
            return "小丑牌槽位已满"
        if category == ShopItemCategory.CONSUMABLE and not self.slots.can_add(shop_item.item):
            return "消耗牌槽位已满"
        if category == ShopItemCategory.PACK and self.opened_pack is not None:
            return "请先处理已打开的卡包"
        return None

    def _receive(self, shop_item: ShopItem) -> None:
        item = shop_item.item
        if shop_item.category == ShopItemCategory.JOKER:
            # Sell price follows what was paid
            item.cost = shop_item.current_price
            self.jokers.add(item)
        elif shop_item.category == ShopItemCategory.CONSUMABLE:
            item.cost = shop_item.current_price
            self.slots.add(item)
        elif shop_item.category == ShopItemCategory.PLAYING_CARD:
            self.deck.add_to_bottom(item)
        elif shop_item.category == ShopItemCategory.PACK:
            self.open_pack(item)
        elif shop_item.category == ShopItemCategory.VOUCHER:
            self.apply_voucher(item.id)

    def apply_voucher(self, voucher_id: str) -> bool:
        if not self.shop.apply_voucher(voucher_id, self.jokers.ids(), self.allow_duplicate_jokers):
            return False
        if voucher_id == "voucher_crystal_ball":
            self.slots.increase_max_slots(1)
        elif voucher_id == "voucher_antimatter":
            self.jokers.increase_max_slots(1)
        elif voucher_id in ("voucher_paint_brush", "voucher_palette"):
            self.increase_hand_size(1)
        return True

    @property
    def interest_cap(self) -> int:
        """Most interest a round can pay; raised by Seed Money and Money Tree."""
        used = self.shop.vouchers_used
        for voucher_id, cap in _INTEREST_CAP_VOUCHERS:
            if voucher_id in used:
                return cap
        return DEFAULT_INTEREST_CAP

    @property
    def interest(self) -> int:
        """$1 per $5 held, up to the cap."""
        return min(max(0, self.money) // INTEREST_STEP, self.interest_cap)

    def reroll(self) -> ShopResult:
        result = self.shop.reroll(self.money, self.jokers.ids(), self.allow_duplicate_jokers)
        if result.success:
            self.money = result.remaining_money
        return result

    def end_round(self) -> None:
        """Round-end upkeep, then a fresh shop visit."""
        if self.jokers.has(GIFT_CARD_ID):
            for joker in self.jokers:
                joker.sell_value_bonus += GIFT_CARD_BONUS
            for consumable in self.slots.consumables:
                consumable.add_sell_value(GIFT_CARD_BONUS)
            self.shop.increase_joker_and_consumable_prices(GIFT_CARD_BONUS)
        self.shop.enter_new_shop(self.jokers.ids(), self.allow_duplicate_jokers)

    # ------------------------------------------------------------------
    # Packs
    # ------------------------------------------------------------------

    def pack_session(self) -> PackSession:
        return PackSession(
            vouchers_used=self.shop.vouchers_used,
            player_joker_ids=self._excluded_joker_ids(),
            shop_joker_ids=[] if self.allow_duplicate_jokers else [i.item.id for i in self.shop.get_jokers()],
            most_played_hand_type=self.most_played_hand_type,
            has_hallucination=self.jokers.has(HALLUCINATION_ID),
            rng=self.rng,
        )

    def open_pack(self, pack: BoosterPack) -> OpenedPack:
        contents = generate_pack_contents(pack, self.pack_session())
        self.opened_pack = OpenedPack(pack, contents, pack.select_count)
        return self.opened_pack

    def pick_from_pack(self, index: int, selected: Iterable[int] = ()) -> Resolution:
        """Take one revealed item. Consumables are used on the spot."""
        opened = self.opened_pack
        if opened is None:
            return Resolution(False, "没有打开的卡包")
        if not 0 <= index < len(opened.contents):
            return Resolution(False, "卡包中没有该卡牌")

        item = opened.contents[index]
        if isinstance(item, Consumable):
            resolution = self.use_pack_consumable(item, selected)
        elif isinstance(item, JokerCard):
            if not self.jokers.add(item):
                return Resolution(False, "小丑牌槽位已满")
            resolution = Resolution(True, f"获得小丑牌: {item.name}")
        else:
            self.deck.add_to_bottom(item)
            resolution = Resolution(True, f"获得卡牌: {item.display()}")

        if resolution.success:
            del opened.contents[index]
            opened.picks_left -= 1
            if opened.picks_left <= 0 or not opened.contents:
                self.opened_pack = None
        return resolution

    def skip_pack(self) -> None:
        self.opened_pack = None
