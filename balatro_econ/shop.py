"""Shop economy: per-visit offer generation, pricing, rerolls, vouchers.

Each visit offers 2 weighted single cards, 2 booster packs and 1 voucher.
The very first shop of a game swaps one random pack for the fixed
starter Buffoon pack. Card draws bucket a uniform roll against the
category weights in the order joker -> tarot -> planet -> playing card.

Reroll cost is ``base_reroll_cost + reroll_count``. Entering a new shop
resets the count; it never resets the first-visit flag.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .cards import Card, JokerCard
from .catalog import get_random_consumable, require_consumable
from .consumables import Consumable
from .enums import ConsumableType, Edition, Enhancement, Rank, Seal, ShopItemCategory, Sticker, Suit
from .errors import InvalidStateError
from .jokers import get_joker_by_id, get_random_joker
from .packs import BoosterPack, STARTER_PACK_ID, get_pack_by_id, get_random_packs
from .pricing import (
    EDITION_SURCHARGE,
    PLAYING_CARD_COST,
    calculate_price,
    calculate_price_with_edition,
    calculate_sell_price,
)
from .probabilities import ENHANCEMENT_TYPES, SEAL_CHANCE, SEAL_TYPES, roll_playing_card_edition
from .rng import get_rng
from .vouchers import BLANK_VOUCHER_ID, VoucherDef, VoucherTracker, get_voucher

logger = logging.getLogger(__name__)

ShopContent = Union[JokerCard, Consumable, BoosterPack, VoucherDef, Card]


# ---------------------------------------------------------------------------
# Shop data structures
# ---------------------------------------------------------------------------

@dataclass
class ShopItem:
    id: str
    category: ShopItemCategory
    item: ShopContent
    base_price: int      # raw cost including any edition surcharge
    current_price: int   # what the player pays now
    sold: bool = False

    @property
    def name(self) -> str:
        if isinstance(self.item, Card):
            return self.item.display()
        return getattr(self.item, "name", "未知商品")

    @property
    def item_id(self) -> str:
        if isinstance(self.item, Card):
            return "playing_card"
        return self.item.id

    def mark_sold(self) -> None:
        self.sold = True


@dataclass
class ShopResult:
    success: bool
    message: str
    item: Optional[ShopItem] = None
    remaining_money: Optional[int] = None


@dataclass
class ShopConfig:
    """Shop-local knobs. Defaults match a standard game."""
    card_slots: int = 2
    pack_slots: int = 2
    base_reroll_cost: int = 5
    starter_pack_id: str = STARTER_PACK_ID
    # Category weights for single-card draws
    joker_weight: float = 20
    tarot_weight: float = 4
    planet_weight: float = 4
    playing_card_weight: float = 0


# Merchant vouchers replace the base weight, tycoon beats merchant
_TAROT_WEIGHTS = (("voucher_tarot_tycoon", 32), ("voucher_tarot_merchant", 9.6))
_PLANET_WEIGHTS = (("voucher_planet_tycoon", 32), ("voucher_planet_merchant", 9.6))
MAGIC_TRICK_PLAYING_CARD_WEIGHT = 4

_REROLL_DISCOUNTS = {"voucher_reroll_surplus": 2, "voucher_reroll_glut": 4}
_EXTRA_SLOT_VOUCHERS = ("voucher_overstock", "voucher_overstock_plus")


# ---------------------------------------------------------------------------
# Shop
# ---------------------------------------------------------------------------

class Shop:
    def __init__(
        self,
        config: Optional[ShopConfig] = None,
        rng: Optional[random.Random] = None,
        vouchers_used: Iterable[str] = (),
        populate: bool = True,
    ):
        self.config = config or ShopConfig()
        self.rng = get_rng(rng)
        self.vouchers = VoucherTracker(vouchers_used)
        self.items: list[ShopItem] = []
        self.base_reroll_cost = self.config.base_reroll_cost
        self.reroll_cost = self.base_reroll_cost
        self.reroll_count = 0
        self.is_first_shop_visit = True
        self._item_id_counter = 0
        if populate:
            self.refresh()

    # -- visit lifecycle ---------------------------------------------------

    def refresh(self, player_joker_ids: Iterable[str] = (), allow_duplicates: bool = False) -> None:
        """Regenerate every slot for a visit."""
        self.items = []
        self._item_id_counter = 0

        self._generate_random_cards(self.card_slot_count, player_joker_ids, allow_duplicates)

        if self.is_first_shop_visit:
            starter = get_pack_by_id(self.config.starter_pack_id)
            if starter is not None:
                self._add_item(ShopItemCategory.PACK, starter, starter.cost)
            self._generate_packs(self.config.pack_slots - 1)
        else:
            self._generate_packs(self.config.pack_slots)

        self._generate_voucher()

        self.reroll_cost = self.base_reroll_cost + self.reroll_count
        self.is_first_shop_visit = False
        logger.info("shop refreshed: %d items, reroll $%d", len(self.items), self.reroll_cost)

    def enter_new_shop(self, player_joker_ids: Iterable[str] = (), allow_duplicates: bool = False) -> None:
        self.reroll_count = 0
        self.reroll_cost = self.base_reroll_cost
        self.refresh(player_joker_ids, allow_duplicates)

    def reroll_shop(
        self,
        player_joker_ids: Iterable[str] = (),
        allow_duplicates: bool = False,
        free: bool = False,
    ) -> None:
        """Regenerate cards, packs and voucher; a paid reroll bumps the cost."""
        self.items = []
        self._item_id_counter = 0

        self._generate_random_cards(self.card_slot_count, player_joker_ids, allow_duplicates)
        self._generate_packs(self.config.pack_slots)
        self._generate_voucher()

        if not free:
            self.reroll_count += 1
            self.reroll_cost = self.base_reroll_cost + self.reroll_count
        logger.info("shop rerolled (free=%s): count=%d next=$%d", free, self.reroll_count, self.reroll_cost)

    def reset_reroll_cost(self) -> None:
        self.reroll_cost = self.base_reroll_cost

    # -- player actions ----------------------------------------------------

    def buy(self, item_id: str, money: int) -> ShopResult:
        shop_item = self.get_item(item_id)
        if shop_item is None:
            return ShopResult(False, "商品不存在")
        if shop_item.sold:
            return ShopResult(False, "商品已售出")
        if shop_item.category == ShopItemCategory.VOUCHER and not self._voucher_purchasable(shop_item):
            return ShopResult(False, "优惠券已购买或尚未解锁")
        if money < shop_item.current_price:
            return ShopResult(False, "资金不足")

        shop_item.mark_sold()
        remaining = money - shop_item.current_price
        logger.info("bought %s for $%d ($%d left)", shop_item.item_id, shop_item.current_price, remaining)
        return ShopResult(True, f"成功购买 {shop_item.name}", shop_item, remaining)

    def reroll(
        self,
        money: int,
        player_joker_ids: Iterable[str] = (),
        allow_duplicates: bool = False,
    ) -> ShopResult:
        cost = self.reroll_cost
        if money < cost:
            return ShopResult(False, "资金不足，无法刷新")
        self.reroll_shop(player_joker_ids, allow_duplicates)
        return ShopResult(True, "商店已刷新", remaining_money=money - cost)

    def apply_voucher(
        self,
        voucher_id: str,
        player_joker_ids: Iterable[str] = (),
        allow_duplicates: bool = False,
    ) -> bool:
        """Record a voucher and apply its shop-side effect.

        Returns False (and changes nothing) if it was already owned.
        """
        get_voucher(voucher_id)
        if not self.vouchers.purchase(voucher_id):
            return False

        old_base = self.base_reroll_cost
        if voucher_id == "voucher_overstock":
            self._add_extra_slot(player_joker_ids, allow_duplicates)
        elif voucher_id == "voucher_overstock_plus":
            self._add_extra_slot(player_joker_ids, allow_duplicates)
            self._add_extra_slot(player_joker_ids, allow_duplicates)
            self.refresh_item_prices()
        elif voucher_id in ("voucher_clearance", "voucher_liquidation"):
            self.refresh_item_prices()
        elif voucher_id in _REROLL_DISCOUNTS:
            self.base_reroll_cost = max(1, self.base_reroll_cost - _REROLL_DISCOUNTS[voucher_id])

        if self.base_reroll_cost != old_base:
            self.reroll_cost = self.base_reroll_cost + self.reroll_count
        logger.info("voucher applied: %s (%d owned)", voucher_id, self.vouchers.count)
        return True

    # -- pricing -----------------------------------------------------------

    @property
    def vouchers_used(self) -> list[str]:
        return self.vouchers.used

    def calculate_price(self, base_price: int) -> int:
        return calculate_price(base_price, self.vouchers.used)

    def calculate_price_with_edition(self, base_price: int, edition: Edition) -> int:
        return calculate_price_with_edition(base_price, edition, self.vouchers.used)

    def calculate_sell_price(self, item: ShopItem) -> int:
        sticker = getattr(item.item, "sticker", Sticker.NONE)
        return calculate_sell_price(item.current_price, sticker)

    def refresh_item_prices(self) -> None:
        for item in self.items:
            if not item.sold:
                item.current_price = self.calculate_price(item.base_price)

    def increase_joker_and_consumable_prices(self, amount: int) -> int:
        """Raise unsold joker/consumable prices (Gift Card). Returns items touched."""
        touched = 0
        for item in self.items:
            if not item.sold and item.category in (ShopItemCategory.JOKER, ShopItemCategory.CONSUMABLE):
                item.base_price += amount
                item.current_price += amount
                touched += 1
        logger.debug("gift card: +$%d on %d items", amount, touched)
        return touched

    # -- vouchers ----------------------------------------------------------

    def get_available_vouchers(self) -> list[VoucherDef]:
        return self.vouchers.get_available_vouchers()

    def can_buy_voucher(self, voucher_id: str) -> bool:
        return self.vouchers.can_buy_voucher(voucher_id)

    def _voucher_purchasable(self, shop_item: ShopItem) -> bool:
        voucher_id = shop_item.item.id
        if self.can_buy_voucher(voucher_id):
            return True
        # Filler offered once every pair is exhausted
        return voucher_id == BLANK_VOUCHER_ID and self.vouchers.is_exhausted()

    # -- getters -----------------------------------------------------------

    @property
    def card_slot_count(self) -> int:
        extra = sum(1 for v in _EXTRA_SLOT_VOUCHERS if self.vouchers.is_used(v))
        return self.config.card_slots + extra

    def get_item(self, item_id: str) -> Optional[ShopItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def get_available_items(self) -> list[ShopItem]:
        return [i for i in self.items if not i.sold]

    def _unsold(self, category: ShopItemCategory) -> list[ShopItem]:
        return [i for i in self.items if i.category == category and not i.sold]

    def get_jokers(self) -> list[ShopItem]:
        return self._unsold(ShopItemCategory.JOKER)

    def get_consumables(self) -> list[ShopItem]:
        return self._unsold(ShopItemCategory.CONSUMABLE)

    def get_packs(self) -> list[ShopItem]:
        return self._unsold(ShopItemCategory.PACK)

    def get_vouchers(self) -> list[ShopItem]:
        return self._unsold(ShopItemCategory.VOUCHER)

    def get_playing_cards(self) -> list[ShopItem]:
        return self._unsold(ShopItemCategory.PLAYING_CARD)

    def get_shop_info(self) -> str:
        lines = ["=== 商店 ===", f"刷新费用: ${self.reroll_cost}", ""]
        available = self.get_available_items()
        if not available:
            lines.append("商店已售罄")
        for item in available:
            lines.append(f"[{item.id}] {item.name} - ${item.current_price}")
        return "\n".join(lines)

    # -- generation --------------------------------------------------------

    def calculate_item_weights(self) -> dict[str, float]:
        weights = {
            "joker": self.config.joker_weight,
            "tarot": self.config.tarot_weight,
            "planet": self.config.planet_weight,
            "playing_card": self.config.playing_card_weight,
        }
        for voucher_id, weight in _TAROT_WEIGHTS:
            if self.vouchers.is_used(voucher_id):
                weights["tarot"] = weight
                break
        for voucher_id, weight in _PLANET_WEIGHTS:
            if self.vouchers.is_used(voucher_id):
                weights["planet"] = weight
                break
        if self.vouchers.is_used("voucher_magic_trick"):
            weights["playing_card"] = MAGIC_TRICK_PLAYING_CARD_WEIGHT
        return weights

    def _existing_joker_ids(self, player_joker_ids: Iterable[str], allow_duplicates: bool) -> set[str]:
        if allow_duplicates:
            return set()
        shop_ids = {item.item.id for item in self.get_jokers()}
        return shop_ids | set(player_joker_ids)

    def _generate_random_cards(self, count: int, player_joker_ids: Iterable[str], allow_duplicates: bool) -> None:
        weights = self.calculate_item_weights()
        total = sum(weights.values())
        existing = self._existing_joker_ids(player_joker_ids, allow_duplicates)

        for i in range(count):
            roll = self.rng.random() * total
            if roll < weights["joker"]:
                self._add_joker(existing)
            elif roll < weights["joker"] + weights["tarot"]:
                self._add_consumable(ConsumableType.TAROT)
            elif roll < weights["joker"] + weights["tarot"] + weights["planet"]:
                self._add_consumable(ConsumableType.PLANET)
            else:
                self._add_playing_card()
            logger.debug("card slot %d: roll %.2f / %.2f", i + 1, roll, total)

    def _add_joker(self, existing: set[str]) -> None:
        joker = get_random_joker(self.rng, exclude_ids=existing, vouchers_used=self.vouchers.used)
        if joker is None:
            return
        base = joker.cost + EDITION_SURCHARGE[joker.edition]
        self._add_item(ShopItemCategory.JOKER, joker, base)
        existing.add(joker.id)

    def _add_consumable(self, ctype: ConsumableType) -> None:
        consumable = get_random_consumable(ctype, self.rng)
        if consumable is not None:
            self._add_item(ShopItemCategory.CONSUMABLE, consumable, consumable.cost)

    def _add_playing_card(self) -> None:
        enhanced = self.generate_enhanced_playing_card()
        if enhanced is not None:
            card, _ = enhanced
        else:
            card = Card(self.rng.choice(list(Rank)), self.rng.choice(list(Suit)))
        base = PLAYING_CARD_COST + EDITION_SURCHARGE[card.edition]
        self._add_item(ShopItemCategory.PLAYING_CARD, card, base)

    def generate_enhanced_playing_card(self) -> Optional[tuple[Card, int]]:
        """Illusion: a random card that always carries an enhancement.

        Returns ``(card, price)``, or None when Illusion is not owned.
        """
        if not self.vouchers.is_used("voucher_illusion"):
            return None
        card = Card(
            self.rng.choice(list(Rank)),
            self.rng.choice(list(Suit)),
            enhancement=self.rng.choice(ENHANCEMENT_TYPES),
            edition=roll_playing_card_edition(self.vouchers.used, self.rng),
        )
        if self.rng.random() < SEAL_CHANCE:
            card.seal = self.rng.choice(SEAL_TYPES)
        return card, self.calculate_price_with_edition(PLAYING_CARD_COST, card.edition)

    def _generate_packs(self, count: int) -> None:
        taken = {item.item.id for item in self.items if item.category == ShopItemCategory.PACK}
        for pack in get_random_packs(count, self.rng, exclude_ids=taken):
            self._add_item(ShopItemCategory.PACK, pack, pack.cost)

    def _generate_voucher(self) -> None:
        available = self.vouchers.get_available_vouchers()
        voucher = self.rng.choice(available) if available else get_voucher(BLANK_VOUCHER_ID)
        self._add_item(ShopItemCategory.VOUCHER, voucher, voucher.cost)

    def _add_extra_slot(self, player_joker_ids: Iterable[str], allow_duplicates: bool) -> None:
        """Overstock fill: a joker or a tarot/planet at its raw cost."""
        if self.rng.random() < 0.5:
            existing = self._existing_joker_ids(player_joker_ids, allow_duplicates)
            joker = get_random_joker(self.rng, exclude_ids=existing, vouchers_used=self.vouchers.used)
            if joker is not None:
                self._add_item(ShopItemCategory.JOKER, joker, joker.cost, current_price=joker.cost)
        else:
            ctype = self.rng.choice([ConsumableType.TAROT, ConsumableType.PLANET])
            consumable = get_random_consumable(ctype, self.rng)
            if consumable is not None:
                self._add_item(ShopItemCategory.CONSUMABLE, consumable, consumable.cost,
                               current_price=consumable.cost)

    def _add_item(
        self,
        category: ShopItemCategory,
        item: ShopContent,
        base_price: int,
        current_price: Optional[int] = None,
    ) -> ShopItem:
        if current_price is None:
            current_price = self.calculate_price(base_price)
        shop_item = ShopItem(
            id=f"shop_item_{self._item_id_counter}",
            category=category,
            item=item,
            base_price=base_price,
            current_price=current_price,
        )
        self._item_id_counter += 1
        self.items.append(shop_item)
        logger.debug("added %s %s at $%d", category.value, shop_item.item_id, current_price)
        return shop_item

    # -- persistence -------------------------------------------------------

    def to_state(self) -> dict:
        """Plain-data snapshot; ``from_state`` rebuilds an identical shop."""
        return {
            "items": [_item_to_dict(item) for item in self.items],
            "reroll_cost": self.reroll_cost,
            "reroll_count": self.reroll_count,
            "vouchers_used": self.vouchers.used,
            "is_first_shop_visit": self.is_first_shop_visit,
            "base_reroll_cost": self.base_reroll_cost,
        }

    @classmethod
    def from_state(
        cls,
        state: dict,
        config: Optional[ShopConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "Shop":
        try:
            shop = cls(config, rng, state["vouchers_used"], populate=False)
            shop.items = [_item_from_dict(d) for d in state["items"]]
            shop.reroll_cost = int(state["reroll_cost"])
            shop.reroll_count = int(state["reroll_count"])
            shop.base_reroll_cost = int(state["base_reroll_cost"])
            shop.is_first_shop_visit = bool(state["is_first_shop_visit"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidStateError(f"malformed shop state: {e}") from e
        shop._item_id_counter = 1 + max(
            (int(item.id.rsplit("_", 1)[-1]) for item in shop.items), default=-1,
        )
        return shop


# ---------------------------------------------------------------------------
# Item (de)serialization
# ---------------------------------------------------------------------------

def _item_to_dict(item: ShopItem) -> dict:
    data = {
        "id": item.id,
        "category": item.category.value,
        "base_price": item.base_price,
        "current_price": item.current_price,
        "sold": item.sold,
    }
    obj = item.item
    if isinstance(obj, Card):
        data["card"] = {
            "rank": obj.rank.value,
            "suit": obj.suit.value,
            "edition": obj.edition.value,
            "enhancement": obj.enhancement.value,
            "seal": obj.seal.value,
        }
    elif isinstance(obj, JokerCard):
        data["item_id"] = obj.id
        data["edition"] = obj.edition.value
        data["sticker"] = obj.sticker.value
    elif isinstance(obj, Consumable):
        data["item_id"] = obj.id
        data["is_negative"] = obj.is_negative
    else:
        data["item_id"] = obj.id
    return data


def _item_from_dict(data: dict) -> ShopItem:
    category = ShopItemCategory(data["category"])
    if category == ShopItemCategory.PLAYING_CARD:
        c = data["card"]
        obj = Card(
            Rank(c["rank"]), Suit(c["suit"]),
            edition=Edition(c["edition"]),
            enhancement=Enhancement(c["enhancement"]),
            seal=Seal(c["seal"]),
        )
    elif category == ShopItemCategory.JOKER:
        obj = get_joker_by_id(data["item_id"])
        if obj is None:
            raise InvalidStateError(f"unknown joker: {data['item_id']}")
        obj.edition = Edition(data.get("edition", ""))
        obj.sticker = Sticker(data.get("sticker", ""))
    elif category == ShopItemCategory.CONSUMABLE:
        obj = require_consumable(data["item_id"])
        obj.is_negative = data.get("is_negative", False)
    elif category == ShopItemCategory.PACK:
        obj = get_pack_by_id(data["item_id"])
        if obj is None:
            raise InvalidStateError(f"unknown pack: {data['item_id']}")
    else:
        obj = get_voucher(data["item_id"])
    return ShopItem(
        id=data["id"],
        category=category,
        item=obj,
        base_price=data["base_price"],
        current_price=data["current_price"],
        sold=data["sold"],
    )
