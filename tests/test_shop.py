"""
Tests for the shop: visit layout, pricing, rerolls, purchases, vouchers
and persisted state.
"""

import random

import pytest

from balatro_econ.cards import Card, JokerCard
from balatro_econ.enums import Edition, Enhancement, JokerRarity, ShopItemCategory, Sticker
from balatro_econ.errors import InvalidStateError
from balatro_econ.packs import STARTER_PACK_ID
from balatro_econ.shop import Shop, ShopConfig
from balatro_econ.vouchers import BLANK_VOUCHER_ID, VOUCHERS

CARD_CATEGORIES = (ShopItemCategory.JOKER, ShopItemCategory.CONSUMABLE, ShopItemCategory.PLAYING_CARD)


def card_items(shop):
    return [i for i in shop.items if i.category in CARD_CATEGORIES]


def only(**weights):
    """ShopConfig with every card weight zeroed except the given ones."""
    base = dict(joker_weight=0, tarot_weight=0, planet_weight=0, playing_card_weight=0)
    base.update(weights)
    return ShopConfig(**base)


# =============================================================================
# Visit layout
# =============================================================================


class TestVisitLayout:
    """Two cards, two packs, one voucher."""

    def test_first_visit(self, shop):
        """The first shop carries the starter Buffoon pack."""
        assert len(shop.items) == 5
        assert len(card_items(shop)) == 2
        packs = shop.get_packs()
        assert len(packs) == 2
        assert packs[0].item.id == STARTER_PACK_ID
        assert len(shop.get_vouchers()) == 1
        assert not shop.is_first_shop_visit

    def test_item_ids(self, shop):
        """Items are numbered from zero on each refresh."""
        assert [i.id for i in shop.items] == [f"shop_item_{n}" for n in range(5)]
        shop.reroll_shop()
        assert shop.items[0].id == "shop_item_0"

    def test_packs_never_repeat(self):
        """Two packs in one visit are always different."""
        for seed in range(100):
            shop = Shop(rng=random.Random(seed))
            for _ in range(3):
                shop.reroll_shop()
                ids = [p.item.id for p in shop.get_packs()]
                assert len(set(ids)) == 2

    def test_default_weights_draw_no_playing_cards(self):
        """Without Magic Trick the card slots hold jokers and consumables."""
        shop = Shop(rng=random.Random(3))
        for _ in range(100):
            shop.reroll_shop(free=True)
            assert not shop.get_playing_cards()

    def test_joker_share(self):
        """Jokers take about 20/28 of card slots."""
        shop = Shop(rng=random.Random(11))
        jokers = total = 0
        for _ in range(1000):
            shop.reroll_shop(free=True)
            jokers += len(shop.get_jokers())
            total += len(card_items(shop))
        assert 0.66 < jokers / total < 0.77

    def test_no_legendary_jokers(self):
        """Legendaries are never offered."""
        shop = Shop(only(joker_weight=1), rng=random.Random(8))
        for _ in range(300):
            shop.reroll_shop(free=True)
            assert all(i.item.rarity != JokerRarity.LEGENDARY for i in shop.get_jokers())

    def test_jokers_not_duplicated(self):
        """Shop jokers exclude each other and the player's jokers."""
        config = only(joker_weight=1)
        config.card_slots = 10
        shop = Shop(config, rng=random.Random(21), populate=False)
        for _ in range(30):
            shop.refresh(player_joker_ids=["joker", "greedy_joker"])
            ids = [i.item.id for i in shop.get_jokers()]
            assert len(ids) == len(set(ids)) == 10
            assert "joker" not in ids
            assert "greedy_joker" not in ids

    def test_allow_duplicates(self):
        """Showman-style duplicates lift the exclusion."""
        shop = Shop(only(joker_weight=1), rng=random.Random(4), populate=False)
        shop.refresh(player_joker_ids=["joker"], allow_duplicates=True)
        assert len(shop.get_jokers()) == 2

    def test_edition_jokers_cost_more(self):
        """A joker's price includes its edition surcharge."""
        shop = Shop(only(joker_weight=1), rng=random.Random(5))
        seen = False
        for _ in range(500):
            shop.reroll_shop(free=True)
            for item in shop.get_jokers():
                if item.item.edition != Edition.NONE:
                    assert item.base_price > item.item.cost
                    seen = True
                else:
                    assert item.base_price == item.item.cost
        assert seen


# =============================================================================
# Rerolls
# =============================================================================


class TestReroll:
    """Cost climbs by one per paid reroll and resets per visit."""

    def test_insufficient_money(self, shop):
        """Too poor to reroll."""
        result = shop.reroll(4)
        assert not result.success
        assert result.message == "资金不足，无法刷新"
        assert shop.reroll_count == 0

    def test_cost_increments(self, shop):
        """Each paid reroll costs one more."""
        first = shop.reroll(20)
        assert first.success
        assert first.message == "商店已刷新"
        assert first.remaining_money == 15
        assert shop.reroll_cost == 6
        second = shop.reroll(first.remaining_money)
        assert second.remaining_money == 9
        assert shop.reroll_cost == 7

    def test_free_reroll(self, shop):
        """Free rerolls leave the cost alone."""
        shop.reroll_shop(free=True)
        assert shop.reroll_cost == 5
        assert shop.reroll_count == 0

    def test_new_visit_resets(self, shop):
        """Entering a new shop resets to the base cost."""
        shop.reroll(50)
        shop.reroll(50)
        shop.enter_new_shop()
        assert shop.reroll_cost == 5
        assert shop.reroll_count == 0

    def test_reset_reroll_cost(self, shop):
        """reset_reroll_cost returns to the base."""
        shop.reroll(50)
        shop.reset_reroll_cost()
        assert shop.reroll_cost == shop.base_reroll_cost

    def test_starter_only_on_first_visit(self):
        """Later visits draw both packs at random."""
        starters = 0
        for seed in range(200):
            shop = Shop(rng=random.Random(seed))
            shop.enter_new_shop()
            starters += any(p.item.id == STARTER_PACK_ID for p in shop.get_packs())
        assert starters < 100


# =============================================================================
# Purchases
# =============================================================================


class TestBuy:
    """Buying marks items sold and reports the change."""

    def test_missing_item(self, shop):
        """Unknown ids are rejected."""
        assert shop.buy("shop_item_99", 100).message == "商品不存在"

    def test_insufficient_money(self, shop):
        """Cannot afford it."""
        item = shop.items[0]
        result = shop.buy(item.id, item.current_price - 1)
        assert not result.success
        assert result.message == "资金不足"
        assert not item.sold

    def test_exact_money(self, shop):
        """$10 item with $10 succeeds and leaves $0."""
        item = shop.items[0]
        item.current_price = 10
        result = shop.buy(item.id, 10)
        assert result.success
        assert result.remaining_money == 0
        assert item.sold
        assert result.message == f"成功购买 {item.name}"

    def test_already_sold(self, shop):
        """A sold slot cannot be bought again."""
        item = shop.items[0]
        shop.buy(item.id, 100)
        assert shop.buy(item.id, 100).message == "商品已售出"

    def test_sold_items_hidden(self, shop):
        """Getters only list unsold items."""
        pack = shop.get_packs()[0]
        shop.buy(pack.id, 100)
        assert pack not in shop.get_packs()
        assert len(shop.get_available_items()) == 4

    def test_owned_voucher_rejected(self, shop):
        """A voucher that is already owned cannot be bought."""
        voucher = shop.get_vouchers()[0]
        shop.vouchers.purchase(voucher.item.id)
        result = shop.buy(voucher.id, 100)
        assert not result.success
        assert "优惠券已购买" in result.message

    def test_blank_filler_when_exhausted(self):
        """Every pair owned: the blank voucher fills the slot and is a no-op."""
        shop = Shop(rng=random.Random(1), vouchers_used=VOUCHERS)
        voucher = shop.get_vouchers()[0]
        assert voucher.item.id == BLANK_VOUCHER_ID
        assert shop.buy(voucher.id, 100).success
        assert not shop.apply_voucher(BLANK_VOUCHER_ID)


# =============================================================================
# Pricing and vouchers
# =============================================================================


class TestVoucherEffects:
    """Shop-side voucher effects."""

    def test_liquidation_reprices(self, shop):
        """$10 base under Liquidation costs $6."""
        item = shop.items[0]
        item.base_price = 10
        shop.apply_voucher("voucher_liquidation")
        assert item.current_price == 6

    def test_clearance_then_liquidation(self, shop):
        """Two vouchers, Liquidation wins: $7."""
        item = shop.items[0]
        item.base_price = 10
        shop.apply_voucher("voucher_clearance")
        shop.apply_voucher("voucher_liquidation")
        assert item.current_price == 7
        assert shop.calculate_price(10) == 7

    def test_sold_items_keep_price(self, shop):
        """Repricing skips sold items."""
        item = shop.items[0]
        shop.buy(item.id, 100)
        paid = item.current_price
        shop.apply_voucher("voucher_liquidation")
        assert item.current_price == paid

    def test_reroll_discounts(self, shop):
        """Surplus takes $2 off, Glut $4 more, never below $1."""
        shop.reroll(50)
        shop.apply_voucher("voucher_reroll_surplus")
        assert shop.base_reroll_cost == 3
        assert shop.reroll_cost == 4
        shop.apply_voucher("voucher_reroll_glut")
        assert shop.base_reroll_cost == 1
        assert shop.reroll_cost == 2

    def test_duplicate_voucher_no_effect(self, shop):
        """Applying an owned voucher again changes nothing."""
        shop.apply_voucher("voucher_reroll_surplus")
        assert not shop.apply_voucher("voucher_reroll_surplus")
        assert shop.base_reroll_cost == 3

    def test_overstock_adds_slot(self, shop):
        """Overstock fills one extra slot now and keeps it on reroll."""
        before = len(card_items(shop))
        shop.apply_voucher("voucher_overstock")
        assert len(card_items(shop)) == before + 1
        shop.reroll_shop()
        assert len(card_items(shop)) == 3

    def test_overstock_plus_adds_two(self, shop):
        """Overstock Plus fills two more and rerolls with four cards."""
        shop.apply_voucher("voucher_overstock")
        count = len(card_items(shop))
        shop.apply_voucher("voucher_overstock_plus")
        assert len(card_items(shop)) == count + 2
        shop.reroll_shop()
        assert len(card_items(shop)) == 4

    def test_merchant_weights(self, shop):
        """Merchants raise the weight, tycoons more."""
        assert shop.calculate_item_weights()["tarot"] == 4
        shop.apply_voucher("voucher_tarot_merchant")
        assert shop.calculate_item_weights()["tarot"] == 9.6
        shop.apply_voucher("voucher_tarot_tycoon")
        assert shop.calculate_item_weights()["tarot"] == 32
        shop.apply_voucher("voucher_planet_merchant")
        assert shop.calculate_item_weights()["planet"] == 9.6

    def test_magic_trick_playing_cards(self):
        """Magic Trick makes playing cards appear."""
        shop = Shop(rng=random.Random(13), vouchers_used=["voucher_magic_trick"])
        seen = 0
        for _ in range(300):
            shop.reroll_shop(free=True)
            seen += len(shop.get_playing_cards())
        assert seen > 0
        assert shop.calculate_item_weights()["playing_card"] == 4

    def test_playing_card_items(self):
        """Playing-card slots hold cards priced from $1 plus surcharge."""
        shop = Shop(only(playing_card_weight=1), rng=random.Random(6))
        for item in shop.get_playing_cards():
            assert isinstance(item.item, Card)
            assert item.base_price >= 1

    def test_illusion_cards_always_enhanced(self):
        """Illusion cards always carry an enhancement."""
        shop = Shop(rng=random.Random(17), vouchers_used=["voucher_magic_trick", "voucher_illusion"])
        for _ in range(100):
            card, price = shop.generate_enhanced_playing_card()
            assert card.enhancement != Enhancement.NONE
            assert price >= 1

    def test_illusion_needs_voucher(self, shop):
        """Without Illusion there is no enhanced card."""
        assert shop.generate_enhanced_playing_card() is None


class TestSellPrice:
    """Half the current price, at least $1."""

    def test_formula_holds_after_repricing(self, shop):
        """Sell price tracks the then-current price."""
        for item in shop.items:
            assert shop.calculate_sell_price(item) == max(1, item.current_price // 2)
        shop.apply_voucher("voucher_liquidation")
        for item in shop.items:
            assert shop.calculate_sell_price(item) == max(1, item.current_price // 2)

    def test_rental_joker(self, shop):
        """Rental jokers sell for $1."""
        item = shop.items[0]
        item.item = JokerCard("joker", "小丑", cost=6, sticker=Sticker.RENTAL)
        item.current_price = 6
        assert shop.calculate_sell_price(item) == 1

    def test_gift_card_raises_prices(self):
        """Unsold jokers and consumables go up; packs do not."""
        shop = Shop(rng=random.Random(2))
        before = {i.id: i.current_price for i in shop.items}
        touched = shop.increase_joker_and_consumable_prices(1)
        assert touched == 2
        for item in shop.items:
            bump = 1 if item.category in (ShopItemCategory.JOKER, ShopItemCategory.CONSUMABLE) else 0
            assert item.current_price == before[item.id] + bump


class TestShopInfo:
    """Plain-text summary."""

    def test_header(self, shop):
        """Shows the reroll cost and every item."""
        info = shop.get_shop_info()
        assert info.startswith("=== 商店 ===")
        assert "刷新费用: $5" in info
        assert "shop_item_4" in info

    def test_sold_out(self, shop):
        """Nothing left to buy."""
        for item in shop.items:
            item.sold = True
        assert "商店已售罄" in shop.get_shop_info()


# =============================================================================
# Persisted state
# =============================================================================


class TestState:
    """Shop state restores with both reroll numbers intact."""

    def test_restore(self, shop):
        """Items, prices and counters come back as they were."""
        shop.reroll(50)
        shop.apply_voucher("voucher_reroll_surplus")
        shop.buy(shop.items[0].id, 100)
        restored = Shop.from_state(shop.to_state(), rng=random.Random(0))
        assert [i.id for i in restored.items] == [i.id for i in shop.items]
        assert [i.item_id for i in restored.items] == [i.item_id for i in shop.items]
        assert [i.current_price for i in restored.items] == [i.current_price for i in shop.items]
        assert restored.items[0].sold
        assert restored.reroll_cost == shop.reroll_cost == 4
        assert restored.base_reroll_cost == 3
        assert restored.reroll_count == 1
        assert restored.vouchers_used == ["voucher_reroll_surplus"]
        assert not restored.is_first_shop_visit

    def test_restored_counter_continues(self, shop):
        """Extra slots after a restore get fresh ids."""
        restored = Shop.from_state(shop.to_state(), rng=random.Random(0))
        restored.apply_voucher("voucher_overstock")
        assert restored.items[-1].id == "shop_item_5"

    def test_malformed(self):
        """Missing keys raise InvalidStateError."""
        with pytest.raises(InvalidStateError):
            Shop.from_state({"items": []})

    def test_unknown_pack(self, shop):
        """Broken item references raise InvalidStateError."""
        state = shop.to_state()
        for item in state["items"]:
            if item["category"] == "pack":
                item["item_id"] = "pack_nope"
        with pytest.raises(InvalidStateError):
            Shop.from_state(state)
