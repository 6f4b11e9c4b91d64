"""
Tests for price formulas and modifier probability tables.
"""

import random

from balatro_econ.enums import Edition, Sticker
from balatro_econ.pricing import (
    apply_discount,
    calculate_price,
    calculate_price_with_edition,
    calculate_sell_price,
)
from balatro_econ.probabilities import (
    get_edition_multiplier,
    get_joker_edition_probabilities,
    get_playing_card_edition_probabilities,
    roll_card_modifiers,
)
from balatro_econ.enums import Enhancement, Seal


class TestPrices:
    """Discount, then inflation per owned voucher."""

    def test_no_vouchers(self):
        """Base price passes through."""
        assert calculate_price(10) == 10

    def test_liquidation(self):
        """$10 with Liquidation: floor(5 * 1.2) = 6."""
        assert calculate_price(10, ["voucher_liquidation"]) == 6

    def test_clearance_then_liquidation(self):
        """Liquidation wins; two vouchers inflate by 40%: $7."""
        assert calculate_price(10, ["voucher_clearance", "voucher_liquidation"]) == 7

    def test_clearance(self):
        """$10 with Clearance: floor(floor(7.5) * 1.2) = 8."""
        assert apply_discount(10, ["voucher_clearance"]) == 7
        assert calculate_price(10, ["voucher_clearance"]) == 8

    def test_inflation_counts_every_voucher(self):
        """Unrelated vouchers still inflate."""
        assert calculate_price(5, ["voucher_hone", "voucher_overstock"]) == 7

    def test_minimum_one(self):
        """Prices never drop below $1."""
        assert calculate_price(1, ["voucher_liquidation"]) == 1
        assert calculate_price(0) == 1

    def test_edition_surcharge(self):
        """Edition surcharges are added before discounting."""
        assert calculate_price_with_edition(4, Edition.FOIL) == 6
        assert calculate_price_with_edition(4, Edition.HOLOGRAPHIC) == 7
        assert calculate_price_with_edition(4, Edition.POLYCHROME) == 9
        assert calculate_price_with_edition(4, Edition.NEGATIVE) == 9

    def test_sell_price(self):
        """Half the current price, at least $1; rental sells for $1."""
        assert calculate_sell_price(7) == 3
        assert calculate_sell_price(1) == 1
        assert calculate_sell_price(20, Sticker.RENTAL) == 1


class TestProbabilities:
    """Edition tables scale with Hone and Glow Up."""

    def test_multiplier(self):
        """Glow Up beats Hone."""
        assert get_edition_multiplier() == 1
        assert get_edition_multiplier(["voucher_hone"]) == 2
        assert get_edition_multiplier(["voucher_hone", "voucher_glow_up"]) == 4

    def test_card_table_sums_to_one(self):
        """Every table is a distribution."""
        for used in ([], ["voucher_hone"], ["voucher_glow_up"]):
            table = get_playing_card_edition_probabilities(used)
            assert abs(sum(table.values()) - 1) < 1e-9

    def test_card_base_chances(self):
        """0.92 / 0.04 / 0.028 / 0.012 without vouchers."""
        table = get_playing_card_edition_probabilities()
        assert abs(table[Edition.NONE] - 0.92) < 1e-9
        assert table[Edition.FOIL] == 0.04

    def test_glow_up_quadruples(self):
        """Glow Up multiplies foil by four."""
        table = get_playing_card_edition_probabilities(["voucher_glow_up"])
        assert abs(table[Edition.FOIL] - 0.16) < 1e-9

    def test_joker_negative_not_scaled(self):
        """Negative joker chance ignores vouchers."""
        plain = get_joker_edition_probabilities()
        boosted = get_joker_edition_probabilities(["voucher_glow_up"])
        assert plain[Edition.NEGATIVE] == boosted[Edition.NEGATIVE] == 0.01
        assert boosted[Edition.FOIL] > plain[Edition.FOIL]

    def test_modifier_rates(self):
        """About 40% enhanced and 20% sealed over many rolls."""
        rng = random.Random(77)
        n = 5000
        rolls = [roll_card_modifiers([], rng) for _ in range(n)]
        enhanced = sum(1 for e, _, _ in rolls if e != Enhancement.NONE) / n
        sealed = sum(1 for _, _, s in rolls if s != Seal.NONE) / n
        assert 0.36 < enhanced < 0.44
        assert 0.17 < sealed < 0.23
