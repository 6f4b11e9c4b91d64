"""
Tests for effect resolution: application order, hand cardinality,
consumable storage overflow and Fool copy chains.
"""

import pytest

from balatro_econ.catalog import require_consumable
from balatro_econ.effects import EffectResult
from balatro_econ.enums import ConsumableType, Enhancement, HandType
from balatro_econ.errors import UnknownConsumableError
from balatro_econ.resolver import EffectResolver

from conftest import Harness, make_hand, make_joker


# =============================================================================
# Basic resolution
# =============================================================================


class TestResolution:
    """Validate, invoke, apply."""

    def test_unknown_id_fails_softly(self, harness):
        """Unknown ids come back as a failed resolution."""
        result = harness.use("tarot_nope")
        assert not result.success
        assert result.message == "消耗牌不存在: tarot_nope"

    def test_unknown_id_raises_in_strict_mode(self, harness):
        """Strict resolvers raise instead."""
        harness.resolver = EffectResolver(strict=True)
        with pytest.raises(UnknownConsumableError):
            harness.use("tarot_nope")

    def test_precondition_failure_returns_condition(self, harness):
        """A failed precondition reports the use condition and applies nothing."""
        result = harness.use("tarot_magician", selected=[0])
        assert not result.success
        assert result.message == "需要选择2张手牌"
        assert harness.resolver.last_used is None

    def test_money_delta_applied(self, harness):
        """Hermit adds to the current balance."""
        harness.money = 6
        result = harness.use("tarot_hermit")
        assert result.success
        assert harness.money == 12

    def test_set_money_wins(self):
        """An absolute money value replaces the balance."""
        h = Harness(make_hand(3), money=25)
        result = h.use("spectral_wraith", add_joker=lambda r: True, can_add_joker=lambda: True)
        assert result.success
        assert h.money == 0

    def test_planet_upgrades_hand(self, harness):
        """Planets level the hand type through the scoring collaborator."""
        harness.use("planet_jupiter")
        assert harness.hand_levels.get_level(HandType.FLUSH) == 2

    def test_black_hole_upgrades_everything(self, harness):
        """Black Hole levels every hand type once."""
        harness.use("spectral_black_hole")
        assert all(harness.hand_levels.get_level(ht) == 2 for ht in HandType)

    def test_last_used_recorded(self, harness):
        """A successful use becomes the last used consumable."""
        harness.use("planet_pluto")
        assert harness.resolver.last_used.id == "planet_pluto"
        assert harness.resolver.last_used.type == ConsumableType.PLANET

    def test_reentry_is_rejected(self, harness):
        """Calling the resolver from inside an effect raises."""
        harness.resolver.resolving = True
        with pytest.raises(RuntimeError):
            harness.use("planet_pluto")


# =============================================================================
# Hand cardinality
# =============================================================================


class TestHandCardinality:
    """Affected cards stay; destroyed cards leave."""

    @pytest.mark.parametrize("cid,selected", [
        ("tarot_magician", [0, 1]),
        ("tarot_strength", [0]),
        ("tarot_star", [0, 1, 2]),
        ("spectral_ghost", [3]),
        ("spectral_sigil", []),
    ])
    def test_affecting_keeps_hand_size(self, harness, cid, selected):
        """Effects that only mutate cards keep the hand the same size."""
        before = len(harness.hand)
        assert harness.use(cid, selected=selected).success
        assert len(harness.hand) == before

    def test_hanged_man_removes_selected(self, harness):
        """Hanged Man removes exactly the selected cards."""
        doomed = [harness.hand.cards[1], harness.hand.cards[4]]
        result = harness.use("tarot_hanged_man", selected=[1, 4])
        assert result.destroyed_count == 2
        assert len(harness.hand) == 6
        assert not any(c is d for c in harness.hand.cards for d in doomed)

    def test_immolate_with_four_cards(self):
        """Four cards: rejected with the exact message."""
        h = Harness(make_hand(4))
        result = h.use("spectral_immolate")
        assert not result.success
        assert result.message == "需要至少5张手牌"
        assert len(h.hand) == 4
        assert h.money == 0

    def test_immolate_with_five_cards(self):
        """Five cards: all five destroyed and $20 gained."""
        h = Harness(make_hand(5))
        result = h.use("spectral_immolate")
        assert result.success
        assert len(h.hand) == 0
        assert h.money == 20

    def test_generated_cards_ignore_hand_size(self):
        """Familiar nets +2 cards even on a full hand."""
        h = Harness(make_hand(8))
        h.use("spectral_familiar")
        assert len(h.hand) == 10

    def test_cryptid_adds_two(self, harness):
        """Cryptid adds two copies and destroys nothing."""
        harness.use("spectral_cryptid", selected=[0])
        assert len(harness.hand) == 10


# =============================================================================
# Consumable storage
# =============================================================================


class TestConsumableStorage:
    """Generated consumables fill free slots; overflow is counted."""

    def test_all_fit(self, harness):
        """Two empty slots take both generated planets."""
        result = harness.use("tarot_high_priestess")
        assert result.success
        assert result.consumables_added == 2
        assert result.consumables_skipped == 0
        assert len(harness.slots) == 2

    def test_partial_fit(self, harness):
        """One free slot: one added, one skipped, still a success."""
        harness.slots.add(require_consumable("planet_pluto"))
        result = harness.use("tarot_emperor")
        assert result.success
        assert result.consumables_added == 1
        assert result.consumables_skipped == 1
        assert "1张因槽位已满被跳过" in result.message

    def test_held_card_frees_its_slot(self):
        """A used held consumable leaves before its products are stored."""
        h = Harness(make_hand(4), max_slots=2)
        priestess = require_consumable("tarot_high_priestess")
        h.slots.add(priestess)
        h.slots.add(require_consumable("planet_pluto"))
        ctx = h.context()
        result = h.resolver.use_consumable(priestess.id, ctx, h.targets(), held=priestess)
        assert result.consumables_added == 1
        assert not any(c is priestess for c in h.slots.consumables)


# =============================================================================
# Fool
# =============================================================================


class TestFoolChain:
    """Fool replays the last tarot/planet against the same context."""

    def test_fool_without_history(self, harness):
        """Nothing to copy yet."""
        result = harness.use("tarot_fool")
        assert not result.success

    def test_fool_replays_planet(self, harness):
        """Planet, then Fool: the hand is levelled twice."""
        harness.use("planet_saturn")
        result = harness.use("tarot_fool")
        assert result.success
        assert "→" in result.message
        assert harness.hand_levels.get_level(HandType.STRAIGHT) == 3

    def test_fool_replays_selection_effect(self, harness):
        """The copied effect uses the selection given to Fool."""
        harness.use("tarot_chariot", selected=[0])
        result = harness.use("tarot_fool", selected=[5])
        assert result.success
        assert harness.hand.cards[5].enhancement == Enhancement.STEEL

    def test_fool_nested_precondition(self, harness):
        """Copying Magician with nothing selected fails."""
        harness.use("tarot_magician", selected=[0, 1])
        result = harness.use("tarot_fool")
        assert not result.success

    def test_fool_cannot_copy_fool(self, harness):
        """After a Fool, the last used is the copied card, never Fool itself."""
        harness.use("planet_pluto")
        harness.use("tarot_fool")
        assert harness.resolver.last_used.id == "planet_pluto"
        assert harness.use("tarot_fool").success

    def test_fool_refuses_spectral(self, harness):
        """A spectral as last used blocks Fool."""
        harness.use("spectral_sigil")
        assert not harness.use("tarot_fool").success

    def test_fool_copy_of_generator_stores_products(self, harness):
        """Fool copying Emperor stores the copied products."""
        harness.use("tarot_emperor")
        harness.slots.clear()
        result = harness.use("tarot_fool")
        assert result.success
        assert result.consumables_added == 2

    def test_chain_depth_guard(self, harness, monkeypatch):
        """A self-referencing entry is stopped by the depth guard."""
        looping = require_consumable("tarot_hermit")
        looping.effect = lambda ctx: EffectResult.ok("loop", copied_consumable_id="tarot_hermit")
        monkeypatch.setattr("balatro_econ.resolver.get_consumable_by_id",
                            lambda cid: looping.clone())
        result = harness.use("tarot_hermit")
        assert result.success
        assert "复制链过深" in result.message


# =============================================================================
# Temperance with a session's jokers
# =============================================================================


class TestTemperance:
    """Temperance money through the resolver."""

    def test_sums_sell_prices(self, harness):
        """Sell prices 3, 2 and 4 give $9."""
        views = [make_joker(cost=6).view(), make_joker(cost=4).view(), make_joker(cost=8).view()]
        harness.use("tarot_temperance", jokers=views)
        assert harness.money == 9

    def test_caps_at_fifty(self, harness):
        """A rich joker row still gives $50."""
        views = [make_joker(cost=60).view() for _ in range(3)]
        harness.use("tarot_temperance", jokers=views)
        assert harness.money == 50
