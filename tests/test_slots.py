"""
Tests for consumable and joker storage, hand levels and configuration.
"""

import logging

import pytest

from balatro_econ.catalog import require_consumable
from balatro_econ.config import EconomyConfig, configure_logging
from balatro_econ.enums import Edition, HandType
from balatro_econ.errors import UnknownConsumableError
from balatro_econ.hand_levels import HandLevels
from balatro_econ.slots import ConsumableSlots, JokerSlots

from conftest import make_joker


class TestConsumableSlots:
    """Capacity, negatives and saved state."""

    def test_capacity(self):
        """Two slots hold two cards."""
        slots = ConsumableSlots(2)
        assert slots.add(require_consumable("tarot_hermit"))
        assert slots.add(require_consumable("planet_pluto"))
        assert slots.is_full()
        assert not slots.add(require_consumable("planet_mars"))
        assert len(slots) == 2

    def test_negative_takes_no_slot(self):
        """Negative consumables fit even when full."""
        slots = ConsumableSlots(1)
        slots.add(require_consumable("tarot_hermit"))
        negative = require_consumable("tarot_star")
        negative.is_negative = True
        assert slots.add(negative)
        assert slots.occupied == 1

    def test_remove_by_identity(self):
        """remove() drops the exact instance."""
        slots = ConsumableSlots(3)
        a = require_consumable("tarot_hermit")
        b = require_consumable("tarot_hermit")
        slots.add(a)
        slots.add(b)
        assert slots.remove(b)
        assert slots.consumables[0] is a
        assert not slots.remove(b)

    def test_increase_max_slots(self):
        """Crystal Ball style extra slot."""
        slots = ConsumableSlots(2)
        slots.increase_max_slots(1)
        assert slots.available == 3

    def test_state(self):
        """Saved state restores ids, negatives and bonuses."""
        slots = ConsumableSlots(2)
        hermit = require_consumable("tarot_hermit")
        hermit.add_sell_value(2)
        slots.add(hermit)
        state = slots.get_state()
        other = ConsumableSlots()
        other.restore_state(state)
        assert other.consumables[0].id == "tarot_hermit"
        assert other.consumables[0].sell_value_bonus == 2

    def test_state_with_broken_id(self):
        """A broken id in saved state raises."""
        with pytest.raises(UnknownConsumableError):
            ConsumableSlots().restore_state({"consumables": ["tarot_nope"]})


class TestJokerSlots:
    """Five slots, negatives bring their own."""

    def test_capacity(self):
        """The sixth plain joker is rejected."""
        slots = JokerSlots(5)
        for i in range(5):
            assert slots.add(make_joker(f"j{i}"))
        assert not slots.add(make_joker("j5"))
        assert not slots.can_add()

    def test_negative_extends(self):
        """A negative joker always fits and adds an effective slot."""
        slots = JokerSlots(5)
        for i in range(5):
            slots.add(make_joker(f"j{i}"))
        assert slots.add(make_joker("neg", edition=Edition.NEGATIVE))
        assert slots.effective_max_slots == 6
        assert len(slots) == 6

    def test_ids(self):
        """ids() in order."""
        slots = JokerSlots()
        slots.add(make_joker("a"))
        slots.add(make_joker("b"))
        assert slots.ids() == ["a", "b"]
        assert slots.has("b")


class TestHandLevels:
    """Levels and play counts."""

    def test_upgrade(self):
        """Each planet adds its bonus."""
        levels = HandLevels()
        assert levels.get_base(HandType.PAIR) == (10, 2)
        levels.upgrade_hand(HandType.PAIR)
        assert levels.get_level(HandType.PAIR) == 2
        assert levels.get_base(HandType.PAIR) == (25, 3)

    def test_most_played(self):
        """Most-played hand, None before any play."""
        levels = HandLevels()
        assert levels.most_played() is None
        levels.record_play(HandType.PAIR)
        levels.record_play(HandType.FLUSH)
        levels.record_play(HandType.PAIR)
        assert levels.most_played() == HandType.PAIR


class TestConfig:
    """Defaults and environment overrides."""

    def test_defaults(self):
        """Standard game values."""
        config = EconomyConfig()
        assert config.base_reroll_cost == 5
        assert config.max_jokers == 5
        assert config.consumable_slots == 2
        assert not config.strict_catalog

    def test_from_env(self):
        """Prefixed variables override defaults."""
        env = {
            "BALATRO_ECON_STARTING_MONEY": "10",
            "BALATRO_ECON_STRICT_CATALOG": "true",
            "BALATRO_ECON_LOG_LEVEL": "DEBUG",
        }
        config = EconomyConfig.from_env(environ=env)
        assert config.starting_money == 10
        assert config.strict_catalog is True
        assert config.log_level == "DEBUG"

    def test_configure_logging(self, monkeypatch):
        """Level names are resolved before basicConfig."""
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        configure_logging("debug")
        assert calls["level"] == logging.DEBUG

    def test_configure_logging_from_config(self, monkeypatch):
        """The config's log level applies when no level is passed."""
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        env = {"BALATRO_ECON_LOG_LEVEL": "ERROR"}
        configure_logging(config=EconomyConfig.from_env(environ=env))
        assert calls["level"] == logging.ERROR

    def test_explicit_level_beats_config(self, monkeypatch):
        """A passed level overrides the config."""
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        configure_logging("warning", config=EconomyConfig(log_level="DEBUG"))
        assert calls["level"] == logging.WARNING
