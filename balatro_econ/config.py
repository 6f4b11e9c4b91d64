"""Session-wide configuration and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields


@dataclass
class EconomyConfig:
    """Tunable knobs for a game session.

    Shop-local settings (slot counts, category weights) live in
    ``shop.ShopConfig``; this holds what the session itself needs.
    """
    base_reroll_cost: int = 5
    starting_money: int = 4
    max_jokers: int = 5
    consumable_slots: int = 2
    hand_size: int = 8
    # Raise UnknownConsumableError instead of returning a failed resolution
    strict_catalog: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, prefix: str = "BALATRO_ECON_", environ=None) -> "EconomyConfig":
        """Build a config, overriding defaults from ``PREFIX_FIELD`` variables."""
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(prefix + f.name.upper())
            if raw is None:
                continue
            if f.type in ("bool", bool):
                overrides[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
            elif f.type in ("int", int):
                overrides[f.name] = int(raw)
            else:
                overrides[f.name] = raw
        return cls(**overrides)


def configure_logging(level: str | int | None = None, config: EconomyConfig | None = None) -> None:
    """Attach a console handler for the package loggers.

    An explicit ``level`` wins; otherwise ``config.log_level`` is used, and
    ``INFO`` when neither is given.
    """
    if level is None:
        level = config.log_level if config is not None else "INFO"
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
