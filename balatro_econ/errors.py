"""Exception types for data-integrity failures.

Player-facing problems (not enough money, wrong selection, full slots) are
reported as result objects and never raised. These exceptions mark broken
references that indicate a bug in the caller or in catalog data.
"""

from __future__ import annotations


class GameError(Exception):
    """Base error carrying a stable machine-readable code."""

    code = "GAME_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.args[0]}"


class UnknownConsumableError(GameError):
    code = "CONSUMABLE_NOT_FOUND"

    def __init__(self, consumable_id: str):
        super().__init__(f"消耗牌不存在: {consumable_id}")
        self.consumable_id = consumable_id


class UnknownVoucherError(GameError):
    code = "VOUCHER_NOT_FOUND"

    def __init__(self, voucher_id: str):
        super().__init__(f"优惠券不存在: {voucher_id}")
        self.voucher_id = voucher_id


class InvalidStateError(GameError):
    code = "INVALID_STATE"
