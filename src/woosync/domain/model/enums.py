"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    FAILED = "failed"
    CUSTOM = "custom"

    @classmethod
    def from_raw(cls, value: str) -> OrderStatus:
        try:
            return cls(value)
        except ValueError:
            return cls.CUSTOM


class ShippingLabelStatus(StrEnum):
    PURCHASED = "PURCHASED"
    PURCHASE_ERROR = "PURCHASE_ERROR"
    PURCHASE_IN_PROGRESS = "PURCHASE_IN_PROGRESS"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_raw(cls, value: str) -> ShippingLabelStatus:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class ShippingLabelRefundStatus(StrEnum):
    PENDING = "pending"
    COMPLETE = "complete"
    REJECTED = "rejected"


class ShippingLabelPaperSize(StrEnum):
    A4 = "a4"
    LABEL = "label"
    LEGAL = "legal"
    LETTER = "letter"


class ShippingLabelAddressType(StrEnum):
    ORIGIN = "origin"
    DESTINATION = "destination"


class FeedbackType(StrEnum):
    GENERAL = "general"
    PRODUCTS_VARIATIONS = "productsVariations"


class FeedbackStatus(StrEnum):
    PENDING = "pending"
    GIVEN = "given"
    DISMISSED = "dismissed"


class StatsVersion(StrEnum):
    V3 = "v3"
    V4 = "v4"


class StatsVersionBanner(StrEnum):
    UPGRADE = "upgrade"
    DOWNGRADE = "downgrade"
