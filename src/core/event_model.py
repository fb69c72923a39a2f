"""Event row model and tagged price value.

The ``events.price`` column is a plain string with three meanings:
``""`` unknown, ``"0"`` free, ``"250"`` a price in whole kroner. Inside the
pipeline it is a ``Price``. The string form only exists at the store edge
(``Price.from_storage`` / ``Price.to_storage``).
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

_AMOUNT_PATTERN = re.compile(r"(\d+)(?:[.,](\d{1,2}))?")


def parse_amount(integer_part: str, fraction: str | None = None) -> int | None:
    """Turn matched price digits into whole kroner.

    Thousands separators (spaces, dots) in ``integer_part`` are dropped.
    A zero fraction ("300,00") is discarded; any other fraction rounds half
    up ("99,50" -> 100).

    Returns:
        Amount in kroner, or None when the digits don't form a number
    """
    digits = re.sub(r"[\s.]", "", integer_part)
    if not digits.isdigit():
        return None
    amount = Decimal(f"{digits}.{fraction or '0'}")
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_amount_value(value: Any) -> int | None:
    """Parse a standalone numeric value ("250", "250.00", 250.0) into kroner."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if value < 0:
            return None
        value = f"{value:.2f}"

    cleaned = re.sub(r"\s", "", str(value))
    match = _AMOUNT_PATTERN.fullmatch(cleaned)
    if not match:
        return None
    return parse_amount(match.group(1), match.group(2))


class PriceKind(str, Enum):
    """The three states of an event price."""

    UNKNOWN = "unknown"
    FREE = "free"
    PRICED = "priced"


@dataclass(frozen=True)
class Price:
    """Tagged event price: Unknown | Free | Priced(amount in whole kroner)."""

    kind: PriceKind
    amount: int | None = None

    def __post_init__(self) -> None:
        if self.kind is PriceKind.PRICED and (self.amount is None or self.amount <= 0):
            raise ValueError(f"Priced requires a positive amount, got {self.amount!r}")
        if self.kind is not PriceKind.PRICED and self.amount is not None:
            raise ValueError(f"{self.kind.value} price cannot carry an amount")

    @classmethod
    def unknown(cls) -> "Price":
        return cls(PriceKind.UNKNOWN)

    @classmethod
    def free(cls) -> "Price":
        return cls(PriceKind.FREE)

    @classmethod
    def priced(cls, amount: int) -> "Price":
        return cls(PriceKind.PRICED, amount)

    @classmethod
    def from_amount(cls, amount: int) -> "Price":
        """Free for 0, Priced otherwise."""
        return cls.free() if amount == 0 else cls.priced(amount)

    @classmethod
    def from_storage(cls, value: str | int | float | None) -> "Price":
        """Read the ``events.price`` column.

        Empty/None is Unknown. Numeric values map to Free/Priced. Any other
        text (hand-entered notes) is treated as Unknown.
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.unknown()
        amount = parse_amount_value(value.strip() if isinstance(value, str) else value)
        if amount is None:
            return cls.unknown()
        return cls.from_amount(amount)

    def to_storage(self) -> str:
        """Render for the ``events.price`` column."""
        if self.kind is PriceKind.FREE:
            return "0"
        if self.kind is PriceKind.PRICED:
            return str(self.amount)
        return ""

    @property
    def is_unknown(self) -> bool:
        return self.kind is PriceKind.UNKNOWN

    @property
    def is_free(self) -> bool:
        return self.kind is PriceKind.FREE

    def __str__(self) -> str:
        if self.kind is PriceKind.FREE:
            return "Gratis"
        if self.kind is PriceKind.PRICED:
            return f"{self.amount} kr"
        return "Ukjent"


class EventRecord(BaseModel):
    """The slice of an ``events`` row the reconciliation pipeline works on."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    id: str
    title: str = Field(default="", alias="title_no")
    venue_name: str = ""
    source_url: str | None = None
    ticket_url: str | None = None
    price: Price = Field(default_factory=Price.unknown)
    source: str = ""
    description: str | None = Field(default=None, alias="description_no")
    date_start: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        return str(v)

    @field_validator("title", "venue_name", "source", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("source_url", "ticket_url", mode="before")
    @classmethod
    def blank_url_to_none(cls, v: Any) -> str | None:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("price", mode="before")
    @classmethod
    def parse_stored_price(cls, v: Any) -> Price:
        if isinstance(v, Price):
            return v
        return Price.from_storage(v)
