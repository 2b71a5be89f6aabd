"""Domain models (Pydantic v2).

`Order` is the only entity. Field aliases carry the external JSON key names
(`orderDate`), while Python code uses snake_case names.

Note:
- These models describe *what* an order is, not how it is stored; the codecs
  in `adapters.codecs` decide the on-disk layout.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic.config import ConfigDict


def parse_order_date(text: str) -> date:
    """Parse ``yyyy-MM-dd`` or an ISO date-time, dropping the time part."""

    value = text.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_amount(value: Decimal) -> str:
    """Plain positional notation (never ``1E+2``), scale preserved."""

    return format(value, "f")


class Order(BaseModel):
    """A single customer order."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(
        ...,
        description="Order identifier. Meant to be unique, not enforced.",
    )
    client: str = Field(
        ...,
        description="Client name.",
    )
    order_date: date = Field(
        ...,
        alias="orderDate",
        description="Calendar date of the order (no time zone).",
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        description="Order amount in currency units.",
    )
    status: str = Field(
        ...,
        description="Free-text status label.",
    )

    @field_validator("order_date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_order_date(value)
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _strip_amount(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    def search_texts(self) -> tuple[str, ...]:
        """Lower-cased text rendering of every field, used by search."""

        return (
            str(self.id),
            self.client.lower(),
            format_date(self.order_date),
            format_amount(self.amount),
            self.status.lower(),
        )

    def display(self) -> str:
        return (
            f"ID: {self.id}, Client: {self.client}, Date: {format_date(self.order_date)}, "
            f"Amount: {self.amount:,.2f}, Status: {self.status}"
        )


class OrderPatch(BaseModel):
    """Field overrides applied by an edit.

    A field left as `None` keeps its current value. Blank strings (what a user
    types to skip a prompt) are normalized to `None`.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    client: str | None = None
    order_date: date | None = Field(default=None, alias="orderDate")
    amount: Decimal | None = Field(default=None, allow_inf_nan=False)
    status: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_means_keep(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str):
            if not value.strip():
                return None
            if info.field_name == "order_date":
                return parse_order_date(value)
            if info.field_name == "amount":
                return value.strip()
        return value

    def changes(self) -> dict[str, Any]:
        """Fields to overwrite, keyed by `Order` attribute name."""

        return self.model_dump(exclude_none=True)

    @property
    def is_empty(self) -> bool:
        return not self.changes()

    def apply_to(self, order: Order) -> Order:
        """Overwrite the patched fields of `order` in place and return it."""

        for name, value in self.changes().items():
            setattr(order, name, value)
        return order
