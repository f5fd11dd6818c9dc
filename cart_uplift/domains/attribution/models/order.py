"""
Order-created webhook payload models
"""

from decimal import Decimal
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from cart_uplift.core.exceptions import DataValidationError
from cart_uplift.shared.helpers import to_decimal


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


class LineItemProperty(BaseModel):
    """Custom name/value property attached to a line item by the cart"""

    name: str
    value: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v):
        return _optional_str(v)


class OrderLineItem(BaseModel):
    """A purchased line item"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    title: Optional[str] = None
    quantity: int = 1
    price: Decimal = Decimal("0")
    properties: List[LineItemProperty] = Field(default_factory=list)

    @field_validator("id", "product_id", "variant_id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _optional_str(v)

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v):
        # Missing or zero quantity means a single unit
        return v or 1

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v):
        return to_decimal(v)

    @field_validator("properties", mode="before")
    @classmethod
    def coerce_properties(cls, v):
        if v is None:
            return []
        if isinstance(v, dict):
            return [{"name": key, "value": value} for key, value in v.items()]
        return v

    def get_property(self, name: str) -> Optional[str]:
        for prop in self.properties:
            if prop.name == name:
                return prop.value
        return None

    def has_property(self, name: str) -> bool:
        return any(prop.name == name for prop in self.properties)


class OrderCustomer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _optional_str(v)


class OrderPayload(BaseModel):
    """The subset of an order-created webhook the attribution pass reads"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    order_number: Optional[str] = Field(
        None, validation_alias=AliasChoices("order_number", "number", "name")
    )
    total_price: Decimal = Decimal("0")
    customer: Optional[OrderCustomer] = None
    line_items: List[OrderLineItem] = Field(default_factory=list)

    @field_validator("id", "order_number", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return _optional_str(v)

    @field_validator("total_price", mode="before")
    @classmethod
    def coerce_total(cls, v):
        return to_decimal(v)

    @property
    def customer_id(self) -> Optional[str]:
        return self.customer.id if self.customer else None

    @property
    def product_ids(self) -> List[str]:
        """Distinct purchased product ids in line-item order"""
        return list(
            dict.fromkeys(item.product_id for item in self.line_items if item.product_id)
        )

    def variants_of(self, product_id: str) -> List[str]:
        return [
            item.variant_id
            for item in self.line_items
            if item.product_id == product_id and item.variant_id
        ]

    @classmethod
    def from_webhook(cls, raw: Any) -> "OrderPayload":
        """Validate a decoded webhook body"""
        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            raise DataValidationError(
                "Invalid order payload",
                validation_errors=e.errors(include_url=False, include_context=False),
                cause=e,
            ) from e
