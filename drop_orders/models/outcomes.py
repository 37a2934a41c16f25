"""Per-line-item reconciliation outcomes and the webhook result envelope.

Each line item of an order ends in exactly one of three outcomes, discriminated by
``status``. They serialize with the camelCase keys the commerce platform and the
operator tooling read (``dropId``, ``previousQuantity``...).
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class MatchKind(str, Enum):
    """Which candidate reference located the drop."""

    PRODUCT_ID = "product_id"
    VARIANT_REFERENCE = "variant_reference"


class _Outcome(BaseModel):
    model_config = {"populate_by_name": True}


class UpdatedOutcome(_Outcome):
    """Sold quantity was incremented."""

    status: Literal["updated"] = "updated"
    drop_id: str = Field(..., alias="dropId")
    title: str = ""
    matched_by: MatchKind = Field(..., alias="matchedBy")
    previous_quantity: int = Field(..., alias="previousQuantity")
    new_quantity: int = Field(..., alias="newQuantity")
    remaining: int


class NotFoundOutcome(_Outcome):
    """Neither the product id nor the variant reference matched a drop."""

    status: Literal["not_found"] = "not_found"
    product_id: str | None = Field(None, alias="productId")
    variant_id: str | None = Field(None, alias="variantId")
    title: str = ""


class UpdateFailedOutcome(_Outcome):
    """A drop matched but persisting the new sold quantity failed."""

    status: Literal["update_failed"] = "update_failed"
    drop_id: str = Field(..., alias="dropId")
    title: str = ""
    error: str


LineItemOutcome = Annotated[
    Union[UpdatedOutcome, NotFoundOutcome, UpdateFailedOutcome],
    Field(discriminator="status"),
]


class WebhookResult(BaseModel):
    """Response body for a processed order."""

    success: bool = True
    order_id: int | str = Field(..., alias="orderId")
    order_number: int | str | None = Field(None, alias="orderNumber")
    member_found: bool = Field(False, alias="memberFound")
    updates: list[LineItemOutcome] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
