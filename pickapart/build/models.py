"""
Build data model

A Build maps a category key to one BuildItem (single-select categories)
or a list of BuildItems (multi-select categories). The stored document
shape is the same mapping with camelCase item fields.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
import uuid

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pickapart.build.pricing import parse_price


class BuildItem(BaseModel):
    """A catalog part placed in a build"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str  # catalog id
    name: str = ""
    price: Union[str, float, None] = "$0"  # USD
    image: str = ""
    type: Optional[str] = None  # category key
    display_name: Optional[str] = Field(None, alias="displayName")
    quantity: int = 1

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def _positive_quantity(cls, v):
        try:
            quantity = int(v)
        except (TypeError, ValueError):
            return 1
        return quantity if quantity >= 1 else 1

    @property
    def unit_price(self) -> Decimal:
        return parse_price(self.price)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


Build = Dict[str, Union[BuildItem, List[BuildItem]]]


def build_from_document(doc: Optional[Dict[str, Any]]) -> Build:
    """
    Parse a stored/submitted build document

    Unselected categories (None, empty list) are dropped. Entries that
    aren't valid items are skipped rather than failing the whole build.
    """
    build: Build = {}
    if not doc:
        return build

    for key, value in doc.items():
        if value is None:
            continue

        if isinstance(value, list):
            items = []
            for entry in value:
                item = _parse_item(key, entry)
                if item is not None:
                    items.append(item)
            if items:
                build[key] = items
        else:
            item = _parse_item(key, value)
            if item is not None:
                build[key] = item

    return build


def _parse_item(key: str, entry: Any) -> Optional[BuildItem]:
    if isinstance(entry, BuildItem):
        return entry
    try:
        return BuildItem.model_validate(entry)
    except ValidationError as e:
        print(f"[Build] Skipping malformed '{key}' entry: {e.errors()[0].get('msg')}")
        return None


def build_to_document(build: Build) -> Dict[str, Any]:
    doc: Dict[str, Any] = {}
    for key, value in build.items():
        if isinstance(value, list):
            if value:
                doc[key] = [item.to_document() for item in value]
        elif value is not None:
            doc[key] = value.to_document()
    return doc


class SavedBuild(BaseModel):
    """Named snapshot of a build. Never changed after it is created."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str = "My Build"
    parts: Dict[str, Any] = Field(default_factory=dict)
    total_price: float = Field(0, ge=0, alias="totalPrice")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
