"""
Build operations

Every operation returns a new Build and leaves its input alone, so the
caller can write the result to the session cache and the server as one
complete value.
"""

from decimal import Decimal
from typing import Dict, List

from pickapart.build.categories import category_label, is_multi_select
from pickapart.build.models import Build, BuildItem


def _as_list(value) -> List[BuildItem]:
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    return [value]


def upsert(build: Build, category_key: str, item: BuildItem, quantity: int = 1) -> Build:
    """
    Add a catalog item to a category

    Multi-select categories merge by catalog id: adding an id that's
    already there bumps its quantity. Single-select categories are
    simply replaced.
    """
    if quantity < 1:
        raise ValueError(f"quantity must be at least 1, got {quantity}")

    result = dict(build)
    tagged = item.model_copy(update={
        "type": category_key,
        "display_name": category_label(category_key),
        "quantity": quantity,
    })

    if not is_multi_select(category_key):
        result[category_key] = tagged
        return result

    items = _as_list(build.get(category_key))
    for i, existing in enumerate(items):
        if existing.id == item.id:
            items[i] = existing.model_copy(
                update={"quantity": existing.quantity + quantity}
            )
            break
    else:
        items.append(tagged)

    result[category_key] = items
    return result


def remove_item(build: Build, category_key: str, item_id: str) -> Build:
    """Remove one item by catalog id; the rest of the category stays"""
    value = build.get(category_key)
    if value is None:
        return dict(build)

    remaining = [item for item in _as_list(value) if item.id != item_id]
    result = dict(build)

    if not remaining:
        del result[category_key]
    elif isinstance(value, list):
        result[category_key] = remaining
    # a lone item that didn't match stays as it was

    return result


def remove_category(build: Build, category_key: str) -> Build:
    result = dict(build)
    result.pop(category_key, None)
    return result


def clear(build: Build) -> Build:
    return {}


def count_selected(build: Build) -> int:
    """Number of categories with something selected"""
    return sum(1 for value in build.values() if _as_list(value))


def line_totals(build: Build) -> Dict[str, Decimal]:
    totals = {}
    for key, value in build.items():
        items = _as_list(value)
        if items:
            totals[key] = sum((item.line_total for item in items), Decimal(0))
    return totals


def compute_total(build: Build) -> Decimal:
    """Total price in USD, full precision"""
    return sum(line_totals(build).values(), Decimal(0))
