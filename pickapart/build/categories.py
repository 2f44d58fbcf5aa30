"""
Part categories

One static table of category slots. Everything that needs to know whether
a category holds one part or several looks it up here.
"""

from typing import Dict, NamedTuple, List


class Category(NamedTuple):
    key: str
    label: str
    multi_select: bool


# Order is the order of the build summary page
CATEGORIES: Dict[str, Category] = {
    c.key: c for c in [
        Category("cpu", "CPU", False),
        Category("cpu-cooler", "CPU Cooler", False),
        Category("motherboard", "Motherboard", False),
        Category("memory", "Memory", True),
        Category("storage", "Storage", True),
        Category("video-card", "Video Card", True),
        Category("case", "Case", False),
        Category("power-supply", "Power Supply", False),
        Category("operating-system", "Operating System", False),
        Category("peripherals", "Peripherals", True),
        Category("expansion-card", "Expansion Cards", False),
        Category("accessories", "Accessories / Other", False),
    ]
}

MULTI_SELECT_CATEGORIES = frozenset(k for k, c in CATEGORIES.items() if c.multi_select)


def is_multi_select(category_key: str) -> bool:
    """Unknown categories are single-select"""
    return category_key in MULTI_SELECT_CATEGORIES


def category_label(category_key: str) -> str:
    """Human-readable label, e.g. 'power-supply' -> 'Power Supply'"""
    category = CATEGORIES.get(category_key)
    if category:
        return category.label
    return " ".join(word.capitalize() for word in category_key.split("-"))


def category_keys() -> List[str]:
    return list(CATEGORIES)
