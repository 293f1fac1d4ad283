"""
Category Registry
skin_wellness/scoring/category_registry.py

The 10 appearance categories of the radial chart, in their fixed clockwise order.

Order is static configuration. It is never re-sorted by score, and the set of
categories does not change at runtime.

  order | id              | name                      | colour
  ──────┼─────────────────┼───────────────────────────┼─────────
    1   | radiance        | Skin Radiance             | #D4A84B
    2   | smoothness      | Skin Aging                | #D668B0
    3   | redness         | Visible Redness           | #C13050
    4   | hydration       | Hydration Appearance      | #4A9BE8
    5   | shine           | Shine Appearance          | #E07030
    6   | texture         | Skin Texture              | #A89880
    7   | blemishes       | Visible Blemishes         | #2DA850
    8   | tone            | Uneven Tone & Dark Spots  | #8B5A2B
    9   | eye-contour     | Eye Contour               | #9B7BB8
   10   | neck-decollete  | Neck & Decollete          | #4AA8A0
"""

from typing import Dict, Iterator, Optional, Sequence, Tuple

from skin_wellness.core.exceptions import RegistryContractError, UnknownCategoryError
from skin_wellness.models.category import Category


SKIN_WELLNESS_CATEGORIES: Tuple[Category, ...] = (
    Category(id="radiance", name="Skin Radiance", color="#D4A84B", order=1),
    Category(id="smoothness", name="Skin Aging", color="#D668B0", order=2),
    Category(id="redness", name="Visible Redness", color="#C13050", order=3),
    Category(id="hydration", name="Hydration Appearance", color="#4A9BE8", order=4),
    Category(id="shine", name="Shine Appearance", color="#E07030", order=5),
    Category(id="texture", name="Skin Texture", color="#A89880", order=6),
    Category(id="blemishes", name="Visible Blemishes", color="#2DA850", order=7),
    Category(id="tone", name="Uneven Tone & Dark Spots", color="#8B5A2B", order=8),
    Category(id="eye-contour", name="Eye Contour", color="#9B7BB8", order=9),
    Category(id="neck-decollete", name="Neck & Decollete", color="#4AA8A0", order=10),
)


class CategoryRegistry:
    """
    Ordered, immutable list of categories.

    Usage:
        registry = CategoryRegistry(SKIN_WELLNESS_CATEGORIES)
        registry.get("redness").name       # 'Visible Redness'
        registry.index_of("redness")       # 2
        [c.id for c in registry]           # always in `order`
    """

    def __init__(self, categories: Sequence[Category]):
        categories = tuple(categories)
        if not categories:
            raise RegistryContractError("Category registry must not be empty")

        orders = [c.order for c in categories]
        if orders != list(range(1, len(categories) + 1)):
            raise RegistryContractError(
                f"Category orders must be 1..{len(categories)} in sequence, got {orders}"
            )

        ids = [c.id for c in categories]
        if len(set(ids)) != len(ids):
            raise RegistryContractError(f"Duplicate category ids in {ids}")

        self._categories = categories
        self._by_id: Dict[str, Category] = {c.id: c for c in categories}
        self._index: Dict[str, int] = {c.id: i for i, c in enumerate(categories)}

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def get(self, category_id: str) -> Category:
        """Look up a category; unknown ids are a programming error."""
        try:
            return self._by_id[category_id]
        except KeyError:
            raise UnknownCategoryError(category_id) from None

    def index_of(self, category_id: str) -> int:
        """Zero-based clockwise position of a category."""
        if category_id not in self._index:
            raise UnknownCategoryError(category_id)
        return self._index[category_id]

    def by_order(self, order: int) -> Optional[Category]:
        """Category at 1-based position, or None."""
        if 1 <= order <= len(self._categories):
            return self._categories[order - 1]
        return None


CATEGORY_REGISTRY = CategoryRegistry(SKIN_WELLNESS_CATEGORIES)
