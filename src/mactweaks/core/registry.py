"""TweakRegistry - the immutable, process-wide tweak catalog.

The registry is built once at startup from declarative Category records
and is read-only afterwards. Construction validates the catalog in one
pass (tweak names unique across all categories, category names unique)
and builds a name index for O(1) lookup.

Example:
    >>> registry = TweakRegistry.build()
    >>> tweak = registry.find("Auto-hide Dock")
    >>> registry.category_of(tweak.name).name
    'Dock'
"""

from __future__ import annotations

import difflib
import logging
from collections.abc import Iterable, Iterator

from mactweaks.core.errors import DuplicateNameError, UnknownTweakError
from mactweaks.core.types import Category, Tweak

logger = logging.getLogger(__name__)


class TweakRegistry:
    """Ordered categories of tweaks with lookup by name.

    Use TweakRegistry.build() rather than the constructor directly; the
    constructor performs the same validation but takes an already
    materialized tuple.
    """

    __slots__ = ("_categories", "_by_name", "_category_by_tweak")

    def __init__(self, categories: tuple[Category, ...]) -> None:
        by_name: dict[str, Tweak] = {}
        category_by_tweak: dict[str, Category] = {}
        seen_categories: set[str] = set()

        for category in categories:
            if category.name in seen_categories:
                raise DuplicateNameError(category.name, kind="category")
            seen_categories.add(category.name)

            for tweak in category.tweaks:
                if tweak.name in by_name:
                    raise DuplicateNameError(tweak.name)
                by_name[tweak.name] = tweak
                category_by_tweak[tweak.name] = category

        self._categories = categories
        self._by_name = by_name
        self._category_by_tweak = category_by_tweak

    @classmethod
    def build(cls, categories: Iterable[Category] | None = None) -> TweakRegistry:
        """Build the registry, defaulting to the built-in catalog.

        Args:
            categories: Category records in display order. None uses
                mactweaks.core.catalog.CATALOG.

        Returns:
            The validated registry.

        Raises:
            DuplicateNameError: If a tweak or category name repeats.
        """
        if categories is None:
            from mactweaks.core.catalog import CATALOG

            categories = CATALOG

        registry = cls(tuple(categories))
        logger.debug(
            "registry_built: categories=%d, tweaks=%d",
            len(registry._categories),
            len(registry._by_name),
        )
        return registry

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def find(self, name: str) -> Tweak:
        """Get a tweak by exact name.

        Raises:
            UnknownTweakError: If no tweak has that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownTweakError(name) from None

    def get(self, name: str) -> Tweak | None:
        """Get a tweak by exact name, or None."""
        return self._by_name.get(name)

    def category_of(self, name: str) -> Category:
        """Get the category that owns a tweak.

        Raises:
            UnknownTweakError: If no tweak has that name.
        """
        try:
            return self._category_by_tweak[name]
        except KeyError:
            raise UnknownTweakError(name) from None

    def suggest(self, name: str, limit: int = 3) -> list[str]:
        """Names that look like a mistyped name, best match first."""
        exact_ci = [n for n in self._by_name if n.lower() == name.strip().lower()]
        if exact_ci:
            return exact_ci[:limit]
        return difflib.get_close_matches(name, list(self._by_name), n=limit, cutoff=0.5)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def categories(self) -> tuple[Category, ...]:
        return self._categories

    def tweaks(self) -> Iterator[Tweak]:
        """Every tweak in registry (display) order."""
        for category in self._categories:
            yield from category.tweaks

    def names(self) -> list[str]:
        return [tweak.name for tweak in self.tweaks()]

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Tweak]:
        return self.tweaks()

    def __repr__(self) -> str:
        return f"TweakRegistry(categories={len(self._categories)}, tweaks={len(self._by_name)})"
