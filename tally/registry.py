"""Category registry: the persisted, ordered list of category names."""

import logging

from tally.domain import categories as category_ops
from tally.domain.models import CategoryName
from tally.store.kv import KeyValueStore
from tally.store.records import load_categories, save_categories

logger = logging.getLogger(__name__)


class CategoryRegistry:
    """Owns the canonical category list.

    The list is loaded once on construction and every mutation is written
    straight back to the store.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._categories = load_categories(store)
        logger.debug("Loaded %d categories", len(self._categories))

    @property
    def categories(self) -> list[CategoryName]:
        return list(self._categories)

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def _save(self, categories: list[CategoryName]) -> None:
        self._categories = categories
        save_categories(self.store, categories)

    def add_category(self, name: CategoryName) -> bool:
        """Append a category. Adding an existing name does nothing.

        Returns:
            True if the category was added.
        """
        if name in self._categories:
            logger.debug("Category %r already exists, not adding", name)
            return False

        self._save(category_ops.add_category(self._categories, name))
        logger.debug("Added category %r", name)
        return True

    def update_category(self, old_name: CategoryName, new_name: CategoryName) -> str | None:
        """Rename a category in place.

        Renames onto an existing name, to a blank name, or of an unknown
        category are rejected and leave the registry unchanged.

        Returns:
            None on success, otherwise the reason the rename was rejected.
        """
        updated, error = category_ops.rename_category(self._categories, old_name, new_name)
        if error:
            logger.warning("Rename %r -> %r rejected: %s", old_name, new_name, error)
            return error

        if updated != self._categories:
            self._save(updated)
            logger.debug("Renamed category %r to %r", old_name, new_name)
        return None

    def delete_category(self, name: CategoryName) -> bool:
        """Remove a category.

        Returns:
            True if the category existed.
        """
        if name not in self._categories:
            return False

        self._save(category_ops.delete_category(self._categories, name))
        logger.debug("Deleted category %r", name)
        return True
