"""Pure functions for the ordered category list.

Every function takes the current list and returns a new one; the input is
never modified. Order is insertion order and names are case-sensitive.
"""

from tally.domain.models import DEFAULT_CATEGORIES, CategoryName


def add_category(categories: list[CategoryName], name: CategoryName) -> list[CategoryName]:
    """Append a category unless it already exists.

    Args:
        categories: Current ordered categories.
        name: Category to add.

    Returns:
        New list with the category appended, or an unchanged copy if it was already present.
    """
    if name in categories:
        return list(categories)
    return [*categories, name]


def rename_category(
    categories: list[CategoryName],
    old_name: CategoryName,
    new_name: CategoryName,
) -> tuple[list[CategoryName], str | None]:
    """Rename a category in place, keeping its position.

    Args:
        categories: Current ordered categories.
        old_name: Category to rename.
        new_name: Replacement name.

    Returns:
        Tuple of (new_categories, error_message). On error the list is returned unchanged.
    """
    if old_name not in categories:
        return list(categories), f"Category '{old_name}' does not exist"

    if not new_name.strip():
        return list(categories), "Category name cannot be empty"

    if new_name == old_name:
        return list(categories), None

    if new_name in categories:
        return list(categories), f"Category '{new_name}' already exists"

    return [new_name if cat == old_name else cat for cat in categories], None


def delete_category(categories: list[CategoryName], name: CategoryName) -> list[CategoryName]:
    """Remove every occurrence of a category.

    Args:
        categories: Current ordered categories.
        name: Category to remove.

    Returns:
        New list without the category.
    """
    return [cat for cat in categories if cat != name]


def is_default_category(name: CategoryName) -> bool:
    """Check whether a category is one of the built-in defaults."""
    return name in DEFAULT_CATEGORIES


def custom_categories(categories: list[CategoryName]) -> list[CategoryName]:
    """Get the user-added categories, in registry order."""
    return [cat for cat in categories if not is_default_category(cat)]
