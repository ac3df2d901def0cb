"""Store layer - provides persistence for the application.

This module re-exports the public store classes and record functions for easy importing.
"""

from tally.store.kv import KeyValueStore, MemoryStore, SqliteStore
from tally.store.records import (
    BUDGET_DATA_KEY,
    RecordError,
    CATEGORIES_KEY,
    EXPENSES_KEY,
    generate_expense_id,
    load_budget_data,
    load_categories,
    load_expenses,
    save_budget_data,
    save_categories,
    save_expenses,
)
from tally.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Stores
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    # Records
    "BUDGET_DATA_KEY",
    "CATEGORIES_KEY",
    "EXPENSES_KEY",
    "RecordError",
    "generate_expense_id",
    "load_budget_data",
    "load_categories",
    "load_expenses",
    "save_budget_data",
    "save_categories",
    "save_expenses",
]
