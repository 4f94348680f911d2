"""
Ingredient catalog lookup

Two interchangeable backends: the full schema keeps one table per category,
the SQLite fallback keeps every option in a single table with a category column.
"""
import abc
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sandwich_api.models.catalog import CATEGORY_TABLES, IngredientCategory, IngredientOption, Option

logger = logging.getLogger(__name__)


class CatalogStore(abc.ABC):
    """Read-only access to ingredient options by category"""

    @abc.abstractmethod
    def resolve(self, category: IngredientCategory, option_id: int) -> Optional[str]:
        """Return the option name, or None if the id is unknown in this category"""

    @abc.abstractmethod
    def list_all(self, category: IngredientCategory) -> List[IngredientOption]:
        ...

    def find_by_name(self, category: IngredientCategory, name: str) -> List[int]:
        """Ids whose name matches exactly, ignoring case, lowest id first"""
        # folded here, SQLite lower() only handles ASCII
        wanted = name.strip().casefold()
        return sorted(
            o.id for o in self.list_all(category)
            if o.name and o.name.strip().casefold() == wanted
        )


class SqlCatalogStore(CatalogStore):
    """Shared error handling for the SQLAlchemy backed stores"""

    def __init__(self, db: Session):
        self.db = db

    def resolve(self, category: IngredientCategory, option_id: int) -> Optional[str]:
        try:
            row = self._get(category, option_id)
        except SQLAlchemyError as e:
            logger.warning(f"Catalog lookup for {category.value} {option_id} failed: {e}")
            self.db.rollback()
            return None
        if row is None:
            return None
        return row.name or ""

    def list_all(self, category: IngredientCategory) -> List[IngredientOption]:
        try:
            rows = self._rows(category)
        except SQLAlchemyError as e:
            logger.warning(f"Catalog listing for {category.value} failed: {e}")
            self.db.rollback()
            return []
        return [IngredientOption(id=r.id, name=r.name or "", category=category) for r in rows]

    @abc.abstractmethod
    def _get(self, category, option_id):
        ...

    @abc.abstractmethod
    def _rows(self, category):
        """Every row of the category, ordered by id"""


class TableCatalogStore(SqlCatalogStore):
    """Catalog spread across tb_bread, tb_cheese, ... tables"""

    def _get(self, category, option_id):
        return self.db.get(CATEGORY_TABLES[category], option_id)

    def _rows(self, category):
        table = CATEGORY_TABLES[category]
        return self.db.query(table).order_by(table.id).all()


class OptionCatalogStore(SqlCatalogStore):
    """Catalog held in the generic options table"""

    def _get(self, category, option_id):
        return (
            self.db.query(Option)
            .filter(Option.id == option_id, Option.category == category.value)
            .first()
        )

    def _rows(self, category):
        return (
            self.db.query(Option)
            .filter(Option.category == category.value)
            .order_by(Option.id)
            .all()
        )


def catalog_store_for(backend: str, db: Session) -> CatalogStore:
    if backend == "tables":
        return TableCatalogStore(db)
    if backend == "options":
        return OptionCatalogStore(db)
    raise ValueError(f"Unknown catalog backend: {backend}")
