"""
Ingredient catalog data models and database schemas
"""
import enum
from typing import List

from sqlalchemy import Column, Integer, String
from pydantic import BaseModel, ConfigDict
from sandwich_api.core.database import Base


class IngredientCategory(str, enum.Enum):
    BREADS = "breads"
    CHEESES = "cheeses"
    DRESSINGS = "dressings"
    MEATS = "meats"
    TOPPINGS = "toppings"


# Database Models
# Full schema: one table per category, as scaffolded from the SQL Server database

class Bread(Base):
    __tablename__ = "tb_bread"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50))


class Cheese(Base):
    __tablename__ = "tb_cheese"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50))


class Dressing(Base):
    __tablename__ = "tb_dressing"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50))


class Meat(Base):
    __tablename__ = "tb_meat"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50))


class Topping(Base):
    __tablename__ = "tb_topping"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50))


CATEGORY_TABLES = {
    IngredientCategory.BREADS: Bread,
    IngredientCategory.CHEESES: Cheese,
    IngredientCategory.DRESSINGS: Dressing,
    IngredientCategory.MEATS: Meat,
    IngredientCategory.TOPPINGS: Topping,
}


class Option(Base):
    """Generic option row used by the SQLite fallback database"""
    __tablename__ = "options"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(20), nullable=False, index=True)  # breads, cheeses, ...
    name = Column(String(100), nullable=False)


# Pydantic Models for API

class IngredientOption(BaseModel):
    id: int
    name: str
    category: IngredientCategory

    model_config = ConfigDict(frozen=True)


class OptionLabel(BaseModel):
    """Option as rendered for the builder UI"""
    id: int
    label: str


def to_labels(options: List[IngredientOption]) -> List[OptionLabel]:
    return [OptionLabel(id=o.id, label=o.name) for o in options]
