"""
Sandwich order data models and database schemas
"""
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Boolean, Column, Integer, Numeric, String
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from sandwich_api.core.database import Base

# Database Models

class Sandwich(Base):
    """Sandwich order database model"""
    __tablename__ = "sandwiches"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000))  # encoded composition or free text
    price = Column(Numeric(10, 2))
    toasted = Column(Boolean, nullable=False, default=False)
    owner_user_id = Column(Integer, index=True)
    is_private = Column(Boolean, nullable=False, default=False)


# Pydantic Models for API

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CompositionSelection(CamelModel):
    """Selected ingredient ids; list order is display order"""
    bread_id: Optional[int] = None
    toasted: Optional[bool] = None
    cheese_ids: List[int] = Field(default_factory=list)
    dressing_ids: List[int] = Field(default_factory=list)
    meat_ids: List[int] = Field(default_factory=list)
    topping_ids: List[int] = Field(default_factory=list)

    @field_validator("cheese_ids", "dressing_ids", "meat_ids", "topping_ids", mode="before")
    @classmethod
    def none_is_empty(cls, value):
        return [] if value is None else value


class BuilderRequest(CompositionSelection):
    name: Optional[str] = None
    price: Optional[Decimal] = None
    note: Optional[str] = None

    def selection(self) -> CompositionSelection:
        return CompositionSelection.model_validate(
            self.model_dump(include=set(CompositionSelection.model_fields))
        )


COMPOSITION_FIELDS = ("bread_id", "toasted", "cheese_ids", "dressing_ids", "meat_ids", "topping_ids")


class SandwichUpdate(CamelModel):
    """Partial update; only fields present in the request are applied"""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    toasted: Optional[bool] = None
    bread_id: Optional[int] = None
    cheese_ids: Optional[List[int]] = None
    dressing_ids: Optional[List[int]] = None
    meat_ids: Optional[List[int]] = None
    topping_ids: Optional[List[int]] = None

    def touches_composition(self) -> bool:
        return any(field in self.model_fields_set for field in COMPOSITION_FIELDS)

    def selection(self) -> CompositionSelection:
        """Composition described by this patch; omitted categories are empty"""
        return CompositionSelection(
            bread_id=self.bread_id,
            toasted=self.toasted,
            cheese_ids=self.cheese_ids,
            dressing_ids=self.dressing_ids,
            meat_ids=self.meat_ids,
            topping_ids=self.topping_ids,
        )


class SandwichOrder(CamelModel):
    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    toasted: bool = False
    owner_user_id: Optional[int] = None
    is_private: bool = False

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Optional[Decimal]) -> Optional[float]:
        return None if price is None else float(price)


class SandwichDetail(SandwichOrder):
    composition: CompositionSelection


class BackfillResult(BaseModel):
    updated: int
