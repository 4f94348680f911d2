"""
Sandwich order storage and lifecycle
"""
import abc
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sandwich_api.core.exceptions import ForbiddenError, NotFoundError, StoreUnavailableError
from sandwich_api.models.sandwich import (
    BuilderRequest,
    Sandwich,
    SandwichDetail,
    SandwichOrder,
    SandwichUpdate,
)
from sandwich_api.services.catalog import CatalogStore
from sandwich_api.services.composition import decode_description, encode_composition

logger = logging.getLogger(__name__)


class OrderStore(abc.ABC):
    @abc.abstractmethod
    def insert(self, order: SandwichOrder) -> int:
        ...

    @abc.abstractmethod
    def find_by_id(self, order_id: int) -> Optional[SandwichOrder]:
        ...

    @abc.abstractmethod
    def find_all(self) -> List[SandwichOrder]:
        ...

    @abc.abstractmethod
    def find_by_owner(self, user_id: int) -> List[SandwichOrder]:
        ...

    @abc.abstractmethod
    def update(self, order: SandwichOrder) -> None:
        ...

    @abc.abstractmethod
    def delete(self, order_id: int) -> None:
        ...

    @abc.abstractmethod
    def backfill_prices(self) -> int:
        """Set every missing price to zero, returning how many were changed"""


class SqlAlchemyOrderStore(OrderStore):
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Sandwich store {action} failed: {e}")
            raise StoreUnavailableError(f"Could not {action} sandwich") from e

    def _query(self):
        return self.db.query(Sandwich)

    def insert(self, order: SandwichOrder) -> int:
        row = Sandwich(**order.model_dump(exclude={"id"}))
        self.db.add(row)
        self._commit("insert")
        self.db.refresh(row)
        return row.id

    def find_by_id(self, order_id: int) -> Optional[SandwichOrder]:
        row = self.db.get(Sandwich, order_id)
        return SandwichOrder.model_validate(row) if row else None

    def find_all(self) -> List[SandwichOrder]:
        rows = self._query().order_by(Sandwich.id).all()
        return [SandwichOrder.model_validate(r) for r in rows]

    def find_by_owner(self, user_id: int) -> List[SandwichOrder]:
        rows = self._query().filter(Sandwich.owner_user_id == user_id).order_by(Sandwich.id).all()
        return [SandwichOrder.model_validate(r) for r in rows]

    def update(self, order: SandwichOrder) -> None:
        row = self.db.get(Sandwich, order.id)
        if row is None:
            raise NotFoundError("Sandwich", order.id)
        for field, value in order.model_dump(exclude={"id"}).items():
            setattr(row, field, value)
        self._commit("update")

    def delete(self, order_id: int) -> None:
        row = self.db.get(Sandwich, order_id)
        if row is None:
            raise NotFoundError("Sandwich", order_id)
        self.db.delete(row)
        self._commit("delete")

    def backfill_prices(self) -> int:
        rows = self._query().filter(Sandwich.price.is_(None)).all()
        for row in rows:
            row.price = Decimal("0.00")
        self._commit("backfill")
        return len(rows)


class SandwichService:
    """Create, read, update and delete sandwich orders"""

    def __init__(self, orders: OrderStore, catalog: CatalogStore):
        self.orders = orders
        self.catalog = catalog

    def create(self, request: BuilderRequest, owner_user_id: Optional[int] = None) -> SandwichOrder:
        encoded = encode_composition(request.selection(), self.catalog, name=request.name)
        order = SandwichOrder(
            name=encoded.name,
            description=encoded.description,
            price=request.price,
            toasted=bool(request.toasted),
            owner_user_id=owner_user_id,
            is_private=owner_user_id is not None,
        )
        order.id = self.orders.insert(order)
        if request.note:
            logger.info(f"Sandwich {order.id} created with note: {request.note}")
        logger.info(f"Created sandwich {order.id} {order.name!r} (owner={owner_user_id})")
        return order

    def list(self) -> List[SandwichOrder]:
        return self.orders.find_all()

    def list_mine(self, user_id: int) -> List[SandwichOrder]:
        return self.orders.find_by_owner(user_id)

    def get(self, order_id: int) -> SandwichOrder:
        order = self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Sandwich", order_id)
        return order

    def get_detail(self, order_id: int) -> SandwichDetail:
        order = self.get(order_id)
        composition = decode_description(order.description, self.catalog)
        return SandwichDetail(**order.model_dump(), composition=composition)

    def _check_owner(self, order: SandwichOrder, caller_id: Optional[int], action: str) -> None:
        if order.is_private and order.owner_user_id is not None and order.owner_user_id != caller_id:
            logger.warning(f"User {caller_id} may not {action} private sandwich {order.id}")
            raise ForbiddenError(f"Not allowed to {action} this sandwich")

    def update(self, order_id: int, patch: SandwichUpdate, caller_id: Optional[int] = None) -> SandwichOrder:
        order = self.get(order_id)
        self._check_owner(order, caller_id, "update")

        fields = patch.model_fields_set
        if "name" in fields and patch.name and patch.name.strip():
            order.name = patch.name.strip()
        if "price" in fields:
            order.price = patch.price
        if "toasted" in fields and patch.toasted is not None:
            order.toasted = patch.toasted

        if "description" in fields and patch.description is not None:
            order.description = patch.description
        elif patch.touches_composition():
            # full replacement: categories missing from the patch are dropped
            encoded = encode_composition(patch.selection(), self.catalog)
            order.description = encoded.description

        self.orders.update(order)
        logger.info(f"Updated sandwich {order.id}")
        return order

    def delete(self, order_id: int, caller_id: Optional[int] = None) -> None:
        order = self.get(order_id)
        self._check_owner(order, caller_id, "delete")
        self.orders.delete(order_id)
        logger.info(f"Deleted sandwich {order_id}")

    def backfill_prices(self) -> int:
        updated = self.orders.backfill_prices()
        logger.info(f"Backfilled {updated} sandwich prices")
        return updated
