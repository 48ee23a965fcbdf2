"""Static catalog and seed table data."""

from __future__ import annotations

from dataclasses import dataclass

from floor.config import SEED_TABLE_COUNT
from floor.constant import CATEGORY_ROWS, PRODUCT_ROWS, TABLE_ID_PREFIX, TABLE_NAME_PREFIX
from floor.models import Category, Product, Table, TableStatus


@dataclass(frozen=True)
class Catalog:
    """Read-only categories and products."""

    categories: tuple[Category, ...]
    products: tuple[Product, ...]

    def product(self, product_id: str) -> Product | None:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    def category_by_code(self, code: str) -> Category | None:
        for category in self.categories:
            if category.code == code:
                return category
        return None


SEED_CATALOG = Catalog(
    categories=tuple(Category(id=row["id"], code=row["code"], name=row["name"]) for row in CATEGORY_ROWS),
    products=tuple(
        Product(
            id=str(row["id"]),
            name=str(row["name"]),
            category_id=str(row["category_id"]),
            price=int(row["price"]),
        )
        for row in PRODUCT_ROWS
    ),
)


def table_id_for_number(number: int) -> str:
    """Return the table id for a 1-based table number."""
    return f"{TABLE_ID_PREFIX}{number}"


def seed_tables(count: int = SEED_TABLE_COUNT) -> tuple[Table, ...]:
    """Create the fixed set of free tables T1..Tn."""
    return tuple(
        Table(id=table_id_for_number(i), name=f"{TABLE_NAME_PREFIX} {i}", status=TableStatus.FREE)
        for i in range(1, count + 1)
    )
