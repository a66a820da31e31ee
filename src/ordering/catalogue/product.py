"""Product — catalogue entry whose ``quantity`` is the authoritative stock count.

Products are administered by the catalogue service. Within the ordering
domain only the inventory ledger changes ``quantity``.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering
from ordering.shared.records import find_active, find_active_one


@ordering.aggregate
class Product:
    name = String(required=True, max_length=255)
    code = String(required=True, max_length=50)
    category_id = Identifier()
    sub_category_id = Identifier()
    quantity = Integer(default=0)
    in_stock = Boolean(default=True)
    original_price = Float(required=True, min_value=0.0)
    discounted_price = Float(required=True, min_value=0.0)
    deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()


@ordering.repository(part_of=Product)
class ProductRepository:
    def find_active(self, **filters) -> list[Product]:
        return find_active(self._dao, **filters)

    def find_active_one(self, **filters) -> Product | None:
        return find_active_one(self._dao, **filters)

    def find_any(self, product_id) -> Product | None:
        """Look up a product by id whether or not it has been soft-deleted."""
        return self._dao.query.filter(id=str(product_id)).all().first
