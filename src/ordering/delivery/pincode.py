"""Pincode — postal code deliverability and delivery lead time in business days."""

from protean.fields import Boolean, Integer, String

from ordering.domain import ordering
from ordering.shared.records import find_active_one


@ordering.aggregate
class Pincode:
    pincode = String(required=True, max_length=10)
    deliverable = Boolean(required=True)
    delivery_days = Integer(required=True, min_value=0)
    deleted = Boolean(default=False)


@ordering.repository(part_of=Pincode)
class PincodeRepository:
    def find_active_one(self, **filters) -> Pincode | None:
        return find_active_one(self._dao, **filters)

    def by_code(self, pincode: str) -> Pincode | None:
        return self.find_active_one(pincode=str(pincode))
