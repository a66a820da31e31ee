"""Customer — the authenticated identity the ordering domain acts on behalf of.

Customers are registered and maintained by the identity service. The
ordering domain only reads them: the pincode drives delivery estimates and
the contact fields feed notifications.
"""

from protean.fields import Boolean, DateTime, String

from ordering.domain import ordering
from ordering.shared.records import find_active, find_active_one


@ordering.aggregate
class Customer:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    mobile_number = String(required=True, max_length=20)
    address = String(max_length=500)
    pincode = String(required=True, max_length=10)
    push_token = String(max_length=500)
    deleted = Boolean(default=False)
    created_at = DateTime()


@ordering.repository(part_of=Customer)
class CustomerRepository:
    def find_active(self, **filters) -> list[Customer]:
        return find_active(self._dao, **filters)

    def find_active_one(self, **filters) -> Customer | None:
        return find_active_one(self._dao, **filters)
