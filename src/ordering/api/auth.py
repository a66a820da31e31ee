"""Request identity.

Authentication happens upstream; by the time a request reaches this
service the gateway has put the caller's customer id in ``X-User-Id``.
"""

from fastapi import Header, HTTPException
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer


async def current_customer(x_user_id: str | None = Header(default=None)) -> Customer:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    customer = current_domain.repository_for(Customer).find_active_one(id=x_user_id)
    if customer is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return customer
