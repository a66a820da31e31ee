"""Adding products to a customer's cart."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from ordering.cart.cart import Cart
from ordering.catalogue.product import Product
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)


@ordering.command_handler(part_of=Cart)
class AddToCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).find_active_one(id=str(command.product_id))
        if product is None:
            raise ObjectNotFoundError(f"Product {command.product_id} not found")
        if not product.in_stock:
            raise ValidationError({"product_id": [f"Product {product.name} is out of stock"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            cart = Cart.create(customer_id=command.customer_id)

        # Carts are priced at the selling price, not the list price
        cart.add_item(
            product_id=str(product.id),
            unit_price=product.discounted_price,
            quantity=command.quantity or 1,
        )
        repo.add(cart)

        logger.info(
            "Product added to cart",
            cart_id=str(cart.id),
            customer_id=str(command.customer_id),
            product_id=str(product.id),
            quantity=command.quantity or 1,
        )
        return str(cart.id)
