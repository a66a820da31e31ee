from ordering.api.routes import cart_router, maintenance_router, notification_router, order_router

__all__ = ["cart_router", "maintenance_router", "notification_router", "order_router"]
