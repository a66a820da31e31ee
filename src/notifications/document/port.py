"""Document renderer port — turns an order into an attachable document."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderedDocument:
    filename: str
    content_type: str
    content: bytes


class DocumentRendererPort(ABC):
    @abstractmethod
    def render(self, order: dict, items: list[dict]) -> RenderedDocument:
        """Render an order confirmation for ``order`` and its ``items``.

        ``order`` carries ``order_id``, ``total_amount`` and
        ``expected_delivery_date``; each item carries ``product_id``,
        ``quantity`` and ``price``.
        """
        ...
