"""Order confirmation rendered as a one-page PDF (``order.pdf``)."""

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from notifications.document.port import DocumentRendererPort, RenderedDocument


def confirmation_lines(order: dict, items: list[dict]) -> list[str]:
    """Body lines of the confirmation, one per order field and one per item."""
    lines = [
        f"Order ID: {order.get('order_id', 'N/A')}",
        f"Total Amount: {order.get('total_amount', 0)}",
        f"Expected Delivery Date: {order.get('expected_delivery_date', 'N/A')}",
    ]
    for number, item in enumerate(items, start=1):
        lines.append(
            f"Item {number}: Product ID: {item.get('product_id')}, "
            f"Quantity: {item.get('quantity')}, Price: {item.get('price')}"
        )
    return lines


class PdfOrderDocumentRenderer(DocumentRendererPort):
    filename = "order.pdf"
    content_type = "application/pdf"
    title = "Order Confirmation"

    def render(self, order: dict, items: list[dict]) -> RenderedDocument:
        pdf = FPDF()
        pdf.set_title(self.title)
        pdf.add_page()

        pdf.set_font("helvetica", "B", 16)
        pdf.cell(0, 12, self.title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("helvetica", size=11)
        for line in confirmation_lines(order, items):
            pdf.cell(0, 8, line, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        return RenderedDocument(
            filename=self.filename,
            content_type=self.content_type,
            content=bytes(pdf.output()),
        )
