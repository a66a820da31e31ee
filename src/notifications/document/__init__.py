"""Document renderer registry."""

from notifications.document.port import DocumentRendererPort, RenderedDocument

_renderer: DocumentRendererPort | None = None


def get_renderer() -> DocumentRendererPort:
    """Return the configured order document renderer (singleton)."""
    global _renderer
    if _renderer is None:
        from notifications.document.pdf_renderer import PdfOrderDocumentRenderer

        _renderer = PdfOrderDocumentRenderer()
    return _renderer


def reset_renderer():
    global _renderer
    _renderer = None


__all__ = ["DocumentRendererPort", "RenderedDocument", "get_renderer", "reset_renderer"]
