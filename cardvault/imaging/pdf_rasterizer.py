import pymupdf

from cardvault.imaging.exceptions import RasterizationError


class PdfRasterizer:
    """Renders PDF pages to PNG using PyMuPDF."""

    def __init__(self, dpi: int = 150) -> None:
        self._dpi = dpi

    def first_page_png(self, pdf_bytes: bytes) -> bytes:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise RasterizationError("PDF has no pages")
                pixmap = doc[0].get_pixmap(dpi=self._dpi)
                return pixmap.tobytes("png")
        except RasterizationError:
            raise
        except Exception as exc:
            raise RasterizationError(f"pymupdf rendering failed: {exc}") from exc
