import pytest

from cardvault.imaging.exceptions import RasterizationError
from cardvault.imaging.pdf_rasterizer import PdfRasterizer


class TestPdfRasterizer:
    def test_renders_first_page_as_png(self, sample_pdf_bytes: bytes) -> None:
        png = PdfRasterizer(dpi=72).first_page_png(sample_pdf_bytes)
        assert png.startswith(b"\x89PNG\r\n\x1a\n")

    def test_invalid_pdf_raises(self) -> None:
        with pytest.raises(RasterizationError, match="rendering failed"):
            PdfRasterizer().first_page_png(b"not a pdf")
