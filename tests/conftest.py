import io
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from cardvault.cards.models import CardAttributes
from cardvault.config.settings import Settings
from tests.factories import make_card, make_png


@pytest.fixture()
def sample_png_bytes() -> bytes:
    """Small solid-colour PNG standing in for a card photo."""
    return make_png()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page PDF with a drawn label."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "PSA 10 LeBron James 2003-04 Topps 12345678")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def card() -> CardAttributes:
    return make_card()


@pytest.fixture()
def example_settings(tmp_path: Path) -> Settings:
    """Offline settings: example providers, embedded Qdrant, files under tmp_path."""
    return Settings(
        llm_provider="example",
        embedding_provider="example",
        lookup_provider="none",
        qdrant_location=":memory:",
        qdrant_url=None,
        storage_root=str(tmp_path / "public"),
        text_embedding_dimensions=64,
        image_embedding_dimensions=32,
    )
