from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from cardvault.cards.models import CardRecord
from cardvault.cards.text import card_to_text
from cardvault.description.base_description import build_base_description
from cardvault.description.describer import Describer
from cardvault.embedding.base import BaseImageEmbedder, BaseTextEmbedder, ensure_dimensions
from cardvault.extraction.base import BaseCardExtractor
from cardvault.extraction.exceptions import ExtractionIncompleteError
from cardvault.extraction.validator import build_card_attributes
from cardvault.imaging.pdf_rasterizer import PdfRasterizer
from cardvault.logging.logger import Log
from cardvault.processor.exceptions import IngestError
from cardvault.processor.ingest import (
    PDF_CONTENT_TYPE,
    check_size,
    decode_payload,
    normalize_content_type,
)
from cardvault.processor.models import (
    CertificationResult,
    FailureKind,
    StepName,
    TerminalOutcome,
)
from cardvault.processor.pipeline import PipelineStep, ProcessingState
from cardvault.retrieval.engine import HybridRetrievalEngine
from cardvault.storage.local_store import LocalFileStore

DEFAULT_REJECTION_REASON = "Image does not contain a valid PSA-graded card."


class IngestStep(PipelineStep):
    name = StepName.INGEST
    failure_kind = FailureKind.INGEST_FAILED

    def __init__(
        self,
        allowed_content_types: list[str],
        max_bytes: int,
        rasterizer: PdfRasterizer,
    ) -> None:
        self._allowed = {t.lower() for t in allowed_content_types}
        self._max_bytes = max_bytes
        self._rasterizer = rasterizer

    def run(self, state: ProcessingState) -> ProcessingState:
        if state.image_data is None or len(state.image_data) == 0:
            raise IngestError("No image data provided")
        content_type = normalize_content_type(state.content_type)
        if content_type not in self._allowed:
            raise IngestError(
                f"Invalid image type '{content_type}'. Supported types: {sorted(self._allowed)}"
            )
        raw = decode_payload(state.image_data)
        check_size(raw, self._max_bytes)

        state.raw_bytes = raw
        if content_type == PDF_CONTENT_TYPE:
            try:
                state.image_bytes = self._rasterizer.first_page_png(raw)
            except Exception as exc:
                raise IngestError(f"Cannot render PDF: {exc}") from exc
            state.image_content_type = "image/png"
        else:
            state.image_bytes = raw
            state.image_content_type = content_type
        Log.info(f"Ingested {len(raw)} bytes ({content_type})")
        return state


class ExtractStep(PipelineStep):
    name = StepName.EXTRACT
    failure_kind = FailureKind.EXTRACTION_FAILED

    def __init__(self, extractor: BaseCardExtractor) -> None:
        self._extractor = extractor

    def run(self, state: ProcessingState) -> ProcessingState:
        result = self._extractor.extract(
            state.image_bytes,
            state.image_content_type,
            hint=state.hint,
        )
        state.extraction = result
        if not result.valid:
            reason = result.rejection_reason or DEFAULT_REJECTION_REASON
            Log.info(f"Card rejected: {reason}")
            state.fail(FailureKind.EXTRACTION_REJECTED, reason)
            return state
        try:
            state.attributes = build_card_attributes(result.fields)
        except ExtractionIncompleteError as exc:
            Log.info(f"Valid card but missing fields: {exc.missing}")
            state.fail(FailureKind.EXTRACTION_INCOMPLETE, str(exc))
            return state
        Log.info(
            f"Valid card detected: {state.attributes.subject} - {state.attributes.identifier}"
        )
        return state


class VerifyStep(PipelineStep):
    """Builds the certification lookup link; nothing is fetched."""

    name = StepName.VERIFY

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    def run(self, state: ProcessingState) -> ProcessingState:
        try:
            identifier = state.require_attributes().identifier
            url = f"{self._base_url}/{identifier}"
        except Exception as exc:
            state.certification = CertificationResult(certified=False, error=str(exc))
            state.warn(f"Certification reference failed: {exc}")
            return state
        state.certification = CertificationResult(certified=True, verification_url=url)
        Log.info(f"Certification URL: {url}")
        return state


class EnrichStep(PipelineStep):
    name = StepName.ENRICH

    def __init__(self, describer: Describer) -> None:
        self._describer = describer

    def run(self, state: ProcessingState) -> ProcessingState:
        card = state.require_attributes()
        url = state.certification.verification_url if state.certification else None
        try:
            outcome = self._describer.describe(card, url, hint=state.hint, enrich=state.enrich)
        except Exception as exc:
            state.description = build_base_description(card, url)
            state.warn(f"Description failed: {exc}")
            return state
        state.description = outcome.description
        state.lookup = outcome.lookup
        state.errors.extend(outcome.warnings)
        Log.info(f"Description created for {card.subject}")
        return state


class EmbedStep(PipelineStep):
    name = StepName.EMBED
    failure_kind = FailureKind.EMBEDDING_FAILED

    def __init__(self, text_embedder: BaseTextEmbedder, image_embedder: BaseImageEmbedder) -> None:
        self._text_embedder = text_embedder
        self._image_embedder = image_embedder

    def run(self, state: ProcessingState) -> ProcessingState:
        card_text = card_to_text(state.require_attributes())
        with ThreadPoolExecutor(max_workers=2) as pool:
            text_future = pool.submit(self._text_embedder.embed_text, card_text)
            image_future = pool.submit(self._image_embedder.embed_image, state.image_bytes)
            # Wait for both before raising so no call is left running.
            text_error = text_future.exception()
            image_error = image_future.exception()
        if text_error is not None:
            raise text_error
        if image_error is not None:
            raise image_error

        state.text_embedding = ensure_dimensions(
            text_future.result(), self._text_embedder.dimensions, "Text"
        )
        state.image_embedding = ensure_dimensions(
            image_future.result(), self._image_embedder.dimensions, "Image"
        )
        Log.info(
            f"Embeddings generated: text {len(state.text_embedding)}d, "
            f"image {len(state.image_embedding)}d"
        )
        return state


class PersistStep(PipelineStep):
    name = StepName.PERSIST
    failure_kind = FailureKind.PERSISTENCE_FAILED

    def __init__(self, file_store: LocalFileStore, engine: HybridRetrievalEngine) -> None:
        self._file_store = file_store
        self._engine = engine

    def run(self, state: ProcessingState) -> ProcessingState:
        card = state.require_attributes()
        if not state.text_embedding or not state.image_embedding:
            raise ValueError("Embeddings not generated")

        image_path = self._file_store.save(
            "cards", card.identifier, state.image_bytes, state.image_content_type
        )
        state.image_path = image_path
        Log.info(f"Image saved: {image_path}")

        record = CardRecord(
            attributes=card,
            image_path=image_path,
            created_at=datetime.now(timezone.utc).isoformat(),
            text_embedding=tuple(state.text_embedding),
            image_embedding=tuple(state.image_embedding),
        )
        self._engine.store(record)

        state.succeed(
            TerminalOutcome(
                success=True,
                card=card,
                description=state.description,
                image_path=image_path,
                verification_url=(
                    state.certification.verification_url if state.certification else None
                ),
                narration_path=state.narration_path,
                synthetic_sample_path=state.synthetic_sample_path,
            )
        )
        Log.info(f"Card {card.identifier} processed successfully")
        return state
