import random
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import openai

from cardvault.cards.models import CardRecord
from cardvault.chat.answerer import CardAnswerer
from cardvault.chat.context import latest_user_query
from cardvault.chat.models import ChatAnswer, ChatMessage
from cardvault.config.settings import Settings
from cardvault.description.describer import Describer
from cardvault.description.writer import DescriptionWriter
from cardvault.embedding.base import BaseImageEmbedder, BaseTextEmbedder
from cardvault.embedding.factory import EmbedderFactory
from cardvault.extraction.extractor import CardExtractor
from cardvault.imaging.pdf_rasterizer import PdfRasterizer
from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.factory import ChatClientFactory
from cardvault.logging.logger import Log
from cardvault.lookup.factory import LookupClientFactory
from cardvault.media.openai_adapters import OpenAINarrator, OpenAISyntheticImageClient
from cardvault.processor.exceptions import ProcessorError
from cardvault.processor.models import TerminalOutcome
from cardvault.processor.pipeline import SideStep
from cardvault.processor.processor import Processor
from cardvault.processor.side_steps import NarrationStep, SyntheticSampleStep
from cardvault.processor.steps import (
    EmbedStep,
    EnrichStep,
    ExtractStep,
    IngestStep,
    PersistStep,
    VerifyStep,
)
from cardvault.retrieval.engine import HybridRetrievalEngine
from cardvault.retrieval.factory import RetrievalEngineFactory
from cardvault.retrieval.models import FusionWeights, SearchFilters, SearchResult
from cardvault.storage.local_store import LocalFileStore


class CardService:
    """Entry point for processing card images and searching stored cards."""

    def __init__(
        self,
        processor: Processor,
        engine: HybridRetrievalEngine,
        text_embedder: BaseTextEmbedder,
        image_embedder: BaseImageEmbedder,
        answerer: CardAnswerer,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._engine = engine
        self._text_embedder = text_embedder
        self._image_embedder = image_embedder
        self._answerer = answerer
        self._settings = settings

    def process_card(
        self,
        image_data: bytes | str | None,
        content_type: str | None,
        hint: str | None = None,
        enrich: bool = False,
        narrate: bool | None = None,
        synthesize: bool | None = None,
    ) -> TerminalOutcome:
        """Run the pipeline and return its terminal outcome."""
        state = self._processor.run(
            image_data,
            content_type,
            hint=hint,
            enrich=enrich,
            narrate=self._settings.enable_narration if narrate is None else narrate,
            synthesize=(
                self._settings.enable_synthetic_sample if synthesize is None else synthesize
            ),
        )
        for warning in state.errors:
            Log.debug(f"Pipeline warning: {warning}")
        if state.outcome is None:
            raise ProcessorError("Pipeline returned without a terminal outcome")
        return state.outcome

    def search(
        self,
        query: str,
        top_k: int | None = None,
        weights: FusionWeights | None = None,
        filters: SearchFilters | None = None,
    ) -> list[SearchResult]:
        """Hybrid search from a free-text query.

        The query is embedded into both spaces: the text space directly and
        the image space through the CLIP text encoder.
        """
        if not query or not query.strip():
            raise ValueError("Query is required")
        Log.info(f"Searching for: {query!r}")
        with ThreadPoolExecutor(max_workers=2) as pool:
            text_future = pool.submit(self._text_embedder.embed_text, query)
            image_future = pool.submit(self._image_embedder.embed_query_text, query)
            text_vector = text_future.result()
            image_vector = image_future.result()
        return self._engine.search(
            text_vector,
            image_vector,
            top_k=self._settings.search_top_k if top_k is None else top_k,
            weights=weights
            or FusionWeights(
                text=self._settings.search_text_weight,
                image=self._settings.search_image_weight,
            ),
            filters=filters,
        )

    def answer(
        self,
        messages: Sequence[ChatMessage] | str,
        filters: SearchFilters | None = None,
    ) -> ChatAnswer:
        """Answer the latest user message from the best-matching stored cards.

        The last user turn is the search query; the whole conversation goes to
        the chat provider together with a numbered listing of the hits.

        Raises:
            ValueError: if there is no non-blank user message.
            ChatError: if the chat provider fails.
        """
        if isinstance(messages, str):
            messages = [ChatMessage(role="user", content=messages)]
        query = latest_user_query(messages)
        results = self.search(query, top_k=self._settings.chat_top_k, filters=filters)
        Log.info(f"Retrieved {len(results)} cards for chat")
        return ChatAnswer(text=self._answerer.answer(messages, results), results=results)

    def list_cards(self, limit: int | None = None) -> list[CardRecord]:
        return self._engine.list_all(self._settings.list_limit if limit is None else limit)

    def delete_card(self, identifier: str) -> None:
        self._engine.delete(identifier)


def build_side_steps(
    settings: Settings,
    file_store: LocalFileStore,
    client: openai.OpenAI | None,
) -> list[SideStep]:
    """Optional side-steps need a real OpenAI client; none exist offline."""
    if client is None:
        return []
    return [
        SyntheticSampleStep(
            OpenAISyntheticImageClient(client=client, model=settings.synthetic_image_model_name),
            file_store,
            random.Random(),
        ),
        NarrationStep(
            OpenAINarrator(
                client=client,
                model=settings.narration_model_name,
                voice=settings.narration_voice,
            ),
            file_store,
        ),
    ]


def build_processor(
    settings: Settings,
    engine: HybridRetrievalEngine,
    text_embedder: BaseTextEmbedder,
    image_embedder: BaseImageEmbedder,
    file_store: LocalFileStore,
    chat_client: BaseChatClient,
    openai_client: openai.OpenAI | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    extractor = CardExtractor(
        client=chat_client,
        model=settings.extraction_model_name,
        temperature=settings.extraction_temperature,
    )
    describer = Describer(
        DescriptionWriter(
            client=chat_client,
            model=settings.description_model_name,
            temperature=settings.description_temperature,
        ),
        LookupClientFactory.create(settings),
    )
    steps = [
        IngestStep(settings.allowed_content_types, settings.max_image_bytes, PdfRasterizer()),
        ExtractStep(extractor),
        VerifyStep(settings.certification_base_url),
        EnrichStep(describer),
        EmbedStep(text_embedder, image_embedder),
        PersistStep(file_store, engine),
    ]
    return Processor(steps, side_steps=build_side_steps(settings, file_store, openai_client))


def build_service(settings: Settings, files_root: Path | None = None) -> CardService:
    """Construct every dependency once and wire them into a CardService.

    Raises:
        ValueError: for an unknown provider, before any client is created.
    """
    providers = {ChatClientFactory.provider(settings), EmbedderFactory.provider(settings)}
    file_store = LocalFileStore(files_root or Path(settings.storage_root))
    engine = RetrievalEngineFactory.create(settings)
    openai_client = (
        None if providers == {"example"} else ChatClientFactory.create_openai(settings)
    )
    chat_client = ChatClientFactory.create(settings, openai_client)
    text_embedder = EmbedderFactory.create_text(settings, openai_client)
    image_embedder = EmbedderFactory.create_image(settings)
    processor = build_processor(
        settings, engine, text_embedder, image_embedder, file_store, chat_client, openai_client
    )
    answerer = CardAnswerer(
        client=chat_client,
        model=settings.chat_model_name,
        temperature=settings.chat_temperature,
    )
    return CardService(processor, engine, text_embedder, image_embedder, answerer, settings)
