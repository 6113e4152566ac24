from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cardvault.chat.answerer import CardAnswerer
from cardvault.chat.models import ChatMessage
from cardvault.config.settings import Settings
from cardvault.embedding.base import BaseImageEmbedder, BaseTextEmbedder
from cardvault.processor.exceptions import ProcessorError
from cardvault.processor.models import FailureKind, TerminalOutcome
from cardvault.processor.pipeline import ProcessingState
from cardvault.processor.processor import Processor
from cardvault.processor.side_steps import NarrationStep, SyntheticSampleStep
from cardvault.retrieval.engine import HybridRetrievalEngine
from cardvault.retrieval.models import FusionWeights, SearchFilters
from cardvault.service import CardService, build_service, build_side_steps
from cardvault.storage.local_store import LocalFileStore


def _make_service(settings: Settings | None = None) -> tuple[CardService, MagicMock, MagicMock]:
    processor = MagicMock(spec=Processor)
    engine = MagicMock(spec=HybridRetrievalEngine)
    text_embedder = MagicMock(spec=BaseTextEmbedder)
    text_embedder.embed_text.return_value = [0.1, 0.2]
    image_embedder = MagicMock(spec=BaseImageEmbedder)
    image_embedder.embed_query_text.return_value = [0.3]
    answerer = MagicMock(spec=CardAnswerer)
    answerer.answer.return_value = "Two LeBron cards are in the collection."
    service = CardService(
        processor, engine, text_embedder, image_embedder, answerer, settings or Settings()
    )
    return service, processor, engine


class TestProcessCard:
    def test_returns_terminal_outcome(self) -> None:
        service, processor, _ = _make_service()
        state = ProcessingState(image_data=b"x", content_type="image/png")
        state.fail(FailureKind.INGEST_FAILED, "bad")
        processor.run.return_value = state

        outcome = service.process_card(b"x", "image/png")

        assert outcome == TerminalOutcome.failure(FailureKind.INGEST_FAILED, "bad")

    def test_side_step_flags_default_to_settings(self) -> None:
        service, processor, _ = _make_service(
            Settings(enable_narration=True, enable_synthetic_sample=False)
        )
        state = ProcessingState(image_data=b"x", content_type="image/png")
        state.fail(FailureKind.INGEST_FAILED, "bad")
        processor.run.return_value = state

        service.process_card(b"x", "image/png", hint="h", enrich=True)

        kwargs = processor.run.call_args.kwargs
        assert kwargs == {"hint": "h", "enrich": True, "narrate": True, "synthesize": False}

    def test_explicit_flags_override_settings(self) -> None:
        service, processor, _ = _make_service(Settings(enable_narration=True))
        state = ProcessingState(image_data=b"x", content_type="image/png")
        state.fail(FailureKind.INGEST_FAILED, "bad")
        processor.run.return_value = state

        service.process_card(b"x", "image/png", narrate=False)

        assert processor.run.call_args.kwargs["narrate"] is False

    def test_state_without_outcome_raises_processor_error(self) -> None:
        service, processor, _ = _make_service()
        processor.run.return_value = ProcessingState(image_data=b"x", content_type="image/png")

        with pytest.raises(ProcessorError, match="without a terminal outcome"):
            service.process_card(b"x", "image/png")


class TestSearch:
    def test_embeds_query_in_both_spaces(self) -> None:
        service, _, engine = _make_service()
        engine.search.return_value = []
        filters = SearchFilters(year="1996")

        service.search("kobe rookie", top_k=3, filters=filters)

        engine.search.assert_called_once_with(
            [0.1, 0.2],
            [0.3],
            top_k=3,
            weights=FusionWeights(text=0.6, image=0.4),
            filters=filters,
        )

    def test_defaults_come_from_settings(self) -> None:
        service, _, engine = _make_service(
            Settings(search_top_k=7, search_text_weight=1.0, search_image_weight=0.0)
        )
        engine.search.return_value = []

        service.search("jordan")

        kwargs = engine.search.call_args.kwargs
        assert kwargs["top_k"] == 7
        assert kwargs["weights"] == FusionWeights(text=1.0, image=0.0)

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_raises(self, query: str) -> None:
        service, _, engine = _make_service()
        with pytest.raises(ValueError, match="Query is required"):
            service.search(query)
        engine.search.assert_not_called()


def _make_chat_service(
    settings: Settings | None = None,
) -> tuple[CardService, MagicMock, MagicMock, MagicMock]:
    service, _, engine = _make_service(settings)
    engine.search.return_value = []
    return service, engine, service._text_embedder, service._answerer  # type: ignore[return-value]


class TestAnswer:
    def test_last_user_message_drives_search(self) -> None:
        service, engine, text_embedder, answerer = _make_chat_service(Settings(chat_top_k=3))
        messages = [
            ChatMessage(role="user", content="show me jordan"),
            ChatMessage(role="assistant", content="No Jordan cards yet."),
            ChatMessage(role="user", content="any lebron rookies?"),
        ]

        answer = service.answer(messages)

        assert answer.text == "Two LeBron cards are in the collection."
        assert answer.results == []
        text_embedder.embed_text.assert_called_once_with("any lebron rookies?")
        kwargs = engine.search.call_args.kwargs
        assert kwargs["top_k"] == 3
        assert kwargs["weights"] == FusionWeights(text=0.6, image=0.4)
        answerer.answer.assert_called_once_with(messages, [])

    def test_plain_string_becomes_single_user_turn(self) -> None:
        service, _, _, answerer = _make_chat_service()

        service.answer("kobe")

        messages, _ = answerer.answer.call_args.args
        assert messages == [ChatMessage(role="user", content="kobe")]

    @pytest.mark.parametrize(
        ("messages", "error"),
        [
            ([], "Messages are required"),
            ([ChatMessage(role="assistant", content="hi")], "No user message found"),
            ([ChatMessage(role="user", content="  ")], "Message content is required"),
        ],
    )
    def test_invalid_conversation_raises(self, messages: list[ChatMessage], error: str) -> None:
        service, _, engine = _make_service()
        with pytest.raises(ValueError, match=error):
            service.answer(messages)
        engine.search.assert_not_called()


class TestListAndDelete:
    def test_list_uses_default_limit(self) -> None:
        service, _, engine = _make_service(Settings(list_limit=25))
        service.list_cards()
        engine.list_all.assert_called_once_with(25)

    def test_explicit_zero_limit_is_passed_through(self) -> None:
        service, _, engine = _make_service(Settings(list_limit=25))
        service.list_cards(0)
        engine.list_all.assert_called_once_with(0)

    def test_delete_delegates(self) -> None:
        service, _, engine = _make_service()
        service.delete_card("12345678")
        engine.delete.assert_called_once_with("12345678")


class TestBuildSideSteps:
    def test_no_client_means_no_side_steps(self, tmp_path: Path) -> None:
        assert build_side_steps(Settings(), LocalFileStore(tmp_path), None) == []

    def test_client_enables_both_side_steps(self, tmp_path: Path) -> None:
        side_steps = build_side_steps(Settings(), LocalFileStore(tmp_path), MagicMock())
        assert [type(s) for s in side_steps] == [SyntheticSampleStep, NarrationStep]


class TestBuildService:
    def test_offline_settings_create_no_openai_client(self, example_settings: Settings) -> None:
        with patch("cardvault.service.ChatClientFactory.create_openai") as create_openai:
            service = build_service(example_settings)
        create_openai.assert_not_called()
        assert isinstance(service, CardService)

    @pytest.mark.parametrize("field", ["embedding_provider", "llm_provider"])
    def test_unknown_provider_raises_before_any_client(
        self, example_settings: Settings, field: str
    ) -> None:
        settings = example_settings.model_copy(update={field: "nope", "openai_api_key": ""})
        with (
            patch("cardvault.service.ChatClientFactory.create_openai") as create_openai,
            patch("cardvault.service.RetrievalEngineFactory.create") as create_engine,
            pytest.raises(ValueError, match="Unknown"),
        ):
            build_service(settings)
        create_openai.assert_not_called()
        create_engine.assert_not_called()
