import argparse
import json
import mimetypes
import sys
from pathlib import Path

from cardvault.chat.exceptions import ChatError
from cardvault.chat.models import ChatMessage
from cardvault.config.settings import Settings
from cardvault.embedding.exceptions import EmbeddingError
from cardvault.logging.logger import Log
from cardvault.retrieval.exceptions import RetrievalError
from cardvault.retrieval.models import FusionWeights, SearchFilters
from cardvault.service import CardService, build_service


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardvault",
        description="Process graded card images and search the stored collection.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    process = commands.add_parser("process", help="Process one card image or PDF")
    process.add_argument("file", type=Path)
    process.add_argument("--content-type", help="Override the type guessed from the file name")
    process.add_argument("--hint")
    process.add_argument("--enrich", action="store_true")
    process.add_argument("--narrate", action="store_true", default=None)
    process.add_argument("--synthesize", action="store_true", default=None)

    search = commands.add_parser("search", help="Hybrid search over stored cards")
    search.add_argument("query")
    search.add_argument("--top-k", type=int)
    search.add_argument("--text-weight", type=float)
    search.add_argument("--image-weight", type=float)
    search.add_argument("--subject")
    search.add_argument("--year")
    search.add_argument("--manufacturer")
    search.add_argument("--min-grade", type=float)
    search.add_argument("--max-grade", type=float)

    chat = commands.add_parser("chat", help="Answer a question from the stored cards")
    chat.add_argument("query")
    chat.add_argument(
        "--history",
        type=Path,
        help="JSON file with earlier turns: [{\"role\": ..., \"content\": ...}]",
    )

    listing = commands.add_parser("list", help="List stored cards")
    listing.add_argument("--limit", type=int)

    delete = commands.add_parser("delete", help="Delete a card by certification number")
    delete.add_argument("identifier")
    return parser


def _weights(args: argparse.Namespace, settings: Settings) -> FusionWeights:
    return FusionWeights(
        text=settings.search_text_weight if args.text_weight is None else args.text_weight,
        image=settings.search_image_weight if args.image_weight is None else args.image_weight,
    )


def run_command(service: CardService, settings: Settings, args: argparse.Namespace) -> int:
    """Execute one parsed command, print its JSON result, return the exit code."""
    if args.command == "process":
        content_type = args.content_type or mimetypes.guess_type(args.file.name)[0]
        outcome = service.process_card(
            args.file.read_bytes(),
            content_type,
            hint=args.hint,
            enrich=args.enrich,
            narrate=args.narrate,
            synthesize=args.synthesize,
        )
        _print(outcome.to_dict())
        return 0 if outcome.success else 1

    if args.command == "search":
        filters = SearchFilters(
            subject=args.subject,
            year=args.year,
            manufacturer=args.manufacturer,
            min_grade=args.min_grade,
            max_grade=args.max_grade,
        )
        results = service.search(
            args.query,
            top_k=args.top_k,
            weights=_weights(args, settings),
            filters=None if filters.is_empty() else filters,
        )
        _print([result.to_dict() for result in results])
        return 0

    if args.command == "chat":
        messages = _load_history(args.history) if args.history else []
        messages.append(ChatMessage(role="user", content=args.query))
        _print(service.answer(messages).to_dict())
        return 0

    if args.command == "list":
        _print([record.to_dict() for record in service.list_cards(args.limit)])
        return 0

    service.delete_card(args.identifier)
    _print({"deleted": args.identifier})
    return 0


def _load_history(path: Path) -> list[ChatMessage]:
    try:
        turns = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read chat history {path}: {exc}") from exc
    if not isinstance(turns, list):
        raise ValueError(f"Chat history {path} must be a JSON list of messages")
    return [ChatMessage.from_dict(turn) for turn in turns]


def _print(data: object) -> None:
    print(json.dumps(data, indent=2))


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> run one command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level, settings.app_env)
    try:
        service = build_service(settings)
        return run_command(service, settings, args)
    except ValueError as exc:
        Log.error(str(exc))
        _print({"error": str(exc)})
        return 2
    except (RetrievalError, EmbeddingError, ChatError) as exc:
        Log.error(f"{args.command} failed: {exc}")
        _print({"error": str(exc)})
        return 1


if __name__ == "__main__":
    sys.exit(main())
