"""Turns retrieved cards and a conversation into prompt text."""

from collections.abc import Sequence

from cardvault.chat.models import ChatMessage
from cardvault.retrieval.models import SearchResult

NO_CARDS_CONTEXT = (
    "No cards found in the collection matching this query. The collection may be "
    "empty or the query doesn't match any stored cards."
)


def latest_user_query(messages: Sequence[ChatMessage]) -> str:
    """Return the text of the last user turn.

    Raises:
        ValueError: if there are no messages, no user turn, or the last user
            turn is blank.
    """
    if not messages:
        raise ValueError("Messages are required")
    user_turns = [message for message in messages if message.role == "user"]
    if not user_turns:
        raise ValueError("No user message found")
    query = user_turns[-1].content.strip()
    if not query:
        raise ValueError("Message content is required")
    return query


def build_context(results: Sequence[SearchResult]) -> str:
    """Numbered card listing, best match first, with similarity as a percentage."""
    if not results:
        return NO_CARDS_CONTEXT
    lines = ["Here are the most relevant PSA graded cards from the collection:", ""]
    for position, result in enumerate(results, start=1):
        card = result.record.attributes
        heading = f"{position}. {card.subject} - {card.year} {card.manufacturer}"
        if card.sub_category:
            heading += f" {card.sub_category}"
        lines.append(heading)
        lines.append(f"   PSA Grade: {card.grade_label}/10")
        lines.append(f"   Certification: {card.identifier}")
        if card.sub_number:
            lines.append(f"   Card Number: {card.sub_number}")
        lines.append(f"   Similarity Score: {result.combined_score * 100:.1f}%")
        lines.append(f"   Image: {result.record.image_path}")
        lines.append("")
    return "\n".join(lines).rstrip()


def render_conversation(messages: Sequence[ChatMessage]) -> str:
    # a single turn is sent as-is; longer histories keep speaker labels
    turns = [message for message in messages if message.content.strip()]
    if len(turns) == 1:
        return turns[0].content.strip()
    return "\n\n".join(f"{turn.role.capitalize()}: {turn.content.strip()}" for turn in turns)
