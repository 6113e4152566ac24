from cardvault.chat.answerer import CardAnswerer
from cardvault.chat.context import build_context, latest_user_query
from cardvault.chat.models import ChatAnswer, ChatMessage

__all__ = ["CardAnswerer", "ChatAnswer", "ChatMessage", "build_context", "latest_user_query"]
