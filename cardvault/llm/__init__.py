from cardvault.llm.client_base import BaseChatClient
from cardvault.llm.factory import ChatClientFactory

__all__ = ["BaseChatClient", "ChatClientFactory"]
