"""Retrieval-augmented chat module"""

from .generation import AzureOpenAIClient, GenerationService
from .handler import handle_chat_event
from .models import ChatRequest, ChatResult, Citation, Conversation, SearchHit, Turn
from .search import AzureSearchClient, SearchService
from .service import APOLOGY_MESSAGE, ChatService

__all__ = [
    "AzureOpenAIClient",
    "GenerationService",
    "handle_chat_event",
    "ChatRequest",
    "ChatResult",
    "Citation",
    "Conversation",
    "SearchHit",
    "Turn",
    "AzureSearchClient",
    "SearchService",
    "APOLOGY_MESSAGE",
    "ChatService",
]
