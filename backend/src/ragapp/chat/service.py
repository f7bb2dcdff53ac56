"""Chat service layer

Runs one conversation turn: retrieve context, generate an answer and save
the extended conversation. Search, generation and persistence failures are
soft: the caller always gets an answer, with warnings on the result.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..shared.config import Settings
from ..shared.errors import ClientInputError
from ..shared.ids import generate_conversation_id
from ..shared.results import ServiceWarning, WarningCode
from ..storage import RecordStore
from .generation import GenerationService
from .models import ChatRequest, ChatResult, Citation, Conversation, SearchHit, Turn
from .prompts import build_citation, build_messages
from .search import SearchService

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = (
    "I apologize, but I encountered an error generating a response. Please try again later."
)


class ChatService:
    """Retrieval-augmented chat over the user's documents."""

    def __init__(
        self,
        settings: Settings,
        search: SearchService,
        generation: GenerationService,
        conversations: RecordStore,
    ):
        self.settings = settings
        self.search = search
        self.generation = generation
        self.conversations = conversations

    def chat(self, user_id: str, request: ChatRequest) -> ChatResult:
        """
        Answer a message and persist the updated conversation.

        Args:
            user_id: Authenticated user
            request: Message, optional conversation id and prior turns

        Returns:
            ChatResult with the answer, conversation id and citations

        Raises:
            ClientInputError: If the message is empty
        """
        message = (request.message or "").strip()
        if not message:
            raise ClientInputError("Message is required")

        warnings: List[ServiceWarning] = []
        conversation_id = request.conversation_id or generate_conversation_id()

        turns = list(request.history)
        if not turns and request.conversation_id:
            turns = self._load_history(user_id, request.conversation_id, warnings)
        turns.append(Turn(role="user", content=request.message))

        hits = self._retrieve(request.message, warnings)
        answer, sources = self._generate(hits, turns, warnings)
        turns.append(Turn(role="assistant", content=answer))

        saved = self._save(user_id, conversation_id, turns, warnings)

        for warning in warnings:
            logger.warning(f"Conversation {conversation_id} degraded: {warning.code.value} - {warning.message}")

        return ChatResult(
            message=answer,
            conversation_id=conversation_id,
            sources=sources,
            warnings=warnings,
            saved=saved,
        )

    def get_conversation(self, user_id: str, conversation_id: str) -> Optional[Conversation]:
        item = self.conversations.get_item({"userId": user_id, "conversationId": conversation_id})
        return Conversation.from_dict(item) if item else None

    def _load_history(
        self, user_id: str, conversation_id: str, warnings: List[ServiceWarning]
    ) -> List[Turn]:
        try:
            conversation = self.get_conversation(user_id, conversation_id)
        except Exception as e:
            logger.error(f"Error loading conversation {conversation_id}: {e}")
            warnings.append(ServiceWarning(WarningCode.HISTORY_LOAD_FAILED, str(e)))
            return []

        if conversation is None:
            return []
        logger.info(f"Loaded {len(conversation.history)} stored turn(s) for {conversation_id}")
        return list(conversation.history)

    def _retrieve(self, query: str, warnings: List[ServiceWarning]) -> List[SearchHit]:
        try:
            return self.search.search(query, top=self.settings.search_top_k)
        except Exception as e:
            logger.error(f"Error searching documents: {e}")
            warnings.append(ServiceWarning(WarningCode.SEARCH_FAILED, str(e)))
            return []

    def _generate(
        self, hits: List[SearchHit], turns: List[Turn], warnings: List[ServiceWarning]
    ) -> Tuple[str, List[Citation]]:
        try:
            answer = self.generation.complete(
                build_messages(hits, turns),
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except Exception as e:
            logger.error(f"Error generating response: {e}")
            warnings.append(ServiceWarning(WarningCode.GENERATION_FAILED, str(e)))
            return APOLOGY_MESSAGE, []

        return answer, [build_citation(hit) for hit in hits]

    def _save(
        self, user_id: str, conversation_id: str, turns: List[Turn], warnings: List[ServiceWarning]
    ) -> bool:
        # Whole-record overwrite; concurrent turns on one conversation race and the last write wins
        conversation = Conversation(
            user_id=user_id,
            conversation_id=conversation_id,
            history=turns,
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        )
        try:
            self.conversations.put_item(conversation.to_dict())
        except Exception as e:
            logger.error(f"Error saving conversation {conversation_id}: {e}")
            warnings.append(ServiceWarning(WarningCode.HISTORY_SAVE_FAILED, str(e)))
            return False
        return True
