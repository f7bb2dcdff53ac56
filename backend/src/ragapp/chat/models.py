"""Chat request/response models"""

from dataclasses import dataclass, field
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..shared.results import ServiceWarning


class Turn(BaseModel):
    """One message in a conversation"""
    role: Literal["user", "assistant"] = Field(..., description="Message author")
    content: str = Field(..., description="Message text")


class ChatRequest(BaseModel):
    """Request body for the chat endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, description="New user message")
    conversation_id: Optional[str] = Field(None, alias="conversationId", description="Existing conversation")
    history: List[Turn] = Field(default_factory=list, description="Prior turns, oldest first")


class Citation(BaseModel):
    """Source reference attached to a generated answer"""
    model_config = ConfigDict(populate_by_name=True)

    document_id: Optional[str] = Field(None, alias="documentId")
    title: Optional[str] = None
    location: str = ""
    excerpt: str = ""


@dataclass
class SearchHit:
    """A ranked snippet returned by the search service."""

    id: Optional[str]
    content: str
    title: Optional[str] = None
    source: Optional[str] = None
    page_number: Optional[Any] = None


@dataclass
class Conversation:
    """Conversation record as stored in the conversations table."""

    user_id: str
    conversation_id: str
    history: List[Turn] = field(default_factory=list)
    timestamp: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for DynamoDB storage."""
        return {
            "userId": self.user_id,
            "conversationId": self.conversation_id,
            "history": [turn.model_dump() for turn in self.history],
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Conversation":
        """Create from dictionary (DynamoDB item)."""
        return cls(
            user_id=data["userId"],
            conversation_id=data["conversationId"],
            history=[Turn.model_validate(turn) for turn in data.get("history", [])],
            timestamp=data.get("timestamp"),
        )


@dataclass
class ChatResult:
    """Outcome of a chat turn, with any degraded-mode warnings."""

    message: str
    conversation_id: str
    sources: List[Citation] = field(default_factory=list)
    warnings: List[ServiceWarning] = field(default_factory=list)
    saved: bool = True

    def to_body(self) -> dict:
        return {
            "message": self.message,
            "conversationId": self.conversation_id,
            "sources": [source.model_dump(by_alias=True) for source in self.sources],
        }
