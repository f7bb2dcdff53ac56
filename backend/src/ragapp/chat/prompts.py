"""Prompt and citation building for retrieval-augmented answers"""

from typing import Dict, List

from .models import Citation, SearchHit, Turn

EXCERPT_LENGTH = 200

SYSTEM_INSTRUCTIONS = (
    "You are an AI assistant that helps users find information in their documents.\n"
    "Answer the user's questions based on the provided document context.\n"
    "If you don't find the answer in the documents, say you don't have that information.\n"
    "Always cite your sources by referring to the document titles."
)


def build_context(hits: List[SearchHit]) -> str:
    """Render retrieved snippets as numbered documents (1-based)"""
    if not hits:
        return ""

    context = "Information from knowledge base:\n\n"
    for index, hit in enumerate(hits, 1):
        context += f"[Document {index}] {hit.title or 'Untitled'}\n{hit.content}\n\n"
    return context


def build_system_prompt(hits: List[SearchHit]) -> str:
    context = build_context(hits)
    if not context:
        return SYSTEM_INSTRUCTIONS
    return f"{SYSTEM_INSTRUCTIONS}\n\n{context}".rstrip("\n")


def build_messages(hits: List[SearchHit], turns: List[Turn]) -> List[Dict[str, str]]:
    """System instruction followed by the full turn history"""
    messages = [{"role": "system", "content": build_system_prompt(hits)}]
    messages.extend({"role": turn.role, "content": turn.content} for turn in turns)
    return messages


def build_citation(hit: SearchHit) -> Citation:
    """The excerpt always ends in "...", even when the content is shorter than the limit"""
    return Citation(
        document_id=hit.id,
        title=hit.title,
        location=f"Page {hit.page_number}" if hit.page_number is not None else "",
        excerpt=hit.content[:EXCERPT_LENGTH] + "...",
    )
