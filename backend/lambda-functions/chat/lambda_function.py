"""
RAG Chat Lambda
Answers questions over uploaded documents using Azure AI Search and Azure OpenAI
"""
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ragapp.chat import AzureOpenAIClient, AzureSearchClient, ChatService, handle_chat_event
from ragapp.shared.config import Settings
from ragapp.storage import DynamoDBRecordStore

load_dotenv()

SETTINGS = Settings.from_env()

logger = logging.getLogger()
logger.setLevel(SETTINGS.log_level)

# Built on first invocation and reused for the life of the container
_service: Optional[ChatService] = None


def get_service() -> ChatService:
    global _service

    if _service is None:
        if not SETTINGS.search_endpoint:
            logger.warning("AZURE_SEARCH_ENDPOINT not set. Answers will have no document context.")
        if not SETTINGS.generation_endpoint:
            logger.warning("AZURE_FOUNDRY_ENDPOINT not set. Every answer will be the fallback message.")

        _service = ChatService(
            settings=SETTINGS,
            search=AzureSearchClient(
                endpoint=SETTINGS.search_endpoint,
                api_key=SETTINGS.search_key,
                index_name=SETTINGS.search_index,
                api_version=SETTINGS.search_api_version,
                semantic_configuration=SETTINGS.search_semantic_configuration,
                timeout=SETTINGS.http_timeout,
            ),
            generation=AzureOpenAIClient(
                endpoint=SETTINGS.generation_endpoint,
                api_key=SETTINGS.generation_key,
                deployment=SETTINGS.generation_model,
                api_version=SETTINGS.generation_api_version,
                timeout=SETTINGS.http_timeout,
            ),
            conversations=DynamoDBRecordStore(SETTINGS.conversations_table, region=SETTINGS.aws_region),
        )
        logger.info(f"Chat service initialized: table={SETTINGS.conversations_table}")

    return _service


def lambda_handler(event: Dict[str, Any], context) -> Dict[str, Any]:
    """Lambda handler for chat requests via API Gateway"""
    return handle_chat_event(event, get_service())
