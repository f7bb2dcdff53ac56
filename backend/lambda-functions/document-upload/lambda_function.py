"""
Document Upload Lambda
Stores uploaded files in S3, records them in DynamoDB and queues them for processing
"""
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ragapp.documents import DocumentUploadService, handle_upload_event
from ragapp.shared.config import Settings
from ragapp.storage import DynamoDBRecordStore, S3BlobStore, SQSWorkQueue

load_dotenv()

SETTINGS = Settings.from_env()

logger = logging.getLogger()
logger.setLevel(SETTINGS.log_level)

# Built on first invocation and reused for the life of the container
_service: Optional[DocumentUploadService] = None


def get_service() -> DocumentUploadService:
    global _service

    if _service is None:
        _service = DocumentUploadService(
            settings=SETTINGS,
            blob_store=S3BlobStore(SETTINGS.bucket_name, region=SETTINGS.aws_region),
            documents=DynamoDBRecordStore(SETTINGS.documents_table, region=SETTINGS.aws_region),
            work_queue=SQSWorkQueue(SETTINGS.queue_url, region=SETTINGS.aws_region),
        )
        logger.info(
            f"Upload service initialized: bucket={SETTINGS.bucket_name}, "
            f"table={SETTINGS.documents_table}"
        )

    return _service


def lambda_handler(event: Dict[str, Any], context) -> Dict[str, Any]:
    """Lambda handler for document uploads via API Gateway"""
    return handle_upload_event(event, get_service())
