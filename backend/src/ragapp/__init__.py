"""ragapp backend: document upload and RAG chat Lambda handlers"""

__version__ = "0.1.0"
