"""Identifier generation for documents and conversations"""

import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 8


def generate_id(prefix: str) -> str:
    """
    Generate a time-prefixed identifier such as ``doc_1718000000000_k3j9x0ab``.

    The millisecond timestamp plus random suffix is collision resistant but
    not guaranteed to be globally unique.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}_{millis}_{suffix}"


def generate_document_id() -> str:
    return generate_id("doc")


def generate_conversation_id() -> str:
    return generate_id("conv")
