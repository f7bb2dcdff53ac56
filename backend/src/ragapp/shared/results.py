"""Degraded-result warnings

Failures that the pipelines deliberately swallow (bad metadata, search or
generation outages, conversation persistence) are recorded as warnings on
the service result instead of only being logged.
"""

from dataclasses import dataclass
from enum import Enum


class WarningCode(str, Enum):
    METADATA_INVALID = "metadata_invalid"
    SEARCH_FAILED = "search_failed"
    GENERATION_FAILED = "generation_failed"
    HISTORY_LOAD_FAILED = "history_load_failed"
    HISTORY_SAVE_FAILED = "history_save_failed"


@dataclass(frozen=True)
class ServiceWarning:
    code: WarningCode
    message: str
