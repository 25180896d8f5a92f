"""Enumeration types for DocRAG data models."""

from enum import Enum


class GenerationStatus(str, Enum):
    SUCCEEDED = "succeeded"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


class QueryStage(str, Enum):
    IDLE = "idle"
    EMBEDDING = "embedding"
    RETRIEVING = "retrieving"
    CONTEXT_ACCEPTED = "context_accepted"
    CONTEXT_REJECTED = "context_rejected"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    TIMED_OUT_RETRYING = "timed_out_retrying"
    FAILED = "failed"
