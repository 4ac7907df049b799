"""Backing logic: product sources, Firebase handles, assistant, maintenance."""

from .assistant import AssistantBlockedError, AssistantError, GeminiAssistant
from .firebase_client import create_firestore_client, create_storage_bucket, get_firebase_app
from .listing_sweeper import StaleListingSweeper, SweepError, SweepResult
from .product_source import (
    FirestoreProductSource,
    JsonProductSource,
    ProductSource,
    ProductSourceError,
    StaticProductSource,
)

__all__ = [
    "AssistantBlockedError",
    "AssistantError",
    "GeminiAssistant",
    "create_firestore_client",
    "create_storage_bucket",
    "get_firebase_app",
    "StaleListingSweeper",
    "SweepError",
    "SweepResult",
    "FirestoreProductSource",
    "JsonProductSource",
    "ProductSource",
    "ProductSourceError",
    "StaticProductSource",
]
