"""Pydantic request/response models for the API."""

from .assistant import AskAssistantRequest, AskAssistantResponse
from .maintenance import SweepRequest, SweepResponse
from .products import RankedProductsRequest, RankedProductsResponse

__all__ = [
    "AskAssistantRequest",
    "AskAssistantResponse",
    "SweepRequest",
    "SweepResponse",
    "RankedProductsRequest",
    "RankedProductsResponse",
]
