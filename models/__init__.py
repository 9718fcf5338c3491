"""Public re-exports of all model types."""

from models.options import NO_OP_OPTIONS, CleaningOptions
from models.request import CleanRequest
from models.response import CleanResponse
from models.summary import ImpactSummary

__all__ = [
    # Options
    "CleaningOptions",
    "NO_OP_OPTIONS",
    # Results
    "ImpactSummary",
    # Request/Response
    "CleanRequest",
    "CleanResponse",
]
