"""Cleaning orchestrator, semantic rewrite adapter and impact reporting."""

from engine.pipeline import CleanResult, EmptyDocumentError, clean

__all__ = ["CleanResult", "EmptyDocumentError", "clean"]
