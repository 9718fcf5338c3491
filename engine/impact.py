"""Impact summary computation for a finished cleaning run."""

from __future__ import annotations

from models.summary import ImpactSummary


def byte_length(html: str) -> int:
    """UTF-8 encoded size of *html*."""
    return len(html.encode("utf-8"))


def compute_impact(original_html: str, cleaned_html: str, nodes_removed: int) -> ImpactSummary:
    """Compare input and output sizes.

    ``estimated_speed_gain`` is the relative size reduction, e.g. ``"12.5%"``,
    or ``"N/A"`` when the document did not shrink.
    """
    original_bytes = byte_length(original_html)
    cleaned_bytes = byte_length(cleaned_html)
    bytes_saved = original_bytes - cleaned_bytes

    if original_bytes > 0 and bytes_saved > 0:
        gain = f"{bytes_saved / original_bytes * 100:.1f}%"
    else:
        gain = "N/A"

    return ImpactSummary(
        original_bytes=original_bytes,
        cleaned_bytes=cleaned_bytes,
        bytes_saved=bytes_saved,
        nodes_removed=nodes_removed,
        estimated_speed_gain=gain,
    )
