# tests/test_impact.py
from engine.impact import byte_length, compute_impact


def test_compute_impact_savings():
    """Saved bytes and a percentage are reported."""
    summary = compute_impact("a" * 200, "a" * 150, 3)
    assert summary.original_bytes == 200
    assert summary.cleaned_bytes == 150
    assert summary.bytes_saved == 50
    assert summary.nodes_removed == 3
    assert summary.estimated_speed_gain == "25.0%"


def test_compute_impact_growth():
    """A bigger output gives negative savings and no gain estimate."""
    summary = compute_impact("<p>x</p>", "<div><p>x</p></div>", 0)
    assert summary.bytes_saved < 0
    assert summary.estimated_speed_gain == "N/A"


def test_byte_length_counts_utf8():
    """Sizes are encoded bytes, not characters."""
    assert byte_length("é") == 2
    assert byte_length("abc") == 3


def test_summary_serializes_with_camel_case():
    """The wire format uses the UI's field names."""
    data = compute_impact("abcd", "ab", 1).model_dump(by_alias=True)
    assert data == {
        "originalBytes": 4,
        "cleanedBytes": 2,
        "bytesSaved": 2,
        "nodesRemoved": 1,
        "estimatedSpeedGain": "50.0%",
    }
