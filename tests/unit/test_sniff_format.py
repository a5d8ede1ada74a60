"""Unit tests for format detection and encoding utilities."""

import io

import pytest

from risimport.parse.base import (
    detect_encoding,
    is_recognized_format,
    normalize_dashes,
    normalize_line_endings,
)

# === Format Sniffing Tests ===


@pytest.mark.unit
def test_sniff_ris() -> None:
    """Test RIS detection via TY tag."""
    lines = ["TY  - JOUR", "AU  - Smith, J", "TI  - Test", "ER  - "]
    assert is_recognized_format(lines)


@pytest.mark.unit
def test_sniff_ris_after_preamble() -> None:
    """Test the TY line may follow arbitrary leading text."""
    lines = ["Exported from a reference manager", "", "TY  - BOOK"]
    assert is_recognized_format(lines)


@pytest.mark.unit
@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["@article{Test2024,", "  author = {Smith, J},", "}"],
        ["PMID- 12345678", "TI  - Pubmed style"],
        ["  TY  - JOUR"],
        ["TY - JOUR"],
    ],
)
def test_sniff_not_ris(lines: list[str]) -> None:
    """Test other formats and malformed TY lines are rejected."""
    assert not is_recognized_format(lines)


@pytest.mark.unit
def test_sniff_stops_at_first_match() -> None:
    """Test the stream is not consumed past the first TY line."""
    stream = io.StringIO("TY  - JOUR\nTI  - One\nER  - \n")

    assert is_recognized_format(stream)
    assert stream.readline() == "TI  - One\n"


# === Encoding Tests ===


@pytest.mark.unit
def test_detect_encoding_utf8_bom() -> None:
    """Test UTF-8 BOM detection."""
    assert detect_encoding(b"\xef\xbb\xbfTY  - JOUR") == "utf-8-sig"


@pytest.mark.unit
def test_detect_encoding_utf8() -> None:
    """Test valid UTF-8 detection."""
    assert detect_encoding("TI  - Müller".encode()) == "utf-8"


@pytest.mark.unit
def test_detect_encoding_latin1_fallback() -> None:
    """Test latin-1 fallback for invalid UTF-8."""
    assert detect_encoding("TI  - Müller".encode("latin-1")) == "latin-1"


# === Normalization Tests ===


@pytest.mark.unit
def test_normalize_line_endings() -> None:
    """Test CRLF and CR become LF."""
    assert normalize_line_endings("a\r\nb\rc\n") == "a\nb\nc\n"


@pytest.mark.unit
def test_normalize_dashes() -> None:
    """Test en dash, em dash and horizontal bar replacement."""
    assert normalize_dashes("10–20") == "10-20"
    assert normalize_dashes("a—b―c") == "a--b--c"
