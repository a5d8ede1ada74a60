"""Tests for file and folder ingestion."""

from pathlib import Path

import pytest

from risimport.parse.ingestion import INGESTION_VERSION, ingest_file, ingest_folder


@pytest.mark.integration
def test_ingest_folder_fixtures(fixtures_dir: Path) -> None:
    """Test folder ingestion covers every supported file, sorted by name."""
    records, report = ingest_folder(fixtures_dir)

    assert [r.filename for r in report.file_results] == ["latin1.ris", "notes.txt", "sample.ris"]
    assert report.tool_version == INGESTION_VERSION
    assert report.total_files == 3
    assert report.total_records == 3
    assert len(records) == 3
    assert report.total_errors == 1


@pytest.mark.integration
def test_ingest_folder_report_structure(fixtures_dir: Path) -> None:
    """Test per-file results carry metadata."""
    _, report = ingest_folder(fixtures_dir)

    for result in report.file_results:
        assert result.file_size > 0
        assert result.file_digest.startswith("sha256:")
        assert result.encoding_used in ["utf-8", "utf-8-sig", "latin-1"]
        assert result.format_detected in ["ris", "unknown"]
        assert isinstance(result.warnings, tuple)
        assert isinstance(result.errors, tuple)


@pytest.mark.integration
def test_ingest_folder_deterministic(fixtures_dir: Path) -> None:
    """Test folder ingestion yields identical entries across runs."""
    records1, _ = ingest_folder(fixtures_dir)
    records2, _ = ingest_folder(fixtures_dir)

    assert records1 == records2


@pytest.mark.integration
def test_ingest_folder_empty(tmp_path: Path) -> None:
    """Test empty folder returns zero results."""
    records, report = ingest_folder(tmp_path)

    assert report.total_files == 0
    assert report.total_records == 0
    assert records == []
    assert report.file_results == ()


@pytest.mark.unit
def test_ingest_folder_recursive_and_pattern(tmp_path: Path, write_ris) -> None:
    """Test recursion and glob filtering; unsupported extensions are skipped."""
    write_ris(["TY  - JOUR", "TI  - Top", "ER  - "], "top.ris")
    (tmp_path / "nested").mkdir()
    write_ris(["TY  - JOUR", "TI  - Nested", "ER  - "], "nested/inner.ris")
    write_ris(["TY  - JOUR", "TI  - Ignored", "ER  - "], "skip.bib")

    flat, _ = ingest_folder(tmp_path)
    deep, _ = ingest_folder(tmp_path, recursive=True)
    filtered, _ = ingest_folder(tmp_path, recursive=True, glob_pattern="top*")

    assert [r.get("title") for r in flat] == ["Top"]
    assert sorted(r.get("title") for r in deep) == ["Nested", "Top"]
    assert [r.get("title") for r in filtered] == ["Top"]


@pytest.mark.unit
def test_ingest_file_sample(sample_ris: Path) -> None:
    """Test a valid RIS file decodes with metadata filled in."""
    records, result = ingest_file(sample_ris)

    assert result.format_detected == "ris"
    assert result.source_ext == ".ris"
    assert result.encoding_used == "utf-8"
    assert result.records_parsed == len(records) == 2
    assert result.errors == ()
    assert result.file_mtime.endswith("Z")


@pytest.mark.unit
def test_ingest_file_latin1_crlf(fixtures_dir: Path) -> None:
    """Test latin-1 bytes and CRLF line endings decode cleanly."""
    records, result = ingest_file(fixtures_dir / "latin1.ris")

    assert result.encoding_used == "latin-1"
    assert records[0].get("author") == "Müller, Hans"
    assert records[0].get("title") == "Bibliotheken in Europa"
    assert records[0].get("year") == "1998"


@pytest.mark.unit
def test_ingest_file_forced_encoding(tmp_path: Path) -> None:
    """Test an explicit encoding overrides detection."""
    path = tmp_path / "cp.ris"
    path.write_bytes("TY  - JOUR\nTI  - Café\nER  - \n".encode("cp1252"))

    records, result = ingest_file(path, encoding="cp1252")

    assert result.encoding_used == "cp1252"
    assert records[0].get("title") == "Café"


@pytest.mark.unit
def test_ingest_file_unknown_encoding(sample_ris: Path) -> None:
    """Test an unknown codec is reported as an error."""
    records, result = ingest_file(sample_ris, encoding="no-such-codec")

    assert records == []
    assert len(result.errors) == 1
    assert "no-such-codec" in result.errors[0]


@pytest.mark.unit
def test_ingest_file_not_ris(fixtures_dir: Path) -> None:
    """Test text without a TY line is an error, not an empty success."""
    records, result = ingest_file(fixtures_dir / "notes.txt")

    assert records == []
    assert result.format_detected == "unknown"
    assert result.errors == ("No RIS record start (TY  - ) found",)


@pytest.mark.unit
def test_ingest_file_empty(tmp_path: Path) -> None:
    """Test an empty file decodes to zero entries without errors."""
    path = tmp_path / "empty.ris"
    path.write_bytes(b"")

    records, result = ingest_file(path)

    assert records == []
    assert result.errors == ()
    assert result.records_parsed == 0


@pytest.mark.unit
def test_ingest_file_missing(tmp_path: Path) -> None:
    """Test a missing file is reported as a read error."""
    records, result = ingest_file(tmp_path / "missing.ris")

    assert records == []
    assert result.errors[0].startswith("Failed to read file")


@pytest.mark.unit
def test_ingest_file_warnings_propagate(write_ris) -> None:
    """Test decoder warnings end up on the file result."""
    path = write_ris(["TY  - JOUR", "TI  - No terminator"])

    records, result = ingest_file(path)

    assert len(records) == 1
    assert any("without closing ER" in w for w in result.warnings)
