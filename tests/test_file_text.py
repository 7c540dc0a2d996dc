"""Tests for file text extraction."""

import pytest

from app.core.file_text import extract_text_from_upload, is_supported_upload


def test_extract_text_txt_utf8():
    """Test extracting text from a UTF-8 .txt file."""
    content = "Il Castello di Muro Lucano è normanno."

    result = extract_text_from_upload(
        filename="castello.txt",
        content_type="text/plain",
        raw_bytes=content.encode("utf-8"),
    )

    assert result.text == content
    assert result.detected_encoding == "utf-8"
    assert result.file_type == "txt"


def test_extract_text_utf8_bom():
    """Test BOM is stripped."""
    content = "Cattedrale"

    result = extract_text_from_upload("c.txt", "text/plain", b"\xef\xbb\xbf" + content.encode("utf-8"))

    assert result.text == content
    assert result.detected_encoding == "utf-8-sig"


def test_extract_text_latin1_fallback():
    """Test Latin-1 is used when UTF-8 fails."""
    content = "Città è più bella"

    result = extract_text_from_upload("c.txt", "text/plain", content.encode("latin-1"))

    assert result.text == content
    assert result.detected_encoding == "latin-1"


def test_pdf_decoded_as_raw_text():
    result = extract_text_from_upload("guida.pdf", "application/pdf", b"%PDF-1.4\x00 Ripe del Rescio")

    assert result.file_type == "pdf"
    assert "Ripe del Rescio" in result.text
    assert "\x00" not in result.text


def test_content_type_accepted_without_extension():
    docx = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    assert is_supported_upload("upload", docx)
    result = extract_text_from_upload("upload", docx, b"Borgo Pianello")
    assert result.text == "Borgo Pianello"


@pytest.mark.parametrize("filename,content_type", [("photo.png", "image/png"), ("data.csv", "text/csv")])
def test_unsupported_types_rejected(filename, content_type):
    with pytest.raises(ValueError, match="Unsupported file type"):
        extract_text_from_upload(filename, content_type, b"data")
