import pytest

from labtrack.services.documents import (
    DocumentError,
    ProcessedDocument,
    extract_document,
    filter_documents,
    should_process_document,
    validate_upload,
)

LAB_TEXT = (
    "Laboratory report\nPatient: Jane Doe\n"
    "Glucose 5.1 mmol/L (4.4-5.0)\nHemoglobin 140 g/L (135-145)\nFerritin 80 ug/L\n"
)


def test_lab_text_is_processed():
    verdict = should_process_document(ProcessedDocument(filename="labs.txt", text=LAB_TEXT))
    assert verdict.should_process is True
    assert 0 < verdict.confidence < 1


def test_short_text_is_skipped():
    verdict = should_process_document(ProcessedDocument(filename="x.txt", text="hello"))
    assert verdict.should_process is False
    assert verdict.reason.startswith("Empty document")


def test_page_markers_only_is_skipped():
    text = "".join(f"\n--- Page {i} ---\n\n" for i in range(1, 5))
    verdict = should_process_document(ProcessedDocument(filename="scan.pdf", text=text, page_count=4))
    assert verdict.should_process is False
    assert "page numbers" in verdict.reason


def test_non_lab_prose_is_skipped():
    text = "Dear customer, thank you for shopping with us. We hope to see you again soon!"
    verdict = should_process_document(ProcessedDocument(filename="letter.txt", text=text))
    assert verdict.should_process is False


def test_images_always_processed():
    doc = ProcessedDocument(filename="scan.png", is_image=True, image_b64="AAAA", media_type="image/png")
    assert should_process_document(doc).should_process is True


def test_filter_documents_splits_batch():
    docs = [
        ProcessedDocument(filename="labs.txt", text=LAB_TEXT),
        ProcessedDocument(filename="blank.txt", text=""),
    ]
    batch = filter_documents(docs)
    assert [d.filename for d in batch.processable] == ["labs.txt"]
    assert batch.skipped[0][0].filename == "blank.txt"


def test_validate_upload():
    with pytest.raises(DocumentError):
        validate_upload(b"data", "notes.docx", "application/msword")
    with pytest.raises(DocumentError):
        validate_upload(b"", "labs.pdf", "application/pdf")
    validate_upload(b"data", "labs.txt", "text/plain")


def test_extract_plain_text_document():
    doc = extract_document(LAB_TEXT.encode("utf-8"), "labs.txt", "text/plain")
    assert doc.source == "text"
    assert "Hemoglobin" in doc.text
    assert doc.is_image is False
