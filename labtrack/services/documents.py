"""Turn uploaded lab documents (PDF/image/text) into text plus optional vision input."""
from __future__ import annotations

import base64
import io
import logging
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pytesseract
from PIL import Image, ImageFilter, ImageStat, UnidentifiedImageError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger("labtrack")

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "20"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
MIN_CHARS_PER_PAGE = 50

PDF_TYPES = {"application/pdf"}
IMAGE_TYPES = {"image/png", "image/jpeg", "image/jpg", "image/gif", "image/webp"}
TEXT_TYPES = {"text/plain"}
SUPPORTED_IMAGE_EXT = {".png", ".jpg", ".jpeg", ".gif", ".webp"}
ALLOWED_EXT = {".pdf", ".txt"} | SUPPORTED_IMAGE_EXT
_MEDIA_BY_EXT = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

MIN_WIDTH, MIN_HEIGHT = 800, 600
VARIANCE_THRESHOLD = 800
EDGE_THRESHOLD = 8

LAB_KEYWORDS = [
    # units
    "mg/dl", "mg/l", "mmol/l", "µmol/l", "umol/l", "pg/ml", "ng/ml", "iu/l", "u/l",
    "g/dl", "g/l", "%", "miu/l", "pmol/l", "nmol/l", "fl", "meq/l",
    "k/µl", "k/ul", "×10³/µl", "×10¹²/l",
    # biomarkers
    "glucose", "cholesterol", "hemoglobin", "creatinine", "albumin",
    "sodium", "potassium", "calcium", "tsh", "vitamin",
    "hdl", "ldl", "triglyceride", "bilirubin", "ferritin",
    "wbc", "rbc", "platelet", "hematocrit", "ast", "alt", "alp",
    # report terms
    "laboratory", "lab result", "test result", "specimen", "reference range",
    "normal range", "optimal range", "patient", "collection date", "result",
    # es / pt / fr / de
    "glucosa", "colesterol", "hemoglobina", "creatinina", "albumina",
    "sodio", "potasio", "calcio", "vitamina", "triglicéridos",
    "laboratorio", "resultado", "paciente", "rango", "referencia",
    "glicose", "laboratório",
    "glycémie", "cholestérol", "hémoglobine", "vitamine", "résultat",
    "glukose", "cholesterin", "hämoglobin", "ergebnis",
]

EXCLUDE_PATTERNS = [
    re.compile(r"^\s*$"),
    re.compile(r"^\s*page\s+\d+\s*$", re.IGNORECASE),
    re.compile(r"^\s*\d+\s*$"),
]
_NUMBER = re.compile(r"\d+\.?\d*")


class DocumentError(ValueError):
    """Raised for uploads that cannot be read as a lab document."""


@dataclass
class ProcessedDocument:
    filename: str
    text: str = ""
    page_count: int = 1
    is_image: bool = False
    image_b64: Optional[str] = None
    media_type: Optional[str] = None
    quality_score: Optional[float] = None
    quality_warning: Optional[str] = None
    source: str = "text"


@dataclass
class FilterResult:
    should_process: bool
    reason: str
    confidence: float


@dataclass
class FilteredBatch:
    processable: List[ProcessedDocument] = field(default_factory=list)
    skipped: List[Tuple[ProcessedDocument, str]] = field(default_factory=list)


def _ext(filename: str) -> str:
    return os.path.splitext((filename or "").lower())[1]


def validate_upload(data: bytes, filename: str, content_type: str) -> None:
    ext = _ext(filename)
    mt = (content_type or "").lower()
    if ext not in ALLOWED_EXT and mt not in PDF_TYPES | IMAGE_TYPES | TEXT_TYPES:
        raise DocumentError("File must be a PDF, image (PNG, JPG, GIF, WEBP) or plain text")
    if not data:
        raise DocumentError("Uploaded file is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise DocumentError(f"File size must be less than {MAX_UPLOAD_MB}MB")


def check_image_quality(img: Image.Image) -> Tuple[float, Optional[str]]:
    """Score 0-1 from resolution, grey-level variance and edge strength."""
    width, height = img.size
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        return 0.3, f"Low resolution ({width}x{height}). Minimum {MIN_WIDTH}x{MIN_HEIGHT} recommended."

    gray = img.convert("L")
    gray.thumbnail((400, 400))
    variance = ImageStat.Stat(gray).var[0]
    edges = ImageStat.Stat(gray.filter(ImageFilter.FIND_EDGES)).mean[0]
    if variance < VARIANCE_THRESHOLD or edges < EDGE_THRESHOLD:
        return 0.4, "Image appears blurry or low quality. Text extraction may be inaccurate."
    return 1.0, None


def ocr_image(img: Image.Image, label: str) -> str:
    """Tesseract text for one image; empty when OCR is unavailable so vision can still run."""
    try:
        text = pytesseract.image_to_string(img, lang="eng")
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as exc:
        logger.warning({"event": "ocr_failed", "file": label, "error": str(exc)})
        return ""
    logger.info({"event": "ocr_done", "file": label, "chars": len(text)})
    return text


def _image_document(data: bytes, filename: str, media_type: str, source: str) -> ProcessedDocument:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise DocumentError(f"Unable to read image {filename}") from exc

    score, warning = check_image_quality(img)
    return ProcessedDocument(
        filename=filename,
        text=ocr_image(img, filename),
        page_count=1,
        is_image=True,
        image_b64=base64.b64encode(data).decode("ascii"),
        media_type=media_type,
        quality_score=score,
        quality_warning=warning,
        source=source,
    )


def _pdf_document(data: bytes, filename: str) -> ProcessedDocument:
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as exc:
        raise DocumentError(f"Unable to read PDF {filename}") from exc

    page_count = len(pages)
    text = "".join(f"\n--- Page {i} ---\n{body}\n" for i, body in enumerate(pages, start=1))
    content_chars = sum(len(body.strip()) for body in pages)
    if content_chars >= page_count * MIN_CHARS_PER_PAGE:
        return ProcessedDocument(filename=filename, text=text, page_count=page_count, source="pdf")

    # Scanned PDF: use the first embedded page image for OCR and vision
    for page in reader.pages:
        for image in page.images:
            buf = io.BytesIO()
            image.image.convert("RGB").save(buf, format="PNG")
            doc = _image_document(buf.getvalue(), filename, "image/png", "pdf-scan")
            doc.page_count = page_count
            doc.text = (text.strip() + "\n" + doc.text).strip()
            return doc

    return ProcessedDocument(filename=filename, text=text, page_count=page_count, source="pdf")


def extract_document(data: bytes, filename: str, content_type: str = "") -> ProcessedDocument:
    validate_upload(data, filename, content_type)
    ext = _ext(filename)
    mt = (content_type or "").lower()

    if mt in PDF_TYPES or ext == ".pdf":
        return _pdf_document(data, filename)

    if mt in IMAGE_TYPES or ext in SUPPORTED_IMAGE_EXT:
        media_type = _MEDIA_BY_EXT.get(ext) or ("image/jpeg" if mt == "image/jpg" else mt)
        return _image_document(data, filename, media_type, "ocr")

    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentError("Unable to decode file as UTF-8 text") from exc
    return ProcessedDocument(filename=filename, text=text, source="text")


def should_process_document(doc: ProcessedDocument) -> FilterResult:
    """Cheap pre-check so blank or non-lab files never reach the extraction API."""
    if doc.is_image or doc.image_b64:
        return FilterResult(True, "Has images (potential scanned lab report)", 1.0)

    text = (doc.text or "").lower()
    if len(text) < 50:
        return FilterResult(False, "Empty document (< 50 characters, no images)", 1.0)

    stripped = re.sub(r"-+\s*page\s+\d+\s*-+", " ", text).strip()
    for pattern in EXCLUDE_PATTERNS:
        if pattern.match(stripped):
            return FilterResult(False, "Document contains only whitespace or page numbers", 0.95)

    numbers = len(_NUMBER.findall(text))
    keywords = sum(1 for kw in LAB_KEYWORDS if kw in text)

    if numbers < 5 and keywords == 0:
        return FilterResult(
            False, f"Insufficient lab indicators ({numbers} numbers, {keywords} keywords)", 0.9
        )
    if numbers < 3 and keywords < 2:
        return FilterResult(
            False, f"Low lab probability ({numbers} numbers, {keywords} keywords)", 0.8
        )
    return FilterResult(
        True,
        f"Lab indicators present ({numbers} numbers, {keywords} keywords)",
        1.0 - 1 / (keywords + numbers + 1),
    )


def filter_documents(docs: List[ProcessedDocument]) -> FilteredBatch:
    batch = FilteredBatch()
    for doc in docs:
        verdict = should_process_document(doc)
        if verdict.should_process:
            batch.processable.append(doc)
        else:
            batch.skipped.append((doc, verdict.reason))
            logger.info({"event": "document_skipped", "file": doc.filename, "reason": verdict.reason})
    return batch


__all__ = [
    "DocumentError",
    "ProcessedDocument",
    "FilterResult",
    "FilteredBatch",
    "validate_upload",
    "extract_document",
    "should_process_document",
    "filter_documents",
    "check_image_quality",
]
