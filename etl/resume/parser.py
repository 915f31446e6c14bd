"""
Multi-format Resume Parser - Extract flat text from uploaded resume documents.

Supports:
- Plain Text (.txt): direct decode
- PDF (.pdf): page text via pypdf
- Word Documents (.docx): paragraphs and tables via python-docx
- Legacy Word Documents (.doc): antiword subprocess
- Rich Text (.rtf): control words stripped via striprtf

Every strategy returns cleaned text or raises one of the extraction errors
from core.exceptions, so callers never see decoder-specific error shapes.
Binary formats never return empty text: a document that decodes to nothing
raises DecodeError.
"""
import asyncio
import io
import logging
import re
import shutil
import subprocess
import tempfile
import unicodedata
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional

from docx import Document
from pypdf import PdfReader
from striprtf.striprtf import rtf_to_text

from core.config_loader import ExtractionConfig
from core.exceptions import DecodeError, ExtractionUnavailable, UnsupportedFormat
from core.utils import DocumentFingerprinter

logger = logging.getLogger(__name__)


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"
    TXT = "txt"
    RTF = "rtf"


MIME_TYPES: Dict[str, DocumentFormat] = {
    'application/pdf': DocumentFormat.PDF,
    'application/msword': DocumentFormat.DOC,
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': DocumentFormat.DOCX,
    'text/plain': DocumentFormat.TXT,
    'application/rtf': DocumentFormat.RTF,
    'text/rtf': DocumentFormat.RTF,
}


def normalize_format(tag: str) -> DocumentFormat:
    """Resolve a declared format tag (name, extension or MIME type).

    Raises:
        UnsupportedFormat: If the tag does not name a supported format
    """
    raw = (tag or '').strip().lower()
    if raw in MIME_TYPES:
        return MIME_TYPES[raw]
    try:
        return DocumentFormat(raw.lstrip('.'))
    except ValueError:
        supported = ', '.join(f.value for f in DocumentFormat)
        raise UnsupportedFormat(
            f"Unsupported file format: {tag!r}. Supported formats: {supported}"
        )


@dataclass(frozen=True)
class RawDocument:
    """An uploaded resume handed to the pipeline.

    Attributes:
        format: Declared format tag, trusted as given (not validated here so
            that an unsupported tag surfaces as a failed analysis)
        content: Raw bytes, when the upload is held in memory
        path: Path to the stored file, when the upload is on disk
        document_id: Identifier assigned by the storage collaborator
    """
    format: str
    content: Optional[bytes] = None
    path: Optional[str] = None
    document_id: Optional[str] = None

    def __post_init__(self):
        if (self.content is None) == (self.path is None):
            raise ValueError("RawDocument needs exactly one of content or path")

    @property
    def identity(self) -> str:
        """Stable key for the document: id, then path, then content hash."""
        if self.document_id:
            return self.document_id
        if self.path:
            return str(Path(self.path).resolve())
        return DocumentFingerprinter.calculate(self.content)

    def read_bytes(self) -> bytes:
        """Return the document bytes, reading from disk if needed.

        Raises:
            DecodeError: If the file cannot be read
        """
        if self.content is not None:
            return self.content
        try:
            return Path(self.path).read_bytes()
        except OSError as e:
            raise DecodeError(f"Could not read document {self.path}: {e}")


def clean_text(text: str, max_chars: int = 50000) -> str:
    """Normalize unicode (NFC), collapse excess whitespace and truncate."""
    if not text or not text.strip():
        return ""
    t = unicodedata.normalize("NFC", text)
    t = t.replace('\r\n', '\n').replace('\r', '\n')
    t = re.sub(r"[ \t\f\v]+", " ", t)
    t = re.sub(r" *\n *", "\n", t)
    t = re.sub(r"\n\s*\n\s*\n+", "\n\n", t)
    t = t.strip()
    if len(t) > max_chars:
        logger.warning(f"Extracted text truncated from {len(t)} to {max_chars} chars")
        t = t[:max_chars]
    return t


class ResumeParser:
    """Extract text from resumes in multiple formats.

    Each supported format maps to one strategy method. The parser only holds
    its extraction settings; it is safe to share between concurrent runs.
    """

    SUPPORTED_FORMATS = frozenset(f.value for f in DocumentFormat)

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self._strategies: Dict[DocumentFormat, Callable[[RawDocument], str]] = {
            DocumentFormat.TXT: self._parse_txt,
            DocumentFormat.PDF: self._parse_pdf,
            DocumentFormat.DOCX: self._parse_docx,
            DocumentFormat.DOC: self._parse_doc,
            DocumentFormat.RTF: self._parse_rtf,
        }

    def parse(self, document: RawDocument) -> str:
        """Extract flat text from a raw document.

        Args:
            document: The uploaded document and its declared format

        Returns:
            Cleaned extracted text

        Raises:
            UnsupportedFormat: If the declared format is not supported
            DecodeError: If the document cannot be decoded into text
            ExtractionUnavailable: If the decoder for the format is missing
        """
        fmt = normalize_format(document.format)
        logger.info(f"Extracting text from {document.path or 'in-memory document'} (format: {fmt.value})")

        text = self._strategies[fmt](document)
        cleaned = clean_text(text, self.config.max_chars)

        if fmt is not DocumentFormat.TXT and not cleaned:
            raise DecodeError(
                f"No text could be extracted from {fmt.value} document. "
                f"It may contain only scanned images."
            )

        logger.debug(f"Extracted {len(cleaned)} chars ({fmt.value})")
        return cleaned

    def _parse_txt(self, document: RawDocument) -> str:
        """Decode plain text; an empty file yields empty text."""
        data = document.read_bytes()
        encoding = self.config.txt_encoding
        if encoding.replace('-', '').lower() == 'utf8':
            encoding = 'utf-8-sig'
        try:
            return data.decode(encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"File is not valid {self.config.txt_encoding} text: {e}"
            )
        except LookupError as e:
            raise DecodeError(f"Unknown text encoding {self.config.txt_encoding!r}: {e}")

    def _parse_pdf(self, document: RawDocument) -> str:
        """Extract text from all pages of a PDF."""
        try:
            reader = PdfReader(io.BytesIO(document.read_bytes()))
            page_count = len(reader.pages)
        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(f"Failed to parse PDF file: {e}")

        if page_count == 0:
            raise DecodeError("PDF file has no pages")

        pages_text = []
        for i, page in enumerate(reader.pages):
            try:
                page_text = page.extract_text()
            except Exception as e:
                logger.warning(f"Failed to extract text from page {i + 1}: {e}")
                continue
            if page_text and page_text.strip():
                pages_text.append(page_text.strip())

        logger.debug(f"Parsed PDF ({page_count} pages, {len(pages_text)} with text)")
        return '\n\n'.join(pages_text)

    def _parse_docx(self, document: RawDocument) -> str:
        """Extract text from paragraphs and tables of a Word document."""
        try:
            doc = Document(io.BytesIO(document.read_bytes()))
        except DecodeError:
            raise
        except Exception as e:
            raise DecodeError(f"Failed to parse DOCX file: {e}")

        paragraphs = [para.text.strip() for para in doc.paragraphs if para.text.strip()]

        # Also extract from tables (common in resumes)
        for table in doc.tables:
            for row in table.rows:
                row_texts = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_texts:
                    paragraphs.append(' '.join(row_texts))

        return '\n'.join(paragraphs)

    def _parse_doc(self, document: RawDocument) -> str:
        """Extract text from a legacy Word document with antiword."""
        binary = shutil.which(self.config.antiword_path)
        if binary is None:
            raise ExtractionUnavailable(
                f"DOC decoder '{self.config.antiword_path}' is not installed or not on PATH"
            )

        if document.path is not None:
            return self._run_antiword(binary, document.path)

        with tempfile.NamedTemporaryFile(suffix='.doc') as tmp:
            tmp.write(document.content)
            tmp.flush()
            return self._run_antiword(binary, tmp.name)

    def _run_antiword(self, binary: str, path: str) -> str:
        try:
            result = subprocess.run(
                [binary, path],
                capture_output=True,
                timeout=self.config.antiword_timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise DecodeError(
                f"DOC decoding timed out after {self.config.antiword_timeout_seconds}s"
            )
        except OSError as e:
            raise ExtractionUnavailable(f"Could not run DOC decoder: {e}")

        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace').strip()
            raise DecodeError(f"Failed to parse DOC file: {stderr or f'exit code {result.returncode}'}")

        return result.stdout.decode('utf-8', errors='replace')

    def _parse_rtf(self, document: RawDocument) -> str:
        """Strip RTF control words, keeping the text runs."""
        # RTF is 7-bit with escapes for everything else, so latin-1 never fails
        raw = document.read_bytes().decode('latin-1')
        if not raw.lstrip().startswith('{\\rtf'):
            raise DecodeError("File is not an RTF document (missing {\\rtf header)")
        try:
            return rtf_to_text(raw)
        except Exception as e:
            raise DecodeError(f"Failed to parse RTF file: {e}")

    def is_supported(self, tag: str) -> bool:
        """Check if a format tag (name, extension or MIME type) is supported."""
        try:
            normalize_format(tag)
        except UnsupportedFormat:
            return False
        return True

    @classmethod
    def get_supported_formats(cls) -> list[str]:
        """Get list of supported format names (e.g., ['doc', 'docx', ...])."""
        return sorted(cls.SUPPORTED_FORMATS)


def extract_text(document: RawDocument, config: Optional[ExtractionConfig] = None) -> str:
    """Extract flat text from a document using a parser built from config."""
    return ResumeParser(config).parse(document)


async def extract_text_async(document: RawDocument, config: Optional[ExtractionConfig] = None) -> str:
    """Run extract_text in a worker thread so the event loop is not blocked."""
    return await asyncio.to_thread(extract_text, document, config)
