"""
Document text extraction task.

Converts raw bytes into plain text based on the declared MIME type:
text/* is decoded as UTF-8 with bad bytes replaced, JSON is pretty-printed,
PDFs are read with pypdf.

Dependencies: pypdf
System role: Second stage of document ingestion pipeline
"""

import io
import json
import logging

from pypdf import PdfReader

from knowledge_backend.core.exceptions import ParsingError, UnsupportedFormatError

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a valid JSON value")


class ParsingTask:
    """Extract plain text from document bytes."""

    def extract(
        self,
        content: bytes,
        mime_type: str | None,
        filename: str | None = None,
    ) -> str:
        """
        Extract text from document bytes.

        MIME parameters such as ``; charset=utf-8`` are ignored and the type
        is compared case-insensitively.

        Args:
            content: Raw document bytes
            mime_type: Effective MIME type
            filename: Original filename, consulted for the .pdf extension

        Returns:
            str: Extracted text (may be blank)

        Raises:
            ParsingError: Malformed JSON or unreadable PDF
            UnsupportedFormatError: No extractor for the MIME type
        """
        essence = (mime_type or "").split(";", 1)[0].strip().lower()

        if essence.startswith("text/"):
            return self._decode(content)

        if essence == "application/json":
            return self._extract_json(content)

        if essence == "application/pdf" or (filename or "").lower().endswith(".pdf"):
            return self._extract_pdf(content)

        raise UnsupportedFormatError(mime_type or "unknown", filename)

    def _decode(self, content: bytes) -> str:
        # Invalid sequences become U+FFFD
        return content.decode("utf-8-sig", errors="replace")

    def _extract_json(self, content: bytes) -> str:
        raw = self._decode(content)
        try:
            parsed = json.loads(raw, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ParsingError(
                f"Failed to parse JSON document: {e.msg} (line {e.lineno}, column {e.colno})",
                file_type="application/json",
            ) from e
        except ValueError as e:
            raise ParsingError(
                f"Failed to parse JSON document: {e}",
                file_type="application/json",
            ) from e
        return json.dumps(parsed, indent=2, ensure_ascii=False)

    def _extract_pdf(self, content: bytes) -> str:
        try:
            reader = PdfReader(io.BytesIO(content))
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            raise ParsingError(
                f"Failed to parse PDF: {e}",
                file_type="application/pdf",
            ) from e

        logger.info(
            f"{__name__}:_extract_pdf - Extracted PDF text",
            extra={"page_count": len(pages)},
        )
        return "\n".join(pages)
