"""Text extraction for uploaded files."""

import asyncio
import io
import logging
from typing import List, Optional

import docx
from docx.table import Table
from pypdf import PdfReader

from vectorflow.core.exceptions import EmptyContentError, ExtractionError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


class TextExtractor:
    """Turns raw upload bytes into plain text."""

    async def extract(
        self, content: bytes, filename: str, mime_type: Optional[str] = None
    ) -> str:
        """
        Extract plain text from a file.

        Args:
            content: Raw file bytes.
            filename: Declared file name.
            mime_type: Declared MIME type, if any.

        Returns:
            Extracted text.

        Raises:
            EmptyContentError: If the extracted text is only whitespace.
            ExtractionError: If the file cannot be parsed.
        """
        mime_type = (mime_type or "").lower()
        name = filename.lower()

        try:
            if mime_type == PDF_MIME_TYPE or name.endswith(".pdf"):
                text = await self._extract_pdf(content)
            elif mime_type == DOCX_MIME_TYPE or name.endswith(".docx"):
                text = await self._extract_docx(content)
            else:
                text = self._decode(content)
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Failed to extract text from {filename}: {str(e)}") from e

        if not text.strip():
            raise EmptyContentError()

        logger.info(f"Extracted {len(text)} characters from {filename}")
        return text

    async def _extract_pdf(self, content: bytes) -> str:
        """
        Concatenate page text in page order.

        Each page's fragments are joined with a space and every page is
        terminated by a newline. Pages are read one after another.
        """
        reader = await asyncio.to_thread(PdfReader, io.BytesIO(content))
        full_text = ""
        for page in reader.pages:
            page_text = await asyncio.to_thread(self._page_text, page)
            full_text += page_text + "\n"
        return full_text

    @staticmethod
    def _page_text(page) -> str:
        fragments: List[str] = []

        def collect(text, cm, tm, font_dict, font_size):
            if text and text.strip():
                fragments.append(text.strip())

        extracted = page.extract_text(visitor_text=collect) or ""
        if not fragments:
            return extracted.strip()
        return " ".join(fragments)

    async def _extract_docx(self, content: bytes) -> str:
        def extract() -> str:
            document = docx.Document(io.BytesIO(content))
            return "\n".join(self._block_lines(document))

        return await asyncio.to_thread(extract)

    @classmethod
    def _block_lines(cls, container) -> List[str]:
        """Paragraph and table cell text in document order."""
        lines: List[str] = []
        for block in container.iter_inner_content():
            if isinstance(block, Table):
                for row in block.rows:
                    seen = []
                    for cell in row.cells:
                        # Merged cells repeat across the grid
                        if cell._tc in seen:
                            continue
                        seen.append(cell._tc)
                        lines.extend(cls._block_lines(cell))
            else:
                lines.append(block.text)
        return lines

    @staticmethod
    def _decode(content: bytes) -> str:
        return content.decode("utf-8", errors="replace")
