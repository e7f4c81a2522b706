"""
DocumentParser
==============
Turns an uploaded (base64) file into plain text for ingestion.

Only text formats are decoded. PDF and DOCX extraction is not provided.
"""

import base64
import binascii
import math
import re

from voicerag.utils.errors import UnsupportedDocumentError

UNSUPPORTED_TYPES = {
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

_CJK_RE = re.compile(r"[\u4e00-\u9fa5]")


def parse_upload(file_content: str, file_type: str) -> str:
    """
    Decode a base64 upload into UTF-8 text.

    :param file_content: base64-encoded file bytes
    :param file_type: MIME type reported by the client
    :raises UnsupportedDocumentError: binary formats, or content that is not base64
    """
    if file_type in UNSUPPORTED_TYPES:
        raise UnsupportedDocumentError(f"Unsupported file type: {file_type}")

    try:
        raw = base64.b64decode(file_content)
    except (binascii.Error, ValueError) as exc:
        raise UnsupportedDocumentError("Invalid base64 content") from exc
    return raw.decode("utf-8", errors="replace")


def estimate_token_count(text: str) -> int:
    """Rough estimate: ~2 characters per token for Chinese, ~4 for everything else."""
    chinese = len(_CJK_RE.findall(text))
    other = len(text) - chinese
    return math.ceil(chinese / 2 + other / 4)
