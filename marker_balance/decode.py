"""
Decoding of uploaded bytes into text for balance checking.

Rules:
- Detect encoding best-effort via charset-normalizer.
- A UTF-8 BOM is stripped so position 0 is the first real character.
- If decode fails, fall back to UTF-8, then to replacement characters, and report it.
- Newlines are left untouched; positions refer to the decoded text as-is.
"""

from __future__ import annotations

import logging
from typing import Tuple

from charset_normalizer import from_bytes

from .models import EncodingReport

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


def decode_text(raw: bytes) -> Tuple[str, EncodingReport]:
    detected = None

    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        decode_fallback = True
        logger.info("decode with %r failed, fell back to %s", detected, decode_used)

    return text, EncodingReport(
        detected=detected,
        decode_used=decode_used,
        decode_fallback=decode_fallback,
    )
