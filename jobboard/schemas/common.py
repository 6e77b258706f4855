import base64
import binascii
import re
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel

from jobboard.config import settings

PHONE_PATTERN = re.compile(r"^[+\d()\-\s]{7,20}$")
PIN_CODE_PATTERN = re.compile(r"^\d{6}$")
MONTH_YEAR_PATTERN = re.compile(r"^(0[1-9]|1[0-2])-\d{4}$")
PDF_DATA_URI_PREFIX = "data:application/pdf;base64,"


class ActionResult(BaseModel):
    """Success envelope shared by every endpoint."""

    success: bool = True
    message: str | None = None
    data: Any = None


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _looks_like_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc) and " " not in value


def normalize_url(value: str | None) -> str | None:
    """Prefix www./bare-domain inputs with https:// and require a parseable URL."""
    value = blank_to_none(value)
    if value is None:
        return None
    value = value.strip()
    if not value.startswith(("http://", "https://")) and "." in value:
        value = f"https://{value}"
    if not _looks_like_url(value):
        raise ValueError("Please enter a valid URL (e.g., https://example.com or www.example.com).")
    return value


def validate_image_ref(value: str | None) -> str | None:
    value = blank_to_none(value)
    if value is None:
        return None
    if not value.startswith(("data:image/", "http://", "https://")):
        raise ValueError("Invalid image data or URL.")
    return value


def pdf_data_uri_size(value: str) -> int:
    """Decoded byte size of a base64 PDF data URI."""
    payload = value[len(PDF_DATA_URI_PREFIX):]
    try:
        return len(base64.b64decode(payload, validate=True))
    except (binascii.Error, ValueError) as e:
        raise ValueError("Invalid PDF data.") from e


def validate_url_or_pdf(value: str | None) -> str | None:
    """Accept a PDF data URI within the upload limit, or a URL."""
    value = blank_to_none(value)
    if value is None:
        return None
    if value.startswith(PDF_DATA_URI_PREFIX):
        if pdf_data_uri_size(value) > settings.max_resume_upload_kb * 1024:
            raise ValueError(f"PDF uploads must be {settings.max_resume_upload_kb}KB or smaller.")
        return value
    try:
        return normalize_url(value)
    except ValueError as e:
        raise ValueError(
            "Invalid URL. Please ensure it starts with http(s):// or www., "
            "or is a valid PDF upload."
        ) from e


def validate_phone(value: str | None) -> str | None:
    value = blank_to_none(value)
    if value is not None and not PHONE_PATTERN.match(value):
        raise ValueError("Please enter a valid contact number (7-20 digits, can include +, -, (), spaces).")
    return value
