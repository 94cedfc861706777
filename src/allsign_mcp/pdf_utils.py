#!/usr/bin/env python3
"""
PDF/binary utilities for uploads and downloads.
Resolves file names, encodes content and fetches source files.
"""
import base64
import logging
import re
from typing import Optional, Tuple
from urllib.parse import unquote, urlparse

from .errors import ParameterError
from .models import DEFAULT_MIME_TYPE, BinaryData
from .transport import RequestSpec, Transport

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_NAME = "document.pdf"

_FILENAME_PATTERN = re.compile(r'filename="?([^";\n]+)"?')


def encode_base64(content: bytes) -> str:
    return base64.b64encode(content).decode("utf-8")


def filename_from_content_disposition(header: Optional[str]) -> Optional[str]:
    """
    Extract the file name from a Content-Disposition header.

    Args:
        header: Raw header value, e.g. 'attachment; filename="signed.pdf"'

    Returns:
        The file name, or None if the header is missing or has none
    """
    if not header:
        return None
    match = _FILENAME_PATTERN.search(header)
    if match and match.group(1):
        return match.group(1)
    return None


def filename_from_url(url: str) -> Optional[str]:
    path = urlparse(url).path
    name = unquote(path.rsplit("/", 1)[-1]) if path else ""
    return name or None


def pdf_document_name(document_name: str, source_name: Optional[str]) -> str:
    """
    Name for an uploaded document.

    The source file name is used verbatim when it already ends in .pdf,
    otherwise "<document_name>.pdf".
    """
    if source_name and source_name.lower().endswith(".pdf"):
        return source_name
    return f"{document_name}.pdf"


def fetch_source_file(file_url: str, transport: Transport) -> BinaryData:
    """
    Download a source file in binary mode.

    Args:
        file_url: http(s) URL of the file
        transport: Transport used for the download

    Returns:
        BinaryData with the content, resolved file name and MIME type

    Raises:
        ParameterError: If the URL is not http(s)
        TransportError: If the download fails
    """
    parsed_url = urlparse(file_url)
    if parsed_url.scheme not in ("http", "https"):
        raise ParameterError(f"Unsupported URL scheme: {parsed_url.scheme or '(none)'}")

    logger.info(f"Downloading source file from URL: {file_url}")
    response = transport.request(RequestSpec(method="GET", url=file_url, binary=True))

    file_name = (
        filename_from_content_disposition(response.header("content-disposition"))
        or filename_from_url(file_url)
    )
    mime_type = response.header("content-type") or DEFAULT_MIME_TYPE
    content = response.body or b""

    logger.info(f"Source file downloaded: {file_name} ({len(content)} bytes)")
    return BinaryData(data=content, file_name=file_name, mime_type=mime_type)


def download_attachment(response_body: bytes, content_disposition: Optional[str], fallback_name: str,
                        content_type: Optional[str]) -> Tuple[str, BinaryData]:
    """Package a downloaded document as a named attachment."""
    file_name = filename_from_content_disposition(content_disposition) or fallback_name
    binary = BinaryData(
        data=response_body or b"",
        file_name=file_name,
        mime_type=content_type or DEFAULT_MIME_TYPE,
    )
    return file_name, binary
