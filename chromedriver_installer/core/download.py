"""
Remote artifact access: URL templates, response headers and streaming downloads.

This module provides:
- Literal ``{{key}}`` template substitution for release URLs
- Headers-only requests parsed into a plain name/value mapping
- Extraction of the entity tag (ETag) used as integrity tag
- Streaming downloads with an incremental checksum
"""

import hashlib
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

import requests
from requests.exceptions import RequestException

from chromedriver_installer.core.exceptions import (
    DownloadError,
    FilesystemError,
    MissingIntegrityHeaderError,
)

logger = logging.getLogger(__name__)

INTEGRITY_TAG_HEADER = "ETag"
DOWNLOAD_URL_TEMPLATE = "{{base}}/{{version}}/{{file}}"


class StreamingHasher:
    """Compute hash incrementally for streaming downloads."""

    def __init__(self, algorithm: str = "md5"):
        """
        Initialize streaming hasher.

        Args:
            algorithm: Hash algorithm ('md5', 'sha256', 'sha512')

        Raises:
            ValueError: If algorithm is not supported
        """
        self.algorithm = algorithm.lower()

        if self.algorithm == "md5":
            # Google Storage ETags are MD5 digests of the object
            self.hasher = hashlib.md5()
        elif self.algorithm == "sha256":
            self.hasher = hashlib.sha256()
        elif self.algorithm == "sha512":
            self.hasher = hashlib.sha512()
        else:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    def update(self, data: bytes):
        """Add data to hash computation."""
        self.hasher.update(data)

    def finalize(self) -> str:
        """Get final hash value as hex string."""
        return self.hasher.hexdigest()


def substitute(template: str, mapping: Mapping[str, str]) -> str:
    """
    Replace ``{{key}}`` placeholders in a template.

    Replacement is literal and single-pass: values are not escaped, values
    containing placeholders are not expanded again, and placeholders without
    a matching key are left as they are.

    Args:
        template: Template string
        mapping: Placeholder names to values

    Returns:
        Substituted string

    Example:
        >>> substitute("{{base}}/{{version}}/{{file}}", {"base": "https://x", "version": "2.41"})
        'https://x/2.41/{{file}}'
    """
    if not mapping:
        return template

    placeholders = {f"{{{{{name}}}}}": str(value) for name, value in mapping.items()}
    pattern = re.compile("|".join(re.escape(p) for p in placeholders))
    return pattern.sub(lambda match: placeholders[match.group(0)], template)


def parse_header_lines(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse raw ``Name: Value`` header lines into a mapping.

    The first colon separates name from value. Names keep their case.
    Values are stripped of surrounding spaces and colons. A line without a
    colon (such as the status line) maps to an empty value.

    Args:
        lines: Header lines

    Returns:
        Header names to values; later duplicates win
    """
    headers = {}
    for line in lines:
        name, _, value = line.partition(":")
        headers[name] = value.strip(": ")
    return headers


def fetch_headers(url: str, session: Optional[requests.Session] = None) -> Dict[str, str]:
    """
    Fetch only the response headers for a URL.

    Args:
        url: URL to query
        session: Optional requests session

    Returns:
        Header names to values

    Raises:
        DownloadError: If the request fails
    """
    http = session or requests

    logger.debug(f"Fetching headers for {url}")

    try:
        response = http.head(url, allow_redirects=True)
        response.raise_for_status()
    except RequestException as e:
        raise DownloadError(f"Failed to fetch headers from {url}: {e}") from e

    return parse_header_lines(
        f"{name}: {value}" for name, value in response.headers.items()
    )


def get_integrity_tag(headers: Mapping[str, str]) -> str:
    """
    Extract the integrity tag from response headers.

    Args:
        headers: Parsed response headers

    Returns:
        Entity tag without surrounding quotes and spaces

    Raises:
        MissingIntegrityHeaderError: If no ETag header is present
    """
    if INTEGRITY_TAG_HEADER not in headers:
        raise MissingIntegrityHeaderError(
            "Failed to acquire entity tag (ETag) from Google Storage API headers"
        )
    return headers[INTEGRITY_TAG_HEADER].strip('" ')


def download_file(
    url: str,
    destination: Path,
    session: Optional[requests.Session] = None,
    chunk_size: int = 8192,
    algorithm: str = "md5",
) -> str:
    """
    Stream a remote file to disk and checksum it on the way.

    The file is written directly at ``destination``. An interrupted transfer
    may leave a partial file behind.

    Args:
        url: URL to download from
        destination: Local path to write to
        session: Optional requests session
        chunk_size: Bytes per read
        algorithm: Checksum algorithm

    Returns:
        Hex digest of the downloaded bytes

    Raises:
        DownloadError: If the request fails
        FilesystemError: If the destination cannot be written
    """
    http = session or requests
    destination = Path(destination)
    hasher = StreamingHasher(algorithm)

    logger.debug(f"Downloading from {url}")

    try:
        with http.get(url, stream=True, allow_redirects=True) as response:
            response.raise_for_status()
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        f.write(chunk)
                        hasher.update(chunk)
    except RequestException as e:
        raise DownloadError(f"Failed to download {url}: {e}") from e
    except OSError as e:
        raise FilesystemError(f"Failed to write {destination}: {e}") from e

    logger.debug(f"Download complete: {destination}")
    return hasher.finalize()


__all__ = [
    "INTEGRITY_TAG_HEADER",
    "DOWNLOAD_URL_TEMPLATE",
    "StreamingHasher",
    "substitute",
    "parse_header_lines",
    "fetch_headers",
    "get_integrity_tag",
    "download_file",
]
