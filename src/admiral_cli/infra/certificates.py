"""Infrastructure: loading PEM certificate files for new credentials.

Rules
-----
* Only reads files; never writes or caches them.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
from pathlib import Path

from admiral_cli.exceptions import CertificateFileError

logger = logging.getLogger(__name__)

PEM_MARKER = "-----BEGIN"


def read_certificate(path: str) -> str:
    """Return the text of the certificate or key stored at *path*.

    Raises
    ------
    CertificateFileError
        When the file does not exist, cannot be read, or is empty.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise CertificateFileError(
            f"Certificate file not found: {path}",
            hint="Pass the path to a PEM encoded file.",
        )
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CertificateFileError(f"Cannot read certificate file {path}: {exc}") from exc

    if not content.strip():
        raise CertificateFileError(f"Certificate file is empty: {path}")
    if PEM_MARKER not in content:
        logger.warning("%s does not look like a PEM file", path)
    return content
