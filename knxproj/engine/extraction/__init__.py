# Path: knxproj/engine/extraction/__init__.py
"""
Extraction Module

Recursive, path-safe extraction of zip-family containers.

Use ArchiveExtractor for .knxproj / .knxprod / .zip containers.
Use the password resolvers for encrypted entries.
"""

from knxproj.engine.extraction.archive_handler import (
    ArchiveExtractor,
    extract,
    fingerprint,
    is_container,
)
from knxproj.engine.extraction.passwords import (
    PasswordMap,
    CachingPasswordResolver,
    static_password,
)

__all__ = [
    # Archive extraction
    'ArchiveExtractor',
    'extract',
    'fingerprint',
    'is_container',

    # Passwords
    'PasswordMap',
    'CachingPasswordResolver',
    'static_password',
]
