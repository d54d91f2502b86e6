# Path: knxproj/engine/extraction/constants.py
"""
Extraction Constants

Container-format constants used by the extractors.
"""

import re

ZIP_READ_MODE: str = 'r'
WRITE_BINARY_MODE: str = 'wb'

# General purpose bit 0: entry is encrypted
FLAG_ENCRYPTED: int = 0x1

# Container fingerprint for self-containment detection
FINGERPRINT_ALGORITHM: str = 'sha256'

# Windows drive-qualified names (C:foo, C:\foo)
DRIVE_PATTERN = re.compile(r'^[A-Za-z]:')

__all__ = [
    'ZIP_READ_MODE',
    'WRITE_BINARY_MODE',
    'FLAG_ENCRYPTED',
    'FINGERPRINT_ALGORITHM',
    'DRIVE_PATTERN',
]
