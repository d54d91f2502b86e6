# Path: knxproj/errors.py
"""
knxproj Errors

Structured exceptions raised by extraction, classification and decoding.
Every error carries the offending path, identifier or namespace verbatim.

Propagation:
- ExtractionError subclasses abort the whole extraction
- MalformedFileName aborts the whole classification
- UnsupportedSchemaError, DocumentDecodeError: one document
- InvalidIdentifier: one field (callers decide whether the document fails)
"""

from pathlib import Path
from typing import Iterable, Optional, Union


class KnxProjError(Exception):
    """Base class for all knxproj errors."""
    pass


# ============================================================================
# EXTRACTION
# ============================================================================


class ExtractionError(KnxProjError):
    """Fatal error while extracting a container."""
    pass


class PathEscape(ExtractionError):
    """Archive entry would be written outside the destination directory."""

    def __init__(self, entry_path: str, destination_dir: Union[str, Path], reason: str = 'escapes destination'):
        self.entry_path = entry_path
        self.destination_dir = Path(destination_dir)
        self.reason = reason
        super().__init__(
            f"Unsafe archive entry '{entry_path}' ({reason}) for destination {self.destination_dir}"
        )


class DecryptionFailed(ExtractionError):
    """Encrypted entry could not be decrypted."""

    def __init__(self, entry_path: str, container: Union[str, Path], reason: str = ''):
        self.entry_path = entry_path
        self.container = Path(container)
        self.reason = reason
        message = f"Cannot decrypt entry '{entry_path}' in {self.container.name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RecursionLimitExceeded(ExtractionError):
    """Nested containers are too deep or contain themselves."""

    def __init__(self, container: Union[str, Path], depth: int, limit: int, reason: str = ''):
        self.container = Path(container)
        self.depth = depth
        self.limit = limit
        self.reason = reason or f"depth {depth} exceeds limit {limit}"
        super().__init__(f"Refusing to expand nested container {self.container}: {self.reason}")


class ArchiveTooLarge(ExtractionError):
    """Uncompressed container contents exceed the configured maximum."""

    def __init__(self, container: Union[str, Path], total_size: int, limit: int):
        self.container = Path(container)
        self.total_size = total_size
        self.limit = limit
        super().__init__(
            f"Container {self.container.name} too large: {total_size} bytes (limit {limit})"
        )


class ArchiveReadError(ExtractionError):
    """Container or entry could not be read or written."""

    def __init__(self, container: Union[str, Path], reason: str, entry_path: Optional[str] = None):
        self.container = Path(container)
        self.entry_path = entry_path
        self.reason = reason
        where = f"entry '{entry_path}' in {self.container}" if entry_path else str(self.container)
        super().__init__(f"Cannot read {where}: {reason}")


# ============================================================================
# CLASSIFICATION
# ============================================================================


class ClassificationError(KnxProjError):
    """Manifest could not be classified."""
    pass


class MalformedFileName(ClassificationError):
    """File matches a known naming pattern but violates its convention."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Malformed file name '{self.path.name}' ({self.path}): {reason}")


# ============================================================================
# DECODING
# ============================================================================


class UnsupportedSchemaError(KnxProjError):
    """Document declares a namespace not in the schema table."""

    def __init__(self, namespace_uri: Optional[str], path: Optional[Union[str, Path]] = None):
        self.namespace_uri = namespace_uri
        self.path = Path(path) if path else None
        message = f"Unsupported schema namespace '{namespace_uri}'"
        if self.path:
            message = f"{message} in {self.path}"
        super().__init__(message)


class InvalidIdentifier(KnxProjError):
    """Composite identifier is missing required components."""

    def __init__(self, raw: str, missing_kinds: Iterable, context: str = ''):
        self.raw = raw
        self.missing_kinds = tuple(missing_kinds)
        self.context = context
        missing = ', '.join(getattr(kind, 'value', str(kind)) for kind in self.missing_kinds)
        label = f"{context} identifier" if context else "Identifier"
        super().__init__(f"Invalid {label} '{raw}': missing {missing}")


class DocumentDecodeError(KnxProjError):
    """Document could not be parsed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot decode {self.path}: {reason}")


__all__ = [
    'KnxProjError',
    'ExtractionError',
    'PathEscape',
    'DecryptionFailed',
    'RecursionLimitExceeded',
    'ArchiveTooLarge',
    'ArchiveReadError',
    'ClassificationError',
    'MalformedFileName',
    'UnsupportedSchemaError',
    'InvalidIdentifier',
    'DocumentDecodeError',
]
