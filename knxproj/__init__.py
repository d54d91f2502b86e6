# Path: knxproj/__init__.py
"""
knxproj - ETS Project Export Reader

Reads ETS project and product exports (.knxproj, .knxprod) into a typed
object graph.

Pipeline:
    ArchiveExtractor -> Manifest -> FileClassifier -> TypedFileRef
    -> DocumentDecoder -> SchemaResolver -> strategy -> IdentifierCodec

Usage:
    from knxproj import open_export_archive

    with open_export_archive('house.knxproj', password='secret') as archive:
        for outcome in archive.decode_all():
            print(outcome.ref.name, outcome.document or outcome.error)
"""

__version__ = '0.1.0'

from knxproj.errors import (
    KnxProjError,
    ExtractionError,
    PathEscape,
    DecryptionFailed,
    RecursionLimitExceeded,
    ArchiveTooLarge,
    ArchiveReadError,
    ClassificationError,
    MalformedFileName,
    UnsupportedSchemaError,
    InvalidIdentifier,
    DocumentDecodeError,
)
from knxproj.identifiers import (
    FieldKind,
    CompositeID,
    IdentifierCodec,
    IdentifierShape,
    decompose,
    compose,
    fields_of,
    decode,
)
from knxproj.schema import SchemaVersion, SchemaResolver
from knxproj.engine.result import Manifest, ManifestEntry
from knxproj.engine.extraction import ArchiveExtractor, PasswordMap, static_password
from knxproj.engine.classifier import FileClassifier, FileRole, TypedFileRef, ClassifiedFiles
from knxproj.decoding import DocumentDecoder
from knxproj.engine.session import ExportArchive, DecodeOutcome, open_export_archive

__all__ = [
    '__version__',

    # Errors
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

    # Identifiers
    'FieldKind',
    'CompositeID',
    'IdentifierCodec',
    'IdentifierShape',
    'decompose',
    'compose',
    'fields_of',
    'decode',

    # Schema
    'SchemaVersion',
    'SchemaResolver',

    # Extraction / classification
    'Manifest',
    'ManifestEntry',
    'ArchiveExtractor',
    'PasswordMap',
    'static_password',
    'FileClassifier',
    'FileRole',
    'TypedFileRef',
    'ClassifiedFiles',

    # Decoding / session
    'DocumentDecoder',
    'ExportArchive',
    'DecodeOutcome',
    'open_export_archive',
]
