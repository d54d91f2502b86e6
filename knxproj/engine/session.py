# Path: knxproj/engine/session.py
"""
Export Archive Session

Ties extraction, classification and decoding together for one
.knxproj / .knxprod file and owns the temporary directory they use.

Lifecycle:
    open_export_archive()  create temp dir -> extract -> classify
    decode() / decode_all()
    close()                delete temp dir

A failure while opening removes the temporary directory before the
error propagates.
"""

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from knxproj.core.config_loader import ConfigLoader
from knxproj.core.logger import get_logger
from knxproj.constants import SESSION_DIR_PREFIX, LOG_INPUT, LOG_PROCESS, LOG_OUTPUT
from knxproj.decoding.document_decoder import DecodedDocument, DocumentDecoder
from knxproj.engine.classifier import ClassifiedFiles, FileClassifier, TypedFileRef
from knxproj.engine.extraction.archive_handler import ArchiveExtractor
from knxproj.engine.extraction.passwords import Password, PasswordResolver, static_password
from knxproj.engine.result import Manifest
from knxproj.errors import (
    DocumentDecodeError,
    InvalidIdentifier,
    KnxProjError,
    UnsupportedSchemaError,
)

logger = get_logger(__name__, 'engine')

# Errors scoped to a single document
DOCUMENT_ERRORS = (DocumentDecodeError, UnsupportedSchemaError, InvalidIdentifier)


@dataclass
class DecodeOutcome:
    """Result of decoding one document inside decode_all()."""
    ref: TypedFileRef
    document: Optional[DecodedDocument] = None
    error: Optional[KnxProjError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ExportArchive:
    """
    Handle to an opened export archive.

    Use as a context manager so the extracted tree is always removed:

        with open_export_archive('house.knxproj', password='secret') as archive:
            for project in archive.project_files:
                info = archive.decode(project)
                for installation in project.installation_files:
                    print(info.name, archive.decode(installation).installations)
    """

    def __init__(
        self,
        source_path: Path,
        work_dir: Path,
        manifest: Manifest,
        classified: ClassifiedFiles,
        decoder: Optional[DocumentDecoder] = None,
    ):
        self.source_path = source_path
        self.work_dir = work_dir
        self.manifest = manifest
        self.classified = classified
        self.decoder = decoder if decoder else DocumentDecoder()
        self._closed = False

    @property
    def project_files(self) -> list[TypedFileRef]:
        return self.classified.project_files

    @property
    def manufacturer_files(self) -> list[TypedFileRef]:
        return self.classified.manufacturer_files

    @property
    def hardware_files(self) -> list[TypedFileRef]:
        return self.classified.hardware_files

    @property
    def closed(self) -> bool:
        return self._closed

    def decode(self, ref: TypedFileRef) -> DecodedDocument:
        """Decode one classified document (see DocumentDecoder.decode)."""
        if self._closed:
            raise ValueError(f"Export archive {self.source_path.name} is closed")
        return self.decoder.decode(ref)

    def decode_all(self) -> list[DecodeOutcome]:
        """
        Decode every classified document.

        A failing document is recorded in its outcome and does not stop
        its siblings.
        """
        outcomes = []
        for ref in self.classified.all_refs():
            try:
                outcomes.append(DecodeOutcome(ref=ref, document=self.decode(ref)))
            except DOCUMENT_ERRORS as e:
                logger.warning(f"{LOG_PROCESS} Failed to decode {ref.name}: {e}")
                outcomes.append(DecodeOutcome(ref=ref, error=e))

        failed = sum(1 for outcome in outcomes if not outcome.ok)
        logger.info(f"{LOG_OUTPUT} Decoded {len(outcomes) - failed}/{len(outcomes)} documents")
        return outcomes

    def close(self) -> None:
        """Delete the extracted tree. Safe to call more than once."""
        if self._closed:
            return
        shutil.rmtree(self.work_dir, ignore_errors=True)
        self._closed = True
        logger.debug(f"{LOG_PROCESS} Removed {self.work_dir}")

    def __enter__(self) -> 'ExportArchive':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<ExportArchive {self.source_path.name} ({state}, {len(self.manifest)} files)>"


def open_export_archive(
    path: Union[str, Path],
    password: Optional[Password] = None,
    password_resolver: Optional[PasswordResolver] = None,
    work_dir: Optional[Union[str, Path]] = None,
    config: Optional[ConfigLoader] = None,
) -> ExportArchive:
    """
    Open an export archive.

    Args:
        path: .knxproj / .knxprod file
        password: Password for every encrypted entry
        password_resolver: Per-entry password callable (exclusive with password)
        work_dir: Parent for the temporary extraction directory
            (default: configured temp_dir, else the system temp directory)
        config: Optional ConfigLoader instance

    Returns:
        Open ExportArchive

    Raises:
        ValueError: Both password and password_resolver given
        ExtractionError: Extraction failed
        ClassificationError: Classification failed
    """
    if password is not None and password_resolver is not None:
        raise ValueError("Pass either password or password_resolver, not both")

    config = config if config else ConfigLoader()
    source_path = Path(path)
    resolver = password_resolver
    if resolver is None and password is not None:
        resolver = static_password(password)

    parent = Path(work_dir) if work_dir else config.get('temp_dir')
    if parent:
        parent.mkdir(parents=True, exist_ok=True)
    directory = Path(tempfile.mkdtemp(prefix=SESSION_DIR_PREFIX, dir=parent))

    logger.info(f"{LOG_INPUT} Opening export archive {source_path.name}")

    try:
        manifest = ArchiveExtractor(config).extract(source_path, directory, resolver)
        classified = FileClassifier().classify(manifest)
    except BaseException:
        shutil.rmtree(directory, ignore_errors=True)
        raise

    return ExportArchive(source_path, directory, manifest, classified)


__all__ = ['ExportArchive', 'DecodeOutcome', 'open_export_archive']
