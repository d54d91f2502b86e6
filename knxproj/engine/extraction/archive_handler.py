# Path: knxproj/engine/extraction/archive_handler.py
"""
Archive Extractor

Recursive, path-safe extraction of zip-family containers
(.knxproj, .knxprod, .zip), including AES and ZipCrypto encrypted entries.

Architecture:
- Explicit FIFO worklist with a depth counter (no call-stack recursion)
- Every entry is validated before anything is written for it
- Entries streamed in chunks to a partial file, renamed when complete
- Nested containers expanded into <dir>/<name minus extension>

CRITICAL PRINCIPLE: Fail closed.
An unsafe entry, an undecryptable entry or a runaway nesting aborts the
whole extraction. Files already written stay on disk; the caller owns
the destination tree.
"""

import hashlib
import os
import posixpath
import shutil
import stat
import time
import zipfile
import zlib
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pyzipper

from knxproj.core.logger import get_logger
from knxproj.core.config_loader import ConfigLoader
from knxproj.engine.result import ArchiveEntry, Manifest, ManifestEntry
from knxproj.engine.extraction.passwords import CachingPasswordResolver, PasswordResolver
from knxproj.errors import (
    ArchiveReadError,
    ArchiveTooLarge,
    DecryptionFailed,
    PathEscape,
    RecursionLimitExceeded,
)
from knxproj.constants import (
    CONTAINER_EXTENSIONS,
    DEFAULT_CHUNK_SIZE,
    MAX_ARCHIVE_SIZE,
    MAX_RECURSION_DEPTH,
    PARTIAL_FILE_SUFFIX,
    PROCESSABLE_EXTENSIONS,
    LOG_INPUT,
    LOG_PROCESS,
    LOG_OUTPUT,
)
from knxproj.engine.extraction.constants import (
    DRIVE_PATTERN,
    FINGERPRINT_ALGORITHM,
    FLAG_ENCRYPTED,
    WRITE_BINARY_MODE,
    ZIP_READ_MODE,
)

logger = get_logger(__name__, 'extraction')

# pyzipper ships its own zipfile copy with its own exception classes
BAD_ZIP_ERRORS = (zipfile.BadZipFile, pyzipper.BadZipFile, zipfile.LargeZipFile, pyzipper.LargeZipFile)
ENTRY_READ_ERRORS = BAD_ZIP_ERRORS + (RuntimeError, zlib.error, EOFError)


def fingerprint(path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """SHA-256 hex digest of a file's contents."""
    digest = hashlib.new(FINGERPRINT_ALGORITHM)
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(chunk_size), b''):
            digest.update(chunk)
    return digest.hexdigest()


def is_container(path: Union[str, Path]) -> bool:
    """True if the file name carries a container extension."""
    return Path(path).suffix.lower() in CONTAINER_EXTENSIONS


@dataclass(frozen=True)
class _Job:
    """One container waiting in the worklist."""
    container: Path
    destination: Path
    depth: int
    lineage: tuple = ()


class ArchiveExtractor:
    """
    Recursive container extractor.

    Holds only configuration; every extract() call builds its own
    worklist and password cache, so one extractor may serve several
    extractions into distinct destinations.

    Example:
        extractor = ArchiveExtractor()
        manifest = extractor.extract(Path('house.knxproj'), Path('/tmp/house'),
                                     password_resolver=static_password('secret'))
        for path in manifest:
            print(path)
        manifest.cleanup()
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        max_recursion_depth: Optional[int] = None,
        max_archive_size: Optional[int] = None,
        chunk_size: Optional[int] = None,
    ):
        """
        Initialize extractor.

        Args:
            config: Optional ConfigLoader instance
            max_recursion_depth: Override configured nesting limit
            max_archive_size: Override configured uncompressed size limit per container
            chunk_size: Override configured streaming chunk size
        """
        self.config = config if config else ConfigLoader()
        self.max_recursion_depth = self._pick(max_recursion_depth, 'max_recursion_depth', MAX_RECURSION_DEPTH)
        self.max_archive_size = self._pick(max_archive_size, 'max_archive_size', MAX_ARCHIVE_SIZE)
        self.chunk_size = self._pick(chunk_size, 'chunk_size', DEFAULT_CHUNK_SIZE)

        if self.max_recursion_depth < 0:
            raise ValueError(f"max_recursion_depth must not be negative: {self.max_recursion_depth}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {self.chunk_size}")

    def _pick(self, override: Optional[int], key: str, default: int) -> int:
        if override is not None:
            return override
        return self.config.get(key, default)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract(
        self,
        source_path: Union[str, Path],
        destination_dir: Union[str, Path],
        password_resolver: Optional[PasswordResolver] = None,
    ) -> Manifest:
        """
        Extract a container and every nested container inside it.

        Args:
            source_path: Top-level container (.knxproj, .knxprod, .zip)
            destination_dir: Directory receiving the extracted tree
            password_resolver: Callable mapping an entry path to its password

        Returns:
            Manifest of extracted files in extraction order

        Raises:
            PathEscape: Entry would land outside its destination
            DecryptionFailed: Encrypted entry cannot be decrypted
            RecursionLimitExceeded: Nesting too deep or self-containing
            ArchiveTooLarge: Container expands beyond the size limit
            ArchiveReadError: Container or entry unreadable
        """
        source_path = Path(source_path)
        destination_dir = Path(destination_dir).absolute()

        logger.info(f"{LOG_INPUT} Extracting container: {source_path.name} -> {destination_dir}")
        start_time = time.time()

        if not source_path.is_file():
            raise ArchiveReadError(source_path, 'container not found')

        passwords = CachingPasswordResolver(password_resolver)
        manifest = Manifest(root=destination_dir)
        worklist = deque([_Job(source_path, destination_dir, 0)])

        while worklist:
            job = worklist.popleft()
            digest = self._check_nesting(job)
            nested = self._extract_container(job, manifest, passwords)

            for container in nested:
                worklist.append(_Job(
                    container=container,
                    destination=container.parent / container.stem,
                    depth=job.depth + 1,
                    lineage=job.lineage + (digest,),
                ))

        logger.info(
            f"{LOG_OUTPUT} Extraction complete: {len(manifest)} files, "
            f"{len(manifest.containers)} nested containers in {time.time() - start_time:.2f}s"
        )
        return manifest

    # ------------------------------------------------------------------
    # Worklist
    # ------------------------------------------------------------------

    def _check_nesting(self, job: _Job) -> str:
        """Enforce depth limit and self-containment; returns container digest."""
        if job.depth > self.max_recursion_depth:
            logger.error(f"{LOG_OUTPUT} Nesting depth {job.depth} exceeds {self.max_recursion_depth}")
            raise RecursionLimitExceeded(job.container, job.depth, self.max_recursion_depth)

        try:
            digest = fingerprint(job.container, self.chunk_size)
        except OSError as e:
            raise ArchiveReadError(job.container, str(e)) from e

        if digest in job.lineage:
            logger.error(f"{LOG_OUTPUT} Container contains itself: {job.container.name}")
            raise RecursionLimitExceeded(
                job.container, job.depth, self.max_recursion_depth,
                reason='container is identical to one of its ancestors',
            )
        return digest

    def _extract_container(
        self,
        job: _Job,
        manifest: Manifest,
        passwords: CachingPasswordResolver,
    ) -> list[Path]:
        """
        Extract one container level.

        Returns:
            Paths of nested containers written during this pass
        """
        logger.info(f"{LOG_PROCESS} Container {job.container.name} (depth {job.depth})")

        try:
            archive = pyzipper.AESZipFile(job.container, ZIP_READ_MODE)
        except BAD_ZIP_ERRORS as e:
            raise ArchiveReadError(job.container, f"invalid zip container: {e}") from e
        except OSError as e:
            raise ArchiveReadError(job.container, str(e)) from e

        nested: list[Path] = []
        with archive:
            members = [(info, self._entry_from_info(info)) for info in archive.infolist()]

            # Validate every entry before writing any of them
            targets = [self._safe_destination(entry, job.destination) for _, entry in members]

            # Skipped entries are never written, so they do not count
            total_size = sum(
                entry.size
                for (_, entry), target in zip(members, targets)
                if not entry.is_dir and target.suffix.lower() in PROCESSABLE_EXTENSIONS
            )
            if total_size > self.max_archive_size:
                raise ArchiveTooLarge(job.container, total_size, self.max_archive_size)

            job.destination.mkdir(parents=True, exist_ok=True)

            for (info, entry), target in zip(members, targets):
                if entry.is_dir:
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                if target.suffix.lower() not in PROCESSABLE_EXTENSIONS:
                    logger.debug(f"{LOG_PROCESS} Skipping {entry.path}")
                    continue

                self._write_entry(archive, info, entry, target, job.container, passwords)

                nested_container = is_container(target)
                manifest.entries.append(ManifestEntry(
                    path=target,
                    source_name=entry.path,
                    depth=job.depth,
                    is_container=nested_container,
                ))
                if nested_container:
                    nested.append(target)

        return nested

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    @staticmethod
    def _entry_from_info(info: zipfile.ZipInfo) -> ArchiveEntry:
        mode = info.external_attr >> 16
        return ArchiveEntry(
            path=info.filename,
            size=info.file_size,
            is_dir=info.is_dir(),
            encrypted=bool(info.flag_bits & FLAG_ENCRYPTED),
            is_symlink=stat.S_ISLNK(mode),
        )

    def _safe_destination(self, entry: ArchiveEntry, destination: Path) -> Path:
        """
        Compute destination of an entry, rejecting anything that escapes.

        Raises:
            PathEscape: Absolute, drive-qualified, parent-traversing or symlink entry
        """
        name = entry.path.replace('\\', '/')

        if entry.is_symlink:
            reason = 'symbolic link entry'
        elif name.startswith('/'):
            reason = 'absolute path'
        elif DRIVE_PATTERN.match(name):
            reason = 'drive-qualified path'
        else:
            reason = None

        if reason is None:
            normalized = posixpath.normpath(name)
            if normalized == '..' or normalized.startswith('../'):
                reason = 'parent directory traversal'
            elif normalized == '.' and not entry.is_dir:
                # A file cannot take the place of the destination itself
                reason = 'resolves to destination root'

        if reason:
            logger.error(f"{LOG_OUTPUT} Unsafe entry {entry.path!r}: {reason}")
            raise PathEscape(entry.path, destination, reason)

        target = destination.joinpath(*[part for part in normalized.split('/') if part not in ('', '.')])

        if os.path.commonpath([str(destination), str(target)]) != str(destination):
            raise PathEscape(entry.path, destination)

        # Pre-existing symlinks inside the destination
        try:
            target.resolve().relative_to(destination.resolve())
        except ValueError:
            raise PathEscape(entry.path, destination, 'resolves outside destination') from None

        return target

    def _write_entry(
        self,
        archive: pyzipper.AESZipFile,
        info: zipfile.ZipInfo,
        entry: ArchiveEntry,
        target: Path,
        container: Path,
        passwords: CachingPasswordResolver,
    ) -> None:
        """Stream one entry to <target>.part, then rename into place."""
        password = None
        if entry.encrypted:
            password = passwords(entry.path)
            if password is None:
                raise DecryptionFailed(entry.path, container, 'no password available')

        target.parent.mkdir(parents=True, exist_ok=True)
        partial = target.with_name(target.name + PARTIAL_FILE_SUFFIX)

        try:
            with archive.open(info, pwd=password) as src, open(partial, WRITE_BINARY_MODE) as dst:
                shutil.copyfileobj(src, dst, self.chunk_size)
            os.replace(partial, target)
        except ENTRY_READ_ERRORS as e:
            if entry.encrypted:
                raise DecryptionFailed(entry.path, container, str(e)) from e
            raise ArchiveReadError(container, str(e), entry_path=entry.path) from e
        except OSError as e:
            raise ArchiveReadError(container, str(e), entry_path=entry.path) from e


def extract(
    source_path: Union[str, Path],
    destination_dir: Union[str, Path],
    password_resolver: Optional[PasswordResolver] = None,
) -> Manifest:
    """Extract with configured limits. See ArchiveExtractor.extract."""
    return ArchiveExtractor().extract(source_path, destination_dir, password_resolver)


__all__ = ['ArchiveExtractor', 'extract', 'fingerprint', 'is_container']
