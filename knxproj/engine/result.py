# Path: knxproj/engine/result.py
"""
Extraction Result Objects

Type-safe, structured results for extraction operations.

Architecture:
- ArchiveEntry: one item inside a container (transient, one pass)
- ManifestEntry: one file written to disk
- Manifest: ordered list of extracted files owning its root directory
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass(frozen=True)
class ArchiveEntry:
    """
    One item inside a container.

    Attributes:
        path: Slash-separated path inside the container (as stored)
        size: Uncompressed size in bytes
        is_dir: Directory marker
        encrypted: Entry is encrypted
        is_symlink: Entry is a symbolic link
    """
    path: str
    size: int = 0
    is_dir: bool = False
    encrypted: bool = False
    is_symlink: bool = False


@dataclass(frozen=True)
class ManifestEntry:
    """
    One extracted file.

    Attributes:
        path: Absolute destination path
        source_name: Entry path inside its container
        depth: Container nesting depth (0 = top-level container)
        is_container: File is itself a container
    """
    path: Path
    source_name: str
    depth: int = 0
    is_container: bool = False


@dataclass
class Manifest:
    """
    Flat list of files produced by a (possibly recursive) extraction.

    Iterating yields absolute paths in extraction order.
    The caller owns root and must call cleanup() when done.
    """
    root: Path
    entries: list[ManifestEntry] = field(default_factory=list)

    @property
    def paths(self) -> list[Path]:
        """Extracted file paths in order."""
        return [entry.path for entry in self.entries]

    @property
    def containers(self) -> list[ManifestEntry]:
        """Entries that are nested containers."""
        return [entry for entry in self.entries if entry.is_container]

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, path) -> bool:
        path = Path(path)
        return any(entry.path == path for entry in self.entries)

    def cleanup(self) -> None:
        """Delete the whole destination tree."""
        if self.root.exists():
            shutil.rmtree(self.root)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for logging/storage."""
        return {
            'root': str(self.root),
            'files': [str(path) for path in self.paths],
            'containers': len(self.containers),
        }


__all__ = ['ArchiveEntry', 'ManifestEntry', 'Manifest']
