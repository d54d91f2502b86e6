# Path: knxproj/engine/classifier.py
"""
File Classifier

Assigns a role to every relevant file of an extracted export.

Naming conventions (last two path components):
    P-0497/project.xml                      project meta
    P-0497/0.xml                            installation (sibling of a project meta)
    M-0083/M-0083_A-0014-15-C6B1.xml        manufacturer (application program)
    M-0007_H-6131.2F20-1/Hardware.xml       hardware

Anything else (catalogs, baggages, master data) is ignored.

CRITICAL: A manufacturer file that matches the directory convention but
whose name does not decode is an error for the whole classification,
never silently skipped.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from knxproj.core.logger import get_logger
from knxproj.identifiers import IdentifierCodec, FieldKind, shapes
from knxproj.errors import InvalidIdentifier, MalformedFileName
from knxproj.constants import IDENTIFIER_DELIMITER, LOG_INPUT, LOG_PROCESS, LOG_OUTPUT

logger = get_logger(__name__, 'engine')


class FileRole(str, Enum):
    """Role of a classified file."""

    PROJECT_META = 'project_meta'
    INSTALLATION = 'installation'
    MANUFACTURER = 'manufacturer'
    HARDWARE = 'hardware'


@dataclass(frozen=True)
class TypedFileRef:
    """
    Classified file.

    Attributes:
        path: File location on disk
        role: FileRole
        manufacturer_id: M- identifier (manufacturer and hardware files)
        application_program_id: A- identifier (manufacturer files)
        project_id: P- identifier (project meta and installation files)
        installation_files: Installation refs of a project meta file, numeric order
    """
    path: Path
    role: FileRole
    manufacturer_id: Optional[str] = None
    application_program_id: Optional[str] = None
    project_id: Optional[str] = None
    installation_files: tuple['TypedFileRef', ...] = ()

    @property
    def name(self) -> str:
        """Container-relative display name (<dir>/<file>)."""
        return f"{self.path.parent.name}/{self.path.name}"


@dataclass
class ClassifiedFiles:
    """Classification result grouped by kind."""
    project_files: list[TypedFileRef] = field(default_factory=list)
    manufacturer_files: list[TypedFileRef] = field(default_factory=list)
    hardware_files: list[TypedFileRef] = field(default_factory=list)

    def __len__(self) -> int:
        installations = sum(len(ref.installation_files) for ref in self.project_files)
        return len(self.project_files) + installations + len(self.manufacturer_files) + len(self.hardware_files)

    def all_refs(self) -> list[TypedFileRef]:
        """Every ref in decode order: project meta, installations, manufacturer, hardware."""
        refs: list[TypedFileRef] = []
        for project in self.project_files:
            refs.append(project)
            refs.extend(project.installation_files)
        refs.extend(self.manufacturer_files)
        refs.extend(self.hardware_files)
        return refs


class FileClassifier:
    """
    Classifies extracted files by naming convention.

    Patterns are compiled once and shared by all instances.

    Example:
        classified = FileClassifier().classify(manifest)
        for project in classified.project_files:
            print(project.project_id, [ref.path.name for ref in project.installation_files])
    """

    PROJECT_DIR = re.compile(r'^[pP]-([0-9a-zA-Z]+)$')
    PROJECT_META_FILE = re.compile(r'^[pP]roject\.xml$')
    INSTALLATION_FILE = re.compile(r'^(\d+)\.xml$')
    MANUFACTURER_DIR = re.compile(r'^[mM]-([0-9a-zA-Z]+)$')
    MANUFACTURER_FILE = re.compile(r'^[mM]-([0-9a-zA-Z]+[^.]*)\.xml$')
    HARDWARE_DIR = re.compile(r'^[mM]-([0-9a-zA-Z]+)(_.+)?$')
    HARDWARE_FILE = re.compile(r'^Hardware\.xml$')

    def classify(self, manifest: Iterable[Path]) -> ClassifiedFiles:
        """
        Classify every path of a manifest.

        Args:
            manifest: Manifest or any iterable of extracted file paths

        Returns:
            ClassifiedFiles

        Raises:
            MalformedFileName: Manufacturer file name violates the convention
        """
        paths = [Path(path) for path in manifest]
        logger.info(f"{LOG_INPUT} Classifying {len(paths)} files")

        result = ClassifiedFiles()
        meta_files: list[tuple[Path, str]] = []
        installations: dict[Path, list[tuple[int, Path]]] = {}

        for path in paths:
            directory = path.parent.name
            filename = path.name

            project_dir = self.PROJECT_DIR.match(directory)
            if project_dir:
                if self.PROJECT_META_FILE.match(filename):
                    meta_files.append((path, f"P-{project_dir.group(1)}"))
                    continue
                installation = self.INSTALLATION_FILE.match(filename)
                if installation:
                    installations.setdefault(path.parent, []).append((int(installation.group(1)), path))
                    continue

            hardware_dir = self.HARDWARE_DIR.match(directory)
            if hardware_dir and self.HARDWARE_FILE.match(filename):
                result.hardware_files.append(self._hardware_ref(path, hardware_dir.group(1)))
                continue

            manufacturer_file = self.MANUFACTURER_FILE.match(filename)
            if manufacturer_file and self.MANUFACTURER_DIR.match(directory):
                result.manufacturer_files.append(self._manufacturer_ref(path, manufacturer_file.group(1)))
                continue

        for path, project_id in meta_files:
            siblings = sorted(installations.get(path.parent, []))
            result.project_files.append(TypedFileRef(
                path=path,
                role=FileRole.PROJECT_META,
                project_id=project_id,
                installation_files=tuple(
                    TypedFileRef(path=sibling, role=FileRole.INSTALLATION, project_id=project_id)
                    for _, sibling in siblings
                ),
            ))
            logger.debug(f"{LOG_PROCESS} Project {project_id}: {len(siblings)} installation files")

        logger.info(
            f"{LOG_OUTPUT} Classified {len(result.project_files)} projects, "
            f"{len(result.manufacturer_files)} manufacturer files, "
            f"{len(result.hardware_files)} hardware files"
        )
        return result

    def _manufacturer_ref(self, path: Path, name: str) -> TypedFileRef:
        """
        Decode M-xxxx_A-yyyy.xml into (ManufacturerID, ApplicationProgramID).

        name is the file name after its 'M-' / 'm-' prefix; the prefix is
        restored in canonical case before decoding.
        """
        base = f"M-{name}"
        parts = base.split(IDENTIFIER_DELIMITER)
        if len(parts) != 2:
            raise MalformedFileName(
                path, f"expected <ManufacturerID>_<ApplicationProgramID>, got {len(parts)} part(s)"
            )

        try:
            fields = IdentifierCodec.decode(base, shapes.APPLICATION_PROGRAM)
        except InvalidIdentifier as e:
            raise MalformedFileName(path, str(e)) from e

        return TypedFileRef(
            path=path,
            role=FileRole.MANUFACTURER,
            manufacturer_id=fields[FieldKind.MANUFACTURER],
            application_program_id=fields[FieldKind.APPLICATION_PROGRAM],
        )

    def _hardware_ref(self, path: Path, manufacturer: str) -> TypedFileRef:
        """Tag Hardware.xml with the ManufacturerID its directory starts with (any case of 'M-')."""
        return TypedFileRef(
            path=path,
            role=FileRole.HARDWARE,
            manufacturer_id=f"M-{manufacturer}",
        )


def classify(manifest: Iterable[Path]) -> ClassifiedFiles:
    """Classify with a default FileClassifier."""
    return FileClassifier().classify(manifest)


__all__ = ['FileRole', 'TypedFileRef', 'ClassifiedFiles', 'FileClassifier', 'classify']
