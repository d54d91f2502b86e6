# Path: knxproj/decoding/document_decoder.py
"""
Document Decoder

Parses one classified XML document and dispatches to the strategy for
its role and schema dialect.

Architecture:
- One strategy table per role, keyed by SchemaVersion
- Tables checked for completeness when this module is imported
- File opened, parsed and closed within a single decode() call

CRITICAL: XML parsing never resolves external entities and never
touches the network.
"""

from pathlib import Path
from typing import Callable, Optional, Union

from lxml import etree

from knxproj.core.logger import get_logger
from knxproj.constants import LOG_INPUT, LOG_OUTPUT
from knxproj.decoding.hardware import HARDWARE_STRATEGIES
from knxproj.decoding.manufacturer import MANUFACTURER_STRATEGIES
from knxproj.decoding.models import HardwareData, ManufacturerData, Project, ProjectInfo
from knxproj.decoding.project import INSTALLATION_STRATEGIES, PROJECT_INFO_STRATEGIES
from knxproj.engine.classifier import FileRole, TypedFileRef
from knxproj.errors import DocumentDecodeError, UnsupportedSchemaError
from knxproj.schema import SchemaResolver, SchemaVersion

logger = get_logger(__name__, 'decoding')

DecodedDocument = Union[ProjectInfo, Project, ManufacturerData, HardwareData]
Strategy = Callable[[etree._Element, str], DecodedDocument]

STRATEGIES: dict[FileRole, dict[SchemaVersion, Strategy]] = {
    FileRole.PROJECT_META: PROJECT_INFO_STRATEGIES,
    FileRole.INSTALLATION: INSTALLATION_STRATEGIES,
    FileRole.MANUFACTURER: MANUFACTURER_STRATEGIES,
    FileRole.HARDWARE: HARDWARE_STRATEGIES,
}


def check_strategy_tables(tables: dict[FileRole, dict[SchemaVersion, Strategy]]) -> None:
    """
    Verify every (role, dialect) pair has a strategy.

    Raises:
        RuntimeError: Listing every missing pair
    """
    missing = [
        f"{role.value}/{version.value}"
        for role in FileRole
        for version in SchemaVersion
        if version not in tables.get(role, {})
    ]
    if missing:
        raise RuntimeError(f"Decoding strategies missing for: {', '.join(missing)}")


check_strategy_tables(STRATEGIES)


class DocumentDecoder:
    """
    Decodes classified documents into domain objects.

    Example:
        decoder = DocumentDecoder()
        info = decoder.decode(classified.project_files[0])          # ProjectInfo
        project = decoder.decode(info_ref.installation_files[0])    # Project
    """

    def __init__(self, resolver: Optional[SchemaResolver] = None):
        self.resolver = resolver if resolver else SchemaResolver()
        self._parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            load_dtd=False,
            huge_tree=False,
        )

    def decode(self, ref: TypedFileRef) -> DecodedDocument:
        """
        Decode one document according to its role.

        Args:
            ref: Classified file reference

        Returns:
            ProjectInfo, Project, ManufacturerData or HardwareData

        Raises:
            DocumentDecodeError: Unreadable or malformed XML
            UnsupportedSchemaError: Unknown namespace
            InvalidIdentifier: Required identifier component missing
        """
        logger.info(f"{LOG_INPUT} Decoding {ref.role.value}: {ref.name}")

        root = self.parse(ref.path)
        version = self.resolve_version(root, ref.path)
        namespace = version.namespace

        strategy = STRATEGIES[ref.role][version]
        try:
            document = strategy(root, namespace)
        except ValueError as e:
            raise DocumentDecodeError(ref.path, str(e)) from e

        logger.info(f"{LOG_OUTPUT} Decoded {ref.name} (schema {version.value})")
        return document

    def parse(self, path: Union[str, Path]) -> etree._Element:
        """Parse a file into its root element."""
        path = Path(path)
        try:
            with open(path, 'rb') as f:
                tree = etree.parse(f, self._parser)
        except etree.XMLSyntaxError as e:
            raise DocumentDecodeError(path, f"malformed XML: {e}") from e
        except OSError as e:
            raise DocumentDecodeError(path, str(e)) from e
        return tree.getroot()

    def resolve_version(self, root: etree._Element, path: Union[str, Path]) -> SchemaVersion:
        """Dialect of a parsed document; attaches the path to resolver errors."""
        try:
            return self.resolver.resolve_element(root)
        except UnsupportedSchemaError as e:
            logger.error(f"{LOG_OUTPUT} Unsupported schema {e.namespace_uri!r} in {path}")
            raise UnsupportedSchemaError(e.namespace_uri, path) from None


__all__ = ['DocumentDecoder', 'DecodedDocument', 'STRATEGIES', 'check_strategy_tables']
