# Path: knxproj/schema/resolver.py
"""
Schema Resolver

Maps a document's namespace URI to the schema dialect that produced it.

Exact-match lookup only. An unknown namespace is always an error:
never falls back to the nearest known dialect.
"""

from enum import Enum
from types import MappingProxyType
from typing import Optional

from lxml import etree

from knxproj.errors import UnsupportedSchemaError


NAMESPACE_BASE: str = 'http://knx.org/xml/project/'


class SchemaVersion(str, Enum):
    """Known project schema dialects (ETS 4 through ETS 6)."""

    V11 = '11'
    V12 = '12'
    V13 = '13'
    V14 = '14'
    V20 = '20'
    V21 = '21'
    V22 = '22'
    V23 = '23'

    @property
    def namespace(self) -> str:
        """Namespace URI declaring this dialect."""
        return f"{NAMESPACE_BASE}{self.value}"


class SchemaResolver:
    """
    Namespace URI to SchemaVersion lookup.

    Stateless and read-only; safe to call concurrently.

    Example:
        resolver = SchemaResolver()
        version = resolver.resolve('http://knx.org/xml/project/20')  # SchemaVersion.V20
        resolver.resolve('http://knx.org/xml/project/99')            # UnsupportedSchemaError
    """

    NAMESPACES = MappingProxyType({version.namespace: version for version in SchemaVersion})

    def resolve(self, namespace_uri: Optional[str]) -> SchemaVersion:
        """
        Resolve namespace URI to schema dialect.

        Args:
            namespace_uri: Value of the document's default namespace

        Returns:
            SchemaVersion

        Raises:
            UnsupportedSchemaError: If the URI is not in the table
        """
        try:
            return self.NAMESPACES[namespace_uri]
        except (KeyError, TypeError):
            raise UnsupportedSchemaError(namespace_uri) from None

    def resolve_element(self, root: etree._Element) -> SchemaVersion:
        """Resolve the dialect of a parsed document's root element."""
        return self.resolve(etree.QName(root).namespace)


__all__ = ['SchemaVersion', 'SchemaResolver', 'NAMESPACE_BASE']
