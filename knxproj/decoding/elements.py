# Path: knxproj/decoding/elements.py
"""
Element Access Helpers

Namespace-aware lookups and typed attribute reads on lxml elements.

Paths are written without prefixes ('Topology/Area') and qualified
with the document's namespace at lookup time.
"""

from typing import Optional

from lxml import etree

from knxproj.constants import FLAG_ENABLED

NS_PREFIX = 'k'


def qualify(path: str) -> str:
    """'Topology/Area' -> 'k:Topology/k:Area'"""
    return '/'.join(f"{NS_PREFIX}:{step}" for step in path.split('/'))


def find_all(element: etree._Element, path: str, namespace: str) -> list[etree._Element]:
    return element.findall(qualify(path), namespaces={NS_PREFIX: namespace})


def find(element: etree._Element, path: str, namespace: str) -> Optional[etree._Element]:
    return element.find(qualify(path), namespaces={NS_PREFIX: namespace})


def require(element: etree._Element, path: str, namespace: str) -> etree._Element:
    """Like find(), but a missing element is a ValueError."""
    found = find(element, path, namespace)
    if found is None:
        raise ValueError(f"missing <{path}> under <{etree.QName(element).localname}>")
    return found


def text_attr(element: etree._Element, name: str, default: str = '') -> str:
    return element.get(name, default)


def int_attr(element: etree._Element, name: str, default: int = 0) -> int:
    """Integer attribute; a non-numeric value is a ValueError."""
    value = element.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(
            f"attribute {name}={value!r} of <{etree.QName(element).localname}> is not an integer"
        ) from None


def flag_attr(element: etree._Element, name: str) -> bool:
    return element.get(name) == FLAG_ENABLED


def optional_flag_attr(element: etree._Element, name: str) -> Optional[bool]:
    """None when the attribute is absent."""
    value = element.get(name)
    if value is None:
        return None
    return value == FLAG_ENABLED


__all__ = [
    'qualify',
    'find_all',
    'find',
    'require',
    'text_attr',
    'int_attr',
    'flag_attr',
    'optional_flag_attr',
]
