# Path: knxproj/identifiers/__init__.py
"""
Identifiers Module

Composite identifier decoding (IdentifierCodec) and call-site shapes.
"""

from knxproj.identifiers.codec import (
    FieldKind,
    CompositeID,
    IdentifierCodec,
    decompose,
    compose,
    fields_of,
    decode,
)
from knxproj.identifiers.shapes import IdentifierShape
from knxproj.identifiers import shapes

__all__ = [
    'FieldKind',
    'CompositeID',
    'IdentifierCodec',
    'IdentifierShape',
    'shapes',
    'decompose',
    'compose',
    'fields_of',
    'decode',
]
