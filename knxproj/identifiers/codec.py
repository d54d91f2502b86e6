# Path: knxproj/identifiers/codec.py
"""
Identifier Codec

Parse and re-serialize composite identifiers.

Composite identifier format: <tag>-<value> tokens joined by '_'
Examples:
    M-0080_A-1012-10-5227-O00C5_O-0_R-1     (communication object reference)
    M-0007_H-6131.2F20-1_P-6131.2F20        (product)
    P-0497-0_DI-1                           (device instance, positional)

Two tiers:
- decompose() never fails: every token lands in a field or in extras
- fields_of() / decode() validate the kinds a call site requires

All tag-prefix knowledge lives in this module.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Optional, TYPE_CHECKING

from knxproj.constants import IDENTIFIER_DELIMITER, TAG_DELIMITER
from knxproj.errors import InvalidIdentifier

if TYPE_CHECKING:
    from knxproj.identifiers.shapes import IdentifierShape


class FieldKind(str, Enum):
    """
    Identifier component kinds.

    Declaration order is the canonical serialization order.
    """

    PROJECT = 'project'
    MANUFACTURER = 'manufacturer'
    HARDWARE = 'hardware'
    PRODUCT = 'product'
    HARDWARE2PROGRAM = 'hardware2program'
    APPLICATION_PROGRAM = 'application_program'
    MODULE = 'module'
    COM_OBJECT = 'com_object'
    COM_OBJECT_REF = 'com_object_ref'
    AREA = 'area'
    LINE = 'line'
    DEVICE_INSTANCE = 'device_instance'
    SPACE = 'space'
    GROUP_ADDRESS = 'group_address'


CANONICAL_ORDER: tuple = tuple(FieldKind)

# Tag every populated field must start with (None: any '<TAG>-' token)
CANONICAL_TAGS = MappingProxyType({
    FieldKind.PROJECT: 'P-',
    FieldKind.MANUFACTURER: 'M-',
    FieldKind.HARDWARE: 'H-',
    FieldKind.PRODUCT: 'P-',
    FieldKind.HARDWARE2PROGRAM: 'HP-',
    FieldKind.APPLICATION_PROGRAM: 'A-',
    FieldKind.MODULE: 'MD-',
    FieldKind.COM_OBJECT: 'O-',
    FieldKind.COM_OBJECT_REF: 'R-',
    FieldKind.AREA: 'A-',
    FieldKind.LINE: 'L-',
    FieldKind.DEVICE_INSTANCE: 'DI-',
    FieldKind.SPACE: None,
    FieldKind.GROUP_ADDRESS: 'GA-',
})

# Prefix classification when no positional layout is declared.
# 'P-' and 'A-' are ambiguous across families; project-scoped
# identifiers must be decoded with a positional shape.
PREFIX_KINDS = MappingProxyType({
    'M-': FieldKind.MANUFACTURER,
    'A-': FieldKind.APPLICATION_PROGRAM,
    'MD-': FieldKind.MODULE,
    'O-': FieldKind.COM_OBJECT,
    'R-': FieldKind.COM_OBJECT_REF,
    'H-': FieldKind.HARDWARE,
    'P-': FieldKind.PRODUCT,
    'HP-': FieldKind.HARDWARE2PROGRAM,
    'DI-': FieldKind.DEVICE_INSTANCE,
    'L-': FieldKind.LINE,
    'GA-': FieldKind.GROUP_ADDRESS,
    'BP-': FieldKind.SPACE,
})


@dataclass(frozen=True)
class CompositeID:
    """
    Decoded composite identifier.

    Unset components are None (never the empty string).
    Unrecognized tokens are kept in extras, in source order.
    """
    project: Optional[str] = None
    manufacturer: Optional[str] = None
    hardware: Optional[str] = None
    product: Optional[str] = None
    hardware2program: Optional[str] = None
    application_program: Optional[str] = None
    module: Optional[str] = None
    com_object: Optional[str] = None
    com_object_ref: Optional[str] = None
    area: Optional[str] = None
    line: Optional[str] = None
    device_instance: Optional[str] = None
    space: Optional[str] = None
    group_address: Optional[str] = None
    extras: tuple[str, ...] = ()
    raw: str = field(default='', compare=False)

    def __post_init__(self):
        for kind in FieldKind:
            value = getattr(self, kind.value)
            if value is not None and not _carries_tag(kind, value):
                raise ValueError(f"{kind.value} component '{value}' lacks its tag prefix")

    def get(self, kind: FieldKind) -> Optional[str]:
        """Get a component by kind."""
        return getattr(self, kind.value)

    def has(self, kind: FieldKind) -> bool:
        """Check if a component is set."""
        return self.get(kind) is not None

    @property
    def populated(self) -> dict[FieldKind, str]:
        """Set components in canonical order."""
        return {kind: self.get(kind) for kind in CANONICAL_ORDER if self.has(kind)}

    def __str__(self) -> str:
        return IdentifierCodec.compose(self)


def _tag_of(token: str) -> Optional[str]:
    """Tag of a token, up to and including its first dash."""
    index = token.find(TAG_DELIMITER)
    if index <= 0:
        return None
    return token[:index + 1]


def _carries_tag(kind: FieldKind, token: str) -> bool:
    """Check that a token is a non-empty value carrying the kind's tag."""
    tag = CANONICAL_TAGS[kind]
    if tag is None:
        tag = _tag_of(token)
        if tag is None:
            return False
    return token.startswith(tag) and len(token) > len(tag)


class IdentifierCodec:
    """
    Composite identifier parsing and serialization.

    Stateless; safe to share.

    Example:
        cid = IdentifierCodec.decompose('M-0080_A-1012-10-5227-O00C5_O-0_R-1')
        print(cid.com_object)      # 'O-0'
        print(cid.module)          # None

        ids = IdentifierCodec.decode('P-0497-0_DI-1', DEVICE_INSTANCE)
        print(ids[FieldKind.DEVICE_INSTANCE])  # 'DI-1'
    """

    @staticmethod
    def tokenize(raw: str) -> list[str]:
        """Split raw identifier into tokens (dash-joined tokens stay whole)."""
        if not raw:
            return []
        return raw.split(IDENTIFIER_DELIMITER)

    @staticmethod
    def classify_token(token: str) -> Optional[FieldKind]:
        """Kind of a token by its tag prefix, None if unrecognized."""
        tag = _tag_of(token)
        if tag is None or len(token) == len(tag):
            return None
        return PREFIX_KINDS.get(tag)

    @staticmethod
    def decompose(raw: str, shape: Optional['IdentifierShape'] = None) -> CompositeID:
        """
        Split raw identifier into typed components.

        Never fails structurally. With a positional shape, tokens are
        assigned by position using the layout matching the token count;
        otherwise each token is classified by its tag prefix.

        Args:
            raw: Composite identifier string
            shape: Optional call-site shape

        Returns:
            CompositeID (unassignable tokens in extras)
        """
        raw = raw if raw is not None else ''
        tokens = IdentifierCodec.tokenize(raw)
        values: dict[str, str] = {}
        extras: list[str] = []

        layout = shape.layout_for(len(tokens)) if shape is not None and shape.positional else None

        if layout is not None:
            for kind, token in zip(layout, tokens):
                if _carries_tag(kind, token):
                    values[kind.value] = token
                else:
                    extras.append(token)
        elif shape is not None and shape.positional:
            # No layout for this arity
            extras.extend(tokens)
        else:
            for token in tokens:
                kind = IdentifierCodec.classify_token(token)
                if kind is None or kind.value in values:
                    extras.append(token)
                else:
                    values[kind.value] = token

        return CompositeID(extras=tuple(extras), raw=raw, **values)

    @staticmethod
    def compose(cid: CompositeID) -> str:
        """
        Serialize set components in canonical order, then extras.

        Args:
            cid: Composite identifier

        Returns:
            Delimiter-joined identifier string
        """
        tokens = list(cid.populated.values())
        tokens.extend(cid.extras)
        return IDENTIFIER_DELIMITER.join(tokens)

    @staticmethod
    def fields_of(cid: CompositeID, kinds: Iterable[FieldKind], context: str = '') -> dict[FieldKind, str]:
        """
        Validated subset of components.

        Args:
            cid: Decomposed identifier
            kinds: Kinds the call site requires
            context: Label for error messages

        Returns:
            Mapping of each requested kind to its value

        Raises:
            InvalidIdentifier: If any requested kind is absent
        """
        wanted = set(kinds)
        kinds = [kind for kind in CANONICAL_ORDER if kind in wanted]
        missing = [kind for kind in kinds if not cid.has(kind)]
        if missing:
            raise InvalidIdentifier(cid.raw, missing, context)
        return {kind: cid.get(kind) for kind in kinds}

    @staticmethod
    def decode(raw: str, shape: 'IdentifierShape') -> dict[FieldKind, str]:
        """
        Decompose and validate in one step.

        Args:
            raw: Composite identifier string
            shape: Call-site shape (defines required kinds)

        Returns:
            Mapping of every set kind to its value

        Raises:
            InvalidIdentifier: If a required kind is absent
        """
        cid = IdentifierCodec.decompose(raw, shape)
        IdentifierCodec.fields_of(cid, shape.required, shape.name)
        return cid.populated


def decompose(raw: str, shape: Optional['IdentifierShape'] = None) -> CompositeID:
    """Module-level shortcut for IdentifierCodec.decompose."""
    return IdentifierCodec.decompose(raw, shape)


def compose(cid: CompositeID) -> str:
    """Module-level shortcut for IdentifierCodec.compose."""
    return IdentifierCodec.compose(cid)


def fields_of(cid: CompositeID, kinds: Iterable[FieldKind], context: str = '') -> dict[FieldKind, str]:
    """Module-level shortcut for IdentifierCodec.fields_of."""
    return IdentifierCodec.fields_of(cid, kinds, context)


def decode(raw: str, shape: 'IdentifierShape') -> dict[FieldKind, str]:
    """Module-level shortcut for IdentifierCodec.decode."""
    return IdentifierCodec.decode(raw, shape)


__all__ = [
    'FieldKind',
    'CompositeID',
    'IdentifierCodec',
    'CANONICAL_ORDER',
    'CANONICAL_TAGS',
    'PREFIX_KINDS',
    'decompose',
    'compose',
    'fields_of',
    'decode',
]
