# Path: knxproj/identifiers/shapes.py
"""
Identifier Shapes

Call-site declarations of what an identifier attribute must contain.

The same '_'-joined textual form is reused by several identifier families,
each requiring a different subset of components. Project-scoped identifiers
(P-0497-0_A-1, P-0497-0_BP-3) reuse tags that mean something else in
manufacturer data, so they are read by position instead of by prefix.

Token count never selects a schema dialect; it only selects a layout
among those a call site declares.
"""

from dataclasses import dataclass
from typing import Optional

from knxproj.identifiers.codec import FieldKind


@dataclass(frozen=True)
class IdentifierShape:
    """
    Expected layout of one identifier family.

    Attributes:
        name: Family name (used in error messages)
        required: Kinds that must be present after decomposition
        layouts: Positional layouts keyed by arity (empty: classify by prefix)
    """
    name: str
    required: frozenset
    layouts: tuple = ()

    @property
    def positional(self) -> bool:
        """Whether tokens are assigned by position."""
        return bool(self.layouts)

    def layout_for(self, token_count: int) -> Optional[tuple]:
        """Layout whose arity matches token_count, if declared."""
        for layout in self.layouts:
            if len(layout) == token_count:
                return layout
        return None


def _shape(name: str, *required: FieldKind, layouts: tuple = ()) -> IdentifierShape:
    return IdentifierShape(name=name, required=frozenset(required), layouts=layouts)


K = FieldKind

# ============================================================================
# MANUFACTURER DATA (prefix-classified)
# ============================================================================
# M-0080_A-1012-10-5227-O00C5
APPLICATION_PROGRAM = _shape('ApplicationProgram', K.MANUFACTURER, K.APPLICATION_PROGRAM)

# M-0080_A-1012-10-5227-O00C5_O-0 (optionally with MD-)
COM_OBJECT = _shape('ComObject', K.MANUFACTURER, K.APPLICATION_PROGRAM, K.COM_OBJECT)

# M-0080_A-1012-10-5227-O00C5_O-0_R-1
COM_OBJECT_REF = _shape(
    'ComObjectRef', K.MANUFACTURER, K.APPLICATION_PROGRAM, K.COM_OBJECT, K.COM_OBJECT_REF
)

# O-0_R-1 or M-0080_A-..._O-0_R-1
COM_OBJECT_INSTANCE_REF = _shape('ComObjectInstanceRef', K.COM_OBJECT, K.COM_OBJECT_REF)

# M-0080
MANUFACTURER = _shape('Manufacturer', K.MANUFACTURER)

# ============================================================================
# HARDWARE DATA (prefix-classified)
# ============================================================================
# M-0007_H-6131.2F20-1
HARDWARE = _shape('Hardware', K.MANUFACTURER, K.HARDWARE)

# M-0007_H-6131.2F20-1_P-6131.2F20
PRODUCT = _shape('Product', K.MANUFACTURER, K.HARDWARE, K.PRODUCT)

# M-0007_H-6131.2F20-1_HP-3120-32-269B-3120-42-4C77
HARDWARE2PROGRAM = _shape('Hardware2Program', K.MANUFACTURER, K.HARDWARE, K.HARDWARE2PROGRAM)

# M-0080_H-2014.5F10.5F14-1_P-EB10430442 (translation unit RefId)
TRANSLATION = _shape('Translation', K.MANUFACTURER, K.HARDWARE, K.PRODUCT)

# ============================================================================
# PROJECT DATA (positional)
# ============================================================================
# P-0497-0_DI-1
DEVICE_INSTANCE = _shape(
    'DeviceInstance', K.PROJECT, K.DEVICE_INSTANCE,
    layouts=((K.PROJECT, K.DEVICE_INSTANCE),),
)

# P-0497-0_A-1 or A-1
AREA = _shape(
    'Area', K.AREA,
    layouts=((K.PROJECT, K.AREA), (K.AREA,)),
)

# P-0497-0_L-1 or L-1
LINE = _shape(
    'Line', K.LINE,
    layouts=((K.PROJECT, K.LINE), (K.LINE,)),
)

# P-0497-0_BP-1
SPACE = _shape(
    'Space', K.PROJECT, K.SPACE,
    layouts=((K.PROJECT, K.SPACE),),
)

# P-0497-0_GA-1 or GA-1
GROUP_ADDRESS = _shape(
    'GroupAddress', K.GROUP_ADDRESS,
    layouts=((K.PROJECT, K.GROUP_ADDRESS), (K.GROUP_ADDRESS,)),
)

del K


__all__ = [
    'IdentifierShape',
    'APPLICATION_PROGRAM',
    'COM_OBJECT',
    'COM_OBJECT_REF',
    'COM_OBJECT_INSTANCE_REF',
    'MANUFACTURER',
    'HARDWARE',
    'PRODUCT',
    'HARDWARE2PROGRAM',
    'TRANSLATION',
    'DEVICE_INSTANCE',
    'AREA',
    'LINE',
    'SPACE',
    'GROUP_ADDRESS',
]
