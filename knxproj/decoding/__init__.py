# Path: knxproj/decoding/__init__.py
"""
Decoding Module

Per-dialect document decoders and the typed domain objects they produce.
"""

from knxproj.decoding.document_decoder import DocumentDecoder, DecodedDocument
from knxproj.decoding.models import (
    GroupAddressStyle,
    ProjectInfo,
    ComObjectInstanceRef,
    DeviceInstance,
    Line,
    Area,
    GroupAddress,
    GroupRange,
    Space,
    Installation,
    Project,
    ComObject,
    ComObjectRef,
    ApplicationProgram,
    ManufacturerData,
    Product,
    Hardware2Program,
    Hardware,
    Translation,
    Language,
    HardwareData,
)

__all__ = [
    'DocumentDecoder',
    'DecodedDocument',
    'GroupAddressStyle',
    'ProjectInfo',
    'ComObjectInstanceRef',
    'DeviceInstance',
    'Line',
    'Area',
    'GroupAddress',
    'GroupRange',
    'Space',
    'Installation',
    'Project',
    'ComObject',
    'ComObjectRef',
    'ApplicationProgram',
    'ManufacturerData',
    'Product',
    'Hardware2Program',
    'Hardware',
    'Translation',
    'Language',
    'HardwareData',
]
