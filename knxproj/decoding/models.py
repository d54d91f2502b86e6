# Path: knxproj/decoding/models.py
"""
Decoded Domain Objects

Typed object graph produced by the document decoders.

Identifier fields hold single components ('DI-1', 'P-0497-0', 'M-0007'),
never the composite string. A component that is absent from the source
identifier is None.

Three families:
- Project: ProjectInfo, Project > Installation > Area > Line > DeviceInstance,
  Space tree, GroupRange tree
- Manufacturer: ManufacturerData > ApplicationProgram > ComObject / ComObjectRef
- Hardware: HardwareData > Hardware > Product / Hardware2Program, Language > Translation
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# ============================================================================
# PROJECT
# ============================================================================


class GroupAddressStyle(str, Enum):
    """Group address presentation style."""

    THREE_LEVEL = 'ThreeLevel'
    TWO_LEVEL = 'TwoLevel'
    FREE = 'Free'


@dataclass
class ProjectInfo:
    """Project meta information (P-XXXX/project.xml)."""
    id: str
    name: str = ''
    comment: str = ''
    group_address_style: GroupAddressStyle = GroupAddressStyle.FREE


@dataclass
class ComObjectInstanceRef:
    """Communication object reference bound to zero or more group addresses."""
    com_object_id: str
    com_object_ref_id: str
    datapoint_type: str = ''
    links: list[str] = field(default_factory=list)


@dataclass
class DeviceInstance:
    """Device placed on a line."""
    id: Optional[str]
    project_id: Optional[str] = None
    manufacturer_id: Optional[str] = None
    hardware_id: Optional[str] = None
    product_id: Optional[str] = None
    hardware2program_id: Optional[str] = None
    name: str = ''
    address: int = 0
    com_objects: list[ComObjectInstanceRef] = field(default_factory=list)


@dataclass
class Line:
    id: Optional[str]
    project_id: Optional[str] = None
    name: str = ''
    address: int = 0
    devices: list[DeviceInstance] = field(default_factory=list)


@dataclass
class Area:
    id: Optional[str]
    project_id: Optional[str] = None
    name: str = ''
    address: int = 0
    lines: list[Line] = field(default_factory=list)


@dataclass
class GroupAddress:
    id: str
    project_id: Optional[str] = None
    name: str = ''
    description: str = ''
    address: int = 0
    datapoint_type: str = ''


@dataclass
class GroupRange:
    """Range of group addresses, possibly nested."""
    id: str
    name: str = ''
    range_start: int = 0
    range_end: int = 0
    addresses: list[GroupAddress] = field(default_factory=list)
    sub_ranges: list['GroupRange'] = field(default_factory=list)

    def iter_addresses(self):
        """All addresses of this range and its sub-ranges, depth first."""
        yield from self.addresses
        for sub_range in self.sub_ranges:
            yield from sub_range.iter_addresses()


@dataclass
class Space:
    """Building structure element (building, floor, room, ...)."""
    id: Optional[str]
    project_id: Optional[str] = None
    type: str = ''
    name: str = ''
    device_instance_ids: list[Optional[str]] = field(default_factory=list)
    sub_spaces: list['Space'] = field(default_factory=list)


@dataclass
class Installation:
    name: str = ''
    topology: list[Area] = field(default_factory=list)
    locations: list[Space] = field(default_factory=list)
    group_ranges: list[GroupRange] = field(default_factory=list)

    def iter_devices(self):
        """Every device instance of the topology."""
        for area in self.topology:
            for line in area.lines:
                yield from line.devices

    def iter_group_addresses(self):
        """Every group address of every range."""
        for group_range in self.group_ranges:
            yield from group_range.iter_addresses()


@dataclass
class Project:
    """Project contents (P-XXXX/N.xml)."""
    id: str
    installations: list[Installation] = field(default_factory=list)


# ============================================================================
# MANUFACTURER
# ============================================================================


@dataclass
class ComObject:
    """Communication object of an application program."""
    id: str
    manufacturer_id: str
    application_program_id: str
    module_id: Optional[str] = None
    name: str = ''
    text: str = ''
    description: str = ''
    function_text: str = ''
    object_size: str = ''
    datapoint_type: str = ''
    priority: str = ''
    read_flag: bool = False
    write_flag: bool = False
    communication_flag: bool = False
    transmit_flag: bool = False
    update_flag: bool = False
    read_on_init_flag: bool = False


@dataclass
class ComObjectRef:
    """
    Reference to a communication object.

    Every attribute is an optional override of the referenced ComObject;
    None means "inherit".
    """
    id: str
    manufacturer_id: str
    application_program_id: str
    com_object_id: str
    name: Optional[str] = None
    text: Optional[str] = None
    description: Optional[str] = None
    function_text: Optional[str] = None
    object_size: Optional[str] = None
    datapoint_type: Optional[str] = None
    priority: Optional[str] = None
    read_flag: Optional[bool] = None
    write_flag: Optional[bool] = None
    communication_flag: Optional[bool] = None
    transmit_flag: Optional[bool] = None
    update_flag: Optional[bool] = None
    read_on_init_flag: Optional[bool] = None


@dataclass
class ApplicationProgram:
    id: str
    manufacturer_id: str
    name: str = ''
    version: int = 0
    objects: list[ComObject] = field(default_factory=list)
    object_refs: list[ComObjectRef] = field(default_factory=list)


@dataclass
class ManufacturerData:
    """Manufacturer file contents (M-XXXX/M-XXXX_A-....xml)."""
    id: str
    programs: list[ApplicationProgram] = field(default_factory=list)


# ============================================================================
# HARDWARE
# ============================================================================


@dataclass
class Product:
    id: str
    manufacturer_id: str
    hardware_id: str
    text: str = ''


@dataclass
class Hardware2Program:
    """Binding of a hardware to an application program."""
    id: Optional[str]
    manufacturer_id: Optional[str] = None
    hardware_id: Optional[str] = None
    application_program_id: Optional[str] = None


@dataclass
class Hardware:
    id: str
    name: str = ''
    products: list[Product] = field(default_factory=list)
    hardware2programs: list[Hardware2Program] = field(default_factory=list)


@dataclass
class Translation:
    manufacturer_id: str
    hardware_id: str
    product_id: str
    text: str = ''


@dataclass
class Language:
    id: str
    translations: list[Translation] = field(default_factory=list)


@dataclass
class HardwareData:
    """Hardware file contents (M-XXXX/Hardware.xml)."""
    manufacturer_id: str
    hardwares: list[Hardware] = field(default_factory=list)
    languages: list[Language] = field(default_factory=list)


__all__ = [
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
