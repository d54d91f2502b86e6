# Path: knxproj/decoding/project.py
"""
Project Document Strategies

Decodes project meta files (P-XXXX/project.xml) and installation files
(P-XXXX/N.xml) for every schema dialect.

Dialect differences:
- 11-14: group address links as <Send>/<Receive> connector elements
- 20:    links as a space-separated Links attribute
- 21-23: devices nested as Line > Segment > DeviceInstance

Identifier handling:
- Device instance, area, line, space ids are decoded tolerantly
  (unset components stay None)
- Group addresses and com object instance refs are decoded strictly
  (InvalidIdentifier fails the document)
"""

from lxml import etree

from knxproj.constants import LINK_DELIMITER
from knxproj.decoding.elements import find, find_all, require, text_attr, int_attr
from knxproj.decoding.models import (
    Area,
    ComObjectInstanceRef,
    DeviceInstance,
    GroupAddress,
    GroupAddressStyle,
    GroupRange,
    Installation,
    Line,
    Project,
    ProjectInfo,
    Space,
)
from knxproj.identifiers import FieldKind, IdentifierCodec, shapes
from knxproj.schema import SchemaVersion


# ============================================================================
# PROJECT META
# ============================================================================

GROUP_ADDRESS_STYLES = {
    'ThreeLevel': GroupAddressStyle.THREE_LEVEL,
    'TwoLevel': GroupAddressStyle.TWO_LEVEL,
}


def decode_project_info(root: etree._Element, namespace: str) -> ProjectInfo:
    """Decode <KNX><Project Id><ProjectInformation .../></Project></KNX>."""
    project = require(root, 'Project', namespace)
    information = find(project, 'ProjectInformation', namespace)

    info = ProjectInfo(id=text_attr(project, 'Id'))
    if information is not None:
        info.name = text_attr(information, 'Name')
        info.comment = text_attr(information, 'Comment')
        info.group_address_style = GROUP_ADDRESS_STYLES.get(
            information.get('GroupAddressStyle'), GroupAddressStyle.FREE
        )
    return info


# ============================================================================
# INSTALLATIONS
# ============================================================================


class InstallationDecoder11:
    """
    Installation decoder for dialects 11-14.

    Subclasses override the hooks where later dialects differ:
    _links() and _line_devices().
    """

    def __init__(self, namespace: str):
        self.namespace = namespace

    @classmethod
    def strategy(cls, root: etree._Element, namespace: str) -> Project:
        return cls(namespace).decode(root)

    def decode(self, root: etree._Element) -> Project:
        project = require(root, 'Project', self.namespace)
        return Project(
            id=text_attr(project, 'Id'),
            installations=[
                self._installation(element)
                for element in find_all(project, 'Installations/Installation', self.namespace)
            ],
        )

    def _installation(self, element: etree._Element) -> Installation:
        return Installation(
            name=text_attr(element, 'Name'),
            topology=[self._area(area) for area in find_all(element, 'Topology/Area', self.namespace)],
            locations=[self._space(space) for space in find_all(element, 'Locations/Space', self.namespace)],
            group_ranges=[
                self._group_range(group_range)
                for group_range in find_all(element, 'GroupAddresses/GroupRanges/GroupRange', self.namespace)
            ],
        )

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def _area(self, element: etree._Element) -> Area:
        cid = IdentifierCodec.decompose(text_attr(element, 'Id'), shapes.AREA)
        return Area(
            id=cid.area,
            project_id=cid.project,
            name=text_attr(element, 'Name'),
            address=int_attr(element, 'Address'),
            lines=[self._line(line) for line in find_all(element, 'Line', self.namespace)],
        )

    def _line(self, element: etree._Element) -> Line:
        cid = IdentifierCodec.decompose(text_attr(element, 'Id'), shapes.LINE)
        return Line(
            id=cid.line,
            project_id=cid.project,
            name=text_attr(element, 'Name'),
            address=int_attr(element, 'Address'),
            devices=[self._device(device) for device in self._line_devices(element)],
        )

    def _line_devices(self, line: etree._Element) -> list[etree._Element]:
        return find_all(line, 'DeviceInstance', self.namespace)

    def _device(self, element: etree._Element) -> DeviceInstance:
        cid = IdentifierCodec.decompose(text_attr(element, 'Id'), shapes.DEVICE_INSTANCE)
        product = IdentifierCodec.decompose(text_attr(element, 'ProductRefId'), shapes.PRODUCT)
        program = IdentifierCodec.decompose(text_attr(element, 'Hardware2ProgramRefId'), shapes.HARDWARE2PROGRAM)

        return DeviceInstance(
            id=cid.device_instance,
            project_id=cid.project,
            manufacturer_id=product.manufacturer,
            hardware_id=product.hardware,
            product_id=product.product,
            hardware2program_id=program.hardware2program,
            name=text_attr(element, 'Name'),
            address=int_attr(element, 'Address'),
            com_objects=[
                self._com_object_instance_ref(ref)
                for ref in find_all(element, 'ComObjectInstanceRefs/ComObjectInstanceRef', self.namespace)
            ],
        )

    def _com_object_instance_ref(self, element: etree._Element) -> ComObjectInstanceRef:
        fields = IdentifierCodec.decode(text_attr(element, 'RefId'), shapes.COM_OBJECT_INSTANCE_REF)
        return ComObjectInstanceRef(
            com_object_id=fields[FieldKind.COM_OBJECT],
            com_object_ref_id=fields[FieldKind.COM_OBJECT_REF],
            datapoint_type=text_attr(element, 'DatapointType'),
            links=self._links(element),
        )

    def _links(self, element: etree._Element) -> list[str]:
        """Group addresses from <Connectors><Send|Receive GroupAddressRefId/></Connectors>."""
        links = []
        connectors = find(element, 'Connectors', self.namespace)
        if connectors is None:
            return links

        for connector in connectors:
            if not isinstance(connector.tag, str):
                continue  # comments, processing instructions
            cid = IdentifierCodec.decompose(text_attr(connector, 'GroupAddressRefId'), shapes.GROUP_ADDRESS)
            if cid.group_address:
                links.append(cid.group_address)
        return links

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------

    def _space(self, element: etree._Element) -> Space:
        cid = IdentifierCodec.decompose(text_attr(element, 'Id'), shapes.SPACE)
        return Space(
            id=cid.space,
            project_id=cid.project,
            type=text_attr(element, 'Type'),
            name=text_attr(element, 'Name'),
            device_instance_ids=[
                IdentifierCodec.decompose(text_attr(ref, 'RefId'), shapes.DEVICE_INSTANCE).device_instance
                for ref in find_all(element, 'DeviceInstanceRef', self.namespace)
            ],
            sub_spaces=[self._space(space) for space in find_all(element, 'Space', self.namespace)],
        )

    # ------------------------------------------------------------------
    # Group addresses
    # ------------------------------------------------------------------

    def _group_range(self, element: etree._Element) -> GroupRange:
        return GroupRange(
            id=text_attr(element, 'Id'),
            name=text_attr(element, 'Name'),
            range_start=int_attr(element, 'RangeStart'),
            range_end=int_attr(element, 'RangeEnd'),
            addresses=[self._group_address(address) for address in find_all(element, 'GroupAddress', self.namespace)],
            sub_ranges=[self._group_range(sub_range) for sub_range in find_all(element, 'GroupRange', self.namespace)],
        )

    def _group_address(self, element: etree._Element) -> GroupAddress:
        fields = IdentifierCodec.decode(text_attr(element, 'Id'), shapes.GROUP_ADDRESS)
        return GroupAddress(
            id=fields[FieldKind.GROUP_ADDRESS],
            project_id=fields.get(FieldKind.PROJECT),
            name=text_attr(element, 'Name'),
            description=text_attr(element, 'Description'),
            address=int_attr(element, 'Address'),
            datapoint_type=text_attr(element, 'DatapointType'),
        )


class InstallationDecoder20(InstallationDecoder11):
    """Installation decoder for dialect 20: links in a Links attribute."""

    def _links(self, element: etree._Element) -> list[str]:
        links = []
        for link in text_attr(element, 'Links').split(LINK_DELIMITER):
            if not link:
                continue
            cid = IdentifierCodec.decompose(link, shapes.GROUP_ADDRESS)
            links.append(cid.group_address or link)
        return links


class InstallationDecoder21(InstallationDecoder20):
    """Installation decoder for dialects 21-23: devices live in line segments."""

    def _line_devices(self, line: etree._Element) -> list[etree._Element]:
        return find_all(line, 'Segment/DeviceInstance', self.namespace)


# ============================================================================
# STRATEGY TABLES
# ============================================================================

PROJECT_INFO_STRATEGIES = {version: decode_project_info for version in SchemaVersion}

INSTALLATION_STRATEGIES = {
    SchemaVersion.V11: InstallationDecoder11.strategy,
    SchemaVersion.V12: InstallationDecoder11.strategy,
    SchemaVersion.V13: InstallationDecoder11.strategy,
    SchemaVersion.V14: InstallationDecoder11.strategy,
    SchemaVersion.V20: InstallationDecoder20.strategy,
    SchemaVersion.V21: InstallationDecoder21.strategy,
    SchemaVersion.V22: InstallationDecoder21.strategy,
    SchemaVersion.V23: InstallationDecoder21.strategy,
}


__all__ = [
    'decode_project_info',
    'InstallationDecoder11',
    'InstallationDecoder20',
    'InstallationDecoder21',
    'PROJECT_INFO_STRATEGIES',
    'INSTALLATION_STRATEGIES',
]
