# Path: knxproj/decoding/manufacturer.py
"""
Manufacturer Document Strategy

Decodes application programs and their communication objects from
manufacturer files (M-XXXX/M-XXXX_A-....xml). One strategy serves all
schema dialects.

    <KNX><ManufacturerData><Manufacturer RefId="M-0080">
      <ApplicationPrograms><ApplicationProgram Id Name ApplicationVersion>
        <Static>
          <ComObjectTable><ComObject .../></ComObjectTable>
          <ComObjectRefs><ComObjectRef .../></ComObjectRefs>
        </Static>
      </ApplicationProgram></ApplicationPrograms>
    </Manufacturer></ManufacturerData></KNX>

All identifiers here are decoded strictly.
"""

from lxml import etree

from knxproj.decoding.elements import (
    find_all,
    require,
    text_attr,
    int_attr,
    flag_attr,
    optional_flag_attr,
)
from knxproj.decoding.models import ApplicationProgram, ComObject, ComObjectRef, ManufacturerData
from knxproj.identifiers import FieldKind, IdentifierCodec, shapes
from knxproj.schema import SchemaVersion

# Attributes shared by ComObject and ComObjectRef (XML name, model field)
TEXT_ATTRIBUTES = (
    ('Name', 'name'),
    ('Text', 'text'),
    ('Description', 'description'),
    ('FunctionText', 'function_text'),
    ('ObjectSize', 'object_size'),
    ('DatapointType', 'datapoint_type'),
    ('Priority', 'priority'),
)

FLAG_ATTRIBUTES = (
    ('ReadFlag', 'read_flag'),
    ('WriteFlag', 'write_flag'),
    ('CommunicationFlag', 'communication_flag'),
    ('TransmitFlag', 'transmit_flag'),
    ('UpdateFlag', 'update_flag'),
    ('ReadOnInitFlag', 'read_on_init_flag'),
)


def decode_manufacturer_data(root: etree._Element, namespace: str) -> ManufacturerData:
    manufacturer = require(root, 'ManufacturerData/Manufacturer', namespace)
    fields = IdentifierCodec.decode(text_attr(manufacturer, 'RefId'), shapes.MANUFACTURER)

    return ManufacturerData(
        id=fields[FieldKind.MANUFACTURER],
        programs=[
            decode_application_program(program, namespace)
            for program in find_all(manufacturer, 'ApplicationPrograms/ApplicationProgram', namespace)
        ],
    )


def decode_application_program(element: etree._Element, namespace: str) -> ApplicationProgram:
    fields = IdentifierCodec.decode(text_attr(element, 'Id'), shapes.APPLICATION_PROGRAM)

    return ApplicationProgram(
        id=fields[FieldKind.APPLICATION_PROGRAM],
        manufacturer_id=fields[FieldKind.MANUFACTURER],
        name=text_attr(element, 'Name'),
        version=int_attr(element, 'ApplicationVersion'),
        objects=[
            decode_com_object(obj)
            for obj in find_all(element, 'Static/ComObjectTable/ComObject', namespace)
        ],
        object_refs=[
            decode_com_object_ref(ref)
            for ref in find_all(element, 'Static/ComObjectRefs/ComObjectRef', namespace)
        ],
    )


def decode_com_object(element: etree._Element) -> ComObject:
    """ComObject: every attribute present, flags default to disabled."""
    fields = IdentifierCodec.decode(text_attr(element, 'Id'), shapes.COM_OBJECT)

    com_object = ComObject(
        id=fields[FieldKind.COM_OBJECT],
        manufacturer_id=fields[FieldKind.MANUFACTURER],
        application_program_id=fields[FieldKind.APPLICATION_PROGRAM],
        module_id=fields.get(FieldKind.MODULE),
    )
    for xml_name, field_name in TEXT_ATTRIBUTES:
        setattr(com_object, field_name, text_attr(element, xml_name))
    for xml_name, field_name in FLAG_ATTRIBUTES:
        setattr(com_object, field_name, flag_attr(element, xml_name))
    return com_object


def decode_com_object_ref(element: etree._Element) -> ComObjectRef:
    """ComObjectRef: absent attributes stay None (inherit from the ComObject)."""
    fields = IdentifierCodec.decode(text_attr(element, 'Id'), shapes.COM_OBJECT_REF)

    ref = ComObjectRef(
        id=fields[FieldKind.COM_OBJECT_REF],
        manufacturer_id=fields[FieldKind.MANUFACTURER],
        application_program_id=fields[FieldKind.APPLICATION_PROGRAM],
        com_object_id=fields[FieldKind.COM_OBJECT],
    )
    for xml_name, field_name in TEXT_ATTRIBUTES:
        setattr(ref, field_name, element.get(xml_name))
    for xml_name, field_name in FLAG_ATTRIBUTES:
        setattr(ref, field_name, optional_flag_attr(element, xml_name))
    return ref


MANUFACTURER_STRATEGIES = {version: decode_manufacturer_data for version in SchemaVersion}


__all__ = [
    'decode_manufacturer_data',
    'decode_application_program',
    'decode_com_object',
    'decode_com_object_ref',
    'MANUFACTURER_STRATEGIES',
]
