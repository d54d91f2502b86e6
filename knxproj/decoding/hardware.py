# Path: knxproj/decoding/hardware.py
"""
Hardware Document Strategy

Decodes hardware, products, hardware-to-program bindings and product
translations from M-XXXX/Hardware.xml. One strategy serves all dialects.
"""

from lxml import etree

from knxproj.decoding.elements import find, find_all, require, text_attr
from knxproj.decoding.models import (
    Hardware,
    Hardware2Program,
    HardwareData,
    Language,
    Product,
    Translation,
)
from knxproj.identifiers import FieldKind, IdentifierCodec, shapes
from knxproj.schema import SchemaVersion


def decode_hardware_data(root: etree._Element, namespace: str) -> HardwareData:
    manufacturer = require(root, 'ManufacturerData/Manufacturer', namespace)
    fields = IdentifierCodec.decode(text_attr(manufacturer, 'RefId'), shapes.MANUFACTURER)

    return HardwareData(
        manufacturer_id=fields[FieldKind.MANUFACTURER],
        hardwares=[
            _hardware(hardware, namespace)
            for hardware in find_all(manufacturer, 'Hardware/Hardware', namespace)
        ],
        languages=[
            _language(language, namespace)
            for language in find_all(manufacturer, 'Languages/Language', namespace)
        ],
    )


def _hardware(element: etree._Element, namespace: str) -> Hardware:
    fields = IdentifierCodec.decode(text_attr(element, 'Id'), shapes.HARDWARE)
    return Hardware(
        id=fields[FieldKind.HARDWARE],
        name=text_attr(element, 'Name'),
        products=[_product(product) for product in find_all(element, 'Products/Product', namespace)],
        hardware2programs=[
            _hardware2program(binding, namespace)
            for binding in find_all(element, 'Hardware2Programs/Hardware2Program', namespace)
        ],
    )


def _product(element: etree._Element) -> Product:
    # M-0080_H-2014.5F10.5F14-1_P-EB10430442
    fields = IdentifierCodec.decode(text_attr(element, 'Id'), shapes.PRODUCT)
    return Product(
        id=fields[FieldKind.PRODUCT],
        manufacturer_id=fields[FieldKind.MANUFACTURER],
        hardware_id=fields[FieldKind.HARDWARE],
        text=text_attr(element, 'Text'),
    )


def _hardware2program(element: etree._Element, namespace: str) -> Hardware2Program:
    cid = IdentifierCodec.decompose(text_attr(element, 'Id'), shapes.HARDWARE2PROGRAM)

    program_ref = find(element, 'ApplicationProgramRef', namespace)
    program_id = None
    if program_ref is not None:
        program_id = IdentifierCodec.decompose(
            text_attr(program_ref, 'RefId'), shapes.APPLICATION_PROGRAM
        ).application_program

    return Hardware2Program(
        id=cid.hardware2program,
        manufacturer_id=cid.manufacturer,
        hardware_id=cid.hardware,
        application_program_id=program_id,
    )


def _language(element: etree._Element, namespace: str) -> Language:
    return Language(
        id=text_attr(element, 'Identifier'),
        translations=[_translation(unit, namespace) for unit in find_all(element, 'TranslationUnit', namespace)],
    )


def _translation(element: etree._Element, namespace: str) -> Translation:
    fields = IdentifierCodec.decode(text_attr(element, 'RefId'), shapes.TRANSLATION)
    translation = find(element, 'TranslationElement/Translation', namespace)
    return Translation(
        manufacturer_id=fields[FieldKind.MANUFACTURER],
        hardware_id=fields[FieldKind.HARDWARE],
        product_id=fields[FieldKind.PRODUCT],
        text=text_attr(translation, 'Text') if translation is not None else '',
    )


HARDWARE_STRATEGIES = {version: decode_hardware_data for version in SchemaVersion}


__all__ = ['decode_hardware_data', 'HARDWARE_STRATEGIES']
