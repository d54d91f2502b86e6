# Path: knxproj/tests/test_identifier_codec.py
"""
Tests for IdentifierCodec and identifier shapes.

Covers:
1. Prefix classification of manufacturer-data identifiers
2. Positional decoding of project-scoped identifiers
3. Canonical re-serialization
4. Required-component validation
"""

import pytest

from knxproj.errors import InvalidIdentifier
from knxproj.identifiers import (
    CompositeID,
    FieldKind,
    IdentifierCodec,
    compose,
    decode,
    decompose,
    fields_of,
    shapes,
)


# ============================================================================
# PREFIX CLASSIFICATION
# ============================================================================


def test_com_object_ref_components():
    cid = decompose('M-0080_A-1012-10-5227-O00C5_O-0_R-1')

    assert cid.manufacturer == 'M-0080'
    assert cid.application_program == 'A-1012-10-5227-O00C5'
    assert cid.com_object == 'O-0'
    assert cid.com_object_ref == 'R-1'
    assert cid.module is None
    assert cid.extras == ()


def test_dash_joined_tokens_are_not_split():
    cid = decompose('M-0007_H-6131.2F20-1_HP-3120-32-269B-3120-42-4C77')

    assert cid.hardware == 'H-6131.2F20-1'
    assert cid.hardware2program == 'HP-3120-32-269B-3120-42-4C77'


def test_product_identifier():
    cid = decompose('M-0080_H-2014.5F10.5F14-1_P-EB10430442')

    assert cid.populated == {
        FieldKind.MANUFACTURER: 'M-0080',
        FieldKind.HARDWARE: 'H-2014.5F10.5F14-1',
        FieldKind.PRODUCT: 'P-EB10430442',
    }


def test_module_component():
    cid = decompose('M-00FA_A-0001-01-0000_MD-1_O-3')

    assert cid.module == 'MD-1'
    assert cid.com_object == 'O-3'


def test_unknown_tokens_go_to_extras():
    cid = decompose('M-0080_X-1_O-0')

    assert cid.manufacturer == 'M-0080'
    assert cid.com_object == 'O-0'
    assert cid.extras == ('X-1',)


def test_duplicate_token_goes_to_extras():
    cid = decompose('M-0080_M-0081')

    assert cid.manufacturer == 'M-0080'
    assert cid.extras == ('M-0081',)


def test_empty_and_bare_tokens_go_to_extras():
    cid = decompose('M-0080__O-_7')

    assert cid.manufacturer == 'M-0080'
    assert cid.com_object is None
    assert cid.extras == ('', 'O-', '7')


def test_empty_identifier():
    cid = decompose('')

    assert cid.populated == {}
    assert cid.extras == ()
    assert compose(cid) == ''


def test_classify_token():
    assert IdentifierCodec.classify_token('GA-12') == FieldKind.GROUP_ADDRESS
    assert IdentifierCodec.classify_token('BP-3') == FieldKind.SPACE
    assert IdentifierCodec.classify_token('-3') is None
    assert IdentifierCodec.classify_token('plain') is None


# ============================================================================
# POSITIONAL SHAPES
# ============================================================================


def test_device_instance_is_positional():
    cid = decompose('P-0497-0_DI-1', shapes.DEVICE_INSTANCE)

    assert cid.project == 'P-0497-0'
    assert cid.device_instance == 'DI-1'
    assert cid.product is None


def test_area_prefix_is_not_read_as_application_program():
    cid = decompose('P-0497-0_A-1', shapes.AREA)

    assert cid.project == 'P-0497-0'
    assert cid.area == 'A-1'
    assert cid.application_program is None


def test_area_without_project():
    cid = decompose('A-2', shapes.AREA)

    assert cid.area == 'A-2'
    assert cid.project is None


def test_space_accepts_any_tag():
    assert decompose('P-0497-0_BP-3', shapes.SPACE).space == 'BP-3'
    assert decompose('P-0497-0_R-12', shapes.SPACE).space == 'R-12'


def test_positional_shape_with_unknown_arity():
    cid = decompose('P-0497-0_L-1_X-9', shapes.LINE)

    assert cid.populated == {}
    assert cid.extras == ('P-0497-0', 'L-1', 'X-9')


def test_positional_token_with_wrong_tag():
    cid = decompose('P-0497-0_GA-1', shapes.AREA)

    assert cid.project == 'P-0497-0'
    assert cid.area is None
    assert cid.extras == ('GA-1',)


# ============================================================================
# SERIALIZATION
# ============================================================================


@pytest.mark.parametrize('raw', [
    'M-0080_A-1012-10-5227-O00C5_O-0_R-1',
    'M-0007_H-6131.2F20-1_P-6131.2F20',
    'M-0007_H-6131.2F20-1_HP-3120-32-269B-3120-42-4C77',
    'M-00FA_A-0001-01-0000_MD-1_O-3',
])
def test_canonical_identifiers_are_preserved(raw):
    assert compose(decompose(raw)) == raw


def test_compose_is_idempotent():
    once = compose(decompose('R-1_O-0_M-0080_A-1012-10-5227-O00C5'))

    assert once == 'M-0080_A-1012-10-5227-O00C5_O-0_R-1'
    assert compose(decompose(once)) == once


def test_extras_follow_populated_fields():
    assert compose(decompose('X-1_M-0080')) == 'M-0080_X-1'


def test_positional_round_trip():
    cid = decompose('P-0497-0_BP-3', shapes.SPACE)

    assert compose(cid) == 'P-0497-0_BP-3'
    assert decompose(compose(cid), shapes.SPACE) == cid


def test_str_is_canonical_form():
    cid = CompositeID(manufacturer='M-0001', com_object='O-2')

    assert str(cid) == 'M-0001_O-2'


def test_composite_id_rejects_untagged_values():
    with pytest.raises(ValueError):
        CompositeID(manufacturer='0080')


# ============================================================================
# VALIDATION
# ============================================================================


def test_fields_of_returns_requested_kinds():
    cid = decompose('M-0080_A-1012-10-5227-O00C5_O-0_R-1')

    fields = fields_of(cid, [FieldKind.COM_OBJECT, FieldKind.MANUFACTURER])

    assert fields == {FieldKind.MANUFACTURER: 'M-0080', FieldKind.COM_OBJECT: 'O-0'}


def test_fields_of_accepts_a_generator():
    cid = decompose('M-0080_O-0')

    fields = fields_of(cid, (kind for kind in [FieldKind.MANUFACTURER, FieldKind.COM_OBJECT]))

    assert list(fields) == [FieldKind.MANUFACTURER, FieldKind.COM_OBJECT]


def test_fields_of_reports_missing_kinds():
    cid = decompose('M-0080_O-0')

    with pytest.raises(InvalidIdentifier) as excinfo:
        fields_of(cid, [FieldKind.MANUFACTURER, FieldKind.APPLICATION_PROGRAM, FieldKind.COM_OBJECT_REF])

    assert excinfo.value.raw == 'M-0080_O-0'
    assert excinfo.value.missing_kinds == (FieldKind.APPLICATION_PROGRAM, FieldKind.COM_OBJECT_REF)
    assert 'M-0080_O-0' in str(excinfo.value)


def test_decode_com_object_ref():
    fields = decode('M-0080_A-1012-10-5227-O00C5_O-0_R-1', shapes.COM_OBJECT_REF)

    assert fields[FieldKind.COM_OBJECT_REF] == 'R-1'
    assert fields[FieldKind.APPLICATION_PROGRAM] == 'A-1012-10-5227-O00C5'


def test_decode_com_object_instance_ref_short_and_long():
    short = decode('O-10_R-1', shapes.COM_OBJECT_INSTANCE_REF)
    long = decode('M-0007_A-3120-32-269B_O-10_R-1', shapes.COM_OBJECT_INSTANCE_REF)

    assert short[FieldKind.COM_OBJECT] == long[FieldKind.COM_OBJECT] == 'O-10'
    assert short[FieldKind.COM_OBJECT_REF] == long[FieldKind.COM_OBJECT_REF] == 'R-1'


def test_decode_rejects_incomplete_com_object():
    with pytest.raises(InvalidIdentifier) as excinfo:
        decode('M-0080_O-0', shapes.COM_OBJECT)

    assert excinfo.value.missing_kinds == (FieldKind.APPLICATION_PROGRAM,)


def test_decode_group_address_with_and_without_project():
    assert decode('P-0497-0_GA-1', shapes.GROUP_ADDRESS) == {
        FieldKind.PROJECT: 'P-0497-0',
        FieldKind.GROUP_ADDRESS: 'GA-1',
    }
    assert decode('GA-7', shapes.GROUP_ADDRESS) == {FieldKind.GROUP_ADDRESS: 'GA-7'}
