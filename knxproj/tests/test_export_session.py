# Path: knxproj/tests/test_export_session.py
"""
Tests for ExportArchive / open_export_archive.

End-to-end runs over complete project exports: extraction,
classification and decoding, plus temporary directory ownership.
"""

from pathlib import Path

import pytest

from knxproj import open_export_archive
from knxproj.decoding.models import HardwareData, ManufacturerData, Project, ProjectInfo
from knxproj.engine.classifier import FileRole
from knxproj.errors import DecryptionFailed, MalformedFileName, UnsupportedSchemaError
from knxproj.tests.fixtures import (
    MANUFACTURER_ID,
    PROJECT_ID,
    create_project_export,
    installation_xml,
    project_export_entries,
    write_zip,
)


def session_dirs(work_dir: Path) -> list[Path]:
    return [path for path in work_dir.iterdir() if path.is_dir()]


@pytest.fixture
def work_dir(tmp_path):
    directory = tmp_path / 'work'
    directory.mkdir()
    return directory


# ============================================================================
# END TO END
# ============================================================================


@pytest.mark.parametrize('version', ['11', '20', '21'])
def test_decode_all_plain_export(tmp_path, work_dir, version):
    source = create_project_export(tmp_path, version)

    with open_export_archive(source, work_dir=work_dir) as archive:
        outcomes = archive.decode_all()

    assert [outcome.ref.role for outcome in outcomes] == [
        FileRole.PROJECT_META,
        FileRole.INSTALLATION,
        FileRole.MANUFACTURER,
        FileRole.HARDWARE,
    ]
    assert all(outcome.ok for outcome in outcomes)

    info, project, manufacturer, hardware = (outcome.document for outcome in outcomes)
    assert isinstance(info, ProjectInfo) and info.name == 'Testproject'
    assert isinstance(project, Project) and project.id == PROJECT_ID
    assert [device.id for device in project.installations[0].iter_devices()] == ['DI-1']
    assert isinstance(manufacturer, ManufacturerData) and manufacturer.id == MANUFACTURER_ID
    assert isinstance(hardware, HardwareData) and hardware.manufacturer_id == MANUFACTURER_ID


def test_encrypted_project(tmp_path, work_dir):
    source = create_project_export(tmp_path, '21', password='secret')

    with open_export_archive(source, password='secret', work_dir=work_dir) as archive:
        project_ref = archive.project_files[0]
        installation = archive.decode(project_ref.installation_files[0]).installations[0]

    assert installation.locations[0].name == 'Home'


def test_password_resolver(tmp_path, work_dir):
    source = create_project_export(tmp_path, '20', password='secret')
    requested = []

    def resolver(entry_path):
        requested.append(entry_path)
        return 'secret'

    with open_export_archive(source, password_resolver=resolver, work_dir=work_dir) as archive:
        assert len(archive.project_files[0].installation_files) == 1

    assert requested == ['0.xml']


def test_archive_properties(tmp_path, work_dir):
    source = create_project_export(tmp_path)

    with open_export_archive(source, work_dir=work_dir) as archive:
        assert [ref.project_id for ref in archive.project_files] == [PROJECT_ID]
        assert [ref.manufacturer_id for ref in archive.manufacturer_files] == [MANUFACTURER_ID]
        assert len(archive.hardware_files) == 1
        assert archive.work_dir.parent == work_dir
        assert 'open' in repr(archive)


# ============================================================================
# TEMPORARY DIRECTORY
# ============================================================================


def test_close_removes_extracted_tree(tmp_path, work_dir):
    archive = open_export_archive(create_project_export(tmp_path), work_dir=work_dir)
    extracted = archive.work_dir
    assert extracted.is_dir()

    archive.close()
    archive.close()

    assert archive.closed
    assert not extracted.exists()
    assert session_dirs(work_dir) == []


def test_context_manager_closes_on_error(tmp_path, work_dir):
    with pytest.raises(RuntimeError):
        with open_export_archive(create_project_export(tmp_path), work_dir=work_dir):
            raise RuntimeError('boom')

    assert session_dirs(work_dir) == []


def test_failed_open_removes_temp_dir(tmp_path, work_dir):
    source = create_project_export(tmp_path, password='secret')

    with pytest.raises(DecryptionFailed):
        open_export_archive(source, password='wrong', work_dir=work_dir)

    assert session_dirs(work_dir) == []


def test_failed_classification_removes_temp_dir(tmp_path, work_dir):
    entries = project_export_entries()
    entries[f'{MANUFACTURER_ID}/{MANUFACTURER_ID}_A-1_X-2.xml'] = b'<KNX />'
    source = write_zip(tmp_path / 'broken.knxproj', entries)

    with pytest.raises(MalformedFileName):
        open_export_archive(source, work_dir=work_dir)

    assert session_dirs(work_dir) == []


def test_decode_after_close(tmp_path, work_dir):
    archive = open_export_archive(create_project_export(tmp_path), work_dir=work_dir)
    ref = archive.project_files[0]
    archive.close()

    with pytest.raises(ValueError):
        archive.decode(ref)


def test_temp_dir_from_config(tmp_path, monkeypatch):
    from knxproj.core.config_loader import ConfigLoader

    configured = tmp_path / 'configured'
    monkeypatch.setenv('KNXPROJ_TEMP_DIR', str(configured))
    config = ConfigLoader()
    config.reload()
    try:
        with open_export_archive(create_project_export(tmp_path), config=config) as archive:
            assert archive.work_dir.parent == configured
    finally:
        monkeypatch.delenv('KNXPROJ_TEMP_DIR')
        config.reload()


# ============================================================================
# ERRORS
# ============================================================================


def test_one_bad_document_does_not_stop_siblings(tmp_path, work_dir):
    entries = project_export_entries('20')
    entries[f'{PROJECT_ID}/3.xml'] = installation_xml('20').replace(b'project/20', b'project/99')
    source = write_zip(tmp_path / 'mixed.knxproj', entries)

    with open_export_archive(source, work_dir=work_dir) as archive:
        outcomes = archive.decode_all()

    failed = [outcome for outcome in outcomes if not outcome.ok]
    assert len(outcomes) == 5
    assert len(failed) == 1
    assert failed[0].ref.path.name == '3.xml'
    assert isinstance(failed[0].error, UnsupportedSchemaError)
    assert failed[0].document is None


def test_password_and_resolver_are_exclusive(tmp_path, work_dir):
    with pytest.raises(ValueError):
        open_export_archive(
            create_project_export(tmp_path),
            password='secret',
            password_resolver=lambda entry_path: 'secret',
            work_dir=work_dir,
        )

    assert session_dirs(work_dir) == []
