# Path: knxproj/tests/fixtures.py
"""
Test Fixtures for knxproj

Builds realistic ETS export archives in temporary directories.

Contains:
- XML documents per schema dialect (project meta, installation,
  manufacturer, hardware)
- Zip writers (plain, AES-encrypted via pyzipper, raw ZipInfo entries)
- A complete project export: knx_master.xml, P-0497/project.xml,
  P-0497.zip (installation, optionally encrypted), M-0007/ product data

Expected contents (all dialects):
- Project P-0497 'Testproject', ThreeLevel addresses
- Installation with areas A-1 (line L-1) and A-2 (line L-3 holding DI-1)
- DI-1 product M-0007_H-6131.2F20-1_P-6131.2F20, com objects
  O-10/R-1 -> [GA-1] and O-11/R-2 -> [GA-1, GA-2]
- Locations BP-1 > BP-2 (references DI-1)
- Group ranges GR-1 > GR-2 holding GA-1, GA-2
"""

import io
import zipfile
from pathlib import Path
from typing import Iterable, Optional, Union

import pyzipper

NAMESPACE = 'http://knx.org/xml/project/{version}'

PROJECT_ID = 'P-0497'
MANUFACTURER_ID = 'M-0007'
APPLICATION_PROGRAM_ID = 'A-3120-32-269B'
HARDWARE_ID = 'H-6131.2F20-1'
PRODUCT_ID = 'P-6131.2F20'
HARDWARE2PROGRAM_ID = 'HP-3120-32-269B-3120-42-4C77'

MANUFACTURER_FILE = f'{MANUFACTURER_ID}/{MANUFACTURER_ID}_{APPLICATION_PROGRAM_ID}.xml'
HARDWARE_FILE = f'{MANUFACTURER_ID}/Hardware.xml'


def namespace(version: str) -> str:
    return NAMESPACE.format(version=version)


# ============================================================================
# XML DOCUMENTS
# ============================================================================


def project_meta_xml(version: str = '20', name: str = 'Testproject', comment: str = '',
                     style: str = 'ThreeLevel') -> bytes:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<KNX xmlns="{namespace(version)}" CreatedBy="ETS5" ToolVersion="5.7.293.38111">
  <Project Id="{PROJECT_ID}">
    <ProjectInformation Name="{name}" Comment="{comment}" GroupAddressStyle="{style}" ProjectStart="2018-01-01T00:00:00" />
  </Project>
</KNX>
""".encode('utf-8')


def _com_object_refs(version: str) -> str:
    if version in ('11', '12', '13', '14'):
        return f"""
                <ComObjectInstanceRefs>
                  <ComObjectInstanceRef RefId="{MANUFACTURER_ID}_{APPLICATION_PROGRAM_ID}_O-10_R-1" DatapointType="DPST-1-1">
                    <Connectors>
                      <Send GroupAddressRefId="{PROJECT_ID}-0_GA-1" />
                    </Connectors>
                  </ComObjectInstanceRef>
                  <ComObjectInstanceRef RefId="O-11_R-2">
                    <Connectors>
                      <Send GroupAddressRefId="{PROJECT_ID}-0_GA-1" />
                      <!-- listening address -->
                      <Receive GroupAddressRefId="{PROJECT_ID}-0_GA-2" />
                    </Connectors>
                  </ComObjectInstanceRef>
                </ComObjectInstanceRefs>"""
    return """
                <ComObjectInstanceRefs>
                  <ComObjectInstanceRef RefId="O-10_R-1" DatapointType="DPST-1-1" Links="GA-1" />
                  <ComObjectInstanceRef RefId="O-11_R-2" Links="GA-1 GA-2" />
                </ComObjectInstanceRefs>"""


def _device(version: str) -> str:
    return f"""
              <DeviceInstance Id="{PROJECT_ID}-0_DI-1" Name="Kitchen actuator" Address="1"
                  ProductRefId="{MANUFACTURER_ID}_{HARDWARE_ID}_{PRODUCT_ID}"
                  Hardware2ProgramRefId="{MANUFACTURER_ID}_{HARDWARE_ID}_{HARDWARE2PROGRAM_ID}">{_com_object_refs(version)}
              </DeviceInstance>"""


def _device_line(version: str) -> str:
    devices = _device(version)
    if version in ('21', '22', '23'):
        devices = f"""
            <Segment Id="{PROJECT_ID}-0_S-3" Name="" Number="0" MediumTypeRefId="MT-0">{devices}
            </Segment>"""
    return f"""
          <Line Id="{PROJECT_ID}-0_L-3" Name="New line" Address="1">{devices}
          </Line>"""


def installation_xml(version: str = '20', group_address_id: Optional[str] = None) -> bytes:
    """Installation file (P-0497/0.xml) for a dialect."""
    second_address = group_address_id or f'{PROJECT_ID}-0_GA-2'
    return f"""<?xml version="1.0" encoding="utf-8"?>
<KNX xmlns="{namespace(version)}" CreatedBy="ETS5" ToolVersion="5.7.293.38111">
  <Project Id="{PROJECT_ID}">
    <Installations>
      <Installation Name="" InstallationId="0" BCUKey="4294967295">
        <Topology>
          <Area Id="{PROJECT_ID}-0_A-1" Name="Backbone area" Address="0">
            <Line Id="{PROJECT_ID}-0_L-1" Name="Backbone line" Address="0" />
          </Area>
          <Area Id="{PROJECT_ID}-0_A-2" Name="New area" Address="1">{_device_line(version)}
          </Area>
        </Topology>
        <Locations>
          <Space Id="{PROJECT_ID}-0_BP-1" Name="Home" Type="Building">
            <Space Id="{PROJECT_ID}-0_BP-2" Name="Kitchen" Type="Room">
              <DeviceInstanceRef RefId="{PROJECT_ID}-0_DI-1" />
            </Space>
          </Space>
        </Locations>
        <GroupAddresses>
          <GroupRanges>
            <GroupRange Id="{PROJECT_ID}-0_GR-1" Name="Lights" RangeStart="1" RangeEnd="2047">
              <GroupRange Id="{PROJECT_ID}-0_GR-2" Name="Ground floor" RangeStart="1" RangeEnd="255">
                <GroupAddress Id="{PROJECT_ID}-0_GA-1" Name="Kitchen light" Address="1" DatapointType="DPST-1-1" />
                <GroupAddress Id="{second_address}" Name="Kitchen light status" Address="2" Description="feedback" />
              </GroupRange>
            </GroupRange>
          </GroupRanges>
        </GroupAddresses>
      </Installation>
    </Installations>
  </Project>
</KNX>
""".encode('utf-8')


def manufacturer_xml(version: str = '20', com_object_id: Optional[str] = None) -> bytes:
    """Manufacturer file with one application program."""
    program = f'{MANUFACTURER_ID}_{APPLICATION_PROGRAM_ID}'
    com_object_id = com_object_id or f'{program}_O-10'
    return f"""<?xml version="1.0" encoding="utf-8"?>
<KNX xmlns="{namespace(version)}" CreatedBy="ETS5" ToolVersion="5.7.293.38111">
  <ManufacturerData>
    <Manufacturer RefId="{MANUFACTURER_ID}">
      <ApplicationPrograms>
        <ApplicationProgram Id="{program}" Name="Switch 4f 16A" ApplicationVersion="18" ProgramType="ApplicationProgram" MaskVersion="MV-0701">
          <Static>
            <ComObjectTable>
              <ComObject Id="{com_object_id}" Name="Switch" Text="Channel A" FunctionText="On/Off" ObjectSize="1 Bit"
                  DatapointType="DPST-1-1" Priority="Low" ReadFlag="Disabled" WriteFlag="Enabled"
                  CommunicationFlag="Enabled" TransmitFlag="Disabled" UpdateFlag="Disabled" ReadOnInitFlag="Disabled" />
              <ComObject Id="{program}_O-11" Name="Status" Text="Channel A" ObjectSize="1 Bit" ReadFlag="Enabled"
                  CommunicationFlag="Enabled" TransmitFlag="Enabled" />
            </ComObjectTable>
            <ComObjectRefs>
              <ComObjectRef Id="{program}_O-10_R-1" RefId="{program}_O-10" Text="Kitchen switch" ReadFlag="Enabled" />
              <ComObjectRef Id="{program}_O-11_R-2" RefId="{program}_O-11" />
            </ComObjectRefs>
          </Static>
        </ApplicationProgram>
      </ApplicationPrograms>
    </Manufacturer>
  </ManufacturerData>
</KNX>
""".encode('utf-8')


def hardware_xml(version: str = '20') -> bytes:
    """Hardware file with one hardware, product and program binding."""
    hardware = f'{MANUFACTURER_ID}_{HARDWARE_ID}'
    return f"""<?xml version="1.0" encoding="utf-8"?>
<KNX xmlns="{namespace(version)}" CreatedBy="ETS5" ToolVersion="5.7.293.38111">
  <ManufacturerData>
    <Manufacturer RefId="{MANUFACTURER_ID}">
      <Languages>
        <Language Identifier="de-DE">
          <TranslationUnit RefId="{hardware}_{PRODUCT_ID}">
            <TranslationElement RefId="{hardware}_{PRODUCT_ID}">
              <Translation AttributeName="Text" Text="Schaltaktor 4-fach, 16 A" />
            </TranslationElement>
          </TranslationUnit>
        </Language>
      </Languages>
      <Hardware>
        <Hardware Id="{hardware}" Name="Switch actuator 4-fold" SerialNumber="6131.2F20" VersionNumber="1">
          <Products>
            <Product Id="{hardware}_{PRODUCT_ID}" Text="Switch actuator 4-fold, 16 A" OrderNumber="MTN649204" />
          </Products>
          <Hardware2Programs>
            <Hardware2Program Id="{hardware}_{HARDWARE2PROGRAM_ID}" MediumTypes="MT-0">
              <ApplicationProgramRef RefId="{MANUFACTURER_ID}_{APPLICATION_PROGRAM_ID}" />
            </Hardware2Program>
          </Hardware2Programs>
        </Hardware>
      </Hardware>
    </Manufacturer>
  </ManufacturerData>
</KNX>
""".encode('utf-8')


def master_xml(version: str = '20') -> bytes:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<KNX xmlns="{namespace(version)}"><MasterData Version="0" /></KNX>
""".encode('utf-8')


# ============================================================================
# ZIP WRITERS
# ============================================================================


def zip_bytes(entries: dict[str, bytes], password: Optional[Union[str, bytes]] = None) -> bytes:
    """Zip archive in memory; AES-encrypted when a password is given."""
    buffer = io.BytesIO()
    if password is None:
        with zipfile.ZipFile(buffer, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            for name, data in entries.items():
                zf.writestr(name, data)
    else:
        if isinstance(password, str):
            password = password.encode('utf-8')
        with pyzipper.AESZipFile(buffer, 'w', compression=pyzipper.ZIP_DEFLATED,
                                 encryption=pyzipper.WZ_AES) as zf:
            zf.setpassword(password)
            for name, data in entries.items():
                zf.writestr(name, data)
    return buffer.getvalue()


def write_zip(path: Path, entries: dict[str, bytes], password: Optional[Union[str, bytes]] = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(zip_bytes(entries, password))
    return path


def write_raw_zip(path: Path, entries: Iterable[tuple[zipfile.ZipInfo, bytes]]) -> Path:
    """Zip with hand-made ZipInfo entries (unsafe names, symlinks, ...)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, 'w') as zf:
        for info, data in entries:
            zf.writestr(info, data)
    return path


def nested_zip_chain(depth: int, leaf: Optional[dict[str, bytes]] = None) -> bytes:
    """
    Containers nested depth levels deep.

    Level n holds 'level<n+1>.zip'; the innermost holds leaf.
    """
    data = zip_bytes(leaf or {'leaf.xml': master_xml()})
    for level in range(depth, 0, -1):
        data = zip_bytes({f'level{level}.zip': data})
    return data


# ============================================================================
# COMPLETE EXPORTS
# ============================================================================


def project_export_entries(version: str = '20', password: Optional[str] = None) -> dict[str, bytes]:
    """Entries of a .knxproj export for one dialect."""
    inner = zip_bytes({'0.xml': installation_xml(version)}, password)
    return {
        'knx_master.xml': master_xml(version),
        f'{PROJECT_ID}/': b'',
        f'{PROJECT_ID}/project.xml': project_meta_xml(version),
        f'{PROJECT_ID}.zip': inner,
        f'{MANUFACTURER_ID}/Catalog.xml': master_xml(version),
        MANUFACTURER_FILE: manufacturer_xml(version),
        HARDWARE_FILE: hardware_xml(version),
        'Thumbnail.png': b'\x89PNG\r\n\x1a\n',
    }


def create_project_export(directory: Path, version: str = '20', password: Optional[str] = None,
                          name: str = 'Testproject.knxproj') -> Path:
    """Write a complete .knxproj export into directory."""
    return write_zip(directory / name, project_export_entries(version, password))
