"""Shared fixtures: an in-memory inventory source with canned CIM rows."""

import pytest

from hostfetch.hardware.source import CimQueryError, InventorySource

GB = 1024**3


class FakeSource(InventorySource):
    """Serve canned rows per class; classes listed in ``failing`` raise."""

    def __init__(self, rows=None, failing=()):
        self.rows = rows or {}
        self.failing = set(failing)
        self.calls = []

    def query(self, class_name, namespace="root/cimv2"):
        self.calls.append((class_name, namespace))
        if class_name in self.failing:
            raise CimQueryError(f"{class_name}: Access denied")
        return list(self.rows.get(class_name, []))


SAMPLE_ROWS = {
    "Win32_OperatingSystem": [
        {
            "Caption": "Microsoft Windows 11 Pro",
            "Version": "10.0.22631",
            "OSArchitecture": "64-bit",
            "LastBootUpTime": "/Date(1700000000000)/",
        }
    ],
    "Win32_Processor": [
        {
            "Name": "12th Gen Intel(R) Core(TM) i7-12700H",
            "Manufacturer": "GenuineIntel",
            "NumberOfCores": 14,
            "NumberOfLogicalProcessors": 20,
            "MaxClockSpeed": 2300,
        }
    ],
    "Win32_VideoController": [
        {
            "Name": "NVIDIA GeForce RTX 3060 Laptop GPU",
            "AdapterRAM": 4 * GB,
            "DriverVersion": "31.0.15.3623",
            "DriverDate": "/Date(1687910400000)/",
        },
        {
            "Name": "Intel(R) Iris(R) Xe Graphics",
            "AdapterRAM": 1 * GB,
            "DriverVersion": "31.0.101.4502",
            "DriverDate": "20230602000000.000000-000",
        },
    ],
    "Win32_PhysicalMemory": [
        {
            "DeviceLocator": "DIMM0",
            "Capacity": 16 * GB,
            "SMBIOSMemoryType": 34,
            "MemoryType": 0,
            "Speed": 4800,
            "Manufacturer": "Samsung",
            "PartNumber": "M425R2GA3BB0-CQKOL",
        },
        {
            "DeviceLocator": "DIMM1",
            "Capacity": 16 * GB,
            "SMBIOSMemoryType": 34,
            "MemoryType": 0,
            "Speed": 4800,
            "Manufacturer": "Samsung",
            "PartNumber": "M425R2GA3BB0-CQKOL",
        },
    ],
    "MSFT_PhysicalDisk": [
        {
            "FriendlyName": "Samsung SSD 980 PRO 1TB",
            "Size": 1000204886016,
            "MediaType": 4,
            "BusType": 17,
            "SerialNumber": "S5GXNX0T123456",
        }
    ],
    "Win32_DiskDrive": [
        {
            "Model": "Samsung SSD 980 PRO 1TB",
            "Size": 1000202273280,
            "MediaType": "Fixed hard disk media",
            "InterfaceType": "SCSI",
            "SerialNumber": "0025_3851_0000_0001.",
        },
        {
            "Model": "ST2000DM008-2FR102",
            "Size": 2000396321280,
            "MediaType": "Fixed hard disk media",
            "InterfaceType": "IDE",
            "SerialNumber": "ZFL0ABCD",
        },
    ],
    "Win32_LogicalDisk": [
        {"DeviceID": "C:", "VolumeName": "Windows", "DriveType": 3, "FileSystem": "NTFS",
         "Size": 500 * GB, "FreeSpace": 120 * GB},
        {"DeviceID": "D:", "VolumeName": "USB", "DriveType": 2, "FileSystem": "FAT32",
         "Size": 32 * GB, "FreeSpace": 30 * GB},
        {"DeviceID": "Z:", "VolumeName": "share", "DriveType": 4, "FileSystem": "NTFS",
         "Size": 1000 * GB, "FreeSpace": 10 * GB},
    ],
    "MSFT_NetIPAddress": [
        {"IPAddress": "192.168.1.42", "InterfaceAlias": "Wi-Fi", "AddressFamily": 2, "PrefixOrigin": 3},
        {"IPAddress": "10.0.0.5", "InterfaceAlias": "Ethernet", "AddressFamily": 2, "PrefixOrigin": 1},
        {"IPAddress": "127.0.0.1", "InterfaceAlias": "Loopback Pseudo-Interface 1",
         "AddressFamily": 2, "PrefixOrigin": 1},
        {"IPAddress": "169.254.10.20", "InterfaceAlias": "Ethernet 2", "AddressFamily": 2, "PrefixOrigin": 3},
        {"IPAddress": "172.20.0.1", "InterfaceAlias": "vEthernet (WSL)", "AddressFamily": 2, "PrefixOrigin": 2},
        {"IPAddress": "fe80::1", "InterfaceAlias": "Wi-Fi", "AddressFamily": 23, "PrefixOrigin": 4},
    ],
}


@pytest.fixture
def sample_rows():
    return {name: [dict(row) for row in rows] for name, rows in SAMPLE_ROWS.items()}


@pytest.fixture
def fake_source(sample_rows):
    """Factory for a FakeSource preloaded with a typical laptop inventory."""

    def _create(failing=(), **overrides):
        rows = dict(sample_rows)
        rows.update(overrides)
        return FakeSource(rows=rows, failing=failing)

    return _create
