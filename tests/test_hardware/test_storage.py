"""Tests for physical disk detection and its legacy fallback."""

import pytest

from hostfetch.hardware.storage import (
    FallbackStorage,
    PrimaryStorage,
    classify_legacy_media,
    classify_primary_media,
    probe_storage,
)


class TestClassifyPrimaryMedia:
    @pytest.mark.parametrize(
        "media,bus,expected",
        [
            (4, 11, "SSD"),
            (3, 11, "HDD"),
            (5, 18, "SCM"),
            (0, 17, "SSD"),
            (0, 11, "Unknown"),
            (None, None, "Unknown"),
            ("SSD", "SATA", "SSD"),
            ("Unspecified", "NVMe", "SSD"),
            ("Unspecified", "USB", "Unknown"),
        ],
    )
    def test_classification(self, media, bus, expected):
        assert classify_primary_media(media, bus) == expected


class TestClassifyLegacyMedia:
    def test_solid_state_media(self):
        assert classify_legacy_media("Solid State Drive", "Generic Disk") == "SSD"

    def test_ssd_in_model(self):
        assert classify_legacy_media("Fixed hard disk media", "Samsung SSD 870 EVO") == "SSD"

    def test_nvme_in_model(self):
        assert classify_legacy_media("Fixed hard disk media", "WDC NVMe SN740") == "SSD"

    def test_uncertain_hdd(self):
        assert classify_legacy_media("Fixed hard disk media", "ST2000DM008-2FR102") == "HDD?"

    def test_missing_fields(self):
        assert classify_legacy_media(None, None) == "HDD?"


class TestProbeStorage:
    def test_primary_path(self, fake_source):
        source = fake_source()
        result = probe_storage(source)

        assert isinstance(result, PrimaryStorage)
        assert result.source == "primary"
        (disk,) = result.devices
        assert disk.name == "Samsung SSD 980 PRO 1TB"
        assert disk.size_gb == 931.51
        assert disk.media_type == "SSD"
        assert disk.bus_type == "NVMe"
        assert disk.serial == "S5GXNX0T123456"
        assert ("Win32_DiskDrive", "root/cimv2") not in source.calls

    def test_primary_queries_storage_namespace(self, fake_source):
        source = fake_source()
        probe_storage(source)
        assert source.calls[0] == ("MSFT_PhysicalDisk", "root/Microsoft/Windows/Storage")

    def test_fallback_path(self, fake_source):
        result = probe_storage(fake_source(failing=["MSFT_PhysicalDisk"]))

        assert isinstance(result, FallbackStorage)
        assert result.source == "fallback"
        assert "Access denied" in result.reason
        ssd, hdd = result.devices
        assert ssd.media_type == "SSD"
        assert ssd.bus_type == "SCSI"
        assert hdd.name == "ST2000DM008-2FR102"
        assert hdd.media_type == "HDD?"
        assert hdd.bus_type == "IDE"
        assert hdd.serial == "ZFL0ABCD"

    def test_fallback_classes_are_bounded(self, fake_source):
        result = probe_storage(fake_source(failing=["MSFT_PhysicalDisk"]))
        assert {d.media_type for d in result.devices} <= {"SSD", "HDD?", "Unknown"}

    def test_both_paths_fail(self, fake_source):
        result = probe_storage(fake_source(failing=["MSFT_PhysicalDisk", "Win32_DiskDrive"]))
        assert isinstance(result, FallbackStorage)
        assert result.devices == ()

    def test_empty_primary_does_not_fall_back(self, fake_source):
        result = probe_storage(fake_source(MSFT_PhysicalDisk=[]))
        assert isinstance(result, PrimaryStorage)
        assert result.devices == ()

    def test_same_shape_on_both_paths(self, fake_source):
        primary = probe_storage(fake_source()).devices[0]
        fallback = probe_storage(fake_source(failing=["MSFT_PhysicalDisk"])).devices[0]
        assert type(primary) is type(fallback)
        assert primary.name == fallback.name
