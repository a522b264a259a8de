"""Pytest configuration and fixtures for synology-cli tests.

This module provides common fixtures for testing the client and CLI,
including configuration, stubbed DSM responses, and sample payloads.
"""

import re
from pathlib import Path

import pytest
from pytest_httpx import HTTPXMock

from synology_cli.client.base import SynologyClient
from synology_cli.client.models import Connection
from synology_cli.config import Config, ConfigManager, ProfileConfig

ORIGIN = "http://nas.local:5000"

AUTH_URL = re.compile(r"^http://nas\.local:5000/webapi/auth\.cgi\?.*method=login")
LOGOUT_URL = re.compile(r"^http://nas\.local:5000/webapi/auth\.cgi\?.*method=logout")
UTILIZATION_URL = re.compile(r"^http://nas\.local:5000/webapi/entry\.cgi\?api=SYNO\.Core\.System\.Utilization&")
SHARE_URL = re.compile(r"^http://nas\.local:5000/webapi/entry\.cgi\?api=SYNO\.Core\.Share&")
STORAGE_URL = re.compile(r"^http://nas\.local:5000/webapi/entry\.cgi\?api=SYNO\.Storage\.CGI\.Storage&")


# Sample API responses for testing
MOCK_AUTH = {"data": {"sid": "abc123", "is_portal_port": False}, "success": True}

MOCK_AUTH_FAILED = {"error": {"code": 400}, "success": False}

MOCK_LOGOUT = {"success": True}

MOCK_SHARES = {
    "data": {
        "shares": [
            {
                "name": "homes",
                "uuid": "u1",
                "quota_value": 100.0,
                "share_quota_used": 42.5,
                "is_usb_share": False,
                "vol_path": "/volume1",
            }
        ],
        "total": 1,
    },
    "success": True,
}

MOCK_UTILIZATION = {
    "data": {
        "cpu": {
            "15min_load": 12,
            "1min_load": 30,
            "5min_load": 18,
            "device": "System",
            "other_load": 1,
            "system_load": 3,
            "user_load": 7,
        },
        "disk": {
            "disk": [
                {
                    "device": "sata1",
                    "display_name": "Drive 1",
                    "read_access": 2,
                    "read_byte": 8192,
                    "type": "internal",
                    "utilization": 4,
                    "write_access": 5,
                    "write_byte": 20480,
                }
            ],
            "total": {
                "device": "total",
                "read_access": 2,
                "read_byte": 8192,
                "utilization": 4,
                "write_access": 5,
                "write_byte": 20480,
            },
        },
        "lun": [],
        "memory": {
            "avail_real": 512000,
            "avail_swap": 2097152,
            "buffer": 10240,
            "cached": 700000,
            "device": "Memory",
            "memory_size": 2097152,
            "real_usage": 27,
            "si_disk": 0,
            "so_disk": 0,
            "swap_usage": 1,
            "total_real": 1906756,
            "total_swap": 2097084,
        },
        "network": [
            {"device": "total", "rx": 1524, "tx": 2711},
            {"device": "eth0", "rx": 1524, "tx": 2711},
        ],
        "space": {
            "total": {
                "device": "total",
                "read_access": 0,
                "read_byte": 0,
                "utilization": 1,
                "write_access": 3,
                "write_byte": 12288,
            },
            "volume": [
                {
                    "device": "md2",
                    "display_name": "volume1",
                    "read_access": 0,
                    "read_byte": 0,
                    "utilization": 1,
                    "write_access": 3,
                    "write_byte": 12288,
                }
            ],
        },
        "time": 1700000000,
    },
    "success": True,
}

MOCK_STORAGE = {
    "data": {
        "disks": [
            {
                "container": {"order": 0, "str": "DS218+", "supportPwrBtnDisable": False, "type": "internal"},
                "device": "/dev/sata1",
                "diskType": "SATA",
                "firm": "SC60",
                "id": "sata1",
                "is4Kn": False,
                "isSsd": False,
                "longName": "Drive 1",
                "model": "ST4000VN008-2DR166",
                "name": "Drive 1",
                "num_id": 1,
                "overview_status": "normal",
                "pciSlot": -1,
                "portType": "normal",
                "serial": "ZDH123",
                "size_total": "4000787030016",
                "smart_status": "normal",
                "status": "normal",
                "temp": 34,
                "used_by": "reuse_1",
                "vendor": "Seagate",
                "firmware_rollback": "not-a-modelled-field",
            }
        ],
        "env": {
            "batchtask": {"max_task": 64, "remain_task": 64},
            "bay_number": "2",
            "ebox": [],
            "isns": {"address": "", "enabled": False},
            "max_fs_bytes": "118747255799808",
            "model_name": "DS218+",
            "ram_size": 2,
            "status": {"system_crashed": False, "system_need_repair": False},
            "support": {"ebox": True, "raid_cross": True, "sysdef": True},
        },
        "hotSpareConf": {"cross_repair": True, "disable_repair": []},
        "hotSpares": [],
        "iscsiLuns": [
            {
                "can_do": {"delete": True, "migrate": {"to_shr2": 1}},
                "id": "lun_1",
                "iscsi_lun": {
                    "blkNum": "209715200",
                    "lid": 1,
                    "location": "/volume1",
                    "mapped_targets": [1],
                    "name": "LUN-1",
                    "scheduled_task": [
                        {
                            "general": {
                                "lid": 1,
                                "snap_rotate": True,
                                "snap_type": "app",
                                "task_enabled": True,
                                "task_name": "nightly",
                                "tid": 7,
                            },
                            "schedule": {
                                "date": "2023/11/14",
                                "hour": 2,
                                "min": 30,
                                "next_trigger_time": "2023/11/15 02:30",
                                "repeat_hour_store_config": None,
                                "week_name": "0,1,2,3,4,5,6",
                            },
                        }
                    ],
                    "size": "107374182400",
                    "thin_provision": True,
                    "uuid": "lun-uuid-1",
                },
                "num_id": 1,
                "progress": {"percent": "-1", "step": "none"},
                "status": "normal",
            }
        ],
        "iscsiTargets": [
            {
                "auth": {"mutual_username": "", "type": "none", "username": ""},
                "enabled": True,
                "iqn": "iqn.2000-01.com.synology:nas.Target-1",
                "masking": [{"iqn": "iqn.1991-05.com.microsoft:pc", "permission": "rw"}],
                "name": "Target-1",
                "num_id": 1,
                "status": "connected",
                "tid": 1,
            }
        ],
        "ports": [],
        "ssdCaches": [],
        "storagePools": [],
        "volumes": [
            {
                "atime_opt": "relatime",
                "cacheStatus": "",
                "can_do": {"convert_shr_to_pool": 2, "delete": True, "expand_by_disk": 1},
                "device_type": "shr_without_disk_protect",
                "disks": ["sata1"],
                "fs_type": "btrfs",
                "id": "volume_1",
                "is_writable": True,
                "num_id": 1,
                "pool_path": "reuse_1",
                "raids": [
                    {
                        "designedDiskCount": 1,
                        "devices": [{"id": "sata1", "slot": 0, "status": "normal"}],
                        "minDevSize": "3990593536",
                        "normalDevCount": 1,
                        "raidPath": "/dev/md2",
                        "raidStatus": 1,
                        "spares": [],
                    }
                ],
                "size": {
                    "free_inode": "0",
                    "total": "3839999680512",
                    "total_device": "3990593536000",
                    "total_inode": "0",
                    "used": "1919999840256",
                },
                "ssd_trim": {"support": "not support"},
                "status": "normal",
                "vol_path": "/volume1",
                "vspace_can_do": {
                    "drbd": {"resize": {"can_do": True, "errCode": 0, "stopService": False}},
                    "flashcache": {"apply": {"can_do": True, "errCode": 0, "stopService": False}},
                    "snapshot": {"resize": {"can_do": True, "errCode": 0, "stopService": False}},
                },
            }
        ],
    },
    "success": True,
}


@pytest.fixture
def connection() -> Connection:
    """Connection to the stubbed DiskStation."""
    return Connection(origin=ORIGIN, token="abc123")


@pytest.fixture
def client() -> SynologyClient:
    """Client without timeout override."""
    return SynologyClient()


@pytest.fixture
def mock_config_dir(tmp_path: Path, monkeypatch) -> Path:
    """Point the configuration directory at a temporary path.

    Args:
        tmp_path: Pytest temporary directory fixture
        monkeypatch: Pytest monkeypatch fixture

    Returns:
        Path to temporary config directory
    """
    config_dir = tmp_path / ".synology-cli"
    monkeypatch.setenv("SYNOLOGY_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def mock_profile_config() -> ProfileConfig:
    """Profile pointing at the stubbed DiskStation."""
    return ProfileConfig(
        host="nas.local",
        port=5000,
        account="admin",
        password="pw",
        timeout=30,
    )


@pytest.fixture
def mock_config_file(mock_config_dir: Path, mock_profile_config: ProfileConfig) -> Path:
    """Write a configuration with a single active 'default' profile.

    Returns:
        Path to configuration file
    """
    config_mgr = ConfigManager()
    config_mgr.save(Config(active_profile="default", profiles={"default": mock_profile_config}))
    return config_mgr.config_file


@pytest.fixture
def httpx_mock_session(httpx_mock: HTTPXMock) -> HTTPXMock:
    """Register the login and logout responses every CLI query makes.

    Args:
        httpx_mock: pytest-httpx mock fixture

    Returns:
        Configured HTTPXMock instance
    """
    httpx_mock.add_response(url=AUTH_URL, json=MOCK_AUTH)
    httpx_mock.add_response(url=LOGOUT_URL, json=MOCK_LOGOUT)
    return httpx_mock


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration between tests."""
    import logging

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)

    yield

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
