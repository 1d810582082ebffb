"""Shared fixtures: an in-memory NetworkManager bus and a fake sysfs tree."""

import pytest

from collectors.nm_bus import (
    ACTIVE_IFACE,
    AP_IFACE,
    DEVICE_IFACE,
    IP4_IFACE,
    NM_IFACE,
    NM_PATH,
    WIRELESS_IFACE,
)
from core.errors import BusCommunicationError

AC_PREFIX = "/org/freedesktop/NetworkManager/ActiveConnection/"
DEV_PREFIX = "/org/freedesktop/NetworkManager/Devices/"
IP4_PREFIX = "/org/freedesktop/NetworkManager/IP4Config/"
AP_PREFIX = "/org/freedesktop/NetworkManager/AccessPoint/"


class FakeBus:
    """Dict-backed property reader that records every read in order."""

    def __init__(self):
        self.props = {}
        self.calls = []
        self.failing = set()

    def set(self, path, interface, name, value):
        self.props[(path, interface, name)] = value

    def fail(self, path, interface, name):
        self.failing.add((path, interface, name))

    def get(self, path, interface, name):
        key = (path, interface, name)
        self.calls.append(key)
        if key in self.failing or key not in self.props:
            raise BusCommunicationError(f"reading {interface}.{name} of {path}: no such property")
        return self.props[key]

    def paths_read(self):
        return [c[0] for c in self.calls]

    def add_connection(self, n, conn_type="802-3-ethernet", default=False, vpn=False,
                       iface="eth0", addresses=None, devices=None, ssid=None):
        """Register active connection n with one device and one IPv4 config."""
        ac = f"{AC_PREFIX}{n}"
        ip4 = f"{IP4_PREFIX}{n}"
        dev = f"{DEV_PREFIX}{n}"
        if devices is None:
            devices = [dev]
        if addresses is None:
            addresses = [{"address": f"192.168.1.{n}", "prefix": 24}]

        self.set(ac, ACTIVE_IFACE, "State", 2)
        self.set(ac, ACTIVE_IFACE, "Ip4Config", ip4)
        self.set(ac, ACTIVE_IFACE, "Type", conn_type)
        self.set(ac, ACTIVE_IFACE, "Default", default)
        self.set(ac, ACTIVE_IFACE, "Vpn", vpn)
        self.set(ac, ACTIVE_IFACE, "Devices", devices)
        self.set(ip4, IP4_IFACE, "AddressData", addresses)
        self.set(dev, DEVICE_IFACE, "Interface", iface)
        if ssid is not None:
            ap = f"{AP_PREFIX}{n}"
            self.set(dev, WIRELESS_IFACE, "ActiveAccessPoint", ap)
            self.set(ap, AP_IFACE, "Ssid", ssid)
        return ac

    def set_active(self, paths):
        self.set(NM_PATH, NM_IFACE, "ActiveConnections", list(paths))


@pytest.fixture
def bus():
    return FakeBus()


class FakeSysfs:
    """Writes /sys/class/net-style statistics files under a temp directory."""

    def __init__(self, root):
        self.root = root

    def set(self, iface, rx, tx):
        stats = self.root / iface / "statistics"
        stats.mkdir(parents=True, exist_ok=True)
        (stats / "rx_bytes").write_text(f"{rx}\n", encoding="utf-8")
        (stats / "tx_bytes").write_text(f"{tx}\n", encoding="utf-8")


@pytest.fixture
def sysfs(tmp_path):
    root = tmp_path / "net"
    root.mkdir()
    return FakeSysfs(root)

