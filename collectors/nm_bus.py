from __future__ import annotations
import logging
from typing import Any, Protocol

import dbus

from core.errors import BusCommunicationError

NM_SERVICE = "org.freedesktop.NetworkManager"
NM_PATH = "/org/freedesktop/NetworkManager"

NM_IFACE = "org.freedesktop.NetworkManager"
ACTIVE_IFACE = "org.freedesktop.NetworkManager.Connection.Active"
IP4_IFACE = "org.freedesktop.NetworkManager.IP4Config"
DEVICE_IFACE = "org.freedesktop.NetworkManager.Device"
WIRELESS_IFACE = "org.freedesktop.NetworkManager.Device.Wireless"
AP_IFACE = "org.freedesktop.NetworkManager.AccessPoint"

PROPERTIES_IFACE = "org.freedesktop.DBus.Properties"

# NetworkManager uses "/" for an unset object reference
NULL_PATH = "/"

logger = logging.getLogger(__name__)

class PropertyReader(Protocol):
    """Fetches a single property of a remote object."""

    def get(self, path: str, interface: str, name: str) -> Any:
        ...

def to_python(value: Any) -> Any:
    """
    Convert a dbus-python value into plain Python types.
    
    Booleans are checked before integers since dbus.Boolean subclasses int.
    """
    if isinstance(value, dbus.Boolean):
        return bool(value)
    if isinstance(value, (dbus.ByteArray, bytes)):
        return bytes(value)
    if isinstance(value, dbus.ObjectPath):
        return str(value)
    if isinstance(value, dbus.String):
        return str(value)
    if isinstance(value, (dbus.Byte, dbus.Int16, dbus.UInt16, dbus.Int32, dbus.UInt32, dbus.Int64, dbus.UInt64)):
        return int(value)
    if isinstance(value, dbus.Double):
        return float(value)
    if isinstance(value, dict):
        return {to_python(k): to_python(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_python(v) for v in value]
    return value

class NMBusReader:
    """
    Reads NetworkManager object properties over the system bus.
    
    Every read is an org.freedesktop.DBus.Properties.Get call with a bounded
    reply timeout; nothing is cached between reads.
    """

    def __init__(self, bus: dbus.Bus | None = None, timeout: float = 5.0) -> None:
        """
        Initialize the reader.
        
        Args:
            bus: Connected bus; the system bus is opened when omitted
            timeout: Reply timeout in seconds for each property read
            
        Raises:
            BusCommunicationError: the system bus is not reachable
        """
        if bus is None:
            try:
                bus = dbus.SystemBus()
            except dbus.exceptions.DBusException as e:
                raise BusCommunicationError(f"cannot connect to system bus: {e.get_dbus_message() or e}") from e
        self.bus = bus
        self.timeout = timeout

    def get(self, path: str, interface: str, name: str) -> Any:
        """
        Read one property.
        
        Args:
            path: Object path, e.g. /org/freedesktop/NetworkManager/ActiveConnection/3
            interface: Interface that owns the property
            name: Property name
            
        Returns:
            The property value converted to plain Python types
            
        Raises:
            BusCommunicationError: the object, interface or property is unavailable,
                or the service did not reply within the timeout
        """
        try:
            proxy = self.bus.get_object(NM_SERVICE, path, introspect=False)
            props = dbus.Interface(proxy, PROPERTIES_IFACE)
            value = props.Get(interface, name, byte_arrays=True, timeout=self.timeout)
        except dbus.exceptions.DBusException as e:
            raise BusCommunicationError(
                f"reading {interface}.{name} of {path}: {e.get_dbus_message() or e.get_dbus_name() or e}"
            ) from e
        logger.debug("%s %s.%s = %r", path, interface, name, value)
        return to_python(value)
