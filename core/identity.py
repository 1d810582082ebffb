from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any

from collectors.nm_bus import AP_IFACE, DEVICE_IFACE, IP4_IFACE, NULL_PATH, WIRELESS_IFACE, PropertyReader
from core.errors import AddressDecodeError, NoAddress, NotFound
from core.models import ActiveConnection, Identity

logger = logging.getLogger(__name__)

def decode_address(entry: Any) -> str:
    """
    Decode one AddressData entry into "address/prefix".
    
    Args:
        entry: Mapping with at least 'address' (str) and 'prefix' (unsigned int)
        
    Returns:
        CIDR-style string, e.g. "192.168.1.5/24"
        
    Raises:
        AddressDecodeError: entry is not a mapping, or a field is missing or mistyped
    """
    if not isinstance(entry, Mapping):
        raise AddressDecodeError(f"address entry is not a mapping: {entry!r}")

    address = entry.get("address")
    if not isinstance(address, str) or not address:
        raise AddressDecodeError(f"address entry has no usable 'address': {address!r}")

    prefix = entry.get("prefix")
    # bool is an int subclass but never a valid prefix
    if isinstance(prefix, bool) or not isinstance(prefix, int) or prefix < 0:
        raise AddressDecodeError(f"address entry has no usable 'prefix': {prefix!r}")

    return f"{address}/{prefix}"

def first_address(reader: PropertyReader, ip4_config: str) -> str:
    entries = reader.get(ip4_config, IP4_IFACE, "AddressData")
    if not entries:
        raise NoAddress("no address data")
    return decode_address(entries[0])

def device_interface(reader: PropertyReader, ac: ActiveConnection) -> str:
    if not ac.devices:
        raise NotFound(f"active connection {ac.path} has no devices")
    return str(reader.get(ac.devices[0], DEVICE_IFACE, "Interface"))

def device_ssid(reader: PropertyReader, device: str) -> str:
    """
    Network name of the access point a wireless device is associated with.
    
    SSIDs are raw bytes; invalid UTF-8 is replaced rather than rejected.
    """
    ap = reader.get(device, WIRELESS_IFACE, "ActiveAccessPoint")
    if not ap or ap == NULL_PATH:
        raise NotFound(f"wireless device {device} has no active access point")
    ssid = reader.get(str(ap), AP_IFACE, "Ssid")
    return bytes(ssid).decode("utf-8", errors="replace")

def resolve_identity(reader: PropertyReader, ac: ActiveConnection) -> Identity:
    """
    Derive the display identity of the selected connection.
    
    Wired connections show their first IPv4 address/prefix; wireless ones show
    the SSID instead and disclose it in the tooltip.
    
    Args:
        reader: Bus property reader
        ac: Selected active connection
        
    Returns:
        Identity(address, iface, tooltip_suffix)
    """
    iface = device_interface(reader, ac)
    address = first_address(reader, ac.ip4_config)
    suffix = ""

    if ac.is_wireless:
        ssid = device_ssid(reader, ac.devices[0])
        logger.debug("%s is wireless, ssid=%r", iface, ssid)
        address = ssid
        suffix = f", SSID: {ssid}"

    return Identity(address=address, iface=iface, tooltip_suffix=suffix)
