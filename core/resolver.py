from __future__ import annotations
import logging
from typing import Iterable, List

from collectors.nm_bus import ACTIVE_IFACE, NM_IFACE, NM_PATH, PropertyReader
from core.errors import NotFound
from core.models import ActiveConnection

logger = logging.getLogger(__name__)

def list_active_connections(reader: PropertyReader) -> List[str]:
    """Object paths of all active connections, in the order the service reports them."""
    return list(reader.get(NM_PATH, NM_IFACE, "ActiveConnections"))

def read_active_connection(reader: PropertyReader, path: str) -> ActiveConnection:
    """
    Read one active connection in a single round of property reads.
    
    The reads happen in a fixed order (State, Ip4Config, Type, Default, Vpn,
    Devices); the first failure propagates.
    
    Args:
        reader: Bus property reader
        path: Active connection object path
        
    Returns:
        Immutable ActiveConnection snapshot
    """
    state = reader.get(path, ACTIVE_IFACE, "State")
    ip4_config = reader.get(path, ACTIVE_IFACE, "Ip4Config")
    conn_type = reader.get(path, ACTIVE_IFACE, "Type")
    is_default = reader.get(path, ACTIVE_IFACE, "Default")
    is_vpn = reader.get(path, ACTIVE_IFACE, "Vpn")
    devices = reader.get(path, ACTIVE_IFACE, "Devices")

    return ActiveConnection(
        path=path,
        type=str(conn_type),
        state=int(state),
        is_default=bool(is_default),
        is_vpn=bool(is_vpn),
        ip4_config=str(ip4_config),
        devices=tuple(str(d) for d in devices),
    )

def select_default(reader: PropertyReader, paths: Iterable[str]) -> ActiveConnection:
    """
    Return the first active connection flagged as default.
    
    Connections after the match are never read. A failed read on any
    candidate aborts the whole resolution.
    
    Raises:
        NotFound: no candidate is the default connection (or there are none)
    """
    for path in paths:
        ac = read_active_connection(reader, path)
        logger.debug("active connection %s: type=%s default=%s vpn=%s", path, ac.type, ac.is_default, ac.is_vpn)
        if ac.is_default:
            return ac
    raise NotFound("no active connection found")

def resolve_default_connection(reader: PropertyReader) -> ActiveConnection:
    return select_default(reader, list_active_connections(reader))
