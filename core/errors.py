from __future__ import annotations


class NetStatusError(Exception):
    """Base class for every failure that ends a run with an error report."""


class BusCommunicationError(NetStatusError):
    """A property read over the system bus failed (service gone, object vanished, property missing)."""


class NotFound(NetStatusError):
    """No default connection, or the selected connection has no device/access point."""


class NoAddress(NetStatusError):
    """The address-config object has no address entries."""


class AddressDecodeError(NetStatusError):
    """An address-data entry lacks a field or carries it with the wrong type."""


class OSReadError(NetStatusError):
    """A statistics counter file is missing, unreadable, malformed, or stalled."""


class SerializationError(NetStatusError):
    """The output object could not be serialized."""


class ConfigError(NetStatusError):
    """The configuration file or an environment override is invalid."""
