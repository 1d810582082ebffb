from __future__ import annotations
import logging

from core.errors import OSReadError
from core.util import call_with_timeout

SOURCE_ROOT = "/sys/class/net"
SOURCE_COUNTER = "{root}/{iface}/statistics/{direction}_bytes"

DIRECTIONS = ("rx", "tx")

logger = logging.getLogger(__name__)

class SysNetCounters:
    """
    Reader for the cumulative byte counters of one interface in sysfs.
    
    Each counter file holds a single newline-terminated unsigned decimal
    integer: bytes transferred since the interface was initialized.
    """

    def __init__(self, iface: str, root: str = SOURCE_ROOT, timeout: float = 2.0) -> None:
        """
        Initialize the counter reader for a specific network interface.
        
        Args:
            iface: Network interface name (e.g., 'eth0', 'wlp3s0')
            root: sysfs network class directory
            timeout: Maximum seconds to wait for a single file read
        """
        self.iface = iface
        self.root = root
        self.timeout = timeout

    def source(self, direction: str) -> str:
        if direction not in DIRECTIONS:
            raise ValueError(f"unknown counter direction: {direction!r}")
        return SOURCE_COUNTER.format(root=self.root, iface=self.iface, direction=direction)

    def read(self, direction: str) -> int:
        """
        Read one counter.
        
        Args:
            direction: 'rx' or 'tx'
            
        Returns:
            Cumulative byte count
            
        Raises:
            OSReadError: file missing/unreadable, contents malformed, or the read stalled
        """
        path = self.source(direction)
        try:
            raw = call_with_timeout(_read_text, self.timeout, path)
        except TimeoutError as e:
            raise OSReadError(f"timed out reading {path}") from e
        except OSError as e:
            raise OSReadError(f"cannot read {path}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise OSReadError(f"malformed counter in {path}: not text") from e

        value = raw.strip()
        if not (value.isascii() and value.isdigit()):
            raise OSReadError(f"malformed counter in {path}: {value!r}")
        n = int(value)
        logger.debug("%s = %d", path, n)
        return n

def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
