"""
Status-bar widget reporting the default network connection and its throughput.

Prints one JSON line {"text": ..., "tooltip": ...} and always exits 0;
failures are reported through the same line with text "Error".
"""
from __future__ import annotations
import logging
import sys
import time
from typing import Callable

from collectors.nm_bus import NMBusReader, PropertyReader
from collectors.sys_net import SysNetCounters
from core.config import Config, load_config
from core.errors import NetStatusError
from core.identity import resolve_identity
from core.logging_config import configure_logging
from core.models import Failure, Result, Success
from core.resolver import resolve_default_connection
from core.throughput import measure
from output.json_sink import JsonSink, build_report

logger = logging.getLogger(__name__)

def build_result(cfg: Config, reader: PropertyReader,
                 sleep: Callable[[float], None] = time.sleep) -> Result:
    """
    Run connection discovery, identity lookup and throughput sampling once.
    
    Args:
        cfg: Loaded configuration
        reader: Bus property reader for NetworkManager objects
        sleep: Blocking sleep used between the two counter samples
        
    Returns:
        Success with the report. Errors propagate to the caller.
    """
    ac = resolve_default_connection(reader)
    identity = resolve_identity(reader, ac)
    counters = SysNetCounters(identity.iface, root=cfg.sysfs_root, timeout=cfg.read_timeout_sec)
    throughput = measure(counters, interval=cfg.sample_interval_sec, sleep=sleep)
    return Success(build_report(ac, identity, throughput, cfg.icons))

def run(reader_factory: Callable[[Config], PropertyReader] | None = None,
        sleep: Callable[[float], None] = time.sleep) -> Result:
    """
    Produce the result of one run, converting every failure into a Failure.
    
    Args:
        reader_factory: Builds the bus reader from the config (system bus when omitted)
        sleep: Blocking sleep used between the two counter samples
    """
    if reader_factory is None:
        reader_factory = lambda cfg: NMBusReader(timeout=cfg.bus_timeout_sec)
    try:
        cfg = load_config()
        return build_result(cfg, reader_factory(cfg), sleep=sleep)
    except NetStatusError as e:
        logger.debug("run failed: %s: %s", type(e).__name__, e)
        return Failure.from_exception(e)
    except Exception as e:
        logger.debug("unexpected error", exc_info=True)
        return Failure(kind="InternalError", message=f"internal error: {type(e).__name__}: {e}")

def main() -> None:
    """
    Entry point: measure, print one JSON line, exit 0.
    """
    configure_logging()
    JsonSink().write(run())
    sys.exit(0)

if __name__ == "__main__":
    main()
