from __future__ import annotations
import logging
import time
from typing import Callable, Protocol, Tuple

from core.models import Rate, Throughput, ThroughputSample
from core.util import now_ts

KB = 1024.0
UNIT_KB = "KB/s"
UNIT_MB = "MB/s"

logger = logging.getLogger(__name__)

class CounterSource(Protocol):
    def read(self, direction: str) -> int:
        ...

def take_sample(counters: CounterSource) -> ThroughputSample:
    """Read rx fully, then tx, and tag the pair with the current time."""
    rx = counters.read("rx")
    tx = counters.read("tx")
    return ThroughputSample(rx_bytes=rx, tx_bytes=tx, ts=now_ts())

def counter_delta(before: int, after: int) -> Tuple[int, bool]:
    """
    Bytes transferred between two readings of a cumulative counter.
    
    Returns:
        (delta, reset). A decreasing counter is taken to have restarted from
        zero, so the delta is the second reading and reset is True.
    """
    d = after - before
    if d < 0:
        return after, True
    return d, False

def scale(delta: int, interval: float = 1.0, reset: bool = False) -> Rate:
    """
    Convert a byte delta over `interval` seconds to KB/s, or MB/s above 1024 KB/s.
    
    There is no escalation beyond MB/s.
    """
    value = delta / KB / interval
    unit = UNIT_KB
    if value > KB:
        value = value / KB
        unit = UNIT_MB
    return Rate(value=value, unit=unit, counter_reset=reset)

def rates(first: ThroughputSample, second: ThroughputSample, interval: float = 1.0) -> Throughput:
    """
    Combine two samples into scaled rx/tx rates. The units are chosen
    independently for each direction.
    """
    rx, rx_reset = counter_delta(first.rx_bytes, second.rx_bytes)
    tx, tx_reset = counter_delta(first.tx_bytes, second.tx_bytes)
    if rx_reset or tx_reset:
        logger.info("counter reset between samples (rx=%s, tx=%s)", rx_reset, tx_reset)
    return Throughput(rx=scale(rx, interval, rx_reset), tx=scale(tx, interval, tx_reset))

def measure(counters: CounterSource, interval: float = 1.0,
            sleep: Callable[[float], None] = time.sleep) -> Throughput:
    """
    Sample the counters, block for `interval` seconds, sample again.
    
    Both directions share the same wall-clock window. The rate divides by the
    configured interval, not the measured one.
    
    Args:
        counters: Counter source for one interface
        interval: Seconds between the two sampling rounds
        sleep: Blocking sleep function
        
    Returns:
        Throughput with rx and tx rates
    """
    first = take_sample(counters)
    sleep(interval)
    second = take_sample(counters)
    logger.debug("samples %r -> %r (%.3fs apart)", first, second, second.ts - first.ts)
    return rates(first, second, interval)
