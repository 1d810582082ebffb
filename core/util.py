from __future__ import annotations
import threading
import time
from typing import Any, Callable, TypeVar

T = TypeVar("T")

def now_ts() -> float:
    """
    Get current Unix timestamp.
    
    Returns:
        Current time as float seconds since epoch
    """
    return time.time()

def call_with_timeout(fn: Callable[..., T], timeout: float, *args: Any) -> T:
    """
    Run fn(*args) in a daemon thread and wait at most `timeout` seconds.
    
    The worker is abandoned (not killed) on expiry; being a daemon thread it
    does not keep the process alive at exit.
    
    Args:
        fn: Callable to run
        timeout: Maximum wait in seconds
        *args: Positional arguments for fn
        
    Returns:
        Whatever fn returns
        
    Raises:
        TimeoutError: fn did not finish in time
        Exception: whatever fn raised, re-raised in the caller
    """
    result: dict = {}

    def target() -> None:
        try:
            result["value"] = fn(*args)
        except BaseException as e:  # re-raised below in the calling thread
            result["error"] = e

    worker = threading.Thread(target=target, name="bounded-call", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        raise TimeoutError(f"call did not complete within {timeout:g}s")
    if "error" in result:
        raise result["error"]
    return result["value"]
