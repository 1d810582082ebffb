from __future__ import annotations
import json
import logging
import os
import sys
from typing import Any, Dict, Mapping, TextIO

from core.errors import SerializationError
from core.models import ActiveConnection, Failure, Identity, Report, Result, Success, Throughput

ENCODING_FALLBACK = "Error while encoding error message"

logger = logging.getLogger(__name__)

def build_report(ac: ActiveConnection, identity: Identity, throughput: Throughput,
                 icons: Mapping[str, str]) -> Report:
    """
    Assemble the widget text and tooltip for a successful run.
    
    Args:
        ac: Selected active connection
        identity: Address/SSID and interface name
        throughput: rx/tx rates
        icons: Glyphs keyed 'wired' and 'wireless'
        
    Returns:
        Report ready for serialization
    """
    icon = icons["wireless"] if ac.is_wireless else icons["wired"]
    text = f"{throughput.rx} {throughput.tx} {identity.address} {icon} "
    tooltip = f"Interface: {identity.iface}, Type: {ac.type}{identity.tooltip_suffix}"
    if throughput.counter_reset:
        tooltip += ", counter reset"
    return Report(text=text, tooltip=tooltip)

def dumps(obj: Dict[str, Any]) -> str:
    """
    Serialize to one line of JSON, non-ASCII kept as-is.
    
    Raises:
        SerializationError: obj is not serializable, or the result is not valid UTF-8 text
    """
    try:
        line = json.dumps(obj, ensure_ascii=False)
        line.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot encode output: {e}") from e
    return line

def encode_failure(failure: Failure) -> str:
    """
    Serialize an error report. If that fails, the tooltip is replaced by a
    fixed message and encoding is attempted once more.
    """
    obj = failure.as_report().as_dict()
    try:
        return dumps(obj)
    except SerializationError:
        logger.debug("could not encode failure %r, using fallback tooltip", failure.kind)
        obj["tooltip"] = ENCODING_FALLBACK
        return dumps(obj)

def encode(result: Result) -> str:
    """Render either result variant to the same one-line output shape."""
    if isinstance(result, Success):
        try:
            return dumps(result.report.as_dict())
        except SerializationError as e:
            return encode_failure(Failure.from_exception(e))
    return encode_failure(result)

class JsonSink:
    """
    JSON output sink writing exactly one line per result to a stream.
    
    Defaults to standard output, which the status bar reads.
    """
    
    def __init__(self, stream: TextIO | None = None) -> None:
        """
        Initialize JSON sink with output stream.
        
        Args:
            stream: Text stream for output (sys.stdout when omitted)
        """
        self.stream = stream if stream is not None else sys.stdout

    def write(self, result: Result) -> None:
        """
        Write a single result as a JSON line and flush.
        
        Args:
            result: Success or Failure to render
        """
        line = encode(result) + "\n"
        try:
            buffer = getattr(self.stream, "buffer", None)
            if buffer is not None:
                self.stream.flush()
                buffer.write(line.encode("utf-8"))
                buffer.flush()
            else:
                self.stream.write(line)
                self.stream.flush()
        except (OSError, ValueError) as e:
            # reader went away (status bar restarted); nothing left to report to
            logger.debug("cannot write output: %s", e)
            self._discard()

    def _discard(self) -> None:
        """Point the stream at /dev/null so the flush at interpreter exit cannot fail again."""
        try:
            devnull = os.open(os.devnull, os.O_WRONLY)
            try:
                os.dup2(devnull, self.stream.fileno())
            finally:
                os.close(devnull)
        except (OSError, ValueError) as e:
            logger.debug("cannot redirect output to %s: %s", os.devnull, e)
