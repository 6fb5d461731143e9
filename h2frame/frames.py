"""
HTTP/2 Frame Descriptors

One dataclass per frame type. Every frame carries ``stream``, ``flags`` and
the computed ``length``; the remaining fields depend on the type.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Set, Tuple, Union

from .constants import FRAME_FLAGS
from .errors import InvalidFrameType


@dataclass
class Frame:
    """Fields shared by every frame type."""
    frame_type: ClassVar[Optional[str]] = None

    stream: int = 0
    flags: Set[str] = field(default_factory=set)
    length: int = field(default=0, compare=False)  # set by the codec

    def __post_init__(self):
        # Accept any iterable of flag names (list, tuple, frozenset)
        if not isinstance(self.flags, set):
            self.flags = set(self.flags)

    @property
    def type(self):
        return self.frame_type


@dataclass
class DataFrame(Frame):
    frame_type: ClassVar[str] = "data"

    payload: bytes = b""


@dataclass
class HeadersFrame(Frame):
    frame_type: ClassVar[str] = "headers"

    priority: Optional[int] = None
    payload: bytes = b""


@dataclass
class PriorityFrame(Frame):
    frame_type: ClassVar[str] = "priority"

    priority: int = 0


@dataclass
class RstStreamFrame(Frame):
    frame_type: ClassVar[str] = "rst_stream"

    error: Union[str, int] = "no_error"


@dataclass
class SettingsFrame(Frame):
    """
    SETTINGS frame.

    ``payload`` is an ordered list of (id, value) pairs. Ids may be names
    from DEFINED_SETTINGS or raw integers. A dict is accepted and converted.
    """
    frame_type: ClassVar[str] = "settings"

    payload: List[Tuple[Union[str, int], int]] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        if isinstance(self.payload, Mapping):
            self.payload = list(self.payload.items())
        else:
            self.payload = [tuple(pair) for pair in self.payload]


@dataclass
class PushPromiseFrame(Frame):
    frame_type: ClassVar[str] = "push_promise"

    promise_stream: int = 0
    payload: bytes = b""


@dataclass
class PingFrame(Frame):
    frame_type: ClassVar[str] = "ping"

    payload: bytes = b""


@dataclass
class GoawayFrame(Frame):
    frame_type: ClassVar[str] = "goaway"

    last_stream: int = 0
    error: Union[str, int] = "no_error"
    payload: Optional[bytes] = None  # optional debug data

    def __post_init__(self):
        super().__post_init__()
        # No debug data on the wire is the same as none at all
        if not self.payload:
            self.payload = None


@dataclass
class WindowUpdateFrame(Frame):
    frame_type: ClassVar[str] = "window_update"

    increment: int = 0


@dataclass
class ContinuationFrame(Frame):
    frame_type: ClassVar[str] = "continuation"

    payload: bytes = b""


@dataclass
class UnknownFrame(Frame):
    """A frame with an unassigned opcode, kept so extensions don't break parsing."""
    code: int = 0
    payload: bytes = b""

    @property
    def type(self):
        return self.code


FRAME_CLASSES = {
    cls.frame_type: cls
    for cls in (
        DataFrame, HeadersFrame, PriorityFrame, RstStreamFrame, SettingsFrame,
        PushPromiseFrame, PingFrame, GoawayFrame, WindowUpdateFrame,
        ContinuationFrame,
    )
}


def frame_from_dict(data: dict) -> Frame:
    """
    Build a frame descriptor from a hash-shaped mapping.

    Example:
        frame_from_dict({"type": "data", "stream": 1,
                         "flags": ["end_stream"], "payload": b"abc"})

    Raises:
        InvalidFrameType: if "type" is missing or unknown
    """
    fields = dict(data)
    frame_type = fields.pop("type", None)
    cls = FRAME_CLASSES.get(frame_type)
    if cls is None:
        raise InvalidFrameType(frame_type)
    fields.pop("length", None)
    return cls(**fields)


def sorted_flags(frame: Frame) -> List[str]:
    """Return the frame's flags in registry order (unregistered flags last)."""
    registered = list(FRAME_FLAGS.get(frame.type, {}))
    known = [name for name in registered if name in frame.flags]
    extra = sorted(str(name) for name in frame.flags if name not in registered)
    return known + extra


def _preview(data: bytes, limit: int = 16) -> str:
    if len(data) > limit:
        return data[:limit].hex() + "..."
    return data.hex()


def describe_frame(frame: Frame) -> str:
    """
    Describe a frame in one line.

    Args:
        frame: Any frame descriptor

    Returns:
        str: e.g. "DATA stream=1 len=3 flags=[end_stream] payload=616263"
    """
    if isinstance(frame, UnknownFrame):
        name = f"UNKNOWN(0x{frame.code:x})"
    else:
        name = frame.type.upper()

    parts = [name, f"stream={frame.stream}", f"len={frame.length}"]
    flags = sorted_flags(frame)
    if flags:
        parts.append(f"flags=[{','.join(flags)}]")

    if isinstance(frame, (HeadersFrame, PriorityFrame)) and frame.priority is not None:
        parts.append(f"priority={frame.priority}")
    if isinstance(frame, PushPromiseFrame):
        parts.append(f"promise_stream={frame.promise_stream}")
    if isinstance(frame, GoawayFrame):
        parts.append(f"last_stream={frame.last_stream}")
    if isinstance(frame, (RstStreamFrame, GoawayFrame)):
        parts.append(f"error={frame.error}")
    if isinstance(frame, WindowUpdateFrame):
        parts.append(f"increment={frame.increment}")
    if isinstance(frame, SettingsFrame):
        settings = ", ".join(f"{key}={value}" for key, value in frame.payload)
        parts.append(f"settings={{{settings}}}")
    elif getattr(frame, "payload", None):
        parts.append(f"payload={_preview(frame.payload)}")

    return " ".join(parts)
