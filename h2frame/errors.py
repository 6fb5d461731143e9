"""
HTTP/2 Framing Errors

Every error carries the offending value in ``.value`` for diagnostics.
"""


class FramingError(Exception):
    """Base class for all frame encoding/decoding errors."""

    message = "Framing error ({value!r})"

    def __init__(self, value=None, message: str = None):
        self.value = value
        super().__init__(message or self.message.format(value=value))


class InvalidFrameType(FramingError):
    message = "Invalid frame type ({value!r})"


class PayloadTooLarge(FramingError):
    message = "Frame size is too large: {value}"


class StreamIdTooLarge(FramingError):
    message = "Stream ID ({value}) is too large"


class WindowIncrementTooLarge(FramingError):
    message = "Window increment ({value}) is out of range"


class InvalidFlag(FramingError):
    def __init__(self, value, frame_type=None):
        self.frame_type = frame_type
        super().__init__(value, f"Invalid frame flag ({value!r}) for {frame_type}")


class UnknownSettingsId(FramingError):
    message = "Unknown settings ID for {value!r}"


class UnknownErrorId(FramingError):
    message = "Unknown error ID for {value!r}"


class InvalidPingPayloadSize(FramingError):
    message = "Invalid payload size ({value} != 8 bytes)"


class InvalidStreamId(FramingError):
    message = "Invalid stream ID ({value})"


class InvalidSettingsValue(FramingError):
    message = "Settings value ({value}) does not fit in 32 bits"


class MalformedFrame(FramingError):
    def __init__(self, value, length: int = 0, needed: int = 0):
        self.length = length
        self.needed = needed
        super().__init__(
            value,
            f"Malformed {value} frame: payload is {length} bytes, need at least {needed}"
        )


class BufferUnderflow(FramingError):
    def __init__(self, value, available: int = 0):
        self.available = available
        super().__init__(value, f"Need {value} bytes, only {available} buffered")


class InvalidFieldValue(FramingError):
    def __init__(self, value, field: str = None):
        self.field = field
        super().__init__(value, f"Invalid {field} ({value}): must not be negative")
