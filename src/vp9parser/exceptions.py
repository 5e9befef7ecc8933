class VpxParseError(ValueError):
    """
    Base class for all errors raised while parsing a VPx bitstream.
    """


class InvalidFrameMarker(VpxParseError):
    pass


class InvalidSyncCode(VpxParseError):
    pass


class ReservedBitViolation(VpxParseError):
    pass


class InsufficientHeaderBytes(VpxParseError):
    pass


class OutOfData(InsufficientHeaderBytes):
    pass


class SuperframeMarkerMismatch(VpxParseError):
    pass
