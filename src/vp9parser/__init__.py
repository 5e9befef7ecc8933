# ruff: noqa: F401
import logging

from .bitstream import BitReader
from .codecconfig import ChromaSubsampling, VideoCodec, VPCodecConfigurationRecord
from .configuration import VP9ParserConfiguration
from .exceptions import (
    InsufficientHeaderBytes,
    InvalidFrameMarker,
    InvalidSyncCode,
    OutOfData,
    ReservedBitViolation,
    SuperframeMarkerMismatch,
    VpxParseError,
)
from .parser import VP9Parser, VPxFrameInfo
from .superframe import SuperframeIndex, split_superframe

__version__ = "0.1.0"

# Set default logging handler to avoid "No handler found" warnings.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BitReader",
    "ChromaSubsampling",
    "InsufficientHeaderBytes",
    "InvalidFrameMarker",
    "InvalidSyncCode",
    "OutOfData",
    "ReservedBitViolation",
    "SuperframeIndex",
    "SuperframeMarkerMismatch",
    "VP9Parser",
    "VP9ParserConfiguration",
    "VPCodecConfigurationRecord",
    "VPxFrameInfo",
    "VideoCodec",
    "VpxParseError",
    "split_superframe",
]
