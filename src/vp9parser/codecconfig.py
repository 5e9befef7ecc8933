import enum
from dataclasses import dataclass

from .header import ColorConfig


class VideoCodec(enum.Enum):
    """
    Codecs sharing the VP codec configuration record.
    """

    VP8 = "vp08"
    VP9 = "vp09"
    VP10 = "vp10"


class ChromaSubsampling(enum.IntEnum):
    CHROMA_420_VERTICAL = 0
    CHROMA_420_COLLOCATED_WITH_LUMA = 1
    CHROMA_422 = 2
    CHROMA_444 = 3
    CHROMA_440 = 4


def get_chroma_subsampling(
    subsampling_x: bool, subsampling_y: bool
) -> ChromaSubsampling:
    if subsampling_x:
        if subsampling_y:
            return ChromaSubsampling.CHROMA_420_COLLOCATED_WITH_LUMA
        return ChromaSubsampling.CHROMA_422
    if subsampling_y:
        return ChromaSubsampling.CHROMA_440
    return ChromaSubsampling.CHROMA_444


@dataclass
class VPCodecConfigurationRecord:
    """
    The :class:`VPCodecConfigurationRecord` describes a VP8 / VP9 stream
    out-of-band, so that packagers do not need to look at the bitstream again.
    """

    profile: int = 0
    level: int = 0
    "The bitstream does not signal a level."
    bit_depth: int = 8
    color_space: int = 0
    "The raw `color_space` value from the frame header."
    chroma_subsampling: int = 0
    transfer_characteristics: int = 0
    matrix_coefficients: int = 0
    video_full_range_flag: bool = False

    @classmethod
    def from_color_config(
        cls, profile: int, color_config: ColorConfig
    ) -> "VPCodecConfigurationRecord":
        return cls(
            profile=profile,
            bit_depth=color_config.bit_depth,
            color_space=color_config.color_space,
            chroma_subsampling=get_chroma_subsampling(
                color_config.subsampling_x, color_config.subsampling_y
            ),
            video_full_range_flag=color_config.color_range,
        )

    def get_codec_string(self, codec: VideoCodec = VideoCodec.VP9) -> str:
        """
        Render the record as a codec string such as
        ``vp09.00.00.08.00.01.00.00``.
        """
        if not isinstance(codec, VideoCodec):
            raise ValueError(f"Unsupported codec {codec!r}")

        fields = [
            self.profile,
            self.level,
            self.bit_depth,
            self.color_space,
            int(self.chroma_subsampling),
            self.transfer_characteristics,
            self.matrix_coefficients,
        ]
        return ".".join([codec.value] + [f"{value:02d}" for value in fields])
