"""
VP9 uncompressed header parsing.

The field order follows section 6.2 of the VP9 Bitstream & Decoding Process
Specification. Values that are not needed to describe the frame are read
only to move the cursor to the ``header_size_in_bytes`` field.
"""

from dataclasses import dataclass, field
from typing import Optional

from .bitstream import BitReader
from .exceptions import (
    InsufficientHeaderBytes,
    InvalidFrameMarker,
    InvalidSyncCode,
    OutOfData,
    ReservedBitViolation,
)

FRAME_MARKER = 0x2
SYNC_CODE = 0x498342

KEY_FRAME = 0
NON_KEY_FRAME = 1

# color spaces
CS_UNKNOWN = 0
CS_BT_601 = 1
CS_BT_709 = 2
CS_SMPTE_170 = 3
CS_SMPTE_240 = 4
CS_BT_2020 = 5
CS_RESERVED = 6
CS_RGB = 7

REFS_PER_FRAME = 3
MAX_REF_LF_DELTAS = 4
MAX_MODE_LF_DELTAS = 2
MAX_SEGMENTS = 8
SEG_TREE_PROBS = MAX_SEGMENTS - 1
PREDICTION_PROBS = 3
SEGMENTATION_FEATURE_BITS = (8, 6, 2, 0)
SEGMENTATION_FEATURE_SIGNED = (True, True, False, False)

MIN_TILE_WIDTH_B64 = 4
MAX_TILE_WIDTH_B64 = 64


@dataclass
class ColorConfig:
    bit_depth: int = 8
    color_space: int = CS_UNKNOWN
    color_range: bool = False
    subsampling_x: bool = True
    subsampling_y: bool = True


@dataclass
class UncompressedHeader:
    profile: int = 0
    show_existing_frame: bool = False
    frame_to_show_map_idx: int = 0
    frame_type: int = KEY_FRAME
    show_frame: bool = False
    error_resilient_mode: bool = False
    intra_only: bool = False
    refresh_frame_flags: int = 0
    color_config: Optional[ColorConfig] = None
    "Set for key frames and intra-only frames."
    width: int = 0
    height: int = 0
    "Frame dimensions, only when explicitly coded in this header."
    ref_frame_idx: list[int] = field(default_factory=list)
    header_size_in_bytes: int = 0
    uncompressed_header_size: int = 0

    @property
    def is_key_frame(self) -> bool:
        return not self.show_existing_frame and self.frame_type == KEY_FRAME

    @property
    def is_intra(self) -> bool:
        return self.is_key_frame or self.intra_only


def read_reserved_zero(reader: BitReader) -> None:
    if reader.read_bool():
        raise ReservedBitViolation(
            f"Reserved bit at position {reader.tell() - 1} is set"
        )


def read_sync_code(reader: BitReader) -> None:
    sync_code = reader.read_bits(24)
    if sync_code != SYNC_CODE:
        raise InvalidSyncCode(f"Invalid sync code 0x{sync_code:06x}")


def read_color_config(reader: BitReader, profile: int) -> ColorConfig:
    config = ColorConfig()
    if profile >= 2:
        config.bit_depth = 12 if reader.read_bool() else 10
    config.color_space = reader.read_bits(3)

    if config.color_space != CS_RGB:
        config.color_range = reader.read_bool()
        if profile == 1 or profile == 3:
            config.subsampling_x = reader.read_bool()
            config.subsampling_y = reader.read_bool()
            read_reserved_zero(reader)
    else:
        config.color_range = True
        config.subsampling_x = False
        config.subsampling_y = False
        if profile == 1 or profile == 3:
            read_reserved_zero(reader)
    return config


def read_frame_size(reader: BitReader) -> tuple[int, int]:
    width = reader.read_bits(16) + 1
    height = reader.read_bits(16) + 1
    return width, height


def skip_render_size(reader: BitReader) -> None:
    if reader.read_bool():
        # render_width_minus_1, render_height_minus_1
        reader.skip_bits(32)


def skip_loop_filter_params(reader: BitReader) -> None:
    # loop_filter_level, loop_filter_sharpness
    reader.skip_bits(6 + 3)
    if reader.read_bool():  # loop_filter_delta_enabled
        if reader.read_bool():  # loop_filter_delta_update
            for _ in range(MAX_REF_LF_DELTAS + MAX_MODE_LF_DELTAS):
                if reader.read_bool():
                    reader.read_signed(6)


def skip_quantization_params(reader: BitReader) -> None:
    # base_q_idx
    reader.skip_bits(8)
    # delta_q_y_dc, delta_q_uv_dc, delta_q_uv_ac
    for _ in range(3):
        if reader.read_bool():
            reader.read_signed(4)


def skip_prob(reader: BitReader) -> None:
    if reader.read_bool():
        reader.skip_bits(8)


def skip_segmentation_params(reader: BitReader) -> None:
    if not reader.read_bool():  # segmentation_enabled
        return

    if reader.read_bool():  # segmentation_update_map
        for _ in range(SEG_TREE_PROBS):
            skip_prob(reader)
        if reader.read_bool():  # segmentation_temporal_update
            for _ in range(PREDICTION_PROBS):
                skip_prob(reader)

    if reader.read_bool():  # segmentation_update_data
        # segmentation_abs_or_delta_update
        reader.skip_bits(1)
        for _ in range(MAX_SEGMENTS):
            for bits, signed in zip(
                SEGMENTATION_FEATURE_BITS, SEGMENTATION_FEATURE_SIGNED
            ):
                if reader.read_bool():  # feature_enabled
                    if bits:
                        reader.skip_bits(bits)
                    if signed:
                        reader.skip_bits(1)


def tile_cols_log2_range(width: int) -> tuple[int, int]:
    mi_cols = (width + 7) >> 3
    sb64_cols = (mi_cols + 7) >> 3

    min_log2 = 0
    while (MAX_TILE_WIDTH_B64 << min_log2) < sb64_cols:
        min_log2 += 1

    max_log2 = 1
    while (sb64_cols >> max_log2) >= MIN_TILE_WIDTH_B64:
        max_log2 += 1
    return min_log2, max_log2 - 1


def skip_tile_info(reader: BitReader, width: int) -> None:
    min_log2, max_log2 = tile_cols_log2_range(width)
    tile_cols_log2 = min_log2
    while tile_cols_log2 < max_log2:
        if not reader.read_bool():  # increment_tile_cols_log2
            break
        tile_cols_log2 += 1

    if reader.read_bool():  # tile_rows_log2
        # increment_tile_rows_log2
        reader.skip_bits(1)


def parse_uncompressed_header(
    reader: BitReader, last_width: int = 0
) -> UncompressedHeader:
    """
    Parse the uncompressed header of a single VP9 frame.

    `last_width` is the most recent explicitly coded frame width; it is used
    to size the tile layout of inter frames whose dimensions are inherited
    from a reference frame.
    """
    header = UncompressedHeader()

    frame_marker = reader.read_bits(2)
    if frame_marker != FRAME_MARKER:
        raise InvalidFrameMarker(f"Invalid frame marker 0b{frame_marker:02b}")

    profile_low_bit = reader.read_bits(1)
    profile_high_bit = reader.read_bits(1)
    header.profile = (profile_high_bit << 1) | profile_low_bit
    if header.profile == 3:
        read_reserved_zero(reader)

    header.show_existing_frame = reader.read_bool()
    if header.show_existing_frame:
        header.frame_to_show_map_idx = reader.read_bits(3)
        header.frame_type = NON_KEY_FRAME
        header.uncompressed_header_size = (reader.tell() + 7) // 8
        return header

    header.frame_type = reader.read_bits(1)
    header.show_frame = reader.read_bool()
    header.error_resilient_mode = reader.read_bool()

    width = last_width
    if header.frame_type == KEY_FRAME:
        read_sync_code(reader)
        header.color_config = read_color_config(reader, header.profile)
        header.width, header.height = read_frame_size(reader)
        skip_render_size(reader)
        width = header.width
    else:
        if not header.show_frame:
            header.intra_only = reader.read_bool()
        if not header.error_resilient_mode:
            # reset_frame_context
            reader.skip_bits(2)

        if header.intra_only:
            read_sync_code(reader)
            if header.profile > 0:
                header.color_config = read_color_config(reader, header.profile)
            else:
                # profile 0 intra-only frames are always 8-bit 4:2:0
                header.color_config = ColorConfig()
            header.refresh_frame_flags = reader.read_bits(8)
            header.width, header.height = read_frame_size(reader)
            skip_render_size(reader)
            width = header.width
        else:
            header.refresh_frame_flags = reader.read_bits(8)
            for _ in range(REFS_PER_FRAME):
                header.ref_frame_idx.append(reader.read_bits(3))
                # ref_frame_sign_bias
                reader.skip_bits(1)

            # frame_size_with_refs
            found_ref = False
            for _ in range(REFS_PER_FRAME):
                found_ref = reader.read_bool()
                if found_ref:
                    break
            if not found_ref:
                header.width, header.height = read_frame_size(reader)
                width = header.width
            skip_render_size(reader)

            # allow_high_precision_mv
            reader.skip_bits(1)
            if not reader.read_bool():  # is_filter_switchable
                # raw_interpolation_filter
                reader.skip_bits(2)

    if not header.error_resilient_mode:
        # refresh_frame_context, frame_parallel_decoding_mode
        reader.skip_bits(2)
    # frame_context_idx
    reader.skip_bits(2)

    skip_loop_filter_params(reader)
    skip_quantization_params(reader)
    skip_segmentation_params(reader)
    skip_tile_info(reader, width)

    try:
        header.header_size_in_bytes = reader.read_bits(16)
    except OutOfData as exc:
        raise InsufficientHeaderBytes(
            f"Not enough bytes for header_size_in_bytes: {exc}"
        ) from exc

    header.uncompressed_header_size = (reader.tell() + 7) // 8
    return header
