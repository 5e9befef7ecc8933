import logging
import os


def load(name: str) -> bytes:
    path = os.path.join(os.path.dirname(__file__), name)
    with open(path, "rb") as fp:
        return fp.read()


def corrupt(data: bytes, index: int, value: int) -> bytes:
    buf = bytearray(data)
    buf[index] = value
    return bytes(buf)


if os.environ.get("VP9PARSER_DEBUG"):
    logging.basicConfig(level=logging.DEBUG)


class BitWriter:
    def __init__(self) -> None:
        self.bits: list[int] = []

    def __len__(self) -> int:
        return len(self.bits)

    def write(self, value: int, n: int) -> "BitWriter":
        for i in reversed(range(n)):
            self.bits.append((value >> i) & 1)
        return self

    def to_bytes(self) -> bytes:
        bits = self.bits + [0] * (-len(self.bits) % 8)
        return bytes(
            int("".join(str(bit) for bit in bits[i : i + 8]), 2)
            for i in range(0, len(bits), 8)
        )


def key_frame(
    profile: int = 0,
    ten_or_twelve_bit: bool = False,
    color_space: int = 1,
    color_range: bool = False,
    subsampling: tuple[int, int] = (1, 1),
    reserved_zero: int = 0,
    width: int = 64,
    height: int = 48,
    header_size_in_bytes: int = 4,
) -> bytes:
    """
    Build a minimal key frame, followed by a blank compressed header.

    `width` must be below 512 so that the frame has a single tile column.
    """
    writer = BitWriter()
    writer.write(2, 2).write(profile & 1, 1).write(profile >> 1, 1)
    if profile == 3:
        writer.write(0, 1)
    # show_existing_frame, frame_type, show_frame, error_resilient_mode
    writer.write(0b0010, 4)
    writer.write(0x498342, 24)

    if profile >= 2:
        writer.write(int(ten_or_twelve_bit), 1)
    writer.write(color_space, 3)
    if color_space != 7:
        writer.write(int(color_range), 1)
        if profile in (1, 3):
            writer.write(subsampling[0], 1).write(subsampling[1], 1)
            writer.write(reserved_zero, 1)
    elif profile in (1, 3):
        writer.write(reserved_zero, 1)

    writer.write(width - 1, 16).write(height - 1, 16)
    # render_and_frame_size_different
    writer.write(0, 1)
    # refresh_frame_context, frame_parallel_decoding_mode, frame_context_idx
    writer.write(0, 4)
    # loop filter level, sharpness, delta_enabled
    writer.write(0, 10)
    # base_q_idx and three uncoded deltas
    writer.write(0, 11)
    # segmentation_enabled
    writer.write(0, 1)
    # tile_rows_log2
    writer.write(0, 1)
    writer.write(header_size_in_bytes, 16)
    return writer.to_bytes() + bytes(header_size_in_bytes)


def inter_frame(
    found_ref: bool = True,
    width: int = 64,
    height: int = 48,
    tile_cols_bits: int = 0,
    header_size_in_bytes: int = 4,
) -> bytes:
    """
    Build a minimal shown profile 0 inter frame, followed by a blank
    compressed header.

    Without `found_ref` the frame size is coded explicitly. `tile_cols_bits`
    is the number of `increment_tile_cols_log2` bits the frame width calls for.
    """
    writer = BitWriter()
    writer.write(2, 2).write(0, 2)
    # show_existing_frame, frame_type, show_frame, error_resilient_mode
    writer.write(0b0110, 4)
    # reset_frame_context
    writer.write(0, 2)
    # refresh_frame_flags
    writer.write(1, 8)
    for idx in range(3):
        # ref_frame_idx, ref_frame_sign_bias
        writer.write(idx, 3).write(0, 1)

    if found_ref:
        writer.write(1, 1)
    else:
        writer.write(0, 3)
        writer.write(width - 1, 16).write(height - 1, 16)
    # render_and_frame_size_different
    writer.write(0, 1)
    # allow_high_precision_mv, is_filter_switchable
    writer.write(0b01, 2)
    # refresh_frame_context, frame_parallel_decoding_mode, frame_context_idx
    writer.write(0, 4)
    # loop filter level, sharpness, delta_enabled
    writer.write(0, 10)
    # base_q_idx and three uncoded deltas
    writer.write(0, 11)
    # segmentation_enabled
    writer.write(0, 1)
    # increment_tile_cols_log2, tile_rows_log2
    writer.write(0, tile_cols_bits + 1)
    writer.write(header_size_in_bytes, 16)
    return writer.to_bytes() + bytes(header_size_in_bytes)
