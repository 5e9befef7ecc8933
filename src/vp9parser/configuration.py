from dataclasses import dataclass


@dataclass
class VP9ParserConfiguration:
    """
    The :class:`VP9ParserConfiguration` dictionary is used to provide
    configuration options for a :class:`VP9Parser`.
    """

    check_compressed_header_size: bool = True
    """
    Reject frames whose compressed header is empty or does not fit in the
    frame, as announced by `header_size_in_bytes`.
    """
