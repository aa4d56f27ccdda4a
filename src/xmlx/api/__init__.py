"""Parse and decode entry points for the xmlx node tree."""

from .decoding import (
    DecoderMetadata,
    DecoderRegistry,
    DecodingError,
    ElementTreeDecoder,
    LxmlDecoder,
    MappingDecoder,
    StructuredDecoder,
    get_decoder,
    list_available_decoders,
    register_decoder,
    unmarshal,
)
from .parser import ParseResult, XMLXParser, parse_string

__all__ = [
    "DecoderMetadata",
    "DecoderRegistry",
    "DecodingError",
    "ElementTreeDecoder",
    "LxmlDecoder",
    "MappingDecoder",
    "ParseResult",
    "StructuredDecoder",
    "XMLXParser",
    "get_decoder",
    "list_available_decoders",
    "parse_string",
    "register_decoder",
    "unmarshal",
]
