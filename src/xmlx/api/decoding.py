"""Structured decoders for ``Node.unmarshal``.

``Node.unmarshal`` renders a subtree and passes the text plus a target
object to any decoder callable. This module provides a small decoder
framework modelled on integration adapters: an abstract ``StructuredDecoder``,
mapping decoders backed by ElementTree and lxml, and a thread-safe registry
for looking decoders up by name.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from xmlx.shared import ParserConfig, get_logger
from xmlx.tree.builder import split_clark_name
from xmlx.tree.node import Node
from xmlx.tree.serializer import qualified_name

TEXT_KEY = "#text"
ATTRIBUTE_PREFIX = "@"


class DecodingError(ValueError):
    """Raised when text cannot be decoded into the requested target."""


@dataclass
class DecoderMetadata:
    """Metadata about a structured decoder."""

    name: str
    version: str
    target_library: str
    description: str


class StructuredDecoder(ABC):
    """Base class for decoders usable with ``Node.unmarshal``.

    Instances are callables taking ``(text, target)`` so they can be passed
    straight to ``Node.unmarshal``.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> DecoderMetadata:
        """Get decoder metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the backing library is importable."""

    @abstractmethod
    def decode(self, text: str, target: Any) -> Any:
        """Populate ``target`` from XML ``text`` and return it."""

    def __call__(self, text: str, target: Any) -> Any:
        return self.decode(text, target)


class MappingDecoder(StructuredDecoder):
    """Decode XML text into a ``MutableMapping`` target.

    The target receives one key, the document element's qualified name. An
    element with neither attributes nor children maps to its text; any other
    element maps to a dict holding ``@name`` attribute keys, child names
    (a list when a name repeats) and ``#text`` when the element has text.

    Examples:
        >>> target = {}
        >>> ElementTreeDecoder().decode('<item id="7">hi</item>', target)
        {'item': {'@id': '7', '#text': 'hi'}}
    """

    @abstractmethod
    def _parse(self, text: str) -> Any:
        """Parse text into an ElementTree-compatible element."""

    def decode(self, text: str, target: Any) -> Any:
        if not isinstance(target, MutableMapping):
            raise DecodingError(
                f"{self.metadata.name} decoder needs a mutable mapping target, "
                f"got {type(target).__name__}"
            )

        element = self._parse(text)
        key, content = self._convert(element)
        target[key] = content

        self._logger.debug(
            "Decoded document into mapping",
            extra={"root_key": key, "text_length": len(text)},
        )
        return target

    def _convert(self, element: Any) -> Any:
        key = qualified_name(split_clark_name(element.tag))
        text = "".join(_direct_text(element)).strip()

        if not len(element.attrib) and not len(element):
            return key, text

        content: Dict[str, Any] = {}
        for attr_key, attr_value in element.attrib.items():
            content[ATTRIBUTE_PREFIX + qualified_name(split_clark_name(attr_key))] = attr_value

        for child in element:
            if not isinstance(child.tag, str):
                # Comments and processing instructions
                continue
            child_key, child_content = self._convert(child)
            if child_key not in content:
                content[child_key] = child_content
            elif isinstance(content[child_key], list):
                content[child_key].append(child_content)
            else:
                content[child_key] = [content[child_key], child_content]

        if text:
            content[TEXT_KEY] = text
        return key, content


def _direct_text(element: Any) -> List[str]:
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return parts


class ElementTreeDecoder(MappingDecoder):
    """Mapping decoder backed by ``xml.etree.ElementTree``."""

    @property
    def metadata(self) -> DecoderMetadata:
        return DecoderMetadata(
            name="elementtree",
            version="1.0.0",
            target_library="xml.etree.ElementTree",
            description="Decode XML text into nested dicts with ElementTree",
        )

    def is_available(self) -> bool:
        return True

    def _parse(self, text: str) -> Any:
        from xml.etree import ElementTree

        try:
            return ElementTree.fromstring(text)
        except ElementTree.ParseError as e:
            raise DecodingError(f"Malformed XML: {e}") from e


class LxmlDecoder(MappingDecoder):
    """Mapping decoder backed by ``lxml.etree``."""

    @property
    def metadata(self) -> DecoderMetadata:
        return DecoderMetadata(
            name="lxml",
            version="1.0.0",
            target_library="lxml",
            description="Decode XML text into nested dicts with lxml.etree",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def _parse(self, text: str) -> Any:
        from lxml import etree

        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            return etree.fromstring(text.encode("utf-8"), parser)
        except etree.XMLSyntaxError as e:
            raise DecodingError(f"Malformed XML: {e}") from e


class DecoderRegistry:
    """Registry of decoder classes, keyed by metadata name."""

    def __init__(self) -> None:
        self._decoders: Dict[str, Type[StructuredDecoder]] = {}
        self._lock = threading.RLock()

    def register(self, decoder_class: Type[StructuredDecoder]) -> None:
        """Register a decoder class under its metadata name."""
        with self._lock:
            name = decoder_class().metadata.name
            self._decoders[name] = decoder_class

    def get_decoder(
        self,
        name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[StructuredDecoder]:
        """Instantiate a registered decoder, or None when unknown or unavailable."""
        with self._lock:
            decoder_class = self._decoders.get(name)
        if decoder_class is None:
            return None
        decoder = decoder_class(correlation_id)
        if not decoder.is_available():
            return None
        return decoder

    def list_available_decoders(self) -> List[DecoderMetadata]:
        """Metadata of every registered decoder whose library is importable."""
        with self._lock:
            classes = list(self._decoders.values())
        available = []
        for decoder_class in classes:
            decoder = decoder_class()
            if decoder.is_available():
                available.append(decoder.metadata)
        return available


_decoder_registry = DecoderRegistry()


def register_decoder(decoder_class: Type[StructuredDecoder]) -> None:
    """Register a decoder class globally."""
    _decoder_registry.register(decoder_class)


def get_decoder(
    name: str,
    correlation_id: Optional[str] = None
) -> Optional[StructuredDecoder]:
    """Get a registered decoder instance by name."""
    return _decoder_registry.get_decoder(name, correlation_id)


def list_available_decoders() -> List[DecoderMetadata]:
    """List all available decoders."""
    return _decoder_registry.list_available_decoders()


def unmarshal(
    node: Node,
    target: Any,
    decoder_name: Optional[str] = None,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> Any:
    """Decode ``node``'s subtree into ``target`` with a registered decoder.

    Args:
        node: Subtree to decode
        target: Object the decoder populates
        decoder_name: Registered decoder name; defaults to
            ``config.decoding.default_decoder``
        config: Parser configuration
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Whatever the decoder returns

    Raises:
        DecodingError: If the decoder is unknown or its library is missing,
            or the decoder itself fails
    """
    config = config or ParserConfig()
    name = decoder_name or config.decoding.default_decoder
    decoder = get_decoder(name, correlation_id)
    if decoder is None:
        raise DecodingError(f"Decoder '{name}' is not registered or not available")
    return node.unmarshal(target, decoder)


register_decoder(ElementTreeDecoder)
register_decoder(LxmlDecoder)
