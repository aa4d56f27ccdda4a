"""Parse API for building xmlx node trees from XML text.

Tokenizing is delegated to an existing parser backend
(``xml.etree.ElementTree`` or ``lxml``); this module wires that backend to a
``NodeTreeBuilder`` and packages the outcome as a ``ParseResult``. Parsing
never raises: syntax errors are reported through diagnostics together with
whatever part of the tree was built before the error.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from xml.etree import ElementTree

from xmlx.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParserConfig,
    PerformanceMetrics,
    configure_logging,
    get_logger,
)
from xmlx.tree.builder import NodeTreeBuilder
from xmlx.tree.node import Node
from xmlx.tree.node_type import NodeType

PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000


@dataclass
class ParseResult:
    """Outcome of a parse: the ROOT node plus diagnostics and metrics."""

    root: Node = field(default_factory=lambda: Node(NodeType.ROOT))
    success: bool = True
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def element_count(self) -> int:
        """Count ELEMENT nodes in the tree."""
        count = 0
        pending = list(self.root.children)
        while pending:
            node = pending.pop()
            if node.node_type is NodeType.ELEMENT:
                count += 1
            pending.extend(node.children)
        return count

    @property
    def document_element(self) -> Optional[Node]:
        """The top-level element, if one was parsed."""
        for child in self.root.children:
            if child.node_type is NodeType.ELEMENT:
                return child
        return None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        position: Optional[Dict[str, int]] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                position=position,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )


def _create_backend_parser(backend: str, builder: NodeTreeBuilder) -> Any:
    if backend == "lxml":
        from lxml import etree

        return etree.XMLParser(target=builder, resolve_entities=False)
    return ElementTree.XMLParser(target=builder)


def _syntax_errors(backend: str) -> tuple:
    if backend == "lxml":
        from lxml import etree

        return (etree.XMLSyntaxError, ValueError)
    return (ElementTree.ParseError, ValueError)


def _error_position(error: Exception) -> Optional[Dict[str, int]]:
    position = getattr(error, "position", None)
    if position:
        return {"line": position[0], "column": position[1]}
    lineno = getattr(error, "lineno", None)
    if lineno is not None:
        return {"line": lineno, "column": getattr(error, "offset", 0) or 0}
    return None


def _parse_with(
    xml_string: str,
    config: ParserConfig,
    correlation_id: Optional[str]
) -> ParseResult:
    start_time = time.time()
    backend = config.decoding.backend
    logger = get_logger(__name__, correlation_id, "parse")

    builder = NodeTreeBuilder(config.tree, correlation_id)
    result = ParseResult(correlation_id=correlation_id)
    result.performance.characters_processed = len(xml_string)

    syntax_errors = _syntax_errors(backend)
    try:
        parser = _create_backend_parser(backend, builder)
        parser.feed(xml_string)
        result.root = parser.close()
    except syntax_errors as e:
        result.root = builder.root
        result.success = False
        result.add_diagnostic(
            DiagnosticSeverity.CRITICAL,
            f"XML syntax error: {e}",
            "api_parser",
            position=_error_position(e),
            details={"backend": backend, "open_elements": builder.depth},
        )
        logger.error(
            "Parse failed; returning partial tree",
            extra={"backend": backend, "error": str(e)},
            exc_info=False,
        )

    processing_time = (time.time() - start_time) * MS_PER_SECOND
    result.performance.processing_time_ms = processing_time
    result.performance.nodes_created = builder.nodes_created

    logger.info(
        "String parse completed",
        extra={
            "backend": backend,
            "success": result.success,
            "nodes_created": builder.nodes_created,
            "processing_time_ms": processing_time,
        },
    )
    return result


def parse_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None
) -> ParseResult:
    """Parse XML text into a node tree.

    Args:
        xml_string: XML content as string
        config: Parser configuration (defaults to ``ParserConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult whose ``root`` is the ROOT node of the document

    Examples:
        >>> result = parse_string('<root><item id="1">Hello</item></root>')
        >>> result.success
        True
        >>> result.root.select_node("*", "item").get_attribute("", "id")
        '1'
    """
    config = config or ParserConfig()
    logger = get_logger(__name__, correlation_id, "parse_string")
    logger.debug(
        "Starting string parse operation",
        extra={
            "content_length": len(xml_string),
            "preview": (
                xml_string[:PREVIEW_LENGTH] + "..."
                if len(xml_string) > PREVIEW_LENGTH else xml_string
            ),
        },
    )
    return _parse_with(xml_string, config, correlation_id)


class XMLXParser:
    """Configured, reusable parser.

    Examples:
        >>> parser = XMLXParser(ParserConfig.elements_only())
        >>> str(parser.parse("<a><!-- note --><b/></a>").root)
        '<a><b /></a>'
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "xmlx_parser")
        configure_logging(self.config.global_)

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

        self.logger.info(
            "XMLXParser initialized",
            extra={"backend": self.config.decoding.backend, "preset": self.config.name},
        )

    def parse(
        self,
        xml_string: str,
        correlation_id_override: Optional[str] = None
    ) -> ParseResult:
        """Parse XML text with this parser's configuration."""
        if self.config.global_.enable_correlation_tracking:
            correlation_id = correlation_id_override or self.correlation_id
        else:
            correlation_id = None
        result = _parse_with(xml_string, self.config, correlation_id)

        self._parse_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        if result.success:
            self._successful_parses += 1
        return result

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the parser configuration."""
        self.config = config
        configure_logging(self.config.global_)
        self.logger.info(
            "Parser reconfigured",
            extra={"backend": config.decoding.backend, "preset": config.name},
        )

    @property
    def statistics(self) -> Dict[str, Any]:
        """Parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset parser usage statistics."""
        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0
        self.logger.info("Parser statistics reset")
