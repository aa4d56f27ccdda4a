#!/usr/bin/env python3
"""
Quick Start Guide for the xmlx node tree.

Parses a small catalog, queries it by qualified name, reads typed values,
edits the tree and renders it back to XML.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xmlx import Node, parse_string, unmarshal
from xmlx.api.decoding import ElementTreeDecoder

CATALOG = """<?xml-stylesheet href="catalog.css"?>
<catalog>
  <!-- prices in EUR -->
  <book id="1" available="true">
    <title>Dune</title>
    <price>9.99</price>
  </book>
  <book id="2" available="false">
    <title>Solaris</title>
    <price>12.50</price>
  </book>
</catalog>"""


def quick_start_example():
    """Walk through parsing, searching, editing and rendering."""

    print("QUICK START - xmlx")
    print("=" * 45)

    print("\nStep 1: Parsing")
    print("-" * 30)
    result = parse_string(CATALOG)
    print(f"success={result.success} elements={result.element_count}")

    print("\nStep 2: Searching and typed values")
    print("-" * 30)
    for book in result.root.select_nodes("*", "book"):
        print(
            f"book {book.get_attribute_int('', 'id')}: "
            f"{book.get_string('*', 'title')} "
            f"price={book.get_float64('*', 'price')} "
            f"available={book.get_attribute_bool('', 'available')}"
        )
    print(f"missing value -> {result.root.get_int('*', 'isbn')!r}")

    print("\nStep 3: Editing")
    print("-" * 30)
    catalog = result.root.select_node("*", "catalog")
    archive = Node.element("archive")
    catalog.add_child(archive)
    archive.add_child(catalog.select_nodes("*", "book")[1])
    print(f"books directly in catalog: "
          f"{sum(1 for c in catalog.children if c.name.local == 'book')}")

    print("\nStep 4: Rendering")
    print("-" * 30)
    print(result.root.to_string())

    print("\nStep 5: Structured decoding")
    print("-" * 30)
    target = {}
    archive.unmarshal(target, ElementTreeDecoder())
    print(target)
    print(unmarshal(catalog.select_node("*", "title"), {}))


if __name__ == "__main__":
    quick_start_example()
