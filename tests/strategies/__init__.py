"""Hypothesis strategies for ressync property-based testing.

Strategies generate resource file text, so properties are checked through
the real parser and serializer.

Usage:
    from tests.strategies import resource_documents, resource_file_pairs

Event-Emitting Strategies (HypoFuzz-Optimized):
    resource_entries, resource_documents, resource_file_pairs
"""

from .resources import (
    GeneratedEntry,
    layouts,
    plain_text,
    render_document,
    resource_documents,
    resource_entries,
    resource_file_pairs,
    resource_names,
    string_values,
)

__all__ = [
    "GeneratedEntry",
    "layouts",
    "plain_text",
    "render_document",
    "resource_documents",
    "resource_entries",
    "resource_file_pairs",
    "resource_names",
    "string_values",
]
