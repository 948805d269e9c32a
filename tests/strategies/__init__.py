"""Hypothesis strategies for turtlefmt property-based testing.

Usage:
    from tests.strategies import turtle_documents, numeric_literals
    from tests.strategies.turtle import string_values, BOUND_PREFIXES

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - string_literals, collections, prefix_directives
    - triples_statements, turtle_documents
"""

from .turtle import (
    BOUND_PREFIXES,
    EX_NS,
    atomic_objects,
    blank_node_labels,
    boolean_literals,
    collections,
    comment_texts,
    decimal_literals,
    double_literals,
    integer_literals,
    iri_refs,
    iris,
    local_names,
    numeric_literals,
    objects_at,
    predicate_object_lists,
    prefix_directives,
    prefixed_names,
    property_lists,
    separators,
    string_literals,
    string_values,
    subjects,
    triples_statements,
    turtle_documents,
    xsd_typed_literals,
)

__all__ = [
    "BOUND_PREFIXES",
    "EX_NS",
    "atomic_objects",
    "blank_node_labels",
    "boolean_literals",
    "collections",
    "comment_texts",
    "decimal_literals",
    "double_literals",
    "integer_literals",
    "iri_refs",
    "iris",
    "local_names",
    "numeric_literals",
    "objects_at",
    "predicate_object_lists",
    "prefix_directives",
    "prefixed_names",
    "property_lists",
    "separators",
    "string_literals",
    "string_values",
    "subjects",
    "triples_statements",
    "turtle_documents",
    "xsd_typed_literals",
]
