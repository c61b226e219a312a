"""Exceptions raised by the GraphML readers and writers."""
from __future__ import annotations


class GraphMLError(Exception):
    """Base class for fatal GraphML persistence errors."""


class StructuralError(GraphMLError, ValueError):
    """The document (or the network being written) is not well formed.

    Raised when the root is not ``graphml``, when the ``graph`` element is
    missing, or when a node id or key id is duplicated or undeclared.
    """


class UnsupportedTypeKind(GraphMLError, TypeError):
    """A value type or ``attr.type`` string has no GraphML mapping."""


class ValueParseError(GraphMLError, ValueError):
    """Text content does not parse as the declared value kind."""


__all__ = [
    "GraphMLError",
    "StructuralError",
    "UnsupportedTypeKind",
    "ValueParseError",
]
