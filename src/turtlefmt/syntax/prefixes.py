"""Point-of-use prefix bindings.

A PrefixBindings value is an immutable snapshot of the prefix table at
one position of a document. Directives produce new snapshots; a later
binding of a label only affects terms written after it.

Thread Safety:
    Immutable; safe to share between threads.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from turtlefmt.syntax.ast import Document, IriRef, PrefixDirective, PrefixedName

__all__ = ["PrefixBindings"]

logger = logging.getLogger(__name__)


class PrefixBindings(Mapping[str, str]):
    """Immutable mapping from prefix label (without ':') to namespace IRI.

    Example:
        >>> empty = PrefixBindings()
        >>> bound = empty.bind("ex", "http://example.com/")
        >>> bound.resolve(PrefixedName("ex", "s"))
        'http://example.com/s'
        >>> "ex" in empty
        False
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, str] | None = None) -> None:
        self._table: Mapping[str, str] = MappingProxyType(dict(table or {}))

    def __getitem__(self, label: str) -> str:
        return self._table[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"PrefixBindings({dict(self._table)!r})"

    def bind(self, label: str, iri: str) -> "PrefixBindings":
        """Return a new snapshot with label bound to iri (rebinding allowed)."""
        table = dict(self._table)
        table[label] = iri
        return PrefixBindings(table)

    def apply(self, directive: PrefixDirective) -> "PrefixBindings":
        """Return the snapshot in effect after a prefix directive."""
        return self.bind(directive.label, directive.iri.value)

    def resolve(self, name: PrefixedName) -> str | None:
        """Expand a prefixed name, or None when its prefix is unbound.

        Relative namespace IRIs are concatenated as written; @base is
        never applied.
        """
        namespace = self._table.get(name.prefix)
        if namespace is None:
            return None
        return namespace + name.local

    def resolve_iri(self, iri: IriRef | PrefixedName) -> str | None:
        """Absolute text of an IRI term at this point of the document."""
        if isinstance(iri, IriRef):
            return iri.value
        return self.resolve(iri)

    @classmethod
    def final(cls, document: Document) -> "PrefixBindings":
        """Bindings in effect after the last statement of a document."""
        bindings = cls()
        for statement in document.statements:
            if isinstance(statement, PrefixDirective):
                if statement.label in bindings and bindings[statement.label] != statement.iri.value:
                    logger.debug("Prefix %r rebound to <%s>", statement.label, statement.iri.value)
                bindings = bindings.apply(statement)
        return bindings
