"""RouterState — an immutable snapshot of a matched location.

States compare equal on path segments and named parameters. The query
string is carried along for hooks to inspect but does not take part in
equality or hashing::

    a = RouterState.from_path("/crises/1?tab=notes")
    b = RouterState.from_path("/crises/1")
    assert a == b
    assert a.query == {"tab": "notes"}
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from urllib.parse import parse_qsl, urlencode, urlsplit


def split_path(path: str) -> tuple[str, ...]:
    """Split ``"/crises/1/"`` into ``("crises", "1")``. Empty parts are dropped."""
    return tuple(p for p in path.strip("/").split("/") if p)


@dataclass(frozen=True, slots=True)
class RouterState:
    """A matched location in the navigation tree.

    ``params`` is filled in by ``RouteTree.resolve()``; states built by
    hand from a path have no params until they are resolved.
    """

    segments: tuple[str, ...] = ()
    params: dict[str, str] = field(default_factory=dict, hash=False)
    query: dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def from_path(
        cls,
        path: str,
        params: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
    ) -> RouterState:
        """Build a state from ``"/a/b?x=1"``.

        Query pairs found in *path* are merged under *query* (explicit
        *query* keys win).
        """
        parts = urlsplit(path)
        merged = dict(parse_qsl(parts.query, keep_blank_values=True))
        if query:
            merged.update(query)
        return cls(
            segments=split_path(parts.path),
            params=dict(params or {}),
            query=merged,
        )

    @property
    def path(self) -> str:
        """The slash-joined path, always starting with ``/``."""
        return "/" + "/".join(self.segments)

    def with_query(self, **query: str) -> RouterState:
        """Return a copy with *query* merged into the query parameters."""
        return replace(self, query={**self.query, **query})

    def with_params(self, params: dict[str, str]) -> RouterState:
        """Return a copy carrying *params* (used once a state is resolved)."""
        return replace(self, params=dict(params))

    def same_location(self, other: RouterState) -> bool:
        """True when path, params, and query are all identical."""
        return self == other and self.query == other.query

    def __str__(self) -> str:
        if self.query:
            return f"{self.path}?{urlencode(self.query)}"
        return self.path
