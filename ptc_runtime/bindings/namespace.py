from __future__ import annotations

from typing import Any, Callable, Dict, Iterator, List

from ptc_runtime.schemas.catalog import CapabilityKind


class CapabilityNamespace:
    """Read-only mapping of sanitized binding names to generated async functions.

    Exposed to snippets as ``tools`` / ``agents`` / ``skills``. Bindings are
    reachable as attributes (``tools.read_file``) or items
    (``tools["read_file"]``).
    """

    __slots__ = ("_kind", "_functions")

    def __init__(self, kind: CapabilityKind, functions: Dict[str, Callable[..., Any]]) -> None:
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_functions", dict(functions))

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name in CapabilityNamespace.__slots__ or name.startswith("__"):
            raise AttributeError(name)
        try:
            return self._functions[name]
        except KeyError:
            raise AttributeError(f"No {self._kind.value} named '{name}' is available") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self._kind.value} bindings are read-only")

    def __getitem__(self, name: str) -> Callable[..., Any]:
        try:
            return self._functions[name]
        except KeyError:
            raise KeyError(f"No {self._kind.value} named '{name}' is available") from None

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __dir__(self) -> List[str]:
        return sorted(self._functions)

    def __repr__(self) -> str:
        return f"<{self._kind.value}s: {', '.join(self._functions) or '(none)'}>"
