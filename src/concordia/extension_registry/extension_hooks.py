"""Per-kind registry of caller supplied validation callbacks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from concordia.schema_model.schema_nodes import SchemaKind, SchemaNode

SchemaCheck = Callable[[Mapping[str, Any]], None]
DataCheck = Callable[[SchemaNode, Any], None]


@dataclass(frozen=True, eq=False)
class ExtensionHook:
    """A schema-time check and a data-time check registered together."""

    schema_check: SchemaCheck | None = None
    data_check: DataCheck | None = None


class ExtensionRegistry:
    """Ordered extension hooks keyed by schema kind, empty by default."""

    def __init__(
        self, hooks: Mapping[SchemaKind | str, Iterable[ExtensionHook]] | None = None
    ) -> None:
        self._hooks: dict[SchemaKind, list[ExtensionHook]] = {}
        for kind, kind_hooks in (hooks or {}).items():
            for hook in kind_hooks:
                self.add(kind, hook)

    def register(
        self,
        kind: SchemaKind | str,
        schema_check: SchemaCheck | None = None,
        data_check: DataCheck | None = None,
    ) -> ExtensionHook:
        """Register a pair of callbacks for ``kind`` and return the handle."""
        if schema_check is None and data_check is None:
            raise ValueError("An extension needs a schema check, a data check, or both.")
        hook = ExtensionHook(schema_check=schema_check, data_check=data_check)
        return self.add(kind, hook)

    def add(self, kind: SchemaKind | str, hook: ExtensionHook) -> ExtensionHook:
        self._hooks.setdefault(SchemaKind(kind), []).append(hook)
        return hook

    def unregister(self, kind: SchemaKind | str, hook: ExtensionHook) -> bool:
        """Remove one registration; return False when it was not registered."""
        kind_hooks = self._hooks.get(SchemaKind(kind), [])
        for index, candidate in enumerate(kind_hooks):
            if candidate is hook:
                del kind_hooks[index]
                return True
        return False

    def clear(self, kind: SchemaKind | str | None = None) -> None:
        if kind is None:
            self._hooks.clear()
        else:
            self._hooks.pop(SchemaKind(kind), None)

    def schema_checks(self, kind: SchemaKind | str) -> tuple[SchemaCheck, ...]:
        return tuple(
            hook.schema_check
            for hook in self._hooks.get(SchemaKind(kind), ())
            if hook.schema_check is not None
        )

    def data_checks(self, kind: SchemaKind | str) -> tuple[DataCheck, ...]:
        return tuple(
            hook.data_check
            for hook in self._hooks.get(SchemaKind(kind), ())
            if hook.data_check is not None
        )

    def kinds(self) -> tuple[SchemaKind, ...]:
        """Return the kinds that currently have at least one hook."""
        return tuple(kind for kind, kind_hooks in self._hooks.items() if kind_hooks)

    def copy(self) -> ExtensionRegistry:
        return ExtensionRegistry({kind: list(kind_hooks) for kind, kind_hooks in self._hooks.items()})

    def __len__(self) -> int:
        return sum(len(kind_hooks) for kind_hooks in self._hooks.values())
