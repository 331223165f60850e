"""Fluent builder for JSON-RPC parameter objects."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class RpcParamsBuilder:
    """Collects JSON-RPC parameters; each method returns the builder itself."""

    def __init__(self) -> None:
        self._params: dict[str, Any] = {}

    def entity(self, entity: int) -> RpcParamsBuilder:
        """Set the ``entity`` id."""
        self._params["entity"] = int(entity)
        return self

    def component(self, component: str) -> RpcParamsBuilder:
        """Set the ``component`` type name."""
        self._params["component"] = str(component)
        return self

    def resource(self, resource: str) -> RpcParamsBuilder:
        """Set the ``resource`` type name."""
        self._params["resource"] = str(resource)
        return self

    def path(self, path: str) -> RpcParamsBuilder:
        """Set the ``path`` used by file operations."""
        self._params["path"] = str(path)
        return self

    def components(self, components: Any) -> RpcParamsBuilder:
        """Set ``components`` to an arbitrary JSON value (used by spawn)."""
        self._params["components"] = components
        return self

    def component_data(self, component: str, data: Any) -> RpcParamsBuilder:
        """Set ``components`` to a map holding one component and its data."""
        self._params["components"] = {component: data}
        return self

    def component_list(self, components: Iterable[str]) -> RpcParamsBuilder:
        """Set ``components`` to a list of component type names."""
        self._params["components"] = [str(name) for name in components]
        return self

    def parent(self, parent: Any) -> RpcParamsBuilder:
        """Set ``parent`` for hierarchy operations (an id or ``None``)."""
        self._params["parent"] = parent
        return self

    def entities(self, entities: Iterable[int]) -> RpcParamsBuilder:
        """Set ``entities`` to a list of entity ids."""
        self._params["entities"] = [int(entity) for entity in entities]
        return self

    def field(self, key: str, value: Any) -> RpcParamsBuilder:
        """Set any custom field."""
        self._params[str(key)] = value
        return self

    def build(self) -> dict[str, Any]:
        """Return the collected parameters as a new dict."""
        return dict(self._params)