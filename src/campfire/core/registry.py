"""Entity type registry.

Manifesto:
    Code that only knows an entity's name (the demo seeder, a form handler
    routing ``?object=Screen``) looks the class up here instead of
    constructing a class name from a string.

Tags:
    campfire, registry, entity-discovery, lookup
"""

from collections.abc import Callable
from typing import TYPE_CHECKING

from campfire.core.logging import get_logger

if TYPE_CHECKING:
    from campfire.core.record import GenericRecord

logger = get_logger(__name__)

# Global entity registry
_registry: dict[str, type["GenericRecord"]] = {}


def register_entity(name: str) -> Callable[[type["GenericRecord"]], type["GenericRecord"]]:
    """Decorator to register an entity class under ``name``."""

    def decorator(cls: type["GenericRecord"]) -> type["GenericRecord"]:
        existing = _registry.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(f"Entity '{name}' is already registered")
        _registry[name] = cls
        logger.debug(
            "entity_registered",
            name=name,
            cls=cls.__name__,
            table=cls.schema.table if getattr(cls, "schema", None) else None,
        )
        return cls

    return decorator


def get_entity(name: str) -> type["GenericRecord"]:
    """Get an entity class by name."""
    if name not in _registry:
        available = ", ".join(sorted(_registry))
        raise KeyError(f"Entity '{name}' not found. Available: {available}")
    return _registry[name]


def list_entities() -> list[str]:
    """List all registered entity names."""
    return sorted(_registry.keys())


def clear_registry() -> None:
    """Clear registry (for testing)."""
    _registry.clear()
