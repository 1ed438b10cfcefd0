"""
CampFire core: the generic record layer and its collaborators.

Modules:
    errors        Typed error hierarchy
    result        Ok / Err result envelope
    dialect       SQLite / MySQL SQL fragments
    adapters      Database adapters
    connection    Adapter factory from URLs
    cache         Record cache
    hooks         Post-mutation hooks
    dependencies  Per-record collaborator injection
    actor         Who is mutating
    permissions   Admin / creator gates
    schema        Entity descriptors and DDL
    registry      Entity type lookup by name
    record        GenericRecord
    settings      pydantic-settings configuration
    logging       structlog configuration
"""

from campfire.core.actor import Actor
from campfire.core.errors import (
    AuthorizationError,
    CampfireError,
    ConfigError,
    DatabaseError,
    DependencyError,
    ErrorCategory,
    NotApplicableError,
    UnknownFieldError,
)
from campfire.core.permissions import PermissionPolicy
from campfire.core.record import GenericRecord, SetKeyOutcome, as_boolean
from campfire.core.registry import get_entity, list_entities, register_entity
from campfire.core.result import Err, Ok, Result
from campfire.core.schema import EntitySchema, FieldSpec

__all__ = [
    "Actor",
    "AuthorizationError",
    "CampfireError",
    "ConfigError",
    "DatabaseError",
    "DependencyError",
    "EntitySchema",
    "Err",
    "ErrorCategory",
    "FieldSpec",
    "GenericRecord",
    "NotApplicableError",
    "Ok",
    "PermissionPolicy",
    "Result",
    "SetKeyOutcome",
    "UnknownFieldError",
    "as_boolean",
    "get_entity",
    "list_entities",
    "register_entity",
]
