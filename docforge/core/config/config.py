"""
Main configuration class for DocForge.

This module provides the Config dataclass that aggregates the documentation
templates and logging settings, and handles dictionary (YAML) parsing.

Architecture Context
--------------------
Configuration sits at the Core layer. The Config object is created once at
startup, validated as a whole, and handed to the strategy registry as a
frozen snapshot:

    docforge.yaml
         ↓
    load_config() → Config (validated, frozen)
         ↓
    build_default_registry(config.documentation, ...)

Configuration Hierarchy
-----------------------
    Config
    ├── DocumentationConfig
    │   ├── exclude / max_workers
    │   ├── type, interface, enum, enum_member
    │   └── constructor, method, property
    └── LoggingSettings

YAML layout
-----------
    documentation:
      exclude: [enum_member]
      property:
        summary:
          template: "{accessors} the {name}"
        value:
          enabled: false
    logging:
      level: DEBUG

Key Design Decisions
--------------------
1. **Frozen dataclasses**: templates cannot change during a run.
2. **Defaults for everything**: zero-config operation is possible.
3. **Fail fast**: unknown keys and bad placeholders raise
   ConfigValidationError while loading, never mid-run.
"""

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple, Type, TypeVar

from docforge.core.config.documentation import (
    ConstructorDocumentationOptions,
    EnumDocumentationOptions,
    EnumMemberDocumentationOptions,
    InterfaceDocumentationOptions,
    MethodDocumentationOptions,
    PropertyDocumentationOptions,
    TypeDocumentationOptions,
)
from docforge.core.exceptions import ConfigValidationError
from docforge.syntax.constructs import ConstructKind

T = TypeVar("T")

MAX_WORKERS_LIMIT = 64
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DocumentationConfig:
    """Templates and toggles for every construct kind."""

    exclude: Tuple[str, ...] = ()
    max_workers: int = 1
    type: TypeDocumentationOptions = field(default_factory=TypeDocumentationOptions)
    interface: InterfaceDocumentationOptions = field(
        default_factory=InterfaceDocumentationOptions
    )
    enum: EnumDocumentationOptions = field(default_factory=EnumDocumentationOptions)
    enum_member: EnumMemberDocumentationOptions = field(
        default_factory=EnumMemberDocumentationOptions
    )
    constructor: ConstructorDocumentationOptions = field(
        default_factory=ConstructorDocumentationOptions
    )
    method: MethodDocumentationOptions = field(
        default_factory=MethodDocumentationOptions
    )
    property: PropertyDocumentationOptions = field(
        default_factory=PropertyDocumentationOptions
    )

    def __post_init__(self) -> None:
        """Validate exclusions and worker bounds."""
        for name in self.exclude:
            try:
                ConstructKind.from_name(name)
            except ValueError as e:
                raise ConfigValidationError(
                    str(e), field="documentation.exclude", value=name
                ) from e

        if not 1 <= self.max_workers <= MAX_WORKERS_LIMIT:
            raise ConfigValidationError(
                f"max_workers must be between 1 and {MAX_WORKERS_LIMIT}",
                field="documentation.max_workers",
                value=self.max_workers,
            )

    def excluded_kinds(self) -> FrozenSet[ConstructKind]:
        """Construct kinds the walker must not classify."""
        return frozenset(ConstructKind.from_name(name) for name in self.exclude)


@dataclass(frozen=True)
class LoggingSettings:
    """Logging settings read from the configuration file."""

    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self) -> None:
        if str(self.level).upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"Unknown log level '{self.level}'",
                field="logging.level",
                value=self.level,
            )


@dataclass(frozen=True)
class Config:
    """Main DocForge configuration."""

    documentation: DocumentationConfig = field(default_factory=DocumentationConfig)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a plain dictionary (YAML friendly)."""
        data = asdict(self)
        data["documentation"]["exclude"] = list(self.documentation.exclude)
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """Create Config from dictionary.

        Raises:
            ConfigValidationError: On unknown keys, wrong shapes or bad templates.
        """
        # Import here to avoid circular dependency
        from docforge.core.config_loaders import expand_env_vars

        data = expand_env_vars(data or {})
        _reject_unknown_keys(cls, data, "")

        documentation = _build(
            DocumentationConfig, data.get("documentation"), "documentation"
        )
        logging_settings = _build(LoggingSettings, data.get("logging"), "logging")
        return cls(documentation=documentation, logging=logging_settings)


def _reject_unknown_keys(cls_type: Any, data: Dict[str, Any], path: str) -> None:
    """Raise when a mapping holds keys the dataclass does not define."""
    known = {f.name for f in fields(cls_type)}
    unknown = sorted(set(data) - known)
    if unknown:
        where = path or "configuration root"
        raise ConfigValidationError(
            f"Unknown key(s) in {where}: {', '.join(unknown)}",
            field=path or None,
            value=unknown,
        )


def _build(cls_type: Type[T], data: Any, path: str) -> T:
    """Recursively build a (frozen) config dataclass from a mapping.

    Nested dataclass fields are detected from their default instance, so the
    YAML shape always mirrors the dataclass shape.
    """
    if data is None:
        return cls_type()
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Section '{path}' must be a mapping", field=path, value=data
        )
    _reject_unknown_keys(cls_type, data, path)

    defaults = cls_type()
    kwargs: Dict[str, Any] = {}
    for f in fields(cls_type):
        if f.name not in data:
            continue
        value = data[f.name]
        default_value = getattr(defaults, f.name)
        if is_dataclass(default_value):
            kwargs[f.name] = _build(type(default_value), value, f"{path}.{f.name}")
        elif isinstance(default_value, tuple):
            kwargs[f.name] = _as_tuple(value, f"{path}.{f.name}")
        else:
            kwargs[f.name] = value

    try:
        return cls_type(**kwargs)
    except TypeError as e:
        raise ConfigValidationError(
            f"Invalid section '{path}': {e}", field=path, value=data
        ) from e


def _as_tuple(value: Any, path: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ConfigValidationError(
            f"'{path}' must be a list", field=path, value=value
        )
    return tuple(str(v) for v in value)
