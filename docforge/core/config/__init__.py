"""
Configuration Management for DocForge.

Public API
----------
    from docforge.core.config import Config, load_config
    from docforge.core.config import DocumentationConfig, PropertyDocumentationOptions

Architecture
------------
    config/
    ├── documentation.py   # Per-kind template options and template validation
    └── config.py          # DocumentationConfig, LoggingSettings, Config

Loading (YAML discovery, env overrides) lives in docforge.core.config_loaders.
"""

from docforge.core.config.config import Config, DocumentationConfig, LoggingSettings
from docforge.core.config.documentation import (
    ConstructorDocumentationOptions,
    EnumDocumentationOptions,
    EnumMemberDocumentationOptions,
    InterfaceDocumentationOptions,
    MethodDocumentationOptions,
    MethodSummaryOptions,
    PropertyDocumentationOptions,
    TemplateOptions,
    ToggleOptions,
    TypeDocumentationOptions,
    ValueOptions,
    template_placeholders,
    validate_template,
)
from docforge.core.config_loaders import load_config, save_config, default_config_yaml

__all__ = [
    "Config",
    "DocumentationConfig",
    "LoggingSettings",
    "ConstructorDocumentationOptions",
    "EnumDocumentationOptions",
    "EnumMemberDocumentationOptions",
    "InterfaceDocumentationOptions",
    "MethodDocumentationOptions",
    "MethodSummaryOptions",
    "PropertyDocumentationOptions",
    "TemplateOptions",
    "ToggleOptions",
    "TypeDocumentationOptions",
    "ValueOptions",
    "template_placeholders",
    "validate_template",
    "load_config",
    "save_config",
    "default_config_yaml",
]
