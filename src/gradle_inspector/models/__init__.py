"""Pydantic models and enums used throughout gradle-inspector."""

from gradle_inspector.models.configuration import Configuration
from gradle_inspector.models.gradle import (
    ROOT_MODULE,
    CommandResult,
    GradleTask,
    PropertyMode,
    PropertyQuery,
    normalize_module,
    task_path,
)

__all__ = [
    'ROOT_MODULE',
    'CommandResult',
    'Configuration',
    'GradleTask',
    'PropertyMode',
    'PropertyQuery',
    'normalize_module',
    'task_path',
]
