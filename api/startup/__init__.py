"""Startup modules for component initialization.

- ConfigValidator: fail fast on invalid settings
- ComponentFactory: builds store, providers, orchestrator, executor
- IndexingScheduler: periodic indexing trigger
- StartupManager: runs the phases in order
"""

from .component_factory import ComponentFactory
from .config_validator import ConfigValidator, ConfigValidationError
from .scheduler import IndexingScheduler
from .manager import StartupManager

__all__ = [
    'ComponentFactory',
    'ConfigValidator',
    'ConfigValidationError',
    'IndexingScheduler',
    'StartupManager',
]
