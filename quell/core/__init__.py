"""Core logic for quell.

This module provides the core functionality:
- expand_directives: Shorthand directive expansion
- DirectiveReconciler: Problem/directive sweep reconciliation
- DocumentLoader: JSON lint document loading
- ConfigLoader: Configuration file loading
- PluginManager: Input plugin discovery and registration
"""

from quell.core.config import (
    Config,
    ConfigError,
    ConfigLoader,
    DirectivesConfig,
    GeneralConfig,
    OutputConfig,
)
from quell.core.expander import UnrecognizedDirectiveError, expand_directives
from quell.core.loader import DocumentError, DocumentLoader
from quell.core.plugin import (
    NoPluginFoundError,
    PluginConflictError,
    PluginError,
    PluginManager,
)
from quell.core.reconciler import (
    DirectiveReconciler,
    ReconcileResult,
    ReconcileStats,
    SuppressionState,
    apply_disable_directives,
)

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoader",
    "DirectiveReconciler",
    "DirectivesConfig",
    "DocumentError",
    "DocumentLoader",
    "GeneralConfig",
    "NoPluginFoundError",
    "OutputConfig",
    "PluginConflictError",
    "PluginError",
    "PluginManager",
    "ReconcileResult",
    "ReconcileStats",
    "SuppressionState",
    "UnrecognizedDirectiveError",
    "apply_disable_directives",
    "expand_directives",
]
