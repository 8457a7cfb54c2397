"""
stepbridge: serve step definitions to an external test runner.

The package turns wire-protocol request lines into step definition
lookups and invocations, and renders the results back as response lines.
Transport, process startup and code discovery stay outside the package.
"""

from stepbridge.application.factory import create_processor, get_settings
from stepbridge.application.processor import Processor
from stepbridge.domain.catalog import Catalog
from stepbridge.domain.decorators import given, step, then, when
from stepbridge.domain.loaders import NamespaceLoader, StaticLoader
from stepbridge.domain.step_definition import StepDefinition

__version__ = "0.1.0"

__all__ = [
    "Catalog",
    "NamespaceLoader",
    "Processor",
    "StaticLoader",
    "StepDefinition",
    "create_processor",
    "get_settings",
    "given",
    "step",
    "then",
    "when",
]
