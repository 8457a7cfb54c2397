"""
Domain layer module.

This module contains the core request-engine logic. It is independent of
transport and process concerns and depends only on the loader protocol.

Key components:
- step_definition.py: StepDefinition (pattern + callable + identifier)
- catalog.py: read-only, identifier-indexed catalog
- coercion.py: ArgumentCoercer for positional argument conversion
- models.py: wire protocol models (Pydantic-based)
- exceptions.py: request failure taxonomy and construction errors
- decorators.py / loaders.py: marking and collecting step callables
"""
