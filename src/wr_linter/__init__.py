"""
WebRelease2 Template Linter - static validation of `wr-*` templates.

Line-oriented checks for `%expression%` interpolations and the custom
`wr-*` elements (conditionals, switches, loops, variable operations, error
directives). Nothing is evaluated; only surface syntax and nesting are checked.
"""

from __future__ import annotations

from .types import ErrorType
from .types import Finding
from .types import ValidationOptions
from .validation.template import validate
from .validation.template import validate_file

__version__ = "0.1.0"

__all__ = [
    "ErrorType",
    "Finding",
    "ValidationOptions",
    "validate",
    "validate_file",
]
