"""Diagnostic system for combjson errors.

Provides structured error diagnostics with codes, spans, hints and label
context. Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    CombJsonError,
    GrammarError,
    JsonSyntaxError,
    SerializationDepthError,
    SerializationValidationError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CombJsonError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "GrammarError",
    "JsonSyntaxError",
    "OutputFormat",
    "SerializationDepthError",
    "SerializationValidationError",
    "SourceSpan",
]
