"""TypeScript emission."""

from .typescript import TsBackend, emit_typescript, format_typescript

__all__ = ["TsBackend", "emit_typescript", "format_typescript"]
