"""analog-sfc: compile .analog single-file components to Angular classes."""

from .compiler import CompileResult, compile_analog_file, compile_file
from .errors import (
    AnalogError,
    ClassificationError,
    InvalidImportAttributeError,
    MetadataShapeError,
    MissingNameError,
    ParseError,
    StructuralError,
)

__all__ = [
    "AnalogError",
    "ClassificationError",
    "CompileResult",
    "InvalidImportAttributeError",
    "MetadataShapeError",
    "MissingNameError",
    "ParseError",
    "StructuralError",
    "compile_analog_file",
    "compile_file",
]
