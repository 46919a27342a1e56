"""Script transformation: member registry, scope resolution, metadata merges."""

from .transform import Diagnostic, ScriptTransformer, TransformResult, transform_script

__all__ = ["Diagnostic", "ScriptTransformer", "TransformResult", "transform_script"]
