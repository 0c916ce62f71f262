from __future__ import annotations

from .annotation import SCHEMA_VERSION, Annotation, AnnotationCollection

__all__ = ["Annotation", "AnnotationCollection", "SCHEMA_VERSION"]
