"""Core package for annotate: data contracts, persistence and formatting.

Downstream code imports the pieces directly, e.g.:
    from annotate.core.store import AnnotationStore
    from annotate.core.humanize import format_relative
"""

from __future__ import annotations

__all__ = ["__doc__"]
