"""annotate: jot down short notes from the terminal and browse them later.

Two entry paths share one store:

- ``annotate some text here`` appends a timestamped annotation and exits.
- ``annotate`` opens an interactive list of everything recorded so far.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
