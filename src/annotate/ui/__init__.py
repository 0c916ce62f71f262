from __future__ import annotations

from .controller import InteractionController
from .terminal import RichTerminal, TerminalUI

__all__ = ["InteractionController", "RichTerminal", "TerminalUI"]
