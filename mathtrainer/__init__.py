"""mathtrainer package initialization.

Arithmetic practice: constrained problem generation, adaptive progress
tracking and learning reports.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
