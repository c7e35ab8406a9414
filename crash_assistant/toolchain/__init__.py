"""
Xcode toolchain discovery (developer root + symbolicatecrash).
"""

from .locator import ToolLocator

__all__ = ["ToolLocator"]
