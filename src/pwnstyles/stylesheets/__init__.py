"""
Stylesheet compilation and expansion helpers.
"""

from .compiler import (
    CompileReport,
    CompilerOptions,
    StylesheetCompileError,
    compile_location,
    compile_stylesheets,
)
from .expansions import StylesheetExpansions

__all__ = [
    "CompileReport",
    "CompilerOptions",
    "StylesheetCompileError",
    "StylesheetExpansions",
    "compile_location",
    "compile_stylesheets",
]
