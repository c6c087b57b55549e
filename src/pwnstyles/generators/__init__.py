"""
Install/update generators for the bundled stylesheet kit.
"""

from .registry import (
    GENERATORS,
    TEMPLATES_ROOT,
    UPDATE_EXCLUSIONS,
    CopyStep,
    Generator,
    GeneratorError,
    GeneratorReport,
    get_generator,
    run_generator,
)

__all__ = [
    "GENERATORS",
    "TEMPLATES_ROOT",
    "UPDATE_EXCLUSIONS",
    "CopyStep",
    "Generator",
    "GeneratorError",
    "GeneratorReport",
    "get_generator",
    "run_generator",
]
