"""
Compile the project's SCSS template locations into CSS with libsass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

import sass

from ..config import ProjectConfig, TemplateLocation, resolve_environment
from ..config.models import DEVELOPMENT
from ..util import ensure_directory

logger = logging.getLogger(__name__)


class StylesheetCompileError(RuntimeError):
    """Raised when a template location cannot be compiled or its CSS cannot be written."""

    def __init__(self, source: Path, message: str) -> None:
        self.source = source
        super().__init__(f"Failed to compile stylesheets in {source}: {message}")


@dataclass(frozen=True)
class CompilerOptions:
    """
    Options handed to the Sass compiler.

    Attributes:
        style: libsass output style ("expanded" or "compressed").
        debug: Emit source comments pointing back at the SCSS lines.
    """
    style: str
    debug: bool

    @classmethod
    def for_environment(cls, environment: str) -> "CompilerOptions":
        if environment == DEVELOPMENT:
            return cls(style="expanded", debug=True)
        return cls(style="compressed", debug=False)


@dataclass
class CompileReport:
    """Stores which template locations were compiled or skipped."""
    environment: str
    options: CompilerOptions
    compiled: List[TemplateLocation] = field(default_factory=list)
    missing: List[TemplateLocation] = field(default_factory=list)

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Environment", self.environment)
        yield ("Output style", self.options.style)
        yield ("Source comments", "yes" if self.options.debug else "no")
        yield ("Locations compiled", str(len(self.compiled)))
        yield ("Locations missing", str(len(self.missing)))


def _resolve(project_root: Path, path: Path) -> Path:
    return path if path.is_absolute() else project_root / path


def compile_location(project_root: Path, location: TemplateLocation, options: CompilerOptions) -> bool:
    """
    Compile one template location. Returns False when its source directory is absent.

    Partials (files starting with an underscore) are only pulled in through
    imports and never produce CSS of their own.
    """
    source = _resolve(project_root, location.source)
    output = _resolve(project_root, location.output)
    if not source.is_dir():
        logger.debug("Skipping %s (no such directory)", source)
        return False

    logger.info("Compiling %s -> %s (%s)", source, output, options.style)
    try:
        ensure_directory(output)
        sass.compile(
            dirname=(str(source), str(output)),
            output_style=options.style,
            source_comments=options.debug,
            include_paths=[str(source)],
        )
    except (sass.CompileError, OSError) as exc:
        raise StylesheetCompileError(source, str(exc)) from exc
    return True


def compile_stylesheets(
    project_root: Path | str,
    config: ProjectConfig,
    *,
    environment: Optional[str] = None,
) -> CompileReport:
    """
    Compile every configured template location under project_root.

    Args:
        project_root: Root of the consuming application.
        config: Project configuration listing template locations.
        environment: Explicit environment overriding the config and PWNSTYLES_ENV.

    Returns:
        A CompileReport with the locations compiled and the ones whose source is missing.
    """
    root = Path(project_root).expanduser().resolve()
    env_name = resolve_environment(config, environment)
    options = CompilerOptions.for_environment(env_name)
    report = CompileReport(environment=env_name, options=options)

    for location in config.template_locations:
        if compile_location(root, location, options):
            report.compiled.append(location)
        else:
            report.missing.append(location)

    if not report.compiled:
        logger.warning("No stylesheet template locations found under %s", root)
    return report
