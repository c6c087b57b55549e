"""
Generators that install or refresh the bundled kit inside a consuming project.

Each generator is an ordered list of copy steps. A step names a directory in
the bundled ``templates`` tree, where it goes under the project root, and
which relative paths it must leave alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import ProjectConfig
from ..sync import SyncReport, sync

logger = logging.getLogger(__name__)

TEMPLATES_ROOT = Path(__file__).resolve().parent.parent / "templates"

# Files a consumer is expected to customize; update never overwrites them.
UPDATE_EXCLUSIONS: Tuple[str, ...] = ("scss/vars/_app.scss",)


class GeneratorError(RuntimeError):
    """Raised for unknown generators or misconfigured copy steps."""


@dataclass(frozen=True)
class CopyStep:
    """
    One directory copy performed by a generator.

    Attributes:
        source: Directory relative to the bundled templates root.
        destination: Directory relative to the project root.
        exclusions: Relative paths (inside source) never copied.
        recursive: False copies only the files directly inside source.
        honor_config_exclusions: Also skip the project's configured ``exclude`` entries.
    """
    source: str
    destination: str
    exclusions: Tuple[str, ...] = ()
    recursive: bool = True
    honor_config_exclusions: bool = False

    def resolved_exclusions(self, config: Optional[ProjectConfig]) -> List[str]:
        items = list(self.exclusions)
        if self.honor_config_exclusions and config is not None:
            items.extend(config.exclude)
        return items


@dataclass(frozen=True)
class Generator:
    name: str
    description: str
    steps: Tuple[CopyStep, ...]


@dataclass
class GeneratorReport:
    """Aggregated outcome of every copy step run by a generator."""
    generator: str
    project_root: Path
    steps: List[SyncReport] = field(default_factory=list)

    @property
    def copied(self) -> int:
        return sum(len(step.copied) for step in self.steps)

    @property
    def skipped(self) -> int:
        return sum(len(step.skipped) for step in self.steps)

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Generator", self.generator)
        yield ("Project root", str(self.project_root))
        yield ("Steps", str(len(self.steps)))
        yield ("Files copied", str(self.copied))
        yield ("Files skipped", str(self.skipped))


_STYLESHEETS_TO_PUBLIC = CopyStep(
    source="public/stylesheets",
    destination="public/pwnstyles/stylesheets",
)
_JAVASCRIPTS_TO_PUBLIC = CopyStep(
    source="public/javascripts",
    destination="public/javascripts",
)
_LAYOUTS = CopyStep(
    source="layouts",
    destination="app/views/layouts",
    recursive=False,
)

GENERATORS: Dict[str, Generator] = {
    "update": Generator(
        name="update",
        description="Refresh the public stylesheets and scripts, keeping customized variables.",
        steps=(
            CopyStep(
                source=_STYLESHEETS_TO_PUBLIC.source,
                destination=_STYLESHEETS_TO_PUBLIC.destination,
                exclusions=UPDATE_EXCLUSIONS,
                honor_config_exclusions=True,
            ),
            _JAVASCRIPTS_TO_PUBLIC,
        ),
    ),
    "install": Generator(
        name="install",
        description="Copy every bundled stylesheet, script and the application layout.",
        steps=(_STYLESHEETS_TO_PUBLIC, _JAVASCRIPTS_TO_PUBLIC, _LAYOUTS),
    ),
    "all": Generator(
        name="all",
        description="Copy the layout and the kit into the asset pipeline directories.",
        steps=(
            _LAYOUTS,
            CopyStep(source="public/stylesheets", destination="app/assets/stylesheets/pwnstyles"),
            CopyStep(source="public/javascripts", destination="app/assets/javascripts"),
        ),
    ),
}


def get_generator(name: str) -> Generator:
    try:
        return GENERATORS[name]
    except KeyError:
        known = ", ".join(sorted(GENERATORS))
        raise GeneratorError(f"Unknown generator '{name}'. Available: {known}") from None


def run_generator(
    name: str,
    project_root: Path | str,
    config: Optional[ProjectConfig] = None,
    *,
    templates_root: Path | str | None = None,
    dry_run: bool = False,
) -> GeneratorReport:
    """
    Run every copy step of the named generator against project_root.

    Args:
        name: Generator name ("install", "update" or "all").
        project_root: Root directory of the consuming application.
        config: Project configuration supplying extra exclusions.
        templates_root: Alternate bundled tree, mainly for tests.
        dry_run: Report what would be copied without writing.

    Returns:
        A GeneratorReport with one SyncReport per step.
    """
    generator = get_generator(name)
    root = Path(project_root).expanduser().resolve()
    if root.exists() and not root.is_dir():
        raise GeneratorError(f"Project root is not a directory: {root}")
    bundle = Path(templates_root).expanduser().resolve() if templates_root else TEMPLATES_ROOT
    report = GeneratorReport(generator=generator.name, project_root=root)

    logger.info("Running %s generator into %s", generator.name, root)
    for step in generator.steps:
        step_report = sync(
            bundle / step.source,
            root / step.destination,
            step.resolved_exclusions(config),
            recursive=step.recursive,
            dry_run=dry_run,
        )
        report.steps.append(step_report)
    return report
