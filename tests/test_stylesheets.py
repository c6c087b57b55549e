from pathlib import Path

import pytest

from pwnstyles.config import ProjectConfig, TemplateLocation
from pwnstyles.generators import run_generator
from pwnstyles.stylesheets import (
    CompilerOptions,
    StylesheetCompileError,
    StylesheetExpansions,
    compile_stylesheets,
)


def _write_scss(root: Path, name: str, body: str) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    return path


def test_options_depend_on_environment() -> None:
    assert CompilerOptions.for_environment("development") == CompilerOptions(style="expanded", debug=True)
    assert CompilerOptions.for_environment("production") == CompilerOptions(style="compressed", debug=False)
    assert CompilerOptions.for_environment("test") == CompilerOptions(style="compressed", debug=False)


def test_compiles_installed_kit(project_root: Path) -> None:
    run_generator("install", project_root)

    report = compile_stylesheets(project_root, ProjectConfig(), environment="production")

    output = project_root / "public" / "pwnstyles" / "stylesheets"
    css = (output / "pwnstyles.css").read_text(encoding="utf-8")
    assert "body{" in css
    assert not (output / "_layout.css").exists()
    assert len(report.compiled) == 1
    assert [str(loc.source) for loc in report.missing] == ["public/stylesheets/scss"]


def test_app_variables_override_defaults(project_root: Path) -> None:
    run_generator("install", project_root)
    scss = project_root / "public" / "pwnstyles" / "stylesheets" / "scss"
    (scss / "vars" / "_app.scss").write_text("$pwn-heading-color: #123456;\n", encoding="utf-8")

    compile_stylesheets(project_root, ProjectConfig(), environment="development")

    css = (project_root / "public" / "pwnstyles" / "stylesheets" / "pwnstyles.css").read_text(encoding="utf-8")
    assert "#123456" in css


def test_development_build_is_expanded_with_source_comments(project_root: Path) -> None:
    _write_scss(project_root / "public" / "stylesheets" / "scss", "site.scss", "$c: #abcdef;\na { color: $c; }\n")

    report = compile_stylesheets(project_root, ProjectConfig(), environment="development")

    css = (project_root / "public" / "stylesheets" / "site.css").read_text(encoding="utf-8")
    assert "/* line" in css
    assert "color: #abcdef;" in css
    assert report.options.style == "expanded"


def test_environment_comes_from_config(project_root: Path) -> None:
    _write_scss(project_root / "public" / "stylesheets" / "scss", "site.scss", "a { color: red; }\n")

    report = compile_stylesheets(project_root, ProjectConfig(environment="production"))

    css = (project_root / "public" / "stylesheets" / "site.css").read_text(encoding="utf-8")
    assert "/* line" not in css
    assert report.environment == "production"


def test_custom_template_location(project_root: Path) -> None:
    _write_scss(project_root / "styles", "admin.scss", "table { border: 0; }\n")
    config = ProjectConfig()
    config.add_template_location("styles", "public/admin")

    report = compile_stylesheets(project_root, config, environment="production")

    assert (project_root / "public" / "admin" / "admin.css").is_file()
    assert report.compiled == [TemplateLocation(source=Path("styles"), output=Path("public/admin"))]


def test_invalid_scss_raises_compile_error(project_root: Path) -> None:
    source = project_root / "public" / "stylesheets" / "scss"
    _write_scss(source, "broken.scss", "a { color: $undefined-variable; }\n")

    with pytest.raises(StylesheetCompileError) as exc:
        compile_stylesheets(project_root, ProjectConfig(), environment="production")

    assert exc.value.source == source


def test_expansion_resolves_registered_names() -> None:
    expansions = StylesheetExpansions({"pwnstyles": ["/pwnstyles/stylesheets/pwnstyles"]})

    assert expansions.expand("pwnstyles") == ["/pwnstyles/stylesheets/pwnstyles.css"]
    assert "pwnstyles" in expansions


def test_expansion_passes_through_plain_paths_and_drops_duplicates() -> None:
    expansions = StylesheetExpansions({"base": ["/a", "/b.css"]})

    assert expansions.expand("base", "/c", "/a") == ["/a.css", "/b.css", "/c.css"]


def test_link_tags_render_one_tag_per_stylesheet() -> None:
    expansions = StylesheetExpansions(ProjectConfig().expansions)
    expansions.register("admin", ["/stylesheets/admin"])

    tags = expansions.link_tags("pwnstyles", "admin")

    assert tags.splitlines() == [
        '<link href="/pwnstyles/stylesheets/pwnstyles.css" media="screen" rel="stylesheet" type="text/css">',
        '<link href="/stylesheets/admin.css" media="screen" rel="stylesheet" type="text/css">',
    ]


def test_register_rejects_blank_names() -> None:
    with pytest.raises(ValueError):
        StylesheetExpansions().register("  ", ["/a"])


def test_unwritable_output_raises_compile_error(project_root: Path) -> None:
    source = project_root / "styles"
    _write_scss(source, "site.scss", "a { color: red; }\n")
    (project_root / "built").write_text("not a directory", encoding="utf-8")
    config = ProjectConfig()
    config.add_template_location("styles", "built")

    with pytest.raises(StylesheetCompileError) as exc:
        compile_stylesheets(project_root, config, environment="production")

    assert exc.value.source == source
    assert isinstance(exc.value.__cause__, OSError)


def test_expansion_names_are_stripped() -> None:
    expansions = StylesheetExpansions({"pwnstyles": ["/pwnstyles/stylesheets/pwnstyles"]})

    assert expansions.expand(" pwnstyles ") == ["/pwnstyles/stylesheets/pwnstyles.css"]
    assert " pwnstyles" in expansions
