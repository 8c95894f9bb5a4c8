"""ts-preview developer CLI: inspect module resolution for a project directory."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.table import Table

from .build import bundle_files
from .build import shutdown_bundler
from .console import console
from .console import err_console
from .errors import ResolutionError
from .errors import TsPreviewError
from .import_map import render_import_map
from .logging_setup import init_json_logging
from .module_resolution import DirectoryPackageStore
from .module_resolution import create_virtual_fs_plugin
from .project import load_project_dir
from .settings import BundlerSettings
from .settings import load_settings

PROJECT_OPTION = click.option(
    "--project",
    "-p",
    "project_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project directory loaded as virtual files",
)
PACKAGES_OPTION = click.option(
    "--packages",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Installed node_modules directory to resolve packages from",
)


def _package_store(packages: Path | None, node_modules: str) -> DirectoryPackageStore | None:
    if packages is None:
        return None
    return DirectoryPackageStore(packages, mount=node_modules)


@click.group()
@click.version_option(package_name="ts-preview")
@click.option("--log-file", default=None, help="JSONL log file (default from settings)")
@click.option("--log-level", default=None, help="Log level (default from settings)")
@click.pass_context
def cli(ctx, log_file, log_level):
    """ts-preview - resolve and walk in-memory TypeScript projects."""
    ctx.obj = {"log_file": log_file, "log_level": log_level}
    ctx.call_on_close(shutdown_bundler)


def _project_settings(ctx: click.Context, project_dir: Path) -> BundlerSettings:
    """Load settings for the project directory and start logging."""
    try:
        settings = load_settings(project_dir)
    except TsPreviewError as e:
        err_console.print(f"[red]✗[/red] {e}")
        ctx.exit(2)
    init_json_logging(ctx.obj["log_file"] or settings.log_path, ctx.obj["log_level"] or settings.log_level)
    return settings


@cli.command()
@click.argument("specifier")
@click.option("--from", "importer", default=None, help="Importing file (omit for an entry point)")
@PROJECT_OPTION
@PACKAGES_OPTION
@click.pass_context
def resolve(ctx, specifier, importer, project_dir, packages):
    """Show where SPECIFIER resolves to."""
    settings = _project_settings(ctx, project_dir)
    files = load_project_dir(project_dir)
    plugin = create_virtual_fs_plugin(
        files, _package_store(packages, settings.node_modules), node_modules=settings.node_modules
    )

    namespace = None
    if importer is not None and importer.startswith(settings.node_modules.rstrip("/") + "/"):
        namespace = "package"

    try:
        resolved = plugin.resolve(specifier, importer, namespace)
    except ResolutionError as e:
        err_console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    suffix = " [dim](external)[/dim]" if resolved.external else ""
    console.print(f"[green]✓[/green] {specifier} -> [cyan]{resolved.namespace.value}[/cyan]:{resolved.path}{suffix}")


@cli.command()
@click.argument("entry", required=False)
@PROJECT_OPTION
@PACKAGES_OPTION
@click.option("--imports", "show_imports", is_flag=True, help="List each module's resolved imports")
@click.pass_context
def graph(ctx, entry, project_dir, packages, show_imports):
    """Walk the module graph from ENTRY and report modules, externals and errors."""
    settings = _project_settings(ctx, project_dir)
    files = load_project_dir(project_dir)
    try:
        result = bundle_files(
            files,
            entry_point=entry,
            package_store=_package_store(packages, settings.node_modules),
            settings=settings,
        )
    except TsPreviewError as e:
        err_console.print(f"[red]✗[/red] Build failed: {e}")
        sys.exit(1)

    table = Table(title=f"Modules ({len(result.order)})", show_lines=False)
    table.add_column("Namespace", style="cyan")
    table.add_column("Path")
    table.add_column("Loader", style="dim")
    if show_imports:
        table.add_column("Imports")
    for key in result.order:
        record = result.modules[key]
        row = [record.namespace.value, record.path, record.loader.value]
        if show_imports:
            row.append(
                "\n".join(f"{spec} -> {target.path}" for spec, target in record.imports.items())
            )
        table.add_row(*row)
    console.print(table)

    if result.externals:
        console.print("\n[bold]Externals[/bold]")
        for specifier in sorted(result.externals):
            console.print(f"  • {specifier}")

    if result.import_map:
        console.print("\n[bold]Import map[/bold]")
        console.print(render_import_map(result.import_map), highlight=False)

    if result.errors:
        err_console.print(f"\n[red]✗ {len(result.errors)} unresolved import(s)[/red]")
        for message in result.errors:
            err_console.print(f"  {message.text}")
        sys.exit(1)

    console.print("\n[green]✓ All imports resolved[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
