"""Click CLI for i18n-scout."""

import click


def _setup_logging(verbose: bool) -> None:
    import logging

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)


def _scan_settings(config_dir, **cli_values) -> dict:
    """Merge CLI values over the [scan] config section.

    Empty tuples / None from click mean "not given on the command line".
    """
    from pathlib import Path

    from i18n_scout.config import load_config, scan_config

    try:
        settings = dict(scan_config(load_config(Path(config_dir).resolve())))
    except (RuntimeError, ValueError) as e:
        raise click.UsageError(str(e)) from e
    for key, value in cli_values.items():
        if value is None or value == ():
            continue
        settings[key] = list(value) if isinstance(value, tuple) else value
    return settings


@click.group()
def cli():
    """i18n-scout — collect translatable strings reachable from app entry points."""


@cli.command()
@click.argument("repo_path", default=".", type=click.Path(exists=True, file_okay=False))
def init(repo_path):
    """Create .i18n_scout/config.toml with a default [scan] section."""
    from pathlib import Path

    from i18n_scout.config import create_default_config

    try:
        path = create_default_config(Path(repo_path).resolve())
    except FileExistsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Created {path}")


@cli.command()
@click.argument("entry_points", nargs=-1)
@click.option("--root-dir", default=None, help="Directory bounding the module map.")
@click.option("-p", "--platform", "platforms", multiple=True, help="Platform tag, e.g. ios (repeatable).")
@click.option("-e", "--extension", "extensions", multiple=True, help="Bare extension, e.g. js (repeatable).")
@click.option("--extractor", "extractor_function_name", default=None, help="Extractor function name (default: t).")
@click.option("--workers", "max_workers", type=click.IntRange(min=1), default=None, help="Extraction threads.")
@click.option("--max-file-size", type=click.IntRange(min=1), default=None,
              help="Skip source files larger than this many bytes.")
@click.option("--config-dir", default=".", type=click.Path(exists=True, file_okay=False),
              help="Directory holding .i18n_scout/config.toml.")
@click.option("-f", "--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Write output to a file.")
@click.option("--show-strings/--no-show-strings", default=True, help="List unique strings in text output.")
@click.option("--progress/--no-progress", default=True, help="Show a progress bar while extracting.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
def scan(entry_points, root_dir, platforms, extensions, extractor_function_name, max_workers,
         max_file_size, config_dir, output_format, output, show_strings, progress, verbose):
    """Find every file reachable from ENTRY_POINTS and collect extractor strings.

    Options not given on the command line are read from the [scan] section of
    the config file. Relative paths are taken relative to the current directory.
    """
    import contextlib
    import os
    from pathlib import Path

    from i18n_scout.pipeline import ScanOptions, find_strings_to_translate
    from i18n_scout.serializer import report_to_json, report_to_text
    from i18n_scout.traversal import EntryPointError

    _setup_logging(verbose)

    settings = _scan_settings(
        config_dir,
        entry_points=entry_points,
        root_dir=root_dir,
        platforms=platforms,
        extensions=extensions,
        extractor_function_name=extractor_function_name,
        max_workers=max_workers,
        max_file_size=max_file_size,
    )
    if not settings.get("entry_points"):
        raise click.UsageError(
            "No entry points. Pass ENTRY_POINTS or set entry_points in [scan] of .i18n_scout/config.toml."
        )
    settings.setdefault("root_dir", ".")

    try:
        options = ScanOptions(cwd=os.getcwd(), **settings)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    with contextlib.ExitStack() as stack:
        bar = None

        def on_files_found(count):
            nonlocal bar
            if progress and count:
                bar = stack.enter_context(
                    click.progressbar(length=count, label="Extracting strings", file=click.get_text_stream("stderr"))
                )

        def on_progress(_file):
            if bar is not None:
                bar.update(1)

        try:
            report = find_strings_to_translate(
                options, on_files_found=on_files_found, on_progress=on_progress,
            )
        except (EntryPointError, ValueError) as e:
            raise click.ClickException(str(e)) from e

    base = str(Path(options.cwd))
    if output_format == "json":
        rendered = report_to_json(report, base)
    else:
        rendered = report_to_text(report, base, show_strings=show_strings)

    if output:
        out_path = Path(output)
        out_path.write_text(rendered + "\n", encoding="utf-8")
        click.echo(f"Output written to {out_path}", err=True)
    else:
        click.echo(rendered)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--root-dir", default=None, help="Directory bounding the module map.")
@click.option("-p", "--platform", "platforms", multiple=True, help="Platform tag (repeatable).")
@click.option("-e", "--extension", "extensions", multiple=True, help="Bare extension (repeatable).")
@click.option("--config-dir", default=".", type=click.Path(exists=True, file_okay=False),
              help="Directory holding .i18n_scout/config.toml.")
def deps(file, root_dir, platforms, extensions, config_dir):
    """Show how each import of FILE resolves under every platform extension."""
    from pathlib import Path

    from i18n_scout.constants import DEFAULT_EXTENSIONS
    from i18n_scout.indexer.module_map import ModuleMap
    from i18n_scout.resolution.platform_resolver import (
        ResolverConfig,
        build_platform_extensions,
        create_resolver_set,
        module_paths_from_tsconfig,
    )
    from i18n_scout.traversal import EntryPointError, validate_entry_points

    settings = _scan_settings(config_dir, root_dir=root_dir, platforms=platforms, extensions=extensions)
    exts = [e.lstrip(".") for e in settings.get("extensions") or DEFAULT_EXTENSIONS]
    root = Path(settings.get("root_dir") or ".").resolve()

    try:
        module_paths = module_paths_from_tsconfig(root)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    module_map = ModuleMap.build(root, exts, max_file_size=settings.get("max_file_size"))
    try:
        (path,) = validate_entry_points([file], module_map)
    except EntryPointError as e:
        raise click.ClickException(str(e)) from e

    config = ResolverConfig(
        root_dir=str(root),
        has_core_modules=settings.get("has_core_modules", True),
        module_paths=module_paths,
    )
    resolvers = create_resolver_set(
        build_platform_extensions(settings.get("platforms") or [], exts), module_map, config,
    )
    for imp in module_map.get_imports(path):
        click.echo(f"{imp.module}  ({imp.kind}, line {imp.line})")
        for resolver in resolvers:
            resolution = resolver.resolve(path, imp.module)
            outcome = resolution.path if resolution.ok else f"({resolution.reason})"
            click.echo(f"  {resolver.extension:<16} {outcome}")
