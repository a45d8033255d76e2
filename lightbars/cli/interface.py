# lightbars/cli/interface.py
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

import click
from click_option_group import optgroup
import structlog

from lightbars import __version__ as app_version
from lightbars.config.settings import CachePolicy, EngineConfig, DEFAULT_TEMPLATE_EXTENSIONS
from lightbars.config.loader import load_and_merge_configs, build_engine_config
from lightbars.logging_setup import configure_logging
from lightbars.core.context_loader import build_render_context
from lightbars.core.output import write_to_stdout, write_to_file, copy_to_clipboard
from lightbars.core.templating import TemplateEngine
from lightbars.cli.console_output import print_ast_tree, print_check_results
from lightbars.exceptions import LightbarsError, TemplateSyntaxError

log = structlog.get_logger(__name__)

def _effective_engine_config(ctx: click.Context, **overrides: Any) -> EngineConfig:
    raw_configs_from_toml_files = load_and_merge_configs()
    return build_engine_config(raw_configs_from_toml_files, ctx.obj.get("config_profile"), **overrides)

def _exit_with_error(e: LightbarsError):
    log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
    click.secho(f"Error: {e}", fg="red", err=True)
    sys.exit(1)

def _read_template_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LightbarsError(f"Failed to read template file {path}: {e}") from e


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@click.option("--force-json-logs", "force_json_logs", is_flag=True, default=False, help="Force JSON logs.")
@click.option("--config-profile", "config_profile", default=None, help="Load a profile from config file(s).")
@click.version_option(version=app_version, prog_name="lightbars", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, verbosity_level: int, force_json_logs: bool, config_profile: Optional[str]):
    """lightbars: render HTML, XML and text documents from templates
    with variables, conditionals and loops."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs)

    ctx.ensure_object(dict)
    ctx.obj["config_profile"] = config_profile
    log.debug("cli_command_invoked", subcommand=ctx.invoked_subcommand, profile=config_profile)


@main_cli_group.command("render")
@click.argument("template_name")
@optgroup.group("Template Source Options", help="Where templates are found and how they are loaded.")
@optgroup.option("-d", "--template-dir", "template_dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Directory holding template files. Default: ./templates.")
@optgroup.option("--ext", "extensions", multiple=True, help=f"Extension to probe for names without one, in order. Default: {' '.join(DEFAULT_TEMPLATE_EXTENSIONS)}.")
@optgroup.option("--cache-policy", "cache_policy", type=click.Choice([p.value for p in CachePolicy]), default=None, help="When to cache template source. Default: environment.")
@optgroup.option("--max-depth", "max_nesting_depth", type=click.IntRange(min=1), default=None, help="Maximum block nesting depth.")
@optgroup.group("Context Options", help="Data made available to the template.")
@optgroup.option("-c", "--context", "context_files", multiple=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON, YAML or TOML file with context data. Repeatable; later files override earlier ones.")
@optgroup.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="Context variable; overrides values from context files.")
@optgroup.group("Output Options", help="Where the rendered document goes.")
@optgroup.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the output to.")
@optgroup.option("--clipboard", "clipboard", is_flag=True, default=False, help="Copy output to clipboard.")
@click.pass_context
def render_command(ctx: click.Context, template_name: str, template_dir: Optional[Path],
                   extensions: Tuple[str, ...], cache_policy: Optional[str], max_nesting_depth: Optional[int],
                   context_files: Tuple[Path, ...], user_vars: Tuple[str, ...],
                   output_file: Optional[Path], clipboard: bool):
    """Render the template TEMPLATE_NAME (extension optional) from the template directory."""
    try:
        config = _effective_engine_config(
            ctx,
            template_dir=template_dir,
            extensions=list(extensions) or None,
            cache_policy=cache_policy,
            max_nesting_depth=max_nesting_depth,
        )
        render_context = build_render_context(context_files, user_vars)
        engine = TemplateEngine(config=config)
        rendered = engine.render(template_name, render_context)
        log.info("render_complete_in_cli", template=template_name, length=len(rendered))

        output_destination_used = False
        if output_file:
            write_to_file(output_file, rendered)
            click.echo(f"Info: Output written to: {output_file}", err=True)
            output_destination_used = True

        clipboard_copy_succeeded = False
        if clipboard:
            clipboard_copy_succeeded = copy_to_clipboard(rendered)
            output_destination_used = True
            if not clipboard_copy_succeeded:
                click.echo("Info: Clipboard copy failed. Outputting to stdout instead.", err=True)

        if not output_destination_used or (clipboard and not clipboard_copy_succeeded):
            write_to_stdout(rendered)
    except LightbarsError as e:
        _exit_with_error(e)


@main_cli_group.command("check")
@click.argument("template_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--max-depth", "max_nesting_depth", type=click.IntRange(min=1), default=None, help="Maximum block nesting depth.")
@click.pass_context
def check_command(ctx: click.Context, template_files: Tuple[Path, ...], max_nesting_depth: Optional[int]):
    """Check TEMPLATE_FILES for unbalanced or misplaced block tags."""
    try:
        config = _effective_engine_config(ctx, max_nesting_depth=max_nesting_depth)
        engine = TemplateEngine(config=config)
        results: List[Tuple[str, str]] = []
        for path in template_files:
            try:
                engine.compile(_read_template_file(path), source_name=str(path))
                results.append((str(path), ""))
            except TemplateSyntaxError as e:
                results.append((str(path), e.message if e.line is None else f"line {e.line}, column {e.column}: {e.message}"))
    except LightbarsError as e:
        _exit_with_error(e)

    print_check_results(results)
    if any(error for _, error in results):
        ctx.exit(1)


@main_cli_group.command("tree")
@click.argument("template_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def tree_command(ctx: click.Context, template_file: Path):
    """Print the parsed structure of TEMPLATE_FILE."""
    try:
        engine = TemplateEngine(config=_effective_engine_config(ctx))
        template = engine.compile(_read_template_file(template_file), source_name=str(template_file))
    except LightbarsError as e:
        _exit_with_error(e)
    print_ast_tree(template)
