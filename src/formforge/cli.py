"""CLI main entry point."""

import json
import logging
import os
from pathlib import Path

import click

from .config import Config
from .consts import CONFIG_FILE_DEFAULT
from .enums import ExportFormat
from .errors import FormForgeException
from .log import setup as setup_log
from .orchestrator import GenerationOrchestrator
from .renderers import FormRenderer, export_bundle, export_filename, export_json
from .schema import Form
from .state import apply_edit

logger = logging.getLogger(__name__)


def load_form(path: str) -> Form:
    """Load a form from a JSON export."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return Form.from_dict(data)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot load form from {path}: {e}")


def render_export(form: Form, export_format: ExportFormat) -> str | bytes:
    if export_format == ExportFormat.JSON:
        return export_json(form)
    if export_format == ExportFormat.HTML:
        return FormRenderer().export_html(form)
    return export_bundle(form)


def write_output(content: str | bytes, output: str | None) -> None:
    if output is None:
        if isinstance(content, bytes):
            raise click.ClickException("Bundle exports need --output")
        click.echo(content)
        return

    path = Path(output)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    click.echo(f"Wrote {path}", err=True)


def parse_assignment(assignment: str) -> tuple[str, object]:
    """Parse ``key=value``, decoding the value as JSON when possible."""
    key, sep, raw = assignment.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"Expected key=value, got '{assignment}'")
    try:
        value = json.loads(raw)
    except ValueError:
        value = raw
    return key.strip(), value


@click.group()
@click.option("--config", "-c", default=CONFIG_FILE_DEFAULT, help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """FormForge - generate web forms from natural-language descriptions."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    try:
        cfg = Config.load_or_default(config)
    except FormForgeException as e:
        raise click.ClickException(str(e))
    ctx.obj["config"] = cfg
    setup_log(cfg.log_file)


@cli.command(name="generate")
@click.argument("prompt")
@click.option(
    "--format",
    "export_format",
    type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
    default=ExportFormat.JSON.value,
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Write to file instead of stdout")
@click.pass_context
def generate(ctx, prompt: str, export_format: str, output: str | None):
    """Generate a form from PROMPT."""
    cfg = ctx.obj["config"]
    try:
        orchestrator = GenerationOrchestrator.from_config(cfg)
        result = orchestrator.handle_generate(prompt)
    except FormForgeException as e:
        raise click.ClickException(str(e))

    logger.info(f"Form '{result.form.title}' served by {result.source.value} generation")
    write_output(render_export(result.form, ExportFormat(export_format)), output)


@cli.command(name="export")
@click.argument("form_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "export_format",
    type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
    default=ExportFormat.HTML.value,
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file (defaults to stdout)")
@click.option(
    "--auto-name",
    is_flag=True,
    default=False,
    help="Name the output file after the form title",
)
def export(form_file: str, export_format: str, output: str | None, auto_name: bool):
    """Export a form saved as JSON to JSON, HTML or a zip bundle."""
    form = load_form(form_file)
    fmt = ExportFormat(export_format)
    if auto_name and output is None:
        output = export_filename(form, "zip" if fmt == ExportFormat.BUNDLE else fmt.value)
    write_output(render_export(form, fmt), output)


@cli.command(name="edit")
@click.argument("form_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("operation")
@click.option("--section", "section_index", type=int, default=None, help="Section index")
@click.option("--field", "field_index", type=int, default=None, help="Field index")
@click.option("--set", "assignments", multiple=True, help="Attribute update as key=value")
@click.option("--output", "-o", default=None, help="Output file (defaults to stdout)")
def edit(form_file, operation, section_index, field_index, assignments, output):
    """Apply OPERATION to the form in FORM_FILE and print the edited form."""
    form = load_form(form_file)

    args: dict = {}
    if section_index is not None:
        args["section_index"] = section_index
    if field_index is not None:
        args["field_index"] = field_index
    if assignments:
        args["updates"] = dict(parse_assignment(a) for a in assignments)

    try:
        result = apply_edit(form, operation, args)
    except FormForgeException as e:
        raise click.ClickException(str(e))

    if result.notice:
        click.echo(result.notice, err=True)
    write_output(export_json(result.form), output)


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.pass_context
def serve(ctx, host, port):
    """Start the HTTP API server."""
    import uvicorn

    cfg = ctx.obj["config"]
    host = host or cfg.web.host
    port = port or cfg.web.port

    os.environ["CONFIG_FILE"] = ctx.obj["config_path"]
    logger.info(f"Starting web service on http://{host}:{port}")
    uvicorn.run(
        "formforge.api:create_app",
        host=host,
        port=port,
        factory=True,
        reload=cfg.web.reload,
    )


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
