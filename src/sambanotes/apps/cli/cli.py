"""
sambanotes command line interface.

    sambanotes analyze score.pdf --model SONNET
    sambanotes analyze groove.txt --json
    sambanotes mnemonics --summary "Batucada in 2/4, surdo on the one..."
    sambanotes models
    sambanotes notation groove.txt

The analyzer is injected through ctx.obj["analyzer"] (a zero-argument factory) so the
commands can run against fake clients.
"""

from __future__ import annotations
from sambanotes.config import __version__, configure_logging, settings
from sambanotes.domain.exceptions.exceptions import SambaNotesError
from pathlib import Path
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from typing import TYPE_CHECKING
import click
import json
import logging

if TYPE_CHECKING:
    from sambanotes.core.analyzer.analyzer_sync import AnalyzerSync
    from sambanotes.domain.result.analysis_result import MnemonicEntry

logger = logging.getLogger(__name__)

# File suffix -> (encoding, media type)
SUFFIX_TYPES: dict[str, tuple[str, str]] = {
    ".pdf": ("base64", "application/pdf"),
    ".md": ("text", "text/markdown"),
    ".markdown": ("text", "text/markdown"),
}
DEFAULT_TYPE = ("text", "text/plain")
CAPABILITY_COLUMNS = (
    "model",
    "family",
    "max_document_chars",
    "accepted_params",
    "default_max_tokens",
    "max_tokens_param",
)


def _default_analyzer() -> AnalyzerSync:
    from sambanotes.core.analyzer.analyzer_sync import AnalyzerSync

    return AnalyzerSync(settings.default_analyzer_options())


def _analyzer(ctx: click.Context) -> AnalyzerSync:
    return ctx.obj["analyzer"]()


def _mnemonic_table(mnemonics: list[MnemonicEntry]) -> Table:
    table = Table(title="Mnemonics", show_lines=False)
    table.add_column("Mnemonic", style="cyan")
    table.add_column("Pattern", style="magenta")
    table.add_column("Description")
    for entry in mnemonics:
        table.add_row(
            Text(entry.text), Text(entry.pattern or ""), Text(entry.description or "")
        )
    return table


@click.group(invoke_without_command=True)
@click.option("--version", "show_version", is_flag=True, help="Show version and exit.")
@click.option(
    "--log",
    "log_level",
    type=click.Choice(["d", "i", "w"], case_sensitive=False),
    default=None,
    help="Log level: d(ebug), i(nfo), w(arning).",
)
@click.pass_context
def cli(ctx: click.Context, show_version: bool, log_level: str | None):
    """Samba notation analysis with AI models."""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj.setdefault("analyzer", _default_analyzer)
    ctx.obj.setdefault("console", Console())

    if show_version:
        click.echo(__version__)
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-m", "--model", type=str, default=None, help="Model id or alias.")
@click.option("-p", "--prompt", type=str, default="", help="Instruction for the model.")
@click.option(
    "-e",
    "--encoding",
    type=click.Choice(["base64", "text"]),
    default=None,
    help="Override the encoding inferred from the file suffix.",
)
@click.option("-t", "--temperature", type=float, default=None, help="Temperature.")
@click.option("--top-p", type=float, default=None, help="Nucleus sampling cutoff.")
@click.option("--top-k", type=int, default=None, help="Top-k sampling.")
@click.option("--max-tokens", type=int, default=None, help="Output token cap.")
@click.option(
    "--truncate/--no-truncate",
    default=None,
    help="Truncate documents over the model's size limit instead of failing.",
)
@click.option(
    "--require-mnemonics", is_flag=True, help="Never return an empty mnemonic list."
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def analyze(
    ctx: click.Context,
    path: Path,
    model: str | None,
    prompt: str,
    encoding: str | None,
    temperature: float | None,
    top_p: float | None,
    top_k: int | None,
    max_tokens: int | None,
    truncate: bool | None,
    require_mnemonics: bool,
    as_json: bool,
):
    """Analyze a notation file (PDF, text or markdown)."""
    from sambanotes.domain.request.analysis_request import AnalysisRequest
    from sambanotes.domain.request.sampling_params import SamplingParams

    inferred_encoding, media_type = SUFFIX_TYPES.get(path.suffix.lower(), DEFAULT_TYPE)
    if encoding is not None and encoding != inferred_encoding:
        media_type = "application/pdf" if encoding == "base64" else "text/plain"
    encoding = encoding or inferred_encoding

    try:
        request = AnalysisRequest(
            model=model or settings.preferred_model,
            prompt=prompt,
            document=path.read_bytes(),
            document_encoding=encoding,
            media_type=media_type,
            filename=path.name,
            sampling=SamplingParams(
                temperature=temperature,
                top_p=top_p,
                top_k=top_k,
                max_tokens=max_tokens,
            ),
            truncate=truncate,
            require_mnemonics=require_mnemonics,
        )
        result = _analyzer(ctx).analyze(request)
    except (SambaNotesError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(result.model_dump_json(indent=2))
        return

    console: Console = ctx.obj["console"]
    # Model output is plain text, never rich markup
    title = Text(f"{path.name} ({result.model})")
    if result.truncated:
        title.append(" [truncated]", style="yellow")
    console.print(Panel(Text(result.summary), title=title))
    if result.mnemonics:
        console.print(_mnemonic_table(result.mnemonics))
    if result.error is not None:
        console.print(Text(str(result.error), style="red"))


@cli.command()
@click.option("-s", "--summary", type=str, required=True, help="Analysis summary.")
@click.option("-m", "--model", type=str, default=None, help="Model id or alias.")
@click.option("-n", "--count", type=int, default=5, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the mnemonics as JSON.")
@click.pass_context
def mnemonics(
    ctx: click.Context, summary: str, model: str | None, count: int, as_json: bool
):
    """Generate vocal mnemonics from an analysis summary."""
    try:
        entries = _analyzer(ctx).generate_mnemonics(
            summary, model or settings.preferred_model, count
        )
    except (SambaNotesError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps([e.model_dump(exclude_none=True) for e in entries], indent=2))
        return
    ctx.obj["console"].print(_mnemonic_table(entries))


@cli.command()
@click.option("-p", "--provider", type=str, default=None, help="Filter by provider family.")
@click.option("-a", "--aliases", "show_aliases", is_flag=True, help="Show model aliases.")
@click.option("--json", "as_json", is_flag=True, help="Print the capabilities as JSON.")
@click.pass_context
def models(
    ctx: click.Context, provider: str | None, show_aliases: bool, as_json: bool
):
    """List supported models and their capabilities."""
    from sambanotes.core.model.models.modelstore import ModelStore
    from sambanotes.core.model.models.provider import ProviderFamily

    table_data = ModelStore.load()
    console: Console = ctx.obj["console"]

    if show_aliases:
        table = Table(title="Aliases")
        table.add_column("Alias", style="cyan")
        table.add_column("Model")
        for alias, model in sorted(table_data.aliases.items()):
            table.add_row(alias, model)
        console.print(table)
        return

    if provider is not None:
        if provider not in ModelStore.list_providers():
            raise click.BadParameter(
                f"Must be one of: {' | '.join(ModelStore.list_providers())}.",
                param_hint="--provider",
            )
        capabilities = table_data.by_family(ProviderFamily(provider))
    else:
        capabilities = list(table_data.values())

    if as_json:
        click.echo(json.dumps([c.card for c in capabilities], indent=2))
        return

    table = Table(title="Models")
    for column in CAPABILITY_COLUMNS:
        table.add_column(column)
    for capability in capabilities:
        table.add_row(*(capability.card[column] for column in CAPABILITY_COLUMNS))
    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the extraction as JSON.")
@click.pass_context
def notation(ctx: click.Context, path: Path, as_json: bool):
    """Extract rhythm patterns, instruments and breaks from a text notation file."""
    from sambanotes.core.notation.notation import extract_notation

    data = extract_notation(path.read_text(encoding="utf-8"))
    if as_json:
        click.echo(data.model_dump_json(indent=2, exclude={"text"}))
        return

    console: Console = ctx.obj["console"]
    console.print(f"[bold]Instruments:[/bold] {', '.join(data.instruments) or '-'}")
    console.print(f"[bold]Patterns:[/bold] {len(data.patterns)}")
    for pattern in data.patterns:
        console.print(f"  {pattern}", style="cyan", markup=False)
    console.print(f"[bold]Breaks:[/bold] {len(data.breaks)}")
    for line in data.breaks:
        console.print(f"  {line}", markup=False)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
