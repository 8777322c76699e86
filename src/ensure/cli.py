from __future__ import annotations

import ast
import json
from pathlib import Path

import typer

app = typer.Typer(name="ensure", help="Inspect how ensure renders values and resolves settings")


def _parse_value(text: str) -> object:
    try:
        return ast.literal_eval(text)
    except (ValueError, SyntaxError):
        return text


@app.command()
def dump(
    values: list[str] = typer.Argument(help="Python literals to render; other text is taken as a string"),
):
    """Print values the way failure messages show them."""
    from ensure.dump import tdump

    typer.echo(tdump(*(_parse_value(v) for v in values)))


@app.command()
def config(
    file: str | None = typer.Option(None, "--file", "-f", help="Settings YAML file to load"),
):
    """Print the resolved settings."""
    import yaml

    from ensure.config import load_settings
    from ensure.errors import ConfigError

    try:
        settings = load_settings(Path(file) if file else None)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(yaml.safe_dump(settings.model_dump(mode="json"), sort_keys=False).rstrip())


@app.command()
def schema(
    out: str | None = typer.Option(None, "--out", "-o", help="Write the JSON schema to this file"),
):
    """Print or write the JSON schema of the settings file."""
    from ensure.config import Settings

    text = json.dumps(Settings.model_json_schema(), indent=2) + "\n"
    if out is None:
        typer.echo(text, nl=False)
        return

    path = Path(out)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    typer.echo(f"Schema written: {path}")
