#!/usr/bin/env python3
"""One-shot translation through the gateway, and the supported language list.

Usage:
    seq2seq-viz translate "how are you" --source en --target mr
    seq2seq-viz languages
"""

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from seq2seq_viz import GatewayFailure, GeminiGateway, Language, SimulationConfig, tokenize

console = Console()


def translate(
    text: Annotated[str, typer.Argument(help="Sentence to translate")],
    source: Annotated[str, typer.Option("--source", "-s", help="Source language code")] = "en",
    target: Annotated[str, typer.Option("--target", "-t", help="Target language code")] = "hi",
    show_tokens: Annotated[
        bool, typer.Option("--tokens", help="Also print input and output tokens")
    ] = False,
):
    """Translate TEXT once, without running the simulation."""
    try:
        source_lang = Language.from_code(source)
        target_lang = Language.from_code(target)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    config = SimulationConfig.from_env()
    gateway = GeminiGateway.from_config(config)

    try:
        result = asyncio.run(
            gateway.translate(
                text.strip(), source_lang.display_name, target_lang.display_name, config.api_key
            )
        )
    except GatewayFailure as e:
        console.print(f"[red]Error ({type(e).__name__}): {e}[/red]")
        raise typer.Exit(1) from None

    console.print(result)
    if show_tokens:
        console.print(f"[dim]input tokens:  {tokenize(text)}[/dim]")
        console.print(f"[dim]output tokens: {tokenize(result)}[/dim]")


def languages():
    """List the supported languages."""
    table = Table(title="Supported Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    for language in Language:
        table.add_row(language.value, language.display_name)
    console.print(table)
