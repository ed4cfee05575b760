#!/usr/bin/env python3
"""Play an encoder-decoder simulation in the terminal.

Each snapshot emitted by the engine is rendered as a rich table showing the
encoder tokens, the context vector and the decoder tokens revealed so far.

Usage:
    seq2seq-viz play "how are you" --source en --target hi
    seq2seq-viz play "how are you" --step-mode   # press Enter to advance
"""

import asyncio
import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from seq2seq_viz import Language, Phase, SimulationConfig, SimulationEngine, SimulationSnapshot

console = Console()

# Block glyphs from low to high value
_SHADES = " ▁▂▃▄▅▆▇█"


def vector_glyphs(vector, width: int = 25) -> str:
    """Compress a vector into a row of block glyphs."""
    if not vector:
        return ""
    return "".join(_SHADES[min(int(v * len(_SHADES)), len(_SHADES) - 1)] for v in vector[:width])


def render_snapshot(snapshot: SimulationSnapshot) -> Table:
    """Build a rich table for one snapshot."""
    state = "paused" if snapshot.is_paused else f"playing @ {snapshot.animation_speed}ms"
    table = Table(
        title=f"{snapshot.description}  [dim]({state})[/dim]",
        show_lines=False,
        expand=False,
    )
    table.add_column(f"Encoder ({snapshot.languages.source.display_name})")
    table.add_column("Context")
    table.add_column(f"Decoder ({snapshot.languages.target.display_name})")

    decoded = snapshot.revealed_output_tokens
    rows = max(len(snapshot.input_tokens), len(decoded), 1)
    context = vector_glyphs(snapshot.context_vector) if snapshot.show_context else ""

    for i in range(rows):
        left = Text()
        if i < len(snapshot.input_tokens):
            style = "bold cyan" if snapshot.active_input_index == i else ""
            left.append(f"{snapshot.input_tokens[i]:<12}", style=style)
            left.append(vector_glyphs(snapshot.input_vectors[i]), style="blue")
        right = Text()
        if i < len(decoded):
            style = "bold cyan" if snapshot.active_output_index == i else ""
            right.append(vector_glyphs(snapshot.output_vectors[i]), style="blue")
            right.append(f" {decoded[i]}", style=style)
        table.add_row(left, Text(context if i == 0 else "", style="cyan"), right)

    return table


async def run_simulation(
    engine: SimulationEngine, text: str, source: str, target: str, step_mode: bool
) -> SimulationSnapshot:
    """Drive one run to completion, rendering every snapshot."""
    finished = asyncio.Event()

    def on_snapshot(snapshot: SimulationSnapshot) -> None:
        if snapshot.phase is Phase.TRANSLATING:
            console.print(f"[dim]{snapshot.description}...[/dim]")
            return
        if snapshot.phase is Phase.IDLE:
            finished.set()
            return
        console.print(render_snapshot(snapshot))
        if snapshot.phase is Phase.DONE:
            finished.set()

    unsubscribe = engine.subscribe(on_snapshot)
    try:
        snapshot = await engine.start_translation(text, source, target)
        if snapshot.phase is Phase.IDLE:
            return snapshot

        if step_mode:
            while not finished.is_set():
                await asyncio.to_thread(console.input, "[dim]Enter = next step[/dim] ")
                engine.step()
        elif engine.snapshot.is_paused:
            engine.toggle_pause()

        await finished.wait()
        return engine.snapshot
    finally:
        unsubscribe()
        engine.close()


def main(
    text: Annotated[str, typer.Argument(help="Sentence to translate and visualize")] = "how are you",
    source: Annotated[str, typer.Option("--source", "-s", help="Source language code")] = "en",
    target: Annotated[str, typer.Option("--target", "-t", help="Target language code")] = "hi",
    speed: Annotated[
        int, typer.Option("--speed", help="Milliseconds between steps (200-2000)")
    ] = 1200,
    step_mode: Annotated[
        bool, typer.Option("--step-mode/--no-step-mode", help="Advance manually with Enter")
    ] = False,
    seed: Annotated[Optional[int], typer.Option("--seed", help="Seed for vector generation")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """Translate TEXT and replay the encoder-decoder pipeline step by step."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        Language.from_code(source)
        Language.from_code(target)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    config = SimulationConfig.from_env(default_speed_ms=speed, seed=seed)
    if not config.has_credential:
        console.print("[red]Error: GEMINI_API_KEY environment variable not set[/red]")
        console.print("Get a free key from https://aistudio.google.com/app/apikey")
        raise typer.Exit(1)

    engine = SimulationEngine(config=config)
    snapshot = asyncio.run(run_simulation(engine, text, source, target, step_mode))

    if snapshot.phase is not Phase.DONE:
        console.print(f"[red]Error: {snapshot.error or 'simulation did not complete'}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Final Translation:[/bold] {snapshot.translated_text}")


if __name__ == "__main__":
    typer.run(main)
