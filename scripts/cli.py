#!/usr/bin/env python3
"""Unified CLI for the Seq2Seq Visualizer.

Usage:
    seq2seq-viz <command> [options]

Commands:
    play        Translate a sentence and replay the encoder-decoder in the terminal
    translate   One-shot translation through the gateway
    languages   List supported languages
    demo        Launch the browser visualizer
    dev         Development commands (lint, test, format, etc.)
"""

import typer

app = typer.Typer(
    name="seq2seq-viz",
    help="Seq2Seq Visualizer - animated encoder-decoder translation playback",
    no_args_is_help=True,
)


def register_subcommands():
    """Register all subcommands."""
    from scripts.play import main as play_command

    app.command(name="play", help="Translate and replay the encoder-decoder in the terminal")(
        play_command
    )

    from scripts.translate import languages, translate

    app.command(name="translate", help="One-shot translation through the gateway")(translate)
    app.command(name="languages", help="List supported languages")(languages)

    from demo.web import main as demo_command

    app.command(name="demo", help="Launch the browser visualizer")(demo_command)

    from scripts.dev import app as dev_app

    app.add_typer(dev_app, name="dev", help="Development commands")


# Register subcommands at import time
register_subcommands()


def main():
    app()


if __name__ == "__main__":
    main()
