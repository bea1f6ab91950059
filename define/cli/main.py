"""
Command-line interface: look up a word, or inspect configuration and sources.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import requests
import typer

from define.config import (
    DEFAULT_INDENT_SIZE,
    Configuration,
    MerriamWebsterDictionaryConfig,
    OxfordDictionaryConfig,
    load_configuration,
)
from define.core.errors import DefineError, EmptyResultError
from define.core.validation import sort_for_primary_result
from define.rendering.text import ResultPrinter
from define.rendering.writer import IndentedWriter
from define.sources.base import Source
from define.sources.registry import provide_preferred, provider_names
from define.version import printable

logger = logging.getLogger(__name__)

SUGGESTION_LIMIT = 5

app = typer.Typer(add_completion=False)


@app.command()
def define(
    word: Optional[str] = typer.Argument(None, help="The word to look up"),
    config_file: Optional[Path] = typer.Option(
        None, "--config-file", "-c", help="The location of the config file to use"
    ),
    indent_size: Optional[int] = typer.Option(
        None, "--indent-size", min=0, help="The number of spaces to indent output by"
    ),
    preferred_source: Optional[str] = typer.Option(
        None, "--preferred-source", help="The preferred source to use, if available"
    ),
    oxford_app_id: Optional[str] = typer.Option(
        None, "--oxford-dictionary-app-id", help="The app ID for the Oxford Dictionaries API"
    ),
    oxford_app_key: Optional[str] = typer.Option(
        None, "--oxford-dictionary-app-key", help="The app key for the Oxford Dictionaries API"
    ),
    merriam_webster_app_key: Optional[str] = typer.Option(
        None, "--merriam-webster-dictionary-app-key", help="The app key for Merriam-Webster's Dictionary API"
    ),
    print_config: bool = typer.Option(False, "--print-config", help="Print the current configuration"),
    debug_config: bool = typer.Option(False, "--debug-config", help="Print debug info about the configuration"),
    list_sources: bool = typer.Option(False, "--list-sources", help="Print the available sources"),
    version: bool = typer.Option(False, "--version", help="Print the app's version info"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    debug: bool = typer.Option(False, "--debug", help="Show tracebacks instead of error messages"),
) -> None:
    _configure_logging(verbose)

    command_line = Configuration(
        config_file_location=str(config_file) if config_file else "",
        indent_size=indent_size,
        preferred_source=preferred_source or "",
        oxford_dictionary=OxfordDictionaryConfig(app_id=oxford_app_id or "", app_key=oxford_app_key or ""),
        merriam_webster_dictionary=MerriamWebsterDictionaryConfig(app_key=merriam_webster_app_key or ""),
    )
    indent = command_line.indent_size if command_line.indent_size is not None else DEFAULT_INDENT_SIZE

    try:
        layers = load_configuration(command_line)
        config = layers.merged()
        indent = config.indent_size

        if print_config:
            typer.echo(config.to_json())
        elif debug_config:
            typer.echo(json.dumps(layers.to_debug_dict(), indent=4))
        elif list_sources:
            for name in provider_names():
                typer.echo(name)
        elif version:
            typer.echo(printable())
        else:
            if not word:
                raise typer.BadParameter("a word to define is required", param_hint="'WORD'")
            define_word(word, config)
    except (DefineError, requests.RequestException, ValueError) as exc:
        # ValueError covers undecodable payloads (JSON and schema validation)
        if debug:
            raise
        _print_error(exc, indent)
        raise typer.Exit(code=1)


def define_word(word: str, config: Configuration) -> None:
    """Look up a word with the preferred source and print the results."""
    source = provide_preferred(config.preferred_source, config)
    logger.debug("Using source %r", source.name)

    try:
        results = source.define(word)
    except EmptyResultError:
        _print_suggestions(source, word, config.indent_size)
        raise

    sort_for_primary_result(word, results)

    writer = IndentedWriter(sys.stdout, config.indent_size)
    printer = ResultPrinter(writer)
    printer.print_dictionary_results(results)
    printer.print_source_name(source.name)
    writer.flush()


def _print_suggestions(source: Source, word: str, indent_size: int) -> None:
    """Print words the source suggests instead of one it couldn't find."""
    if not source.searchable:
        return

    try:
        suggestions = source.search(word, SUGGESTION_LIMIT)
    except DefineError as exc:
        logger.debug("No suggestions for %r: %s", word, exc)
        return

    writer = IndentedWriter(sys.stderr, indent_size)
    with writer.indented() as indented:
        indented.write_padded_line("Did you mean:")
    ResultPrinter(writer).print_search_results(suggestions)


def _print_error(exc: Exception, indent_size: int) -> None:
    writer = IndentedWriter(sys.stderr, indent_size)
    with writer.indented() as indented:
        indented.write_new_line()
        indented.write_line(str(exc))
        indented.write_new_line()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run() -> None:  # entry point for module execution
    app()


if __name__ == "__main__":
    run()
