"""SheepPig front-end CLI."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from dataclasses import fields, is_dataclass
from pathlib import Path

import click

from sheeppig import __version__
from sheeppig.ast_nodes import CompoundIdentifier, SimpleIdentifier
from sheeppig.config import CONFIG_FILENAME, find_config, load_config
from sheeppig.errors import CompileError, DiagnosticRenderer
from sheeppig.lexer import Lexer, tokenize
from sheeppig.parser import Parser
from sheeppig.tokens import Operator, Token


def _report(error: CompileError, renderer: DiagnosticRenderer) -> None:
    for diag in error.diagnostics:
        click.echo(renderer.render(diag), err=True)


def _format_token(token: Token) -> str:
    loc = f"{token.span.start_line}:{token.span.start_col}" if token.span else "?"
    return f"{loc:>8}  {token.kind.name:<14} {token.describe()}"


@click.group()
@click.version_option(__version__, prog_name="sheeppig")
def main() -> None:
    """The SheepPig language front end."""


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--raw", is_flag=True, help="Show tokenizer output before preprocessing.")
def tokens(file: str, raw: bool) -> None:
    """Print the token stream of a SheepPig source file."""
    source = Path(file).read_text()
    try:
        if raw:
            token_list = Lexer(source, file).lex()
        else:
            token_list = tokenize(source, file)
    except CompileError as e:
        _report(e, DiagnosticRenderer(color=True))
        raise SystemExit(1)

    for token in token_list:
        click.echo(_format_token(token))


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def view(file: str) -> None:
    """View the AST of a SheepPig source file."""
    path = Path(file)
    source = path.read_text()

    try:
        module = Parser(tokenize(source, file), path.stem).parse()
    except CompileError as e:
        _report(e, DiagnosticRenderer(color=True))
        raise SystemExit(1)

    _dump_ast(module, 0)


@main.command()
@click.argument("path", default=".", type=click.Path(exists=True))
def check(path: str) -> None:
    """Parse every .sp file of a SheepPig project."""
    try:
        config_path = find_config(Path(path))
    except FileNotFoundError:
        click.echo(f"error: no {CONFIG_FILENAME} found", err=True)
        raise SystemExit(1)

    try:
        config = load_config(config_path)
    except ValueError as e:
        click.echo(f"error: invalid {config_path}: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"checking {config.package.name}...")
    sp_files = config.source_files(config_path.parent)
    if not sp_files:
        click.echo("warning: no .sp files found", err=True)
        return

    renderer = DiagnosticRenderer(color=config.diagnostics.color)
    failed = 0
    for sp_file in sp_files:
        filename = str(sp_file)
        try:
            Parser(tokenize(sp_file.read_text(), filename), sp_file.stem).parse()
        except CompileError as e:
            failed += 1
            _report(e, renderer)

    if failed:
        click.echo(
            f"checked {config.package.name}: {failed} of {len(sp_files)} file(s) failed",
            err=True,
        )
        raise SystemExit(1)
    click.echo(f"checked {config.package.name}: {len(sp_files)} file(s), no errors")


@main.command()
def repl() -> None:
    """Read lines, printing their tokens and AST, until `exit`."""
    click.echo(f"SheepPig REPL v{__version__}")
    renderer = DiagnosticRenderer(color=True)
    while True:
        click.echo(":> ", nl=False)
        line = sys.stdin.readline()
        if not line or line.strip() == "exit":
            click.echo()
            break

        renderer.register_source("<repl>", line)
        try:
            token_list = tokenize(line, "<repl>")
            click.echo(f" -- Tokens: {[t.describe() for t in token_list]}")
            module = Parser(token_list, "repl").parse()
        except CompileError as e:
            _report(e, renderer)
            continue
        _dump_ast(module, 0)


def _dump_ast(node: object, depth: int) -> None:
    """Print an indented AST dump; names, literals and operators stay on one line."""
    for line in _ast_lines(node, depth):
        click.echo(line)


def _ast_lines(node: object, depth: int) -> Iterator[str]:
    indent = "  " * depth
    name = type(node).__name__

    if isinstance(node, (SimpleIdentifier, CompoundIdentifier)):
        yield f"{indent}{name} {node}"
        return
    if isinstance(node, Operator):
        yield f"{indent}Operator '{node.value}'"
        return
    if not is_dataclass(node):
        yield f"{indent}{node!r}"
        return

    values = [(f.name, getattr(node, f.name)) for f in fields(node)]
    if len(values) == 1 and isinstance(values[0][1], (int, float, str)):
        yield f"{indent}{name} {values[0][1]!r}"  # literal
        return

    yield f"{indent}{name}"
    for field_name, value in values:
        if isinstance(value, list):
            yield f"{indent}  {field_name}:" + ("" if value else " []")
            for item in value:
                yield from _ast_lines(item, depth + 2)
        elif value is None or isinstance(value, bool):
            yield f"{indent}  {field_name}: {value}"
        elif is_dataclass(value) or isinstance(value, Operator):
            yield f"{indent}  {field_name}:"
            yield from _ast_lines(value, depth + 2)
        else:
            yield f"{indent}  {field_name}: {value!r}"
