"""Command-line interface for exprcalc."""

import logging

import click

from exprcalc import __version__
from exprcalc.calculator import format_result
from exprcalc.errors import CalculatorError
from exprcalc.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, parse, render
from exprcalc.runtime import evaluate
from exprcalc.tokenizer import tokenize

logger = logging.getLogger(__name__)

max_depth_option = click.option(
    "--max-depth",
    type=click.IntRange(min=1, max=MAX_DEPTH_LIMIT),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    envvar="EXPRCALC_MAX_DEPTH",
    help="Maximum nesting of brackets, calls, unary minuses and powers.",
)


@click.group()
@click.version_option(version=__version__, prog_name="exprcalc")
@click.option("-v", "--verbose", is_flag=True, help="Log tokens and expression trees.")
def main(verbose: bool) -> None:
    """exprcalc -- arithmetic expression calculator.

    Expressions starting with '-' must follow a '--' separator:
    exprcalc eval -- "-5 + 3"
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _run(code: str, max_depth: int) -> float:
    tokens = list(tokenize(code))
    logger.debug("tokens: %s", " ".join(str(t) for t in tokens))
    expression = parse(tokens, max_depth=max_depth)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("ast: %s", render(expression))
    result = evaluate(expression)
    logger.debug("result: %r", result)
    return result


@main.command("eval")
@click.argument("expression")
@max_depth_option
def eval_(expression: str, max_depth: int) -> None:
    """Evaluate EXPRESSION and print the result."""
    try:
        result = _run(expression, max_depth)
    except CalculatorError as e:
        raise click.ClickException(str(e))
    click.echo(format_result(result))


@main.command()
@max_depth_option
def repl(max_depth: int) -> None:
    """Read expressions line by line and print their values."""
    while True:
        try:
            code = input("> ")
        except (EOFError, KeyboardInterrupt):
            click.echo()
            break

        if not code.strip():
            continue

        try:
            result = _run(code, max_depth)
        except CalculatorError as e:
            click.echo(str(e), err=True)
            continue

        click.echo(format_result(result))


@main.command()
@click.argument("expression")
@max_depth_option
def explain(expression: str, max_depth: int) -> None:
    """Show tokens, expression tree and result of EXPRESSION."""
    try:
        tokens = list(tokenize(expression))
        click.echo(f"tokens: {' '.join(str(t) for t in tokens)}")
        ast = parse(tokens, max_depth=max_depth)
        click.echo(f"ast: {render(ast)}")
        result = evaluate(ast)
    except CalculatorError as e:
        raise click.ClickException(str(e))
    click.echo(f"result: {format_result(result)}")


if __name__ == "__main__":
    main()
