"""CLI entry point for glyphflow."""

import logging
import sys

import click

from glyphflow import render
from glyphflow.config import RenderConfig
from glyphflow.ir.model import GraphModel
from glyphflow.types import CharacterSet, DiamondStyle, Direction

_CHARSETS = [cs.value for cs in CharacterSet]
_DIAMOND_STYLES = [ds.value for ds in DiamondStyle]


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--charset",
    "-c",
    "charset",
    type=click.Choice(_CHARSETS, case_sensitive=False),
    default=CharacterSet.default().value,
    show_default=True,
    help="Glyph set for borders, lines and arrows",
)
@click.option(
    "--diamond-style",
    "diamond_style",
    type=click.Choice(_DIAMOND_STYLES, case_sensitive=False),
    default=DiamondStyle.default().value,
    show_default=True,
    help="How decision (diamond) nodes are drawn",
)
@click.option("--direction", "-d", "direction", type=str, default=None, help="Override direction (TD, BT, LR, RL)")
@click.option(
    "--max-label-width",
    "max_label_width",
    type=int,
    default=30,
    show_default=True,
    help="Wrap node labels wider than this (0 disables)",
)
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", is_flag=True, help="Log layout phases to stderr")
def main(
    input: str | None,
    charset: str,
    diamond_style: str,
    direction: str | None,
    max_label_width: int,
    output: str | None,
    verbose: bool,
) -> None:
    """Render a JSON graph model as a monospace diagram."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        model = GraphModel.from_json(text)
        if direction is not None:
            model = model.with_direction(Direction.parse(direction))
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    if max_label_width < 0:
        click.echo("error: --max-label-width must not be negative", err=True)
        sys.exit(1)

    config = RenderConfig(
        character_set=CharacterSet(charset.lower()),
        diamond_style=DiamondStyle(diamond_style.lower()),
        max_label_width=max_label_width,
    )
    rendered = render(model, config)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    elif rendered:
        click.echo(rendered)


if __name__ == "__main__":
    main()
