import os

os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

import typer

from lindenmayer.cli.commands.expand import expand_command
from lindenmayer.cli.commands.render import render_command
from lindenmayer.cli.commands.show import show_command

app = typer.Typer(help="Grow L-systems and draw them with a turtle.")

app.command(name="expand")(expand_command)
app.command(name="render")(render_command)
app.command(name="show")(show_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
