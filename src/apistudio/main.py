"""Main Typer application."""

import typer

from apistudio.cli.commands import (
    add_request,
    env_app,
    generate_code,
    list_requests,
    remove_request,
    send_request,
    show_help,
    show_request,
)

app = typer.Typer(
    name="apistudio",
    help="API testing client: collections, environments, requests and code snippets.",
    no_args_is_help=True,
)

# Register commands
app.command("list", help="List collections and their requests")(list_requests)
app.command("add", help="Save a new request")(add_request)
app.command("remove", help="Delete a saved request")(remove_request)
app.command("show", help="Show a request as it would be sent")(show_request)
app.command("send", help="Send a request and show the response")(send_request)
app.command("code", help="Generate a code snippet for a request")(generate_code)
app.command("help", help="Show detailed help and examples")(show_help)
app.add_typer(env_app, name="env")


@app.callback()
def main() -> None:
    """apistudio - API Testing Client."""


if __name__ == "__main__":
    app()
