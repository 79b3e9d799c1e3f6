from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.progress import Progress
from rich.table import Table

from . import __version__
from .resolver import resolve_identifier
from .schemas import RequestType, ResolveState

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


@app.command()
def version() -> None:
	"""Show version."""
	console.print(f"ILL Resolver v{__version__}")


@app.command()
def resolve(
	request_type: RequestType = typer.Argument(..., help="Request form: Book, 'Book Chapter', 'Table Contents', Article, Conference"),
	identifier: str = typer.Argument(..., help="ISBN, DOI or PMID as typed into the form"),
) -> None:
	"""Resolve an identifier and show the form fields it would fill."""
	with Progress() as progress:
		task = progress.add_task("Resolving...", total=None)
		resp = asyncio.run(resolve_identifier(request_type, identifier))
		progress.update(task, completed=1)
	if resp.state is ResolveState.FAILED:
		console.print(f"[red]{resp.error}[/red]")
		raise typer.Exit(code=1)
	if resp.state is not ResolveState.DONE:
		console.print(f"Nothing to resolve on a {request_type.value} form.")
		raise typer.Exit(code=2)
	table = Table(title=f"{resp.identifier.kind.value} {resp.identifier.value}" if resp.identifier else None)
	table.add_column("Field")
	table.add_column("Value")
	for field_id, value in resp.fields.items():
		table.add_row(field_id, value)
	console.print(table)
	if resp.full_access_url:
		console.print(f"Full access: {resp.full_access_url}")


@app.command()
def serve(host: str = "0.0.0.0", port: int = 8000, reload: bool = False) -> None:
	"""Start the API server."""
	import uvicorn

	uvicorn.run("ill_resolver.api:app", host=host, port=port, reload=reload, factory=False)


if __name__ == "__main__":
	app()
