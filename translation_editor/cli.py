"""Command line helpers that run outside the Gradio app."""
from __future__ import annotations

import logging

import click

from .errors import RevisionError
from .revision import read_revision_from_git, write_revision


@click.command(name="generate-revision")
@click.option("--output", "-o", type=click.Path(dir_okay=False), default="revision.json", show_default=True,
              help="Where to write the revision JSON.")
@click.option("--repo", type=click.Path(exists=True, file_okay=False), default=None,
              help="Git checkout to read from (defaults to the current directory).")
def generate_revision(output: str, repo) -> None:
    """Write githubOrg, repoName and baseBranch of a git checkout to a JSON file."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        revision = read_revision_from_git(repo)
    except RevisionError as exc:
        raise click.ClickException(f"Error generating revision data: {exc}") from exc
    write_revision(revision, output)
    click.echo(f"Successfully generated {output}")
