"""Reverse DNS commands."""

import click

from fpcli.manifest import reverse_dns


@click.command("to-reverse-dns")
@click.argument("url")
def to_reverse_dns(url: str) -> None:
    """Convert a URL to its reverse DNS equivalent."""
    click.echo(reverse_dns.from_url(url))


@click.command("is-reverse-dns")
@click.argument("path")
def is_reverse_dns(path: str) -> None:
    """Test if a file path uses a reverse DNS id (prints true or false)."""
    click.echo(str(reverse_dns.is_reverse_dns(path)).lower())


__all__ = ["is_reverse_dns", "to_reverse_dns"]
