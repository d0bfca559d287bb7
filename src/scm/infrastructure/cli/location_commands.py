"""CLI commands for stock locations."""

from __future__ import annotations

import click

from scm.application.add_location import AddLocationHandler
from scm.domain.exceptions import DomainException
from scm.domain.model.location import LocationType
from scm.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True, help="Location name.")
@click.option("--type", "location_type", default=LocationType.WAREHOUSE.value,
              type=click.Choice([t.value for t in LocationType], case_sensitive=False))
@click.option("--city", default=None)
def location_add(name: str, location_type: str, city: str | None) -> None:
    """Register a warehouse, store or distribution center."""
    handler = AddLocationHandler(uow=unit_of_work())

    try:
        location = handler.handle(name=name, type=location_type, city=city)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Location '{location.name}' ({location.type.value}) added")
    click.echo(f"ID: {location.id}")


@click.command("list")
def location_list() -> None:
    """List all locations."""
    with unit_of_work() as uow:
        locations = uow.locations.list_all()

    if not locations:
        click.echo("No locations found.")
        return

    click.echo(f"{'Name':<24} {'Type':<20} {'City':<16}  ID")
    click.echo("-" * 100)
    for loc in locations:
        click.echo(f"{loc.name:<24} {loc.type.value:<20} {loc.city or '':<16}  {loc.id}")
