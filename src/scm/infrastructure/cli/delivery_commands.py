"""CLI commands for deliveries of shipped orders."""

from __future__ import annotations

import click

from scm.application.dto import DeliveryDTO
from scm.application.schedule_delivery import ScheduleDeliveryHandler
from scm.application.update_delivery import (
    CompleteDeliveryHandler,
    DispatchDeliveryHandler,
    FailDeliveryHandler,
)
from scm.domain.exceptions import DomainException
from scm.infrastructure.bootstrap import notification_hub, unit_of_work


def _echo(dto: DeliveryDTO, verb: str) -> None:
    click.echo(f"Delivery {dto.id} {verb} (status={dto.status})")


@click.command("schedule")
@click.option("--order", "order_id", required=True, help="ID of a SHIPPED order.")
@click.option("--date", "scheduled_date", default=None, type=click.DateTime())
@click.option("--driver", default=None)
@click.option("--tracking", "tracking_number", default=None)
def delivery_schedule(order_id, scheduled_date, driver, tracking_number) -> None:
    """Schedule a delivery for a shipped order."""
    handler = ScheduleDeliveryHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(order_id, scheduled_date, driver, tracking_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo(dto, "scheduled")


@click.command("dispatch")
@click.option("--id", "delivery_id", required=True)
def delivery_dispatch(delivery_id: str) -> None:
    """Mark a delivery as in transit."""
    handler = DispatchDeliveryHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(delivery_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo(dto, "dispatched")


@click.command("complete")
@click.option("--id", "delivery_id", required=True)
def delivery_complete(delivery_id: str) -> None:
    """Mark a delivery as delivered; its order becomes DELIVERED."""
    handler = CompleteDeliveryHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(delivery_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo(dto, "completed")


@click.command("fail")
@click.option("--id", "delivery_id", required=True)
@click.option("--reason", required=True)
def delivery_fail(delivery_id: str, reason: str) -> None:
    """Record a failed delivery attempt."""
    handler = FailDeliveryHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(delivery_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _echo(dto, "failed")
