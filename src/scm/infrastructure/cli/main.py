import click

from scm.infrastructure.bootstrap import settings
from scm.infrastructure.cli.delivery_commands import (
    delivery_complete,
    delivery_dispatch,
    delivery_fail,
    delivery_schedule,
)
from scm.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_create,
    inventory_list,
    inventory_low_stock,
    inventory_show,
    inventory_update,
)
from scm.infrastructure.cli.location_commands import location_add, location_list
from scm.infrastructure.cli.order_commands import (
    order_cancel,
    order_confirm,
    order_create,
    order_fulfill,
    order_list,
    order_process,
    order_return,
    order_show,
    order_update,
)
from scm.infrastructure.cli.party_commands import (
    customer_add,
    customer_list,
    supplier_add,
    supplier_list,
)
from scm.infrastructure.cli.product_commands import product_add, product_list, product_update
from scm.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """SCM - Supply Chain Management"""
    s = settings()
    configure_logging(level=s.LOG_LEVEL, json=s.LOG_JSON)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def inventory() -> None:
    """Manage inventory."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def location() -> None:
    """Manage locations."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def supplier() -> None:
    """Manage suppliers."""


@cli.group()
def delivery() -> None:
    """Manage deliveries."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_confirm)
order.add_command(order_create)
order.add_command(order_fulfill)
order.add_command(order_list)
order.add_command(order_process)
order.add_command(order_return)
order.add_command(order_show)
order.add_command(order_update)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_create)
inventory.add_command(inventory_list)
inventory.add_command(inventory_low_stock)
inventory.add_command(inventory_show)
inventory.add_command(inventory_update)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
location.add_command(location_add)
location.add_command(location_list)
customer.add_command(customer_add)
customer.add_command(customer_list)
supplier.add_command(supplier_add)
supplier.add_command(supplier_list)
delivery.add_command(delivery_complete)
delivery.add_command(delivery_dispatch)
delivery.add_command(delivery_fail)
delivery.add_command(delivery_schedule)
