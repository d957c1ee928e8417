"""
handlers/inventory_handler.py
-----------------------------
Handles inventory commands: listing, adding, editing and deleting
components, plus the CSV stock export.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors, run_blocking
from models.inventory import Component
from services.export_service import INVENTORY_FILENAME, ExportService
from services.report_service import inventory_report
from utils.command_args import as_float, as_int, as_str, parse_fields
from utils.errors import ValidationError
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)
export_service = ExportService()

_INT_FIELDS = ("quantity", "min_stock")
_FLOAT_FIELDS = ("unit_price",)
_TEXT_FIELDS = ("name", "category")


def component_changes(fields: dict[str, str]) -> dict:
    """Typed update fields for /update_component (everything except ``id``)."""
    changes = {}
    for key in fields:
        if key == "id":
            continue
        if key in _INT_FIELDS:
            changes[key] = as_int(fields, key)
        elif key in _FLOAT_FIELDS:
            changes[key] = as_float(fields, key)
        elif key in _TEXT_FIELDS:
            changes[key] = as_str(fields, key)
        else:
            raise ValidationError(f"Unknown component field '{key}'")
    return changes


@reports_errors
async def stock_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /stock command - list components with their stock status."""
    state = await current_state(update)
    if not state.components:
        await update.message.reply_text("📭 No components in stock yet. Use /add_component.")
        return

    report = inventory_report(state.components, state.transactions)
    lines = [
        "📦 Inventory\n",
        f"Items: {report.item_count} | Value: {format_currency(report.total_value, 2)}",
        f"Low stock: {report.low_stock_count} | Stock purchases: {format_currency(report.stock_purchases)}\n",
    ]
    for c in state.components:
        icon = "⚠️" if c.is_low_stock else "✅"
        lines.append(
            f"{icon} {c.name} ({c.category}): {c.quantity} × {format_currency(c.unit_price, 2)}"
            f" = {format_currency(c.stock_value, 2)} [min {c.min_stock}]"
        )
        lines.append(f"   🆔 {c.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_component_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_component command.
    Usage: /add_component name="Arduino Uno R3" quantity=25 unit_price=22 [min_stock=5] [category=Boards]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_component name=\"...\" quantity=<n> unit_price=<price> "
            "[min_stock=5] [category=General]"
        )
        return

    fields = parse_fields(context.args)
    component = Component(
        name=as_str(fields, "name"),
        quantity=as_int(fields, "quantity"),
        unit_price=as_float(fields, "unit_price"),
        min_stock=as_int(fields, "min_stock", 5),
        category=as_str(fields, "category", "General"),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_component, component)
    await update.message.reply_text(
        f"✅ Component added: {stored.name} ({stored.quantity} units)\n🆔 {stored.id}"
    )


@reports_errors
async def update_component_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /update_component command - change one or more fields.
    Usage: /update_component id=<id> quantity=40 unit_price=21.5
    """
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text(
            "⚠️ Usage: /update_component id=<id> [name=] [quantity=] [unit_price=] [min_stock=] [category=]"
        )
        return

    state = await current_state(update)
    updated = await run_blocking(state.update_component, fields["id"], **component_changes(fields))
    await update.message.reply_text(
        f"✏️ Updated {updated.name}: {updated.quantity} units, status {updated.stock_status}"
    )


@reports_errors
async def delete_component_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_component id=<id>."""
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text("⚠️ Usage: /delete_component id=<id>")
        return

    state = await current_state(update)
    if await run_blocking(state.delete_component, fields["id"]):
        await update.message.reply_text("🗑️ Component deleted.")
    else:
        await update.message.reply_text("⚠️ No component with that id.")


@reports_errors
async def export_stock_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /export_stock command - send the inventory as a CSV file."""
    state = await current_state(update)
    if not state.components:
        await update.message.reply_text("📭 Nothing to export yet.")
        return

    await update.message.reply_text("📄 Preparing CSV file...")
    buffer = export_service.export_inventory_csv(state.components)
    await update.message.reply_document(
        document=buffer,
        filename=INVENTORY_FILENAME,
        caption=f"📦 Inventory - {len(state.components)} items",
    )
