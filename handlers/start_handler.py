"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
Loads the user's books and shows available commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from config import COMPANY_NAME
from handlers.common import current_state, reports_errors
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *Welcome to BOT Ledger!*
Finance dashboard for your company 📊

Arguments are written as `key=value`; quote values with spaces,
e.g. `name="Arduino Uno R3"`.

*📊 Overview:*
/summary - Dashboard figures
/month - Month summary (`year=2025 month=3`)
/chart - Cash flow and monthly charts (`year=2025`)
/predict - AI predictions & insights

*💸 Transactions:*
/add\\_income - `category=courses amount=5000 [date= description=]`
/add\\_expense - `category=rent amount=12000 [date= description=]`
/transactions - Latest entries
/delete - Delete a transaction (`id=...`)

*📦 Inventory:*
/stock - Components and stock value
/add\\_component - `name= quantity= unit_price= [min_stock= category=]`
/update\\_component - `id= field=value ...`
/delete\\_component - `id=...`
/export\\_stock - Inventory as CSV

*🛠 Projects & printing:*
/projects, /add\\_project, /update\\_project, /delete\\_project
/print\\_jobs, /add\\_print\\_job, /delete\\_print\\_job

*👥 People:*
/employees, /add\\_employee, /delete\\_employee
/students, /add\\_student, /delete\\_student
/shareholders, /add\\_shareholder, /invest, /delete\\_shareholder

*🏦 Loans:*
/loans, /add\\_loan, /pay\\_emi, /delete\\_loan
/emi - EMI calculator (`principal= rate= months=`)
"""


@reports_errors
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - load the user's books and show welcome message."""
    user = update.effective_user
    state = await current_state(update)
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(
        f"Hello {user.first_name}! 👋\n"
        f"I keep the books of {COMPANY_NAME}.\n"
        f"Your ledger has {len(state.transactions)} transactions.\n\n"
        f"Send /help to see all commands.",
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")
