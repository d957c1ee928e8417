"""
handlers/prediction_handler.py
------------------------------
Handles /predict. Delegates to PredictionService; when a new request
fails the user still sees the previous predictions.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors
from services.prediction_service import PredictionService, format_predictions
from utils.errors import PredictionError
from utils.logger import get_logger

logger = get_logger(__name__)
prediction_service = PredictionService()


@reports_errors
async def predict_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /predict command - ask the model for fresh predictions."""
    user = update.effective_user
    state = await current_state(update)

    await update.message.reply_text("🔮 Analyzing your numbers...")

    try:
        predictions = await prediction_service.generate(state)
    except PredictionError as e:
        previous = prediction_service.latest(user.id)
        if previous is None:
            raise
        await update.message.reply_text(
            f"⚠️ {e}\nShowing the last predictions instead.\n\n{format_predictions(previous)}"
        )
        return

    await update.message.reply_text(format_predictions(predictions))
