"""
ai/predictor.py
---------------
Uses Google Gemini to turn the dashboard's aggregate figures into
qualitative financial predictions.

Responsibilities:
    - Send the analyst prompt plus the financial-data JSON to the model.
    - Pull the JSON object out of the reply (falling back to plain text).
    - Map upstream HTTP failures onto RateLimitError (429),
      QuotaExceededError (402) or a generic PredictionError.
"""

import json
import re

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from config import COMPANY_NAME, DEFAULT_CURRENCY, GEMINI_API_KEY, GEMINI_MODEL
from utils.errors import PredictionError, QuotaExceededError, RateLimitError
from utils.logger import get_logger

logger = get_logger(__name__)

# ── System prompt for the AI ─────────────────────────────

_SYSTEM_PROMPT = f"""You are a financial analyst AI for {COMPANY_NAME}, a robotics and EdTech company.
Analyze the provided financial data and generate insights in JSON format with the following structure:
{{
  "sixMonthGrowth": {{ "percentage": number, "trend": "up" | "down" | "stable", "analysis": string }},
  "profitLoss": {{ "expected": number, "confidence": "high" | "medium" | "low", "factors": string[] }},
  "burnRate": {{ "monthly": number, "trend": string }},
  "cashRunway": {{ "months": number, "recommendation": string }},
  "marketOpportunities": string[],
  "riskAssessment": {{ "level": "low" | "medium" | "high", "risks": string[] }},
  "summary": string
}}

Use {DEFAULT_CURRENCY} for all currency values. Be realistic and data-driven in your analysis.
Return the JSON object only, without markdown."""

# Configure the Gemini client once at module level
if GEMINI_API_KEY:
    genai.configure(api_key=GEMINI_API_KEY)

_model = genai.GenerativeModel(GEMINI_MODEL, system_instruction=_SYSTEM_PROMPT)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def extract_predictions(content: str | None) -> dict:
    """
    Parse the model reply.

    The outermost ``{...}`` span is decoded as JSON. A reply without one,
    or one that is not valid JSON, is kept as ``{"summary": <text>}``.
    """
    content = content or ""
    match = _JSON_OBJECT.search(content)
    if not match:
        return {"summary": content.strip()}
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning("Gemini returned malformed JSON, keeping the text as summary")
        return {"summary": content.strip()}
    if not isinstance(parsed, dict):
        return {"summary": content.strip()}
    return parsed


def classify_api_error(error: google_exceptions.GoogleAPICallError) -> PredictionError:
    """Pick the user-facing error for an upstream failure by its HTTP status."""
    status = error.code
    if status == 429:
        return RateLimitError(status=status)
    if status == 402:
        return QuotaExceededError(status=status)
    return PredictionError(status=status)


async def request_predictions(financial_data: dict) -> dict:
    """
    Ask the model for predictions about ``financial_data``.

    Args:
        financial_data: The camelCase aggregate built by PredictionService.

    Returns:
        The predictions dict (loosely typed; every key is optional).

    Raises:
        RateLimitError: Upstream answered 429.
        QuotaExceededError: Upstream answered 402.
        PredictionError: Any other failure.
    """
    prompt = (
        f"Analyze this financial data for {COMPANY_NAME} and provide predictions:\n"
        f"{json.dumps(financial_data, indent=2)}"
    )
    try:
        response = await _model.generate_content_async(
            prompt,
            generation_config=genai.GenerationConfig(
                temperature=0.4,
                max_output_tokens=2048,
            ),
        )
        content = response.text
    except google_exceptions.GoogleAPICallError as e:
        logger.error(f"Gemini API error {e.code}: {e}")
        raise classify_api_error(e) from e
    except Exception as e:
        logger.error(f"Gemini prediction failed: {e}")
        raise PredictionError() from e

    predictions = extract_predictions(content)
    logger.info(f"Gemini returned predictions with keys: {', '.join(sorted(predictions))}")
    return predictions
