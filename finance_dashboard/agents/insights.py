"""
AI Spending Insights

CRITICAL BOUNDARIES:
- The LLM only ever sees AGGREGATED figures (total expense and the top
  categories), never individual transactions or account balances
- The LLM's answer is shown verbatim; it is advice, not data
- Any failure becomes a fixed fallback message; nothing propagates to the UI

FLOW:
1. Guards: no API key -> "unavailable"; too few expenses -> "insufficient data"
2. Aggregate: total expense + top categories (deterministic)
3. Prompt -> Gemini, bounded by a timeout
4. Response text -> UI

Steps 1 and 2 never touch the network.
"""

import asyncio
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Sequence

import google.generativeai as genai
from pydantic import BaseModel

from finance_dashboard.activity import ActivityLogger
from finance_dashboard.config import AppSettings, GeminiSettings, get_settings
from finance_dashboard.formatting import format_number
from finance_dashboard.models.finance import Category, Transaction
from finance_dashboard.reports.aggregation import (
    expense_transactions,
    top_expense_categories,
)


UNAVAILABLE_MESSAGE = "Tính năng AI không khả dụng. Vui lòng định cấu hình khóa API của bạn."
INSUFFICIENT_DATA_MESSAGE = (
    "Chưa đủ dữ liệu chi tiêu để tạo thông tin chi tiết. Hãy thêm một vài giao dịch nữa."
)
FAILURE_MESSAGE = "Rất tiếc, đã xảy ra lỗi khi tạo thông tin chi tiết về tài chính."
TIMEOUT_MESSAGE = "Yêu cầu tạo thông tin chi tiết đã quá thời gian chờ. Vui lòng thử lại."

PROMPT_TEMPLATE = """Dựa trên bản tóm tắt chi tiêu sau đây bằng tiếng Việt, hãy đưa ra ba mẹo hữu ích, ngắn gọn để tiết kiệm tiền.
Hãy trả lời bằng tiếng Việt.
- Tổng chi tiêu gần đây: {total_expense} {currency}
- Các hạng mục chi tiêu hàng đầu: {top_categories}

Ví dụ về định dạng phản hồi mong muốn:
1. Mẹo một ở đây.
2. Mẹo hai ở đây.
3. Mẹo ba ở đây."""


class InsightsStatus(str, Enum):
    """How an insights request ended."""
    GENERATED = "generated"
    UNAVAILABLE = "unavailable"
    INSUFFICIENT_DATA = "insufficient_data"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class InsightsResult(BaseModel):
    """What the insights panel displays."""

    status: InsightsStatus
    text: str

    @property
    def generated(self) -> bool:
        return self.status == InsightsStatus.GENERATED


class InsightsAgent:
    """
    Requests money-saving tips from Gemini.

    RESPONSIBILITIES:
    - Decide whether there is enough data to ask
    - Build the prompt from aggregated spending
    - Bound the call with a timeout and convert failures to fallbacks

    BOUNDARIES:
    - NEVER mutates state
    - NEVER retries
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        app_settings: Optional[AppSettings] = None,
        model: Optional[Any] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        """
        Initialize the agent.

        Args:
            settings: Gemini settings (defaults to environment)
            app_settings: thresholds and currency (defaults to environment)
            model: Anything with an async generate_content_async(prompt).
                   If None, a Gemini model is created when an API key is set.
            activity_logger: Where to log requests and failures
        """
        self._settings = settings or get_settings().gemini
        self._app_settings = app_settings or get_settings().app
        self._activity = activity_logger or ActivityLogger()
        self._model = model
        if self._model is None and self._settings.is_configured:
            self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            }
        )

    @property
    def is_available(self) -> bool:
        """True when a model is configured and requests can be made."""
        return self._model is not None

    def build_prompt(
        self,
        transactions: Sequence[Transaction],
        categories: Sequence[Category],
    ) -> str:
        """
        Compose the prompt from aggregated spending.

        Deterministic: the same transactions always produce the same prompt.
        """
        expenses = expense_transactions(transactions)
        total = sum((t.amount for t in expenses), Decimal("0"))
        currency = self._app_settings.currency_code

        top = top_expense_categories(
            expenses,
            categories,
            limit=self._app_settings.top_categories_limit,
        )
        top_categories = ", ".join(
            f"{c.name}: {format_number(c.value)} {currency}" for c in top
        )

        return PROMPT_TEMPLATE.format(
            total_expense=format_number(total),
            currency=currency,
            top_categories=top_categories,
        )

    async def get_financial_insights(
        self,
        transactions: Sequence[Transaction],
        categories: Sequence[Category],
    ) -> InsightsResult:
        """
        Ask Gemini for saving tips based on all recorded expenses.

        Never raises: every failure is converted to a fallback message.
        """
        if not self.is_available:
            self._activity.log_insights_skipped("no_api_key")
            return InsightsResult(
                status=InsightsStatus.UNAVAILABLE,
                text=UNAVAILABLE_MESSAGE,
            )

        expense_count = len(expense_transactions(transactions))
        if expense_count < self._app_settings.min_expense_transactions_for_insights:
            self._activity.log_insights_skipped("insufficient_data")
            return InsightsResult(
                status=InsightsStatus.INSUFFICIENT_DATA,
                text=INSUFFICIENT_DATA_MESSAGE,
            )

        prompt = self.build_prompt(transactions, categories)
        self._activity.log_insights_requested(expense_count)

        try:
            response = await asyncio.wait_for(
                self._model.generate_content_async(prompt),
                timeout=self._settings.request_timeout_seconds,
            )
            text = response.text
        except asyncio.TimeoutError:
            self._activity.log_external_service_error(
                service="gemini",
                error_message=(
                    f"No response within {self._settings.request_timeout_seconds}s"
                ),
            )
            return InsightsResult(status=InsightsStatus.TIMED_OUT, text=TIMEOUT_MESSAGE)
        except Exception as e:
            self._activity.log_external_service_error(
                service="gemini",
                error_message=f"{type(e).__name__}: {e}",
            )
            return InsightsResult(status=InsightsStatus.FAILED, text=FAILURE_MESSAGE)

        self._activity.log_insights_generated(self._settings.model_name, len(text))
        return InsightsResult(status=InsightsStatus.GENERATED, text=text)
