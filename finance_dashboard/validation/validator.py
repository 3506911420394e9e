"""
Two-Stage Form Validation

DESIGN DECISION: Every form is validated in two distinct stages before
any ledger operation runs:

STAGE 1 - PRESENCE:
- Required field presence ("Vui lòng điền tất cả các trường")
- Positive amounts
- Text length limits

STAGE 2 - CONSISTENCY (needs the current state):
- Referenced category/account/goal exists
- Category type matches transaction type
- Account can cover a contribution
- Contribution does not overfund the goal

Stage 2 is skipped when stage 1 fails. Messages are the Vietnamese
texts shown in the blocking notice.

IMPORTANT: Validation NEVER fixes input. It only reports.
"""

from datetime import date
from typing import Iterable, Optional

from finance_dashboard.formatting import format_currency
from finance_dashboard.models.finance import (
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    AppState,
    Category,
    ContributionDraft,
    SavingsGoalDraft,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)


MISSING_FIELDS_MESSAGE = "Vui lòng điền tất cả các trường"
INVALID_AMOUNT_MESSAGE = "Số tiền phải lớn hơn 0."
INSUFFICIENT_FUNDS_MESSAGE = "Số dư tài khoản không đủ."
GOAL_EXCEEDED_MESSAGE = "Số tiền đóng góp vượt quá mục tiêu. Bạn chỉ cần thêm {remaining}."
DESCRIPTION_TOO_LONG_MESSAGE = f"Mô tả không được dài quá {MAX_DESCRIPTION_LENGTH} ký tự."
GOAL_NAME_TOO_LONG_MESSAGE = f"Tên mục tiêu không được dài quá {MAX_NAME_LENGTH} ký tự."


def _missing(field: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=MISSING_FIELDS_MESSAGE,
    )


def _non_positive(field: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="invalid_value",
        message=INVALID_AMOUNT_MESSAGE,
    )


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _too_long(field: str, message: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="invalid_value",
        message=message,
    )


class FormValidator:
    """
    Validates the add-transaction, add-goal and contribute forms.

    The category catalog is fixed at construction; accounts and goals
    are read from the AppState passed to each call.
    """

    def __init__(self, categories: Iterable[Category]):
        self._categories = {c.id: c for c in categories}

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def validate_transaction(
        self,
        draft: TransactionDraft,
        state: AppState,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """Validate the add-transaction form."""
        issues = []

        if _is_blank(draft.description):
            issues.append(_missing("description"))
        elif len(draft.description) > MAX_DESCRIPTION_LENGTH:
            issues.append(_too_long("description", DESCRIPTION_TOO_LONG_MESSAGE))
        if draft.amount is None:
            issues.append(_missing("amount"))
        elif draft.amount <= 0:
            issues.append(_non_positive("amount"))
        if draft.date is None:
            issues.append(_missing("date"))
        if _is_blank(draft.category_id):
            issues.append(_missing("category_id"))
        if _is_blank(draft.account_id):
            issues.append(_missing("account_id"))

        if issues:
            return ValidationResult.from_issues(issues)

        category = self._categories.get(draft.category_id)
        if category is None:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="unknown_reference",
                message="Hạng mục không hợp lệ.",
            ))
        elif category.type != draft.type:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="type_mismatch",
                message="Hạng mục không khớp với loại giao dịch.",
            ))

        if state.find_account(draft.account_id) is None:
            issues.append(ValidationIssue(
                field="account_id",
                issue_type="unknown_reference",
                message="Tài khoản không tồn tại.",
            ))

        today = today or date.today()
        if draft.date > today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message="Ngày giao dịch ở trong tương lai.",
                severity="warning",
            ))

        return ValidationResult.from_issues(issues)

    # -------------------------------------------------------------------------
    # Savings goals
    # -------------------------------------------------------------------------

    def validate_savings_goal(
        self,
        draft: SavingsGoalDraft,
        today: Optional[date] = None,
    ) -> ValidationResult:
        """Validate the add-goal form."""
        issues = []

        if _is_blank(draft.name):
            issues.append(_missing("name"))
        elif len(draft.name) > MAX_NAME_LENGTH:
            issues.append(_too_long("name", GOAL_NAME_TOO_LONG_MESSAGE))
        if draft.target_amount is None:
            issues.append(_missing("target_amount"))
        elif draft.target_amount <= 0:
            issues.append(_non_positive("target_amount"))
        if draft.target_date is None:
            issues.append(_missing("target_date"))

        if issues:
            return ValidationResult.from_issues(issues)

        today = today or date.today()
        if draft.target_date < today:
            issues.append(ValidationIssue(
                field="target_date",
                issue_type="past_date",
                message="Ngày mục tiêu không được ở trong quá khứ.",
            ))

        return ValidationResult.from_issues(issues)

    # -------------------------------------------------------------------------
    # Contributions
    # -------------------------------------------------------------------------

    def validate_contribution(
        self,
        draft: ContributionDraft,
        state: AppState,
    ) -> ValidationResult:
        """
        Validate the contribute-to-goal form.

        Checks run in the order the user sees them: missing fields,
        then account balance, then the goal's remaining amount.
        """
        issues = []

        if draft.amount is None:
            issues.append(_missing("amount"))
        elif draft.amount <= 0:
            issues.append(_non_positive("amount"))
        if _is_blank(draft.account_id):
            issues.append(_missing("account_id"))

        if issues:
            return ValidationResult.from_issues(issues)

        goal = state.find_goal(draft.goal_id)
        if goal is None:
            return ValidationResult.from_issues([ValidationIssue(
                field="goal_id",
                issue_type="unknown_reference",
                message="Mục tiêu tiết kiệm không tồn tại.",
            )])

        account = state.find_account(draft.account_id)
        if account is None:
            return ValidationResult.from_issues([ValidationIssue(
                field="account_id",
                issue_type="unknown_reference",
                message="Tài khoản không tồn tại.",
            )])

        if account.balance < draft.amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="insufficient_funds",
                message=INSUFFICIENT_FUNDS_MESSAGE,
            ))
        elif goal.current_amount + draft.amount > goal.target_amount:
            remaining = goal.remaining_amount
            issues.append(ValidationIssue(
                field="amount",
                issue_type="exceeds_target",
                message=GOAL_EXCEEDED_MESSAGE.format(remaining=format_currency(remaining)),
                remaining_amount=remaining,
            ))

        return ValidationResult.from_issues(issues)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Render all issues as a short bulleted message.

        Duplicate messages (several missing fields) collapse into one line.
        """
        if result.is_valid and not result.issues:
            return ""

        lines = []
        seen = set()
        for issue in result.issues:
            if issue.message in seen:
                continue
            seen.add(issue.message)
            prefix = "❌" if issue.severity == "error" else "⚠️"
            lines.append(f"{prefix} {issue.message}")

        return "\n\n".join(lines)
