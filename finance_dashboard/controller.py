"""
Dashboard Controller

This module ties together all the components and defines the
end-to-end flows for:
1. Add transaction (form -> validate -> ledger -> save)
2. Add savings goal (form -> validate -> ledger -> save)
3. Contribute to goal (form -> validate -> ledger -> save)
4. Report (state + period -> dashboard figures)
5. Insights (transactions -> Gemini -> text)

DESIGN DECISION: The controller is the ONLY owner of the current AppState.
- Ledger operations are pure; the controller commits their result
- State is committed first, then persisted; a failed save never
  rolls back the in-memory change
- Every mutation and rejection is logged
"""

from datetime import date
from typing import Optional

from finance_dashboard.activity import ActivityLogger, configure_logging
from finance_dashboard.agents import InsightsAgent, InsightsResult
from finance_dashboard.config import Settings, get_settings
from finance_dashboard.constants import INITIAL_ACCOUNTS, INITIAL_CATEGORIES
from finance_dashboard.formatting import format_currency
from finance_dashboard.ledger import (
    GoalTargetExceededError,
    LedgerError,
    add_savings_goal,
    add_transaction,
    contribute_to_goal,
)
from finance_dashboard.models.finance import (
    Account,
    AppState,
    Category,
    ContributionDraft,
    ReportPeriod,
    SavingsGoal,
    SavingsGoalDraft,
    Transaction,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
)
from finance_dashboard.models.reports import DashboardReport
from finance_dashboard.reports import build_dashboard_report
from finance_dashboard.services.storage import (
    JsonFileStorage,
    KeyValueStorageInterface,
    PersistentCollection,
)
from finance_dashboard.validation import FormValidator, GOAL_EXCEEDED_MESSAGE


class DashboardController:
    """
    Owns the dashboard state and runs every user action against it.

    Flow for each form:
    1. Validate -> blocking message on failure, state untouched
    2. Apply the pure ledger operation
    3. Commit the new state
    4. Save the affected collections
    """

    def __init__(
        self,
        transactions: PersistentCollection[Transaction],
        accounts: PersistentCollection[Account],
        savings_goals: PersistentCollection[SavingsGoal],
        categories: tuple[Category, ...] = INITIAL_CATEGORIES,
        validator: Optional[FormValidator] = None,
        insights_agent: Optional[InsightsAgent] = None,
        activity_logger: Optional[ActivityLogger] = None,
        recent_limit: int = 5,
    ):
        self._transactions = transactions
        self._accounts = accounts
        self._savings_goals = savings_goals
        self._categories = tuple(categories)
        self._validator = validator or FormValidator(self._categories)
        self._insights_agent = insights_agent or InsightsAgent()
        self._activity = activity_logger or ActivityLogger()
        self._recent_limit = recent_limit

        self._state = AppState(
            transactions=tuple(self._transactions.load()),
            accounts=tuple(self._accounts.load()),
            savings_goals=tuple(self._savings_goals.load()),
        )
        self.insights_loading = False
        self.insights: Optional[InsightsResult] = None

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def insights_available(self) -> bool:
        return self._insights_agent.is_available

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_transaction(
        self,
        draft: TransactionDraft,
        today: Optional[date] = None,
    ) -> tuple[Optional[Transaction], ValidationResult]:
        """
        Record a transaction from the add-transaction form.

        Returns:
            (transaction, validation) - transaction is None when rejected
        """
        validation = self._validator.validate_transaction(draft, self._state, today)
        if not validation.is_valid:
            self._log_validation_failed("transaction", validation)
            return None, validation

        try:
            new_state, transaction = add_transaction(self._state, draft.to_new_transaction())
        except LedgerError as e:
            return None, self._rejected("add_transaction", e)

        self._state = new_state
        self._transactions.save(self._state.transactions)
        self._accounts.save(self._state.accounts)

        account = self._state.find_account(transaction.account_id)
        self._activity.log_transaction_added(
            transaction_id=transaction.id,
            transaction_type=transaction.type.value,
            amount=str(transaction.amount),
            account_id=transaction.account_id,
            new_balance=str(account.balance),
        )
        return transaction, validation

    def add_savings_goal(
        self,
        draft: SavingsGoalDraft,
        today: Optional[date] = None,
    ) -> tuple[Optional[SavingsGoal], ValidationResult]:
        """Create a savings goal from the add-goal form."""
        validation = self._validator.validate_savings_goal(draft, today)
        if not validation.is_valid:
            self._log_validation_failed("savings_goal", validation)
            return None, validation

        new_state, goal = add_savings_goal(self._state, draft.to_new_savings_goal())

        self._state = new_state
        self._savings_goals.save(self._state.savings_goals)

        self._activity.log_savings_goal_created(
            goal_id=goal.id,
            name=goal.name,
            target_amount=str(goal.target_amount),
        )
        return goal, validation

    def contribute_to_goal(self, draft: ContributionDraft) -> ValidationResult:
        """Move money from an account into a savings goal."""
        validation = self._validator.validate_contribution(draft, self._state)
        if not validation.is_valid:
            self._log_validation_failed("contribution", validation)
            return validation

        try:
            new_state = contribute_to_goal(
                self._state,
                draft.goal_id,
                draft.amount,
                draft.account_id,
            )
        except LedgerError as e:
            return self._rejected("contribute_to_goal", e)

        self._state = new_state
        self._savings_goals.save(self._state.savings_goals)
        self._accounts.save(self._state.accounts)

        goal = self._state.find_goal(draft.goal_id)
        account = self._state.find_account(draft.account_id)
        self._activity.log_goal_contribution(
            goal_id=goal.id,
            account_id=account.id,
            amount=str(draft.amount),
            goal_amount=str(goal.current_amount),
            account_balance=str(account.balance),
        )
        return validation

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def report(
        self,
        period: ReportPeriod,
        today: Optional[date] = None,
    ) -> DashboardReport:
        """Compute all dashboard figures for the selected period."""
        return build_dashboard_report(
            self._state,
            self._categories,
            period,
            today=today,
            recent_limit=self._recent_limit,
        )

    def describe_validation(self, validation: ValidationResult) -> str:
        """Message for the blocking notice, one line per distinct issue."""
        return self._validator.get_user_friendly_summary(validation)

    async def request_insights(self) -> InsightsResult:
        """
        Ask for AI saving tips over every recorded transaction.

        insights_loading is True only while the request is in flight.
        """
        self.insights_loading = True
        try:
            self.insights = await self._insights_agent.get_financial_insights(
                self._state.transactions,
                self._categories,
            )
        finally:
            self.insights_loading = False
        return self.insights

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _log_validation_failed(self, form: str, validation: ValidationResult) -> None:
        self._activity.log_validation_failed(
            form=form,
            issues=[i.model_dump(mode="json") for i in validation.issues],
        )

    def _rejected(self, operation: str, error: LedgerError) -> ValidationResult:
        """Turn a ledger refusal into the same shape as a failed validation."""
        self._activity.log_mutation_rejected(operation, error)

        if isinstance(error, GoalTargetExceededError):
            issue = ValidationIssue(
                field="amount",
                issue_type="exceeds_target",
                message=GOAL_EXCEEDED_MESSAGE.format(
                    remaining=format_currency(error.remaining_amount)
                ),
                remaining_amount=error.remaining_amount,
            )
        else:
            issue = ValidationIssue(
                field=operation,
                issue_type="rejected",
                message=str(error),
            )
        return ValidationResult.from_issues([issue])


def create_app_components(
    storage: Optional[KeyValueStorageInterface] = None,
    settings: Optional[Settings] = None,
) -> DashboardController:
    """
    Factory function to create all application components.

    Args:
        storage: Key-value backend. Defaults to JSON files under
                 STORAGE_DATA_DIR. Pass InMemoryStorage for testing.
        settings: Defaults to the cached environment settings.

    Returns:
        A DashboardController with state loaded from storage
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)

    activity_logger = ActivityLogger()
    storage = storage or JsonFileStorage(settings.storage.data_dir)

    transactions = PersistentCollection(
        storage,
        settings.storage.transactions_key,
        Transaction,
        activity_logger=activity_logger,
    )
    accounts = PersistentCollection(
        storage,
        settings.storage.accounts_key,
        Account,
        default=INITIAL_ACCOUNTS,
        activity_logger=activity_logger,
    )
    savings_goals = PersistentCollection(
        storage,
        settings.storage.savings_goals_key,
        SavingsGoal,
        activity_logger=activity_logger,
    )

    insights_agent = InsightsAgent(
        settings=settings.gemini,
        app_settings=settings.app,
        activity_logger=activity_logger,
    )

    return DashboardController(
        transactions=transactions,
        accounts=accounts,
        savings_goals=savings_goals,
        categories=INITIAL_CATEGORIES,
        validator=FormValidator(INITIAL_CATEGORIES),
        insights_agent=insights_agent,
        activity_logger=activity_logger,
        recent_limit=settings.app.recent_transactions_limit,
    )
