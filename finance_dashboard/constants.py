"""
Built-in catalogs.

Accounts seed the store on first run only; categories are rebuilt from
this list on every startup and never persisted.
"""

from decimal import Decimal

from finance_dashboard.models.finance import Account, Category, TransactionType


INITIAL_ACCOUNTS: tuple[Account, ...] = (
    Account(id="cash", name="Tiền mặt", balance=Decimal("5000000")),
    Account(id="bank", name="Tài khoản ngân hàng", balance=Decimal("20000000")),
    Account(id="credit", name="Thẻ tín dụng", balance=Decimal("0")),
)

INITIAL_CATEGORIES: tuple[Category, ...] = (
    # Expenses
    Category(id="food", name="Thực phẩm", type=TransactionType.EXPENSE),
    Category(id="transport", name="Di chuyển", type=TransactionType.EXPENSE),
    Category(id="housing", name="Nhà ở", type=TransactionType.EXPENSE),
    Category(id="utilities", name="Tiện ích", type=TransactionType.EXPENSE),
    Category(id="entertainment", name="Giải trí", type=TransactionType.EXPENSE),
    Category(id="health", name="Sức khỏe", type=TransactionType.EXPENSE),
    Category(id="shopping", name="Mua sắm", type=TransactionType.EXPENSE),
    Category(id="other_expense", name="Khác", type=TransactionType.EXPENSE),
    # Incomes
    Category(id="salary", name="Lương", type=TransactionType.INCOME),
    Category(id="bonus", name="Thưởng", type=TransactionType.INCOME),
    Category(id="investment", name="Đầu tư", type=TransactionType.INCOME),
    Category(id="other_income", name="Khác", type=TransactionType.INCOME),
)

CHART_COLORS = [
    "#3b82f6", "#10b981", "#ef4444", "#f97316",
    "#8b5cf6", "#ec4899", "#f59e0b", "#6b7280",
]
