"""
Streamlit Frontend for Personal Finance Dashboard

A single-page dashboard for tracking income, expenses, accounts and
savings goals, in Vietnamese.

DESIGN PRINCIPLES:
1. Every figure is recomputed from the current state on each rerun
2. Forms block with a clear message and change nothing on bad input
3. AI insights are on demand only; the dashboard never waits for them
"""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from finance_dashboard.config import get_settings, validate_all_settings
from finance_dashboard.constants import CHART_COLORS
from finance_dashboard.controller import DashboardController, create_app_components
from finance_dashboard.formatting import format_currency, format_date
from finance_dashboard.models.finance import (
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    ContributionDraft,
    ReportPeriod,
    SavingsGoalDraft,
    TransactionDraft,
    TransactionType,
)
from finance_dashboard.models.reports import DashboardReport, GoalProgress


# Page configuration
st.set_page_config(
    page_title="Bảng điều khiển Tài chính",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for the stat cards
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .stat-card {
        padding: 20px;
        border-radius: 10px;
        margin: 10px 0;
    }
    .income-card {
        background-color: #d1fae5;
        border-left: 5px solid #10b981;
    }
    .expense-card {
        background-color: #fee2e2;
        border-left: 5px solid #ef4444;
    }
    .balance-card {
        background-color: #dbeafe;
        border-left: 5px solid #3b82f6;
    }
    .big-number {
        font-size: 1.8em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_controller() -> DashboardController:
    """Get or create the dashboard controller (cached)."""
    return create_app_components()


def to_decimal(value: Optional[float]) -> Optional[Decimal]:
    """Number inputs return floats; amounts are kept as Decimal."""
    if value is None:
        return None
    return Decimal(str(value))


def main():
    """Main application entry point."""
    controller = get_controller()
    settings = get_settings()

    if "period" not in st.session_state:
        st.session_state.period = ReportPeriod(settings.app.default_period)

    # Sidebar: forms
    st.sidebar.title("💰 Tài chính")
    st.sidebar.markdown("---")
    render_add_transaction_form(controller)
    st.sidebar.markdown("---")
    render_add_goal_form(controller)
    st.sidebar.markdown("---")
    with st.sidebar.expander("⚙️ Cài đặt"):
        render_settings_status()

    # Main area
    st.title("Bảng điều khiển Tài chính")

    period = st.radio(
        "Báo cáo tổng hợp",
        options=list(ReportPeriod),
        format_func=lambda p: p.label,
        horizontal=True,
        key="period",
    )
    report = controller.report(period)

    render_summary_cards(report)

    col1, col2 = st.columns(2)
    with col1:
        render_income_expense_chart(report)
    with col2:
        render_category_chart(report)

    col1, col2 = st.columns([3, 2])
    with col1:
        render_goals(controller, report)
        render_recent_transactions(controller, report)
    with col2:
        render_accounts(report)
        render_insights(controller)


# =============================================================================
# DASHBOARD SECTIONS
# =============================================================================

def render_summary_cards(report: DashboardReport):
    """Render the income, expense and balance cards."""
    cards = [
        ("Tổng Thu Nhập", report.summary.total_income, "income-card"),
        ("Tổng Chi Tiêu", report.summary.total_expense, "expense-card"),
        ("Số Dư Hiện Tại", report.summary.total_balance, "balance-card"),
    ]
    for col, (title, amount, css_class) in zip(st.columns(3), cards):
        with col:
            st.markdown(f"""
            <div class="stat-card {css_class}">
                <div>{title}</div>
                <div class="big-number">{format_currency(amount)}</div>
            </div>
            """, unsafe_allow_html=True)


def render_income_expense_chart(report: DashboardReport):
    """Render the income-vs-expense bar chart for the period."""
    st.subheader("Thu nhập vs Chi tiêu")

    series = report.income_expense_series
    if not series:
        st.info("Không có giao dịch trong kỳ này.")
        return

    names = [b.name for b in series]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=names, y=[float(b.income) for b in series], name="Thu nhập", marker_color="#10b981",
    ))
    fig.add_trace(go.Bar(
        x=names, y=[float(b.expense) for b in series], name="Chi tiêu", marker_color="#ef4444",
    ))
    fig.update_layout(barmode="group", margin=dict(t=30, b=10, l=10, r=10))
    st.plotly_chart(fig, use_container_width=True)


def render_category_chart(report: DashboardReport):
    """Render the expense-by-category pie for the period."""
    st.subheader("Phân tích Chi tiêu")

    slices = report.expense_by_category
    if not slices:
        st.info("Không có khoản chi tiêu nào trong kỳ này.")
        return

    df = pd.DataFrame({
        "name": [s.name for s in slices],
        "value": [float(s.value) for s in slices],
    })
    fig = px.pie(
        df,
        values="value",
        names="name",
        color_discrete_sequence=CHART_COLORS,
    )
    fig.update_layout(height=350, margin=dict(t=30, b=10, l=10, r=10))
    st.plotly_chart(fig, use_container_width=True)


def render_goals(controller: DashboardController, report: DashboardReport):
    """Render savings goals with progress and a contribute form each."""
    st.subheader("Mục tiêu Tiết kiệm")

    if not report.goals:
        st.info("Bạn chưa đặt mục tiêu tiết kiệm nào. Hãy bắt đầu ngay!")
        return

    for progress in report.goals:
        render_goal(controller, progress)


def render_goal(controller: DashboardController, progress: GoalProgress):
    goal = progress.goal
    st.markdown(f"**{goal.name}**")
    st.progress(progress.percent / 100)

    col1, col2 = st.columns(2)
    with col1:
        st.caption(
            f"{format_currency(goal.current_amount)} / {format_currency(goal.target_amount)}"
        )
    with col2:
        if goal.is_complete:
            st.caption("🎉 Đã đạt được")
        else:
            st.caption(f"Còn lại {progress.days_remaining} ngày")

    if goal.is_complete:
        return

    with st.expander("Đóng góp"):
        with st.form(f"contribute_{goal.id}", clear_on_submit=True):
            amount = st.number_input(
                "Số tiền đóng góp",
                min_value=0.0,
                value=None,
                step=10000.0,
                format="%.0f",
            )
            account = st.selectbox(
                "Từ tài khoản",
                options=list(controller.state.accounts),
                format_func=lambda a: f"{a.name} ({format_currency(a.balance)})",
                index=None,
                placeholder="Chọn tài khoản",
            )
            submitted = st.form_submit_button("Xác nhận")

        if submitted:
            result = controller.contribute_to_goal(ContributionDraft(
                goal_id=goal.id,
                amount=to_decimal(amount),
                account_id=account.id if account else None,
            ))
            if result.is_valid:
                st.rerun()
            else:
                st.error(controller.describe_validation(result))


def render_recent_transactions(controller: DashboardController, report: DashboardReport):
    """Render the last few transactions, newest first."""
    st.subheader("Giao Dịch Gần Đây")

    if not report.recent_transactions:
        st.info("Chưa có giao dịch nào.")
        return

    category_names = {c.id: c.name for c in controller.categories}
    rows = []
    for t in report.recent_transactions:
        sign = "+" if t.type == TransactionType.INCOME else "-"
        rows.append({
            "Mô tả": t.description,
            "Hạng mục": category_names.get(t.category_id, t.category_id),
            "Ngày": format_date(t.date),
            "Số tiền": f"{sign}{format_currency(t.amount)}",
        })
    st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)


def render_accounts(report: DashboardReport):
    """Render account balances."""
    st.subheader("Tài khoản")
    for account in report.accounts:
        col1, col2 = st.columns([3, 2])
        with col1:
            st.markdown(account.name)
        with col2:
            st.markdown(f"**{format_currency(account.balance)}**")


def render_insights(controller: DashboardController):
    """Render the on-demand AI insights panel."""
    st.subheader("Thông tin chi tiết từ AI ✨")

    if st.button("Lấy thông tin", disabled=controller.insights_loading):
        with st.spinner("Đang phân tích..."):
            run_async(controller.request_insights())

    if controller.insights is None:
        st.caption(
            "Nhấp vào nút để nhận các mẹo tài chính được cá nhân hóa dựa trên chi tiêu của bạn."
        )
    elif controller.insights.generated:
        # Model output is shown as plain markdown, never as raw HTML
        st.info(controller.insights.text)
    else:
        st.warning(controller.insights.text)


# =============================================================================
# FORMS
# =============================================================================

def render_add_transaction_form(controller: DashboardController):
    """Render the add-transaction form."""
    st.sidebar.subheader("Thêm Giao Dịch Mới")

    # Outside the form so the category list follows the chosen type
    tx_type = st.sidebar.radio(
        "Loại",
        options=[TransactionType.EXPENSE, TransactionType.INCOME],
        format_func=lambda t: "Chi Tiêu" if t == TransactionType.EXPENSE else "Thu Nhập",
        horizontal=True,
    )
    categories = [c for c in controller.categories if c.type == tx_type]

    with st.sidebar.form("add_transaction", clear_on_submit=True):
        description = st.text_input("Mô tả", max_chars=MAX_DESCRIPTION_LENGTH)
        amount = st.number_input(
            "Số tiền",
            min_value=0.0,
            value=None,
            step=10000.0,
            format="%.0f",
        )
        tx_date = st.date_input("Ngày", value=date.today(), format="DD/MM/YYYY")
        category = st.selectbox(
            "Hạng mục",
            options=categories,
            format_func=lambda c: c.name,
            index=None,
            placeholder="Chọn hạng mục",
        )
        account = st.selectbox(
            "Tài khoản",
            options=list(controller.state.accounts),
            format_func=lambda a: a.name,
            index=None,
            placeholder="Chọn tài khoản",
        )
        submitted = st.form_submit_button("Thêm Giao Dịch")

    if submitted:
        _, result = controller.add_transaction(TransactionDraft(
            type=tx_type,
            description=description,
            amount=to_decimal(amount),
            date=tx_date,
            category_id=category.id if category else None,
            account_id=account.id if account else None,
        ))
        if result.is_valid:
            st.rerun()
        else:
            st.sidebar.error(controller.describe_validation(result))


def render_add_goal_form(controller: DashboardController):
    """Render the add-savings-goal form."""
    st.sidebar.subheader("Thêm Mục Tiêu Tiết Kiệm")

    with st.sidebar.form("add_goal", clear_on_submit=True):
        name = st.text_input(
            "Tên mục tiêu",
            placeholder="VD: Mua xe mới",
            max_chars=MAX_NAME_LENGTH,
        )
        target_amount = st.number_input(
            "Số tiền mục tiêu",
            min_value=0.0,
            value=None,
            step=100000.0,
            format="%.0f",
        )
        target_date = st.date_input("Ngày mục tiêu", value=None, format="DD/MM/YYYY")
        submitted = st.form_submit_button("Thêm Mục Tiêu")

    if submitted:
        _, result = controller.add_savings_goal(SavingsGoalDraft(
            name=name,
            target_amount=to_decimal(target_amount),
            target_date=target_date,
        ))
        if result.is_valid:
            st.rerun()
        else:
            st.sidebar.error(controller.describe_validation(result))


def render_settings_status():
    """Render configuration status."""
    status = validate_all_settings()

    sections = [
        ("Gemini (AI)", "gemini"),
        ("Lưu trữ", "storage"),
        ("Ứng dụng", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name}")
        else:
            error = status.get(f"{key}_error", "Chưa được cấu hình")
            st.error(f"❌ {name} - {error}")

    st.caption(
        "Tạo tệp `.env` với các biến cấu hình. "
        "Xem `.env.example` để biết các biến cần thiết."
    )


if __name__ == "__main__":
    main()
