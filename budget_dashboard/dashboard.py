"""Budget Dashboard - Streamlit entry point.

Run with ``streamlit run budget_dashboard/dashboard.py`` or through
``run_dashboard.py`` at the repository root.  The page renders the
overview, budget, goal and insight panels for the current session.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, List

import streamlit as st

try:
    from . import config, session
    from .budgets import BudgetLedger, validate_budget_amount, validate_new_category, validate_spent_amount
    from .errors import ValidationError
    from .formatting import escape_dollar_for_markdown, escape_markdown, format_currency, format_date, format_percent
    from .goals import GoalCategory, GoalLedger, validate_contribution, validate_new_goal
    from .health import FinancialSnapshot, summarize_overview
    from .insights import generate_recommendations
    from .providers import InsightRequest
except ImportError:
    # Fallback for ``streamlit run`` which executes this file as a script
    from budget_dashboard import config, session
    from budget_dashboard.budgets import BudgetLedger, validate_budget_amount, validate_new_category, validate_spent_amount
    from budget_dashboard.errors import ValidationError
    from budget_dashboard.formatting import escape_dollar_for_markdown, escape_markdown, format_currency, format_date, format_percent
    from budget_dashboard.goals import GoalCategory, GoalLedger, validate_contribution, validate_new_goal
    from budget_dashboard.health import FinancialSnapshot, summarize_overview
    from budget_dashboard.insights import generate_recommendations
    from budget_dashboard.providers import InsightRequest

logger = logging.getLogger(__name__)


def main():
    """Render the dashboard page."""
    st.set_page_config(
        page_title="Budget Dashboard",
        page_icon="💰",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    snapshot = _render_snapshot_sidebar()

    st.header("💰 Budget Dashboard")
    _render_overview(snapshot)
    st.divider()
    _render_budgets()
    st.divider()
    _render_goals()
    st.divider()
    _render_insights(snapshot)


def _render_snapshot_sidebar() -> FinancialSnapshot:
    st.sidebar.header("📥 Monthly Snapshot")
    values: Dict[str, float] = {}
    for key, label in (
        ('total_income', "Total Income"),
        ('total_expenses', "Total Expenses"),
        ('total_savings', "Total Savings"),
        ('total_debt', "Total Debt"),
    ):
        values[key] = st.sidebar.number_input(label, min_value=0.0, step=100.0, key=f"snapshot_{key}")

    if st.sidebar.button("🔄 Reset session"):
        session.reset_session()
        st.rerun()
    return FinancialSnapshot.from_dict(values)


def _render_overview(snapshot: FinancialSnapshot) -> None:
    overview = summarize_overview(snapshot)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Financial Health", f"{round(overview['health_score'])}/100")
        st.caption(overview['health_label'])
    with col2:
        st.metric("Net Worth", format_currency(overview['net_worth']))
    with col3:
        st.metric("Monthly Leftover", format_currency(overview['monthly_leftover']))
    with col4:
        st.metric("Savings Rate", format_percent(overview['savings_rate']))


def _render_budgets() -> None:
    ledger = session.get_budget_ledger()
    st.subheader("📋 Monthly Budget")

    if len(ledger):
        st.markdown(
            f"Spent {escape_dollar_for_markdown(ledger.total_spent)} of "
            f"{escape_dollar_for_markdown(ledger.total_budgeted)} "
            f"({format_percent(ledger.overall_progress)})"
        )
        st.progress(min(ledger.overall_progress / 100, 1.0))
        if ledger.is_over_budget:
            st.warning(
                f"⚠️ Over budget by {escape_dollar_for_markdown(ledger.total_spent - ledger.total_budgeted)}"
            )
        st.dataframe(ledger.to_frame(), use_container_width=True)
    else:
        st.info("No budget categories yet. Add one below to get started.")

    add_col, edit_col = st.columns(2)
    with add_col, st.form("add_category_form", clear_on_submit=True):
        name = st.text_input("Category name")
        budgeted = st.number_input("Budget", min_value=0.0, step=50.0)
        if st.form_submit_button("Add Category") and _submit_new_category(ledger, name, budgeted):
            st.rerun()

    with edit_col:
        if len(ledger):
            names = {c.id: c.name for c in ledger}
            with st.form("edit_budget_form"):
                category_id = st.selectbox("Category", options=list(names), format_func=names.get)
                new_budgeted = st.number_input("New budget", min_value=0.0, step=50.0)
                if st.form_submit_button("Update Budget") and _submit_budget_edit(ledger, category_id, new_budgeted):
                    st.rerun()
            with st.form("record_spending_form"):
                category_id = st.selectbox("Category", options=list(names), format_func=names.get,
                                           key="spending_category")
                spent = st.number_input("Spent so far", min_value=0.0, step=50.0)
                if st.form_submit_button("Update Spent") and _submit_spending(ledger, category_id, spent):
                    st.rerun()


def _submit_new_category(ledger: BudgetLedger, name: str, budgeted: float) -> bool:
    """Validate the add-category form and apply it; True when the ledger changed."""
    try:
        validate_new_category(name, budgeted)
    except ValidationError as exc:
        st.error(str(exc))
        return False
    return ledger.add_category(name, budgeted) is not None


def _submit_budget_edit(ledger: BudgetLedger, category_id: str, new_budgeted: float) -> bool:
    try:
        validate_budget_amount(new_budgeted)
    except ValidationError as exc:
        st.error(str(exc))
        return False
    return ledger.edit_budget(category_id, new_budgeted) is not None


def _submit_spending(ledger: BudgetLedger, category_id: str, spent: float) -> bool:
    try:
        validate_spent_amount(spent)
    except ValidationError as exc:
        st.error(str(exc))
        return False
    return ledger.record_spending(category_id, spent) is not None


def _render_goals() -> None:
    ledger = session.get_goal_ledger()
    st.subheader("🎯 Savings Goals")

    if len(ledger):
        st.markdown(
            f"Saved {escape_dollar_for_markdown(ledger.total_saved)} of "
            f"{escape_dollar_for_markdown(ledger.total_target)} across {len(ledger)} goals"
        )
        st.progress(min(ledger.overall_progress / 100, 1.0))
        st.dataframe(ledger.to_frame(), use_container_width=True)
        for goal in ledger.completed_goals:
            st.success(f"🏆 {goal.title} completed ({format_currency(goal.current_amount)})")
    else:
        st.info("No goals set. Use the form below to create your first financial goal.")

    add_col, contribute_col = st.columns(2)
    with add_col, st.form("add_goal_form", clear_on_submit=True):
        title = st.text_input("Goal title")
        target_amount = st.number_input("Target amount", min_value=0.0, step=100.0)
        deadline = st.date_input("Deadline", value=date.today() + timedelta(days=365))
        category = st.selectbox("Category", options=[c.value for c in GoalCategory], index=len(GoalCategory) - 1)
        monthly = st.number_input("Monthly contribution", min_value=0.0, step=50.0)
        if st.form_submit_button("Add Goal") and _submit_new_goal(
            ledger, title, target_amount, deadline, category, monthly
        ):
            st.rerun()

    with contribute_col:
        active = ledger.active_goals or list(ledger)
        if active:
            with st.form("contribute_form", clear_on_submit=True):
                titles = {g.id: f"{g.title} (due {format_date(g.deadline)})" for g in active}
                goal_id = st.selectbox("Goal", options=list(titles), format_func=titles.get)
                amount = st.number_input("Add amount", min_value=0.0, step=50.0)
                if st.form_submit_button("Add") and _submit_contribution(ledger, goal_id, amount):
                    st.rerun()


def _submit_new_goal(ledger: GoalLedger, title, target_amount, deadline, category, monthly) -> bool:
    try:
        validate_new_goal(title, target_amount, deadline, category)
    except ValidationError as exc:
        st.error(str(exc))
        return False
    return ledger.add_goal(title, target_amount, deadline, category, monthly) is not None


def _submit_contribution(ledger: GoalLedger, goal_id: str, amount: float) -> bool:
    try:
        validate_contribution(amount)
    except ValidationError as exc:
        st.error(str(exc))
        return False
    return ledger.contribute_to_goal(goal_id, amount) is not None


def _current_insights(request: InsightRequest, analyze: bool = False) -> List[str]:
    """Insights for ``request``: a fresh or still-valid analysis, else the rules."""
    if analyze:
        logger.info("AI analysis requested for %d categories", len(request.spending))
        insights = session.get_ai_provider().produce_insights(request)
        session.store_ai_insights(request, insights)
        return insights

    cached = session.get_cached_ai_insights(request)
    if cached is not None:
        return cached
    return session.get_insight_provider().produce_insights(request)


def _render_insights(snapshot: FinancialSnapshot) -> None:
    budgets = session.get_budget_ledger()
    request = InsightRequest(
        spending=budgets.spending_entries(),
        budget=budgets.budget_limits(),
        total_income=snapshot.total_income,
    )

    st.subheader("💡 Insights")
    if st.button("🧠 AI Analysis"):
        with st.spinner("Analyzing your finances..."):
            insights = _current_insights(request, analyze=True)
    else:
        insights = _current_insights(request)

    if insights:
        for insight in insights:
            st.markdown(f"- {escape_markdown(insight)}")
    else:
        st.caption("No insights yet. Add budgets and income to see observations.")

    st.subheader("✅ Recommendations")
    savings_rate = summarize_overview(snapshot)['savings_rate'] / 100
    for rec in generate_recommendations(request.spending, snapshot.total_income, savings_rate):
        with st.expander(rec.title):
            st.write(escape_markdown(rec.description))
            st.caption(escape_markdown(rec.impact))


if __name__ == "__main__":
    config.configure_logging()
    main()
