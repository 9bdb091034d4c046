import types

import pytest

from budget_dashboard import dashboard, session
from budget_dashboard.budgets import BudgetCategory, BudgetLedger, BudgetStatus
from budget_dashboard.goals import GoalLedger
from budget_dashboard.insights import SpendingEntry
from budget_dashboard.providers import CANNED_ANALYSIS, InsightRequest, SimulatedAIInsightProvider


@pytest.fixture
def page(monkeypatch):
    """Stand-in for ``streamlit`` shared by the page and session modules."""
    errors = []
    dummy_state = {
        session.AI_PROVIDER_KEY: SimulatedAIInsightProvider(delay=0),
    }
    st_mock = types.SimpleNamespace(session_state=dummy_state, error=errors.append)
    monkeypatch.setattr(dashboard, 'st', st_mock)
    monkeypatch.setattr(session, 'st', st_mock)
    return types.SimpleNamespace(state=dummy_state, errors=errors)


def _request(income, spending=(('Food', 800.0),)):
    return InsightRequest(
        spending=[SpendingEntry(name, amount) for name, amount in spending],
        budget=[],
        total_income=income,
    )


def test_add_category_form_rejects_blank_name(page):
    ledger = BudgetLedger()
    assert dashboard._submit_new_category(ledger, '   ', 500) is False
    assert page.errors == ["Category name is required"]
    assert len(ledger) == 0


def test_add_category_form_rejects_non_positive_budget(page):
    ledger = BudgetLedger()
    assert dashboard._submit_new_category(ledger, 'Rent', 0) is False
    assert page.errors == ["Budget must be a positive amount"]
    assert len(ledger) == 0


def test_add_category_form_applies_valid_input(page):
    ledger = BudgetLedger()
    assert dashboard._submit_new_category(ledger, 'Rent', 1200) is True
    assert page.errors == []
    assert ledger.categories[0].name == 'Rent'


def test_budget_edit_and_spending_forms(page):
    ledger = BudgetLedger([BudgetCategory.create('Food', 1000, id='food')])
    assert dashboard._submit_budget_edit(ledger, 'food', 0) is False
    assert dashboard._submit_spending(ledger, 'food', -5) is False
    assert len(page.errors) == 2

    assert dashboard._submit_spending(ledger, 'food', 800) is True
    assert dashboard._submit_budget_edit(ledger, 'food', 700) is True
    assert ledger.get('food').status is BudgetStatus.DANGER


def test_goal_forms(page):
    ledger = GoalLedger()
    assert dashboard._submit_new_goal(ledger, 'Car', 1000, 'someday', 'other', 0) is False
    assert dashboard._submit_new_goal(ledger, 'Car', 1000, '2027-01-01', 'other', 100) is True
    goal_id = ledger.goals[0].id
    assert dashboard._submit_contribution(ledger, goal_id, 0) is False
    assert dashboard._submit_contribution(ledger, goal_id, 250) is True
    assert ledger.get(goal_id).current_amount == 250
    assert len(page.errors) == 2


def test_rule_based_insights_without_analysis(page):
    insights = dashboard._current_insights(_request(5000))
    assert insights == ["Great job! You're saving over 20% of your income."]


def test_analysis_is_shown_while_data_is_unchanged(page):
    assert dashboard._current_insights(_request(5000), analyze=True) == list(CANNED_ANALYSIS)
    assert dashboard._current_insights(_request(5000)) == list(CANNED_ANALYSIS)


def test_analysis_is_dropped_when_income_changes(page):
    dashboard._current_insights(_request(5000), analyze=True)

    after = dashboard._current_insights(_request(100, spending=(('Food', 50.0),)))

    assert not any('high-yield' in insight for insight in after)
    assert after == [
        "Food accounts for a large portion of your spending. Consider reviewing these expenses.",
        "Great job! You're saving over 20% of your income.",
    ]
    assert session.AI_INSIGHTS_KEY not in page.state


def test_analysis_is_dropped_when_budgets_change(page):
    dashboard._current_insights(_request(5000), analyze=True)
    changed = _request(5000, spending=(('Food', 800.0), ('Travel', 0.0)))
    assert dashboard._current_insights(changed) == ["Great job! You're saving over 20% of your income."]
