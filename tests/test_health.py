import pytest

from budget_dashboard.health import (
    FinancialSnapshot,
    calculate_financial_health,
    health_label,
    summarize_overview,
)


def _snapshot(income=8500.0, expenses=6200.0, savings=15000.0, debt=3500.0):
    return FinancialSnapshot(
        total_income=income,
        total_expenses=expenses,
        total_savings=savings,
        total_debt=debt,
    )


def test_zero_income_scores_zero():
    assert calculate_financial_health(_snapshot(income=0)) == 0
    assert calculate_financial_health(_snapshot(income=0, expenses=0, savings=0, debt=0)) == 0


def test_reference_household_scores_seventy():
    # expense ratio 0.73 (-15), savings ratio 1.76 (+10), debt ratio 0.41 (-25)
    assert calculate_financial_health(_snapshot()) == pytest.approx(70.0)


def test_score_is_clamped_after_all_deltas():
    worst = _snapshot(income=1000, expenses=900, savings=0, debt=1000)
    best = _snapshot(income=1000, expenses=100, savings=500, debt=0)
    assert calculate_financial_health(worst) == pytest.approx(25.0)
    assert calculate_financial_health(best) == 100.0


@pytest.mark.parametrize('expenses,savings,debt,expected', [
    (800, 150, 0, 85.0),     # expense ratio exactly 0.8 only triggers the 0.6 tier
    (600, 150, 0, 100.0),    # 0.6 itself is not penalised
    (500, 200, 0, 100.0),    # savings ratio exactly 0.2 gets no bonus
    (500, 99, 0, 80.0),
    (500, 150, 400, 90.0),   # debt ratio 0.4 falls in the 0.2 tier
    (500, 150, 401, 75.0),
])
def test_threshold_edges(expenses, savings, debt, expected):
    snapshot = _snapshot(income=1000, expenses=expenses, savings=savings, debt=debt)
    assert calculate_financial_health(snapshot) == pytest.approx(expected)


def test_score_always_within_bounds():
    for income in (1, 100, 5000):
        for expenses in (0, 50, 5000, 100000):
            for savings in (0, 10, 50000):
                for debt in (0, 300, 90000):
                    score = calculate_financial_health(_snapshot(income, expenses, savings, debt))
                    assert 0 <= score <= 100


def test_from_dict_accepts_camel_case():
    snapshot = FinancialSnapshot.from_dict({'totalIncome': 8500, 'totalExpenses': 6200, 'total_debt': 3500})
    assert snapshot.total_income == 8500.0
    assert snapshot.total_expenses == 6200.0
    assert snapshot.total_savings == 0.0
    assert snapshot.total_debt == 3500.0


def test_health_label_tiers():
    assert health_label(95) == "Excellent financial health!"
    assert health_label(60) == "Good financial health with room for improvement"
    assert health_label(40).startswith("Fair")
    assert health_label(39.9).startswith("Poor")


def test_summarize_overview():
    overview = summarize_overview(_snapshot())
    assert overview['health_score'] == pytest.approx(70.0)
    assert overview['health_label'].startswith("Good")
    assert overview['net_worth'] == 11500.0
    assert overview['monthly_leftover'] == 2300.0
    assert overview['savings_rate'] == pytest.approx(2300 / 8500 * 100)


def test_summarize_overview_without_income():
    overview = summarize_overview(_snapshot(income=0))
    assert overview['health_score'] == 0
    assert overview['savings_rate'] == 0.0
