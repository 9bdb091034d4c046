from datetime import date

from budget_dashboard.insights import (
    BudgetLimit,
    SpendingEntry,
    generate_financial_insights,
    generate_recommendations,
    get_spending_trend,
)


def _sample_spending():
    return [
        {'category': 'Housing', 'amount': 2200},
        {'category': 'Food', 'amount': 800},
        {'category': 'Transportation', 'amount': 650},
        {'category': 'Entertainment', 'amount': 400},
        {'category': 'Shopping', 'amount': 750},
    ]


def _sample_budget():
    return [
        {'category': 'Housing', 'limit': 2500},
        {'category': 'Food', 'limit': 700},
        {'category': 'Transportation', 'limit': 600},
        {'category': 'Entertainment', 'limit': 300},
        {'category': 'Shopping', 'limit': 500},
    ]


def test_over_budget_messages_take_priority_and_truncate_to_three():
    insights = generate_financial_insights(_sample_spending(), _sample_budget(), 8500)
    assert insights == [
        "You've exceeded your Food budget by $100.00",
        "You've exceeded your Transportation budget by $50.00",
        "You've exceeded your Entertainment budget by $100.00",
    ]


def test_never_more_than_three_insights():
    spending = [SpendingEntry(f"Cat {i}", 100 + i) for i in range(20)]
    budget = [BudgetLimit(f"Cat {i}", 10) for i in range(20)]
    assert len(generate_financial_insights(spending, budget, 100)) == 3


def test_large_category_and_low_savings():
    spending = [SpendingEntry('Rent', 1500), SpendingEntry('Food', 400)]
    insights = generate_financial_insights(spending, [], 2000)
    assert insights == [
        "Rent accounts for a large portion of your spending. Consider reviewing these expenses.",
        "Your savings rate is below 10%. Try to reduce expenses or increase income.",
    ]


def test_high_savings_rate_praised():
    insights = generate_financial_insights([SpendingEntry('Food', 500)], [], 5000)
    assert insights == ["Great job! You're saving over 20% of your income."]


def test_middle_savings_rate_has_no_message():
    # 15% savings rate sits between the two savings messages
    insights = generate_financial_insights([SpendingEntry('Food', 850)], [], 1000)
    assert insights == [
        "Food accounts for a large portion of your spending. Consider reviewing these expenses."
    ]


def test_tie_for_highest_category_picks_first():
    spending = [SpendingEntry('Travel', 900), SpendingEntry('Rent', 900), SpendingEntry('Food', 100)]
    insights = generate_financial_insights(spending, [], 2000)
    assert insights[0].startswith("Travel accounts for a large portion")


def test_zero_income_skips_savings_rule():
    insights = generate_financial_insights([SpendingEntry('Food', 50)], [], 0)
    assert insights == [
        "Food accounts for a large portion of your spending. Consider reviewing these expenses."
    ]


def test_empty_spending_only_reports_savings():
    assert generate_financial_insights([], [], 3000) == ["Great job! You're saving over 20% of your income."]
    assert generate_financial_insights([], [], 0) == []


def test_budget_match_uses_first_entry():
    budget = [BudgetLimit('Food', 1000), BudgetLimit('Food', 10)]
    insights = generate_financial_insights([SpendingEntry('Food', 100)], budget, 10000)
    assert not any('exceeded' in insight for insight in insights)


def test_spending_trend_increasing_and_decreasing():
    rising = [('2024-03-01', 300), ('2024-01-01', 100), ('2024-02-01', 110), ('2024-04-01', 320)]
    assert get_spending_trend(rising) == 'increasing'
    falling = [{'date': date(2024, m, 1), 'amount': a} for m, a in ((1, 500), (2, 480), (3, 200), (4, 210))]
    assert get_spending_trend(falling) == 'decreasing'


def test_spending_trend_stable_cases():
    assert get_spending_trend([]) == 'stable'
    assert get_spending_trend([('2024-01-01', 100)]) == 'stable'
    assert get_spending_trend([('2024-01-01', 100), ('2024-02-01', 105)]) == 'stable'
    assert get_spending_trend([('2024-01-01', 0), ('2024-02-01', 0)]) == 'stable'


def test_spending_trend_from_zero_baseline_is_increasing():
    assert get_spending_trend([('2024-01-01', 0), ('2024-02-01', 500)]) == 'increasing'


def test_spending_trend_does_not_reorder_input():
    points = [('2024-02-01', 200), ('2024-01-01', 100)]
    get_spending_trend(points)
    assert points == [('2024-02-01', 200), ('2024-01-01', 100)]


def test_recommendations_for_struggling_budget():
    spending = [SpendingEntry('Housing', 2200), SpendingEntry('Credit Card', 400)]
    recs = generate_recommendations(spending, 4000, 0.05)
    assert [rec.kind for rec in recs] == ['save', 'budget', 'debt', 'general']
    assert recs[1].title == "Optimize Housing Spending"
    assert recs[1].impact == "Potential savings: $220.00/month"
    assert recs[2].impact == "Potential savings: $20.00/month"


def test_recommendations_end_with_general_review():
    spending = [SpendingEntry('Student Loan', 30000)]
    recs = generate_recommendations(spending, 60000, 0.05)
    assert len(recs) == 4
    assert recs[-1].kind == 'general'


def test_recommendations_suggest_investing_for_healthy_savers():
    recs = generate_recommendations([SpendingEntry('Food', 1000)], 90000, 0.3)
    assert [rec.kind for rec in recs] == ['invest', 'general']
