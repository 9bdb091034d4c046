"""Top-level package for the Budget Dashboard.

The primary modules are:

* ``formatting`` – currency, percent and date display helpers
* ``health`` – the financial health score and overview numbers
* ``insights`` – rule-based spending insights and recommendations
* ``providers`` – pluggable insight providers, including the simulated AI analysis
* ``budgets`` / ``goals`` – the in-memory budget and savings-goal ledgers
* ``dashboard`` – a Streamlit page that ties everything together

To run the dashboard from the command line you can execute:

```bash
python run_dashboard.py
```
"""

from .budgets import BudgetCategory, BudgetLedger, BudgetStatus
from .errors import BudgetDashboardError, RecordNotFoundError, ValidationError
from .formatting import format_currency, format_date, format_percent, parse_currency
from .goals import GoalCategory, GoalLedger, GoalPriority, GoalStatus, SavingsGoal
from .health import FinancialSnapshot, calculate_financial_health
from .insights import generate_financial_insights

__all__ = [
    'BudgetCategory',
    'BudgetLedger',
    'BudgetStatus',
    'BudgetDashboardError',
    'RecordNotFoundError',
    'ValidationError',
    'format_currency',
    'format_date',
    'format_percent',
    'parse_currency',
    'GoalCategory',
    'GoalLedger',
    'GoalPriority',
    'GoalStatus',
    'SavingsGoal',
    'FinancialSnapshot',
    'calculate_financial_health',
    'generate_financial_insights',
]
