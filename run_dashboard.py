#!/usr/bin/env python3
"""Direct launcher for the Budget Dashboard.

This script configures logging and launches Streamlit on the dashboard
page with the project root on the import path.
"""

import os
import subprocess
import sys
from pathlib import Path

from budget_dashboard import config

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "budget_dashboard" / "dashboard.py"

if __name__ == "__main__":
    config.configure_logging()
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(project_root), env.get("PYTHONPATH")]))
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        str(dashboard_path)
    ], env=env)
