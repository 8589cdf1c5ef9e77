#!/usr/bin/env python3
"""Direct launcher for the Budget Dashboard.

This script launches Streamlit on ``budget_dashboard/dashboard.py`` from the
project root so that the package imports resolve.
"""

import sys
import subprocess
from pathlib import Path

project_root = Path(__file__).parent.resolve()
dashboard_path = project_root / "budget_dashboard" / "dashboard.py"

if __name__ == "__main__":
    subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(dashboard_path)],
        cwd=project_root,
    )
