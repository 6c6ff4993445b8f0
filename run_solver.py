#!/usr/bin/env python
"""
Traced Linear Solver Entry Point.

Usage:
    python run_solver.py                              # Gauss elimination on the default system
    python run_solver.py --method seidel --verbose    # Full Gauss-Seidel trace
    python run_solver.py --compare --markdown         # Compare all methods
    python run_solver.py --list-examples              # List built-in systems

For more options:
    python run_solver.py --help
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from stepsolve.cli import main

if __name__ == "__main__":
    sys.exit(main())
