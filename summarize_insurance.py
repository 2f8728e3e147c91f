#!/usr/bin/env python3
"""Payroll Insurance Summary Generator.

This is the main entry point script for the insurance summary generator.
It wraps the package CLI for convenient execution.

Usage:
    python summarize_insurance.py
    python summarize_insurance.py --input transactions.xlsx --output Insurance_Summary.xlsx

For full documentation and options:
    python summarize_insurance.py --help
"""

import sys
from pathlib import Path

# Add src to path for development installs
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from insurance_summary.cli import main

if __name__ == "__main__":
    sys.exit(main())
