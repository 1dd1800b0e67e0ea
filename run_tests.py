#!/usr/bin/env python3
"""
Test Runner for the Recency Cache
Copyright 2025 Jurden Bruce

Quick test runner script for the root directory.
Runs every suite under tests/ and fails if any of them fail.

Usage:
    python run_tests.py
    python run_tests.py --verbose
"""

import sys
import subprocess
from pathlib import Path

TEST_FILES = ["test_cache_engine.py", "test_factorise_tools.py"]


def main():
    """Run the test suites"""
    tests_dir = Path(__file__).parent / "tests"
    exit_code = 0

    for name in TEST_FILES:
        test_file = tests_dir / name

        if not test_file.exists():
            print(f"Error: Test file not found: {test_file}")
            sys.exit(1)

        # Pass through any arguments (like --verbose)
        cmd = [sys.executable, str(test_file)] + sys.argv[1:]

        print(f"Running: {' '.join(cmd)}\n")
        result = subprocess.run(cmd)
        exit_code = exit_code or result.returncode

    sys.exit(exit_code)

if __name__ == "__main__":
    main()
