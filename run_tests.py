#!/usr/bin/env python3
"""
Test runner for the link shortener.

Usage:
    ./run_tests.py                      # whole suite
    ./run_tests.py --fast               # skip the threaded concurrency tests
    ./run_tests.py -k redirect -x       # anything else goes straight to pytest
"""

import argparse
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
CONCURRENCY_TESTS = "not concurrent"


def build_command(fast: bool, pytest_args: list) -> list:
    command = [sys.executable, "-m", "pytest", "tests/", "--tb=short"]
    if fast:
        command += ["-k", CONCURRENCY_TESTS]
    return command + pytest_args


def run_tests(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run the link shortener test suite")
    parser.add_argument("--fast", action="store_true", help="skip concurrency tests")
    args, pytest_args = parser.parse_known_args(argv)

    command = build_command(args.fast, pytest_args)
    print(f"🧪 {' '.join(command[2:])}")

    result = subprocess.run(command, cwd=PROJECT_ROOT)

    if result.returncode == 0:
        print("\n✅ All tests passed!")
    else:
        print(f"\n❌ Tests failed with exit code {result.returncode}")
    return result.returncode


if __name__ == "__main__":
    sys.exit(run_tests())
