#!/usr/bin/env python3
"""
Test runner for cc-history.
Run all tests or a single module's tests, optionally with linting and a JUnit report.
"""

import argparse
import subprocess
import sys
import time
from datetime import datetime

TEST_MODULES = {
    "record_store": "tests/cc_history/core/test_record_store.py",
    "threads": "tests/cc_history/core/test_threads.py",
    "aggregator": "tests/cc_history/core/test_aggregator.py",
    "models": "tests/cc_history/core/test_log_record.py",
    "pricing": "tests/cc_history/utils/test_pricing.py",
    "log_finder": "tests/cc_history/utils/test_log_finder.py",
    "browser": "tests/cc_history/ui/test_browser.py",
    "config": "tests/cc_history/test_config.py",
    "cli": "tests/cc_history/test_cli.py",
}


class Colors:
    """ANSI color codes for terminal output"""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def print_header(text):
    """Print a formatted header"""
    print(f"\n{Colors.HEADER}{Colors.BOLD}{'=' * 60}{Colors.ENDC}")
    print(f"{Colors.HEADER}{Colors.BOLD}{text.center(60)}{Colors.ENDC}")
    print(f"{Colors.HEADER}{Colors.BOLD}{'=' * 60}{Colors.ENDC}\n")


def print_section(text):
    """Print a section header"""
    print(f"\n{Colors.CYAN}{Colors.BOLD}→ {text}{Colors.ENDC}")


def run_command(cmd, description=None):
    """Run a command and capture output"""
    if description:
        print_section(description)

    print(f"{Colors.BLUE}$ {' '.join(cmd)}{Colors.ENDC}")

    start_time = time.time()
    result = subprocess.run(cmd, capture_output=True, text=True)
    duration = time.time() - start_time

    if result.returncode == 0:
        print(f"{Colors.GREEN}✓ Success ({duration:.2f}s){Colors.ENDC}")
    else:
        print(f"{Colors.RED}✗ Failed ({duration:.2f}s){Colors.ENDC}")
        if result.stderr:
            print(f"{Colors.RED}Error: {result.stderr}{Colors.ENDC}")

    return result


def run_tests(args):
    """Run tests based on arguments"""
    cmd = [sys.executable, "-m", "pytest"]

    if args.file:
        cmd.append(args.file)
    elif args.module:
        cmd.append(TEST_MODULES[args.module])
    else:
        cmd.append("tests/")

    cmd.extend(["-v", "-s"] if args.verbose else ["-v"])

    if args.stop_on_failure:
        cmd.append("-x")

    if args.failed_first:
        cmd.append("--ff")

    if args.keyword:
        cmd.extend(["-k", args.keyword])

    if args.report:
        cmd.extend(["--tb=short", "--junit-xml=test_report.xml"])

    result = run_command(cmd, "Running tests")

    if result.stdout:
        print(result.stdout)

    if args.report and result.returncode == 0:
        print(f"\n{Colors.GREEN}Report generated:{Colors.ENDC} test_report.xml (JUnit format)")

    return result.returncode == 0


def run_linting(args):
    """Run linting checks"""
    print_header("Running Linting Checks")

    ruff_check = subprocess.run(["which", "ruff"], capture_output=True)
    if ruff_check.returncode != 0:
        print(f"{Colors.YELLOW}⚠ Ruff not installed. Skipping linting.{Colors.ENDC}")
        print("  Install with: pip install ruff")
        return True

    result = run_command(["ruff", "check", "cc_history/", "tests/"], "Running ruff linter")
    if result.returncode != 0:
        print(result.stdout)
        return False
    return True


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Run tests for cc-history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_tests.py                    # Run all tests
  python run_tests.py -v                 # Run with verbose output
  python run_tests.py -m threads         # Run only thread builder tests
  python run_tests.py -k "cycle"         # Run tests matching keyword
  python run_tests.py -l                 # Also run ruff
  python run_tests.py --report           # Write a JUnit report
        """
    )

    parser.add_argument("-m", "--module", choices=sorted(TEST_MODULES),
                        help="Run tests for specific module")
    parser.add_argument("-f", "--file",
                        help="Run specific test file")
    parser.add_argument("-k", "--keyword",
                        help="Run tests matching keyword expression")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Verbose output")
    parser.add_argument("-x", "--stop-on-failure", action="store_true",
                        help="Stop on first failure")
    parser.add_argument("--ff", "--failed-first", action="store_true",
                        dest="failed_first",
                        help="Run failed tests first")
    parser.add_argument("-l", "--lint", action="store_true",
                        help="Run linting checks")
    parser.add_argument("-r", "--report", action="store_true",
                        help="Generate JUnit test report")

    args = parser.parse_args()

    print_header("cc-history Test Runner")
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    success = True

    if args.lint and not run_linting(args):
        success = False

    print_header("Running Tests")
    if not run_tests(args):
        success = False

    print_header("Summary")
    if success:
        print(f"{Colors.GREEN}{Colors.BOLD}✓ All checks passed!{Colors.ENDC}")
    else:
        print(f"{Colors.RED}{Colors.BOLD}✗ Some checks failed!{Colors.ENDC}")

    print(f"\nCompleted at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
