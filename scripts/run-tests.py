#!/usr/bin/env python3
"""
Test runner for the uncommitted changes scanner.

Wraps pytest with the marker selections used by the suite: unit tests,
integration tests that need a git executable, and coverage runs.
"""

import argparse
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List

MARKER_SELECTIONS = {
    "unit": ("unit", "Unit tests"),
    "integration": ("integration", "Integration tests"),
    "fast": ("not slow", "Fast tests"),
}

ARTIFACTS = [".pytest_cache", ".coverage", "htmlcov", "coverage.xml"]


class TestRunner:
    """Runs pytest with a chosen selection from the project root."""

    def __init__(self, project_root: Path):
        self.project_root = project_root

    def run_command(self, command: List[str], description: str) -> bool:
        """Run a command and return success status."""
        print(f"\n🧪 {description}...")
        print(f"Running: {' '.join(command)}")

        try:
            result = subprocess.run(command, cwd=self.project_root, check=False)
        except FileNotFoundError:
            print(f"❌ {description} failed - {command[0]} not found")
            return False

        if result.returncode == 0:
            print(f"✅ {description} completed successfully")
            return True

        print(f"❌ {description} failed with exit code {result.returncode}")
        return False

    def run_marked_tests(self, selection: str, verbose: bool = False) -> bool:
        marker, description = MARKER_SELECTIONS[selection]
        if selection == "integration" and shutil.which("git") is None:
            print("⚠️  git not found on PATH; integration tests will be skipped")

        cmd = ["pytest", "-m", marker]
        if verbose:
            cmd.append("-v")
        return self.run_command(cmd, description)

    def run_coverage_tests(self, min_coverage: int = 85) -> bool:
        """Run tests with coverage reporting."""
        cmd = [
            "pytest",
            "--cov=uncommitted_scanner",
            f"--cov-fail-under={min_coverage}",
            "--cov-report=term-missing",
            "--cov-report=html:htmlcov",
        ]
        return self.run_command(cmd, f"Coverage tests (min {min_coverage}%)")

    def run_specific_test(self, test_path: str, verbose: bool = False) -> bool:
        cmd = ["pytest", test_path]
        if verbose:
            cmd.append("-v")
        return self.run_command(cmd, f"Specific test: {test_path}")

    def run_all_tests(self, verbose: bool = False) -> bool:
        cmd = ["pytest"]
        if verbose:
            cmd.append("-v")
        return self.run_command(cmd, "All tests")

    def clean_test_artifacts(self) -> None:
        """Clean up test artifacts and cache files."""
        print("\n🧹 Cleaning test artifacts...")

        for artifact in ARTIFACTS:
            artifact_path = self.project_root / artifact
            if artifact_path.is_dir():
                shutil.rmtree(artifact_path)
                print(f"  Removed directory: {artifact}")
            elif artifact_path.exists():
                artifact_path.unlink()
                print(f"  Removed file: {artifact}")

        for pycache in self.project_root.rglob("__pycache__"):
            if pycache.is_dir():
                shutil.rmtree(pycache)

        print("✅ Test artifacts cleaned")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run the scanner test suite")

    selection = parser.add_mutually_exclusive_group()
    for name, (_, description) in MARKER_SELECTIONS.items():
        selection.add_argument(
            f"--{name}", dest="selection", action="store_const", const=name,
            help=f"Run {description.lower()} only",
        )
    selection.add_argument("--coverage", action="store_true", help="Run with coverage reporting")
    selection.add_argument("--test", type=str, help="Run specific test file or function")
    selection.add_argument("--clean", action="store_true", help="Clean test artifacts")

    parser.add_argument(
        "--min-coverage", type=int, default=85, help="Minimum coverage percentage"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path(__file__).resolve().parent.parent,
        help="Project root directory",
    )

    args = parser.parse_args()
    runner = TestRunner(args.project_root)

    if args.clean:
        runner.clean_test_artifacts()
        return

    if args.test:
        success = runner.run_specific_test(args.test, args.verbose)
    elif args.coverage:
        success = runner.run_coverage_tests(args.min_coverage)
    elif args.selection:
        success = runner.run_marked_tests(args.selection, args.verbose)
    else:
        success = runner.run_all_tests(args.verbose)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
