#!/usr/bin/env python3
"""
Development tasks for modelql.

    python dev_tasks.py <command>
"""

import os
import shutil
import subprocess
import sys

ARTIFACTS = ["build", "dist", ".pytest_cache"]


def run_command(command, check=True):
    print(f"Running: {command}")
    result = subprocess.run(command, shell=True, check=check)
    return result.returncode == 0


def clean():
    print("Cleaning build artifacts...")
    for path in ARTIFACTS:
        shutil.rmtree(path, ignore_errors=True)
    for name in os.listdir("."):
        if name.endswith(".egg-info"):
            shutil.rmtree(name, ignore_errors=True)
    for root, dirs, _files in os.walk("."):
        if "__pycache__" in dirs:
            shutil.rmtree(os.path.join(root, "__pycache__"), ignore_errors=True)
    print("Clean completed.")


def test():
    print("Running tests...")
    if not run_command("pytest tests/ -v", check=False):
        sys.exit(1)


def sdl():
    """Print the SDL compiled from the test fixtures' models."""
    from modelql import SchemaBuilder
    from tests.schema import build_registry

    print(SchemaBuilder(build_registry()).build().sdl)


def build():
    clean()
    run_command("python -m build")


def install_dev():
    run_command("pip install -e .[test]")


COMMANDS = {
    "clean": clean,
    "test": test,
    "sdl": sdl,
    "build": build,
    "install-dev": install_dev,
}


def main():
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print("Usage: python dev_tasks.py <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)
    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
