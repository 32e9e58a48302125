"""
Entry point for running gridreflow as a module.

Usage:
    python -m gridreflow resolve 800
"""

from gridreflow.cli import app

if __name__ == "__main__":
    app()
