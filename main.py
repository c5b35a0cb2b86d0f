#!/usr/bin/env python3
"""
Main CLI for the Text Field Layout Engine
=========================================

Equivalent to the installed ``textfit`` command.
"""

from textfit.cli import cli

if __name__ == "__main__":
    cli()
