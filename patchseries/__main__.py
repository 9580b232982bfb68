"""Entry point for running patchseries as a module.

This module allows patchseries to be run as a Python module using the -m flag:
    python -m patchseries

It serves as the main entry point for the patchseries command-line interface.
"""

from . import cli

if __name__ == "__main__":
    cli._main()
