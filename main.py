#!/usr/bin/env python3
"""
Sheet Flattener - Main Entry Point

Upload Excel workbooks, pick sheets, and flatten their repeating
sub-item / data column pairs into one table for download.

Commands:
  app  - Launch the browser UI

Usage:
  python main.py app
  python main.py app --port 8600 --headless
"""

import click

from sheet_flattener import __version__
from sheet_flattener.cli.app_command import app_command


@click.group()
@click.version_option(version=__version__, prog_name='Sheet Flattener')
def cli():
    """
    Sheet Flattener - Flatten sub-item / data pairs from Excel sheets

    \b
    Quick Start:
      1. Run: python main.py app
      2. Upload one or more .xlsx files in the browser
      3. Tick the sheets to include and press "Process Selected Sheets"
      4. Download the result as XLSX or CSV
    """
    pass


cli.add_command(app_command)


if __name__ == '__main__':
    cli()
