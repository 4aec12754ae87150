"""
App Command - Launch the Sheet Flattener UI

Starts the Streamlit page in a child process and waits for it to exit.
"""

import importlib.util
import logging
import subprocess
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from sheet_flattener.core.config import get_settings
from sheet_flattener.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

APP_PAGE = Path(__file__).resolve().parent.parent / 'ui' / 'app.py'


def build_streamlit_command(port: int, headless: bool) -> list:
    """Command line that runs the UI page with the current interpreter."""
    return [
        sys.executable, '-m', 'streamlit', 'run', str(APP_PAGE),
        '--server.port', str(port),
        '--server.headless', 'true' if headless else 'false',
    ]


@click.command('app')
@click.option(
    '--port', '-p',
    type=int,
    default=None,
    help='Port for the UI (default: SHEET_FLATTENER_SERVER_PORT or 8501)'
)
@click.option(
    '--headless/--no-headless',
    default=False,
    help='Do not open a browser window (default: False)'
)
def app_command(port, headless):
    """
    Launch the Sheet Flattener UI in the browser.

    \b
    Examples:
      # Start on the default port
      python main.py app

      # Start on another port without opening a browser
      python main.py app --port 8600 --headless
    """
    # .env values must reach the Streamlit child process too
    load_dotenv()
    get_settings.cache_clear()
    settings = get_settings()

    setup_logging(log_level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, component='sheet-flattener-app-command')

    if importlib.util.find_spec('streamlit') is None:
        click.echo("\n✗ Error: streamlit is not installed.", err=True)
        click.echo("  Install it with: pip install streamlit", err=True)
        sys.exit(1)

    command = build_streamlit_command(port or settings.SERVER_PORT, headless)
    logger.info(f"Starting UI: {' '.join(command)}")

    try:
        return_code = subprocess.call(command)
    except KeyboardInterrupt:
        return_code = 0

    if return_code != 0:
        click.echo(f"\n✗ UI exited with code {return_code}", err=True)
    sys.exit(return_code)
