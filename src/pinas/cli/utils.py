import logging
import sys

import click


def setup_logging(verbose=False):
    """Send log records to stderr, INFO by default and DEBUG when verbose."""
    log_level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream=sys.stderr)
    console_handler.setLevel(log_level)
    if verbose:
        formatter = logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
    else:
        formatter = logging.Formatter('%(message)s')
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def echo_error(message):
    click.echo(f"Error: {message}", err=True)


def load_config_or_exit(config_path):
    from pinas.config.settings import load_config
    try:
        return load_config(config_path)
    except (OSError, ValueError) as e:
        echo_error(f"Could not load configuration: {e}")
        sys.exit(1)
