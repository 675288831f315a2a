import sys

import click

from pinas.cli.client import client
from pinas.cli.mounts import mounts
from pinas.cli.shares import shares
from pinas.cli.system import system
from pinas.cli.utils import load_config_or_exit, setup_logging

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Show debug output.")
@click.pass_context
def main(ctx, verbose):
    """pinas: turn a Raspberry Pi and two USB drives into a NAS"""
    ctx.ensure_object(dict)
    setup_logging(verbose)

main.add_command(client)
main.add_command(mounts)
main.add_command(shares)
main.add_command(system)

@main.command()
@click.option("--config", "config_path", help="Path to a YAML configuration file.")
@click.option("--dry-run", is_flag=True, help="Log every change instead of making it.")
def setup(config_path, dry_run):
    """Mount the USB drives, share them over SMB and enable mDNS."""
    from pinas.setup.orchestrator import Orchestrator
    from pinas.system.mutator import DryRunMutator, HostMutator

    nas_config = load_config_or_exit(config_path)

    mutator = DryRunMutator() if dry_run else HostMutator()
    report = Orchestrator(nas_config, mutator=mutator, check_privileges=not dry_run).run()

    for line in report.summary_lines():
        click.echo(line)
    if not report.succeeded:
        sys.exit(1)
    click.echo("Done.")

@main.command()
def version():
    """Show the pinas version."""
    from pinas.version import get_version
    click.echo(get_version())
