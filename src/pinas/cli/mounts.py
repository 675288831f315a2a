import click

@click.group()
def mounts():
    """Inspect mount configuration."""
    pass

@mounts.command(name="list")
@click.option("--fstab", "fstab_path", default=None, help="Mount table to read.")
def list_mounts(fstab_path):
    """List UUID-based fstab entries and whether they are mounted."""
    from pinas.config.settings import config
    from pinas.storage.fstab import MountTable, is_mounted
    from pinas.system.mutator import DryRunMutator

    table = MountTable(DryRunMutator(), fstab_path or config.fstab_path)
    entries = table.entries()
    if not entries:
        click.echo("No UUID entries found.")
        return

    for entry in entries:
        state = "mounted" if is_mounted(entry.mount_point) else "not mounted"
        click.echo(f"{entry.spec} -> {entry.mount_point} ({entry.fstype}, {entry.options}) [{state}]")
