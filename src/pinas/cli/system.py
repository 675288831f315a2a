import click

@click.group()
def system():
    """System commands"""
    pass

@system.command(name='disks')
@click.option('--all', 'show_all', is_flag=True, help='Include disks that carry the running system.')
def get_system_disks(show_all):
    """Show block devices with filesystem type and UUID."""
    from pinas.storage.devices import get_system_disks
    disks = get_system_disks()
    if not show_all:
        disks = [d for d in disks if not d.is_system]

    if not disks:
        click.echo("No disks found.")
        return

    for disk in disks:
        click.echo(f"{disk.path} - {disk.model or 'unknown'} - {disk.size} bytes{' (removable)' if disk.removable else ''}")
        targets = disk.partitions or [disk]
        for p in targets:
            click.echo(f"  {p.path}  {p.fstype or '-'}  UUID={p.uuid or '-'}  {p.mountpoint or ''}".rstrip())

@system.command(name='services')
def list_services():
    """Show the state of the services pinas manages."""
    from pinas.systemd.manager import SystemdManager
    for status in SystemdManager().list_services():
        click.echo(f"{status.name}: {status.active_state} ({status.unit_file_state})")
