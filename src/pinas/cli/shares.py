import click

@click.group()
def shares():
    """Manage Samba shares."""
    pass

@shares.command(name="list")
def list_samba_shares():
    """List Samba shares."""
    from pinas.config.settings import config
    from pinas.shares.smb import SMBManager
    manager = SMBManager(conf_path=config.smb_conf_path)
    found = manager.list_shares()
    if not found:
        click.echo("No shares found.")
        return

    for share in found:
        click.echo(f"Name: {share.name}")
        click.echo(f"  Path: {share.path}")
        click.echo(f"  Read Only: {share.read_only}")
        click.echo(f"  Guest OK: {share.guest_ok}")
        click.echo("-" * 20)

@shares.command(name="status")
def status_samba():
    """Get the status of the Samba service."""
    from pinas.shares.smb import SMBManager
    manager = SMBManager()
    if not manager.check_installed():
        click.echo("Samba is NOT installed.")
        return
    click.echo(f"Samba service status: {manager.get_status()}")
