import click

from pinas.cli.utils import load_config_or_exit

@click.group()
def client():
    """Windows client drive mapping."""
    pass

def _mappings(nas_config):
    from pinas.client.windows import default_mappings
    return default_mappings(nas_config.client.letters, [d.share_name for d in nas_config.devices])

def _host(nas_config, host):
    from pinas.hwosinfo.hw import get_hostname
    return host or nas_config.hostname or get_hostname()

@client.command(name="script")
@click.option("--config", "config_path", help="Path to a YAML configuration file.")
@click.option("--host", default=None, help="NAS host name or IP as seen from the client.")
@click.option("--output", type=click.Path(dir_okay=False, writable=True), help="Write the batch file here.")
def client_script(config_path, host, output):
    """Print (or write) a .bat file that maps the shares to drive letters."""
    from pinas.client.windows import render_batch
    nas_config = load_config_or_exit(config_path)
    script = render_batch(_host(nas_config, host), nas_config.client.account, _mappings(nas_config))
    if output:
        with open(output, "w", newline="") as f:
            f.write(script)
        click.echo(f"Wrote {output}")
    else:
        click.echo(script, nl=False)

@client.command(name="map")
@click.option("--config", "config_path", help="Path to a YAML configuration file.")
@click.option("--host", default=None, help="NAS host name or IP.")
def client_map(config_path, host):
    """Map the shares on this (Windows) machine."""
    from pinas.client.windows import map_drives
    nas_config = load_config_or_exit(config_path)
    map_drives(_host(nas_config, host), nas_config.client.account, _mappings(nas_config))
