import json
import socket
import subprocess


def get_disks():
    """Return a list of block devices and their partitions from lsblk."""
    # -J: JSON output
    # -b: Bytes
    # -o: Specific columns
    cmd = ["lsblk", "-J", "-b", "-o", "NAME,PATH,SIZE,MODEL,SERIAL,ROTA,RM,TYPE,FSTYPE,UUID,MOUNTPOINT"]
    output = subprocess.check_output(cmd).decode()
    data = json.loads(output)
    return data["blockdevices"]


def get_hostname() -> str:
    """Short host name, the one avahi advertises as <name>.local."""
    return socket.gethostname().split(".")[0]
