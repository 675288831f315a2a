import logging
import subprocess
from typing import List, Optional
from pinas.errors import PackageError
from pinas.hwosinfo.os import get_os_info
from pinas.pkgs.base import PackageManager
from pinas.pkgs.debian import DebianPackageManager
from pinas.system.mutator import SystemMutator

logger = logging.getLogger(__name__)

DEBIAN_FAMILY = ["debian", "ubuntu", "raspbian"]

# usbutils for lsusb, exfat/ntfs drivers for typical USB sticks, samba + avahi for the shares
NAS_PACKAGES = ["usbutils", "exfat-fuse", "exfatprogs", "ntfs-3g", "samba", "avahi-daemon"]


def get_package_manager(mutator: Optional[SystemMutator] = None) -> PackageManager:
    os_info = get_os_info()
    distro = os_info.get('id')
    family = os_info.get('id_like', '').split()
    if distro in DEBIAN_FAMILY or any(d in DEBIAN_FAMILY for d in family):
        return DebianPackageManager(mutator)
    raise PackageError(f"Unsupported distribution: {distro}")


def install_packages(pm: PackageManager, packages: List[str]):
    """Refresh the package index and install everything in one transaction."""
    logger.info("Updating package index and installing required packages...")
    try:
        pm.update()
        pm.install(*packages)
    except subprocess.CalledProcessError as e:
        raise PackageError(f"Package installation failed: {(e.stderr or '').strip() or e}") from e
    except FileNotFoundError as e:
        raise PackageError(f"Package manager not available: {e}") from e
    logger.info("Packages installed.")
