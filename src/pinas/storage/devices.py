import logging
import os
import stat
import subprocess
from typing import List, Optional
from pinas.errors import DeviceNotFound, DeviceNotIdentifiable
from pinas.hwosinfo.hw import get_disks as get_raw_disks
from pinas.storage.models import Disk, Partition, ResolvedDevice

logger = logging.getLogger(__name__)

SYSTEM_MOUNTPOINTS = ["/", "/boot", "/boot/efi", "/boot/firmware", "/etc", "/var", "/usr"]


class DeviceResolver:
    """Maps a block device path to its filesystem UUID and type via blkid."""

    def resolve(self, path: str) -> ResolvedDevice:
        if not self._is_block_device(path):
            raise DeviceNotFound(path)

        logger.info(f"Detecting filesystem type and UUID for {path}...")
        uuid = self._blkid_tag(path, "UUID")
        fstype = self._blkid_tag(path, "TYPE")
        if not uuid or not fstype:
            raise DeviceNotIdentifiable(path)

        logger.info(f"  UUID  : {uuid}")
        logger.info(f"  TYPE  : {fstype}")
        return ResolvedDevice(path=path, uuid=uuid, fstype=fstype)

    def _is_block_device(self, path: str) -> bool:
        try:
            return stat.S_ISBLK(os.stat(path).st_mode)
        except OSError:
            return False

    def _blkid_tag(self, path: str, tag: str) -> Optional[str]:
        # blkid -s UUID -o value <device>
        try:
            result = subprocess.run(
                ["blkid", "-s", tag, "-o", "value", path],
                capture_output=True, text=True
            )
        except FileNotFoundError:
            logger.error("blkid not found, is util-linux installed?")
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None


def get_system_disks() -> List[Disk]:
    """
    Retrieves block devices and parses them into Disk models, flagging the
    ones that carry the running system.
    """
    raw_data = get_raw_disks()
    disks = []

    for device in raw_data:
        # Skip loop devices and ram disks
        if device.get("name", "").startswith("loop") or device.get("name", "").startswith("ram"):
            continue

        partitions = []
        is_system = False

        # lsblk nests partitions under 'children'
        for p in device.get("children", []):
            mountpoint = p.get("mountpoint")
            if mountpoint in SYSTEM_MOUNTPOINTS or p.get("fstype") == "swap":
                is_system = True

            partitions.append(Partition(
                name=p.get("name"),
                path=p.get("path"),
                size=int(p.get("size") or 0),
                fstype=p.get("fstype"),
                uuid=p.get("uuid"),
                mountpoint=mountpoint
            ))

        # Filesystem directly on the disk (common for USB sticks)
        if device.get("mountpoint") in SYSTEM_MOUNTPOINTS:
            is_system = True

        disks.append(Disk(
            name=device.get("name"),
            path=device.get("path"),
            size=int(device.get("size") or 0),
            model=device.get("model"),
            serial=device.get("serial"),
            rotational=bool(device.get("rota")),
            removable=bool(device.get("rm")),
            fstype=device.get("fstype"),
            uuid=device.get("uuid"),
            mountpoint=device.get("mountpoint"),
            partitions=partitions,
            is_system=is_system
        ))

    return disks
