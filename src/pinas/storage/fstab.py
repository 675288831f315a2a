import logging
import os
import subprocess
from typing import List, Optional
import psutil
from pinas.errors import MountError, MountVerificationFailed
from pinas.storage.models import MountEntry, ReconcileResult, ResolvedDevice
from pinas.system.mutator import SystemMutator

logger = logging.getLogger(__name__)

FSTAB_PATH = "/etc/fstab"

# Filesystems without POSIX ownership; owner and permissions come from mount options.
NON_POSIX_FILESYSTEMS = {"vfat", "msdos", "exfat", "ntfs", "ntfs3", "fuseblk"}


class MountTable:
    """Append-only view of an fstab-style file."""

    def __init__(self, mutator: SystemMutator, path: str = FSTAB_PATH):
        self.mutator = mutator
        self.path = path

    def entries(self) -> List[MountEntry]:
        """Parse every UUID-based entry. Other lines are kept untouched and ignored here."""
        entries = []
        try:
            with open(self.path, "r") as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith("#"): # Skip empty lines and comments
                        continue

                    parts = line.split()
                    # Expecting: device mount_path fstype options dump fsck
                    if len(parts) < 4:
                        continue

                    identifier = self._identifier_from_spec(parts[0])
                    if not identifier:
                        continue

                    entries.append(MountEntry(
                        identifier=identifier,
                        mount_point=parts[1],
                        fstype=parts[2],
                        options=parts[3],
                        dump=int(parts[4]) if len(parts) > 4 and parts[4].isdigit() else 0,
                        passno=int(parts[5]) if len(parts) > 5 and parts[5].isdigit() else 0,
                    ))
        except FileNotFoundError:
            pass # no table yet, nothing declared
        return entries

    def find(self, identifier: str) -> Optional[MountEntry]:
        for entry in self.entries():
            if entry.identifier == identifier:
                return entry
        return None

    def contains(self, identifier: str) -> bool:
        return self.find(identifier) is not None

    def append(self, entry: MountEntry):
        prefix = ""
        if os.path.exists(self.path) and os.path.getsize(self.path) > 0:
            with open(self.path, "rb") as f:
                f.seek(-1, os.SEEK_END)
                if f.read(1) != b"\n":
                    prefix = "\n"
        self.mutator.append_text(self.path, f"{prefix}{entry.to_line()}\n")

    @staticmethod
    def _identifier_from_spec(spec: str) -> Optional[str]:
        if spec.startswith("UUID="):
            return spec.split("=", 1)[1].strip('"')
        if spec.startswith("/dev/disk/by-uuid/"):
            return spec[len("/dev/disk/by-uuid/"):]
        return None


def build_mount_entry(device: ResolvedDevice, mount_point: str, uid: int, gid: int) -> MountEntry:
    """Mount entry for a resolved device, world-writable and owned by uid/gid where the fs allows it."""
    options = "defaults"
    if device.fstype in NON_POSIX_FILESYSTEMS:
        options = f"defaults,uid={uid},gid={gid},umask=000"
    return MountEntry(
        identifier=device.uuid,
        mount_point=mount_point,
        fstype=device.fstype,
        options=options,
    )


def ensure_mount(table: MountTable, entry: MountEntry) -> ReconcileResult:
    """
    Make sure the table holds an entry for entry.identifier.

    Presence is keyed on the identifier only: an existing entry for the same
    UUID wins even if it points at another mount point.
    """
    existing = table.find(entry.identifier)
    if existing:
        if os.path.normpath(existing.mount_point) != os.path.normpath(entry.mount_point):
            logger.warning(
                f"fstab entry for UUID={entry.identifier} mounts at {existing.mount_point}, "
                f"not {entry.mount_point}. Leaving it unchanged."
            )
        logger.info(f"fstab entry with UUID {entry.identifier} already exists. Skipping add.")
        return ReconcileResult.ALREADY_PRESENT

    table.append(entry)
    logger.info(f"Added to {table.path}: {entry.to_line()}")
    return ReconcileResult.ADDED


def prepare_mount_point(mutator: SystemMutator, mount_point: str):
    mutator.makedirs(mount_point)


def apply_all(mutator: SystemMutator):
    """Ask the OS to mount everything declared in fstab."""
    logger.info("Mounting all filesystems (mount -a)...")
    try:
        mutator.run(["mount", "-a"])
    except subprocess.CalledProcessError as e:
        raise MountError(f"mount -a failed: {(e.stderr or '').strip() or e}") from e
    except FileNotFoundError as e:
        raise MountError("mount executable not found") from e


def is_mounted(mount_point: str) -> bool:
    target = os.path.normpath(mount_point)
    for part in psutil.disk_partitions(all=True):
        if os.path.normpath(part.mountpoint) == target:
            return True
    return False


def verify_mounted(mount_point: str):
    if not is_mounted(mount_point):
        raise MountVerificationFailed(mount_point)
    logger.info(f"Success: {mount_point} is mounted.")
