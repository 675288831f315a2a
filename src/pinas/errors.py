"""Errors raised while provisioning the NAS.

Every error carries a ``kind`` that ends up in the setup report, so a failed
run can be told apart without parsing messages.

Hierarchy:
    PinasError
        ├── PrecondFailed
        ├── PackageError
        ├── DeviceError
        │   ├── DeviceNotFound
        │   └── DeviceNotIdentifiable
        ├── FileWriteError
        ├── MountError
        │   └── MountVerificationFailed
        └── ServiceError
            └── ShareReloadFailed
"""


class PinasError(Exception):
    """Base exception for all provisioning failures."""

    kind = "PinasError"


class PrecondFailed(PinasError):
    """The host does not meet the requirements for a setup run."""

    kind = "PrecondFailed"


class PackageError(PinasError):
    """Installing or refreshing system packages failed."""

    kind = "PackageError"


class DeviceError(PinasError):
    kind = "DeviceError"


class DeviceNotFound(DeviceError):
    """Path does not exist or is not a block device."""

    kind = "DeviceNotFound"

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Block device '{path}' not found. Run 'pinas system disks' to find the correct device."
        )


class DeviceNotIdentifiable(DeviceError):
    """The device has no detectable UUID or filesystem type."""

    kind = "DeviceNotIdentifiable"

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Could not detect UUID or filesystem type for {path}. "
            "Make sure the drive is partitioned and formatted (e.g. FAT32, exFAT, NTFS, ext4)."
        )


class FileWriteError(PinasError):
    """A configuration file or directory on the host could not be written."""

    kind = "FileWriteError"

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Could not write {path}: {reason}")


class MountError(PinasError):
    kind = "MountError"


class MountVerificationFailed(MountError):
    """A declared mount point is not live after activation."""

    kind = "MountVerificationFailed"

    def __init__(self, mount_point: str):
        self.mount_point = mount_point
        super().__init__(
            f"{mount_point} is not mounted. Check /etc/fstab and 'journalctl -xe'."
        )


class ServiceError(PinasError):
    kind = "ServiceError"


class ShareReloadFailed(ServiceError):
    """Neither reload nor restart of the file-sharing service succeeded."""

    kind = "ShareReloadFailed"
