from enum import Enum
from typing import List, Optional
from pydantic import BaseModel
from pinas.storage.models import DeviceSpec, ReconcileResult, ResolvedDevice


class SetupState(str, Enum):
    INIT = "init"
    PACKAGES_READY = "packages_ready"
    DEVICES_RESOLVED = "devices_resolved"
    MOUNTS_DECLARED = "mounts_declared"
    MOUNTS_ACTIVE = "mounts_active"
    SHARES_DECLARED = "shares_declared"
    SERVICE_RELOADED = "service_reloaded"
    NAME_SERVICE_ENABLED = "name_service_enabled"
    DONE = "done"
    FAILED = "failed"


class MediaServerOutcome(str, Enum):
    SKIPPED = "skipped"
    INSTALLED = "installed"
    FAILED = "failed"


class DeviceOutcome(BaseModel):
    spec: DeviceSpec
    resolved: Optional[ResolvedDevice] = None
    mount: Optional[ReconcileResult] = None
    share: Optional[ReconcileResult] = None


class SetupReport(BaseModel):
    hostname: str
    state: SetupState = SetupState.INIT
    failed_at: Optional[SetupState] = None
    error_kind: Optional[str] = None
    reason: Optional[str] = None
    history: List[SetupState] = []
    devices: List[DeviceOutcome] = []
    media_server: Optional[MediaServerOutcome] = None

    @property
    def succeeded(self) -> bool:
        return self.state == SetupState.DONE

    def summary_lines(self) -> List[str]:
        if not self.succeeded:
            return [
                f"Setup failed during '{self.failed_at.value if self.failed_at else 'preconditions'}'"
                f" ({self.error_kind}): {self.reason}"
            ]

        lines = ["==========================================",
                 " Raspberry Pi DUAL-USB NAS setup complete!",
                 "==========================================", ""]
        for d in self.devices:
            lines.append(f"{d.spec.share_name}:")
            lines.append(f"  Device      : {d.spec.path}")
            if d.resolved:
                lines.append(f"  Filesystem  : {d.resolved.fstype} (UUID={d.resolved.uuid})")
            lines.append(f"  Mount point : {d.spec.mount_point}")
            lines.append(f"  Samba share : {d.spec.share_name}")
            lines.append("")

        lines.append("On Windows, access:")
        lines += [f"  \\\\{self.hostname}\\{d.spec.share_name}" for d in self.devices]
        lines.append("")
        lines.append("On Steam Deck / Linux / macOS, use:")
        lines += [f"  smb://{self.hostname}/{d.spec.share_name}" for d in self.devices]
        lines.append(f"  (or {self.hostname}.local through mDNS)")

        if self.media_server == MediaServerOutcome.SKIPPED:
            lines.append("")
            lines.append("Jellyfin was not installed. Point its libraries at:")
            lines += [f"  {d.spec.mount_point}" for d in self.devices]
        elif self.media_server == MediaServerOutcome.FAILED:
            lines.append("")
            lines.append("Jellyfin installation failed. Install it manually later.")
        return lines
