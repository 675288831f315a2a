import logging
import os
import pwd
import subprocess
from typing import Callable, Dict, Optional
from pinas.config.settings import NasConfig
from pinas.errors import PinasError, PrecondFailed, ServiceError
from pinas.hwosinfo.hw import get_hostname
from pinas.pkgs.base import PackageManager
from pinas.pkgs.manager import get_package_manager, install_packages
from pinas.setup.models import DeviceOutcome, MediaServerOutcome, SetupReport, SetupState
from pinas.shares.smb import SMBManager, ShareStore, ensure_share
from pinas.storage.devices import DeviceResolver
from pinas.storage.fstab import MountTable, apply_all, build_mount_entry, ensure_mount, prepare_mount_point, verify_mounted
from pinas.system.mutator import HostMutator, SystemMutator
from pinas.systemd.manager import SystemdManager

logger = logging.getLogger(__name__)

MEDIA_SERVER_PACKAGE = "jellyfin"


class Orchestrator:
    """
    Runs a full NAS setup as a strict sequence of states.

    Each non-terminal state maps to one transition method that performs the
    step and returns the next state. The first PinasError stops the run and
    leaves the report in FAILED; nothing is retried or rolled back.
    """

    def __init__(
        self,
        nas_config: NasConfig,
        mutator: Optional[SystemMutator] = None,
        resolver: Optional[DeviceResolver] = None,
        package_manager: Optional[PackageManager] = None,
        systemd: Optional[SystemdManager] = None,
        check_privileges: bool = True,
    ):
        self.config = nas_config
        self.mutator = mutator or HostMutator()
        self.resolver = resolver or DeviceResolver()
        self._package_manager = package_manager
        self.systemd = systemd or SystemdManager(self.mutator)
        self.smb = SMBManager(self.mutator, self.systemd, nas_config.smb_conf_path)
        self.check_privileges = check_privileges

        self.mount_table = MountTable(self.mutator, nas_config.fstab_path)
        self.share_store = ShareStore(self.mutator, nas_config.smb_conf_path, nas_config.smb_backup_path)
        self.uid = None
        self.gid = None

        self.report = SetupReport(
            hostname=nas_config.hostname or get_hostname(),
            devices=[DeviceOutcome(spec=spec) for spec in nas_config.devices],
        )
        self.transitions: Dict[SetupState, Callable[[], SetupState]] = {
            SetupState.INIT: self._install_packages,
            SetupState.PACKAGES_READY: self._resolve_devices,
            SetupState.DEVICES_RESOLVED: self._declare_mounts,
            SetupState.MOUNTS_DECLARED: self._activate_mounts,
            SetupState.MOUNTS_ACTIVE: self._declare_shares,
            SetupState.SHARES_DECLARED: self._reload_file_sharing,
            SetupState.SERVICE_RELOADED: self._enable_name_service,
            SetupState.NAME_SERVICE_ENABLED: self._finish,
        }

    @property
    def package_manager(self) -> PackageManager:
        if self._package_manager is None:
            self._package_manager = get_package_manager(self.mutator)
        return self._package_manager

    def run(self) -> SetupReport:
        try:
            self.check_preconditions()
        except PrecondFailed as e:
            return self._fail(e, None)

        self._log_configuration()
        state = SetupState.INIT
        self.report.history.append(state)
        while state != SetupState.DONE:
            try:
                state = self.transitions[state]()
            except (PinasError, OSError) as e:
                return self._fail(e, state)
            self.report.state = state
            self.report.history.append(state)

        self._install_media_server()
        return self.report

    def check_preconditions(self):
        if self.check_privileges and os.geteuid() != 0:
            raise PrecondFailed("Please run this command as root: sudo pinas setup")

        try:
            account = pwd.getpwnam(self.config.owner)
        except KeyError:
            raise PrecondFailed(f"User '{self.config.owner}' not found. Set the owner in the configuration and try again.")
        self.uid = account.pw_uid
        self.gid = account.pw_gid

    def _fail(self, error: Exception, state: Optional[SetupState]) -> SetupReport:
        logger.error(f"ERROR: {error}")
        self.report.failed_at = state
        self.report.state = SetupState.FAILED
        self.report.error_kind = getattr(error, "kind", type(error).__name__)
        self.report.reason = str(error)
        self.report.history.append(SetupState.FAILED)
        return self.report

    def _log_configuration(self):
        logger.info("Using configuration:")
        logger.info(f"  Owner        : {self.config.owner} (uid={self.uid} gid={self.gid})")
        for i, spec in enumerate(self.config.devices, start=1):
            logger.info(f"  Drive {i}      : {spec.path} -> {spec.mount_point} -> share [{spec.share_name}]")

    def _install_packages(self) -> SetupState:
        install_packages(self.package_manager, self.config.packages)
        return SetupState.PACKAGES_READY

    def _resolve_devices(self) -> SetupState:
        for outcome in self.report.devices:
            logger.info(f"Configuring USB drive: {outcome.spec.share_name}")
            outcome.resolved = self.resolver.resolve(outcome.spec.path)
        return SetupState.DEVICES_RESOLVED

    def _declare_mounts(self) -> SetupState:
        for outcome in self.report.devices:
            prepare_mount_point(self.mutator, outcome.spec.mount_point)
            entry = build_mount_entry(outcome.resolved, outcome.spec.mount_point, self.uid, self.gid)
            outcome.mount = ensure_mount(self.mount_table, entry)
        return SetupState.MOUNTS_DECLARED

    def _activate_mounts(self) -> SetupState:
        apply_all(self.mutator)
        for outcome in self.report.devices:
            if self.mutator.simulated:
                logger.info(f"[dry-run] would verify {outcome.spec.mount_point} is mounted")
                continue
            verify_mounted(outcome.spec.mount_point)
        return SetupState.MOUNTS_ACTIVE

    def _declare_shares(self) -> SetupState:
        for outcome in self.report.devices:
            outcome.share = ensure_share(
                self.share_store, outcome.spec.share_name, outcome.spec.mount_point, self.config.owner
            )
        return SetupState.SHARES_DECLARED

    def _reload_file_sharing(self) -> SetupState:
        self.smb.reload_services()
        self.smb.enable_services()
        return SetupState.SERVICE_RELOADED

    def _enable_name_service(self) -> SetupState:
        logger.info(f"Enabling and starting avahi-daemon (for {self.report.hostname}.local discovery)...")
        self.systemd.manage_service("avahi", "enable")
        self.systemd.manage_service("avahi", "start")
        return SetupState.NAME_SERVICE_ENABLED

    def _finish(self) -> SetupState:
        return SetupState.DONE

    def _install_media_server(self):
        if not self.config.enable_media_server:
            logger.info("Skipping Jellyfin installation (enable_media_server is off).")
            self.report.media_server = MediaServerOutcome.SKIPPED
            return

        logger.info("Attempting to install Jellyfin...")
        try:
            self.package_manager.install(MEDIA_SERVER_PACKAGE)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            logger.warning(f"Jellyfin installation failed: {e}. Install it manually later.")
            self.report.media_server = MediaServerOutcome.FAILED
            return

        for action in ("enable", "start"):
            try:
                self.systemd.manage_service("jellyfin", action)
            except ServiceError as e:
                logger.warning(f"Could not {action} jellyfin: {e}")
        self.report.media_server = MediaServerOutcome.INSTALLED
