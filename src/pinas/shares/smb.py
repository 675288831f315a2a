import configparser
import io
import logging
import os
import shutil
from typing import List, Optional
from pinas.errors import ServiceError, ShareReloadFailed
from pinas.shares.models import SMBShare, ShareEntry
from pinas.storage.models import ReconcileResult
from pinas.system.mutator import HostMutator, SystemMutator
from pinas.systemd.manager import SystemdManager

logger = logging.getLogger(__name__)

SMB_CONF_PATH = "/etc/samba/smb.conf"
SMB_BACKUP_PATH = "/etc/samba/smb.conf.backup_pre_pi_nas_dual"


class ShareStore:
    """Append-only access to smb.conf with a one-time backup of the original."""

    def __init__(self, mutator: SystemMutator, path: str = SMB_CONF_PATH, backup_path: str = SMB_BACKUP_PATH):
        self.mutator = mutator
        self.path = path
        self.backup_path = backup_path
        self._backup_checked = False

    def read(self) -> str:
        try:
            with open(self.path, "r") as f:
                return f.read()
        except FileNotFoundError:
            return ""

    def sections(self) -> List[str]:
        names = []
        for line in self.read().splitlines():
            if line.startswith("[") and "]" in line:
                names.append(line[1:line.index("]")])
        return names

    def has_section(self, name: str) -> bool:
        header = f"[{name}]"
        return any(line.startswith(header) for line in self.read().splitlines())

    def backup_once(self):
        """Copy the store aside unless a backup already exists. Only the first call per store does anything."""
        if self._backup_checked:
            return
        self._backup_checked = True

        if os.path.exists(self.backup_path):
            logger.debug(f"Backup {self.backup_path} already exists, keeping it.")
            return
        if not os.path.exists(self.path):
            logger.warning(f"{self.path} does not exist, nothing to back up.")
            return

        logger.info(f"Backing up original Samba config to {self.backup_path}")
        self.mutator.copy_file(self.path, self.backup_path)

    def append(self, entry: ShareEntry):
        if not os.path.exists(self.path):
            logger.info(f"{self.path} does not exist, writing a base configuration.")
            self._create_base_config()
        self.backup_once()

        content = self.read()
        prefix = "\n" if content and not content.endswith("\n") else ""
        self.mutator.append_text(self.path, prefix + entry.render())

    def _create_base_config(self):
        config = configparser.ConfigParser(interpolation=None)
        config["global"] = {
            'workgroup': 'WORKGROUP',
            'server string': 'pinas %h',
            'security': 'user',
            'map to guest': 'Bad User'
        }
        buf = io.StringIO()
        config.write(buf)
        self.mutator.makedirs(os.path.dirname(self.path))
        self.mutator.write_text(self.path, buf.getvalue())


def ensure_share(store: ShareStore, name: str, path: str, owner: str) -> ReconcileResult:
    """Append a share section for name unless a section with that exact name exists."""
    logger.info(f"Ensuring Samba share [{name}] is configured...")
    if store.has_section(name):
        logger.info(f"Share [{name}] already exists in {store.path}. Not adding duplicate.")
        return ReconcileResult.ALREADY_PRESENT

    store.append(ShareEntry(name=name, path=path, owner=owner))
    logger.info(f"Added Samba share [{name}] pointing to {path}")
    return ReconcileResult.ADDED


class SMBManager:
    def __init__(self, mutator: Optional[SystemMutator] = None, systemd: Optional[SystemdManager] = None,
                 conf_path: str = SMB_CONF_PATH):
        self.mutator = mutator or HostMutator()
        self.systemd = systemd or SystemdManager(self.mutator)
        self.conf_path = conf_path

    def check_installed(self):
        """Check if samba is installed."""
        return shutil.which("smbd") is not None or shutil.which("samba") is not None

    def _str_to_bool(self, val: str) -> bool:
        return val.lower() in ('yes', 'true', '1', 'on')

    def list_shares(self) -> List[SMBShare]:
        """List all samba shares."""
        if not os.path.exists(self.conf_path):
            return []

        config = configparser.ConfigParser(strict=False, interpolation=None)
        try:
            config.read(self.conf_path)
        except configparser.Error as e:
            logger.warning(f"Could not parse {self.conf_path}: {e}")
            return []

        shares = []
        for section in config.sections():
            if section.lower() == 'global':
                continue

            s = config[section]
            writeable = s.get('writeable', s.get('writable'))
            read_only = s.get('read only', 'no' if writeable and self._str_to_bool(writeable) else 'yes')
            shares.append(SMBShare(
                name=section,
                path=s.get('path', 'N/A'),
                comment=s.get('comment', ''),
                read_only=self._str_to_bool(read_only),
                browsable=self._str_to_bool(s.get('browseable', s.get('browsable', 'yes'))),
                guest_ok=self._str_to_bool(s.get('guest ok', s.get('public', 'no')))
            ))
        return shares

    def reload_services(self):
        """Reload smbd, falling back to a restart. nmbd is restarted best effort."""
        logger.info("Reloading Samba services...")
        try:
            self.systemd.manage_service("smb", "reload")
        except ServiceError as reload_error:
            logger.warning(f"Reload failed ({reload_error}), restarting instead.")
            try:
                self.systemd.manage_service("smb", "restart")
            except ServiceError as e:
                raise ShareReloadFailed(f"Samba could not be reloaded or restarted: {e}") from e

        try:
            self.systemd.manage_service("nmb", "restart")
        except ServiceError as e:
            logger.warning(f"nmbd not restarted: {e}")

    def enable_services(self):
        """Enable the Samba services at boot."""
        logger.info("Enabling Samba services at boot...")
        self.systemd.manage_service("smb", "enable")
        try:
            self.systemd.manage_service("nmb", "enable")
        except ServiceError as e:
            logger.warning(f"nmbd not enabled: {e}")

    def get_status(self) -> str:
        """Get the active state of the samba service."""
        status = self.systemd.get_service_status("smb")
        return status.active_state if status else "not found"
