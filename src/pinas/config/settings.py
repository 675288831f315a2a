import logging
import os
from typing import List, Optional
import yaml
from pydantic import BaseModel
from pinas.pkgs.manager import NAS_PACKAGES
from pinas.storage.models import DeviceSpec

logger = logging.getLogger(__name__)

CONFIG_SEARCH_PATHS = [
    "pinas.yaml",
    os.path.expanduser("~/.config/pinas/config.yaml"),
    "/etc/pinas/config.yaml",
]


class Config:
    owner = os.getenv("PINAS_OWNER", "dan")

    device1 = os.getenv("PINAS_DEVICE1", "/dev/sda1")
    mount_point1 = os.getenv("PINAS_MOUNT_POINT1", "/mnt/usb1")
    share_name1 = os.getenv("PINAS_SHARE_NAME1", "USB1")

    device2 = os.getenv("PINAS_DEVICE2", "/dev/sdb1")
    mount_point2 = os.getenv("PINAS_MOUNT_POINT2", "/mnt/usb2")
    share_name2 = os.getenv("PINAS_SHARE_NAME2", "USB2")

    enable_media_server = os.getenv("PINAS_ENABLE_MEDIA_SERVER", "false").lower() == "true"
    hostname = os.getenv("PINAS_HOSTNAME", "")

    fstab_path = os.getenv("PINAS_FSTAB_PATH", "/etc/fstab")
    smb_conf_path = os.getenv("PINAS_SMB_CONF_PATH", "/etc/samba/smb.conf")
    smb_backup_path = os.getenv("PINAS_SMB_BACKUP_PATH", "/etc/samba/smb.conf.backup_pre_pi_nas_dual")

    # Windows client
    client_account = os.getenv("PINAS_CLIENT_ACCOUNT", "")
    client_letters = os.getenv("PINAS_CLIENT_LETTERS", "Z,Y")

config = Config()


class ClientConfig(BaseModel):
    account: str
    letters: List[str]


class NasConfig(BaseModel):
    owner: str
    devices: List[DeviceSpec]
    enable_media_server: bool = False
    hostname: Optional[str] = None
    packages: List[str] = NAS_PACKAGES
    fstab_path: str
    smb_conf_path: str
    smb_backup_path: str
    client: ClientConfig


def default_config() -> NasConfig:
    """Configuration built from the PINAS_* environment, with the stock two-drive layout."""
    return NasConfig(
        owner=config.owner,
        devices=[
            DeviceSpec(path=config.device1, mount_point=config.mount_point1, share_name=config.share_name1),
            DeviceSpec(path=config.device2, mount_point=config.mount_point2, share_name=config.share_name2),
        ],
        enable_media_server=config.enable_media_server,
        hostname=config.hostname or None,
        packages=list(NAS_PACKAGES),
        fstab_path=config.fstab_path,
        smb_conf_path=config.smb_conf_path,
        smb_backup_path=config.smb_backup_path,
        client=ClientConfig(
            account=config.client_account or config.owner,
            letters=[letter.strip() for letter in config.client_letters.split(",") if letter.strip()],
        ),
    )


def find_config_file(explicit: Optional[str] = None) -> Optional[str]:
    if explicit:
        return explicit
    for candidate in CONFIG_SEARCH_PATHS:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(path: Optional[str] = None) -> NasConfig:
    """Defaults overridden by the first YAML file found (or the one given)."""
    base = default_config()
    config_path = find_config_file(path)
    if not config_path:
        return base

    logger.info(f"Loading configuration from {config_path}")
    with open(config_path, "r") as f:
        try:
            overrides = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{config_path} is not valid YAML: {e}") from e
    if not isinstance(overrides, dict):
        raise ValueError(f"{config_path} must contain a YAML mapping")

    merged = base.model_dump()
    client_overrides = overrides.pop("client", None) or {}
    merged.update(overrides)
    if "owner" in overrides and not config.client_account and "account" not in client_overrides:
        merged["client"]["account"] = overrides["owner"]
    merged["client"].update(client_overrides)
    return NasConfig(**merged)
