# Dictionary of managed services.
# Key: Internal ID/Name used by pinas
# Value: List of possible systemd unit names (first loaded match wins)

MANAGED_SERVICES = {
    "smb": ["smbd.service", "smb.service"],
    "nmb": ["nmbd.service", "nmb.service"],
    "avahi": ["avahi-daemon.service"],
    "jellyfin": ["jellyfin.service"],
}
