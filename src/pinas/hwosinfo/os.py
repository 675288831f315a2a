import platform


def get_os_info() -> dict:
    """Return the os-release fields with lowercase keys ('id', 'id_like', ...)."""
    try:
        release = platform.freedesktop_os_release()
    except OSError:
        return {}
    return {k.lower(): v for k, v in release.items()}
