import logging
import subprocess
from typing import List, Optional
from pinas.errors import ServiceError
from pinas.system.mutator import HostMutator, SystemMutator
from pinas.systemd.models import SystemdServiceStatus
from pinas.systemd.registry import MANAGED_SERVICES

logger = logging.getLogger(__name__)

ACTIONS = ["start", "stop", "restart", "enable", "disable", "reload"]


class SystemdManager:
    def __init__(self, mutator: Optional[SystemMutator] = None):
        self.mutator = mutator or HostMutator()

    def _resolve_service_name(self, service_key: str) -> Optional[str]:
        """Resolves the loaded systemd unit name from the registry list."""
        if service_key not in MANAGED_SERVICES:
            logger.info(f"Service {service_key} not found in registry, candidates: {list(MANAGED_SERVICES)}")
            return None

        candidates = MANAGED_SERVICES[service_key]
        for unit in candidates:
            # 'systemctl show' reports LoadState even for inactive units
            try:
                res = subprocess.run(
                    ["systemctl", "show", "-p", "LoadState", unit],
                    capture_output=True, text=True
                )
            except FileNotFoundError:
                return None

            logger.debug(f"Resolving {service_key}: {unit} -> {res.stdout.strip()}")
            if "LoadState=loaded" in res.stdout:
                return unit
        return None

    def unit_for(self, service_key: str) -> str:
        """Loaded unit for the key, or the first candidate so systemctl reports the real error."""
        if service_key not in MANAGED_SERVICES:
            raise ValueError(f"Unknown service: {service_key}")
        return self._resolve_service_name(service_key) or MANAGED_SERVICES[service_key][0]

    def get_service_status(self, service_name: str) -> Optional[SystemdServiceStatus]:
        """Get comprehensive status of a service."""
        unit = self._resolve_service_name(service_name)
        if not unit:
            if service_name in MANAGED_SERVICES:
                return SystemdServiceStatus(
                    name=service_name,
                    load_state="not-found",
                    active_state="inactive",
                    sub_state="dead",
                    unit_file_state="disabled"
                )
            return None

        props = ["LoadState", "ActiveState", "SubState", "UnitFileState", "Description", "MainPID", "ActiveEnterTimestamp"]
        cmd = ["systemctl", "show", "--no-pager"] + [f"-p{p}" for p in props] + [unit]

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            logger.error(f"Error getting status for {unit}: {e}")
            return None

        data = {}
        for line in result.stdout.splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                data[k] = v.strip()

        return SystemdServiceStatus(
            name=service_name,
            unit=unit,
            description=data.get("Description"),
            load_state=data.get("LoadState", "unknown"),
            active_state=data.get("ActiveState", "unknown"),
            sub_state=data.get("SubState", "unknown"),
            unit_file_state=data.get("UnitFileState") or "unknown",
            main_pid=int(data.get("MainPID") or 0),
            since=data.get("ActiveEnterTimestamp") or None
        )

    def list_services(self) -> List[SystemdServiceStatus]:
        """List status for all managed services."""
        results = []
        for key in MANAGED_SERVICES:
            status = self.get_service_status(key)
            if status:
                results.append(status)
        return results

    def manage_service(self, service_name: str, action: str):
        """Perform an action on a service, raising ServiceError if systemctl fails."""
        if action not in ACTIONS:
            raise ValueError(f"Invalid action: {action}")

        unit = self.unit_for(service_name)
        try:
            self.mutator.run(["systemctl", action, unit])
        except subprocess.CalledProcessError as e:
            raise ServiceError(f"systemctl {action} {unit} failed: {(e.stderr or '').strip() or e}") from e
        except FileNotFoundError as e:
            raise ServiceError("systemctl not found, is this a systemd host?") from e
        logger.info(f"systemctl {action} {unit}")
