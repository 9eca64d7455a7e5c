"""InSpec command-line integration."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from inspec_exporter.core.exceptions import InvocationError
from inspec_exporter.core.logging import get_logger
from inspec_exporter.core.models import ModuleConfig

logger = get_logger(__name__)


class AuditorInvoker:
    """
    Runs ``inspec exec`` for one module and hands back its raw output.

    InSpec must be installed separately: https://docs.chef.io/inspec/install/
    """

    REPORTER = "json-min"

    # inspec exits 100 when the run completed but at least one control failed
    CHECKS_FAILED_EXIT_CODE = 100
    OK_EXIT_CODES = frozenset({0, CHECKS_FAILED_EXIT_CODE})

    def __init__(self, inspec_path: str = "inspec"):
        self.inspec_path = inspec_path
        self._resolved_path: Optional[str] = None

    def is_available(self) -> bool:
        """Check if InSpec is installed and available."""
        if Path(self.inspec_path).is_file():
            self._resolved_path = self.inspec_path
        else:
            self._resolved_path = shutil.which(self.inspec_path)
        return self._resolved_path is not None

    @staticmethod
    def target_uri(target: str, config: ModuleConfig) -> str:
        """Build the ``ssh://`` URI for a remote target."""
        uri = "ssh://"
        if config.ssh_user:
            uri += f"{config.ssh_user}@"
        uri += target
        if config.ssh_port:
            uri += f":{config.ssh_port}"
        return uri

    def build_command(self, target: str, config: ModuleConfig) -> list[str]:
        """
        Build the auditor command line.

        Connection arguments are only added for a non-empty target; an
        empty target runs the profile against the local host.
        """
        cmd = [
            self._resolved_path or self.inspec_path,
            "exec", config.path,
            "--reporter", self.REPORTER,
        ]

        if target:
            cmd.extend(["-t", self.target_uri(target, config)])
            if config.ssh_identity_file:
                cmd.extend(["-i", config.ssh_identity_file])
            if config.need_sudo:
                cmd.append("--sudo")

        return cmd

    def invoke(self, target: str, config: ModuleConfig) -> bytes:
        """
        Run the auditor and return its combined stdout/stderr.

        Raises:
            InvocationError: If the process cannot be started or exits with
                a status other than 0 or 100.
        """
        cmd = self.build_command(target, config)
        logger.debug("inspec_command", module=config.name, args=cmd)

        try:
            process = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as e:
            raise InvocationError(f"Could not run {cmd[0]}: {e}") from e

        if process.returncode not in self.OK_EXIT_CODES:
            raise InvocationError(
                f"inspec exited with status {process.returncode}",
                exit_code=process.returncode,
                output=process.stdout or b"",
            )

        return process.stdout or b""
