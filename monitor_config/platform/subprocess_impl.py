"""SubprocessSystemAdapter — real implementation of ISystemAdapter."""

from __future__ import annotations

import subprocess

from monitor_config.platform.system_adapter import CommandResult, ISystemAdapter

# Return code reported when the command never produced an exit status
NOT_RUN = -1


class SubprocessSystemAdapter(ISystemAdapter):
    """Executes real subprocess calls."""

    def run_command(self, args: list[str], timeout: float | None = None) -> CommandResult:
        try:
            r = subprocess.run(args, capture_output=True, text=True, timeout=timeout)
            return CommandResult(stdout=r.stdout, stderr=r.stderr, returncode=r.returncode)
        except subprocess.TimeoutExpired:
            return CommandResult(stdout="", stderr="timeout", returncode=NOT_RUN)
        except OSError as e:
            return CommandResult(stdout="", stderr=str(e), returncode=NOT_RUN)
