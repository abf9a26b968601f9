"""
Process execution for external tools (nix, ssh, git, keytool)

Runs argv lists behind a spinner (or streamed in verbose mode), writes every
line of output to the run log and raises ExternalToolError on failure.
"""

import os
import selectors
import shlex
import subprocess
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from rich.live import Live
from rich.padding import Padding
from rich.spinner import Spinner
from rich.text import Text

from hostdeploy.exceptions import ExternalToolError
from hostdeploy.logger import DeployLogger, console
from hostdeploy.models.results import ExecutionResult


def merged_env(overrides: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    """
    Build a child environment from the current one plus overrides.

    The process-wide environment is never mutated.
    """
    if not overrides:
        return None
    return {**os.environ, **overrides}


class ProcessRunner:
    """Runs external commands with progress UI and log capture."""

    def __init__(self, logger: Optional[DeployLogger] = None, verbose: bool = False):
        self.logger = logger
        self.verbose = verbose

    def _log_command(self, argv: Sequence[str], env: Optional[Mapping[str, str]]):
        if not self.logger:
            return
        prefix = " ".join(f"{k}={shlex.quote(v)}" for k, v in (env or {}).items())
        command = shlex.join(argv)
        self.logger.log_command(f"{prefix} {command}" if prefix else command)

    def _log_output(self, output: str, stream: str):
        if self.logger and output:
            self.logger.log_output(output, stream)

    def run(
        self,
        argv: Sequence[str],
        description: str,
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
        interactive: bool = False,
        check: bool = True,
    ) -> ExecutionResult:
        """
        Run a command and wait for it to finish.

        Args:
            argv: Command and arguments
            description: Short text for the spinner and error messages
            env: Extra environment variables layered over the current ones
            cwd: Working directory
            interactive: Inherit the terminal (prompts, Ctrl-C reach the child)
            check: Raise ExternalToolError on non-zero exit

        Returns:
            ExecutionResult with captured output (empty when interactive)
        """
        argv = [str(a) for a in argv]
        tool = Path(argv[0]).name
        self._log_command(argv, env)
        child_env = merged_env(env)

        try:
            if interactive:
                completed = subprocess.run(argv, env=child_env, cwd=cwd)
                result = ExecutionResult(
                    returncode=completed.returncode, command=shlex.join(argv)
                )
            elif self.verbose:
                result = self._run_streaming(argv, child_env, cwd)
            else:
                result = self._run_with_spinner(argv, description, child_env, cwd)
        except FileNotFoundError as e:
            raise ExternalToolError(tool, 127, f"{e.strerror}: {argv[0]}")

        if check and result.is_failure:
            if self.logger:
                self.logger.log(f"{description} failed ({result.returncode})", "ERROR")
            raise ExternalToolError(tool, result.returncode, result.output)
        return result

    def _emit_line(self, raw: bytes, stream: str, lines: List[str]) -> None:
        line = raw.decode(errors="replace").rstrip()
        lines.append(line)
        self._log_output(line, stream)
        if not self.logger:
            console.print(line, markup=False, highlight=False)

    def _run_streaming(self, argv, env, cwd) -> ExecutionResult:
        # Drain stdout and stderr together so neither pipe fills
        captured: Dict[str, List[str]] = {"stdout": [], "stderr": []}
        pending: Dict[str, bytes] = {"stdout": b"", "stderr": b""}

        with subprocess.Popen(
            argv,
            cwd=cwd,
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        ) as process:
            sel = selectors.DefaultSelector()
            sel.register(process.stdout, selectors.EVENT_READ, "stdout")
            sel.register(process.stderr, selectors.EVENT_READ, "stderr")

            while sel.get_map():
                for key, _ in sel.select():
                    stream = key.data
                    chunk = os.read(key.fd, 65536)
                    if not chunk:
                        sel.unregister(key.fileobj)
                        if pending[stream]:
                            self._emit_line(pending[stream], stream, captured[stream])
                            pending[stream] = b""
                        continue

                    *complete, pending[stream] = (pending[stream] + chunk).split(b"\n")
                    for raw in complete:
                        self._emit_line(raw, stream, captured[stream])

            sel.close()
            process.wait()

        return ExecutionResult(
            returncode=process.returncode,
            stdout="\n".join(captured["stdout"]),
            stderr="\n".join(captured["stderr"]),
            command=shlex.join(argv),
        )

    def _run_with_spinner(self, argv, description, env, cwd) -> ExecutionResult:
        spinner = Spinner("dots", text=f"[cyan]{description}...[/cyan]")

        with Live(Padding(spinner, (0, 0, 0, 2)), console=console, refresh_per_second=10) as live:
            completed = subprocess.run(
                argv, cwd=cwd, env=env, capture_output=True, text=True
            )

            self._log_output(completed.stdout, "stdout")
            self._log_output(completed.stderr, "stderr")

            if completed.returncode == 0:
                mark = Text("  ✓ ", style="dim")
            else:
                mark = Text("  ✗ ", style="red")
            mark.append(description, style="dim")
            live.update(mark)

        return ExecutionResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            command=shlex.join(argv),
        )
