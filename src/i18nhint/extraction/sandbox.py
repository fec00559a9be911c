"""Isolated evaluation of whole resource modules in a JavaScript runtime.

Some resource modules compute their key table (helper calls, spreads,
conditionals) and cannot be read structurally. ModuleSandbox hands such a
module to Node.js in a child process and reads back its exports as JSON.

Isolation:
- The module runs inside a fresh ``vm`` context that exposes only ``module``
  and ``exports``, both created inside the context; no ``require``,
  ``process`` or globals of the runner.
- Code generation from strings (``eval``, ``Function``) and WebAssembly are
  disabled both in the context and in the runner, so no object reachable from
  the module can compile code in the runner's realm.
- The runtime starts under the Node.js permission model (``--permission``, or
  ``--experimental-permission`` on Node.js 20 and 21) with nothing granted:
  no file system access, no child processes, no workers. Runtimes older than
  Node.js 20 are refused.
- The child gets an empty environment and a throwaway working directory.
- Both the ``vm`` context and the child process are bounded by a timeout.

A missing runtime is not an error condition for callers: it raises
SandboxUnavailableError, which the extraction cascade treats like any other
strategy failure.

Python 3.13+. Requires a Node.js executable at runtime.
"""

from __future__ import annotations

import functools
import json
import logging
import re
import shutil
import subprocess
import tempfile
from dataclasses import dataclass

from i18nhint.constants import DEFAULT_NODE_EXECUTABLE, DEFAULT_SANDBOX_TIMEOUT
from i18nhint.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    SandboxError,
    SandboxTimeoutError,
    SandboxUnavailableError,
)

__all__ = ["ModuleSandbox"]

logger = logging.getLogger(__name__)

# Exit status the runner uses when the vm timeout fires.
_VM_TIMEOUT_EXIT = 3

# Seconds allowed on top of the vm timeout for runtime startup and teardown.
_STARTUP_ALLOWANCE = 1.0

_VERSION_TIMEOUT = 5.0

# First Node.js major with the permission model, and the first with it stable.
_PERMISSION_MIN_MAJOR = 20
_PERMISSION_STABLE_MAJOR = 22

_VERSION_RE = re.compile(r"v?(\d+)\.")

_TIMEOUT_VARIABLE = "I18NHINT_VM_TIMEOUT_MS"

_RUNNER = r"""
const vm = require("vm");
const chunks = [];
process.stdin.on("data", (chunk) => chunks.push(chunk));
process.stdin.on("end", () => {
  const source = Buffer.concat(chunks).toString("utf8")
    .replace(/^\s*export\s+default\b\s*/m, "module.exports = ")
    .replace(/^(\s*)export\s+(?=(?:const|let|var|function|class)\s)/gm, "$1");
  const context = vm.createContext(Object.create(null), {
    codeGeneration: { strings: false, wasm: false },
  });
  try {
    vm.runInContext("var module = { exports: {} }; var exports = module.exports;", context);
    vm.runInContext(source, context, {
      timeout: Number(process.env.I18NHINT_VM_TIMEOUT_MS) || 2000,
    });
  } catch (err) {
    process.stderr.write(String((err && err.message) || err));
    process.exit(err && err.code === "ERR_SCRIPT_EXECUTION_TIMEOUT" ? 3 : 2);
  }
  let value = context.module && context.module.exports;
  if (value && typeof value.default === "object" && value.default !== null) {
    value = value.default;
  }
  process.stdout.write(JSON.stringify(value === undefined ? null : value));
});
"""


@dataclass(frozen=True, slots=True)
class ModuleSandbox:
    """Evaluates resource modules in a Node.js child process.

    Attributes:
        executable: Runtime command or path (looked up on PATH)
        timeout: Seconds the module may run before evaluation is abandoned

    Example:
        >>> sandbox = ModuleSandbox(timeout=1.0)
        >>> sandbox.evaluate("module.exports = {l0001: ['Se', 'arch'].join('')}")
        {'l0001': 'Search'}
    """

    executable: str = DEFAULT_NODE_EXECUTABLE
    timeout: float = DEFAULT_SANDBOX_TIMEOUT

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ValueError(msg)

    def is_available(self) -> bool:
        """Check whether the runtime executable can be found."""
        return shutil.which(self.executable) is not None

    def evaluate(self, source: str) -> object:
        """Run source as a module and return its exports.

        ``export default`` modules are rewritten to CommonJS before running.
        If the exports carry a ``default`` object, that object is returned.

        Args:
            source: Full text of the resource module

        Returns:
            Exports converted through JSON (dict, list, str, number, bool, None)

        Raises:
            SandboxUnavailableError: Runtime not found, not startable or
                without the permission model
            SandboxTimeoutError: Evaluation exceeded the timeout
            SandboxError: Module raised, or produced output that is not JSON
        """
        runtime = shutil.which(self.executable)
        if runtime is None:
            raise SandboxUnavailableError(
                Diagnostic(
                    code=DiagnosticCode.SANDBOX_UNAVAILABLE,
                    message=f"JavaScript runtime {self.executable!r} not found",
                    hint="Install Node.js or set nodeExecutable",
                    severity="warning",
                )
            )

        argv = [
            runtime,
            "--no-warnings",
            "--disallow-code-generation-from-strings",
            _permission_flag(runtime),
            "-e",
            _RUNNER,
        ]
        env = {_TIMEOUT_VARIABLE: str(max(1, int(self.timeout * 1000)))}
        with tempfile.TemporaryDirectory(prefix="i18nhint-") as workdir:
            try:
                completed = subprocess.run(  # noqa: S603 - fixed argv, no shell
                    argv,
                    input=source,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    cwd=workdir,
                    env=env,
                    timeout=self.timeout + _STARTUP_ALLOWANCE,
                    check=False,
                )
            except subprocess.TimeoutExpired as exc:
                raise SandboxTimeoutError(self._timeout_diagnostic()) from exc
            except OSError as exc:
                raise SandboxUnavailableError(
                    Diagnostic(
                        code=DiagnosticCode.SANDBOX_UNAVAILABLE,
                        message=f"Could not start {runtime!r}: {exc}",
                        severity="warning",
                    )
                ) from exc

        if completed.returncode == _VM_TIMEOUT_EXIT:
            raise SandboxTimeoutError(self._timeout_diagnostic())
        if completed.returncode != 0:
            detail = completed.stderr.strip().splitlines()
            raise SandboxError(
                Diagnostic(
                    code=DiagnosticCode.SANDBOX_FAILED,
                    message=f"Module evaluation failed: {detail[0] if detail else completed.returncode}",
                )
            )

        try:
            value = json.loads(completed.stdout)
        except ValueError as exc:
            msg = "Sandbox produced output that is not JSON"
            raise SandboxError(msg) from exc

        logger.debug("Sandbox evaluated module (%d chars)", len(source))
        return value

    def _timeout_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            code=DiagnosticCode.SANDBOX_TIMEOUT,
            message=f"Module evaluation exceeded {self.timeout:g}s",
            hint="Raise sandboxTimeout or simplify the resource module",
        )


@functools.cache
def _permission_flag(runtime: str) -> str:
    """Return the flag that turns on the permission model for runtime.

    Failed lookups raise and are therefore not cached.

    Raises:
        SandboxUnavailableError: Version unknown or older than Node.js 20
    """
    try:
        completed = subprocess.run(  # noqa: S603 - fixed argv, no shell
            [runtime, "--version"],
            capture_output=True,
            text=True,
            env={},
            timeout=_VERSION_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise SandboxUnavailableError(
            Diagnostic(
                code=DiagnosticCode.SANDBOX_UNAVAILABLE,
                message=f"Could not query the version of {runtime!r}: {exc}",
                severity="warning",
            )
        ) from exc

    version = completed.stdout.strip()
    match = _VERSION_RE.match(version)
    major = int(match.group(1)) if match and completed.returncode == 0 else 0
    if major < _PERMISSION_MIN_MAJOR:
        raise SandboxUnavailableError(
            Diagnostic(
                code=DiagnosticCode.SANDBOX_UNAVAILABLE,
                message=f"{runtime!r} ({version or 'unknown version'}) has no permission model",
                hint="Install Node.js 20 or later",
                severity="warning",
            )
        )
    logger.debug("Sandbox runtime %s reports %s", runtime, version)
    return "--permission" if major >= _PERMISSION_STABLE_MAJOR else "--experimental-permission"
