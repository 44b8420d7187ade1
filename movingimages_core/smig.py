from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
import plistlib
import subprocess
import tempfile
from typing import Any, Callable

from .command_list import CommandList
from .commands import SaveResultsType, require_results_destination
from .config import SmigConfig, load_smig_config
from .documents import DocumentSource, DocumentValidationError, MovingImagesError, as_document, expect_mapping

LOGGER = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


class SmigCommandError(MovingImagesError, RuntimeError):
    """`smig` exited non-zero. `output` is the tool's message, untouched."""

    def __init__(self, operation: str, exit_status: int, output: str) -> None:
        super().__init__(f"{operation} failed with exit status {exit_status}: {output.strip()}")
        self.operation = operation
        self.exit_status = exit_status
        self.output = output


class SmigTimeoutError(SmigCommandError):
    pass


class SmigUnavailableError(SmigCommandError):
    pass


@dataclass(frozen=True)
class SmigResult:
    output: str
    exit_status: int = 0
    saveresultstype: str | None = None
    saveresultsto: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0

    def as_json(self) -> Any:
        try:
            return json.loads(self.output)
        except json.JSONDecodeError as exc:
            raise ValueError(f"smig output is not JSON: {self.output!r}") from exc

    def as_int(self) -> int:
        try:
            return int(self.output.strip())
        except ValueError as exc:
            raise ValueError(f"smig output is not an integer: {self.output!r}") from exc

    def load_saved_results(self) -> Any:
        if self.saveresultsto is None or self.saveresultstype is None:
            raise ValueError("commands were not configured to save results to a file")
        path = Path(self.saveresultsto).expanduser()
        kind = SaveResultsType(self.saveresultstype)
        if kind == SaveResultsType.JSON_FILE:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        if kind == SaveResultsType.PROPERTY_FILE:
            with path.open("rb") as f:
                return plistlib.load(f)
        raise ValueError(f"saveresultstype {kind.value} does not write a file")


def serialize_commands(document: Any) -> str:
    """Compact JSON with insertion-ordered keys; builders left inside are expanded."""
    try:
        return json.dumps(document, separators=(",", ":"), allow_nan=False, default=_encode_document_source)
    except (TypeError, ValueError) as exc:
        raise DocumentValidationError(f"commands are not serializable: {exc}") from exc


def _encode_document_source(value: Any) -> Any:
    if isinstance(value, DocumentSource):
        return value.to_document()
    raise TypeError(f"object of type {type(value).__name__} is not a renderer document")


class SmigClient:
    """Runs command documents through the `smig` command line tool."""

    def __init__(self, config: SmigConfig | None = None, *, runner: Runner | None = None) -> None:
        self._config = config if config is not None else load_smig_config()
        self._runner: Runner = runner if runner is not None else subprocess.run

    @property
    def config(self) -> SmigConfig:
        return self._config

    def perform_commands(self, commands: CommandList | dict[str, Any]) -> SmigResult:
        result = self._perform(commands)
        if not result.succeeded:
            raise SmigCommandError("performcommand", result.exit_status, result.output)
        return result

    def perform_commands_nothrow(self, commands: CommandList | dict[str, Any]) -> SmigResult:
        result = self._perform(commands)
        if not result.succeeded:
            LOGGER.warning("smig performcommand exited %s: %s", result.exit_status, result.output.strip())
        return result

    def perform_command(self, command: Any) -> SmigResult:
        return self.perform_commands({"commands": [as_document(command)]})

    def get_classtypeproperty(self, objecttype: str, property: str) -> str:
        argv = [self._config.executable, "getproperty", "-type", str(objecttype), "-property", str(property)]
        return self._run_checked(argv, f"getproperty {objecttype}.{property}")

    def get_property(self, property: str) -> str:
        argv = [self._config.executable, "getproperty", "-property", str(property)]
        return self._run_checked(argv, f"getproperty {property}")

    def set_property(self, property: str, value: Any) -> str:
        argv = [self._config.executable, "setproperty", "-property", str(property), str(value)]
        return self._run_checked(argv, f"setproperty {property}")

    def _perform(self, commands: CommandList | dict[str, Any]) -> SmigResult:
        if isinstance(commands, CommandList):
            document = commands.to_document()
        else:
            document = dict(expect_mapping(as_document(commands), "commands"))
            require_results_destination(document)
        payload = serialize_commands(document)
        # Sealed only once the payload exists.
        if isinstance(commands, CommandList):
            commands.seal()
        if document.get("runasynchronously"):
            LOGGER.info("smig will run commands asynchronously; results are not observable here")
        if len(payload.encode("utf-8")) > self._config.jsonfile_threshold:
            completed = self._perform_via_jsonfile(payload)
        else:
            completed = self._invoke([self._config.executable, "performcommand", "-jsonstring", payload], "performcommand")
        return SmigResult(
            output=_combined_output(completed),
            exit_status=completed.returncode,
            saveresultstype=document.get("saveresultstype"),
            saveresultsto=document.get("saveresultsto"),
        )

    def _perform_via_jsonfile(self, payload: str) -> subprocess.CompletedProcess[str]:
        with tempfile.NamedTemporaryFile("w", suffix=".json", encoding="utf-8", delete=False) as f:
            f.write(payload)
            json_path = f.name
        LOGGER.debug("wrote %s byte command document to %s", len(payload), json_path)
        try:
            return self._invoke([self._config.executable, "performcommand", "-jsonfile", json_path], "performcommand")
        finally:
            os.unlink(json_path)

    def _run_checked(self, argv: list[str], operation: str) -> str:
        completed = self._invoke(argv, operation)
        output = _combined_output(completed)
        if completed.returncode != 0:
            raise SmigCommandError(operation, completed.returncode, output)
        return output.strip()

    def _invoke(self, argv: list[str], operation: str) -> subprocess.CompletedProcess[str]:
        LOGGER.info("running smig %s", operation)
        try:
            return self._runner(argv, capture_output=True, text=True, timeout=self._config.timeout_s)
        except FileNotFoundError as exc:
            raise SmigUnavailableError(operation, 127, f"smig executable not found: {argv[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise SmigTimeoutError(operation, -1, f"timed out after {exc.timeout}s") from exc


def _combined_output(completed: subprocess.CompletedProcess[str]) -> str:
    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    if completed.returncode == 0:
        return stdout
    return stdout + stderr
