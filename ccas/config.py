"""
Workload configuration loading and parameter resolution.

Every parameter is resolved the same way: a non-empty environment variable
wins, then the value from the workload file, then the built-in default.
"""
from __future__ import annotations
from pydantic import BaseModel
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union
import json
import logging
import math
import os

logger = logging.getLogger(__name__)

# Numeric parameters (milliseconds) and their fallbacks
DEFAULT_NUMBERS = {
    "loginWaitTimeout": 30000,
    "webrtcGatewayTimeout": 10000,
    "ccasTimeout": 50000,
    "AgentWaitTime": 100000,
    "callWaitTime": 40000,
    "defaultTimeout": 3000,
    "transcriptWaitTime": 40000,
    "callConnectTimeout": 15000,
    "sippStartDelay": 5000,
    "consoleSampleWindow": 5000,
}

DEFAULT_PHONE_NUMBER = "+12083303355"
DEFAULT_BROWSER_CHANNEL = "chrome"
FALSE_VALUES = {"", "0", "false", "no", "off"}


class ScriptEntry(BaseModel):
    arguments: Dict[str, Any] = {}

    class Config:
        extra = "allow"


class TaskEntry(BaseModel):
    scripts: List[ScriptEntry] = []

    class Config:
        extra = "allow"


class WorkloadFile(BaseModel):
    """Shape of a workload metadata file. Only the first script is read."""

    tasks: List[TaskEntry] = []

    class Config:
        extra = "allow"

    def arguments(self) -> Dict[str, Any]:
        if not self.tasks or not self.tasks[0].scripts:
            return {}
        return dict(self.tasks[0].scripts[0].arguments)


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def to_number(value: Any) -> Optional[Union[int, float]]:
    """
    Coerce a raw parameter value to a number.

    Args:
        value: Environment string or JSON value

    Returns:
        int for integral values, float otherwise, None if not a number
    """
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    if number.is_integer():
        return int(number)
    return number


class WorkloadConfig:
    """
    Resolved view over workload arguments and the process environment.

    The environment mapping is consulted on every read, so variables set after
    construction still take effect.
    """

    def __init__(
        self,
        arguments: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        source: Optional[Path] = None,
    ):
        self.arguments = dict(arguments or {})
        self.environ = os.environ if environ is None else environ
        self.source = source

    @classmethod
    def from_file(cls, path: Union[str, Path], environ: Optional[Mapping[str, str]] = None) -> "WorkloadConfig":
        """
        Load workload arguments from a workload metadata JSON file.

        Args:
            path: Path to the workload file
            environ: Environment mapping (defaults to os.environ)

        Returns:
            WorkloadConfig for tasks[0].scripts[0].arguments
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)

        workload = WorkloadFile(**raw)
        arguments = workload.arguments()
        logger.info(f"Loaded {len(arguments)} workload arguments from {path}")
        return cls(arguments, environ=environ, source=path)

    def get(self, key: str, default: Any = None) -> Any:
        env_value = self.environ.get(key)
        if _is_set(env_value):
            return env_value

        value = self.arguments.get(key)
        if _is_set(value):
            return value

        return default

    def get_number(self, key: str, default: Optional[Union[int, float]] = None) -> Union[int, float]:
        """Numeric parameter; non-numeric overrides fall through to the next source."""
        if default is None:
            default = DEFAULT_NUMBERS.get(key, 0)

        for value in (self.environ.get(key), self.arguments.get(key)):
            if not _is_set(value):
                continue
            number = to_number(value)
            if number is not None:
                return number
            logger.warning(f"Ignoring non-numeric value for {key}: {value!r}")

        return default

    def get_flag(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() not in FALSE_VALUES

    @property
    def username(self) -> Optional[str]:
        return self.get("username")

    @property
    def password(self) -> Optional[str]:
        return self.get("password")

    @property
    def queue_name(self) -> Optional[str]:
        return self.get("queueName")

    @property
    def server(self) -> Optional[str]:
        return self.get("server")

    @property
    def app(self) -> Optional[str]:
        return self.get("app")

    @property
    def aura_mode(self) -> Optional[str]:
        return self.get("auraMode")

    @property
    def webrtc_gateway_url(self) -> Optional[str]:
        return self.get("webrtcGatewayUrl")

    @property
    def phone_number(self) -> str:
        return str(self.get("phoneNumber", DEFAULT_PHONE_NUMBER))

    @property
    def audio_file(self) -> Optional[str]:
        return self.get("audioFile")

    @property
    def screenshots_enabled(self) -> bool:
        return self.get_flag("screenshot")

    @property
    def strict_checks(self) -> bool:
        return self.get_flag("strictChecks")


def load_workload(default_path: Union[str, Path], environ: Optional[Mapping[str, str]] = None) -> WorkloadConfig:
    """
    Load the workload file, honouring a `workloadFile` override.

    A missing file is not fatal: parameters then come from the environment.
    """
    env = os.environ if environ is None else environ
    path = Path(env.get("workloadFile") or default_path)

    if not path.exists():
        logger.warning(f"Workload file not found: {path} - using environment only")
        return WorkloadConfig(environ=environ, source=path)

    return WorkloadConfig.from_file(path, environ=environ)
