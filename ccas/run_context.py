"""
Per-run state: run identifier, screenshot output and check strictness.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from playwright.sync_api import Error as PlaywrightError, Page
from typing import Optional, Tuple
import os
import time

from ccas.config import WorkloadConfig
from ccas.errors import AutomationError, ErrorKind
from ccas.logs import AgentLogger, get_agent_logger

RESULTS_ROOT = Path("/results")


def make_run_id(username: Optional[str], pid: int, timestamp_ms: int) -> str:
    """
    Build the run identifier used to namespace screenshots.

    Args:
        username: Agent username (only the part before "@" is used)
        pid: Process id
        timestamp_ms: Epoch milliseconds

    Returns:
        String like "agent_4242_1700000000000"
    """
    username_part = (username or "unknown").split("@")[0]
    return f"{username_part}_{pid}_{timestamp_ms}"


@dataclass
class RunContext:
    run_id: str
    log: AgentLogger
    local_results_dir: Path
    screenshots: bool = False
    strict: bool = False
    results_root: Path = RESULTS_ROOT
    _screenshot_base: Optional[Tuple[Path, str]] = field(default=None, init=False, repr=False)

    @classmethod
    def create(
        cls,
        config: WorkloadConfig,
        local_results_dir: Path,
        label: str = "CCAS",
        pid: Optional[int] = None,
        timestamp_ms: Optional[int] = None,
        results_root: Path = RESULTS_ROOT,
    ) -> "RunContext":
        if pid is None:
            pid = os.getpid()
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)

        log = get_agent_logger(f"ccas.{label.lower().replace(' ', '_')}", config.username, config.queue_name, label)
        return cls(
            run_id=make_run_id(config.username, pid, timestamp_ms),
            log=log,
            local_results_dir=Path(local_results_dir),
            screenshots=config.screenshots_enabled,
            strict=config.strict_checks,
            results_root=Path(results_root),
        )

    def _resolve_screenshot_base(self) -> Tuple[Path, str]:
        """
        Pick the screenshot directory once per run.

        Returns:
            (directory, filename prefix)
        """
        local_dir = self.local_results_dir / self.run_id

        if not self.results_root.exists():
            try:
                self.results_root.mkdir(parents=True, exist_ok=True)
            except OSError:
                local_dir.mkdir(parents=True, exist_ok=True)
                return local_dir, ""

        if not os.access(self.results_root, os.W_OK):
            local_dir.mkdir(parents=True, exist_ok=True)
            return local_dir, ""

        run_dir = self.results_root / self.run_id
        if not run_dir.exists():
            try:
                run_dir.mkdir(parents=True, exist_ok=True)
            except OSError:
                return self.results_root, f"{self.run_id}_"

        return run_dir, ""

    def screenshot_path(self, name: str) -> Path:
        if self._screenshot_base is None:
            self._screenshot_base = self._resolve_screenshot_base()

        directory, prefix = self._screenshot_base
        filename = name if name.endswith(".png") else f"{name}.png"
        return directory / f"{prefix}{filename}"

    def capture(self, page: Page, name: str, force: bool = False) -> Optional[Path]:
        """
        Best-effort screenshot. Skipped unless screenshots are enabled.

        Returns:
            Path written, or None
        """
        if not (self.screenshots or force):
            return None

        try:
            path = self.screenshot_path(name)
            page.screenshot(path=str(path))
        except (PlaywrightError, OSError) as e:
            self.log.warning(f"Screenshot {name} failed: {e}")
            return None
        return path

    def check(self, ok: bool, message: str) -> bool:
        """
        Report an optional verification.

        Lenient runs log a warning and continue; strict runs raise.
        """
        if ok:
            return True
        if self.strict:
            self.log.error(f"Check failed: {message}")
            raise AutomationError(ErrorKind.CHECK_FAILED, message)
        self.log.warning(f"{message}, continuing...")
        return False
