"""
Logging helpers shared by the scenarios.
"""
from __future__ import annotations
from typing import Optional
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AgentLogger(logging.LoggerAdapter):
    """Prefixes every record with the scenario label and the agent identity."""

    def __init__(
        self,
        logger: logging.Logger,
        username: Optional[str] = None,
        queue_name: Optional[str] = None,
        label: str = "CCAS",
    ):
        super().__init__(logger, {"username": username, "queue_name": queue_name})
        self.label = label

    def process(self, msg, kwargs):
        agent = " ".join(str(part) for part in (self.extra["username"], self.extra["queue_name"]) if part)
        if agent:
            return f"[{self.label}] Agent {agent} : {msg}", kwargs
        return f"[{self.label}] {msg}", kwargs


def get_agent_logger(
    name: str,
    username: Optional[str] = None,
    queue_name: Optional[str] = None,
    label: str = "CCAS",
) -> AgentLogger:
    return AgentLogger(logging.getLogger(name), username, queue_name, label)
