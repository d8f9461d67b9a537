"""
Bounded browser console capture.
"""
from __future__ import annotations
from playwright.sync_api import ConsoleMessage, Page
from typing import List, Optional, Sequence
import logging

# Console lines worth surfacing while media is negotiated
MEDIA_KEYWORDS = (
    "getUserMedia",
    "RTCPeerConnection",
    "mediaDevices",
    "audio track",
    "packetsSent",
    "packetsReceived",
)


class ConsoleSampler:
    """
    Logs at most `max_messages` browser console messages, then detaches.

    Messages are only logged; nothing here feeds back into step outcomes.
    """

    def __init__(
        self,
        page: Page,
        log: logging.LoggerAdapter,
        max_messages: int,
        keywords: Optional[Sequence[str]] = None,
        label: str = "Browser Console",
    ):
        self.page = page
        self.log = log
        self.max_messages = max_messages
        self.keywords = tuple(keywords or ())
        self.label = label
        self.messages: List[str] = []
        self.active = False

    @property
    def count(self) -> int:
        return len(self.messages)

    @property
    def done(self) -> bool:
        return self.count >= self.max_messages

    def attach(self) -> "ConsoleSampler":
        if not self.active and not self.done:
            self.page.on("console", self._on_console)
            self.active = True
        return self

    def detach(self) -> None:
        if self.active:
            self.page.remove_listener("console", self._on_console)
            self.active = False

    def _on_console(self, msg: ConsoleMessage) -> None:
        if self.done:
            self.detach()
            return

        text = msg.text
        if self.keywords and not any(keyword in text for keyword in self.keywords):
            return

        self.messages.append(text)
        self.log.info(f"[{self.label} {self.count}/{self.max_messages}] {msg.type}: {text}")

        if self.done:
            self.detach()
            self.log.info(f"Reached max {self.label.lower()} logs ({self.max_messages}), removing listener")
