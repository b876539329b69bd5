"""Annotates chat messages in a host page with scam warnings.

The host environment (a browser page, a test double, ...) exposes the
element-level capabilities through ``MessageHost``. The annotator only
decides what to classify and what to flag; it never touches the page
directly. An innocent element is marked checked on its own, so other
elements of the same bubble are still classified. A suspicious element
locks its whole bubble: the bubble is marked checked before it is flagged,
and nothing in a checked bubble is classified again."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Protocol

from app.advice import build_advice
from app.detector import ScamClassifier, Verdict, classifier as default_classifier

logger = logging.getLogger(__name__)

BANNER_TEXT: str = "Scam Guard is active on this page"
BANNER_TIMEOUT_SECONDS: int = 5


@dataclass
class WarningNotice:
    """Content of the warning attached to a flagged bubble."""
    title: str
    reasons_line: Optional[str] = None
    advice: List[str] = field(default_factory=list)


class MessageHost(Protocol):
    """Capabilities the page exposes to the annotator."""

    def find_message_elements(self, root: Any) -> Iterable[Any]: ...

    def text_of(self, element: Any) -> str: ...

    def bubble_of(self, element: Any) -> Optional[Any]: ...

    def is_checked(self, ref: Any) -> bool: ...

    def mark_checked(self, ref: Any) -> None: ...

    def flag(self, bubble: Any, notice: WarningNotice) -> None: ...

    def has_banner(self) -> bool: ...

    def show_banner(self, text: str, timeout_seconds: int) -> None: ...


def build_warning(verdict: Verdict, scorer: ScamClassifier = default_classifier) -> WarningNotice:
    """Build the warning shown for a suspicious verdict."""
    reasons_line = None
    if verdict.reasons:
        reasons_line = "Suspicious because: " + ", ".join(verdict.reasons)

    return WarningNotice(
        title=f"Scam Guard: {scorer.risk_label(verdict.score)} message",
        reasons_line=reasons_line,
        advice=build_advice(verdict.reasons),
    )


class MessageAnnotator:
    """Classifies message elements found by the host and flags suspicious ones."""

    def __init__(self, host: MessageHost, scorer: ScamClassifier = default_classifier) -> None:
        self.host = host
        self.scorer = scorer

    def start(self, root: Any) -> int:
        """Show the activation banner and scan messages already on the page."""
        try:
            self.show_active_banner()
            return self.scan(root)
        except Exception as exc:
            logger.error(f"Scam Guard init error: {exc}", exc_info=True)
            return 0

    def show_active_banner(self) -> None:
        if self.host.has_banner():
            return
        self.host.show_banner(BANNER_TEXT, BANNER_TIMEOUT_SECONDS)

    def scan(self, root: Any) -> int:
        """Process every message element under ``root``. Returns flagged count."""
        flagged = 0
        for element in self.host.find_message_elements(root):
            if self.process(element):
                flagged += 1
        return flagged

    def handle_added(self, nodes: Iterable[Any]) -> int:
        """Process the message elements under each node of a mutation batch."""
        return sum(self.scan(node) for node in nodes)

    def process(self, element: Any) -> bool:
        """Classify one element and flag its bubble if suspicious. Returns True if flagged."""
        text = self.host.text_of(element) or ""
        if not text.strip():
            return False

        bubble = self.host.bubble_of(element)
        if bubble is None or self.host.is_checked(bubble) or self.host.is_checked(element):
            return False

        verdict = self.scorer.classify(text)
        if not verdict.suspicious:
            self.host.mark_checked(element)
            return False

        self.host.mark_checked(bubble)

        logger.debug(f"Flagging message score={verdict.score} reasons={verdict.reasons}")
        self.host.flag(bubble, build_warning(verdict, self.scorer))
        return True
