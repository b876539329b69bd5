"""
Keyword/pattern scam classifier for chat messages.

Scores a message against a fixed rule table, a money-amount pattern and a
list of URL shorteners. Score >= 3 marks the message suspicious. The
classifier is a pure function of its input: no I/O, no per-call state.
"""

import re
from dataclasses import dataclass, field
from typing import List, Tuple
from urllib.parse import urlsplit


@dataclass(frozen=True)
class Rule:
    """Named group of trigger phrases sharing one score weight."""
    id: str
    phrases: Tuple[str, ...]
    score: int


@dataclass
class Verdict:
    """Result of classifying one message."""
    suspicious: bool = False
    reasons: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)
    score: int = 0


DETECTION_RULES: Tuple[Rule, ...] = (
    Rule("otp_request",     ("otp", "one time password", "verification code", "verification otp"), 4),
    Rule("bank_details",    ("bank account", "account number", "ifsc", "iban"),                     4),
    Rule("card_details",    ("cvv", "pin code", "card number", "debit card", "credit card"),         5),
    Rule("prize_lottery",   ("you have won", "congratulations you won", "lottery winner", "prize money"), 4),
    Rule("urgent_action",   ("urgent action", "limited time", "act now", "immediately", "within 5 minutes"), 2),
    Rule("money_request",   ("send money", "wire money", "transfer money", "pay the fee"),          4),
    Rule("giftcard_crypto", ("gift card", "google play card", "itunes card", "bitcoin", "crypto"),  4),
    Rule("investment",      ("investment opportunity", "double your money", "guaranteed returns"), 3),
    Rule("inheritance",     ("inheritance", "foreign fund", "unclaimed funds"),                     3),
    Rule("keep_secret",     ("do not tell anyone", "keep this confidential"),                       3),
    Rule("account_verify",  ("verify your account", "confirm your identity", "kyc update"),         3),
)


class ScamClassifier:
    """
    Scores a single message. Each rule counts at most once, the money
    pattern adds a fixed bonus, and every shortener link adds its own bonus.
    """

    SUSPICIOUS_THRESHOLD: int = 3
    HIGH_RISK_THRESHOLD: int = 7
    MEDIUM_RISK_CEILING: int = 5

    # Word codes need a leading word boundary; currency symbols don't
    MONEY_PATTERN = re.compile(
        r'(?:\b(?:rs\.?|inr|usd|eur|rupees|dollars?)|[₹$£])\s?\d{3,}'
        r'|\d{3,}\s?(?:rs\.?|inr|eur|[₹$£])',
        re.IGNORECASE | re.ASCII,
    )
    MONEY_REASON: str = "large money amount mentioned"
    MONEY_SCORE: int = 3

    URL_PATTERN = re.compile(r'https?://\S+', re.IGNORECASE)

    SUSPICIOUS_SHORTENERS: Tuple[str, ...] = (
        "bit.ly", "tinyurl.com", "goo.gl", "ow.ly", "t.co",
    )
    SHORTENER_SCORE: int = 3

    def __init__(self, rules: Tuple[Rule, ...] = DETECTION_RULES) -> None:
        self.rules = rules

    def classify(self, text: str) -> Verdict:
        """Score ``text`` and return a Verdict with its supporting reasons."""
        lowered = text.lower()
        reasons: List[str] = []
        score = 0

        for rule in self.rules:
            for phrase in rule.phrases:
                if phrase in lowered:
                    reasons.append(phrase)
                    score += rule.score
                    break

        if self.MONEY_PATTERN.search(text):
            reasons.append(self.MONEY_REASON)
            score += self.MONEY_SCORE

        urls = self.URL_PATTERN.findall(text)
        for url in urls:
            host = self._hostname(url)
            if not host:
                continue
            for shortener in self.SUSPICIOUS_SHORTENERS:
                if host == shortener or host.endswith("." + shortener):
                    reasons.append(f"link via url shortener ({shortener})")
                    score += self.SHORTENER_SCORE

        return Verdict(
            suspicious=score >= self.SUSPICIOUS_THRESHOLD,
            reasons=list(dict.fromkeys(reasons)),
            urls=urls,
            score=score,
        )

    def risk_label(self, score: int) -> str:
        """Map a score to the label shown on a warning."""
        label = "medium risk"
        if score >= self.HIGH_RISK_THRESHOLD:
            label = "high risk"
        elif score < self.MEDIUM_RISK_CEILING:
            label = "medium risk"
        return label

    @staticmethod
    def _hostname(url: str) -> str:
        """Lower-cased hostname, or "" when the URL cannot be parsed."""
        try:
            parts = urlsplit(url)
            # out-of-range or non-numeric ports raise here
            parts.port
            return parts.hostname or ""
        except ValueError:
            return ""


# Module-level singleton
classifier = ScamClassifier()
