"""Safety advice shown next to a flagged message."""

from typing import Iterable, List, Tuple


BASE_ADVICE: Tuple[str, ...] = (
    "Do not share OTPs, passwords, PINs, or card details.",
    "Do not click on suspicious links or download unknown attachments.",
    "Do not send money, gift cards, or crypto to unknown people.",
    "Verify requests through official channels (bank app, company website, phone number from their official site).",
    "If unsure, ignore the message and do not reply.",
)

# (keywords, tip) — first group whose keyword appears in a reason wins
TARGETED_ADVICE: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("otp", "password", "pin"),
     "Legitimate companies and banks will never ask for OTPs or full passwords over chat."),
    (("won", "lottery", "prize"),
     "Random messages telling you that you won money or prizes are almost always scams."),
    (("send money", "gift card", "bitcoin", "crypto"),
     "Never send money or gift cards to someone you only know through chat."),
    (("url shortener",),
     "Shortened links can hide the real website; open them only if you fully trust the sender."),
)


def build_advice(reasons: Iterable[str]) -> List[str]:
    """Baseline tips followed by at most one targeted tip per reason, de-duplicated."""
    extra: List[str] = []
    for reason in reasons:
        for keywords, tip in TARGETED_ADVICE:
            if any(keyword in reason for keyword in keywords):
                extra.append(tip)
                break

    return list(dict.fromkeys([*BASE_ADVICE, *extra]))
