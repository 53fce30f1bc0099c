from __future__ import annotations

"""Verdict text shown with a finished quiz's score."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Verdict:
    stars: int
    title: str
    message: str


# Keyed by score out of five.
_TIERS = {
    0: ("It happens!", "Don't give up. Start again and surprise yourself!"),
    1: ("Tough question?", "Some days just aren't your day. The next attempt will be better!"),
    2: ("Room to improve", "Don't be discouraged, give it another try!"),
    3: ("Good result!", "You're on the right track. Keep practising!"),
    4: ("Almost perfect", "So close to perfection. One more step!"),
    5: ("Perfect!", "You answered everything correctly. A brilliant result!"),
}

UNEXPECTED = Verdict(stars=0, title="Unexpected result!", message="Something went wrong.")


def stars_for(score: int, total: int) -> int:
    """Score scaled to a 0-5 star rating; -1 when the pair is out of range."""
    if total <= 0 or score < 0 or score > total:
        return -1
    if total == 5:
        return score
    return int(round(score * 5 / total))


def verdict(score: int, total: int) -> Verdict:
    stars = stars_for(score, total)
    if stars < 0:
        return UNEXPECTED
    title, tail = _TIERS[stars]
    return Verdict(stars=stars, title=title, message=f"{score}/{total} - {tail}")
