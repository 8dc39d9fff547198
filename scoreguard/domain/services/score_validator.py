"""Plausibility check for client-reported scores

The server never observes gameplay, so it can only bound the fastest
legitimate rate of progress and reject results beyond it. Cheaters who
stay under the cap are not detected.
"""

from scoreguard.domain.results import Accepted, EndGameResult, Rejected, RejectionReason
from scoreguard.domain.value_objects.validation_policy import ValidationPolicy


def validate_result(
    elapsed_seconds: float, claimed_score: int, policy: ValidationPolicy
) -> EndGameResult:
    """Accept or reject a claimed score given server-measured elapsed time"""
    if elapsed_seconds < policy.min_game_time:
        return Rejected(RejectionReason.TOO_SHORT)

    if claimed_score > policy.max_score_for(elapsed_seconds):
        return Rejected(RejectionReason.IMPLAUSIBLE_RATE)

    return Accepted(score=claimed_score, elapsed_seconds=elapsed_seconds)
