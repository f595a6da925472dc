"""DTOs for like/view engagement."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LikeToggleResult:
    """State after a like toggle: post like counter and whether the caller now likes it."""

    likes: int
    liked: bool
