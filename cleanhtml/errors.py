"""
SPDX-License-Identifier: LicenseRef-NonCommercial-Only
© 2025 github.com/defmon3 — Non-commercial use only. Commercial use requires permission.

errors.py – configuration-time failures.
"""

CLEAN_CONTENT_OVERLAP = "clean-content-overlap"
CLASS_AUTHORITY = "class-authority"
REL_AUTHORITY = "rel-authority"
MALFORMED = "malformed"


class PolicyConflict(ValueError):
    """
    Raised when a policy cannot be built.

    :param invariant: Which construction rule was violated, one of
        ``clean-content-overlap``, ``class-authority``, ``rel-authority`` or
        ``malformed``.
    :param message: Human readable description naming the offending item.
    """

    def __init__(self, invariant: str, message: str) -> None:
        super().__init__(message)
        self.invariant = invariant

    def __str__(self) -> str:
        return f"[{self.invariant}] {self.args[0]}"
