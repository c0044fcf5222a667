"""Exception types raised outside the pure targeting core."""

from __future__ import annotations


class TargetwiseError(Exception):
    """Base class for all targetwise errors."""


class BackendError(TargetwiseError):
    """The external backend failed or returned an unusable response."""

    def __init__(self, message: str, status_code: int | None = None, details: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        out: dict = {"error": str(self)}
        if self.status_code is not None:
            out["status_code"] = self.status_code
        if self.details:
            out["details"] = self.details
        return out


class CustomerDirectoryError(BackendError):
    """Fetching customers from the directory service failed."""


class CampaignGatewayError(BackendError):
    """Creating or sending a campaign failed."""


class SubmissionBlockedError(TargetwiseError):
    """A campaign cannot be submitted because its estimated cost is zero."""
