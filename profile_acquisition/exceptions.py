"""Exception hierarchy for the profile acquisition pipeline.

All errors derive from :class:`ProfileAcquisitionError` so that callers can
catch everything raised by the pipeline at a single boundary.  The scraper
itself never lets these escape ``get_profile``; they are raised internally to
separate the failure branches and are converted to ``None`` once logged.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class ProfileAcquisitionError(Exception):
    """Base exception for all profile acquisition errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class NetworkFailure(ProfileAcquisitionError):
    """The profile page could not be fetched.

    Covers DNS and connection errors, timeouts, redirect loops and any
    non-2xx response.  ``status_code`` and ``headers`` are populated when a
    response was received.
    """

    def __init__(
        self,
        identifier: str,
        reason: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.identifier = identifier
        self.reason = reason
        self.status_code = status_code
        self.url = url
        self.headers = dict(headers) if headers else {}

        context: Dict[str, Any] = {"identifier": identifier}
        if status_code is not None:
            context["status"] = status_code
        if url:
            context["url"] = url
        super().__init__(f"Network failure fetching profile: {reason}", context)


class ExtractionFailure(ProfileAcquisitionError):
    """Every extraction tier was exhausted without a complete result."""

    def __init__(self, identifier: str, reason: str = "no extraction tier matched") -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"Could not extract profile data: {reason}", {"identifier": identifier})


class ConfigurationError(ProfileAcquisitionError):
    """A configuration value is missing or invalid."""

    def __init__(self, setting: str, value: Any, reason: str) -> None:
        self.setting = setting
        self.value = value
        super().__init__(f"Invalid value for {setting}: {reason}", {"value": value})
