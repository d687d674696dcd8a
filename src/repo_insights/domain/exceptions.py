"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoInsightsError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(RepoInsightsError):
    """A required setting (the GitHub token) is missing."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryUrlError(RepoInsightsError):
    """The supplied string does not point to a GitHub repository."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubRateLimitError(RepoInsightsError):
    """GitHub API rate limit exceeded (403 with rate-limit message / 429)."""


class UpstreamError(RepoInsightsError):
    """Any other failure reported by (or while talking to) the GitHub API.

    ``status_code`` is the upstream HTTP status, or ``None`` when the request
    never produced a response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ── Data shape ──────────────────────────────────────────────────────────────


class MalformedCommitError(RepoInsightsError):
    """A commit record has no usable authored timestamp."""
