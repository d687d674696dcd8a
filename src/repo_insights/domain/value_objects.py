"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_insights.domain.exceptions import InvalidRepositoryUrlError

_GITHUB_URL_RE = re.compile(
    r"(?:^|[/@.])github\.com/(?P<owner>[^/?#\s]+)/(?P<repo>[^/?#\s]+)(?:[/?#]|$)",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """Owner / repo pair resolved from a GitHub repository URL.

    Accepts anything shaped like ``.../github.com/<owner>/<repo>[/...]``, e.g.
    ``https://github.com/psf/requests/tree/main?tab=readme``.  Extra path
    segments, query strings and a trailing ``.git`` are ignored.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.search(url)
        repo = match["repo"].removesuffix(".git") if match else ""
        if not match or not repo:
            raise InvalidRepositoryUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        return cls(owner=match["owner"], repo=repo, raw=url)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"
