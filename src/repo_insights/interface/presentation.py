"""HTML presentation of repository insights.

Turns a :class:`RepoInsights` into a small view model (relative contributor
bars, the latest commits, the most recent days of the histogram) and renders
it as a single self-contained page.  All display-only decisions (ordering,
truncation, labels) live here; the aggregator stays order-agnostic.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import date, datetime, timezone

from repo_insights.domain.entities import (
    CommitEntry,
    DailyFrequencyEntry,
    RepoInsights,
    RepositorySummary,
)

DEFAULT_REPO_URL = "https://github.com/vercel/vercel"

RECENT_COMMITS_SHOWN = 10
MESSAGE_PREVIEW_CHARS = 60
FREQUENCY_DAYS_SHOWN = 12
UNKNOWN_ACCOUNT = "unknown account"


# ── View model ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ContributorBar:
    login: str
    avatar_url: str
    contributions: int
    percent: int  # relative to the top contributor


@dataclass(frozen=True, slots=True)
class CommitLine:
    sha: str
    author_name: str
    account: str
    summary: str
    when: str


@dataclass(frozen=True, slots=True)
class InsightsView:
    repository: RepositorySummary
    contributors: list[ContributorBar]
    recent_commits: list[CommitLine]
    daily_commits: list[DailyFrequencyEntry]
    commits_sampled: int


def build_view(insights: RepoInsights) -> InsightsView:
    """Shape aggregated insights for display."""
    top = insights.contributors[0].contributions if insights.contributors else 0
    bars = [
        ContributorBar(
            login=c.login,
            avatar_url=c.avatar_url,
            contributions=c.contributions,
            percent=round(100 * c.contributions / top) if top > 0 else 0,
        )
        for c in insights.contributors
    ]
    return InsightsView(
        repository=insights.repository,
        contributors=bars,
        recent_commits=[
            _commit_line(c) for c in insights.commits[:RECENT_COMMITS_SHOWN]
        ],
        daily_commits=most_recent_days(insights.commit_frequency),
        commits_sampled=len(insights.commits),
    )


def most_recent_days(
    frequency: list[DailyFrequencyEntry], limit: int = FREQUENCY_DAYS_SHOWN
) -> list[DailyFrequencyEntry]:
    """Newest day first, at most *limit* entries."""
    ordered = sorted(frequency, key=lambda e: date.fromisoformat(e.day), reverse=True)
    return ordered[:limit]


def _commit_line(commit: CommitEntry) -> CommitLine:
    return CommitLine(
        sha=commit.sha,
        author_name=commit.author_name,
        account=commit.author.login if commit.author else UNKNOWN_ACCOUNT,
        summary=commit.summary[:MESSAGE_PREVIEW_CHARS],
        when=_format_timestamp(commit.authored_at),
    )


def _format_timestamp(timestamp: str | None) -> str:
    if not timestamp:
        return "unknown date"
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


# ── Rendering ───────────────────────────────────────────────────────────────

_STYLE = """
body { max-width: 700px; margin: 2rem auto; padding: 24px; font-family: sans-serif; }
form { margin-bottom: 24px; }
form input { width: 400px; padding: 8px; margin-right: 8px; }
.error { color: red; margin-bottom: 16px; }
.card { border: 1px solid #eee; border-radius: 8px; padding: 16px; margin-bottom: 24px; }
.row { display: flex; align-items: center; gap: 16px; flex-wrap: wrap; }
.avatar { border-radius: 50%; }
.bar { background: #eee; height: 8px; border-radius: 4px; }
.bar span { display: block; background: #2da44e; height: 8px; border-radius: 4px; }
.muted { font-size: 12px; color: #555; }
"""


def _e(value: object) -> str:
    return html.escape(str(value), quote=True)


def render_page(
    repo_url: str = DEFAULT_REPO_URL,
    view: InsightsView | None = None,
    error: str | None = None,
) -> str:
    """Render the full page: URL form, then either an error or the insights."""
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        "<title>GitHub Repository Insights</title>",
        f"<style>{_STYLE}</style></head><body>",
        "<h1>GitHub Repository Insights</h1>",
        '<form method="get" action="/">',
        f'<input type="text" name="repo_url" value="{_e(repo_url)}" required '
        'placeholder="Enter GitHub repo URL (e.g. https://github.com/vercel/next.js)">',
        '<button type="submit">Fetch Insights</button>',
        "</form>",
    ]
    if error:
        parts.append(f'<div class="error">{_e(error)}</div>')
    if view is not None:
        parts.append(_render_repository(view.repository))
        parts.append(_render_contributors(view.contributors))
        parts.append(_render_commits(view))
    parts.append("</body></html>")
    return "\n".join(parts)


def _render_repository(repo: RepositorySummary) -> str:
    return (
        '<div class="card">'
        f"<h2>{_e(repo.full_name)}</h2>"
        f"<p>{_e(repo.description or '')}</p>"
        '<div class="row">'
        f'<img class="avatar" src="{_e(repo.owner.avatar_url)}" alt="Owner avatar" width="48" height="48">'
        f"<div><strong>Owner:</strong> {_e(repo.owner.login)}</div>"
        f"<div>Stars: {repo.stargazers_count}</div>"
        f"<div>Forks: {repo.forks_count}</div>"
        f"<div>Open Issues: {repo.open_issues_count}</div>"
        "</div></div>"
    )


def _render_contributors(bars: list[ContributorBar]) -> str:
    if not bars:
        return ""
    items = "".join(
        '<div class="card">'
        f'<img class="avatar" src="{_e(b.avatar_url)}" alt="{_e(b.login)}" width="32" height="32">'
        f"<div>{_e(b.login)}</div>"
        f'<div class="muted">{b.contributions} commits</div>'
        f'<div class="bar"><span style="width: {b.percent}%"></span></div>'
        "</div>"
        for b in bars
    )
    return f'<div><h3>Top Contributors</h3><div class="row">{items}</div></div>'


def _render_commits(view: InsightsView) -> str:
    if not view.recent_commits:
        return ""
    commits = "".join(
        "<li>"
        f"<strong>{_e(c.author_name)}</strong> ({_e(c.account)}): {_e(c.summary)}"
        f'<div class="muted">{_e(c.when)}</div>'
        "</li>"
        for c in view.recent_commits
    )
    days = "".join(
        f"<li>{_e(d.day)}: {d.count} commits</li>" for d in view.daily_commits
    )
    return (
        "<div><h3>Recent Commits</h3>"
        f"<ul>{commits}</ul>"
        "<h4>Commit Frequency (per day)</h4>"
        f'<p class="muted">Based on the latest {view.commits_sampled} commits.</p>'
        f"<ul>{days}</ul></div>"
    )
