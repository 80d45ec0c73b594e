"""
Git Output Classification

Git reports most workflow states only through exit codes and free-form
output text. This module turns that text into outcomes using small ordered
rule tables (first match wins) and plain parsers, with no subprocess
involvement, so every rule can be tested against captured output.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from pickflow.services.git_executor import GitCommandResult


# ==================== CHERRY-PICK ====================


class CherryPickOutcome(str, Enum):
    """How a `git cherry-pick <hash>` invocation ended."""
    APPLIED = "applied"
    LOCAL_CHANGES = "local_changes"
    CONFLICT = "conflict"
    NOTHING_TO_COMMIT = "nothing_to_commit"
    FAILED = "failed"


@dataclass(frozen=True)
class OutputRule:
    """Maps any of several substrings in the chosen streams to an outcome."""

    outcome: CherryPickOutcome
    patterns: tuple[str, ...]
    streams: tuple[str, ...] = ("stderr",)
    ignore_case: bool = False

    def matches(self, result: GitCommandResult) -> bool:
        for stream in self.streams:
            text = getattr(result, stream)
            if self.ignore_case:
                text = text.lower()
            if any(pattern in text for pattern in self.patterns):
                return True
        return False


# Dirty-tree refusals across git versions; matched lowercased
LOCAL_CHANGES_MARKERS = (
    "your local changes to the following files would be overwritten",
    "your local changes would be overwritten",
    "untracked working tree files would be overwritten",
)

# Applied in order to a failed cherry-pick.
CHERRY_PICK_RULES: tuple[OutputRule, ...] = (
    OutputRule(CherryPickOutcome.LOCAL_CHANGES, LOCAL_CHANGES_MARKERS, ignore_case=True),
    OutputRule(
        CherryPickOutcome.CONFLICT,
        ("CONFLICT", "could not apply", "cherry-pick --continue"),
    ),
    OutputRule(
        CherryPickOutcome.NOTHING_TO_COMMIT,
        ("nothing to commit",),
        streams=("stderr", "stdout"),
    ),
)


def classify_cherry_pick(result: GitCommandResult) -> CherryPickOutcome:
    """Classify a cherry-pick result. A zero exit is always APPLIED."""
    if result.success:
        return CherryPickOutcome.APPLIED
    for rule in CHERRY_PICK_RULES:
        if rule.matches(result):
            return rule.outcome
    return CherryPickOutcome.FAILED


_SUMMARY_RE = re.compile(r"\[.*?\]\s*(.+)")
_DATE_RE = re.compile(r"Date:\s*(.+)")


def parse_cherry_pick_summary(stdout: str) -> tuple[str, str]:
    """
    Extract subject and author date from cherry-pick stdout.

    `[feature/x abc1234] Fix bug` yields "Fix bug"; a ` Date: ...` line,
    present when the author date differs from now, yields the date.
    Missing parts come back as empty strings.
    """
    summary = _SUMMARY_RE.search(stdout)
    date = _DATE_RE.search(stdout)
    return (
        summary.group(1).strip() if summary else "",
        date.group(1).strip() if date else "",
    )


# `git log --format=<LOG_SUBJECT_DATE_FORMAT> -1 <hash>`
LOG_SUBJECT_DATE_FORMAT = "%s|%ci"


def parse_subject_and_date(stdout: str) -> tuple[str, str]:
    """Split `subject|date` output; the date never contains a pipe."""
    if not stdout:
        return "", ""
    subject, sep, date = stdout.rpartition("|")
    if not sep:
        return stdout.strip(), ""
    return subject.strip(), date.strip()


# ==================== READ-ONLY LISTINGS ====================


def parse_oneline_log(stdout: str) -> list[dict[str, str]]:
    """Parse `git log --oneline` into hash/message pairs."""
    commits = []
    for line in stdout.splitlines():
        commit_hash, _, message = line.strip().partition(" ")
        if commit_hash:
            commits.append({"hash": commit_hash, "message": message})
    return commits


def parse_branches(stdout: str) -> list[str]:
    """Parse `git branch -a` into trimmed, non-empty lines."""
    return [line.strip() for line in stdout.splitlines() if line.strip()]


# ==================== PUSH ====================


UP_TO_DATE_MARKER = "Everything up-to-date"
TRACKING_MARKER = "set up to track"


def is_push_successful(result: GitCommandResult, remote_url: str = "") -> bool:
    """
    Decide whether `git push` really succeeded.

    Git writes its normal progress report to stderr, and some setups report
    errors on stderr with a zero exit, so a zero exit is necessary but not
    sufficient. Accepted stderr is: empty, the up-to-date notice, or output
    mentioning the origin URL (the `To <url>` report). Without a known URL
    the `.git` fragment stands in for it.
    """
    if not result.success:
        return False
    if not result.stderr:
        return True
    if UP_TO_DATE_MARKER in result.stderr:
        return True
    if (remote_url or ".git") in result.stderr:
        return True
    return TRACKING_MARKER in result.stdout


# ==================== CONFLICT STATUS ====================


CONFLICT_TAGS = (
    "both modified:",
    "added by us:",
    "added by them:",
    "deleted by us:",
    "deleted by them:",
)

_CHERRY_PICK_COMMIT_RE = re.compile(r"You are currently cherry-picking commit ([a-f0-9]+)")
_UPSTREAM_RE = re.compile(r"Your branch is up to date with '([^']+)'")
_ON_BRANCH_RE = re.compile(r"On branch (.+)")


@dataclass
class ConflictStatus:
    """Structured view of `git status` during a cherry-pick."""

    cherry_pick_in_progress: bool = False
    has_unmerged_paths: bool = False
    all_conflicts_fixed: bool = False
    has_conflicts: bool = False
    conflicted_files: list[str] = field(default_factory=list)
    current_commit: str = ""
    current_branch: str = ""
    status_message: str = ""
    detailed_message: str = ""
    user_action: str = ""
    formatted_status_output: str = ""
    can_continue: bool = False
    needs_resolution: bool = False
    raw_status_output: str = ""


def _conflicted_files(status_output: str) -> list[str]:
    files: list[str] = []
    in_unmerged = False
    for line in status_output.splitlines():
        if "Unmerged paths:" in line:
            in_unmerged = True
            continue
        if not in_unmerged:
            continue
        if not line.strip():
            break
        for tag in CONFLICT_TAGS:
            if tag in line:
                path = line.split(tag, 1)[1].strip()
                if path:
                    files.append(path)
                break
    return files


def parse_conflict_status(status_output: str) -> ConflictStatus:
    """Derive the cherry-pick conflict state from `git status` output."""
    status = ConflictStatus(raw_status_output=status_output)
    status.cherry_pick_in_progress = "currently cherry-picking" in status_output
    status.has_unmerged_paths = "Unmerged paths:" in status_output
    status.all_conflicts_fixed = (
        'all conflicts fixed: run "git cherry-pick --continue"' in status_output
    )
    status.has_conflicts = status.has_unmerged_paths and not status.all_conflicts_fixed
    if status.has_unmerged_paths:
        status.conflicted_files = _conflicted_files(status_output)

    commit_match = _CHERRY_PICK_COMMIT_RE.search(status_output)
    if commit_match:
        status.current_commit = commit_match.group(1)

    branch_match = _UPSTREAM_RE.search(status_output) or _ON_BRANCH_RE.search(status_output)
    if branch_match:
        status.current_branch = branch_match.group(1).strip()

    _describe(status)
    return status


def _describe(status: ConflictStatus) -> None:
    """Fill the human-readable fields of a parsed status."""
    count = len(status.conflicted_files)
    if not status.cherry_pick_in_progress:
        status.status_message = "No cherry-pick operation in progress"
        status.detailed_message = "No cherry-pick operation is currently in progress."
        status.user_action = "You can safely proceed with other operations."
        status.formatted_status_output = status.status_message
        return

    if status.all_conflicts_fixed:
        status.status_message = "All conflicts have been resolved"
        status.detailed_message = (
            "All conflicts have been resolved. You can now continue the cherry-pick operation."
        )
        status.user_action = (
            'Click "Continue" to complete the cherry-pick, '
            "then return to the app to push the commit."
        )
        status.can_continue = True
    elif status.has_conflicts:
        status.status_message = f"Cherry-pick has {count} unresolved conflict(s)"
        status.detailed_message = (
            f"There are {count} file(s) with unresolved conflicts that need manual resolution."
        )
        status.user_action = (
            "Please resolve the conflicts in your code editor, then use "
            '"git add <file>" to mark them as resolved, and return to the app to continue.'
        )
        status.needs_resolution = True
    else:
        status.status_message = "Cherry-pick operation is in progress"
        status.detailed_message = "Cherry-pick operation is in progress but status is unclear."
        status.user_action = "Please check the git status manually."

    lines = [f"Status: {status.status_message}", ""]
    if status.current_branch:
        lines.append(f"Branch: {status.current_branch}")
    if status.current_commit:
        lines.extend([f"Cherry-picking commit: {status.current_commit}", ""])
    if status.needs_resolution and status.conflicted_files:
        lines.append("Files with conflicts:")
        lines.extend(f"  • {path}" for path in status.conflicted_files)
        lines.append("")
    lines.append(f"Next steps: {status.user_action}")
    status.formatted_status_output = "\n".join(lines)
