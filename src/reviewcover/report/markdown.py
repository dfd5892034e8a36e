"""Markdown renderer for reviewer suggestions.

Produces a GitHub-flavored markdown block suitable for a PR comment with:
  - Suggested reviewers and the files each one knows
  - Files nobody can review
  - Per-file affinity scores (collapsed)
"""

from __future__ import annotations

from reviewcover.cover.models import ReviewReport

MARKER = "<!-- reviewcover -->"


def render_report(report: ReviewReport, include_scores: bool = True) -> str:
    """Render a ReviewReport as markdown."""
    sections: list[str] = [MARKER, "## Suggested Reviewers", ""]

    if report.is_empty:
        sections.append("> No changed files.")
        return "\n".join(sections)

    sections.append(
        f"**{len(report.reviewers)}** reviewer(s) cover "
        f"**{len(report.files) - len(report.uncovered)}** of "
        f"**{len(report.files)}** changed file(s)."
    )
    sections.append("")

    if report.reviewers:
        sections.append("| Reviewer | Files |")
        sections.append("|:---------|:------|")
        for reviewer in report.reviewers:
            files = report.assignments.get(reviewer, [])
            listed = "<br>".join(f"`{f}`" for f in files[:10])
            if len(files) > 10:
                listed += f"<br>... and {len(files) - 10} more"
            sections.append(f"| {_escape_cell(reviewer)} | {listed} |")
        sections.append("")

    if report.uncovered:
        sections.append("### No Suitable Reviewer")
        sections.append("")
        sections.append("```")
        sections.extend(_render_file_tree(report.uncovered))
        sections.append("```")
        sections.append("")

    if include_scores and any(report.scores.values()):
        sections.append("<details>")
        sections.append("<summary>Affinity scores</summary>")
        sections.append("")
        sections.append("| File | Author | Score |")
        sections.append("|:-----|:-------|------:|")
        for f in report.files:
            for author, score in report.scores.get(f, {}).items():
                sections.append(f"| `{f}` | {_escape_cell(author)} | {score:.2f} |")
        sections.append("")
        sections.append("</details>")
        sections.append("")

    return "\n".join(sections)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _render_file_tree(files: list[str]) -> list[str]:
    """Render a list of file paths as an ASCII tree."""
    if not files:
        return []

    tree: dict = {}
    for fp in sorted(files):
        node = tree
        for part in fp.split("/"):
            node = node.setdefault(part, {})

    lines: list[str] = []
    _render_tree_recursive(tree, "", lines, is_root=True)
    return lines


def _render_tree_recursive(
    node: dict, prefix: str, lines: list[str], is_root: bool = False
) -> None:
    items = list(node.items())
    for i, (name, children) in enumerate(items):
        is_last_item = i == len(items) - 1
        if is_root:
            connector = ""
            next_prefix = ""
        else:
            connector = "└── " if is_last_item else "├── "
            next_prefix = prefix + ("    " if is_last_item else "│   ")

        if children:
            lines.append(f"{prefix}{connector}{name}/")
            _render_tree_recursive(children, next_prefix, lines)
        else:
            lines.append(f"{prefix}{connector}{name}")
