"""
Color scheme for the structured report.

Styles are rich style strings; an empty style prints the text unchanged.
"""

from dataclasses import dataclass, fields, replace
from typing import Dict, Optional


@dataclass(frozen=True)
class ColorScheme:
    """
    Style of each element of the structured report.
    """
    number: str = "bold yellow"
    repo: str = "bold magenta"
    package: str = "bold"
    version: str = "bold green"
    local_version: str = "bold green"
    orphan: str = "bold red"
    out_of_date: str = "bold red"
    group: str = "bold blue"
    installed: str = "bold cyan"
    votes: str = "bold white"
    popularity: str = "bold white"
    description: str = ""
    repositories: Optional[Dict[str, str]] = None

    def repo_style(self, repository: str) -> str:
        """Style for a repository name, falling back to ``repo``."""
        if self.repositories and repository in self.repositories:
            return self.repositories[repository]
        return self.repo


DEFAULT_REPOSITORY_STYLES = {
    "core": "bold red",
    "extra": "bold green",
    "community": "bold magenta",
    "multilib": "bold cyan",
    "testing": "bold yellow",
    "local": "bold yellow",
    "aur": "bold magenta",
}


def default_scheme() -> ColorScheme:
    """Return the default color scheme."""
    return ColorScheme(repositories=dict(DEFAULT_REPOSITORY_STYLES))


def plain_scheme() -> ColorScheme:
    """Return a scheme without any styling."""
    blank = {f.name: "" for f in fields(ColorScheme) if f.name != "repositories"}
    return replace(ColorScheme(), **blank)
