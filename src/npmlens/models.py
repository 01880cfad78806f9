"""Domain models for npmlens. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum

# ─── Enumerations ─────────────────────────────────────────────


class Period(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def path_segment(self) -> str:
        """Segment used by the downloads API (``last-day`` etc.)."""
        return f"last-{self.value}"


# ─── Registry Models ──────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PackageLinks:
    """Links attached to a search hit."""

    npm: str | None = None
    homepage: str | None = None
    repository: str | None = None


@dataclass(frozen=True, slots=True)
class SearchWeights:
    """Optional ranking weights for the npm search endpoint."""

    quality: float | None = None
    popularity: float | None = None
    maintenance: float | None = None

    def as_params(self) -> dict[str, str]:
        """Only the weights that were actually set."""
        params: dict[str, str] = {}
        for name in ("quality", "popularity", "maintenance"):
            value = getattr(self, name)
            if value is not None:
                params[name] = str(value)
        return params


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A single npm search hit mapped into a stable shape."""

    name: str
    version: str
    description: str | None = None
    publish_date: str | None = None
    links: PackageLinks = field(default_factory=PackageLinks)
    maintainers: list[str] = field(default_factory=list)
    publisher: str | None = None
    keywords: list[str] = field(default_factory=list)
    score: float = 0.0


@dataclass(frozen=True, slots=True)
class SearchPage:
    total: int
    results: list[SearchResult] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PackageMeta:
    """Core package metadata plus README body when the registry has one."""

    name: str
    version: str | None = None
    readme: str | None = None
    repository: str | None = None
    homepage: str | None = None


@dataclass(frozen=True, slots=True)
class PackageVersion:
    version: str
    date: str
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"version": self.version, "date": self.date}
        if self.tags:
            result["tags"] = list(self.tags)
        return result


@dataclass(frozen=True, slots=True)
class VersionList:
    name: str
    versions: list[PackageVersion] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "versions": [v.to_dict() for v in self.versions]}


@dataclass(frozen=True, slots=True)
class DependencyInfo:
    """A declared dependency. ``version`` is the semver range, not a resolved version."""

    name: str
    version: str


@dataclass(frozen=True, slots=True)
class DependencyReport:
    name: str
    version: str
    dependencies: list[DependencyInfo] = field(default_factory=list)
    dev_dependencies: list[DependencyInfo] | None = None

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {
            "name": self.name,
            "version": self.version,
            "dependencies": [asdict(d) for d in self.dependencies],
        }
        if self.dev_dependencies is not None:
            result["dev_dependencies"] = [asdict(d) for d in self.dev_dependencies]
        return result


@dataclass(frozen=True, slots=True)
class DownloadsPoint:
    """Point-in-time download count from api.npmjs.org."""

    downloads: int
    start: str
    end: str
    package: str


# ─── GitHub Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RepoRef:
    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def html_url(self) -> str:
        return f"https://github.com/{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """GitHub repository stats. Only ``full_name``/``url`` are guaranteed."""

    full_name: str
    url: str
    description: str | None = None
    stars: int | None = None
    forks: int | None = None
    license: str | None = None


# ─── Tool Return Models ───────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PackageComparison:
    """One row of a side-by-side comparison.

    Fields fill in independently; ``error`` is set when the registry
    lookup itself failed and nothing else could be collected.
    """

    name: str
    version: str | None = None
    description: str | None = None
    downloads: int | None = None
    stars: int | None = None
    forks: int | None = None
    license: str | None = None
    repository: str | None = None
    homepage: str | None = None
    error: object | None = None


@dataclass(frozen=True, slots=True)
class UsageSnippet:
    code: str
    language: str | None = None
    heading: str | None = None
