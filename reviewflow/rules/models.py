from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

logger = structlog.get_logger(__name__)

TEAM_PREFIX = "team:"
DEFAULT_IGNORED_KEYWORDS = ["DO NOT REVIEW"]


class ReviewerKind(str, Enum):
    """What a reviewer identifier refers to."""

    INDIVIDUAL = "individual"
    GROUP = "group"
    TEAM = "team"


class ReviewerRef(BaseModel):
    """A reviewer identifier, classified once when the configuration is read.

    ``team:<slug>`` entries are GitHub teams resolved only during live
    reconciliation; names listed under ``reviewers.groups`` are groups;
    everything else is an individual login.
    """

    model_config = ConfigDict(frozen=True)

    kind: ReviewerKind
    name: str

    @classmethod
    def parse(cls, identifier: Any, groups: Mapping[str, Any] | None = None) -> "ReviewerRef":
        if isinstance(identifier, ReviewerRef):
            return identifier
        identifier = str(identifier)
        if identifier.startswith(TEAM_PREFIX):
            return cls(kind=ReviewerKind.TEAM, name=identifier[len(TEAM_PREFIX) :])
        if groups and identifier in groups:
            return cls(kind=ReviewerKind.GROUP, name=identifier)
        return cls(kind=ReviewerKind.INDIVIDUAL, name=identifier)

    @classmethod
    def individual(cls, login: str) -> "ReviewerRef":
        return cls(kind=ReviewerKind.INDIVIDUAL, name=login)

    @property
    def is_team(self) -> bool:
        return self.kind == ReviewerKind.TEAM

    @property
    def is_group(self) -> bool:
        return self.kind == ReviewerKind.GROUP

    def __str__(self) -> str:
        if self.kind == ReviewerKind.TEAM:
            return f"{TEAM_PREFIX}{self.name}"
        return self.name


def parse_reviewers(raw: Any, groups: Mapping[str, Any] | None = None) -> list[ReviewerRef] | None:
    """Classify a raw YAML reviewer list; anything but a list counts as absent."""
    if not isinstance(raw, list):
        return None
    return [ReviewerRef.parse(item, groups) for item in raw if item is not None]


def identifiers(reviewers: list[ReviewerRef]) -> list[str]:
    """Render reviewer refs back to their configuration identifiers."""
    return [str(reviewer) for reviewer in reviewers]


class ReviewerOptions(BaseModel):
    """The ``options`` section. Invalid values fall back to their defaults."""

    model_config = ConfigDict(extra="ignore")

    enable_group_assignment: bool = False
    ignore_draft: bool = True
    ignored_keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_KEYWORDS))
    exclude: list[ReviewerRef] = Field(default_factory=list)
    number_of_reviewers: int | None = None
    # Tri-state: the presence of the key enables live reconciliation, whatever its value.
    load_github_members: bool | None = None
    force_pick: bool = False

    @field_validator(
        "enable_group_assignment",
        "ignore_draft",
        "number_of_reviewers",
        "load_github_members",
        "force_pick",
        mode="wrap",
    )
    @classmethod
    def _fallback_to_default(cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError:
            default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
            logger.warning("invalid_option_ignored", option=info.field_name, value=value, default=default)
            return default

    @field_validator("ignored_keywords", mode="before")
    @classmethod
    def _keywords_as_strings(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            logger.warning("invalid_option_ignored", option="ignored_keywords", value=value)
            return list(DEFAULT_IGNORED_KEYWORDS)
        return [str(keyword) for keyword in value if keyword is not None]

    @field_validator("exclude", mode="before")
    @classmethod
    def _exclude_as_refs(cls, value: Any) -> list[ReviewerRef]:
        return parse_reviewers(value) or []

    @property
    def live_membership_enabled(self) -> bool:
        """True when ``load_github_members`` appears in the configuration at all."""
        return "load_github_members" in self.model_fields_set


class AuthorRule(BaseModel):
    """One ``reviewers.per_author`` entry."""

    author: ReviewerRef
    reviewers: list[ReviewerRef] = Field(default_factory=list)


class FileRule(BaseModel):
    """One ``files`` entry: a glob pattern and the reviewers it pulls in."""

    pattern: str
    reviewers: list[ReviewerRef] = Field(default_factory=list)


class ReviewerConfig(BaseModel):
    """
    Parsed reviewer configuration document.

    Built from the YAML document with ``ReviewerConfig.model_validate(document)``.
    Sections that are missing or have the wrong shape are stored as ``None``
    (absent) rather than rejected.
    """

    options: ReviewerOptions = Field(default_factory=ReviewerOptions)
    groups: dict[str, list[str]] = Field(default_factory=dict)
    defaults: list[ReviewerRef] | None = None
    per_author: list[AuthorRule] | None = None
    files: list[FileRule] | None = None

    @model_validator(mode="before")
    @classmethod
    def _ingest_document(cls, data: Any) -> Any:
        if isinstance(data, ReviewerConfig):
            return data
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("config_document_not_a_mapping", document_type=type(data).__name__)
            return {}

        reviewers = data.get("reviewers")
        if not isinstance(reviewers, dict):
            reviewers = {}

        raw_groups = reviewers.get("groups")
        groups: dict[str, list[str]] = {}
        if isinstance(raw_groups, dict):
            for name, members in raw_groups.items():
                if isinstance(members, list):
                    groups[str(name)] = [str(member) for member in members if member is not None]
                else:
                    logger.info("group_ignored", group=str(name), members_type=type(members).__name__)

        per_author = None
        raw_per_author = reviewers.get("per_author")
        if isinstance(raw_per_author, dict):
            per_author = [
                AuthorRule(author=ReviewerRef.parse(author, groups), reviewers=parse_reviewers(entries, groups) or [])
                for author, entries in raw_per_author.items()
            ]

        files = None
        raw_files = data.get("files")
        if isinstance(raw_files, dict):
            files = [
                FileRule(pattern=str(pattern), reviewers=parse_reviewers(entries, groups) or [])
                for pattern, entries in raw_files.items()
            ]

        options = data.get("options")
        options = dict(options) if isinstance(options, dict) else {}
        if "exclude" in options:
            options["exclude"] = parse_reviewers(options["exclude"], groups) or []

        return {
            "options": options,
            "groups": groups,
            "defaults": parse_reviewers(reviewers.get("defaults"), groups),
            "per_author": per_author,
            "files": files,
        }


class PullRequestContext(BaseModel):
    """The pull request facts the reviewer rules are evaluated against."""

    number: int = 0
    author: str
    title: str = ""
    is_draft: bool = False
    changed_files: list[str] = Field(default_factory=list)
