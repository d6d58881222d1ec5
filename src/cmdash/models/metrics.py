"""Daily metrics records and the aggregated summary built from them."""

from __future__ import annotations

import datetime as dt
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off"})


def coerce_count(value: object) -> int:
    """Best-effort integer for a counter field; anything unusable is 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return 0
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    return 0


def coerce_flag(value: object) -> bool:
    """Boolean for a flag field; strings like ``"false"`` and ``"0"`` are False."""
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _coerce_list(value: object) -> object:
    return [] if value is None else value


class _Counted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    total_engaged_users: int = 0

    @field_validator("total_engaged_users", mode="before")
    @classmethod
    def coerce_engaged(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, value: object) -> str:
        return str(value or "")


class LanguageStat(_Counted):
    """Top-level per-language engagement for one day."""


class LanguageAcceptanceStat(_Counted):
    """Per-language completion counters inside a model."""

    total_code_acceptances: int = 0
    total_code_suggestions: int = 0
    total_code_lines_accepted: int = 0
    total_code_lines_suggested: int = 0

    @field_validator(
        "total_code_acceptances",
        "total_code_suggestions",
        "total_code_lines_accepted",
        "total_code_lines_suggested",
        mode="before",
    )
    @classmethod
    def coerce_counters(cls, value: object) -> int:
        return coerce_count(value)


class ModelBreakdown(_Counted):
    """Completion usage for one model within an editor."""

    is_custom_model: bool = Field(default=False, alias="isCustomModel")
    languages: list[LanguageAcceptanceStat] = Field(default_factory=list)

    @field_validator("is_custom_model", mode="before")
    @classmethod
    def coerce_custom(cls, value: object) -> bool:
        return coerce_flag(value)

    @field_validator("languages", mode="before")
    @classmethod
    def coerce_languages(cls, value: object) -> object:
        return _coerce_list(value)


class EditorBreakdown(_Counted):
    """Completion usage for one editor."""

    models: list[ModelBreakdown] = Field(default_factory=list)

    @field_validator("models", mode="before")
    @classmethod
    def coerce_models(cls, value: object) -> object:
        return _coerce_list(value)


class PullRequestModelStat(_Counted):
    """Pull-request summaries generated by one model in a repository."""

    is_custom_model: bool = Field(default=False, alias="isCustomModel")
    total_pr_summaries_created: int = 0

    @field_validator("is_custom_model", mode="before")
    @classmethod
    def coerce_custom(cls, value: object) -> bool:
        return coerce_flag(value)

    @field_validator("total_pr_summaries_created", mode="before")
    @classmethod
    def coerce_summaries(cls, value: object) -> int:
        return coerce_count(value)


class RepositoryBreakdown(_Counted):
    """Pull-request activity for one repository."""

    models: list[PullRequestModelStat] = Field(default_factory=list)

    @field_validator("models", mode="before")
    @classmethod
    def coerce_models(cls, value: object) -> object:
        return _coerce_list(value)


class DailyMetricRecord(BaseModel):
    """One calendar day of metrics as returned by the remote source.

    Accepts both the flat dashboard shape (``ideCompletions``, ``languages``,
    ``chatEngagedUsers``, ``dotcomChatEngagedUsers``, ``pullRequests``) and the
    remote API's nested shape, where editors and languages live under
    ``copilot_ide_code_completions``, chat engagement under
    ``copilot_ide_chat`` / ``copilot_dotcom_chat`` and repositories under
    ``copilot_dotcom_pull_requests``.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: dt.date | None = None
    total_active_users: int = 0
    total_engaged_users: int = 0
    chat_engaged_users: int = Field(default=0, alias="chatEngagedUsers")
    dotcom_chat_engaged_users: int = Field(default=0, alias="dotcomChatEngagedUsers")
    ide_completions: list[EditorBreakdown] = Field(default_factory=list, alias="ideCompletions")
    languages: list[LanguageStat] = Field(default_factory=list)
    pull_requests: list[RepositoryBreakdown] = Field(default_factory=list, alias="pullRequests")

    @model_validator(mode="before")
    @classmethod
    def flatten_api_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        completions = data.get("copilot_ide_code_completions")
        chat = data.get("copilot_ide_chat")
        dotcom_chat = data.get("copilot_dotcom_chat")
        pulls = data.get("copilot_dotcom_pull_requests")
        if completions is None and chat is None and dotcom_chat is None and pulls is None:
            return data
        flat = dict(data)
        if isinstance(completions, dict):
            flat.setdefault("ideCompletions", completions.get("editors"))
            flat.setdefault("languages", completions.get("languages"))
        if isinstance(chat, dict):
            flat.setdefault("chatEngagedUsers", chat.get("total_engaged_users"))
        if isinstance(dotcom_chat, dict):
            flat.setdefault("dotcomChatEngagedUsers", dotcom_chat.get("total_engaged_users"))
        if isinstance(pulls, dict):
            flat.setdefault("pullRequests", pulls.get("repositories"))
        return flat

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, value: object) -> dt.date | None:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        if isinstance(value, str) and value:
            try:
                return dt.date.fromisoformat(value[:10])
            except ValueError:
                return None
        return None

    @field_validator(
        "total_active_users",
        "total_engaged_users",
        "chat_engaged_users",
        "dotcom_chat_engaged_users",
        mode="before",
    )
    @classmethod
    def coerce_counters(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("ide_completions", "languages", "pull_requests", mode="before")
    @classmethod
    def coerce_lists(cls, value: object) -> object:
        return _coerce_list(value)


class LanguageSummary(BaseModel):
    """A language with its highest single-day engagement."""

    name: str
    max_engaged_users: int = 0


class AggregatedSummary(BaseModel):
    """Metrics folded across a range of days."""

    days: int = 0
    max_active_users: int = 0
    max_engaged_users: int = 0
    max_chat_users: int = 0
    max_dotcom_chat_users: int = 0
    editors: list[EditorBreakdown] = Field(default_factory=list)
    languages: list[LanguageSummary] = Field(default_factory=list)
    top_languages: list[LanguageSummary] = Field(default_factory=list)
    pull_requests: list[RepositoryBreakdown] = Field(default_factory=list)
