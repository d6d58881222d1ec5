"""Fold daily metrics records into one range summary.

Two kinds of counter appear in the records and combine differently:

* engaged/active user counts describe distinct users on one day, so they are
  combined with ``max`` (summing would count a returning user once per day);
* event counters (suggestions, acceptances, lines) are cumulative and summed.

Editors, models within an editor, and languages within a model are merged by
name into a three-level ordered mapping that is flattened to lists only when
the summary is built.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from cmdash.models.metrics import (
    AggregatedSummary,
    DailyMetricRecord,
    EditorBreakdown,
    LanguageAcceptanceStat,
    LanguageSummary,
    ModelBreakdown,
    PullRequestModelStat,
    RepositoryBreakdown,
)
from cmdash.models.usage import DailyUsageRecord, UsageTotals

logger = logging.getLogger(__name__)

TOP_LANGUAGES = 6


class InputShapeError(TypeError):
    """The records argument is not a sequence of record objects."""


@dataclass
class _ModelAcc:
    engaged: int = 0
    is_custom: bool = False
    languages: dict[str, LanguageAcceptanceStat] = field(default_factory=dict)


@dataclass
class _EditorAcc:
    engaged: int = 0
    models: dict[str, _ModelAcc] = field(default_factory=dict)


@dataclass
class _RepositoryAcc:
    engaged: int = 0
    models: dict[str, PullRequestModelStat] = field(default_factory=dict)


def aggregate(records: object, *, top_n: int = TOP_LANGUAGES) -> AggregatedSummary:
    """Aggregate daily metrics records into a single summary.

    ``records`` may hold ``DailyMetricRecord`` instances or raw JSON mappings.
    The result does not depend on the order of ``records``.

    Raises:
        InputShapeError: ``records`` is not a list/tuple of records.
    """
    days = _order_by_date(_validate_all(records, DailyMetricRecord))
    logger.debug("Aggregating %d daily metrics records", len(days))

    max_active = max_engaged = max_chat = max_dotcom_chat = 0
    editors: dict[str, _EditorAcc] = {}
    languages: dict[str, int] = {}
    repositories: dict[str, _RepositoryAcc] = {}

    for day in days:
        max_active = max(max_active, day.total_active_users)
        max_engaged = max(max_engaged, day.total_engaged_users)
        max_chat = max(max_chat, day.chat_engaged_users)
        max_dotcom_chat = max(max_dotcom_chat, day.dotcom_chat_engaged_users)

        for lang in day.languages:
            languages[lang.name] = max(languages.get(lang.name, 0), lang.total_engaged_users)

        for editor in day.ide_completions:
            editor_acc = editors.setdefault(editor.name, _EditorAcc())
            editor_acc.engaged = max(editor_acc.engaged, editor.total_engaged_users)
            for model in editor.models:
                _merge_model(editor_acc.models.setdefault(model.name, _ModelAcc()), model)

        for repo in day.pull_requests:
            repo_acc = repositories.setdefault(repo.name, _RepositoryAcc())
            repo_acc.engaged = max(repo_acc.engaged, repo.total_engaged_users)
            for pr_model in repo.models:
                _merge_pr_model(repo_acc.models, pr_model)

    language_summaries = [
        LanguageSummary(name=name, max_engaged_users=engaged)
        for name, engaged in languages.items()
    ]
    # sorted() is stable, so ties keep encounter order
    top = sorted(language_summaries, key=lambda item: item.max_engaged_users, reverse=True)

    return AggregatedSummary(
        days=len(days),
        max_active_users=max_active,
        max_engaged_users=max_engaged,
        max_chat_users=max_chat,
        max_dotcom_chat_users=max_dotcom_chat,
        editors=[_flatten_editor(name, acc) for name, acc in editors.items()],
        languages=language_summaries,
        top_languages=top[:top_n],
        pull_requests=[
            RepositoryBreakdown(
                name=name, total_engaged_users=acc.engaged, models=list(acc.models.values())
            )
            for name, acc in repositories.items()
        ],
    )


def aggregate_usage(records: object) -> UsageTotals:
    """Sum a day-indexed usage series.

    Raises:
        InputShapeError: ``records`` is not a list/tuple of records.
    """
    days = _validate_all(records, DailyUsageRecord)
    logger.debug("Summing %d daily usage records", len(days))
    return UsageTotals(
        days=len(days),
        total_suggestions=sum(day.total_suggestions_count for day in days),
        total_acceptances=sum(day.total_acceptances_count for day in days),
        total_lines_suggested=sum(day.total_lines_suggested for day in days),
        total_lines_accepted=sum(day.total_lines_accepted for day in days),
    )


def _merge_model(acc: _ModelAcc, model: ModelBreakdown) -> None:
    acc.engaged = max(acc.engaged, model.total_engaged_users)
    acc.is_custom = acc.is_custom or model.is_custom_model
    for lang in model.languages:
        current = acc.languages.get(lang.name)
        if current is None:
            acc.languages[lang.name] = lang.model_copy()
            continue
        current.total_engaged_users = max(current.total_engaged_users, lang.total_engaged_users)
        current.total_code_acceptances += lang.total_code_acceptances
        current.total_code_suggestions += lang.total_code_suggestions
        current.total_code_lines_accepted += lang.total_code_lines_accepted
        current.total_code_lines_suggested += lang.total_code_lines_suggested


def _merge_pr_model(models: dict[str, PullRequestModelStat], model: PullRequestModelStat) -> None:
    current = models.get(model.name)
    if current is None:
        models[model.name] = model.model_copy()
        return
    current.total_engaged_users = max(current.total_engaged_users, model.total_engaged_users)
    current.is_custom_model = current.is_custom_model or model.is_custom_model
    current.total_pr_summaries_created += model.total_pr_summaries_created


def _flatten_editor(name: str, acc: _EditorAcc) -> EditorBreakdown:
    return EditorBreakdown(
        name=name,
        total_engaged_users=acc.engaged,
        models=[
            ModelBreakdown(
                name=model_name,
                total_engaged_users=model.engaged,
                is_custom_model=model.is_custom,
                languages=list(model.languages.values()),
            )
            for model_name, model in acc.models.items()
        ],
    )


T = TypeVar("T", bound=BaseModel)


def _validate_all(records: object, model: type[T]) -> list[T]:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        raise InputShapeError(
            f"Expected a sequence of records, got {type(records).__name__}"
        )
    validated: list[T] = []
    for index, item in enumerate(records):
        if isinstance(item, model):
            validated.append(item)
            continue
        if not isinstance(item, Mapping):
            raise InputShapeError(
                f"Record {index} must be a mapping or {model.__name__}, "
                f"got {type(item).__name__}"
            )
        try:
            validated.append(model.model_validate(dict(item)))
        except ValidationError as exc:
            raise InputShapeError(f"Record {index} is malformed: {exc}") from exc
    return validated


def _order_by_date(days: list[DailyMetricRecord]) -> list[DailyMetricRecord]:
    # Records sharing a date (or undated) fall back to their serialized content
    return sorted(days, key=lambda day: (day.date or date.min, day.model_dump_json()))
