"""Data models shared by the filter, auditor, notifier and recorder."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TargetRequest:
    """A URL somebody asked the bot to audit."""

    url: str


@dataclass(frozen=True)
class AuditResult:
    """Scores and rendered report for a single Lighthouse run.

    Scores are kept as the strings shown in the report gauges.
    """

    url: str
    performance_score: str
    accessibility_score: str
    best_practices_score: str
    seo_score: str
    report_html: str = ""
