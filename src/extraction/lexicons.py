"""Keyword lexicons used by the lexical classifiers.

Each table is consulted in the order it is declared; the classifiers in
``classifiers`` decide precedence between tables.
"""
from __future__ import annotations

__all__ = [
    "HIGH_COMPLEXITY_TERMS",
    "LOW_COMPLEXITY_TERMS",
    "DURATION_BY_COMPLEXITY",
    "DEADLINE_URGENCY_PHRASES",
    "HIGH_PRIORITY_TERMS",
    "LOW_PRIORITY_TERMS",
    "TAG_KEYWORDS",
    "HIGH_IMPACT_TERMS",
    "LOW_IMPACT_TERMS",
    "BUSINESS_VALUE_TERMS",
    "LEARNING_TERMS",
    "HUMAN_JUDGEMENT_TERMS",
    "AUTOMATABLE_TERMS",
    "STAKEHOLDER_TERMS",
]

HIGH_COMPLEXITY_TERMS: tuple[str, ...] = (
    "complex",
    "challenging",
    "critical",
    "difficult",
    "major",
    "comprehensive",
    "intricate",
    "advanced",
    "significant",
    "extensive",
)

LOW_COMPLEXITY_TERMS: tuple[str, ...] = (
    "simple",
    "quick",
    "minor",
    "basic",
    "easy",
    "small",
    "trivial",
)

DURATION_BY_COMPLEXITY: dict[str, int] = {
    "low": 45,
    "medium": 90,
    "high": 180,
}

DEADLINE_URGENCY_PHRASES: tuple[str, ...] = (
    "deadline",
    "overdue",
    "by end of day",
    "due tomorrow",
    "due today",
    "by eod",
)

HIGH_PRIORITY_TERMS: tuple[str, ...] = (
    "urgent",
    "critical",
    "asap",
    "immediately",
    "blocker",
    "blocking",
    "high priority",
    "top priority",
    "highest priority",
    "important",
    "p0",
    "p1",
)

LOW_PRIORITY_TERMS: tuple[str, ...] = (
    "optional",
    "nice to have",
    "low priority",
    "when possible",
    "if time permits",
    "backlog",
    "eventually",
    "later",
    "not urgent",
    "p3",
    "p4",
)

TAG_KEYWORDS: dict[str, tuple[str, ...]] = {
    "frontend": (
        "frontend",
        "front-end",
        "user interface",
        "css",
        "html",
        "component",
        "layout",
        "react",
        "stylesheet",
        "responsive",
    ),
    "backend": (
        "backend",
        "back-end",
        "api",
        "server",
        "database",
        "endpoint",
        "service",
        "schema",
        "migration",
        "authentication",
    ),
    "documentation": (
        "documentation",
        "docs",
        "document",
        "readme",
        "wiki",
        "guide",
        "manual",
    ),
    "testing": (
        "test",
        "qa",
        "quality assurance",
        "coverage",
    ),
    "bug": (
        "bug",
        "fix",
        "defect",
        "crash",
        "regression",
    ),
    "feature": (
        "feature",
        "implement",
        "enhancement",
        "add support",
    ),
}

HIGH_IMPACT_TERMS: tuple[str, ...] = (
    "critical",
    "key feature",
    "core functionality",
    "user-facing",
    "essential",
)

LOW_IMPACT_TERMS: tuple[str, ...] = (
    "minor",
    "nice to have",
    "optional",
    "internal only",
)

BUSINESS_VALUE_TERMS: tuple[str, ...] = (
    "revenue",
    "conversion",
    "user acquisition",
    "retention",
    "core feature",
)

LEARNING_TERMS: tuple[str, ...] = (
    "new technology",
    "innovation",
    "research",
    "explore",
    "learning opportunity",
)

HUMAN_JUDGEMENT_TERMS: tuple[str, ...] = (
    "review",
    "approve",
    "decide",
    "judgment",
    "evaluate",
    "assess",
    "determine",
    "creative",
    "innovative",
    "stakeholder",
    "client",
    "meeting",
)

AUTOMATABLE_TERMS: tuple[str, ...] = (
    "generate",
    "calculate",
    "report",
    "compile",
    "format",
    "convert",
    "extract",
    "simple",
    "repetitive",
    "automate",
    "data entry",
)

STAKEHOLDER_TERMS: tuple[str, ...] = (
    "client",
    "stakeholder",
    "present to",
    "approval",
    "customer",
)
