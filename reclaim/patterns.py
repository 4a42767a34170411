"""
Pattern Library - Immutable Rule Sets

Every signal the heuristic engine understands is declared here as a
weighted, category-tagged regex rule. The rules are grouped into one
RuleBook, built once at import and shared read-only by every request.

Adding a rule means appending a PatternRule to the right list below.
The scorer iterates the RuleBook generically and never names a rule.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

RULEBOOK_VERSION = "1.0.0"

# Straight or typographic apostrophe
_APOS = "['’]"


# ============================================================
# CATEGORIES
# ============================================================

class Category(str, Enum):
    """
    Rule categories. Each carries the score field it feeds and the
    label used when explaining a match.
    """

    AI_TRANSITION = ("ai_transition", "ai", "AI-typical transitions")
    AI_SELF_REFERENCE = ("ai_self_reference", "ai", "AI self-reference")
    HUMAN_COLLOQUIAL = ("human_colloquial", "human", "human speech patterns")
    PERSONAL_EXPERIENCE = ("personal_experience", "human", "personal experiences")
    SENSATIONAL = ("sensational", "hyperreal", "sensational language")
    MANIPULATION = ("manipulation", "manipulation", "anonymous or leaked sourcing")
    ATTRIBUTION = ("attribution", "credibility", "source attribution")
    SPECIFICITY = ("specificity", "credibility", "specific dates and figures")
    CONSPIRACY = ("conspiracy", "credibility", "conspiracy language")
    EMOTIONAL = ("emotional", "credibility", "emotional manipulation")

    def __new__(cls, value: str, target: str, label: str):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.target = target
        obj.label = label
        return obj


TARGETS = ("ai", "human", "manipulation", "hyperreal", "credibility")


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class PatternRule:
    """A single weighted detection rule."""
    id: str
    pattern: re.Pattern
    weight: float
    category: Category
    label: str

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"Rule {self.id} must have a positive weight, got {self.weight}")

    def find(self, text: str) -> list[str]:
        """Return every matched fragment in order of appearance."""
        return [m.group(0) for m in self.pattern.finditer(text)]


def rule(
    id: str,
    regex: str,
    weight: float,
    category: Category,
    label: str,
) -> PatternRule:
    """Compile a case-insensitive rule."""
    return PatternRule(
        id=id,
        pattern=re.compile(regex, re.IGNORECASE),
        weight=weight,
        category=category,
        label=label,
    )


# ============================================================
# AUTHORSHIP RULES
# ============================================================

AI_TRANSITION_RULES: list[PatternRule] = [
    rule(
        "AI_CONNECTIVE",
        r"\b(?:furthermore|moreover|additionally|consequently|nonetheless)\b",
        20, Category.AI_TRANSITION, "formal connective",
    ),
    rule(
        "AI_HEDGE",
        rf"\b(?:it{_APOS}s\s+important\s+to\s+note|it\s+is\s+important\s+to\s+note|"
        rf"it{_APOS}s\s+worth\s+noting|it\s+is\s+worth\s+noting|"
        rf"it\s+should\s+be\s+noted|it{_APOS}s\s+crucial\s+to|it\s+is\s+crucial\s+to)\b",
        25, Category.AI_TRANSITION, "diplomatic hedge",
    ),
    rule(
        "AI_SUMMARY",
        r"\b(?:in\s+conclusion|to\s+summarize|in\s+summary)\b",
        20, Category.AI_TRANSITION, "summary opener",
    ),
    rule(
        "AI_THEREFORE",
        r"\btherefore\b",
        12, Category.AI_TRANSITION, "causal connective",
    ),
    rule(
        "AI_WEAK_TRANSITION",
        r"\b(?:overall|ultimately)\b",
        8, Category.AI_TRANSITION, "weak transition",
    ),
]

AI_SELF_REFERENCE_RULES: list[PatternRule] = [
    rule(
        "AI_SELF_REFERENCE",
        rf"\b(?:as\s+an?\s+(?:ai|artificial\s+intelligence)(?:\s+(?:language\s+)?model)?|"
        rf"as\s+a\s+(?:large\s+)?language\s+model|"
        rf"i{_APOS}m\s+an\s+ai|i\s+am\s+an\s+ai)\b",
        30, Category.AI_SELF_REFERENCE, "model self-reference",
    ),
]

HUMAN_COLLOQUIAL_RULES: list[PatternRule] = [
    rule(
        "HUMAN_SLANG",
        r"\b(?:lol|lmao|omg|wtf|tbh|imo|imho|idk)\b",
        20, Category.HUMAN_COLLOQUIAL, "internet slang",
    ),
    rule(
        "HUMAN_CONTRACTION",
        r"\b(?:gonna|wanna|gotta|kinda|sorta|dunno)\b",
        20, Category.HUMAN_COLLOQUIAL, "informal contraction",
    ),
    rule(
        "HUMAN_OPINION",
        r"\b(?:i\s+think|i\s+feel|i\s+believe|personally|honestly)\b",
        15, Category.HUMAN_COLLOQUIAL, "first-person opinion",
    ),
    rule(
        "HUMAN_MULTI_PUNCT",
        r"\.{3,}|…|!{2,}|\?{2,}",
        15, Category.HUMAN_COLLOQUIAL, "repeated punctuation",
    ),
    rule(
        "HUMAN_FILLER",
        r"\b(?:um+|uh+|you\s+know)\b",
        15, Category.HUMAN_COLLOQUIAL, "filler word",
    ),
]

PERSONAL_EXPERIENCE_RULES: list[PatternRule] = [
    rule(
        "PERSONAL_POSSESSIVE",
        r"\bmy\s+(?:experience|opinion|view|perspective|story|life|family|friend)\b",
        25, Category.PERSONAL_EXPERIENCE, "personal possession",
    ),
    rule(
        "PERSONAL_RECALL",
        r"\bi\s+(?:remember|experienced|went|saw|felt|thought)\b",
        25, Category.PERSONAL_EXPERIENCE, "recalled experience",
    ),
    rule(
        "PERSONAL_TIMEFRAME",
        r"\b(?:yesterday|last\s+week|when\s+i\s+was|growing\s+up)\b",
        20, Category.PERSONAL_EXPERIENCE, "personal timeframe",
    ),
]


# ============================================================
# HYPERREAL / MANIPULATION RULES
# ============================================================

SENSATIONAL_RULES: list[PatternRule] = [
    rule(
        "SENSATIONAL_SHOCK",
        r"\bshocking\b",
        20, Category.SENSATIONAL, "shock framing",
    ),
    rule(
        "SENSATIONAL_CLICKBAIT",
        rf"\b(?:you\s+won{_APOS}t\s+believe|you\s+will\s+not\s+believe|"
        rf"doctors\s+hate\s+(?:this|him|her)|what\s+happened\s+next)\b",
        25, Category.SENSATIONAL, "clickbait phrase",
    ),
    rule(
        "SENSATIONAL_SUPERLATIVE",
        r"\b(?:unbelievable|incredible|amazing|explosive|bombshell|mind-?blowing|"
        r"devastating|exclusive)\b",
        15, Category.SENSATIONAL, "sensational adjective",
    ),
    rule(
        "SENSATIONAL_URGENCY",
        r"\b(?:breaking|urgent)\b",
        15, Category.SENSATIONAL, "urgency label",
    ),
]

MANIPULATION_RULES: list[PatternRule] = [
    rule(
        "MANIP_PROXIMATE_SOURCE",
        r"\bsources\s+close\s+to\b",
        20, Category.MANIPULATION, "unnamed proximate source",
    ),
    rule(
        "MANIP_LEAK",
        r"\bleaked\s+(?:documents?|memos?|emails?|files?|recordings?)\b",
        22, Category.MANIPULATION, "leaked material",
    ),
    rule(
        "MANIP_ANONYMOUS",
        r"\b(?:anonymous|unnamed)\s+(?:sources?|insiders?|officials?|whistleblowers?)\b",
        18, Category.MANIPULATION, "anonymous sourcing",
    ),
    rule(
        "MANIP_INSIDER_REVEAL",
        r"\binsiders?\s+(?:claim|reveal|say|allege)s?\b",
        18, Category.MANIPULATION, "insider claim",
    ),
]


# ============================================================
# NEWS CREDIBILITY RULES
# ============================================================

ATTRIBUTION_RULES: list[PatternRule] = [
    rule(
        "ATTR_ACCORDING_TO",
        r"\baccording\s+to\b",
        15, Category.ATTRIBUTION, "explicit attribution",
    ),
    rule(
        "ATTR_REPORTED",
        r"\b(?:sources\s+say|reported\s+by|spokes(?:person|man|woman)|quoted)\b",
        15, Category.ATTRIBUTION, "reporting attribution",
    ),
    rule(
        "ATTR_QUOTED_SPEECH",
        r"[\"“][^\"“”]{3,}[\"”]",
        15, Category.ATTRIBUTION, "quoted speech",
    ),
]

SPECIFICITY_RULES: list[PatternRule] = [
    rule(
        "SPEC_MONTH_DATE",
        r"\b(?:january|february|march|april|may|june|july|august|september|"
        r"october|november|december)\s+\d{1,2}(?:st|nd|rd|th)?\b",
        10, Category.SPECIFICITY, "calendar date",
    ),
    rule(
        "SPEC_NUMERIC_DATE",
        r"\b\d{1,2}/\d{1,2}/\d{4}\b",
        10, Category.SPECIFICITY, "numeric date",
    ),
    rule(
        "SPEC_YEAR",
        r"\b(?:19|20)\d{2}\b",
        10, Category.SPECIFICITY, "year",
    ),
    rule(
        "SPEC_FIGURE",
        r"\b\d+(?:\.\d+)?\s*(?:percent|%|million|billion|thousand)",
        10, Category.SPECIFICITY, "quantified figure",
    ),
]

CONSPIRACY_RULES: list[PatternRule] = [
    rule(
        "CONSP_COVER_UP",
        r"\b(?:cover-?\s?up|conspiracy|secret\s+agenda|hidden\s+truth)\b",
        30, Category.CONSPIRACY, "cover-up framing",
    ),
    rule(
        "CONSP_AWAKENING",
        rf"\b(?:wake\s+up|sheeple|they\s+(?:don{_APOS}t|do\s+not)\s+want\s+you\s+to\s+know)\b",
        30, Category.CONSPIRACY, "awakening appeal",
    ),
]

EMOTIONAL_RULES: list[PatternRule] = [
    rule(
        "EMOTIONAL_CHARGED",
        r"\b(?:outraged|furious|devastated|terrified|panic|crisis|disaster)\b",
        15, Category.EMOTIONAL, "charged emotion",
    ),
]


# ============================================================
# RULEBOOK
# ============================================================

@dataclass(frozen=True)
class RuleBook:
    """
    The complete, immutable rule library.

    Rules are evaluated in declaration order. `extended()` returns a
    new RuleBook; an existing one is never modified.
    """
    rules: tuple[PatternRule, ...]
    version: str = RULEBOOK_VERSION
    _by_category: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        seen: set[str] = set()
        grouped: dict[Category, list[PatternRule]] = {}
        for r in self.rules:
            if r.id in seen:
                raise ValueError(f"Duplicate rule id: {r.id}")
            seen.add(r.id)
            grouped.setdefault(r.category, []).append(r)
        object.__setattr__(
            self, "_by_category", {c: tuple(rs) for c, rs in grouped.items()},
        )

    def for_category(self, category: Category) -> tuple[PatternRule, ...]:
        return self._by_category.get(category, ())

    @property
    def categories(self) -> list[Category]:
        """Categories in the order their first rule appears."""
        return list(self._by_category)

    def extended(
        self,
        extra: Iterable[PatternRule],
        version: Optional[str] = None,
    ) -> "RuleBook":
        return RuleBook(
            rules=self.rules + tuple(extra),
            version=version or self.version,
        )

    def describe(self) -> list[dict]:
        """Serializable view of every rule, used by GET /patterns."""
        return [
            {
                "id": r.id,
                "category": r.category.value,
                "target": r.category.target,
                "label": r.label,
                "weight": r.weight,
            }
            for r in self.rules
        ]


RULEBOOK = RuleBook(
    rules=tuple(
        AI_TRANSITION_RULES
        + AI_SELF_REFERENCE_RULES
        + HUMAN_COLLOQUIAL_RULES
        + PERSONAL_EXPERIENCE_RULES
        + SENSATIONAL_RULES
        + MANIPULATION_RULES
        + ATTRIBUTION_RULES
        + SPECIFICITY_RULES
        + CONSPIRACY_RULES
        + EMOTIONAL_RULES
    ),
)
