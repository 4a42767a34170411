"""
Heuristic Engine Tests

Covers scoring, the decision layer and the end-to-end classifications:
  - Additive category scores and structural adjustments
  - AI threshold (strict >55) and confidence bands
  - Breakdown normalization (always sums to 100)
  - Hyperreal / manipulated detection
  - News credibility rules
  - Determinism and empty-input behavior
"""

import pytest

from reclaim.classifier import (
    authorship_confidence,
    authorship_status,
    decide_authorship,
    derive_breakdown,
    news_authenticity,
    normalize_breakdown,
)
from reclaim.engine import heuristic_engine
from reclaim.patterns import Category
from reclaim.scoring import ScoreAccumulator


AI_TEXT = (
    "Furthermore, the proposed framework provides a comprehensive approach to "
    "managing distributed resources across regions. Moreover, the architecture "
    "ensures that each component remains loosely coupled and independently "
    "deployable. It's important to note that the evaluation covered a wide "
    "range of realistic production workloads."
)

HUMAN_TEXT = "lol i think this is so dumb tbh, omg"

HYPERREAL_TEXT = (
    "SHOCKING! You won't believe what happened next. "
    "Doctors hate this bombshell trick."
)

MANIPULATED_TEXT = (
    "Sources close to the minister say leaked documents show the deal was "
    "signed, according to anonymous insiders."
)

SAMPLES = [
    "",
    "ok",
    AI_TEXT,
    HUMAN_TEXT,
    HYPERREAL_TEXT,
    MANIPULATED_TEXT,
    "I remember my family trip yesterday... it was gonna rain!!",
    "As an AI language model, I cannot browse. Therefore, overall, in summary, no.",
    "word " * 400,
]


# ============================================================
# SCORING
# ============================================================

class TestScoring:

    def test_match_count_times_weight(self):
        acc = heuristic_engine.score("furthermore furthermore")
        assert acc.count(Category.AI_TRANSITION) == 2
        assert acc.scores[Category.AI_TRANSITION] == 40
        assert acc.ai_score == 40

    def test_one_indicator_per_category(self):
        acc = heuristic_engine.score("lol tbh omg, i think so")
        assert len(acc.indicators) == 2
        assert acc.count(Category.HUMAN_COLLOQUIAL) == 4
        assert acc.indicators[0].startswith("4 ")

    def test_indicator_carries_sample(self):
        acc = heuristic_engine.score("Moreover, the plan holds.")
        assert 'e.g. "Moreover"' in acc.indicators[0]

    def test_indicators_follow_rulebook_order(self):
        acc = heuristic_engine.score("lol. Furthermore, it is fine.")
        assert acc.indicators[0].startswith("1 ")
        assert "Furthermore" in acc.indicators[0]

    def test_long_sentences_add_ai(self):
        text = " ".join(f"token{i}" for i in range(30)) + "."
        acc = heuristic_engine.score(text)
        assert acc.ai_score == 20
        assert "very long sentences" in acc.indicators

    def test_short_sentences_add_human(self):
        acc = heuristic_engine.score("Nice day. Good food.")
        assert acc.human_score == 15
        assert "short, casual sentences" in acc.indicators

    def test_dense_sentences_only_in_technical_mode(self):
        text = " ".join(["interoperability"] * 3 + ["configuration"] * 3 + ["representation"] * 2
                        + ["implementation", "architecture", "infrastructure", "organization",
                           "documentation", "specialization", "collaboration", "recommendation"])
        plain = heuristic_engine.score(text)
        technical = heuristic_engine.score(text, technical=True)
        assert technical.ai_score == plain.ai_score + 15
        assert "long, dense sentences" in technical.indicators

    def test_repeated_words_add_ai(self):
        acc = heuristic_engine.score("alpha bravo charlie delta " * 6)
        assert acc.ai_score == 10
        assert "repeated words: alpha, bravo, charlie" in acc.indicators

    def test_negative_contribution_rejected(self):
        with pytest.raises(ValueError):
            ScoreAccumulator().add("ai", -1)

    @pytest.mark.parametrize("text", SAMPLES)
    def test_scores_never_negative(self, text):
        acc = heuristic_engine.score(text, technical=True)
        assert acc.ai_score >= 0
        assert acc.human_score >= 0
        assert acc.manipulation_score >= 0
        assert acc.hyperreal_score >= 0


# ============================================================
# DECISION PRIMITIVES
# ============================================================

class TestDecisionPrimitives:

    def test_threshold_is_strict(self):
        at_threshold = decide_authorship(ScoreAccumulator(ai_score=55, human_score=45))
        assert at_threshold.ai_probability == 55.0
        assert at_threshold.is_ai is False

        above = decide_authorship(ScoreAccumulator(ai_score=56, human_score=44))
        assert above.is_ai is True

    def test_confidence_bounds(self):
        for p in range(0, 101):
            c = authorship_confidence(p)
            assert 65 <= c <= 90

    def test_confidence_monotonic_in_distance(self):
        values = [authorship_confidence(50 + d) for d in range(0, 51)]
        assert values == sorted(values)
        assert authorship_confidence(50) == 65

    def test_model_cap(self):
        assert authorship_confidence(100, cap=95) == 95

    @pytest.mark.parametrize("confidence,is_ai,expected", [
        (90, True, "ai_generated"),
        (80, True, "ai_generated"),
        (90, False, "authentic"),
        (76, False, "authentic"),
        (75, True, "uncertain"),
        (65, False, "uncertain"),
    ])
    def test_status_bands(self, confidence, is_ai, expected):
        assert authorship_status(confidence, is_ai) == expected

    @pytest.mark.parametrize("confidence,score,expected", [
        (90, 90, "real"),
        (90, 20, "fake"),
        (90, 50, "misleading"),
        (85, 95, "uncertain"),
    ])
    def test_news_authenticity(self, confidence, score, expected):
        assert news_authenticity(confidence, score) == expected

    @pytest.mark.parametrize("p", [0, 0.5, 12.3, 33.3, 50, 55, 66.6, 87.5, 99.9, 100])
    def test_derived_breakdown_sums_to_100(self, p):
        b = derive_breakdown(p)
        assert b.total() == 100
        assert min(b.to_dict().values()) >= 0

    def test_derived_breakdown_rounds_halves_up(self):
        b = derive_breakdown(62.5)
        assert b.to_dict() == {
            "ai_generated": 50, "ai_refined": 13, "human_refined": 11, "human_written": 26,
        }

    def test_derived_breakdown_split(self):
        b = derive_breakdown(100)
        assert b.ai_generated == 80
        assert b.ai_refined == 20
        assert b.human_refined == 0
        assert b.human_written == 0

    def test_normalize_rescales(self):
        b = normalize_breakdown({
            "ai_generated": 10, "ai_refined": 10, "human_refined": 10, "human_written": 10,
        })
        assert b.to_dict() == {
            "ai_generated": 25, "ai_refined": 25, "human_refined": 25, "human_written": 25,
        }

    def test_normalize_absorbs_small_drift(self):
        b = normalize_breakdown({
            "ai_generated": 60, "ai_refined": 20, "human_refined": 10, "human_written": 11,
        })
        assert b.total() == 100
        assert b.ai_generated == 59

    def test_normalize_clamps_negatives(self):
        b = normalize_breakdown({
            "ai_generated": -20, "ai_refined": 50, "human_refined": 50, "human_written": 0,
        })
        assert b.ai_generated == 0
        assert b.total() == 100

    def test_normalize_all_zero(self):
        assert normalize_breakdown({}).total() == 100


# ============================================================
# AUTHORSHIP CLASSIFICATION
# ============================================================

class TestAuthorship:

    def test_ai_transitions_classified_ai(self):
        acc = heuristic_engine.score(AI_TEXT)
        assert acc.human_score == 0
        assert acc.ai_score == 65

        v = heuristic_engine.classify_authorship(AI_TEXT)
        assert v.status == "ai_generated"
        assert v.is_ai is True
        assert v.ai_probability == 100
        assert v.confidence == 90
        assert "AI probability: 100%" in v.reasoning

    def test_casual_text_classified_human(self):
        v = heuristic_engine.classify_authorship(HUMAN_TEXT)
        assert v.status == "authentic"
        assert v.is_ai is False
        assert v.human_probability == 100
        assert "Human probability: 100%" in v.reasoning

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_is_uncertain(self, text):
        v = heuristic_engine.classify_authorship(text)
        assert v.status == "uncertain"
        assert v.confidence == 65
        assert v.ai_probability == 50
        assert v.breakdown.total() == 100

    def test_no_signal_is_uncertain(self):
        v = heuristic_engine.classify_authorship(
            "The quarterly report lists revenue for each regional office in the table."
        )
        assert v.status == "uncertain"
        assert v.confidence == 65

    @pytest.mark.parametrize("text", SAMPLES)
    def test_output_contract(self, text):
        v = heuristic_engine.classify_authorship(text)
        assert v.breakdown.total() == 100
        assert 65 <= v.confidence <= 90
        assert abs(v.ai_probability + v.human_probability - 100) < 0.2
        assert v.status in ("authentic", "ai_generated", "uncertain")
        assert isinstance(v.reasoning, str) and v.reasoning

    @pytest.mark.parametrize("text", SAMPLES)
    def test_deterministic(self, text):
        assert heuristic_engine.classify_authorship(text) == heuristic_engine.classify_authorship(text)

    def test_self_reference_dominates(self):
        v = heuristic_engine.classify_authorship(
            "As an AI language model, I do not have personal opinions about the film or its director."
        )
        assert v.is_ai is True


# ============================================================
# MANIPULATION
# ============================================================

class TestManipulation:

    def test_hyperreal(self):
        v = heuristic_engine.classify_manipulation(HYPERREAL_TEXT)
        assert v.status == "hyperreal"
        assert v.confidence == 90
        assert "sensationalized framing" in v.reasoning

    def test_manipulated(self):
        v = heuristic_engine.classify_manipulation(MANIPULATED_TEXT)
        assert v.status == "manipulated"
        assert 65 <= v.confidence <= 90
        assert "anonymous or leaked sourcing" in v.reasoning

    def test_below_thresholds_falls_back_to_authorship(self):
        assert heuristic_engine.classify_manipulation(HUMAN_TEXT).status == "authentic"

    def test_empty(self):
        assert heuristic_engine.classify_manipulation("").status == "uncertain"

    @pytest.mark.parametrize("text", SAMPLES)
    def test_breakdown_sums(self, text):
        assert heuristic_engine.classify_manipulation(text).breakdown.total() == 100


# ============================================================
# NEWS CREDIBILITY
# ============================================================

class TestNewsCredibility:

    def test_attributed_report_is_credible(self):
        v = heuristic_engine.classify_news_credibility(
            "According to sources at the city council, the new budget was approved "
            "on Tuesday after a lengthy public session."
        )
        assert v.credibility_score >= 70
        assert v.is_real is True
        assert "Proper source attribution" in v.fact_check.claims_verified
        assert "according to" in [s.lower() for s in v.fact_check.sources_found]

    def test_heuristic_never_claims_real(self):
        v = heuristic_engine.classify_news_credibility(
            "According to Reuters, the index fell 4.5 percent on March 3, 2024."
        )
        assert v.confidence <= 85
        assert v.authenticity == "uncertain"

    def test_conspiracy_language_lowers_score(self):
        v = heuristic_engine.classify_news_credibility(
            "Wake up! The cover-up goes all the way to the top and the hidden truth "
            "is being buried."
        )
        assert v.credibility_score <= 40
        assert v.is_real is False
        assert "Conspiracy theory language" in v.fact_check.red_flags
        assert "Lack of source attribution" in v.fact_check.red_flags

    def test_sensational_penalty(self):
        v = heuristic_engine.classify_news_credibility(
            "BREAKING: shocking, unbelievable, explosive news about the mayor."
        )
        assert any(f.startswith("Excessive sensationalized language") for f in v.fact_check.red_flags)
        assert v.credibility_score == 70 - 20 - 15

    def test_emotional_penalty(self):
        v = heuristic_engine.classify_news_credibility(
            "Residents are furious and terrified as the crisis becomes a disaster."
        )
        assert "Emotional manipulation tactics" in v.fact_check.red_flags

    def test_source_url_listed(self):
        v = heuristic_engine.classify_news_credibility(
            "The council met today.", source_url="https://example.org/story",
        )
        assert "https://example.org/story" in v.fact_check.sources_found

    def test_score_clamped(self):
        text = (
            "Wake up sheeple! The cover-up and secret agenda they don't want you to know. "
            "Shocking, unbelievable, incredible, explosive! Furious, terrified, panic, disaster!"
        )
        v = heuristic_engine.classify_news_credibility(text)
        assert v.credibility_score == 0
        assert v.confidence == 85

    def test_research_summary_counts(self):
        v = heuristic_engine.classify_news_credibility("The council met today.")
        assert v.research_summary.startswith("Pattern-based analysis found 1 red flags and 1 positive indicators.")

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_empty_text_is_neutral_and_uncertain(self, text):
        v = heuristic_engine.classify_news_credibility(text, source_url="https://example.org/a")
        assert v.authenticity == "uncertain"
        assert v.credibility_score == 50
        assert v.confidence == 70
        assert v.is_real is False
        assert v.fact_check.claims_verified == ()
        assert v.fact_check.red_flags == ()
        assert "No text provided" in v.reasoning
