"""Property-based tests for the visibility scoring pipeline.

Uses Hypothesis to verify:
  Form score:
    1. test_form_score_bounded          – 0 ≤ form score ≤ 100
    2. test_deterministic               – same answers ⇒ identical score
    3. test_unknown_value_never_raises  – an unknown value never lifts the score
       above what leaving that category unanswered would give
    4. test_empty_answers_zero          – no answered category ⇒ 0
  Blend:
    5. test_final_score_bounded         – 0 ≤ final ≤ 100 for any audit input
    6. test_absent_audit_fallback       – no audit ⇒ round(form × 0.8)
    7. test_final_between_inputs        – valid audit ⇒ final within [min, max] of inputs
  Tiers:
    8. test_tier_monotonic              – higher score ⇒ same or higher tier
"""
from decimal import Decimal, ROUND_HALF_UP

from hypothesis import HealthCheck, given, settings as h_settings
from hypothesis import strategies as st

from app.models import Category, FormAnswers, Tier
from app.scoring.blender import blend_scores, compute_final_score
from app.scoring.form_score import compute_form_score
from app.scoring.tiers import classify
from app.scoring.weights import OPTION_TABLE

# ── Hypothesis configuration ──────────────────────────────────────────────────
h_settings.register_profile(
    "ci",
    max_examples=300,
    suppress_health_check=[HealthCheck.too_slow],
)
h_settings.load_profile("ci")


# ── Strategy helpers ──────────────────────────────────────────────────────────

def _value_for(category: Category):
    known = st.sampled_from(list(OPTION_TABLE[category]))
    unknown = st.text(min_size=0, max_size=12)
    single = st.one_of(known, unknown)
    multiple = st.lists(single, max_size=4)
    return st.one_of(single, multiple)


_answers = st.fixed_dictionaries(
    {},
    optional={c.value: _value_for(c) for c in Category},
).map(FormAnswers.from_raw)

_audit = st.one_of(
    st.none(),
    st.integers(min_value=-50, max_value=200),
    st.floats(allow_nan=True, allow_infinity=True),
    st.text(max_size=5),
)

_TIER_ORDER = [Tier.CRITICAL, Tier.MEDIUM, Tier.GOOD, Tier.EXCELLENT]


class TestFormScoreProperties:
    """Property-based tests for compute_form_score."""

    @given(answers=_answers)
    def test_form_score_bounded(self, answers):
        assert 0 <= compute_form_score(answers) <= 100

    @given(answers=_answers)
    def test_deterministic(self, answers):
        assert compute_form_score(answers) == compute_form_score(answers)

    @given(answers=_answers, category=st.sampled_from(list(Category)))
    def test_unknown_value_never_raises(self, answers, category):
        raw = answers.to_raw()
        raw.pop(category.value, None)
        without = compute_form_score(raw)
        raw[category.value] = "definitely-not-an-option"
        with_unknown = compute_form_score(raw)
        assert with_unknown <= without

    @given(blanks=st.dictionaries(
        st.sampled_from([c.value for c in Category]),
        st.one_of(st.just(""), st.just("   "), st.just([])),
    ))
    def test_empty_answers_zero(self, blanks):
        assert compute_form_score(blanks) == 0


class TestBlendProperties:
    """Property-based tests for the final score blend."""

    @given(website=_audit, answers=_answers)
    def test_final_score_bounded(self, website, answers):
        assert 0 <= compute_final_score(website, answers) <= 100

    @given(answers=_answers)
    def test_absent_audit_fallback(self, answers):
        form = compute_form_score(answers)
        expected = int((Decimal(form) * Decimal("0.8")).quantize(Decimal(1), rounding=ROUND_HALF_UP))
        assert compute_final_score(None, answers) == expected

    @given(
        website=st.integers(min_value=1, max_value=100),
        form=st.integers(min_value=1, max_value=100),
    )
    def test_final_between_inputs(self, website, form):
        final = blend_scores(website, form).final_score
        assert min(website, form) <= final <= max(website, form)


class TestTierProperties:
    """Property-based tests for tier classification."""

    @given(a=st.integers(min_value=0, max_value=100), b=st.integers(min_value=0, max_value=100))
    def test_tier_monotonic(self, a, b):
        low, high = sorted((a, b))
        assert _TIER_ORDER.index(classify(low)) <= _TIER_ORDER.index(classify(high))
