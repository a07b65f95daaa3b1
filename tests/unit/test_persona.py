"""Unit tests for persona classification"""

import pytest
from watcard_insights.domain.models import Persona
from watcard_insights.domain.persona import PersonaInputs, build_persona, classify_persona


def inputs(**overrides) -> PersonaInputs:
    """Neutral spending profile that lands on the default persona"""
    values = dict(
        total_spent=1000.0,
        coffee_tax=0.0,
        late_night_dining_tax=0.0,
        late_night_spend=0.0,
        daily_burn_rate=20.0,
        dining_total=0.0,
        groceries_total=0.0,
        academic_total=0.0,
    )
    values.update(overrides)
    return PersonaInputs(**values)


@pytest.mark.parametrize(
    "overrides, expected",
    [
        (dict(late_night_spend=260.0), Persona.MIDNIGHT_SNACKER),
        (dict(coffee_tax=81.0), Persona.CAFFEINE_ADDICT),
        (dict(total_spent=400.0, coffee_tax=61.0), Persona.CAFFEINE_ADDICT),
        (dict(late_night_dining_tax=41.0), Persona.LATE_NIGHT_GOURMET),
        (dict(dining_total=560.0), Persona.CAMPUS_FOODIE),
        (dict(groceries_total=460.0), Persona.SMART_SHOPPER),
        (dict(academic_total=26.0), Persona.SCHOLAR),
        (dict(daily_burn_rate=7.99), Persona.BUDGET_MASTER),
        (dict(), Persona.CAMPUS_EXPLORER),
    ],
)
def test_each_rule(overrides, expected):
    assert classify_persona(inputs(**overrides)) is expected


def test_thresholds_are_strict():
    """Exactly at a threshold does not fire"""
    assert classify_persona(inputs(late_night_spend=250.0)) is Persona.CAMPUS_EXPLORER
    assert classify_persona(inputs(coffee_tax=80.0)) is Persona.CAMPUS_EXPLORER
    assert classify_persona(inputs(academic_total=25.0)) is Persona.CAMPUS_EXPLORER
    assert classify_persona(inputs(daily_burn_rate=8.0)) is Persona.CAMPUS_EXPLORER


def test_midnight_snacker_beats_caffeine_addict():
    """Late-night fraction 0.30 with 90 in coffee is still a Midnight Snacker"""
    assert classify_persona(inputs(late_night_spend=300.0, coffee_tax=90.0)) is Persona.MIDNIGHT_SNACKER


def test_rule_order_dining_before_groceries():
    assert classify_persona(inputs(dining_total=560.0, groceries_total=460.0)) is Persona.CAMPUS_FOODIE


def test_zero_total_spent_disables_fractions():
    """Only the fixed thresholds or the default can fire without spend"""
    profile = inputs(total_spent=0.0, late_night_spend=5.0, dining_total=5.0, daily_burn_rate=0.0)
    assert classify_persona(profile) is Persona.BUDGET_MASTER
    assert classify_persona(inputs(total_spent=0.0, academic_total=30.0)) is Persona.SCHOLAR


def test_build_persona_profile():
    profile = build_persona(inputs(late_night_spend=310.0))

    assert profile.title == "Midnight Snacker"
    assert profile.emoji == "🌙"
    assert profile.description == "31% of spending happens after 9 PM"


def test_build_persona_descriptions():
    assert build_persona(inputs(coffee_tax=90.5)).description == "$90.50 poured into coffee shops"
    assert build_persona(inputs(daily_burn_rate=5.0)).description == "Only $5.00/day, most frugal on campus"
    assert build_persona(inputs()).description == "Well-rounded spending across the University of Waterloo"
