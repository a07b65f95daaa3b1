"""Persona classification - one descriptive label from aggregate spending"""

from dataclasses import dataclass
from typing import Callable, List, Tuple
from watcard_insights.domain.models import Persona, PersonaProfile


@dataclass
class PersonaInputs:
    """Aggregates the persona rules look at"""

    total_spent: float
    coffee_tax: float
    late_night_dining_tax: float
    late_night_spend: float
    daily_burn_rate: float
    dining_total: float
    groceries_total: float
    academic_total: float

    def fraction(self, amount: float) -> float:
        return amount / self.total_spent if self.total_spent > 0 else 0.0

    @property
    def late_night_fraction(self) -> float:
        return self.fraction(self.late_night_spend)

    @property
    def coffee_fraction(self) -> float:
        return self.fraction(self.coffee_tax)

    @property
    def dining_fraction(self) -> float:
        return self.fraction(self.dining_total)

    @property
    def groceries_fraction(self) -> float:
        return self.fraction(self.groceries_total)


# Evaluated top to bottom, first match wins. Most dramatic habits surface first.
PERSONA_RULES: List[Tuple[Callable[[PersonaInputs], bool], Persona]] = [
    (lambda p: p.late_night_fraction > 0.25, Persona.MIDNIGHT_SNACKER),
    (lambda p: p.coffee_tax > 80 or p.coffee_fraction > 0.15, Persona.CAFFEINE_ADDICT),
    (lambda p: p.late_night_dining_tax > 40, Persona.LATE_NIGHT_GOURMET),
    (lambda p: p.dining_fraction > 0.55, Persona.CAMPUS_FOODIE),
    (lambda p: p.groceries_fraction > 0.45, Persona.SMART_SHOPPER),
    (lambda p: p.academic_total > 25, Persona.SCHOLAR),
    (lambda p: p.daily_burn_rate < 8, Persona.BUDGET_MASTER),
]

EMOJI = {
    Persona.MIDNIGHT_SNACKER: "🌙",
    Persona.CAFFEINE_ADDICT: "☕",
    Persona.LATE_NIGHT_GOURMET: "🍟",
    Persona.CAMPUS_FOODIE: "🍜",
    Persona.SMART_SHOPPER: "🛒",
    Persona.SCHOLAR: "📚",
    Persona.BUDGET_MASTER: "💰",
    Persona.CAMPUS_EXPLORER: "🎓",
}


def classify_persona(inputs: PersonaInputs) -> Persona:
    """Pick the first persona whose rule fires, Campus Explorer otherwise"""
    for matches, persona in PERSONA_RULES:
        if matches(inputs):
            return persona
    return Persona.CAMPUS_EXPLORER


def describe_persona(persona: Persona, inputs: PersonaInputs) -> str:
    """One-line explanation shown under the persona title"""
    if persona is Persona.MIDNIGHT_SNACKER:
        return f"{inputs.late_night_fraction * 100:.0f}% of spending happens after 9 PM"
    if persona is Persona.CAFFEINE_ADDICT:
        return f"${inputs.coffee_tax:.2f} poured into coffee shops"
    if persona is Persona.LATE_NIGHT_GOURMET:
        return f"${inputs.late_night_dining_tax:.2f} in late-night dining runs"
    if persona is Persona.CAMPUS_FOODIE:
        return f"{inputs.dining_fraction * 100:.0f}% of budget spent dining out"
    if persona is Persona.SMART_SHOPPER:
        return f"{inputs.groceries_fraction * 100:.0f}% on groceries, impressively frugal"
    if persona is Persona.SCHOLAR:
        return f"${inputs.academic_total:.2f} invested in academic tools"
    if persona is Persona.BUDGET_MASTER:
        return f"Only ${inputs.daily_burn_rate:.2f}/day, most frugal on campus"
    return "Well-rounded spending across the University of Waterloo"


def build_persona(inputs: PersonaInputs) -> PersonaProfile:
    persona = classify_persona(inputs)
    return PersonaProfile(
        persona=persona,
        emoji=EMOJI[persona],
        description=describe_persona(persona, inputs),
    )
