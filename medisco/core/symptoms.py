"""Keyword-based symptom advice.

Rules are checked in the order they are declared and the first rule with a
keyword found in the description wins, so more urgent rules come first.
"""

from typing import Literal, NamedTuple

from pydantic import BaseModel

Urgency = Literal['low', 'medium', 'high']


class SymptomRule(NamedTuple):
    keywords: tuple[str, ...]
    recommendation: str
    urgency: Urgency


class SymptomAdvice(BaseModel):
    recommendation: str
    urgency: Urgency


DEFAULT_ADVICE = SymptomAdvice(
    recommendation=(
        'Based on your symptoms, home care may be appropriate. '
        'However, if symptoms worsen, please contact a doctor.'
    ),
    urgency='low',
)

SYMPTOM_RULES: tuple[SymptomRule, ...] = (
    SymptomRule(
        keywords=('chest pain', 'difficulty breathing', 'severe bleeding'),
        recommendation=(
            'You should visit the emergency department immediately. '
            'These symptoms may indicate a serious condition.'
        ),
        urgency='high',
    ),
    SymptomRule(
        keywords=('fever',),
        recommendation=(
            'Take Paracetamol (500mg) every 6 hours as needed for fever. Stay hydrated and rest. '
            'If fever persists beyond 48 hours, see a doctor.'
        ),
        urgency='medium',
    ),
    SymptomRule(
        keywords=('headache',),
        recommendation=(
            'You can take Panadol (500mg) or Ibuprofen for headache relief. '
            'Ensure you stay hydrated and rest in a quiet, dark room.'
        ),
        urgency='low',
    ),
    SymptomRule(
        keywords=('cough',),
        recommendation=(
            'Drink warm water with honey and lemon. You can also take a cough syrup like Benylin. '
            'If cough lasts more than 3 days, consult a doctor.'
        ),
        urgency='medium',
    ),
    SymptomRule(
        keywords=('sore throat',),
        recommendation='Gargle with warm salt water and drink warm fluids. Lozenges can help relieve discomfort.',
        urgency='low',
    ),
    SymptomRule(
        keywords=('stomach pain',),
        recommendation=(
            'Avoid spicy foods and take an antacid like Gaviscon. '
            'If pain persists or is severe, see a doctor.'
        ),
        urgency='medium',
    ),
    SymptomRule(
        keywords=('nausea',),
        recommendation='Drink clear fluids like ginger tea or oral rehydration solutions. Avoid heavy meals.',
        urgency='low',
    ),
    SymptomRule(
        keywords=('diarrhea',),
        recommendation=(
            'Stay hydrated with oral rehydration salts. Avoid dairy and oily foods. '
            'If it lasts over 2 days, see a doctor.'
        ),
        urgency='medium',
    ),
)


def advise(symptoms: str, rules: tuple[SymptomRule, ...] = SYMPTOM_RULES) -> SymptomAdvice:
    symptom_text = symptoms.lower()

    for rule in rules:
        if any(keyword in symptom_text for keyword in rule.keywords):
            return SymptomAdvice(recommendation=rule.recommendation, urgency=rule.urgency)

    return DEFAULT_ADVICE.model_copy()
