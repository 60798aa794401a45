import pytest

from medisco.core.symptoms import DEFAULT_ADVICE, SYMPTOM_RULES, SymptomRule, advise


@pytest.mark.parametrize('symptoms', ['I have chest pain', 'CHEST PAIN since morning', 'Chest Pain'])
def test_chest_pain_is_urgent_regardless_of_case(symptoms: str) -> None:
    advice = advise(symptoms)

    assert advice.urgency == 'high'
    assert advice.recommendation.startswith('You should visit the emergency department immediately.')


def test_fever_rule_takes_precedence_over_headache() -> None:
    advice = advise('I have a headache and a fever')

    assert advice.urgency == 'medium'
    assert advice.recommendation == SYMPTOM_RULES[1].recommendation


def test_emergency_keywords_beat_everything_else() -> None:
    assert advise('fever, cough and difficulty breathing').urgency == 'high'


def test_unmatched_symptoms_get_default_advice() -> None:
    advice = advise('my elbow itches')

    assert advice == DEFAULT_ADVICE
    assert advice.urgency == 'low'


def test_advise_is_deterministic() -> None:
    assert advise('sore throat') == advise('sore throat')


def test_advise_follows_custom_rule_order() -> None:
    rules = (
        SymptomRule(keywords=('rash',), recommendation='Apply calamine lotion.', urgency='low'),
        SymptomRule(keywords=('rash', 'swelling'), recommendation='See a doctor.', urgency='medium'),
    )

    assert advise('rash and swelling', rules=rules).recommendation == 'Apply calamine lotion.'
    assert advise('swelling', rules=rules).urgency == 'medium'
