import pytest

from services.errors import InvalidRecordError
from services.factor_analyzer import (
    BALANCED_ADVICE,
    analyze_all,
    analyze_factor,
    compose_checkin_advice,
    find_correlations,
)
from services.records import CheckInSlot


@pytest.mark.parametrize('kind, value, impact', [
    ('stress', 9, 'high'),
    ('stress', 8, 'high'),
    ('stress', 6, 'moderate'),
    ('stress', 5, 'moderate'),
    ('stress', 3, 'optimal'),
    ('mood', 2, 'high'),
    ('mood', 5, 'moderate'),
    ('mood', 6, 'neutral'),
    ('mood', 8, 'positive'),
    ('sleep', 0, 'high'),
    ('sleep', 5, 'high'),
    ('sleep', 6.5, 'moderate'),
    ('sleep', 8, 'optimal'),
    ('sleep', 10, 'moderate'),
    ('sleep', None, 'neutral'),
    ('hydration', 0, 'high'),
    ('hydration', 3, 'moderate'),
    ('hydration', 5, 'low'),
    ('hydration', 8, 'optimal'),
    ('activity', '', 'low'),
    ('activity', 'went for a jog', 'positive'),
    ('activity', 'homework', 'neutral'),
    ('activity', 'video games', 'neutral'),
])
def test_impact_tiers(kind, value, impact):
    assert analyze_factor(kind, value).impact == impact


def test_skipped_meal_weighs_more_in_the_morning():
    assert analyze_factor('food', False, 'morning').impact == 'high'
    assert analyze_factor('food', False, 'evening').impact == 'moderate'
    assert analyze_factor('food', True, 'morning').impact == 'positive'
    assert analyze_factor('food', None, 'morning').impact == 'neutral'


def test_study_activity_flags_mood_and_stress():
    analysis = analyze_factor('activity', 'Study session')
    assert analysis.tier == 'study'
    assert analysis.affected_factors == ['mood', 'stress']


def test_insights_mention_the_recorded_value():
    analysis = analyze_factor('sleep', 5.5)
    assert any('5.5h' in insight for insight in analysis.insights)
    assert analysis.recommendations


def test_unknown_factor_is_rejected():
    with pytest.raises(InvalidRecordError):
        analyze_factor('caffeine', 3)


def test_correlations_for_a_rough_morning():
    slot = CheckInSlot(sleep=4, stress=8, mood=3, eaten=False, hydration=2, activity='')
    pairs = [(c.factor1, c.factor2) for c in find_correlations(slot)]
    assert pairs == [
        ('sleep', 'stress'),
        ('mood', 'activity'),
        ('food', 'stress'),
        ('hydration', 'energy'),
        ('stress', 'sleep'),
    ]
    assert all(c.correlation == 'negative' for c in find_correlations(slot))


def test_walking_breaks_the_mood_activity_correlation():
    slot = CheckInSlot(mood=4, activity='Evening walk', hydration=6)
    assert find_correlations(slot) == []


def test_unrecorded_sleep_never_correlates():
    slot = CheckInSlot(sleep=None, stress=9, mood=8, hydration=8, activity='gym')
    assert find_correlations(slot) == []


def test_analyze_all_summarizes_high_impact_factors():
    analysis = analyze_all({'sleep': 4, 'stress': 9, 'mood': 6, 'hydration': 5,
                            'activity': 'run', 'eaten': True}, 'morning')
    assert analysis.summary['priority'] == 'high'
    assert analysis.summary['factors'] == ['sleep', 'stress']
    assert '2 high-impact areas' in analysis.summary['message']


def test_analyze_all_ignores_sleep_outside_the_morning():
    analysis = analyze_all({'sleep': 2, 'mood': 8, 'stress': 3, 'hydration': 8,
                            'activity': 'yoga', 'eaten': True}, 'evening')
    assert analysis.analyses['sleep'].tier == 'not_recorded'
    assert analysis.summary['priority'] == 'optimal'


def test_analysis_serializes_with_camel_case_keys():
    data = analyze_all({'mood': 2}).to_dict()
    assert set(data) == {'analyses', 'correlations', 'summary'}
    assert 'affectedFactors' in data['analyses']['mood']


def test_advice_leads_with_the_biggest_problem():
    advice = compose_checkin_advice('morning', {
        'sleep': 4, 'stress': 8, 'mood': 3, 'eaten': False, 'hydration': 2, 'activity': '',
    })
    assert advice.startswith("Great job checking in! Prioritize sleep - it affects everything else. ")
    assert "Focus on sleep hygiene first" in advice
    assert advice.endswith("Mood: 3/10, Stress: 8/10, Sleep: 4h, Hydration: 2 cups")


def test_advice_for_a_balanced_afternoon():
    advice = compose_checkin_advice('afternoon', {
        'mood': 8, 'stress': 3, 'hydration': 8, 'activity': 'walk', 'eaten': True,
    })
    assert advice == ("Great job checking in! " + BALANCED_ADVICE
                      + "Mood: 8/10, Stress: 3/10, Hydration: 8 cups")
