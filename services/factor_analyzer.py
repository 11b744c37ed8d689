"""
Per-factor wellness analysis.

Each factor of a check-in (sleep, food, hydration, stress, mood, activity) is
classified into an impact tier. The tier decides which other factors are
affected and which canned insights and recommendations are shown; the copy
lives in ``FACTOR_COPY`` so it can change without touching the rules.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, Union

from services.errors import InvalidRecordError
from services.records import (
    DEFAULT_HYDRATION, DEFAULT_MOOD, DEFAULT_STRESS, CheckInSlot, coerce_number,
)

FACTORS = ('sleep', 'food', 'hydration', 'stress', 'mood', 'activity')

ACTIVITY_EXERCISE_KEYWORDS = (
    'exercise', 'workout', 'gym', 'run', 'walk', 'jog', 'bike', 'yoga', 'stretch', 'sport',
)
ACTIVITY_STUDY_KEYWORDS = ('study', 'homework', 'class', 'read')

# (kind, tier) -> insights / recommendations. ``{value}`` is the factor value.
FACTOR_COPY: Dict[Tuple[str, str], Dict[str, List[str]]] = {
    ('sleep', 'none'): {
        'insights': [
            "Poor sleep (0-6h) significantly impacts mood and stress levels",
            "Chronic sleep deprivation increases cortisol (stress hormone)",
            "Sleep affects memory consolidation and learning",
        ],
        'recommendations': [
            "Aim for 7-9 hours of sleep for optimal wellness",
            "Maintain consistent sleep schedule (even weekends)",
            "Avoid screens 1 hour before bedtime",
            "Create a bedtime routine (reading, stretching, meditation)",
        ],
    },
    ('sleep', 'short'): {
        'insights': [
            "Your sleep ({value}h) is below optimal (7-9h)",
            "Insufficient sleep raises cortisol and makes stress harder to handle",
            "Mood regulation suffers - increased irritability and anxiety",
            "Cognitive function drops - memory and focus affected",
        ],
        'recommendations': [
            "Prioritize sleep - it affects everything else",
            "Try to get at least 7 hours tonight",
            "Limit caffeine after 2 PM",
            "Keep your bedroom cool and dark",
        ],
    },
    ('sleep', 'slightly_short'): {
        'insights': [
            "Your sleep ({value}h) is slightly below optimal",
            "Even 1 hour less sleep can affect mood and stress",
            "Cognitive performance improves with 7+ hours",
        ],
        'recommendations': [
            "Try to get 7-8 hours for better mood and energy",
            "Gradually adjust bedtime 15 minutes earlier",
        ],
    },
    ('sleep', 'optimal'): {
        'insights': [
            "Excellent! Your sleep ({value}h) is in the optimal range",
            "Optimal sleep supports mood regulation and stress management",
            "Memory consolidation and learning are enhanced",
        ],
        'recommendations': [
            "Keep maintaining this sleep schedule!",
            "Consistency is key - same sleep/wake times daily",
        ],
    },
    ('sleep', 'long'): {
        'insights': [
            "Your sleep ({value}h) is above optimal (9h max recommended)",
            "Too much sleep can also affect mood and energy levels",
        ],
        'recommendations': [
            "Aim for 7-9 hours - the sweet spot for wellness",
        ],
    },
    ('sleep', 'not_recorded'): {
        'insights': [
            "Sleep is only recorded with the morning check-in",
        ],
        'recommendations': [
            "Log last night's sleep in your morning check-in",
        ],
    },
    ('food', 'skipped_morning'): {
        'insights': [
            "Skipping breakfast affects blood sugar and energy",
            "Breakfast improves mood and cognitive function",
            "Low blood sugar can increase stress and irritability",
        ],
        'recommendations': [
            "Try a protein-rich breakfast (eggs, yogurt, nuts)",
            "Even a small snack helps stabilize blood sugar",
        ],
    },
    ('food', 'skipped_afternoon'): {
        'insights': [
            "Skipping lunch can cause an afternoon energy crash",
            "Affects blood sugar, leading to mood swings",
            "May impact stress levels and decision-making",
        ],
        'recommendations': [
            "Balanced lunch with protein helps maintain energy",
            "Small healthy snack if skipping full meal",
        ],
    },
    ('food', 'skipped_evening'): {
        'insights': [
            "Skipping dinner can affect sleep quality",
            "May lead to late-night overeating",
        ],
        'recommendations': [
            "Light dinner 2-3 hours before bedtime",
            "Include protein and complex carbs",
        ],
    },
    ('food', 'eaten'): {
        'insights': [
            "Good! Regular meals help stabilize blood sugar and mood",
            "Eating regularly supports energy levels throughout the day",
        ],
        'recommendations': [
            "Continue with regular meals",
            "Include protein, complex carbs, and vegetables",
        ],
    },
    ('food', 'unknown'): {
        'insights': [
            "No meal information recorded for this check-in",
        ],
        'recommendations': [
            "Let us know whether you have eaten to get food-related tips",
        ],
    },
    ('hydration', 'none'): {
        'insights': [
            "No water intake recorded - dehydration affects everything",
            "Even mild dehydration (1-2%) can decrease mood and energy",
            "Dehydration increases cortisol (stress hormone)",
            "Cognitive function drops with dehydration - memory and attention affected",
        ],
        'recommendations': [
            "Drink water now - aim for 8 cups (64oz) daily",
            "Set hourly reminders to drink water",
            "Carry a water bottle with you",
            "Drink water before feeling thirsty",
        ],
    },
    ('hydration', 'low'): {
        'insights': [
            "Your hydration ({value} cups) is below recommended (8 cups/day)",
            "Low hydration affects mood, energy, and cognitive function",
            "Dehydration can increase stress levels",
        ],
        'recommendations': [
            "Increase water intake - aim for 8 cups daily",
            "Drink water with meals and between meals",
            "Monitor urine color (pale yellow = well hydrated)",
        ],
    },
    ('hydration', 'moderate'): {
        'insights': [
            "Your hydration ({value} cups) is moderate",
            "Aim for 8 cups for optimal wellness",
        ],
        'recommendations': [
            "Increase to 8 cups daily for optimal mood and energy",
        ],
    },
    ('hydration', 'optimal'): {
        'insights': [
            "Great! Your hydration ({value} cups) is excellent",
            "Optimal hydration supports mood, energy, and cognitive function",
        ],
        'recommendations': [
            "Keep maintaining good hydration!",
        ],
    },
    ('stress', 'very_high'): {
        'insights': [
            "Your stress level ({value}/10) is very high",
            "High stress disrupts sleep quality - makes falling/staying asleep harder",
            "Chronic stress affects eating patterns - may overeat or undereat",
            "Elevated cortisol affects mood - increased anxiety and irritability",
        ],
        'recommendations': [
            "Practice stress management: breathing exercises, meditation, or yoga",
            "Take breaks every 1-2 hours",
            "Talk to someone - social support reduces stress",
            "Consider professional support if stress persists",
        ],
    },
    ('stress', 'elevated'): {
        'insights': [
            "Your stress level ({value}/10) is elevated",
            "Elevated stress can affect sleep quality",
            "May impact eating patterns and mood",
        ],
        'recommendations': [
            "Try stress-reduction techniques: deep breathing, walking, or music",
            "Take regular breaks throughout the day",
        ],
    },
    ('stress', 'low'): {
        'insights': [
            "Excellent! Your stress level ({value}/10) is well-managed",
            "Low stress supports better sleep, mood, and overall wellness",
        ],
        'recommendations': [
            "Keep up your stress management routine!",
        ],
    },
    ('stress', 'manageable'): {
        'insights': [
            "Your stress level ({value}/10) is manageable",
            "Monitor stress and use coping strategies when needed",
        ],
        'recommendations': [
            "Continue monitoring stress levels",
        ],
    },
    ('mood', 'very_low'): {
        'insights': [
            "Your mood ({value}/10) is very low",
            "Low mood reduces motivation for physical activity",
            "Low mood affects sleep quality - may oversleep or have insomnia",
            "Social withdrawal is common with low mood",
        ],
        'recommendations': [
            "Start with small actions: 5-min walk, text a friend, or listen to music",
            "Movement boosts mood - even 10 minutes helps",
            "Talk to someone - friends, family, or professional support",
            "If low mood persists for 2+ weeks, consider professional help",
        ],
    },
    ('mood', 'below_average'): {
        'insights': [
            "Your mood ({value}/10) is below average",
            "Lower mood can reduce motivation for activities",
            "May affect sleep quality and social engagement",
        ],
        'recommendations': [
            "Movement helps - try a short walk or stretch",
            "Connect with others - social support boosts mood",
            "Practice gratitude - write down 3 things you're grateful for",
        ],
    },
    ('mood', 'good'): {
        'insights': [
            "Great! Your mood ({value}/10) is positive",
            "Positive mood supports better sleep, activity, and social engagement",
        ],
        'recommendations': [
            "Maintain positive habits that support your mood",
        ],
    },
    ('mood', 'stable'): {
        'insights': [
            "Your mood ({value}/10) is stable",
        ],
        'recommendations': [
            "Continue activities that support positive mood",
        ],
    },
    ('activity', 'none'): {
        'insights': [
            "No activity recorded - movement is crucial for wellness",
            "Physical activity releases endorphins - natural mood boosters",
            "Exercise reduces stress hormones and improves sleep quality",
        ],
        'recommendations': [
            "Aim for at least 30 minutes of moderate activity daily",
            "Start small: 10-min walk, stretch, or dance to 3 songs",
            "Find activities you enjoy - consistency matters more than intensity",
        ],
    },
    ('activity', 'exercise'): {
        'insights': [
            "Excellent! Physical activity supports mood and reduces stress",
            "Exercise releases endorphins and improves sleep quality",
        ],
        'recommendations': [
            "Keep up the great work with regular activity!",
            "Mix up activities to prevent boredom",
        ],
    },
    ('activity', 'study'): {
        'insights': [
            "Study time is important but can increase stress",
            "Take breaks every 25-30 minutes to prevent burnout",
        ],
        'recommendations': [
            "Combine study with movement breaks",
            "Use the Pomodoro Technique: 25 min study, 5 min break",
        ],
    },
    ('activity', 'other'): {
        'insights': [
            "Activity recorded - consider adding physical movement",
        ],
        'recommendations': [
            "Try to include some physical activity in your routine",
        ],
    },
}

BALANCED_ADVICE = "Your wellness factors look balanced. Keep up the good work! "
HYDRATION_REMINDER = "Remember to stay hydrated - aim for 8 cups of water daily! "


@dataclass
class FactorAnalysis:
    kind: str
    tier: str
    impact: str
    affected_factors: List[str] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'impact': self.impact,
            'tier': self.tier,
            'affectedFactors': list(self.affected_factors),
            'insights': list(self.insights),
            'recommendations': list(self.recommendations),
        }


@dataclass
class Correlation:
    factor1: str
    factor2: str
    insight: str
    recommendation: str
    correlation: str = 'negative'

    def to_dict(self) -> Dict:
        return {
            'factor1': self.factor1,
            'factor2': self.factor2,
            'correlation': self.correlation,
            'insight': self.insight,
            'recommendation': self.recommendation,
        }


@dataclass
class WellnessAnalysis:
    analyses: Dict[str, FactorAnalysis]
    correlations: List[Correlation]
    summary: Dict

    def to_dict(self) -> Dict:
        return {
            'analyses': {kind: analysis.to_dict() for kind, analysis in self.analyses.items()},
            'correlations': [c.to_dict() for c in self.correlations],
            'summary': dict(self.summary),
        }


def _format_value(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _classify_sleep(hours) -> Tuple[str, str, List[str]]:
    if hours is None:
        return 'not_recorded', 'neutral', []
    if hours == 0:
        return 'none', 'high', ['mood', 'stress', 'energy', 'focus']
    if hours < 6:
        return 'short', 'high', ['mood', 'stress', 'energy', 'focus', 'immune']
    if hours < 7:
        return 'slightly_short', 'moderate', ['mood', 'stress', 'energy']
    if hours <= 9:
        return 'optimal', 'optimal', []
    return 'long', 'moderate', ['mood', 'energy']


def _classify_food(eaten, slot: Optional[str]) -> Tuple[str, str, List[str]]:
    if eaten is None:
        return 'unknown', 'neutral', []
    if eaten:
        return 'eaten', 'positive', []
    if slot not in ('morning', 'afternoon', 'evening'):
        slot = 'afternoon'
    impact = 'high' if slot == 'morning' else 'moderate'
    return f'skipped_{slot}', impact, ['mood', 'stress', 'energy', 'focus']


def _classify_hydration(cups) -> Tuple[str, str, List[str]]:
    if not cups or cups <= 0:
        return 'none', 'high', ['mood', 'energy', 'focus', 'physical_performance']
    if cups < 4:
        return 'low', 'moderate', ['mood', 'energy', 'focus']
    if cups < 8:
        return 'moderate', 'low', []
    return 'optimal', 'optimal', []


def _classify_stress(level) -> Tuple[str, str, List[str]]:
    if level >= 8:
        return 'very_high', 'high', ['sleep', 'mood', 'eating', 'immune', 'energy']
    if level >= 6:
        return 'elevated', 'moderate', ['sleep', 'mood', 'eating']
    if level <= 4:
        return 'low', 'optimal', []
    return 'manageable', 'moderate', []


def _classify_mood(level) -> Tuple[str, str, List[str]]:
    if level <= 3:
        return 'very_low', 'high', ['activity', 'sleep', 'eating', 'social']
    if level <= 5:
        return 'below_average', 'moderate', ['activity', 'sleep', 'social']
    if level >= 7:
        return 'good', 'positive', []
    return 'stable', 'neutral', []


def _classify_activity(description) -> Tuple[str, str, List[str]]:
    text = (description or '').strip().lower()
    if not text:
        return 'none', 'low', ['mood', 'stress', 'sleep', 'energy']
    if any(keyword in text for keyword in ACTIVITY_EXERCISE_KEYWORDS):
        return 'exercise', 'positive', []
    if any(keyword in text for keyword in ACTIVITY_STUDY_KEYWORDS):
        return 'study', 'neutral', ['mood', 'stress']
    return 'other', 'neutral', []


def analyze_factor(kind: str, value, context: Optional[str] = None) -> FactorAnalysis:
    """
    Classify a single wellness factor.

    Args:
        kind: One of ``FACTORS``
        value: The factor value (hours, cups, 1-10 level, bool or activity text)
        context: Slot name ('morning', 'afternoon', 'evening'); used for food

    Returns:
        FactorAnalysis with the impact tier and its canned copy
    """
    if kind == 'sleep':
        value = coerce_number(value, None)
    elif kind == 'hydration':
        value = coerce_number(value, DEFAULT_HYDRATION)
    elif kind == 'stress':
        value = coerce_number(value, DEFAULT_STRESS)
    elif kind == 'mood':
        value = coerce_number(value, DEFAULT_MOOD)
    elif kind == 'food' and not isinstance(value, bool):
        value = None

    if kind == 'sleep':
        tier, impact, affected = _classify_sleep(value)
    elif kind == 'food':
        tier, impact, affected = _classify_food(value, context)
    elif kind == 'hydration':
        tier, impact, affected = _classify_hydration(value)
    elif kind == 'stress':
        tier, impact, affected = _classify_stress(value)
    elif kind == 'mood':
        tier, impact, affected = _classify_mood(value)
    elif kind == 'activity':
        tier, impact, affected = _classify_activity(value)
    else:
        raise InvalidRecordError(f"Unknown wellness factor: {kind!r}")

    copy = FACTOR_COPY[(kind, tier)]
    shown = _format_value(value)
    return FactorAnalysis(
        kind=kind,
        tier=tier,
        impact=impact,
        affected_factors=affected,
        insights=[line.format(value=shown) for line in copy['insights']],
        recommendations=[line.format(value=shown) for line in copy['recommendations']],
    )


def find_correlations(slot: CheckInSlot) -> List[Correlation]:
    """Rule-based pairings of factors that reinforce each other."""
    correlations = []
    activity = slot.activity.lower()
    sleep = slot.sleep

    if sleep is not None and sleep < 6 and slot.stress >= 6:
        correlations.append(Correlation(
            'sleep', 'stress',
            insight="Poor sleep and high stress create a negative cycle - each makes the "
                    "other worse. Prioritize sleep to break the cycle.",
            recommendation="Focus on sleep hygiene first - better sleep will help reduce stress.",
        ))

    if slot.mood <= 5 and 'exercise' not in activity and 'walk' not in activity:
        correlations.append(Correlation(
            'mood', 'activity',
            insight="Low mood reduces motivation for activity, but activity actually improves mood.",
            recommendation="Try a short 10-minute walk - movement releases endorphins that boost mood.",
        ))

    if slot.eaten is False and slot.stress >= 6:
        correlations.append(Correlation(
            'food', 'stress',
            insight="Skipping meals increases stress levels - low blood sugar triggers stress response.",
            recommendation="Eat regular meals to stabilize blood sugar and reduce stress.",
        ))

    if slot.hydration < 4:
        correlations.append(Correlation(
            'hydration', 'energy',
            insight="Low hydration affects energy levels and cognitive function.",
            recommendation="Increase water intake - even mild dehydration reduces energy.",
        ))

    if sleep is not None and slot.stress >= 7 and sleep < 7:
        correlations.append(Correlation(
            'stress', 'sleep',
            insight="High stress disrupts sleep quality, and poor sleep increases stress - it's a cycle.",
            recommendation="Try stress-reduction techniques before bed: meditation, breathing, "
                           "or light stretching.",
        ))

    return correlations


def summarize(analyses: Dict[str, FactorAnalysis]) -> Dict:
    high = [kind for kind, analysis in analyses.items() if analysis.impact == 'high']
    if high:
        plural = 's' if len(high) > 1 else ''
        return {
            'priority': 'high',
            'factors': high,
            'message': f"Your wellness analysis shows {len(high)} high-impact area{plural}: "
                       f"{', '.join(high)}. Focus on these first for the biggest impact.",
        }

    moderate = [kind for kind, analysis in analyses.items() if analysis.impact == 'moderate']
    if moderate:
        return {
            'priority': 'moderate',
            'factors': moderate,
            'message': f"Overall wellness is good, but {' and '.join(moderate)} could be "
                       f"improved for better results.",
        }

    return {
        'priority': 'optimal',
        'factors': [],
        'message': "Your wellness factors are well-balanced! Keep maintaining these healthy habits.",
    }


def analyze_all(record: Union[CheckInSlot, Dict], slot: Optional[str] = None) -> WellnessAnalysis:
    """Analyze every factor of a check-in, plus correlations and a summary."""
    checkin = CheckInSlot.from_dict(record)
    if slot is not None and slot != 'morning':
        checkin = replace(checkin, sleep=None)

    analyses = {
        'sleep': analyze_factor('sleep', checkin.sleep),
        'food': analyze_factor('food', checkin.eaten, slot),
        'hydration': analyze_factor('hydration', checkin.hydration),
        'stress': analyze_factor('stress', checkin.stress),
        'mood': analyze_factor('mood', checkin.mood),
        'activity': analyze_factor('activity', checkin.activity),
    }
    return WellnessAnalysis(
        analyses=analyses,
        correlations=find_correlations(checkin),
        summary=summarize(analyses),
    )


def compose_checkin_advice(slot_name: str, record: Union[CheckInSlot, Dict]) -> str:
    """Build the advice line saved on a slot when it is submitted."""
    checkin = CheckInSlot.from_dict(record)
    analysis = analyze_all(checkin, slot_name)

    advice = "Great job checking in! "
    high_impact = sorted(
        (a for a in analysis.analyses.values() if a.impact == 'high'),
        key=lambda a: len(a.affected_factors),
        reverse=True,
    )
    if high_impact:
        advice += high_impact[0].recommendations[0] + " "
        if analysis.correlations:
            advice += analysis.correlations[0].recommendation + " "
    else:
        advice += BALANCED_ADVICE
        if checkin.hydration < 4:
            advice += HYDRATION_REMINDER

    advice += f"Mood: {_format_value(checkin.mood)}/10, Stress: {_format_value(checkin.stress)}/10"
    if slot_name == 'morning' and checkin.sleep is not None:
        advice += f", Sleep: {_format_value(checkin.sleep)}h"
    if checkin.hydration > 0:
        advice += f", Hydration: {_format_value(checkin.hydration)} cups"
    return advice
