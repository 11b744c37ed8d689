"""
Keyword-driven advice for the assistant.

``select_branch`` decides which branch a question falls into from its
keywords and the user's average mood, stress and sleep; ``ADVICE_TEMPLATES``
holds the text for each branch. Branch tags have the form
``<topic>.<level>`` where level is one of ``stress_high``, ``mood_low``,
``sleep_low`` or ``generic``.
"""
import zlib
from collections.abc import Mapping
from dataclasses import dataclass
from statistics import mean
from typing import Callable, Dict, List, Optional, Tuple

from services.records import DailyCheckIn, SLOTS


@dataclass
class AdviceContext:
    """Averages of the user's current check-ins."""
    avg_mood: float = 5
    avg_stress: float = 5
    avg_sleep: float = 0
    submitted_count: int = 0

    @property
    def has_data(self) -> bool:
        return self.submitted_count > 0

    @classmethod
    def from_checkins(cls, checkins) -> 'AdviceContext':
        """Average every slot of the day; sleep only where it was logged."""
        if checkins is None:
            return cls()
        if isinstance(checkins, Mapping) and 'checkins' in checkins:
            checkins = checkins['checkins']
        daily = DailyCheckIn.from_dict(checkins)
        slots = [daily.slots[name] for name in SLOTS if name in daily.slots]
        if not slots:
            return cls()

        moods = [slot.mood for slot in slots if slot.mood > 0]
        stresses = [slot.stress for slot in slots if slot.stress > 0]
        sleeps = [slot.sleep for slot in slots if slot.sleep]
        return cls(
            avg_mood=mean(moods) if moods else 5,
            avg_stress=mean(stresses) if stresses else 5,
            avg_sleep=mean(sleeps) if sleeps else 0,
            submitted_count=sum(1 for slot in slots if slot.submitted),
        )

    def to_dict(self) -> Dict:
        return {
            'avgMood': round(self.avg_mood, 1),
            'avgStress': round(self.avg_stress, 1),
            'avgSleep': round(self.avg_sleep, 1),
            'submittedCount': self.submitted_count,
        }


def _has_any(text: str, *keywords: str) -> bool:
    return any(keyword in text for keyword in keywords)


def _level(ctx: AdviceContext, *checks: Tuple[str, Callable[[AdviceContext], bool]]) -> str:
    for level, check in checks:
        if check(ctx):
            return level
    return 'generic'


STRESS_OVER_6 = ('stress_high', lambda c: c.avg_stress > 6)
STRESS_OVER_7 = ('stress_high', lambda c: c.avg_stress > 7)
MOOD_UNDER_5 = ('mood_low', lambda c: c.avg_mood < 5)
MOOD_UNDER_4 = ('mood_low', lambda c: c.avg_mood < 4)
SLEEP_UNDER_6 = ('sleep_low', lambda c: c.avg_sleep < 6)

# Evaluated in order; the first topic whose keywords match wins.
TOPICS: List[Tuple[str, Callable[[str], bool], Tuple]] = [
    ('time_management', lambda q: 'time' in q and 'manag' in q,
     (STRESS_OVER_6, MOOD_UNDER_5)),
    ('productivity', lambda q: _has_any(q, 'productivity', 'focus', 'concentrat', 'distract', 'procrastinat'),
     (STRESS_OVER_7, SLEEP_UNDER_6)),
    ('study', lambda q: _has_any(q, 'study', 'learn', 'exam', 'test', 'homework', 'assignment'),
     (STRESS_OVER_6, SLEEP_UNDER_6)),
    ('stress', lambda q: _has_any(q, 'stress', 'anxiety', 'worri', 'overwhelm', 'pressure'),
     (STRESS_OVER_7, MOOD_UNDER_5)),
    ('mood', lambda q: _has_any(q, 'mood', 'sad', 'depress', 'down') or ('feel' in q and 'bad' in q),
     (MOOD_UNDER_4, SLEEP_UNDER_6)),
    ('sleep', lambda q: _has_any(q, 'sleep', 'tired', 'exhaust', 'rest', 'insomnia'),
     (SLEEP_UNDER_6, STRESS_OVER_6)),
    ('energy', lambda q: _has_any(q, 'energy', 'tired', 'motivat', 'lazy', 'unmotivat'),
     (SLEEP_UNDER_6, MOOD_UNDER_5)),
    ('social', lambda q: _has_any(q, 'friend', 'social', 'lonely', 'relationship', 'people'),
     (MOOD_UNDER_5,)),
    ('exercise', lambda q: _has_any(q, 'exercise', 'workout', 'fitness', 'active', 'gym'),
     (STRESS_OVER_6, MOOD_UNDER_5)),
    ('food', lambda q: _has_any(q, 'eat', 'food', 'nutrition', 'diet', 'hungry', 'meal'),
     (MOOD_UNDER_5,)),
]

DEFAULT_LEVELS = (STRESS_OVER_7, MOOD_UNDER_4, SLEEP_UNDER_6)

ADVICE_TEMPLATES: Dict[str, List[str]] = {
    'empty': [
        "Ask me something! I can help with time management, stress, sleep, mood, productivity, and more!",
    ],
    'time_management.stress_high': [
        "Time management gets harder when stressed! Try the Pomodoro Technique: 25 min focused work, "
        "5 min break. Use your breaks to breathe or stretch. Start with 2-3 Pomodoros today - what's "
        "one task you'll tackle first?",
    ],
    'time_management.mood_low': [
        "When feeling low, start small! Make a 3-item to-do list for today. Pick the easiest task first "
        "to build momentum. What's one quick win you can check off?",
    ],
    'time_management.generic': [
        "Here's a proven system: 1) Write down all tasks (brain dump), 2) Pick top 3 for today, "
        "3) Use time-blocking (assign specific times). Start tomorrow with your most important task - "
        "what's your #1 priority?",
    ],
    'productivity.stress_high': [
        "High stress kills productivity! First, reduce stress with 5 deep breaths. Then try the 2-minute "
        "rule: if a task takes less than 2 min, do it now. Break big tasks into tiny steps. What's one "
        "2-minute task you can do right now?",
    ],
    'productivity.sleep_low': [
        "Poor sleep means poor focus! Aim for 7-8 hours tonight. For now, try the Pomodoro Technique: "
        "25 min work, 5 min break. During breaks, walk or stretch - no screens! What will you focus on "
        "for 25 minutes?",
    ],
    'productivity.generic': [
        "Boost focus with these tricks: 1) Remove distractions (phone on silent), 2) Use website blockers "
        "during study time, 3) Take breaks every 25-30 min. Start a 25-minute focused session now - "
        "what's your focus goal?",
    ],
    'study.stress_high': [
        "Study stress is real! Use the Pomodoro Technique: 25 min study, 5 min break. During breaks, "
        "stretch or breathe - don't check social media. What subject needs your attention today?",
    ],
    'study.sleep_low': [
        "Sleep affects memory! Aim for 7-8 hours tonight to retain what you study. For now, try active "
        "recall: after reading, close the book and summarize. What topic are you studying?",
    ],
    'study.generic': [
        "Effective studying tips: 1) Active recall (test yourself), 2) Spaced repetition (review "
        "regularly), 3) Teach someone else. What's one concept you can explain right now?",
    ],
    'stress.stress_high': [
        "Your stress is high - let's lower it! Try 4-7-8 breathing: inhale 4, hold 7, exhale 8. Repeat "
        "4 times. Then write down 3 things causing stress and pick one small action you can take. "
        "What's one stressor you can address today?",
    ],
    'stress.mood_low': [
        "Stress plus low mood is a tough combo! Start with movement: 5-min walk or stretch. Then try box "
        "breathing: inhale 4, hold 4, exhale 4, hold 4. What's one small thing bringing you joy today?",
    ],
    'stress.generic': [
        "Stress management starts small! Try the 5-4-3-2-1 technique: name 5 things you see, 4 you hear, "
        "3 you touch, 2 you smell, 1 you taste. This grounds you in the present. What's one thing you're "
        "grateful for?",
    ],
    'mood.mood_low': [
        "Your mood is really low - that's tough. Start tiny: 1) Open the curtains, 2) Take 10 deep "
        "breaths, 3) Text one friend. Movement helps: 5-min walk or dance to one song. What's one thing "
        "that usually helps?",
    ],
    'mood.sleep_low': [
        "Low mood and poor sleep make a rough combo! Prioritize sleep tonight (7-8 hours). For now, try "
        "sunlight exposure (even 5 min outside). Small wins: drink water, eat something. What's one "
        "thing you can do right now?",
    ],
    'mood.generic': [
        "Mood boosters: 1) Movement (even a 5 min walk), 2) Social connection (text a friend), "
        "3) Gratitude (3 things you're grateful for). What's one thing that always makes you smile?",
    ],
    'sleep.sleep_low': [
        "Your sleep is low! Aim for 7-8 hours tonight. Sleep hygiene: 1) No screens 1 hour before bed, "
        "2) Cool, dark room, 3) Regular sleep schedule. What's your ideal bedtime?",
    ],
    'sleep.stress_high': [
        "Stress disrupts sleep! Try progressive muscle relaxation before bed: tense each muscle group for "
        "5 sec, then release. Or try 4-7-8 breathing. What helps you relax?",
    ],
    'sleep.generic': [
        "Good sleep makes everything better! Tips: 1) Consistent sleep schedule (even weekends), 2) No "
        "caffeine after 2 PM, 3) Cool room. What's one thing you can change tonight?",
    ],
    'energy.sleep_low': [
        "Low energy usually means poor sleep! Aim for 7-8 hours tonight. For now: 1) Get sunlight "
        "(5-10 min), 2) Move your body (even 2 min), 3) Drink water. What's one quick energy boost you "
        "can do?",
    ],
    'energy.mood_low': [
        "Low mood drains energy! Start with movement: 5-min walk, dance to one song, or stretch. Then try "
        "the 2-minute rule: do something for just 2 minutes. What's one tiny action you can take?",
    ],
    'energy.generic': [
        "Energy boosters: 1) Morning sunlight (10 min), 2) Movement (even 5 min), 3) Stay hydrated, "
        "4) Eat protein-rich snacks. What's one thing you can do right now to boost energy?",
    ],
    'social.mood_low': [
        "Social connection helps mood! Start small: text one friend, join a study group, or attend one "
        "campus event. One good conversation beats many shallow ones. Who can you reach out to today?",
    ],
    'social.generic': [
        "Social wellness tips: 1) Schedule regular check-ins with friends, 2) Join clubs you enjoy, "
        "3) Be present in conversations (put the phone away). What's one way you can connect today?",
    ],
    'exercise.stress_high': [
        "Exercise reduces stress! Start small: 10-min walk, 5-min stretch, or dance to 3 songs. Movement "
        "releases endorphins. What's one movement you enjoy?",
    ],
    'exercise.mood_low': [
        "Exercise boosts mood! Even 5 minutes helps. Try walking, dancing, stretching, or yoga. What's one "
        "movement you can do today?",
    ],
    'exercise.generic': [
        "Movement is medicine! Tips: 1) Start small (5-10 min), 2) Find what you enjoy, 3) Make it social "
        "(walk with a friend). Consistency beats intensity. What's one way you can move today?",
    ],
    'food.mood_low': [
        "Food affects mood! Eat regular meals (don't skip), include protein, and stay hydrated. What's one "
        "nutritious meal or snack you can have today?",
    ],
    'food.generic': [
        "Nutrition tips: 1) Eat regular meals, 2) Include protein, 3) Stay hydrated, 4) Balance meals "
        "(protein + carbs + veggies). What's one healthy choice you can make today?",
    ],
    'default.stress_high': [
        "Your stress is high! Try 5 deep breaths (4-7-8: inhale 4, hold 7, exhale 8). Then identify one "
        "small stressor you can address. What's one thing causing stress that you can tackle?",
    ],
    'default.mood_low': [
        "Your mood is low - that's okay. Start small: 1) Take 10 deep breaths, 2) Get some sunlight, "
        "3) Move your body. What's one thing that usually helps you feel better?",
    ],
    'default.sleep_low': [
        "Your sleep is low! Prioritize 7-8 hours tonight. Sleep affects mood, focus and energy. Try a "
        "bedtime routine: no screens 1 hour before bed, read or stretch. What's one thing you can change "
        "tonight?",
    ],
    'default.generic': [
        "Here's a general wellness tip: take 3 deep breaths, name one thing you're grateful for, and do "
        "one small action toward your goal. What's one thing you can do right now to feel better?",
        "Small steps add up: drink a glass of water, stretch for two minutes, and write down one win from "
        "today. What would make the rest of your day a little better?",
    ],
}


def select_branch(query: Optional[str], context: AdviceContext) -> str:
    """Return the branch tag for ``query`` given the user's averages."""
    text = (query or '').strip().lower()
    if not text:
        return 'empty'

    for topic, matches, levels in TOPICS:
        if matches(text):
            return f'{topic}.{_level(context, *levels)}'
    return f'default.{_level(context, *DEFAULT_LEVELS)}'


def context_preamble(context: AdviceContext) -> str:
    preamble = "Based on your recent check-ins"
    if context.has_data:
        preamble += f" (mood: {context.avg_mood:.1f}/10, stress: {context.avg_stress:.1f}/10"
        if context.avg_sleep > 0:
            preamble += f", sleep: {context.avg_sleep:.1f}h"
        preamble += ")"
    else:
        preamble += " (complete check-ins for personalized tips!)"
    return preamble + ", here's some advice: "


def pick_template(branch: str, query: str = '') -> str:
    """Pick the branch's template; variants are chosen by a stable hash of the query."""
    variants = ADVICE_TEMPLATES[branch]
    index = zlib.crc32((query or '').strip().lower().encode('utf-8')) % len(variants)
    return variants[index]


def select_advice(query: Optional[str], context: Optional[AdviceContext] = None) -> str:
    """
    Pick the advice text for a question.

    Args:
        query: The user's question
        context: Averages of the user's check-ins (neutral defaults if omitted)

    Returns:
        str: Advice text, prefixed with a summary of the check-in figures
    """
    context = context or AdviceContext()
    branch = select_branch(query, context)
    if branch == 'empty':
        return pick_template(branch)
    return context_preamble(context) + pick_template(branch, query)
