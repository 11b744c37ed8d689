"""Casual, Gen Z flavoured variant of the assistant.

Wellness questions are answered from canned replies using the user's
check-in averages. Anything else goes to the remote provider chain, which
ends in a canned reply when no provider answers.
"""
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from services.advice_providers import AdviceProvider, ProviderChain
from services.advice_selector import AdviceContext

WELLNESS_KEYWORDS = (
    'stress', 'anxiety', 'mood', 'sad', 'depress', 'down', 'feel',
    'sleep', 'tired', 'exhaust', 'insomnia', 'rest',
    'energy', 'motivat', 'lazy', 'unmotivat',
    'time manag', 'procrastinat', 'productivity', 'focus', 'concentrat', 'distract',
    'study', 'exam', 'test', 'homework', 'assignment', 'learn',
    'exercise', 'workout', 'fitness', 'gym', 'active', 'movement',
    'eat', 'food', 'nutrition', 'hungry', 'meal', 'diet',
    'friend', 'social', 'lonely', 'relationship', 'people',
    'wellness', 'health', 'mental', 'physical', 'emotional',
    'check-in', 'checkin', 'streak', 'wellness score',
    'doom scroll', 'phone', 'social media', 'addict',
    'breathing', 'meditation', 'mindfulness', 'self-care',
    'wellbeing', 'well-being', 'burnout', 'overwhelm',
)

GREETING_PATTERN = re.compile(r"\b(hi|hey|hello|sup|what's up|wassup|yo)\b")

GENZ_REPLIES: Dict[str, str] = {
    'empty': "Hey bestie! What's on your mind? Ask me anything about stress, sleep, mood, time "
             "management, or just life in general. I got you!",
    'greeting': "Hey bestie! What's good? I'm here to help with whatever's on your mind. How can I "
                "help you today?",
    'stress.stress_high': "Okay bestie, your stress is giving \"I'm about to lose it\" and that's valid. "
                          "But fr, let's fix this. Try 4-7-8 breathing: inhale 4, hold 7, exhale 8. Do it "
                          "4 times. Then write down what's stressing you. What's one thing causing stress "
                          "that you can actually control?",
    'stress.generic': "Stress is literally the worst, I get it. Here's what works: 1) Box breathing "
                      "(inhale 4, hold 4, exhale 4, hold 4), 2) Take a 5-min walk (no phone!), 3) Name 5 "
                      "things you see, 4 you hear, 3 you touch, 2 you smell, 1 you taste. What's stressing "
                      "you out rn?",
    'mood.mood_low': "Okay, I see you're going through it and that's real. Start tiny: 1) Step outside "
                     "(even 2 min), 2) Take 10 deep breaths, 3) Text one person you trust. What's one "
                     "thing that usually makes you feel even slightly better?",
    'mood.generic': "Mood swings are giving chaos, I felt that. Here's the tea: movement releases "
                    "endorphins. Try a 5-min walk, dance to 3 songs, or stretch. Sunlight helps too. "
                    "What's one thing that always makes you smile?",
    'sleep.sleep_low': "Your sleep is giving \"I survive on 3 hours\" and that's not it bestie. Aim for "
                       "7-8 hours tonight: no screens 1 hour before bed, cool dark room, same bedtime "
                       "every night. What's your ideal bedtime?",
    'sleep.generic': "Sleep is literally self-care, no cap. Try a consistent schedule (even weekends), no "
                     "caffeine after 2 PM, and a bedtime routine. What helps you wind down?",
    'time_management.stress_high': "Time management when stressed is rough. Try Pomodoro: 25 min focused "
                                   "work, 5 min break. Use breaks to breathe or stretch (not scroll). "
                                   "What's one task you'll tackle first?",
    'time_management.generic': "Time management is giving \"I have 24 hours but need 48\" and I felt "
                               "that. 1) Brain dump everything, 2) Pick top 3 for today, 3) Time-block. "
                               "What's your #1 priority?",
    'doom_scrolling': "Okay bestie, doom scrolling is a whole mood but it's messing with your head. Set a "
                      "10 min timer, put the phone in another room when it goes off, and swap in a walk, a "
                      "book or a call. What's one thing you'll do instead of scrolling?",
    'phone': "Phone addiction is real and I'm calling myself out too. Turn off notifications, set app "
             "timers, and keep the phone in another room during focus time. Start with one phone-free "
             "hour - what will you do instead?",
    'productivity.generic': "Focus is giving \"squirrel!\" energy and that's a mood. Phone on silent, "
                            "website blockers, and Pomodoro: 25 min work, 5 min break. What will you "
                            "focus on for 25 minutes?",
    'study.stress_high': "Study stress is real and I'm here for it. Pomodoro: 25 min study, 5 min break. "
                         "During breaks, stretch or breathe - don't check socials. What subject needs your "
                         "attention today?",
    'study.generic': "Studying is giving \"my brain is full\" and that's valid. Try active recall: close "
                     "the book and summarize. Spaced repetition beats cramming. What topic are you "
                     "studying?",
    'energy.sleep_low': "Low energy is probably poor sleep, bestie. Aim for 7-8 hours tonight. For now: "
                        "sunlight, 2 minutes of movement, water. What's one quick energy boost you can do?",
    'energy.generic': "Energy is giving \"battery at 1%\" and I felt that. Morning sunlight, a 5 min walk, "
                      "water and protein. Do something for just 2 minutes to build momentum. What's one "
                      "tiny action you can take?",
    'social.generic': "Social connection is key, bestie! Text one friend, join a study group, or go to "
                      "one event. One good conversation beats many shallow ones. Who can you reach out "
                      "to today?",
    'exercise.generic': "Movement is literally medicine, no cap. 10-min walk, 5-min stretch, or dance to 3 "
                        "songs. Consistency beats intensity. What's one way you can move today?",
    'food.generic': "Food affects your whole vibe, bestie. Eat regular meals, include protein, stay "
                    "hydrated. What's one nutritious meal or snack you can have today?",
    'small_talk': "I'm doing great, thanks for asking! Just here vibing and ready to help. How are YOU "
                  "doing today?",
    'default.stress_high': "Okay bestie, your stress is high ({stress:.1f}/10) and that's valid. Try 5 "
                           "deep breaths (4-7-8), then pick one small stressor you can address. What's "
                           "one thing you can actually tackle?",
    'default.mood_low': "Your mood is low ({mood:.1f}/10) and that's okay - we all have those days. Take "
                        "10 deep breaths, get some sunlight, move your body. What usually helps you feel "
                        "better?",
    'default.sleep_low': "Your sleep is giving \"I survive on coffee\" ({sleep:.1f}h) bestie. Prioritize "
                         "7-8 hours tonight with a no-screens wind-down. What's one thing you can change "
                         "tonight?",
    'default.generic': "That's a great wellness question! Based on your check-ins (mood: {mood:.1f}/10, "
                       "stress: {stress:.1f}/10), you're doing pretty good! Take 3 deep breaths, name one "
                       "thing you're grateful for, and do one small action toward your goal.",
    'default.no_data': "That's a great wellness question! Take 3 deep breaths, name one thing you're "
                       "grateful for, and do one small action toward your goal. Complete some check-ins so "
                       "I can give you more personalized advice!",
    'fallback.identity': "I'm your AI wellness coach! I'm here to help with stress, sleep, mood, and "
                         "basically anything wellness-related, using your check-in data. Think of me as "
                         "your supportive bestie!",
    'fallback.capabilities': "I can help with stress, sleep, mood, time management, productivity, and "
                             "basically anything wellness-related. Ask me anything - I got you!",
    'fallback.app': "This is a wellness tracking app! Check in in the morning, afternoon and evening to "
                    "track your mood, stress, sleep and hydration, and I'll use that to give you "
                    "personalized advice.",
    'fallback.general': "That's an interesting question! I'm mainly here to help with wellness stuff "
                        "(stress, sleep, mood, time management, productivity), but I'm always down to "
                        "chat! What wellness topic can I help you with?",
}

SERIOUS_BRANCHES = {
    'stress.stress_high', 'mood.mood_low', 'sleep.sleep_low', 'time_management.stress_high',
    'doom_scrolling', 'study.stress_high', 'energy.sleep_low',
    'default.stress_high', 'default.mood_low', 'default.sleep_low',
}


@dataclass
class AdviceReply:
    text: str
    is_serious: bool
    branch: str
    source: str = 'canned'

    def to_dict(self) -> Dict:
        return {
            'text': self.text,
            'isSerious': self.is_serious,
            'branch': self.branch,
            'source': self.source,
        }


def is_wellness_related(query: str) -> bool:
    text = (query or '').lower()
    return any(keyword in text for keyword in WELLNESS_KEYWORDS)


def fallback_branch(query: str) -> str:
    text = (query or '').lower()
    if 'who are you' in text or 'what are you' in text:
        return 'fallback.identity'
    if 'what can you do' in text or 'what do you do' in text or ('help me' in text and 'wellness' not in text):
        return 'fallback.capabilities'
    if 'app' in text:
        return 'fallback.app'
    return 'fallback.general'


def fallback_reply(query: str) -> str:
    return GENZ_REPLIES[fallback_branch(query)]


def genz_branch(query: str, ctx: AdviceContext) -> str:
    """Branch selection for wellness questions."""
    q = query.lower().strip()

    def has(*words):
        return any(word in q for word in words)

    if GREETING_PATTERN.search(q):
        return 'greeting'
    if has('stress', 'anxiety', 'overwhelm', 'pressure'):
        return 'stress.stress_high' if ctx.avg_stress > 7 else 'stress.generic'
    if has('mood', 'sad', 'depress', 'down') or ('feel' in q and has('bad', 'terrible')):
        return 'mood.mood_low' if ctx.avg_mood < 4 else 'mood.generic'
    if has('sleep', 'tired', 'exhaust', 'insomnia', "can't sleep"):
        return 'sleep.sleep_low' if ctx.avg_sleep < 6 else 'sleep.generic'
    if ('time' in q and 'manag' in q) or has('procrastinat', 'behind'):
        return 'time_management.stress_high' if ctx.avg_stress > 6 else 'time_management.generic'
    if has('doom scroll', 'doomscrolling') or ('scrolling' in q and has('too much', 'help', 'stop')):
        return 'doom_scrolling'
    if ('phone' in q and has('addict', 'too much', "can't stop")) or \
            ('social media' in q and has('addict', 'too much')):
        return 'phone'
    if has('productivity', 'focus', 'concentrat', 'distract'):
        return 'productivity.generic'
    if has('study', 'exam', 'test', 'homework', 'assignment'):
        return 'study.stress_high' if ctx.avg_stress > 6 else 'study.generic'
    if has('energy', 'motivat', 'lazy', 'unmotivat'):
        return 'energy.sleep_low' if ctx.avg_sleep < 6 else 'energy.generic'
    if has('friend', 'social', 'lonely', 'relationship', 'people'):
        return 'social.generic'
    if has('exercise', 'workout', 'fitness', 'gym'):
        return 'exercise.generic'
    if has('eat', 'food', 'nutrition', 'hungry', 'meal'):
        return 'food.generic'
    if has('how are you', "what's up", "how's it going"):
        return 'small_talk'

    if not ctx.has_data:
        return 'default.no_data'
    if ctx.avg_stress > 7:
        return 'default.stress_high'
    if ctx.avg_mood < 4:
        return 'default.mood_low'
    if 0 < ctx.avg_sleep < 6:
        return 'default.sleep_low'
    return 'default.generic'


class GenZAdvisor:
    """Answers assistant chat messages in a casual voice."""

    def __init__(self, providers: Iterable[AdviceProvider] = ()):
        self.chain = ProviderChain(providers, fallback_reply)

    def advise(self, query: Optional[str], checkins=None) -> AdviceReply:
        if not query or not query.strip():
            return AdviceReply(GENZ_REPLIES['empty'], False, 'empty')

        if not is_wellness_related(query):
            text, source = self.chain.generate(query)
            branch = fallback_branch(query) if source == 'fallback' else 'general'
            return AdviceReply(text, False, branch, source)

        ctx = AdviceContext.from_checkins(checkins)
        branch = genz_branch(query, ctx)
        text = GENZ_REPLIES[branch].format(
            mood=ctx.avg_mood, stress=ctx.avg_stress, sleep=ctx.avg_sleep,
        )
        return AdviceReply(text, branch in SERIOUS_BRANCHES, branch)
