"""Curated wellness reading, picked to match what the user logged today."""
from typing import Dict, List

from services.records import DailyCheckIn, SLOTS

WELLNESS_RESOURCES: Dict[str, List[Dict]] = {
    'sleep': [
        {
            'title': 'Sleep Hygiene Tips',
            'description': 'Maintain a consistent sleep schedule, even on weekends. Your body thrives on routine!',
            'source': 'CDC Sleep Guidelines',
            'tips': [
                'Go to bed and wake up at the same time daily',
                'Avoid screens 1 hour before bed (blue light disrupts sleep)',
                'Keep bedroom cool and dark',
                'Avoid caffeine after 2 PM',
                'Create a bedtime routine: reading, stretching, or meditation',
            ],
        },
        {
            'title': 'How Sleep Affects Your Mood',
            'description': 'Sleep deprivation raises stress hormones, affecting mood and cognitive function.',
            'source': 'Harvard Medical School',
            'tips': [
                '7-9 hours of sleep is optimal for mood regulation',
                'REM sleep helps process emotions',
                'Poor sleep increases anxiety and irritability',
            ],
        },
    ],
    'hydration': [
        {
            'title': 'Hydration and Mental Performance',
            'description': 'Even mild dehydration (1-2%) can decrease mood, energy, and cognitive function.',
            'source': 'Journal of Nutrition',
            'tips': [
                'Aim for 8 cups (64 oz) of water daily',
                'Drink water before feeling thirsty',
                'Carry a water bottle with you',
            ],
        },
        {
            'title': 'Signs of Dehydration',
            'description': 'Fatigue, headaches, difficulty concentrating, and mood changes can indicate dehydration.',
            'source': 'Mayo Clinic',
            'tips': [
                'Drink water throughout the day, not just when thirsty',
                'Set hourly reminders to drink water',
                'Eat water-rich foods (fruits, vegetables)',
            ],
        },
    ],
    'stress': [
        {
            'title': 'Stress Management Techniques',
            'description': 'Chronic stress affects sleep, mood, eating patterns, and immune function.',
            'source': 'American Psychological Association',
            'tips': [
                'Practice deep breathing: 4-7-8 technique',
                'Take regular breaks every 1-2 hours',
                'Exercise regularly - it reduces stress hormones',
                'Talk to someone you trust',
            ],
        },
        {
            'title': 'How Stress Affects Your Body',
            'description': 'High stress disrupts sleep, affects eating patterns, and impacts immune function.',
            'source': 'National Institute of Mental Health',
            'tips': [
                'Stress increases cortisol, which affects sleep',
                'Chronic stress can lead to overeating or undereating',
                'Managing stress improves overall wellness',
            ],
        },
    ],
    'mood': [
        {
            'title': 'Mood Boosting Strategies',
            'description': 'Physical activity, social connection, and sunlight exposure boost mood naturally.',
            'source': 'American Psychological Association',
            'tips': [
                'Get 10-15 minutes of sunlight daily',
                'Exercise releases endorphins (natural mood boosters)',
                'Connect with friends and family',
                'Practice gratitude - write down 3 good things daily',
            ],
        },
        {
            'title': 'The Exercise-Mood Connection',
            'description': 'Regular exercise helps with mild to moderate low mood.',
            'source': 'Harvard Medical School',
            'tips': [
                '30 minutes of moderate exercise can boost mood for hours',
                'Even a 10-minute walk improves mood',
                'Consistency matters more than intensity',
            ],
        },
    ],
    'food': [
        {
            'title': 'Nutrition and Mental Health',
            'description': 'What you eat affects your mood, energy, and cognitive function through the gut-brain axis.',
            'source': 'Nutrition Journal',
            'tips': [
                'Eat regular meals - skipping meals affects blood sugar and mood',
                'Include protein in every meal',
                'Omega-3 fatty acids support brain health',
            ],
        },
        {
            'title': 'Blood Sugar and Mood',
            'description': 'Skipping meals causes blood sugar crashes, leading to irritability, stress, and poor focus.',
            'source': 'Diabetes Care',
            'tips': [
                'Eat every 3-4 hours to maintain stable blood sugar',
                'Pair carbs with protein',
                'Avoid sugary snacks that cause crashes',
            ],
        },
    ],
    'activity': [
        {
            'title': 'Physical Activity and Wellness',
            'description': 'Regular exercise improves mood, reduces stress, enhances sleep quality, and boosts energy.',
            'source': 'American Heart Association',
            'tips': [
                'Aim for 150 minutes of moderate activity per week',
                'Start small: 10-minute walks count',
                'Find activities you enjoy',
            ],
        },
        {
            'title': 'Exercise and Cognitive Function',
            'description': 'Physical activity improves memory, focus, and learning ability.',
            'source': 'Nature Reviews Neuroscience',
            'tips': [
                'Exercise increases blood flow to the brain',
                'Movement breaks during study improve retention',
            ],
        },
    ],
    'general': [
        {
            'title': 'Crisis Resources',
            'description': "If you're in crisis or having thoughts of self-harm, help is available 24/7.",
            'source': '988 Suicide & Crisis Lifeline',
            'tips': [
                'Call or text 988 (US)',
                'Text HOME to 741741 (Crisis Text Line)',
                'Reach out to campus counseling services',
            ],
            'urgent': True,
        },
        {
            'title': 'Mental Health Resources',
            'description': 'Access to mental health support and information.',
            'source': 'SAMHSA',
            'tips': [
                'SAMHSA National Helpline: 1-800-662-4357',
                'Talk to a trusted adult, counselor, or healthcare provider',
            ],
        },
    ],
}


def resources_by_category(category: str) -> List[Dict]:
    return WELLNESS_RESOURCES.get((category or '').lower(), WELLNESS_RESOURCES['general'])


def search_resources(keyword: str) -> List[Dict]:
    keyword = (keyword or '').lower()
    if not keyword:
        return []
    return [
        resource
        for resources in WELLNESS_RESOURCES.values()
        for resource in resources
        if keyword in resource['title'].lower()
        or keyword in resource['description'].lower()
        or any(keyword in tip.lower() for tip in resource['tips'])
    ]


def personalized_resources(daily: DailyCheckIn) -> List[Dict]:
    """
    Pick resources for the weak spots in today's check-ins.

    Activity resources are always included and the general resources always
    come last.
    """
    slots = [daily.slots[name] for name in SLOTS if name in daily.slots]

    sleeps = [slot.sleep for slot in slots if slot.sleep]
    stresses = [slot.stress for slot in slots if slot.stress]
    moods = [slot.mood for slot in slots if slot.mood]
    avg_sleep = sum(sleeps) / len(sleeps) if sleeps else 0
    avg_stress = sum(stresses) / len(stresses) if stresses else 5
    avg_mood = sum(moods) / len(moods) if moods else 5
    total_hydration = sum(slot.hydration for slot in slots if slot.hydration)

    picked = []
    if avg_sleep < 6:
        picked.extend(WELLNESS_RESOURCES['sleep'])
    if total_hydration < 4:
        picked.extend(WELLNESS_RESOURCES['hydration'])
    if avg_stress >= 6:
        picked.extend(WELLNESS_RESOURCES['stress'])
    if avg_mood <= 5:
        picked.extend(WELLNESS_RESOURCES['mood'])
    if any(slot.eaten is False for slot in slots):
        picked.extend(WELLNESS_RESOURCES['food'])
    picked.extend(WELLNESS_RESOURCES['activity'])

    unique = []
    seen = set()
    for resource in picked:
        if resource['title'] not in seen:
            seen.add(resource['title'])
            unique.append(resource)
    return unique + WELLNESS_RESOURCES['general']
