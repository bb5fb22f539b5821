"""
Gamification constants

EXP by difficulty:
- Easy: 10 EXP
- Medium: 25 EXP
- Hard: 50 EXP

System goals are seeded for every new account and cannot be edited or deleted.
"""

from levelup.models import GoalCategory, GoalDifficulty, GoalPriority, ScheduleType

EXP_BY_DIFFICULTY = {
    GoalDifficulty.EASY: 10,
    GoalDifficulty.MEDIUM: 25,
    GoalDifficulty.HARD: 50,
}

# Lower sorts first on the dashboard
PRIORITY_ORDER = {
    GoalPriority.HIGH: 1,
    GoalPriority.MEDIUM: 2,
    GoalPriority.LOW: 3,
}

SYSTEM_GOALS = [
    {
        "title": "20 Push-ups",
        "description": "A core physical strengthening exercise.",
        "schedule_type": ScheduleType.DAILY,
        "category": GoalCategory.PHYSICAL,
        "difficulty": GoalDifficulty.EASY,
        "priority": GoalPriority.MEDIUM,
    },
    {
        "title": "20 Sit-ups",
        "description": "Strengthen your core.",
        "schedule_type": ScheduleType.DAILY,
        "category": GoalCategory.PHYSICAL,
        "difficulty": GoalDifficulty.EASY,
        "priority": GoalPriority.MEDIUM,
    },
    {
        "title": "10km Run",
        "description": "Build endurance and cardiovascular health.",
        "schedule_type": ScheduleType.DAILY,
        "category": GoalCategory.PHYSICAL,
        "difficulty": GoalDifficulty.HARD,
        "priority": GoalPriority.HIGH,
    },
    {
        "title": "Walk 7000 steps",
        "description": "A great way to stay active.",
        "schedule_type": ScheduleType.DAILY,
        "category": GoalCategory.PHYSICAL,
        "difficulty": GoalDifficulty.MEDIUM,
        "priority": GoalPriority.MEDIUM,
    },
    {
        "title": "Read for 15 minutes",
        "description": "Expand your knowledge and focus.",
        "schedule_type": ScheduleType.DAILY,
        "category": GoalCategory.MENTAL,
        "difficulty": GoalDifficulty.EASY,
        "priority": GoalPriority.LOW,
    },
    {
        "title": "Meditate for 10 minutes",
        "description": "Clear your mind and reduce stress.",
        "schedule_type": ScheduleType.DAILY,
        "category": GoalCategory.MENTAL,
        "difficulty": GoalDifficulty.EASY,
        "priority": GoalPriority.LOW,
    },
]

# Heatmap buckets: upper EXP bound (inclusive) for intensity 1, 2, 3; above is 4
HEATMAP_THRESHOLDS = (25, 75, 150)
