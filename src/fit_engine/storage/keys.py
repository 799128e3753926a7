"""Fixed logical keys of the persistent store."""

WORKOUTS = "fitTracker_workouts"
WEIGHT = "fitTracker_weight"
MEALS = "fitTracker_meals"
SAVED_MEALS = "fitTracker_savedMeals"
EXERCISES = "fitTracker_exercises"
CALORIE_GOAL = "fitTracker_calorieGoal"
WEIGHT_GOAL = "fitTracker_weightGoal"
COMPLETED_WEEKS = "fitTracker_completedWeeks"
MESOCYCLE_TEMPLATES = "fitTracker_mesocycleTemplates"
ACTIVE_TEMPLATE_ID = "fitTracker_activeTemplateId"
DARK_MODE = "fitTracker_darkMode"

ALL_KEYS = (
    WORKOUTS,
    WEIGHT,
    MEALS,
    SAVED_MEALS,
    EXERCISES,
    CALORIE_GOAL,
    WEIGHT_GOAL,
    COMPLETED_WEEKS,
    MESOCYCLE_TEMPLATES,
    ACTIVE_TEMPLATE_ID,
    DARK_MODE,
)
