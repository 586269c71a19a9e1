from enum import Enum, IntEnum

# ------------------ GENDER ------------------
class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"

# ------------------ ACTIVITY LEVEL ------------------
class ActivityLevel(str, Enum):
    SEDENTARY = "Sedentary"
    LIGHT = "Light"
    MODERATE = "Moderate"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"

# ------------------ BMI CATEGORY ------------------
class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"

# ------------------ ONBOARDING STEP ------------------
class OnboardingStep(IntEnum):
    BIOMETRICS = 1
    HEALTH_CONDITIONS = 2
    DIETARY_PREFERENCES = 3


# Options offered by the onboarding and profile forms
PREDEFINED_ALLERGENS = ["Peanuts", "Dairy", "Eggs", "Shellfish", "Gluten", "Soy", "Tree Nuts"]
DIET_TYPES = ["Vegetarian", "Non-Vegetarian", "Vegan", "Pescatarian"]
CUISINES = ["Bengali", "Western", "Chinese", "Indian", "Fusion"]
DEFAULT_DIET_TYPE = "Non-Vegetarian"
