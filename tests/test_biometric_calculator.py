"""Unit tests for BMI, BMI category and BMR calculations."""

import pytest

from schemas.biometrics_schema import BiometricInput
from schemas.enums import BMICategory, Gender
from services.biometric_calculator import biometric_calculator as calc


@pytest.mark.parametrize("weight,height,expected", [
    (75, 175, 24.5),
    (50, 170, 17.3),
    (85, 170, 29.4),
    (100, 170, 34.6),
    (30, 100, 30.0),
    (300, 250, 48.0),
])
def test_compute_bmi(weight, height, expected):
    """Test BMI from weight in kg and height in cm."""
    assert calc.compute_bmi(weight, height) == expected


def test_bmi_has_one_decimal_place():
    """Test that BMI is rounded to a single decimal."""
    bmi = calc.compute_bmi(70.5, 172.5)
    assert bmi == round(bmi, 1)
    assert bmi == 23.7


@pytest.mark.parametrize("bmi,expected", [
    (17.0, BMICategory.UNDERWEIGHT),
    (18.4, BMICategory.UNDERWEIGHT),
    (18.5, BMICategory.NORMAL),
    (24.9, BMICategory.NORMAL),
    (25.0, BMICategory.OVERWEIGHT),
    (29.9, BMICategory.OVERWEIGHT),
    (30.0, BMICategory.OBESE),
    (40.0, BMICategory.OBESE),
])
def test_classify_bmi_bands_include_lower_bound(bmi, expected):
    """Test that each BMI band starts at its lower bound."""
    assert calc.classify_bmi(bmi) == expected


@pytest.mark.parametrize("weight,height,age,gender,expected", [
    (75, 175, 28, Gender.MALE, 1709),
    (70, 180, 20, Gender.MALE, 1730),
    (80, 175, 50, Gender.MALE, 1649),
    (65, 165, 28, Gender.FEMALE, 1380),
    (60, 160, 22, Gender.FEMALE, 1329),
    (70, 170, 30, Gender.OTHER, 1535),
])
def test_compute_bmr(weight, height, age, gender, expected):
    """Test Mifflin-St Jeor BMR for each gender."""
    bmr = calc.compute_bmr(weight, height, age, gender)
    assert bmr == expected
    assert isinstance(bmr, int)


def test_compute_bmr_accepts_plain_strings():
    """Test that gender may be passed as its string value."""
    assert calc.compute_bmr(75, 175, 28, "Male") == 1709


def test_bmr_rounds_only_at_the_end():
    """Test that intermediate terms are not rounded."""
    # 705 + 1078.125 - 150 + 5 = 1638.125
    assert calc.compute_bmr(70.5, 172.5, 30, Gender.MALE) == 1638


@pytest.mark.parametrize("gender", list(Gender))
@pytest.mark.parametrize("weight,height,age", [(75, 175, 28), (60, 160, 18), (120, 190, 60)])
def test_bmr_drops_five_kcal_per_year(weight, height, age, gender):
    """Test that 25 extra years lower BMR by exactly 125 kcal."""
    assert calc.compute_bmr(weight, height, age, gender) - calc.compute_bmr(weight, height, age + 25, gender) == 125


@pytest.mark.parametrize("weight,height,age", [(75, 175, 28), (50, 150, 90), (200, 240, 45)])
def test_bmr_ordering_by_gender(weight, height, age):
    """Test that Female < Other < Male for the same measurements."""
    female = calc.compute_bmr(weight, height, age, Gender.FEMALE)
    other = calc.compute_bmr(weight, height, age, Gender.OTHER)
    male = calc.compute_bmr(weight, height, age, Gender.MALE)
    assert female < other < male


def test_calculations_are_deterministic():
    """Test that repeated calls return identical values."""
    assert calc.compute_bmi(72.3, 168.4) == calc.compute_bmi(72.3, 168.4)
    assert calc.compute_bmr(72.3, 168.4, 41, Gender.OTHER) == calc.compute_bmr(72.3, 168.4, 41, Gender.OTHER)


def test_derive_bundles_all_values():
    """Test that derive returns BMI, category and BMR together."""
    biometrics = BiometricInput(
        age=28, gender="Male", height=175, weight=75, target_weight=70, activity_level="Moderate",
    )
    derived = calc.derive(biometrics)
    assert derived.bmi == 24.5
    assert derived.bmi_category == BMICategory.NORMAL
    assert derived.bmr == 1709
