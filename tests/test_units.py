import pytest

from app.units import FeetInches, format_cm, format_feet_inches, to_feet_inches


def test_zero_height():
    assert to_feet_inches(0) == FeetInches(feet=0, inches=0.0)
    assert format_feet_inches(to_feet_inches(0)) == "0ft and 0.00inches"


def test_exact_hundred_feet():
    # 3048cm = 1200 inches = 100ft 0in
    assert to_feet_inches(3048) == FeetInches(feet=100, inches=0.0)


def test_partial_inches_are_rounded_to_two_places():
    # 172 / 30.48 = 5.6430... ft -> 0.6430... * 12 = 7.7165...
    assert to_feet_inches(172) == FeetInches(feet=5, inches=7.72)
    assert format_feet_inches(to_feet_inches(172)) == "5ft and 7.72inches"


def test_sum_of_two_heights():
    assert format_feet_inches(to_feet_inches(322)) == "10ft and 6.77inches"


def test_negative_height_is_rejected():
    with pytest.raises(ValueError):
        to_feet_inches(-1)


def test_format_cm():
    assert format_cm(0) == "0cm"
    assert format_cm(418) == "418cm"
