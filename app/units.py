# ------------------------------------------------------------
# units.py - 키(cm) 합계를 피트/인치로 변환하는 헬퍼
# ------------------------------------------------------------

from typing import NamedTuple

CM_PER_FOOT = 30.48
INCHES_PER_FOOT = 12


class FeetInches(NamedTuple):
    feet: int
    inches: float  # 소수점 둘째 자리까지 반올림된 값


def to_feet_inches(total_cm: int) -> FeetInches:
    """
    cm 정수를 (피트, 인치)로 변환합니다.

    - 피트는 0 방향으로 버림 (입력이 음수가 아니므로 floor와 동일)
    - 인치는 소수점 둘째 자리 반올림
    - 인치가 12.00으로 반올림되어도 피트로 올림(carry)하지 않음
    """
    if total_cm < 0:
        raise ValueError(f"height must not be negative: {total_cm}")

    total_feet = total_cm / CM_PER_FOOT
    feet = int(total_feet)
    inches = round((total_feet - feet) * INCHES_PER_FOOT, 2)
    return FeetInches(feet=feet, inches=inches)


def format_feet_inches(value: FeetInches) -> str:
    # 예: FeetInches(5, 7.72) -> "5ft and 7.72inches"
    return f"{value.feet}ft and {value.inches:.2f}inches"


def format_cm(total_cm: int) -> str:
    return f"{total_cm}cm"
