"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import GradeCategory

# Weighted grade scheme. Totals are normalized by the weights actually present.
DEFAULT_GRADE_WEIGHTS = {
    GradeCategory.MIDTERM: 0.30,
    GradeCategory.FINAL: 0.40,
    GradeCategory.ASSIGNMENT1: 0.10,
    GradeCategory.ASSIGNMENT2: 0.10,
    GradeCategory.ASSIGNMENT3: 0.05,
    GradeCategory.PROJECT: 0.15,
    GradeCategory.PARTICIPATION: 0.05,
}

MIN_SCORE = 0.0
MAX_SCORE = 10.0
TOTAL_DECIMALS = 2

# participation count -> score; counts above the last key map to the cap
PARTICIPATION_SCORE_TABLE = {0: 0, 1: 3, 2: 6, 3: 9}
PARTICIPATION_SCORE_CAP = 10

# Band thresholds (percent) for A/B/C/D, everything below is F.
DEFAULT_BAND_THRESHOLDS = (85.0, 70.0, 55.0, 40.0)

# Class summary counters
RATE_GOOD = 80.0
RATE_OK = 70.0
RATE_POOR = 50.0

ACCOUNT_FIELD_ALIASES = ("account", "MSSV", "studentAccount")
FIRST_DATA_ROW = 2

DEFAULT_BATCH_MAX_WORKERS = 8

TEACHER_EMAIL_MARKERS = ("@teacher", "@admin")
STUDENT_EMAIL_MARKERS = ("@student",)
