"""Enumerations and planning constants for the triathlon engine.

Thresholds cite their coaching or physiology source where one exists.
"""

from enum import IntEnum, auto


class TrainingPhase(IntEnum):
    """Macrocycle training phases, in chronological order.

    Follows the classic Friel base/build/peak/taper model.
    """

    BASE = auto()
    BUILD = auto()
    PEAK = auto()
    TAPER = auto()


class Discipline(IntEnum):
    """Workout disciplines. BRICK is a back-to-back bike to run session."""

    SWIM = auto()
    BIKE = auto()
    RUN = auto()
    BRICK = auto()
    STRENGTH = auto()
    REST = auto()


class SessionKind(IntEnum):
    """Generated single-discipline session types."""

    SWIM_ENDURANCE = auto()
    SWIM_INTERVALS = auto()
    SWIM_TECHNIQUE = auto()
    BIKE_ENDURANCE = auto()
    BIKE_INTERVALS = auto()
    BIKE_TEMPO = auto()
    RUN_EASY = auto()
    RUN_INTERVALS = auto()
    RUN_TEMPO = auto()
    RUN_LONG = auto()
    STRENGTH_CORE = auto()
    STRENGTH_FULL = auto()


class Intensity(IntEnum):
    """Step intensity labels ordered from easiest to hardest."""

    RECOVERY = auto()
    EASY = auto()
    MODERATE = auto()
    TEMPO = auto()
    THRESHOLD = auto()
    INTERVALS = auto()
    RACE = auto()


class CompletionStatus(IntEnum):
    """Outcome logged by the athlete for a planned workout."""

    COMPLETED = auto()
    PARTIAL = auto()
    SKIPPED = auto()


class ExperienceLevel(IntEnum):
    BEGINNER = auto()
    INTERMEDIATE = auto()
    ADVANCED = auto()
    ELITE = auto()


class InjurySeverity(IntEnum):
    MINOR = auto()
    MODERATE = auto()
    SEVERE = auto()


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class ZoneMethod(IntEnum):
    """How a heart-rate zone set was derived."""

    KARVONEN = auto()  # % of heart-rate reserve, from age + resting HR
    LTHR = auto()      # % of lactate threshold HR


class WorkoutCategory(IntEnum):
    """Library workout categories."""

    ENDURANCE = auto()
    INTERVALS = auto()
    TEMPO = auto()
    TECHNIQUE = auto()
    TEST = auto()
    RECOVERY = auto()
    SPEED = auto()
    STRENGTH = auto()


class Difficulty(IntEnum):
    BEGINNER = auto()
    INTERMEDIATE = auto()
    ADVANCED = auto()


class RecommendationType(IntEnum):
    """Kinds of advice produced by the training advisor."""

    RECOVERY = auto()
    PROGRESSION = auto()
    CONSISTENCY = auto()
    INFO = auto()


# ---------------------------------------------------------------------------
# Periodization constants
# ---------------------------------------------------------------------------
# Shortest plan with all four phases; shorter plans drop phases from the front
MIN_PLAN_WEEKS = 4

# Phase share of the macrocycle: Friel (2016), The Triathlete's Training Bible
PHASE_RATIOS = {
    TrainingPhase.BASE: 0.40,
    TrainingPhase.BUILD: 0.30,
    TrainingPhase.PEAK: 0.20,
    TrainingPhase.TAPER: 0.10,
}

# Weekly hours as a fraction of max weekly hours: (phase start, phase end).
# TAPER decays exponentially between its bounds (Bosquet et al. 2007).
PHASE_VOLUME_RANGE = {
    TrainingPhase.BASE: (0.60, 0.75),
    TrainingPhase.BUILD: (0.75, 0.90),
    TrainingPhase.PEAK: (0.95, 1.00),
    TrainingPhase.TAPER: (0.60, 0.40),
}

# Recovery week parameters (3 hard + 1 easy cycle)
RECOVERY_WEEK_INTERVAL = 3
RECOVERY_WEEK_VOLUME_FRACTION = 0.70

PHASE_FOCUS = {
    TrainingPhase.BASE: "Building aerobic foundation and technique",
    TrainingPhase.BUILD: "Increasing intensity and race-specific fitness",
    TrainingPhase.PEAK: "Maximum fitness and race simulation",
    TrainingPhase.TAPER: "Recovery and sharpening for race day",
}

# ---------------------------------------------------------------------------
# Race configuration limits
# ---------------------------------------------------------------------------
MIN_WEEKLY_HOURS = 3.0
MAX_WEEKLY_HOURS = 30.0
MIN_DAYS_TO_RACE = 1

# ---------------------------------------------------------------------------
# Discipline split
# ---------------------------------------------------------------------------
STRENGTH_TIME_SHARE = 0.05        # reserved before swim/bike/run are scaled
WEAKEST_DISCIPLINE_BONUS = 0.05
STRONGEST_DISCIPLINE_REDUCTION = 0.03

# Long sessions scale with race distance
DISTANCE_VOLUME_MULTIPLIER = {
    "sprint": 1.0,
    "olympic": 1.0,
    "half": 1.15,
    "full": 1.3,
}

# ---------------------------------------------------------------------------
# Session structure (minutes)
# ---------------------------------------------------------------------------
MIN_SESSION_MINUTES = {
    Discipline.SWIM: 20,
    Discipline.BIKE: 30,
    Discipline.RUN: 20,
    Discipline.STRENGTH: 20,
}
BRICK_MIN_BIKE_MINUTES = 30
BRICK_MIN_RUN_MINUTES = 20
BRICK_TRANSITION_MINUTES = 3

DEFAULT_STRENGTH_SESSIONS_PER_WEEK = 1
MAX_STRENGTH_SESSIONS_PER_WEEK = 3

# ---------------------------------------------------------------------------
# Heart rate: Tanaka et al. (2001), J Am Coll Cardiol 37(1):153-156
# ---------------------------------------------------------------------------
MAX_HR_INTERCEPT = 208
MAX_HR_AGE_COEFFICIENT = 0.7
LTHR_FRACTION_OF_MAX_HR = 0.89
RESTING_HR_FRACTION_OF_MAX_HR = 0.35  # rough estimate when only LTHR is known
DEFAULT_RESTING_HR = 60

# Friel %LTHR zone bounds
ZONE_BOUNDARIES_PCT_LTHR = (
    (0.00, 0.81),
    (0.81, 0.89),
    (0.90, 0.93),
    (0.94, 1.00),
    (1.01, 1.10),
)

# Karvonen %HRR zone bounds
ZONE_BOUNDARIES_PCT_HRR = (
    (0.50, 0.60),
    (0.60, 0.70),
    (0.70, 0.80),
    (0.80, 0.90),
    (0.90, 1.00),
)

ZONE_NAMES = (
    "Zone 1 - Recovery",
    "Zone 2 - Endurance",
    "Zone 3 - Tempo",
    "Zone 4 - Threshold",
    "Zone 5 - VO2max",
)

ZONE_DESCRIPTIONS = (
    "Active recovery, warm-up/cool-down",
    "All-day pace, builds aerobic base",
    "Moderate-hard effort, steady-state training",
    "Hard effort at lactate threshold",
    "Maximum effort, interval training",
)

# ---------------------------------------------------------------------------
# Completion and compliance: Borg CR-10 RPE scale
# ---------------------------------------------------------------------------
INTENSITY_TARGET_RPE = {
    Intensity.RECOVERY: 2,
    Intensity.EASY: 3,
    Intensity.MODERATE: 4,
    Intensity.TEMPO: 6,
    Intensity.THRESHOLD: 7,
    Intensity.INTERVALS: 8,
    Intensity.RACE: 9,
}
DEFAULT_TARGET_RPE = 5
MIN_RPE = 1
MAX_RPE = 10

COMPLETION_POINTS = {
    CompletionStatus.COMPLETED: 1.0,
    CompletionStatus.PARTIAL: 0.75,
    CompletionStatus.SKIPPED: 0.0,
}

# ---------------------------------------------------------------------------
# Training advisor thresholds
# ---------------------------------------------------------------------------
RPE_DRIFT_OVERREACHING = 2.0   # felt this much harder than target
RPE_DRIFT_FATIGUE = 1.0
RPE_DRIFT_UNDERLOADED = -2.0
LOW_COMPLIANCE_PCT = 70.0
HIGH_COMPLIANCE_PCT = 90.0
MIN_WORKOUTS_FOR_COMPLIANCE_ADVICE = 4
RECENT_WEEKS_WINDOW = 3
RECENT_SKIPS_THRESHOLD = 3
