"""
Football vocabularies used for overlay scoring and classification
"""

from typing import Dict, FrozenSet, List, Tuple


def _normalized(terms) -> FrozenSet[str]:
    return frozenset(term.lower().strip() for term in terms)


# Terms that get priority in the terminology overlay
CORE_TERMS = _normalized([
    'shotgun', 'line of scrimmage', 'nickel defense', 'cover 2', 'pocket',
    'man coverage', 'crossing route', 'pass protection', 'zone coverage',
    'blitz', 'formation', 'route', 'tackle', 'pursuit', 'blocking',
    'pass rush', 'drop back', 'snap', 'first down', 'third down',
])

# Corner regions away from the action, as ((x_min, x_max), (y_min, y_max)) in percent
SAFE_ZONES: List[Tuple[Tuple[float, float], Tuple[float, float]]] = [
    ((5, 25), (5, 20)),    # Top-left
    ((75, 95), (5, 20)),   # Top-right
    ((5, 25), (80, 95)),   # Bottom-left
    ((75, 95), (80, 95)),  # Bottom-right
]

# Tactical labels, preferred over position labels
CONCEPT_LABELS = _normalized([
    'pursuit', 'downfield blocking', 'crossing route', 'pass protection',
    'blitz', 'zone coverage', 'man coverage', 'pocket', 'route',
    'formation', 'tackle', 'interception', 'fumble', 'touchdown',
    'sack', 'turnover', 'first down', 'audible', 'read option',
    'play action', 'screen pass', 'deep pass', 'short pass',
    'offside', 'holding', 'false start', 'red zone', 'end zone',
    'two-minute warning', 'timeout', 'extra point', 'two-point conversion',
    'quarterback sneak', 'draw play', 'trap play', 'sweep', 'jet sweep',
    'slant', 'out route', 'post route', 'fade route', 'comeback route',
    'seam route', 'rollout', 'scramble', 'clean pocket', 'deep safety',
    'pulling lineman', 'backside block', 'dead ball', 'single high safety',
    'defensive stance', 'collision', 'momentum', 'assist', 'tackle angle',
    'drive direction', 'vision', 'block/release', 'cover 2', 'two high',
    'line to gain', 'pre-snap motion', 'movement to play', 'coverage drop',
    'gunner', 'direction', 'punt returner',
])

# Substrings that mark a label as a concept even without an exact hit
CONCEPT_KEYWORDS = ('pursuit', 'blocking', 'route', 'coverage', 'formation')

# Roster positions
POSITION_LABELS = _normalized([
    'qb', 'quarterback', 'wr', 'wide receiver', 'rb', 'running back',
    'fb', 'fullback', 'te', 'tight end', 'ol', 'offensive line',
    'dl', 'defensive line', 'lb', 'linebacker', 'cb', 'cornerback',
    's', 'safety', 'st', 'special teams', 'c', 'center', 'slot receiver',
])

# Players with these roles get circled
KEY_ACTOR_ROLES = _normalized([
    'ball carrier', 'primary pursuer', 'key blocker', 'target receiver',
    'qb', 'quarterback', 'pursuer', 'blocker', 'receiver',
    'running back', 'rb', 'wide receiver', 'wr', 'tight end', 'te',
])

KEY_ACTOR_KEYWORDS = ('qb', 'ball carrier', 'pursuer', 'blocker', 'receiver', 'target')

# Editorial callout relevance
ACTION_CONCEPTS = (
    'pursuit', 'blocking', 'pass rush', 'coverage', 'scramble',
    'tackle', 'pick', 'contain', 'collapse', 'leverage', 'seal',
    'window', 'breakdown', 'pickup', 'angle',
)

OUTCOME_SCORE_KEYWORDS = (
    'failed', 'succeeded', 'prevented', 'allowed', 'created',
    'removed', 'cut off', 'opened', 'closed',
)

# Keywords that let a setup term through the callout filter
OUTCOME_CONTEXT_KEYWORDS = (
    'failed', 'succeeded', 'worked', 'broke down', 'prevented',
    'allowed', 'created', 'removed', 'why', 'because', 'reason',
)

SETUP_FILTER_TERMS = (
    'line of scrimmage', 'shotgun', 'center', 'route', 'formation',
    'nickel defense', 'dime defense', 'base defense',
)

SETUP_PENALTY_TERMS = ('line of scrimmage', 'shotgun', 'center', 'route', 'formation')

# Play-specific terms shown in the learn-mode drawer
PLAY_TERM_CATEGORIES: Dict[str, List[str]] = {
    'formations': ['shotgun', 'i-formation', 'pistol', 'spread', 'trips', 'empty', 'wildcat', 'formation'],
    'defensive_coverage': ['cover 2', 'cover 3', 'cover 4', 'cover 1', 'man coverage', 'zone coverage',
                           'nickel', 'dime', 'cover 2 man', 'cover 3 man', 'cover 4 man', 'two high',
                           'deep safety', 'single high'],
    'defensive_pressure': ['blitz', 'zone blitz', 'corner blitz', 'safety blitz', 'all-out blitz', 'pass rush'],
    'offensive_plays': ['play action', 'read option', 'screen pass', 'draw play', 'trap play', 'sweep',
                        'jet sweep', 'quarterback sneak'],
    'routes': ['slant', 'out route', 'post route', 'fade route', 'comeback route', 'seam route',
               'crossing route', 'go route', 'curl route'],
    'blocking': ['pass protection', 'run blocking', 'downfield blocking', 'pulling lineman',
                 'backside block', 'pocket', 'clean pocket'],
    'other': ['audible', 'huddle', 'snap', 'pre-snap motion', 'red zone', 'two-minute warning',
              'line of scrimmage', 'line to gain'],
}

CATEGORY_DISPLAY_NAMES = {
    'formations': 'Formations',
    'defensive_coverage': 'Defensive Coverage',
    'defensive_pressure': 'Defensive Pressure',
    'offensive_plays': 'Offensive Plays',
    'routes': 'Routes',
    'blocking': 'Blocking',
    'other': 'Other',
}


def normalize_term(term: str) -> str:
    """Case-insensitive key used for term deduplication"""
    return (term or '').lower().strip()


def is_concept_label(label: str) -> bool:
    """Check whether a label names a tactical concept"""
    normalized = normalize_term(label)
    if not normalized:
        return False
    return normalized in CONCEPT_LABELS or any(k in normalized for k in CONCEPT_KEYWORDS)


def is_position_label(label: str) -> bool:
    """Check whether a label names a roster position"""
    return normalize_term(label) in POSITION_LABELS
