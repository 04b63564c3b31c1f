"""Central place for packlab default settings."""

# Gamut boundary table
GAMUT_TABLE_SIZE: int = 0x10000  # 256 lightness rows x 256 hue columns
GAMUT_TABLE_RESOURCE: str = "oklab_gamut.dat"
GAMUT_TABLE_VERSION: str = "oklab-1"
GAMUT_TABLE_ENV_VAR: str = "PACKLAB_GAMUT_TABLE"  # Path override, read once at load

# Lightness curve applied on every RGB conversion
FORWARD_LIGHT_K: float = 0.4285714
REVERSE_LIGHT_K: float = 0.75

# Chroma
MAX_CHROMA: float = 0.31613  # chroma_limit() never reports more than this
CHROMA_LIMIT_BIAS: int = 2  # Added to the table distance by chroma_limit()

# Contrast heuristics
CONTRAST_CHROMA_THRESHOLD: int = 0x10000  # Squared A/B byte distance
INVERSE_LIGHT_SCALE: float = 0.45
INVERSE_LIGHT_DARK_BASE: float = 140.0
INVERSE_LIGHT_LIGHT_BASE: float = 127.0

# Random edits
RANDOM_EDIT_TRIALS: int = 50
RANDOM_TAP_MULTIPLIERS: tuple[int, int, int] = (
    0xD1B54A32D192ED03,
    0xABC98388FB8FAC03,
    0x8CB92BA72F3D8DD7,
)
RANDOM_SEED_INCREMENT: int = 0x9E3779B97F4A7C15

# HSL-style polar helpers
HSL_EPSILON: float = 1e-10
HSL_BLACK_LIGHTNESS: float = 0.001  # from_hsl() returns black at or below this
HSL_SATURATION_EDGE: float = 0.495  # saturation() is 0 where |L - 0.5| exceeds this
