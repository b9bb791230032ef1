# ==========================================
# Color Science Constants & Coefficients
# ==========================================

EPS = 1e-12                        # Division-by-zero safety
ACHROMATIC_EPS = 1e-6              # Max sRGB channel spread still treated as gray
GAMUT_EPS = 1e-5                   # Tolerance for gamut bounds checks
EQUALITY_EPS = 1e-5                # Tolerance for comparing canonical values

# WCAG Contrast Thresholds (Source: https://www.w3.org/TR/WCAG21/#contrast-minimum)
WCAG_AA_LARGE = 3.0                # Minimum contrast for large text (Level AA)
WCAG_AA_NORMAL = 4.5               # Minimum contrast for normal text (Level AA)
WCAG_AAA_LARGE = 4.5               # Enhanced contrast for large text (Level AAA)
WCAG_AAA_NORMAL = 7.0              # Enhanced contrast for normal text (Level AAA)
WCAG_LUMINANCE_OFFSET = 0.05       # Flare term added to both luminances
DARK_LUMINANCE_THRESHOLD = 0.5     # Below this relative luminance a color is "dark"

# Standard Scaling
RGB_MAX = 255.0                    # 8-bit color depth limit
HUE_MAX = 360.0                    # Full circle degrees
HUE_SECTOR = 60.0                  # Degrees per HSL sector
PERCENT = 100.0

# sRGB Transfer Function Constants (Source: IEC 61966-2-1:1999)
SRGB_SLOPE = 12.92
SRGB_OFFSET = 0.055
SRGB_DIVISOR = 1.055
SRGB_GAMMA = 2.4
SRGB_TO_LINEAR_TH = 0.04045
LINEAR_TO_SRGB_TH = 0.0031308

# Rec. 2020 Transfer Function Constants (Source: ITU-R BT.2020)
REC2020_ALPHA = 1.09929682680944
REC2020_BETA = 0.018053968510807
REC2020_SLOPE = 4.5
REC2020_GAMMA = 0.45

# Adobe RGB (1998) gamma
A98_GAMMA = 563 / 256

# ProPhoto (ROMM) Transfer Function Constants
PROPHOTO_GAMMA = 1.8
PROPHOTO_ET = 1 / 512
PROPHOTO_ET2 = 16 / 512
PROPHOTO_SLOPE = 16.0

# Reference whites from CIE xy chromaticities (Source: CSS Color 4)
D65_WHITE = (0.3127 / 0.3290, 1.0, (1.0 - 0.3127 - 0.3290) / 0.3290)
D50_WHITE = (0.3457 / 0.3585, 1.0, (1.0 - 0.3457 - 0.3585) / 0.3585)

# Bradford cone response matrix (Source: Lam 1985, Lindbloom)
BRADFORD_CONE = (
    (0.8951, 0.2664, -0.1614),
    (-0.7502, 1.7135, 0.0367),
    (0.0389, -0.0685, 1.0296),
)

# CIELAB Constants (Source: CIE 15:2004, exact rational forms)
LAB_EPSILON = 216 / 24389
LAB_KAPPA = 24389 / 27
LAB_L_MULT = 116.0
LAB_L_SUB = 16.0
LAB_A_MULT = 500.0
LAB_B_MULT = 200.0

# Percentage references for channels without finite bounds (Source: CSS Color 4)
LAB_AB_PERCENT_REF = 125.0
LCH_C_PERCENT_REF = 150.0
OKLAB_AB_PERCENT_REF = 0.4
OKLCH_C_PERCENT_REF = 0.4

# Default quantization steps
QUANTIZE_SNAP_DIGITS = 9           # Digits of a step count kept before rounding
ALPHA_STEP = 0.001
SPACE_STEP = 0.00001
