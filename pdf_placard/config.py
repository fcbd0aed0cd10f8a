"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import locale

# PIP3 modules
import reportlab.lib.colors
import reportlab.lib.units


VERSION = "0.85"

DEFAULT_TEXT = "This is\na test."
DEFAULT_OUTPUT = "output.pdf"
DEFAULT_PAGE_SIZE = "A4"
DEFAULT_ORIENTATION = "landscape"
DEFAULT_MARGIN_MM = 8.0
DEFAULT_TEXT_COLOR = 0x000000
DEFAULT_BACK_COLOR = 0xFFFFFF
DEFAULT_THRESHOLD = 1.5
DEFAULT_LETTERS_PER_PAGE = -1
DEFAULT_Y_ADJUST_MM = 0.0

DEFAULT_FONT = "Helvetica"
DEFAULT_FONT_JAPANESE = "HeiseiKakuGo-W5"
FALLBACK_FONT = "Helvetica"

# Fit solver
START_FONT_SIZE = 10.0
MAX_FONT_SIZE = 10000.0
STRETCH_MIN_THRESHOLD = 1.1
H_FIT_STEP = 1.1
H_FIT_FILL = 0.9
V_FIT_STEP = 1.05
V_FIT_FILL = 0.95

# Vertical layout
SMALL_KANA_RATIO = 0.55
COMMA_PERIOD_SHIFT = 0.75
PAREN_1_OFFSET = 0.55
PAREN_2_OFFSET = 0.6
PAREN_3_OFFSET = 0.55
GAP_FLOOR_DIVISOR = 5.0
GAP_SHRINK = 0.95
MIN_GAP_SCALE = 1e-3

# Font probes
PROBE_FONT_SIZE = 30.0
PROBE_MIN_EXTENT = 1.0
FIXED_PITCH_TOLERANCE = 0.25

TAB_SPACES = 3


@dataclasses.dataclass(frozen=True)
class PlacardConfig:
	font_name: str
	page_width: float
	page_height: float
	margin: float
	text_color: int
	back_color: int
	threshold: float
	y_adjust: float
	vertical: bool
	letters_per_page: int | None

	@property
	def printable_width(self) -> float:
		return self.page_width - 2.0 * self.margin

	@property
	def printable_height(self) -> float:
		return self.page_height - 2.0 * self.margin


#============================================
def points_from_mm(value: float) -> float:
	"""
	Convert millimetres to points.

	Args:
		value: Millimetre value.

	Returns:
		Points value.
	"""
	return value * reportlab.lib.units.mm


#============================================
def default_font_name() -> str:
	"""
	Pick the default font for the user's locale.

	Returns:
		A CJK font name for Japanese locales, otherwise a Latin font name.
	"""
	language = locale.getlocale()[0] or ""
	if language.lower().startswith(("ja", "japanese")):
		return DEFAULT_FONT_JAPANESE
	return DEFAULT_FONT


#============================================
def parse_color(value: str) -> int:
	"""
	Parse a color string into a packed 0xRRGGBB value.

	Args:
		value: Color like "#AABBCC" or a color name like "navy".

	Returns:
		Packed color value.
	"""
	try:
		color = reportlab.lib.colors.toColor(value.strip())
	except (ValueError, AssertionError) as error:
		raise ValueError(f"invalid color value {value!r}") from error
	return color.int_rgb()


#============================================
def split_rgb(color: int) -> tuple[float, float, float]:
	"""
	Split a 0xRRGGBB color into RGB floats.

	Args:
		color: Packed color value.

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	red = ((color >> 16) & 0xFF) / 255.0
	green = ((color >> 8) & 0xFF) / 255.0
	blue = (color & 0xFF) / 255.0
	return (red, green, blue)
