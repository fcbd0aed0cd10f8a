"""
Font size and anisotropic scale search for one row or column.

The search is a small state machine: every iteration measures the text
at the current font size and feeds the extents to a pure transition
function, which grows the font, stretches one axis, or stops.
"""

# Standard Library
import dataclasses
import enum
import typing

# local repo modules
import pdf_placard.config
import pdf_placard.metrics
import pdf_placard.textcodec


CharCategory = pdf_placard.textcodec.CharCategory
TextMetricsProvider = pdf_placard.metrics.TextMetricsProvider

START_FONT_SIZE = pdf_placard.config.START_FONT_SIZE
MAX_FONT_SIZE = pdf_placard.config.MAX_FONT_SIZE
STRETCH_MIN_THRESHOLD = pdf_placard.config.STRETCH_MIN_THRESHOLD
SMALL_KANA_RATIO = pdf_placard.config.SMALL_KANA_RATIO

ROTATED_CATEGORIES = (
	CharCategory.HYPHEN_DASH,
	CharCategory.PAREN_OPEN_CLOSE_1,
	CharCategory.PAREN_OPEN_2,
	CharCategory.PAREN_CLOSE_3,
)


class FitPhase(enum.Enum):
	GROWING = "growing"
	STRETCHING_X = "stretching_x"
	STRETCHING_Y = "stretching_y"
	SATURATED = "saturated"
	FAILED = "failed"


TERMINAL_PHASES = (FitPhase.SATURATED, FitPhase.FAILED)


@dataclasses.dataclass(frozen=True)
class FitTuning:
	step: float
	fill: float


HORIZONTAL_TUNING = FitTuning(step=pdf_placard.config.H_FIT_STEP, fill=pdf_placard.config.H_FIT_FILL)
VERTICAL_TUNING = FitTuning(step=pdf_placard.config.V_FIT_STEP, fill=pdf_placard.config.V_FIT_FILL)


@dataclasses.dataclass(frozen=True)
class FitState:
	phase: FitPhase
	font_size: float
	scale_x: float
	scale_y: float


@dataclasses.dataclass(frozen=True)
class FitResult:
	font_size: float
	scale_x: float
	scale_y: float


INITIAL_STATE = FitState(
	phase=FitPhase.GROWING,
	font_size=START_FONT_SIZE,
	scale_x=1.0,
	scale_y=1.0,
)


#============================================
def advance_fit(
	state: FitState,
	text_width: float,
	text_height: float,
	box_width: float,
	box_height: float,
	threshold: float,
	tuning: FitTuning,
) -> FitState:
	"""
	Compute the next search state from the extents at the current size.

	Args:
		state: Current state.
		text_width: Unscaled text width at state.font_size.
		text_height: Unscaled text height at state.font_size.
		box_width: Target box width.
		box_height: Target box height.
		threshold: Aspect-ratio threshold.
		tuning: Step and fill ratio.

	Returns:
		Next FitState.
	"""
	if state.font_size >= MAX_FONT_SIZE or not text_width or not text_height:
		return dataclasses.replace(state, phase=FitPhase.FAILED)
	width_open = text_width * state.scale_x < box_width * tuning.fill
	height_open = text_height * state.scale_y < box_height * tuning.fill
	if width_open and height_open:
		return dataclasses.replace(state, phase=FitPhase.GROWING, font_size=state.font_size * tuning.step)
	if threshold < STRETCH_MIN_THRESHOLD:
		return dataclasses.replace(state, phase=FitPhase.SATURATED)
	if width_open:
		return dataclasses.replace(state, phase=FitPhase.STRETCHING_X, scale_x=state.scale_x * tuning.step)
	if height_open:
		return dataclasses.replace(state, phase=FitPhase.STRETCHING_Y, scale_y=state.scale_y * tuning.step)
	return dataclasses.replace(state, phase=FitPhase.SATURATED)


#============================================
def measure_horizontal(
	provider: TextMetricsProvider,
	chars: list[str],
	font_size: float,
) -> tuple[float, float]:
	"""
	Measure a row laid out left to right.

	Args:
		provider: Metrics provider.
		chars: Row characters.
		font_size: Font size.

	Returns:
		Tuple of (sum of advances, max of glyph heights and line height).
	"""
	line_height = provider.measure_font(font_size).line_height
	text_width = 0.0
	text_height = 0.0
	for char in chars:
		glyph = provider.measure_char(font_size, char)
		text_height = max(text_height, glyph.height, line_height)
		text_width += glyph.x_advance
	return (text_width, text_height)


#============================================
def vertical_extent(
	provider: TextMetricsProvider,
	char: str,
	font_size: float,
) -> tuple[float, float]:
	"""
	Get the footprint of one character in a column.

	Args:
		provider: Metrics provider.
		char: Character.
		font_size: Font size.

	Returns:
		Tuple of (width across the column, height along the column).
	"""
	glyph = provider.measure_char(font_size, char)
	category = pdf_placard.textcodec.classify_char(char)
	if category is CharCategory.SPACE:
		return (glyph.width, glyph.x_advance)
	if category is CharCategory.SMALL_KANA:
		return (glyph.width * SMALL_KANA_RATIO, glyph.height * SMALL_KANA_RATIO)
	if category in ROTATED_CATEGORIES:
		return (glyph.height, glyph.width)
	return (glyph.width, glyph.height)


#============================================
def measure_vertical(
	provider: TextMetricsProvider,
	chars: list[str],
	font_size: float,
) -> tuple[float, float]:
	"""
	Measure a column laid out top to bottom.

	Args:
		provider: Metrics provider.
		chars: Column characters.
		font_size: Font size.

	Returns:
		Tuple of (widest footprint, sum of footprint heights).
	"""
	text_width = 0.0
	text_height = 0.0
	for char in chars:
		width, height = vertical_extent(provider, char, font_size)
		text_width = max(text_width, width)
		text_height += height
	return (text_width, text_height)


#============================================
def run_search(
	measure: typing.Callable[[float], tuple[float, float]],
	box_width: float,
	box_height: float,
	threshold: float,
	tuning: FitTuning,
) -> FitState:
	"""
	Iterate the state machine until it saturates or fails.

	Args:
		measure: Callable mapping a font size to (width, height).
		box_width: Target box width.
		box_height: Target box height.
		threshold: Aspect-ratio threshold.
		tuning: Step and fill ratio.

	Returns:
		Terminal FitState.
	"""
	state = INITIAL_STATE
	while state.phase not in TERMINAL_PHASES:
		text_width, text_height = measure(state.font_size)
		state = advance_fit(state, text_width, text_height, box_width, box_height, threshold, tuning)
	return state


#============================================
def cap_aspect_horizontal(
	text_width: float,
	text_height: float,
	count: int,
	scale_x: float,
	scale_y: float,
	threshold: float,
) -> tuple[float, float]:
	"""
	Cap the per-character aspect ratio of a row.

	Both directions are checked independently, so both scales can be
	reduced on degenerate input.

	Returns:
		Tuple of (scale_x, scale_y).
	"""
	if (text_width * scale_x / count) / (text_height * scale_y) > threshold:
		scale_x = threshold * (text_height * scale_y) * count / text_width
	if (text_height * scale_y) / (text_width * scale_x / count) > threshold:
		scale_y = threshold * (text_width * scale_x / count) / text_height
	return (scale_x, scale_y)


#============================================
def cap_aspect_vertical(
	text_width: float,
	text_height: float,
	count: int,
	scale_x: float,
	scale_y: float,
	threshold: float,
) -> tuple[float, float]:
	"""
	Cap the per-character aspect ratio of a column.

	Only one axis is ever reduced, unlike the row version.

	Returns:
		Tuple of (scale_x, scale_y).
	"""
	if (text_width * scale_x) / (text_height * scale_y / count) > threshold:
		scale_x = threshold * (text_height * scale_y / count) / text_width
	elif (text_height * scale_y / count) / (text_width * scale_x) > threshold:
		scale_y = threshold * (text_width * scale_x) * count / text_height
	return (scale_x, scale_y)


#============================================
def fit_horizontal(
	provider: TextMetricsProvider,
	chars: list[str],
	width: float,
	height: float,
	threshold: float,
) -> FitResult | None:
	"""
	Fit a row into a box.

	Args:
		provider: Metrics provider.
		chars: Row characters.
		width: Box width.
		height: Box height.
		threshold: Aspect-ratio threshold.

	Returns:
		FitResult or None when the row is empty, its metrics are
		degenerate, or the font size guard is reached.
	"""
	if not chars:
		return None

	def measure(font_size: float) -> tuple[float, float]:
		return measure_horizontal(provider, chars, font_size)

	state = run_search(measure, width, height, threshold, HORIZONTAL_TUNING)
	if state.phase is FitPhase.FAILED:
		return None
	text_width, text_height = measure(state.font_size)
	scale_x, scale_y = cap_aspect_horizontal(
		text_width, text_height, len(chars), state.scale_x, state.scale_y, threshold,
	)
	return FitResult(font_size=state.font_size, scale_x=scale_x, scale_y=scale_y)


#============================================
def fit_vertical(
	provider: TextMetricsProvider,
	chars: list[str],
	width: float,
	height: float,
	threshold: float,
) -> FitResult | None:
	"""
	Fit a column into a box.

	Args:
		provider: Metrics provider.
		chars: Column characters.
		width: Box width.
		height: Box height.
		threshold: Aspect-ratio threshold.

	Returns:
		FitResult or None on failure.
	"""
	if not chars:
		return None

	def measure(font_size: float) -> tuple[float, float]:
		return measure_vertical(provider, chars, font_size)

	state = run_search(measure, width, height, threshold, VERTICAL_TUNING)
	if state.phase is FitPhase.FAILED:
		return None
	text_width, text_height = measure(state.font_size)
	scale_x, scale_y = cap_aspect_vertical(
		text_width, text_height, len(chars), state.scale_x, state.scale_y, threshold,
	)
	return FitResult(font_size=state.font_size, scale_x=scale_x, scale_y=scale_y)
