import pytest

import pdf_placard.fitting as fitting

import fake_metrics


FitPhase = fitting.FitPhase
EPSILON = 1e-6


#============================================
def horizontal_aspects(provider, chars: list[str], result: fitting.FitResult) -> tuple[float, float]:
	"""
	Compute the per-character aspect ratios of a fitted row.

	Returns:
		Tuple of (width over height, height over width).
	"""
	text_width, text_height = fitting.measure_horizontal(provider, chars, result.font_size)
	char_width = text_width * result.scale_x / len(chars)
	char_height = text_height * result.scale_y
	return (char_width / char_height, char_height / char_width)


#============================================
def test_advance_fit_transitions() -> None:
	tuning = fitting.HORIZONTAL_TUNING
	start = fitting.INITIAL_STATE

	grown = fitting.advance_fit(start, 10.0, 10.0, 100.0, 100.0, 1.5, tuning)
	assert grown.phase is FitPhase.GROWING
	assert grown.font_size == pytest.approx(11.0)

	wide = fitting.advance_fit(start, 10.0, 95.0, 100.0, 100.0, 1.5, tuning)
	assert wide.phase is FitPhase.STRETCHING_X
	assert wide.scale_x == pytest.approx(1.1)
	assert wide.font_size == start.font_size

	tall = fitting.advance_fit(start, 95.0, 10.0, 100.0, 100.0, 1.5, tuning)
	assert tall.phase is FitPhase.STRETCHING_Y
	assert tall.scale_y == pytest.approx(1.1)

	full = fitting.advance_fit(start, 95.0, 95.0, 100.0, 100.0, 1.5, tuning)
	assert full.phase is FitPhase.SATURATED


#============================================
def test_low_threshold_disables_stretching() -> None:
	state = fitting.advance_fit(fitting.INITIAL_STATE, 10.0, 95.0, 100.0, 100.0, 1.05, fitting.HORIZONTAL_TUNING)
	assert state.phase is FitPhase.SATURATED
	assert state.scale_x == 1.0


#============================================
def test_advance_fit_failure_guards() -> None:
	tuning = fitting.VERTICAL_TUNING
	assert fitting.advance_fit(fitting.INITIAL_STATE, 0.0, 10.0, 100.0, 100.0, 1.5, tuning).phase is FitPhase.FAILED
	assert fitting.advance_fit(fitting.INITIAL_STATE, 10.0, 0.0, 100.0, 100.0, 1.5, tuning).phase is FitPhase.FAILED
	huge = fitting.FitState(FitPhase.GROWING, 10000.0, 1.0, 1.0)
	assert fitting.advance_fit(huge, 1.0, 1.0, 100.0, 100.0, 1.5, tuning).phase is FitPhase.FAILED


#============================================
def test_search_stops_at_font_size_guard() -> None:
	state = fitting.run_search(
		lambda size: (size * 1e-9, size * 1e-9),
		100.0,
		100.0,
		1.5,
		fitting.HORIZONTAL_TUNING,
	)
	assert state.phase is FitPhase.FAILED
	assert state.font_size >= 10000.0


#============================================
def test_fit_horizontal_failures() -> None:
	provider = fake_metrics.BoxMetrics()
	assert fitting.fit_horizontal(provider, [], 100.0, 100.0, 1.5) is None
	assert fitting.fit_horizontal(fake_metrics.ZeroMetrics(), ["a"], 100.0, 100.0, 1.5) is None
	assert fitting.fit_vertical(provider, [], 100.0, 100.0, 1.5) is None
	assert fitting.fit_vertical(fake_metrics.ZeroMetrics(), ["a"], 100.0, 100.0, 1.5) is None


#============================================
def test_fit_horizontal_bounds_and_aspect() -> None:
	provider = fake_metrics.BoxMetrics()
	cases = [
		(list("abc"), 500.0, 100.0),
		(list("a"), 20.0, 500.0),
		(list("This is"), 800.0, 250.0),
		(list("a test."), 800.0, 250.0),
	]
	threshold = 1.5
	for chars, width, height in cases:
		result = fitting.fit_horizontal(provider, chars, width, height, threshold)
		assert result is not None
		assert result.font_size >= 10.0
		assert result.scale_x > 0.0
		assert result.scale_y > 0.0
		wide_ratio, tall_ratio = horizontal_aspects(provider, chars, result)
		assert wide_ratio <= threshold + EPSILON
		assert tall_ratio <= threshold + EPSILON


#============================================
def test_fit_horizontal_monotonic_in_box_size() -> None:
	provider = fake_metrics.BoxMetrics()
	chars = list("placard")
	previous = 0.0
	for width in (50.0, 100.0, 200.0, 400.0, 800.0):
		result = fitting.fit_horizontal(provider, chars, width, 120.0, 1.5)
		assert result is not None
		assert result.font_size >= previous
		previous = result.font_size
	previous = 0.0
	for height in (30.0, 60.0, 120.0, 240.0):
		result = fitting.fit_horizontal(provider, chars, 800.0, height, 1.5)
		assert result is not None
		assert result.font_size >= previous
		previous = result.font_size


#============================================
def test_fit_vertical_bounds_and_aspect() -> None:
	provider = fake_metrics.BoxMetrics(cjk=True)
	chars = list("あいう")
	threshold = 1.5
	result = fitting.fit_vertical(provider, chars, 100.0, 500.0, threshold)
	assert result is not None
	assert result.font_size >= 10.0
	text_width, text_height = fitting.measure_vertical(provider, chars, result.font_size)
	column_width = text_width * result.scale_x
	char_height = text_height * result.scale_y / len(chars)
	assert column_width / char_height <= threshold + EPSILON
	assert char_height / column_width <= threshold + EPSILON


#============================================
def test_vertical_extents_by_category() -> None:
	provider = fake_metrics.BoxMetrics(cjk=True)
	size = 10.0
	# ascii hyphen is half an em wide and turns on its side
	assert fitting.vertical_extent(provider, "-", size) == pytest.approx((10.0, 5.0))
	assert fitting.vertical_extent(provider, "っ", size) == pytest.approx((5.5, 5.5))
	assert fitting.vertical_extent(provider, " ", size) == pytest.approx((0.0, 5.0))
	assert fitting.vertical_extent(provider, "あ", size) == pytest.approx((10.0, 10.0))
	assert fitting.measure_vertical(provider, list("あ-っ"), size) == pytest.approx((10.0, 20.5))


#============================================
def test_measure_horizontal_uses_line_height() -> None:
	provider = fake_metrics.BoxMetrics()
	assert fitting.measure_horizontal(provider, list("ab"), 10.0) == pytest.approx((10.0, 10.0))
	# spaces have no ink but still take the line height
	assert fitting.measure_horizontal(provider, [" "], 10.0) == pytest.approx((5.0, 10.0))


#============================================
def test_aspect_cap_asymmetry() -> None:
	# with a threshold below 1 both row checks fire, the column check only once
	assert fitting.cap_aspect_horizontal(100.0, 100.0, 1, 1.0, 1.0, 0.5) == pytest.approx((0.5, 0.25))
	assert fitting.cap_aspect_vertical(100.0, 100.0, 1, 1.0, 1.0, 0.5) == pytest.approx((0.5, 1.0))
