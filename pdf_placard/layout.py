"""
Per-character placement for horizontal rows and vertical columns.

Placements use a top-left, y-down page space. Each placement is the
glyph origin plus the transform applied around it: scale first, then
rotation in degrees, where positive turns +x toward +y.
"""

# Standard Library
import dataclasses
import typing

# local repo modules
import pdf_placard.config
import pdf_placard.fitting
import pdf_placard.locale_map
import pdf_placard.metrics
import pdf_placard.textcodec


CharCategory = pdf_placard.textcodec.CharCategory
GlyphMetrics = pdf_placard.metrics.GlyphMetrics
TextMetricsProvider = pdf_placard.metrics.TextMetricsProvider
LocaleService = pdf_placard.locale_map.LocaleService

SMALL_KANA_RATIO = pdf_placard.config.SMALL_KANA_RATIO
COMMA_PERIOD_SHIFT = pdf_placard.config.COMMA_PERIOD_SHIFT
PAREN_1_OFFSET = pdf_placard.config.PAREN_1_OFFSET
PAREN_2_OFFSET = pdf_placard.config.PAREN_2_OFFSET
PAREN_3_OFFSET = pdf_placard.config.PAREN_3_OFFSET
GAP_FLOOR_DIVISOR = pdf_placard.config.GAP_FLOOR_DIVISOR
GAP_SHRINK = pdf_placard.config.GAP_SHRINK
MIN_GAP_SCALE = pdf_placard.config.MIN_GAP_SCALE


@dataclasses.dataclass(frozen=True)
class GlyphPlacement:
	char: str
	font_size: float
	x: float
	y: float
	scale_x: float
	scale_y: float
	rotation: float = 0.0


#============================================
def layout_horizontal(
	provider: TextMetricsProvider,
	text: str,
	x0: float,
	y0: float,
	width: float,
	height: float,
	threshold: float,
	y_adjust: float = 0.0,
) -> list[GlyphPlacement] | None:
	"""
	Lay out a row left to right inside a band.

	Characters are spread with equal blank gaps, one before each
	character and one after the last, and the line is centered
	vertically in the band.

	Args:
		provider: Metrics provider.
		text: Row text.
		x0: Band left edge.
		y0: Band top edge.
		width: Band width.
		height: Band height.
		threshold: Aspect-ratio threshold.
		y_adjust: Vertical offset added to every character.

	Returns:
		List of placements or None when the row cannot be fitted.
	"""
	chars = pdf_placard.textcodec.split_characters(text)
	fit = pdf_placard.fitting.fit_horizontal(provider, chars, width, height, threshold)
	if fit is None:
		return None
	font_size = fit.font_size
	scale_x = fit.scale_x
	scale_y = fit.scale_y

	font = provider.measure_font(font_size)
	glyphs = [provider.measure_char(font_size, char) for char in chars]
	total_width = sum(glyph.x_advance for glyph in glyphs) * scale_x
	blank_width = (width - total_width) / (len(chars) + 1)
	line_top = y0 + (height - font.line_height * scale_y) / 2.0 + y_adjust
	baseline_y = line_top + font.ascent * scale_y

	placements: list[GlyphPlacement] = []
	x = x0
	for char, glyph in zip(chars, glyphs):
		x += blank_width
		placements.append(
			GlyphPlacement(
				char=char,
				font_size=font_size,
				x=x,
				y=baseline_y,
				scale_x=scale_x,
				scale_y=scale_y,
			)
		)
		x += glyph.x_advance * scale_x
	return placements


#============================================
def swap_axes(glyph: GlyphMetrics) -> GlyphMetrics:
	"""
	Swap the width and height, and the x and y bearings, of a glyph.

	Args:
		glyph: Upright glyph metrics.

	Returns:
		Metrics of the glyph turned on its side.
	"""
	return dataclasses.replace(
		glyph,
		width=glyph.height,
		height=glyph.width,
		x_bearing=glyph.y_bearing,
		y_bearing=glyph.x_bearing,
	)


#============================================
def place_upright(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	"""
	Center a glyph on the column axis by its advance.

	Args:
		char: Character.
		glyph: Glyph metrics at font_size.
		font_size: Font size.
		x: Column center x.
		y: Top of the character cell.
		scale_x: Horizontal scale.
		scale_y: Vertical scale.

	Returns:
		GlyphPlacement.
	"""
	return GlyphPlacement(
		char=char,
		font_size=font_size,
		x=x - glyph.x_advance * scale_x / 2.0,
		y=y - glyph.y_bearing * scale_y,
		scale_x=scale_x,
		scale_y=scale_y,
	)


#============================================
def place_comma_period(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	# ideographic comma and period sit in the upper right of the cell
	x += glyph.width * scale_x * COMMA_PERIOD_SHIFT
	return place_upright(char, glyph, font_size, x, y, scale_x, scale_y)


#============================================
def place_small_kana(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	scale_x *= SMALL_KANA_RATIO
	scale_y *= SMALL_KANA_RATIO
	x += glyph.width * scale_x * 0.5
	return place_upright(char, glyph, font_size, x, y, scale_x, scale_y)


#============================================
def place_hyphen_dash(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	"""
	Turn a horizontal bar into a vertical one.

	The glyph is mirrored on y and rotated a quarter turn back, so it
	reads top to bottom.
	"""
	turned = swap_axes(glyph)
	scaled_width = turned.width * scale_x
	return GlyphPlacement(
		char=char,
		font_size=font_size,
		x=x - turned.x_bearing * scale_x - scaled_width / 2.0,
		y=y - turned.y_bearing * scale_y,
		scale_x=scale_x,
		scale_y=-scale_y,
		rotation=-90.0,
	)


#============================================
def place_paren_1(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	turned = swap_axes(glyph)
	scaled_width = turned.width * scale_x
	return GlyphPlacement(
		char=char,
		font_size=font_size,
		x=x - scaled_width * PAREN_1_OFFSET + turned.height * scale_x / 2.0,
		y=y - turned.y_bearing * scale_y,
		scale_x=scale_x,
		scale_y=scale_y,
		rotation=90.0,
	)


#============================================
def place_paren_2(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	turned = swap_axes(glyph)
	scaled_width = turned.width * scale_x
	return GlyphPlacement(
		char=char,
		font_size=font_size,
		x=x + scaled_width * PAREN_2_OFFSET + turned.x_bearing * scale_x,
		y=y - turned.y_bearing * scale_y,
		scale_x=scale_x,
		scale_y=scale_y,
		rotation=90.0,
	)


#============================================
def place_paren_3(
	char: str,
	glyph: GlyphMetrics,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphPlacement:
	turned = swap_axes(glyph)
	scaled_width = turned.width * scale_x
	return GlyphPlacement(
		char=char,
		font_size=font_size,
		x=x - scaled_width * PAREN_3_OFFSET + turned.y_bearing * scale_x,
		y=y - turned.y_bearing * scale_y,
		scale_x=scale_x,
		scale_y=scale_y,
		rotation=90.0,
	)


VerticalPlacer = typing.Callable[
	[str, GlyphMetrics, float, float, float, float, float],
	GlyphPlacement,
]

VERTICAL_PLACERS: dict[CharCategory, VerticalPlacer] = {
	CharCategory.SPACE: place_upright,
	CharCategory.SMALL_KANA: place_small_kana,
	CharCategory.HYPHEN_DASH: place_hyphen_dash,
	CharCategory.PAREN_OPEN_CLOSE_1: place_paren_1,
	CharCategory.PAREN_OPEN_2: place_paren_2,
	CharCategory.PAREN_CLOSE_3: place_paren_3,
	CharCategory.COMMA_PERIOD: place_comma_period,
	CharCategory.OTHER: place_upright,
}


#============================================
def vertical_advance(category: CharCategory, glyph: GlyphMetrics, scale_y: float) -> float:
	"""
	Get the distance a character takes along the column.

	Args:
		category: Character category.
		glyph: Upright glyph metrics.
		scale_y: Vertical scale.

	Returns:
		Advance in page units.
	"""
	if category is CharCategory.SPACE:
		return glyph.x_advance * scale_y
	if category is CharCategory.SMALL_KANA:
		return glyph.height * scale_y * SMALL_KANA_RATIO
	if category in pdf_placard.fitting.ROTATED_CATEGORIES:
		return glyph.width * scale_y
	return glyph.height * scale_y


#============================================
def column_gap(
	provider: TextMetricsProvider,
	chars: list[str],
	font_size: float,
	height: float,
	scale_y: float,
) -> float:
	_text_width, text_height = pdf_placard.fitting.measure_vertical(provider, chars, font_size)
	return (height - text_height * scale_y) / (len(chars) + 1)


#============================================
def layout_vertical(
	provider: TextMetricsProvider,
	text: str,
	x0: float,
	y0: float,
	width: float,
	height: float,
	threshold: float,
	y_adjust: float = 0.0,
	locale_service: LocaleService | None = None,
) -> list[GlyphPlacement] | None:
	"""
	Lay out a column top to bottom inside a band.

	When the font has CJK glyphs the text is first mapped to fullwidth
	forms. Characters are centered on the column axis and spread with
	equal blank gaps. If the gap is narrower than a fifth of the font
	size, both scales shrink by 5% until it is not.

	Args:
		provider: Metrics provider.
		text: Column text.
		x0: Band left edge.
		y0: Band top edge.
		width: Band width.
		height: Band height.
		threshold: Aspect-ratio threshold.
		y_adjust: Vertical offset added to every character.
		locale_service: Fullwidth mapper, a default one when None.

	Returns:
		List of placements or None when the column cannot be fitted.
	"""
	if provider.supports_any_cjk():
		if locale_service is None:
			locale_service = LocaleService()
		text = locale_service.to_fullwidth(text)

	chars = pdf_placard.textcodec.split_characters(text)
	fit = pdf_placard.fitting.fit_vertical(provider, chars, width, height, threshold)
	if fit is None:
		return None
	font_size = fit.font_size
	scale_x = fit.scale_x
	scale_y = fit.scale_y

	blank_height = column_gap(provider, chars, font_size, height, scale_y)
	while blank_height < font_size / GAP_FLOOR_DIVISOR:
		if scale_y < MIN_GAP_SCALE:
			return None
		scale_x *= GAP_SHRINK
		scale_y *= GAP_SHRINK
		blank_height = column_gap(provider, chars, font_size, height, scale_y)

	center_x = x0 + width / 2.0
	placements: list[GlyphPlacement] = []
	y = y0
	for char in chars:
		y += blank_height
		glyph = provider.measure_char(font_size, char)
		category = pdf_placard.textcodec.classify_char(char)
		placer = VERTICAL_PLACERS[category]
		placements.append(placer(char, glyph, font_size, center_x, y + y_adjust, scale_x, scale_y))
		y += vertical_advance(category, glyph, scale_y)
	return placements
