"""
Page composition: bands, pagination and document preparation.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import pdf_placard.config
import pdf_placard.layout
import pdf_placard.locale_map
import pdf_placard.metrics
import pdf_placard.script
import pdf_placard.textcodec


PlacardConfig = pdf_placard.config.PlacardConfig
GlyphPlacement = pdf_placard.layout.GlyphPlacement
LocaleService = pdf_placard.locale_map.LocaleService
FontService = pdf_placard.metrics.FontService
TextMetricsProvider = pdf_placard.metrics.TextMetricsProvider
Script = pdf_placard.script.Script

FALLBACK_FONT = pdf_placard.config.FALLBACK_FONT

FALLBACK_MESSAGES = {
	Script.JAPANESE: "   Error:   \nNot Japanese font",
	Script.CHINESE: "   Error:   \nNot Chinese font",
	Script.KOREAN: "   Error:   \nNot Korean font",
}


@dataclasses.dataclass(frozen=True)
class Band:
	x: float
	y: float
	width: float
	height: float
	color: int


@dataclasses.dataclass(frozen=True)
class PageLayout:
	width: float
	height: float
	bands: list[Band]
	placements: list[GlyphPlacement]


@dataclasses.dataclass(frozen=True)
class PreparedText:
	text: str
	provider: TextMetricsProvider
	config: PlacardConfig
	missing_script: Script | None = None


@dataclasses.dataclass(frozen=True)
class PlacardDocument:
	provider: TextMetricsProvider
	config: PlacardConfig
	pages: list[PageLayout]
	missing_script: Script | None = None


#============================================
def find_missing_script(text: str, provider: TextMetricsProvider) -> Script | None:
	"""
	Find the CJK script of the text when the font cannot show it.

	Args:
		text: Document text.
		provider: Metrics provider of the selected font.

	Returns:
		The detected script when the font lacks it, otherwise None.
	"""
	script = pdf_placard.script.detect_script(text)
	if script is None:
		return None
	if provider.supports_script(script):
		return None
	return script


#============================================
def prepare_text(
	text: str,
	config: PlacardConfig,
	font_service: FontService,
) -> PreparedText:
	"""
	Resolve the font and clean up the text before layout.

	When the text is Japanese, Chinese or Korean and the font has no
	glyphs for it, the text is replaced by an error message in the
	fallback font and horizontal layout is forced. Escapes are then
	expanded and tabs become spaces.

	Args:
		text: Raw document text.
		config: Placard configuration.
		font_service: Font resolver.

	Returns:
		PreparedText.
	"""
	provider = font_service.resolve(config.font_name)
	missing_script = find_missing_script(text, provider)
	if missing_script is not None:
		text = FALLBACK_MESSAGES[missing_script]
		provider = font_service.resolve(FALLBACK_FONT)
		config = dataclasses.replace(config, font_name=FALLBACK_FONT, vertical=False)
	text = pdf_placard.textcodec.unescape(text)
	text = pdf_placard.textcodec.expand_tabs(text)
	return PreparedText(text=text, provider=provider, config=config, missing_script=missing_script)


#============================================
def paginate(text: str, letters_per_page: int | None) -> list[str]:
	"""
	Split a document into page texts.

	Args:
		text: Prepared document text.
		letters_per_page: Characters per page, or None for one page.

	Returns:
		List of page texts. In letter-count mode whitespace is removed
		and there are ceil(n / letters_per_page) pages.
	"""
	if letters_per_page is None:
		return [text]
	if letters_per_page <= 0:
		raise ValueError(f"letters per page must be positive: {letters_per_page}")
	chars = pdf_placard.textcodec.split_characters(pdf_placard.textcodec.strip_whitespace(text))
	page_count = math.ceil(len(chars) / letters_per_page)
	pages = []
	for index in range(page_count):
		start = index * letters_per_page
		pages.append("".join(chars[start:start + letters_per_page]))
	return pages


#============================================
def compose_horizontal_page(
	provider: TextMetricsProvider,
	rows: list[str],
	config: PlacardConfig,
) -> PageLayout:
	"""
	Stack one band per row from top to bottom.

	Args:
		provider: Metrics provider.
		rows: Row texts.
		config: Placard configuration.

	Returns:
		PageLayout.
	"""
	bands: list[Band] = []
	placements: list[GlyphPlacement] = []
	if rows:
		margin = config.margin
		band_width = config.printable_width
		band_height = (config.page_height - margin * (len(rows) + 1)) / len(rows)
		y = margin
		for row in rows:
			if band_width > 0 and band_height > 0:
				bands.append(Band(margin, y, band_width, band_height, config.back_color))
				row_placements = pdf_placard.layout.layout_horizontal(
					provider, row, margin, y, band_width, band_height,
					config.threshold, config.y_adjust,
				)
				# a row that does not fit leaves its band empty
				if row_placements is not None:
					placements.extend(row_placements)
			y += band_height + margin
	return PageLayout(config.page_width, config.page_height, bands, placements)


#============================================
def compose_vertical_page(
	provider: TextMetricsProvider,
	rows: list[str],
	config: PlacardConfig,
	locale_service: LocaleService | None = None,
) -> PageLayout:
	"""
	Place one column per row from right to left.

	Args:
		provider: Metrics provider.
		rows: Row texts, the first one becomes the rightmost column.
		config: Placard configuration.
		locale_service: Fullwidth mapper for CJK fonts.

	Returns:
		PageLayout.
	"""
	bands: list[Band] = []
	placements: list[GlyphPlacement] = []
	if rows:
		margin = config.margin
		band_width = (config.page_width - margin * (len(rows) + 1)) / len(rows)
		band_height = config.printable_height
		x = 0.0
		for row in rows:
			x += margin
			x0 = config.page_width - (x + band_width)
			if band_width > 0 and band_height > 0:
				bands.append(Band(x0, margin, band_width, band_height, config.back_color))
				column_placements = pdf_placard.layout.layout_vertical(
					provider, row, x0, margin, band_width, band_height,
					config.threshold, config.y_adjust, locale_service,
				)
				if column_placements is not None:
					placements.extend(column_placements)
			x += band_width
	return PageLayout(config.page_width, config.page_height, bands, placements)


#============================================
def compose_page(
	provider: TextMetricsProvider,
	text: str,
	config: PlacardConfig,
	locale_service: LocaleService | None = None,
) -> PageLayout:
	rows = pdf_placard.textcodec.split_rows(text)
	if config.vertical:
		return compose_vertical_page(provider, rows, config, locale_service)
	return compose_horizontal_page(provider, rows, config)


#============================================
def build_document(
	text: str,
	config: PlacardConfig,
	font_service: FontService | None = None,
	locale_service: LocaleService | None = None,
) -> PlacardDocument:
	"""
	Lay out every page of a placard.

	Args:
		text: Raw document text, may contain backslash escapes.
		config: Placard configuration.
		font_service: Font resolver, a new one when None.
		locale_service: Fullwidth mapper, a new one when None.

	Returns:
		PlacardDocument with one PageLayout per page.
	"""
	if font_service is None:
		font_service = FontService()
	if locale_service is None:
		locale_service = LocaleService()
	prepared = prepare_text(text, config, font_service)
	pages = []
	for page_text in paginate(prepared.text, prepared.config.letters_per_page):
		pages.append(compose_page(prepared.provider, page_text, prepared.config, locale_service))
	return PlacardDocument(
		provider=prepared.provider,
		config=prepared.config,
		pages=pages,
		missing_script=prepared.missing_script,
	)
