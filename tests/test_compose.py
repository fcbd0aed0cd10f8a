import math

import pytest

import pdf_placard.compose as compose
import pdf_placard.config as config_module
import pdf_placard.script as script

import fake_metrics


A4_LANDSCAPE = (841.8897637795277, 595.2755905511812)


#============================================
def build_config(**overrides) -> config_module.PlacardConfig:
	"""
	Build an A4 landscape config with an 8 mm margin.
	"""
	values = {
		"font_name": "Helvetica",
		"page_width": A4_LANDSCAPE[0],
		"page_height": A4_LANDSCAPE[1],
		"margin": config_module.points_from_mm(8.0),
		"text_color": 0x000000,
		"back_color": 0xFFFFFF,
		"threshold": 1.5,
		"y_adjust": 0.0,
		"vertical": False,
		"letters_per_page": None,
	}
	values.update(overrides)
	return config_module.PlacardConfig(**values)


#============================================
def test_default_text_makes_two_rows() -> None:
	config = build_config()
	document = compose.build_document("This is\\na test.", config, fake_metrics.FakeFontService())
	assert len(document.pages) == 1
	page = document.pages[0]
	assert len(page.bands) == 2
	assert "".join(placement.char for placement in page.placements) == "This isa test."


#============================================
def test_horizontal_band_geometry() -> None:
	config = build_config()
	page = compose.compose_horizontal_page(fake_metrics.BoxMetrics(), ["one", "two"], config)
	margin = config.margin
	band_height = (config.page_height - 3 * margin) / 2
	first, second = page.bands
	assert (first.x, first.y) == pytest.approx((margin, margin))
	assert first.width == pytest.approx(config.printable_width)
	assert first.height == pytest.approx(band_height)
	assert second.y == pytest.approx(2 * margin + band_height)
	assert second.y + second.height == pytest.approx(config.page_height - margin)
	for placement in page.placements:
		assert margin <= placement.x <= config.page_width - margin


#============================================
def test_vertical_columns_run_right_to_left() -> None:
	config = build_config(vertical=True)
	page = compose.compose_vertical_page(fake_metrics.BoxMetrics(cjk=True), ["あい", "うえ"], config)
	margin = config.margin
	band_width = (config.page_width - 3 * margin) / 2
	first, second = page.bands
	assert first.x == pytest.approx(config.page_width - margin - band_width)
	assert second.x == pytest.approx(margin)
	assert first.y == pytest.approx(margin)
	assert first.height == pytest.approx(config.printable_height)
	by_char = {placement.char: placement for placement in page.placements}
	assert by_char["あ"].x > by_char["う"].x


#============================================
def test_failed_row_leaves_band_empty() -> None:
	config = build_config()
	page = compose.compose_horizontal_page(fake_metrics.BoxMetrics(), ["abc", "", "xyz"], config)
	assert len(page.bands) == 3
	assert "".join(placement.char for placement in page.placements) == "abcxyz"


#============================================
def test_pagination_chunks() -> None:
	text = "ab c\nde　fg\th"
	stripped = "abcdefgh"
	for letters_per_page in (1, 2, 3, 5, 8, 20):
		pages = compose.paginate(text, letters_per_page)
		assert len(pages) == math.ceil(len(stripped) / letters_per_page)
		assert "".join(pages) == stripped
		for page in pages:
			assert len(page) <= letters_per_page


#============================================
def test_pagination_modes() -> None:
	assert compose.paginate("a b\nc", None) == ["a b\nc"]
	assert compose.paginate(" \n ", 4) == []
	with pytest.raises(ValueError):
		compose.paginate("abc", 0)


#============================================
def test_letter_count_document_pages() -> None:
	config = build_config(letters_per_page=2)
	document = compose.build_document("春 夏\n秋冬", config, fake_metrics.FakeFontService(("Mincho",)))
	# Helvetica box metrics have no CJK glyphs
	assert document.missing_script is script.Script.JAPANESE
	config = build_config(font_name="Mincho", letters_per_page=2)
	document = compose.build_document("春 夏\n秋冬", config, fake_metrics.FakeFontService(("Mincho",)))
	assert document.missing_script is None
	assert len(document.pages) == 2
	assert [len(page.bands) for page in document.pages] == [1, 1]


#============================================
def test_script_mismatch_falls_back() -> None:
	config = build_config(font_name="Latin", vertical=True)
	prepared = compose.prepare_text("日本語", config, fake_metrics.FakeFontService())
	assert prepared.missing_script is script.Script.JAPANESE
	assert prepared.text == "   Error:   \nNot Japanese font"
	assert prepared.config.font_name == "Helvetica"
	assert prepared.config.vertical is False
	assert prepared.provider.font_name == "Helvetica"

	korean = compose.prepare_text("한국어", config, fake_metrics.FakeFontService())
	assert korean.text.endswith("Not Korean font")


#============================================
def test_prepare_text_unescapes_and_expands_tabs() -> None:
	config = build_config(font_name="Gothic", vertical=True)
	prepared = compose.prepare_text("縦\\t書き\\n二行", config, fake_metrics.FakeFontService(("Gothic",)))
	assert prepared.missing_script is None
	assert prepared.text == "縦   書き\n二行"
	assert prepared.config.vertical is True
