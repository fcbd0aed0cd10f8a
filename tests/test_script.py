import pdf_placard.script as script


ScriptTier = script.ScriptTier
Script = script.Script


#============================================
def test_detect_japanese_tiers() -> None:
	for text in ("あ", "ア", "ｱ", "漢字", "ＡＢＣ"):
		assert script.detect_japanese(text) is not ScriptTier.NONE, text
	assert script.detect_japanese("あ") is ScriptTier.STRONG
	assert script.detect_japanese("漢字") is ScriptTier.WEAK
	assert script.detect_japanese("ABCabc123") is ScriptTier.NONE
	assert script.detect_japanese("") is ScriptTier.NONE


#============================================
def test_detect_japanese_keeps_highest_tier() -> None:
	assert script.detect_japanese("漢字かな漢字") is ScriptTier.STRONG


#============================================
def test_detect_chinese() -> None:
	assert script.detect_chinese("沉默")
	assert script.detect_chinese("abc漢")
	assert not script.detect_chinese("abc")
	assert not script.detect_chinese("")


#============================================
def test_detect_korean_tiers() -> None:
	assert script.detect_korean("한국어") is ScriptTier.STRONG
	assert script.detect_korean("漢") is ScriptTier.WEAK
	assert script.detect_korean("hello") is ScriptTier.NONE


#============================================
def test_malformed_input_reports_no_script() -> None:
	data = "あ".encode("utf-8") + b"\xf8\x88\x80\x80\x80"
	assert script.detect_japanese(data) is ScriptTier.NONE
	assert not script.detect_chinese(b"\xfc\x84\x80\x80\x80\x80")
	assert script.detect_korean(b"\xff") is ScriptTier.NONE


#============================================
def test_surrogate_escaped_text_reports_no_script() -> None:
	assert script.detect_japanese("abc\udcff") is ScriptTier.NONE
	assert script.detect_japanese("あ\udcff") is ScriptTier.NONE
	assert not script.detect_chinese("abc\udcff")
	assert script.detect_korean("한\udcff") is ScriptTier.NONE
	assert script.detect_script("abc\udcff") is None


#============================================
def test_detect_script_order() -> None:
	assert script.detect_script("漢字") is Script.JAPANESE
	assert script.detect_script("한국어") is Script.KOREAN
	assert script.detect_script("This is a test.") is None
