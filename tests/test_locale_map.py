import pdf_placard.locale_map as locale_map


#============================================
def test_ascii_becomes_fullwidth() -> None:
	service = locale_map.LocaleService()
	assert service.to_fullwidth("ABC123!~") == "ＡＢＣ１２３！～"


#============================================
def test_spaces_are_preserved() -> None:
	service = locale_map.LocaleService()
	assert service.to_fullwidth("A B　C") == "Ａ Ｂ　Ｃ"


#============================================
def test_halfwidth_katakana_folds() -> None:
	service = locale_map.LocaleService()
	assert service.to_fullwidth("ｱｲｳ") == "アイウ"
	# voiced sound mark joins the kana before it
	assert service.to_fullwidth("ｶﾞ") == "ガ"
	assert service.to_fullwidth("ｰ｡") == "ー。"


#============================================
def test_other_text_is_unchanged() -> None:
	service = locale_map.LocaleService()
	assert service.to_fullwidth("漢字かな") == "漢字かな"
	assert service.to_fullwidth("") == ""
