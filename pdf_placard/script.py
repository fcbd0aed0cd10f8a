"""
Japanese, Chinese and Korean script detection.
"""

# Standard Library
import enum

# local repo modules
import pdf_placard.textcodec


DecodeError = pdf_placard.textcodec.DecodeError


class ScriptTier(enum.IntEnum):
	NONE = 0
	WEAK = 1
	STRONG = 2


class Script(enum.Enum):
	JAPANESE = "japanese"
	CHINESE = "chinese"
	KOREAN = "korean"


JAPANESE_STRONG_RANGES = (
	(0x3040, 0x309F),  # Hiragana
	(0x30A0, 0x30FF),  # Katakana
	(0x31F0, 0x31FF),  # Katakana Phonetic Extensions
)
JAPANESE_WEAK_RANGES = (
	(0xFF01, 0xFF9D),  # Halfwidth and Fullwidth Forms
	(0x3400, 0x4DB5),  # Kanji
	(0x4E00, 0x9FCB),
	(0xF900, 0xFA6A),
	(0x3000, 0x303F),  # CJK Symbols and Punctuation
)

CHINESE_RANGES = (
	(0x4E00, 0x9FFF),  # CJK Unified Ideographs
	(0xF900, 0xFAFF),  # CJK Compatibility Ideographs
	(0x2F00, 0x2FDF),  # Kangxi Radicals
	(0x2E80, 0x2EFF),  # CJK Radicals Supplement
	(0x3400, 0x4DBF),  # Extension A
	(0x20000, 0x2A6DF),  # Extension B
	(0x2A700, 0x2B73F),  # Extension C
	(0x2B740, 0x2B81F),  # Extension D
	(0x2B820, 0x2CEAF),  # Extension E
	(0x2CEB0, 0x2EBEF),  # Extension F
	(0x30000, 0x3134F),  # Extension G
	(0x31350, 0x323AF),  # Extension H
	(0x3000, 0x303F),  # CJK Symbols and Punctuation
	(0x2F800, 0x2FA1F),  # Compatibility Ideographs Supplement
)

KOREAN_STRONG_RANGES = (
	(0xAC00, 0xD7AF),  # Hangul Syllables
	(0x1100, 0x11FF),  # Hangul Jamo
	(0x3130, 0x318F),  # Hangul Compatibility Jamo
	(0xA960, 0xA97F),  # Hangul Jamo Extended-A
	(0xD7B0, 0xD7FF),  # Hangul Jamo Extended-B
	(0xFFA0, 0xFFDF),  # Halfwidth Hangul
)
KOREAN_WEAK_RANGES = (
	(0x4E00, 0x9FFF),
	(0xF900, 0xFAFF),
	(0x2F00, 0x2FDF),
	(0x2E80, 0x2EFF),
	(0x3000, 0x303F),
)


#============================================
def in_ranges(codepoint: int, ranges: tuple[tuple[int, int], ...]) -> bool:
	for low, high in ranges:
		if low <= codepoint <= high:
			return True
	return False


#============================================
def score_tiered(
	text: str | bytes,
	strong_ranges: tuple[tuple[int, int], ...],
	weak_ranges: tuple[tuple[int, int], ...],
) -> ScriptTier:
	"""
	Score text against strong and weak code point ranges.

	The tier is the maximum seen and never goes down. Malformed
	input scores NONE as a whole.

	Args:
		text: Text or UTF-8 bytes.
		strong_ranges: Ranges of unambiguous native-script glyphs.
		weak_ranges: Ranges shared with other CJK languages.

	Returns:
		ScriptTier.
	"""
	tier = ScriptTier.NONE
	try:
		for codepoint in pdf_placard.textcodec.iter_codepoints(text):
			if in_ranges(codepoint, strong_ranges):
				tier = ScriptTier.STRONG
			elif tier < ScriptTier.WEAK and in_ranges(codepoint, weak_ranges):
				tier = ScriptTier.WEAK
	except DecodeError:
		return ScriptTier.NONE
	return tier


#============================================
def detect_japanese(text: str | bytes) -> ScriptTier:
	"""
	Detect Japanese text.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		STRONG for kana, WEAK for kanji, fullwidth forms or CJK
		punctuation, NONE otherwise.
	"""
	return score_tiered(text, JAPANESE_STRONG_RANGES, JAPANESE_WEAK_RANGES)


#============================================
def detect_chinese(text: str | bytes) -> bool:
	"""
	Detect Chinese text.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		True on the first CJK ideograph, radical or punctuation code point.
	"""
	try:
		for codepoint in pdf_placard.textcodec.iter_codepoints(text):
			if in_ranges(codepoint, CHINESE_RANGES):
				return True
	except DecodeError:
		return False
	return False


#============================================
def detect_korean(text: str | bytes) -> ScriptTier:
	"""
	Detect Korean text.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		STRONG for hangul, WEAK for CJK ideographs or punctuation,
		NONE otherwise.
	"""
	return score_tiered(text, KOREAN_STRONG_RANGES, KOREAN_WEAK_RANGES)


#============================================
def detect_script(text: str | bytes) -> Script | None:
	"""
	Pick the script to check the display font against.

	Japanese wins over Chinese, Chinese over Korean, matching the
	order the font check is done in.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		Script or None for plain text.
	"""
	if detect_japanese(text):
		return Script.JAPANESE
	if detect_chinese(text):
		return Script.CHINESE
	if detect_korean(text):
		return Script.KOREAN
	return None
