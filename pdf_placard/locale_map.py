"""
Halfwidth to fullwidth mapping for vertical CJK columns.
"""

# Standard Library
import unicodedata


PRESERVED_CHARS = frozenset(" 　")
ASCII_FIRST = 0x21
ASCII_LAST = 0x7E
FULLWIDTH_OFFSET = 0xFEE0
HALFWIDTH_FIRST = 0xFF61
HALFWIDTH_LAST = 0xFFDC


class LocaleService:
	"""
	Maps halfwidth forms to fullwidth forms.

	Printable ASCII moves into the Fullwidth Forms block; halfwidth
	katakana, punctuation and hangul are folded with NFKC, which also
	joins a halfwidth voiced sound mark onto its kana. Half and full
	width spaces are kept as they are.
	"""

	def to_fullwidth(self, text: str) -> str:
		"""
		Convert halfwidth characters to fullwidth.

		Args:
			text: Input text.

		Returns:
			Mapped text.
		"""
		parts: list[str] = []
		halfwidth_run: list[str] = []
		for char in text:
			codepoint = ord(char)
			if HALFWIDTH_FIRST <= codepoint <= HALFWIDTH_LAST:
				halfwidth_run.append(char)
				continue
			if halfwidth_run:
				parts.append(unicodedata.normalize("NFKC", "".join(halfwidth_run)))
				halfwidth_run = []
			if char in PRESERVED_CHARS:
				parts.append(char)
			elif ASCII_FIRST <= codepoint <= ASCII_LAST:
				parts.append(chr(codepoint + FULLWIDTH_OFFSET))
			else:
				parts.append(char)
		if halfwidth_run:
			parts.append(unicodedata.normalize("NFKC", "".join(halfwidth_run)))
		return "".join(parts)
