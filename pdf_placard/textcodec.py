"""
UTF-8 character codec, typographic classification and text escaping.
"""

# Standard Library
import enum
import typing

# local repo modules
import pdf_placard.config


TAB_SPACES = pdf_placard.config.TAB_SPACES

ESCAPES = {
	"\t": "t",
	"\n": "n",
	"\r": "r",
	"\f": "f",
	"\\": "\\",
}
UNESCAPES = {value: key for key, value in ESCAPES.items()}

WHITESPACE_CHARS = (" ", "\t", "\r", "\n", "　")


class DecodeError(ValueError):
	"""
	Raised when a byte sequence is not a decodable UTF-8 character.
	"""


class CharCategory(enum.Enum):
	SPACE = "space"
	PAREN_OPEN_CLOSE_1 = "paren_open_close_1"
	PAREN_OPEN_2 = "paren_open_2"
	PAREN_CLOSE_3 = "paren_close_3"
	COMMA_PERIOD = "comma_period"
	HYPHEN_DASH = "hyphen_dash"
	SMALL_KANA = "small_kana"
	OTHER = "other"


SPACE_CHARS = frozenset(" 　")
PAREN_1_CHARS = frozenset("(（[［〔【｛〈《≪｟⁅〖〘«»〙〗⁆｠≫》〉｝】〕］]）)")
PAREN_2_CHARS = frozenset("「『")
PAREN_3_CHARS = frozenset("』」")
COMMA_PERIOD_CHARS = frozenset("、。，．")
HYPHEN_DASH_CHARS = frozenset("-－―ー=＝≡～")
SMALL_KANA_CHARS = frozenset(
	"ぁぃぅぇぉっゃゅょゎゕゖ"
	"ァィゥェォヵㇰヶㇱㇲッㇳㇴㇵㇶㇷㇸㇹㇺャュョㇻㇼㇽㇾㇿヮ"
)

# checked in order, first match wins
CATEGORY_TABLE = (
	(SPACE_CHARS, CharCategory.SPACE),
	(PAREN_1_CHARS, CharCategory.PAREN_OPEN_CLOSE_1),
	(PAREN_2_CHARS, CharCategory.PAREN_OPEN_2),
	(PAREN_3_CHARS, CharCategory.PAREN_CLOSE_3),
	(COMMA_PERIOD_CHARS, CharCategory.COMMA_PERIOD),
	(HYPHEN_DASH_CHARS, CharCategory.HYPHEN_DASH),
	(SMALL_KANA_CHARS, CharCategory.SMALL_KANA),
)


#============================================
def is_lead_byte(value: int) -> bool:
	"""
	Check whether a byte starts a UTF-8 sequence.

	Args:
		value: Byte value.

	Returns:
		True unless the byte is a continuation byte.
	"""
	return (value & 0xC0) != 0x80


#============================================
def sequence_length(lead: int) -> int:
	"""
	Get the UTF-8 sequence length announced by a lead byte.

	Args:
		lead: Lead byte value.

	Returns:
		Sequence length from 1 to 6.
	"""
	if not lead & 0x80:
		return 1
	if (lead & 0xE0) == 0xC0:
		return 2
	if (lead & 0xF0) == 0xE0:
		return 3
	if (lead & 0xF8) == 0xF0:
		return 4
	if (lead & 0xFC) == 0xF8:
		return 5
	if (lead & 0xFE) == 0xFC:
		return 6
	raise DecodeError(f"invalid UTF-8 lead byte 0x{lead:02X}")


#============================================
def decode_lead(data: bytes, offset: int = 0) -> tuple[int, int]:
	"""
	Decode the UTF-8 sequence starting at an offset.

	Five and six byte forms are rejected because they cannot encode
	a valid Unicode code point.

	Args:
		data: UTF-8 bytes.
		offset: Index of the lead byte.

	Returns:
		Tuple of (code point, sequence length).
	"""
	lead = data[offset]
	length = sequence_length(lead)
	if length > 4:
		raise DecodeError(f"{length}-byte UTF-8 form at offset {offset}")
	if offset + length > len(data):
		raise DecodeError(f"truncated UTF-8 sequence at offset {offset}")
	if length == 1:
		return (lead, 1)
	codepoint = lead & (0x7F >> length)
	for index in range(offset + 1, offset + length):
		codepoint = (codepoint << 6) | (data[index] & 0x3F)
	return (codepoint, length)


#============================================
def to_bytes(text: str | bytes) -> bytes:
	if isinstance(text, bytes):
		return text
	# undecodable argv bytes arrive as lone surrogates, give them back as bytes
	return text.encode("utf-8", errors="surrogateescape")


#============================================
def iter_codepoints(text: str | bytes) -> typing.Iterator[int]:
	"""
	Iterate over decoded code points.

	Args:
		text: Text or UTF-8 bytes.

	Yields:
		Code points in order. Raises DecodeError on malformed input.
	"""
	data = to_bytes(text)
	offset = 0
	while offset < len(data):
		codepoint, length = decode_lead(data, offset)
		yield codepoint
		offset += length


#============================================
def split_characters(text: str | bytes) -> list[str]:
	"""
	Split text into single-glyph characters.

	A new character starts at every UTF-8 lead byte and trailing bytes
	accumulate onto the current one, so combining marks and emoji
	sequences are not clustered. Scanning stops at the first group
	that does not decode.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		List of one-code-point strings.
	"""
	data = to_bytes(text)
	groups: list[bytes] = []
	current = bytearray()
	for value in data:
		if is_lead_byte(value) and current:
			groups.append(bytes(current))
			current.clear()
		current.append(value)
	if current:
		groups.append(bytes(current))

	chars: list[str] = []
	for group in groups:
		try:
			chars.append(group.decode("utf-8"))
		except UnicodeDecodeError:
			break
	return chars


#============================================
def classify(codepoint: int) -> CharCategory:
	"""
	Classify a code point into a typographic category.

	Args:
		codepoint: Unicode code point.

	Returns:
		CharCategory, OTHER when no set matches.
	"""
	char = chr(codepoint)
	for members, category in CATEGORY_TABLE:
		if char in members:
			return category
	return CharCategory.OTHER


#============================================
def classify_char(char: str) -> CharCategory:
	"""
	Classify a one-code-point character.

	Args:
		char: Character string.

	Returns:
		CharCategory.
	"""
	if len(char) != 1:
		return CharCategory.OTHER
	return classify(ord(char))


#============================================
def escape(text: str) -> str:
	"""
	Escape control characters and backslashes.

	Args:
		text: Raw text.

	Returns:
		Escaped text.
	"""
	parts: list[str] = []
	for char in text:
		if char in ESCAPES:
			parts.append("\\" + ESCAPES[char])
		else:
			parts.append(char)
	return "".join(parts)


#============================================
def unescape(text: str) -> str:
	"""
	Convert the two-character escapes back into control characters.

	Unknown escapes keep the escaped character and drop the backslash;
	a trailing lone backslash is kept.

	Args:
		text: Escaped text.

	Returns:
		Unescaped text.
	"""
	parts: list[str] = []
	escaping = False
	for index, char in enumerate(text):
		if escaping:
			parts.append(UNESCAPES.get(char, char))
			escaping = False
		elif char == "\\":
			if index + 1 == len(text):
				parts.append(char)
				break
			escaping = True
		else:
			parts.append(char)
	return "".join(parts)


#============================================
def expand_tabs(text: str) -> str:
	return text.replace("\t", " " * TAB_SPACES)


#============================================
def split_rows(text: str) -> list[str]:
	"""
	Split text into rows on CRLF, CR or LF.

	Args:
		text: Input text.

	Returns:
		List of rows; empty rows are kept.
	"""
	normalized = text.replace("\r\n", "\n").replace("\r", "\n")
	return normalized.split("\n")


#============================================
def strip_whitespace(text: str) -> str:
	"""
	Remove spaces, tabs, line breaks and ideographic spaces.

	Args:
		text: Input text.

	Returns:
		Text without whitespace.
	"""
	for char in WHITESPACE_CHARS:
		text = text.replace(char, "")
	return text
