"""
Named paper sizes and page size parsing.
"""

# Standard Library
import math
import re


# name -> (width, height) in millimetres
PAGE_SIZES_MM = {
	"A0": (1189.0, 841.0),
	"A1": (841.0, 594.0),
	"A2": (594.0, 420.0),
	"A3": (420.0, 297.0),
	"A4": (297.0, 210.0),
	"A5": (210.0, 148.0),
	"A6": (148.0, 105.0),
	"A7": (105.0, 74.0),
	"A8": (74.0, 52.0),
	"A9": (52.0, 37.0),
	"A10": (37.0, 26.0),
	"B0": (1456.0, 1030.0),
	"B1": (1030.0, 728.0),
	"B2": (728.0, 515.0),
	"B3": (515.0, 364.0),
	"B4": (364.0, 257.0),
	"B5": (257.0, 182.0),
	"B6": (182.0, 128.0),
	"B7": (128.0, 91.0),
	"B8": (91.0, 64.0),
	"B9": (64.0, 45.0),
	"B10": (45.0, 32.0),
	"Letter": (279.0, 216.0),
	"Legal": (356.0, 216.0),
	"Tabloid": (432.0, 279.0),
	"Ledger": (279.0, 432.0),
	"Junior Legal": (127.0, 203.0),
	"Half Letter": (140.0, 216.0),
	"Government Letter": (203.0, 267.0),
	"Government Legal": (216.0, 330.0),
	"ANSI A": (216.0, 279.0),
	"ANSI B": (279.0, 432.0),
	"ANSI C": (432.0, 559.0),
	"ANSI D": (559.0, 864.0),
	"ANSI E": (864.0, 1118.0),
	"Arch A": (229.0, 305.0),
	"Arch B": (305.0, 457.0),
	"Arch C": (457.0, 610.0),
	"Arch D": (610.0, 914.0),
	"Arch E": (914.0, 1219.0),
	"Arch E1": (762.0, 1067.0),
	"Arch E2": (660.0, 965.0),
	"Arch E3": (686.0, 991.0),
}

ORIENTATIONS = ("portrait", "landscape")

SIZE_LITERAL_RE = re.compile(r"^\s*([0-9.eE+-]+)\s*[xX]\s*([0-9.eE+-]+)\s*$")


#============================================
def parse_page_size(value: str) -> tuple[float, float]:
	"""
	Parse a page size name or a WIDTHxHEIGHT literal.

	Names match case-insensitively. Literal values are millimetres and
	must be positive finite numbers.

	Args:
		value: Page size like "A4", "ansi c" or "100x200".

	Returns:
		Tuple of (width, height) in millimetres.
	"""
	wanted = value.strip().casefold()
	for name, size in PAGE_SIZES_MM.items():
		if name.casefold() == wanted:
			return size
	match = SIZE_LITERAL_RE.match(value)
	if match is None:
		raise ValueError(f"unknown page size {value!r}")
	try:
		width = float(match.group(1))
		height = float(match.group(2))
	except ValueError as error:
		raise ValueError(f"invalid page size {value!r}") from error
	for number in (width, height):
		if not math.isfinite(number) or number <= 0.0:
			raise ValueError(f"invalid page size {value!r}")
	return (width, height)


#============================================
def orient_page(width: float, height: float, orientation: str) -> tuple[float, float]:
	"""
	Swap width and height to match an orientation.

	Args:
		width: Page width.
		height: Page height.
		orientation: "portrait" or "landscape".

	Returns:
		Tuple of (width, height).
	"""
	normalized = orientation.strip().lower()
	if normalized == "portrait":
		if width > height:
			return (height, width)
		return (width, height)
	if normalized == "landscape":
		if width < height:
			return (height, width)
		return (width, height)
	raise ValueError(f"unknown orientation {orientation!r}")


#============================================
def list_page_sizes() -> list[str]:
	return list(PAGE_SIZES_MM)
