"""
Glyph and font metrics for the fit solver and layout engines.
"""

# Standard Library
import abc
import dataclasses
import glob
import os
import pathlib

# PIP3 modules
import fontTools.pens.boundsPen
import fontTools.ttLib
import reportlab.pdfbase.cidfonts
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import reportlab.rl_config

# local repo modules
import pdf_placard.config
import pdf_placard.script
import pdf_placard.textcodec


Script = pdf_placard.script.Script

PROBE_FONT_SIZE = pdf_placard.config.PROBE_FONT_SIZE
PROBE_MIN_EXTENT = pdf_placard.config.PROBE_MIN_EXTENT
FIXED_PITCH_TOLERANCE = pdf_placard.config.FIXED_PITCH_TOLERANCE

SCRIPT_PROBES = {
	Script.JAPANESE: "あ",
	Script.CHINESE: "沉",
	Script.KOREAN: "작",
}
FIXED_PITCH_PROBES = {
	Script.JAPANESE: "目目",
	Script.CHINESE: "沉沉",
	Script.KOREAN: "작작",
}

CID_FONT_LANGUAGES = {
	name: language
	for name, (language, _encoding) in reportlab.pdfbase.cidfonts.defaultUnicodeEncodings.items()
}
CID_LANGUAGE_SCRIPTS = {
	"jpn": Script.JAPANESE,
	"chs": Script.CHINESE,
	"cht": Script.CHINESE,
	"kor": Script.KOREAN,
}
# CJK punctuation and fullwidth forms exist in every CJK character collection
SHARED_CJK_RANGES = (
	(0x3000, 0x303F),
	(0xFF00, 0xFFEF),
)
TRUETYPE_SUFFIXES = (".ttf", ".ttc")


class FontError(ValueError):
	"""
	Raised when a font cannot be found or loaded.
	"""


@dataclasses.dataclass(frozen=True)
class GlyphMetrics:
	width: float
	height: float
	x_bearing: float
	y_bearing: float
	x_advance: float


@dataclasses.dataclass(frozen=True)
class FontMetrics:
	ascent: float
	line_height: float


EMPTY_GLYPH = GlyphMetrics(width=0.0, height=0.0, x_bearing=0.0, y_bearing=0.0, x_advance=0.0)


class TextMetricsProvider(abc.ABC):
	"""
	Measures single characters of one font at any size.

	Extents follow a y-down convention: y_bearing is the offset from
	the baseline to the top of the ink box and is negative for glyphs
	above the baseline. Each character is measured on its own, with no
	kerning or shaping across characters.
	"""

	font_name: str

	@abc.abstractmethod
	def measure_char(self, size: float, char: str) -> GlyphMetrics:
		"""
		Measure one character.

		Args:
			size: Font size in points.
			char: One-code-point string.

		Returns:
			GlyphMetrics, all zero when the font has no glyph for it.
		"""

	@abc.abstractmethod
	def measure_font(self, size: float) -> FontMetrics:
		"""
		Measure the font's vertical metrics.

		Args:
			size: Font size in points.

		Returns:
			FontMetrics.
		"""

	def register(self) -> str:
		"""
		Make the font available to the PDF canvas.

		Returns:
			Font name to pass to the canvas.
		"""
		return self.font_name

	def text_advance(self, size: float, text: str) -> float:
		total = 0.0
		for char in pdf_placard.textcodec.split_characters(text):
			total += self.measure_char(size, char).x_advance
		return total

	def supports_script(self, script: Script) -> bool:
		"""
		Probe whether the font has glyphs for a script.

		Args:
			script: Script to probe.

		Returns:
			True when the representative glyph has visible extents.
		"""
		glyph = self.measure_char(PROBE_FONT_SIZE, SCRIPT_PROBES[script])
		return glyph.width >= PROBE_MIN_EXTENT and glyph.height >= PROBE_MIN_EXTENT

	def supports_any_cjk(self) -> bool:
		return any(self.supports_script(script) for script in Script)


class BuiltinFontMetrics(TextMetricsProvider):
	"""
	Metrics for reportlab's standard Type 1 fonts and CJK CID fonts.

	These fonts ship without glyph outlines, so the ink box of a
	character is its em box: the advance by the ascent-to-descent span.
	"""

	def __init__(self, font_name: str) -> None:
		self.font_name = font_name
		self.language: str | None = None
		if font_name in CID_FONT_LANGUAGES:
			font = reportlab.pdfbase.cidfonts.UnicodeCIDFont(font_name)
			reportlab.pdfbase.pdfmetrics.registerFont(font)
			self.language = font.language
		elif font_name not in reportlab.pdfbase.pdfmetrics.standardFonts:
			raise FontError(f"not a built-in font: {font_name}")

	def covers(self, char: str) -> bool:
		"""
		Check whether the font can show a character.

		Args:
			char: One-code-point string.

		Returns:
			True when the character is in the font's repertoire.
		"""
		if len(char) != 1:
			return False
		if self.language is None:
			try:
				char.encode("cp1252")
			except UnicodeEncodeError:
				return False
			return True
		codepoint = ord(char)
		if codepoint < 0x100:
			return True
		if pdf_placard.script.in_ranges(codepoint, SHARED_CJK_RANGES):
			return True
		script = CID_LANGUAGE_SCRIPTS[self.language]
		if script is Script.JAPANESE:
			return bool(pdf_placard.script.detect_japanese(char))
		if script is Script.CHINESE:
			return pdf_placard.script.detect_chinese(char)
		return bool(pdf_placard.script.detect_korean(char))

	def measure_char(self, size: float, char: str) -> GlyphMetrics:
		if not self.covers(char):
			return EMPTY_GLYPH
		advance = reportlab.pdfbase.pdfmetrics.stringWidth(char, self.font_name, size)
		if char.isspace():
			return GlyphMetrics(width=0.0, height=0.0, x_bearing=0.0, y_bearing=0.0, x_advance=advance)
		ascent, descent = reportlab.pdfbase.pdfmetrics.getAscentDescent(self.font_name, size)
		return GlyphMetrics(
			width=advance,
			height=ascent - descent,
			x_bearing=0.0,
			y_bearing=-ascent,
			x_advance=advance,
		)

	def measure_font(self, size: float) -> FontMetrics:
		ascent, descent = reportlab.pdfbase.pdfmetrics.getAscentDescent(self.font_name, size)
		return FontMetrics(ascent=ascent, line_height=ascent - descent)


class TrueTypeFontMetrics(TextMetricsProvider):
	"""
	Metrics for a TrueType font file, read with fontTools.

	Ink bounds come from the glyph outlines in font units and are
	scaled linearly with the size.
	"""

	def __init__(self, path: str) -> None:
		self.path = path
		self.font_name = pathlib.Path(path).stem
		try:
			self.font = fontTools.ttLib.TTFont(path, fontNumber=0, lazy=True)
			self.cmap = self.font.getBestCmap() or {}
			self.glyph_set = self.font.getGlyphSet()
			self.units_per_em = float(self.font["head"].unitsPerEm)
			hhea = self.font["hhea"]
			self.unit_ascent = float(hhea.ascent)
			self.unit_descent = float(hhea.descent)
		except (fontTools.ttLib.TTLibError, KeyError, OSError) as error:
			raise FontError(f"cannot read font file {path}: {error}") from error
		self.bounds_cache: dict[str, tuple[float, float, float, float, float] | None] = {}
		self.registered = False

	def register(self) -> str:
		if not self.registered:
			try:
				font = reportlab.pdfbase.ttfonts.TTFont(self.font_name, self.path)
			except reportlab.pdfbase.ttfonts.TTFError as error:
				raise FontError(f"reportlab cannot embed {self.path}: {error}") from error
			reportlab.pdfbase.pdfmetrics.registerFont(font)
			self.registered = True
		return self.font_name

	def unit_bounds(self, char: str) -> tuple[float, float, float, float, float] | None:
		"""
		Get the advance and ink bounds of a character in font units.

		Args:
			char: One-code-point string.

		Returns:
			Tuple of (advance, x_min, y_min, x_max, y_max) or None when
			the character is not mapped.
		"""
		if char in self.bounds_cache:
			return self.bounds_cache[char]
		result = None
		glyph_name = self.cmap.get(ord(char)) if len(char) == 1 else None
		if glyph_name is not None:
			advance = float(self.font["hmtx"][glyph_name][0])
			pen = fontTools.pens.boundsPen.BoundsPen(self.glyph_set)
			self.glyph_set[glyph_name].draw(pen)
			if pen.bounds is None:
				result = (advance, 0.0, 0.0, 0.0, 0.0)
			else:
				x_min, y_min, x_max, y_max = pen.bounds
				result = (advance, float(x_min), float(y_min), float(x_max), float(y_max))
		self.bounds_cache[char] = result
		return result

	def measure_char(self, size: float, char: str) -> GlyphMetrics:
		bounds = self.unit_bounds(char)
		if bounds is None:
			return EMPTY_GLYPH
		advance, x_min, y_min, x_max, y_max = bounds
		scale = size / self.units_per_em
		return GlyphMetrics(
			width=(x_max - x_min) * scale,
			height=(y_max - y_min) * scale,
			x_bearing=x_min * scale,
			y_bearing=-y_max * scale,
			x_advance=advance * scale,
		)

	def measure_font(self, size: float) -> FontMetrics:
		scale = size / self.units_per_em
		ascent = self.unit_ascent * scale
		return FontMetrics(ascent=ascent, line_height=ascent - self.unit_descent * scale)


#============================================
def locate_font_file(font_name: str) -> str:
	"""
	Find a TrueType file by path or on reportlab's font search path.

	Args:
		font_name: File path, file name, or file name without suffix.

	Returns:
		Path of the font file.
	"""
	candidates = [font_name]
	if not font_name.lower().endswith(TRUETYPE_SUFFIXES):
		candidates.extend(font_name + suffix for suffix in TRUETYPE_SUFFIXES)
	for candidate in candidates:
		try:
			path, handle = reportlab.pdfbase.ttfonts.TTFOpenFile(candidate)
		except reportlab.pdfbase.ttfonts.TTFError:
			continue
		handle.close()
		return path
	raise FontError(f"font not found: {font_name}")


#============================================
def font_search_dirs() -> list[str]:
	"""
	List the directories on reportlab's TrueType search path.

	Returns:
		Existing directories, in search order.
	"""
	dirs: list[str] = []
	for entry in reportlab.rl_config.TTFSearchPath:
		directory = os.path.expanduser(entry)
		if os.path.isdir(directory) and directory not in dirs:
			dirs.append(directory)
	return dirs


class FontService:
	"""
	Resolves font names into metrics providers.
	"""

	def __init__(self) -> None:
		self.providers: dict[str, TextMetricsProvider] = {}

	def resolve(self, font_name: str) -> TextMetricsProvider:
		"""
		Get the metrics provider for a font name.

		Args:
			font_name: Built-in font name or TrueType file name or path.

		Returns:
			TextMetricsProvider.
		"""
		if font_name in self.providers:
			return self.providers[font_name]
		if font_name in CID_FONT_LANGUAGES or font_name in reportlab.pdfbase.pdfmetrics.standardFonts:
			provider: TextMetricsProvider = BuiltinFontMetrics(font_name)
		else:
			provider = TrueTypeFontMetrics(locate_font_file(font_name))
		self.providers[font_name] = provider
		return provider

	def list_fonts(self) -> list[str]:
		"""
		List the font names that resolve() accepts without a path.

		Returns:
			Sorted font names.
		"""
		names = set(reportlab.pdfbase.pdfmetrics.standardFonts)
		names.update(CID_FONT_LANGUAGES)
		for directory in font_search_dirs():
			for suffix in TRUETYPE_SUFFIXES:
				for path in glob.glob(os.path.join(directory, "**", "*" + suffix), recursive=True):
					names.add(os.path.basename(path))
		return sorted(names)


#============================================
def is_fixed_pitch(provider: TextMetricsProvider) -> bool:
	"""
	Check whether a font is fixed pitch.

	Compares the advance of "wwww" with a narrow Latin run, or with a
	pair of ideographs or syllables when the font supports a CJK script.

	Args:
		provider: Metrics provider of the font.

	Returns:
		True when both runs are nearly equally wide.
	"""
	wide = provider.text_advance(PROBE_FONT_SIZE, "wwww")
	narrow_text = "iiii"
	for script in Script:
		if provider.supports_script(script):
			narrow_text = FIXED_PITCH_PROBES[script]
			break
	narrow = provider.text_advance(PROBE_FONT_SIZE, narrow_text)
	return abs(wide - narrow) < FIXED_PITCH_TOLERANCE
