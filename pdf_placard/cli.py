"""
CLI entry points for placard PDF generation.
"""

# Standard Library
import argparse
import math
import pathlib

# local repo modules
import pdf_placard.compose
import pdf_placard.config
import pdf_placard.metrics
import pdf_placard.page_size
import pdf_placard.render


PlacardConfig = pdf_placard.config.PlacardConfig

VERSION = pdf_placard.config.VERSION
DEFAULT_TEXT = pdf_placard.config.DEFAULT_TEXT
DEFAULT_OUTPUT = pdf_placard.config.DEFAULT_OUTPUT
DEFAULT_PAGE_SIZE = pdf_placard.config.DEFAULT_PAGE_SIZE
DEFAULT_ORIENTATION = pdf_placard.config.DEFAULT_ORIENTATION
DEFAULT_MARGIN_MM = pdf_placard.config.DEFAULT_MARGIN_MM
DEFAULT_THRESHOLD = pdf_placard.config.DEFAULT_THRESHOLD
DEFAULT_LETTERS_PER_PAGE = pdf_placard.config.DEFAULT_LETTERS_PER_PAGE
DEFAULT_Y_ADJUST_MM = pdf_placard.config.DEFAULT_Y_ADJUST_MM


#============================================
def parse_page_size_arg(value: str) -> tuple[float, float]:
	try:
		return pdf_placard.page_size.parse_page_size(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(str(error)) from error


#============================================
def parse_color_arg(value: str) -> int:
	try:
		return pdf_placard.config.parse_color(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(str(error)) from error


#============================================
def parse_float_arg(value: str) -> float:
	"""
	Parse a finite float.

	Args:
		value: Argument text.

	Returns:
		Float value.
	"""
	try:
		number = float(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(f"invalid number {value!r}") from error
	if not math.isfinite(number):
		raise argparse.ArgumentTypeError(f"number must be finite: {value!r}")
	return number


#============================================
def parse_margin_arg(value: str) -> float:
	margin = parse_float_arg(value)
	if margin <= 0.0:
		raise argparse.ArgumentTypeError(f"margin must be positive: {value!r}")
	return margin


#============================================
def parse_threshold_arg(value: str) -> float:
	threshold = parse_float_arg(value)
	if threshold < 1.0:
		raise argparse.ArgumentTypeError(f"threshold must be at least 1: {value!r}")
	return threshold


#============================================
def parse_letters_per_page_arg(value: str) -> int:
	"""
	Parse a letters-per-page count, -1 meaning no limit.

	Args:
		value: Argument text.

	Returns:
		Count value.
	"""
	try:
		count = int(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(f"invalid count {value!r}") from error
	if count == 0 or count < -1:
		raise argparse.ArgumentTypeError(f"letters per page must be positive or -1: {value!r}")
	return count


#============================================
def build_parser() -> argparse.ArgumentParser:
	"""
	Build the command line parser.

	Returns:
		ArgumentParser.
	"""
	parser = argparse.ArgumentParser(
		prog="pdfplaca",
		description="Render text as a large placard filling a PDF page.",
	)
	parser.add_argument("--version", action="version", version=f"pdfplaca by katahiromz Version {VERSION}")

	text_group = parser.add_argument_group("Text")
	text_group.add_argument("--text", dest="text", default=DEFAULT_TEXT, help="Text to print, backslash escapes allowed.")
	text_group.add_argument(
		"--font",
		dest="font_name",
		default=pdf_placard.config.default_font_name(),
		help="Built-in font name or TrueType file.",
	)
	text_group.add_argument("--vertical", dest="vertical", action="store_true", help="Use vertical writing.")
	text_group.add_argument(
		"--threshold",
		dest="threshold",
		type=parse_threshold_arg,
		default=DEFAULT_THRESHOLD,
		help="Aspect ratio threshold, 1 disables stretching.",
	)
	text_group.add_argument(
		"--letters-per-page",
		dest="letters_per_page",
		type=parse_letters_per_page_arg,
		default=DEFAULT_LETTERS_PER_PAGE,
		help="Letters per page, -1 for no limit.",
	)
	text_group.add_argument(
		"--y-adjust",
		dest="y_adjust",
		type=parse_float_arg,
		default=DEFAULT_Y_ADJUST_MM,
		help="Y adjustment in mm, positive moves text up.",
	)

	page_group = parser.add_argument_group("Page")
	page_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT, help="Output PDF path.")
	page_group.add_argument(
		"--page-size",
		dest="page_size",
		type=parse_page_size_arg,
		default=pdf_placard.page_size.parse_page_size(DEFAULT_PAGE_SIZE),
		help="Page size name or WIDTHxHEIGHT in mm, names: "
		+ ", ".join(pdf_placard.page_size.list_page_sizes()),
	)
	page_group.add_argument(
		"--landscape",
		dest="orientation",
		action="store_const",
		const="landscape",
		help="Use landscape orientation.",
	)
	page_group.add_argument(
		"--portrait",
		dest="orientation",
		action="store_const",
		const="portrait",
		help="Use portrait orientation.",
	)
	page_group.add_argument(
		"--margin",
		dest="margin",
		type=parse_margin_arg,
		default=DEFAULT_MARGIN_MM,
		help="Page margin in mm.",
	)
	page_group.add_argument("--text-color", dest="text_color", type=parse_color_arg, help="Text color, #RRGGBB or a name.")
	page_group.add_argument("--back-color", dest="back_color", type=parse_color_arg, help="Background color, #RRGGBB or a name.")

	info_group = parser.add_argument_group("Info")
	info_group.add_argument("--font-list", dest="font_list", action="store_true", help="List available fonts and exit.")

	parser.set_defaults(
		orientation=DEFAULT_ORIENTATION,
		text_color=pdf_placard.config.DEFAULT_TEXT_COLOR,
		back_color=pdf_placard.config.DEFAULT_BACK_COLOR,
		vertical=False,
		font_list=False,
	)
	return parser


#============================================
def build_config(args: argparse.Namespace) -> PlacardConfig:
	"""
	Build placard config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		PlacardConfig.
	"""
	width_mm, height_mm = args.page_size
	page_width, page_height = pdf_placard.page_size.orient_page(
		pdf_placard.config.points_from_mm(width_mm),
		pdf_placard.config.points_from_mm(height_mm),
		args.orientation,
	)
	letters_per_page = args.letters_per_page
	if letters_per_page == -1:
		letters_per_page = None
	config = PlacardConfig(
		font_name=args.font_name,
		page_width=page_width,
		page_height=page_height,
		margin=pdf_placard.config.points_from_mm(args.margin),
		text_color=args.text_color,
		back_color=args.back_color,
		threshold=args.threshold,
		# page y grows downward, the option grows upward
		y_adjust=-pdf_placard.config.points_from_mm(args.y_adjust),
		vertical=args.vertical,
		letters_per_page=letters_per_page,
	)
	return config


#============================================
def print_font_list(font_service: pdf_placard.metrics.FontService) -> None:
	for name in font_service.list_fonts():
		print(name)


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Lay out the placard and write the PDF.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Number of pages written.
	"""
	config = build_config(args)
	print(f"page_width: {config.page_width:f} pt, page_height: {config.page_height:f} pt")

	font_service = pdf_placard.metrics.FontService()
	document = pdf_placard.compose.build_document(args.text, config, font_service)
	if document.missing_script is not None:
		script_name = document.missing_script.name.capitalize()
		print(f"Font {config.font_name} has no {script_name} glyphs, using {document.config.font_name}")

	if pdf_placard.metrics.is_fixed_pitch(document.provider):
		print("fixed-pitch font")
	else:
		print("proportional font")
	for index in range(len(document.pages)):
		print(f"Page {index + 1}")

	output_path = pathlib.Path(args.output_path)
	pages = pdf_placard.render.render_document(document, output_path)
	print(f"Pages written: {pages}")
	print(f"Output PDF: {output_path}")
	return pages


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	parser = build_parser()
	args = parser.parse_args(argv)
	if args.font_list:
		print_font_list(pdf_placard.metrics.FontService())
		return
	try:
		run_pipeline(args)
	except pdf_placard.metrics.FontError as error:
		parser.error(str(error))
