"""
PDF output on a reportlab canvas.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import pdf_placard.compose
import pdf_placard.config
import pdf_placard.layout


GlyphPlacement = pdf_placard.layout.GlyphPlacement
PageLayout = pdf_placard.compose.PageLayout
PlacardDocument = pdf_placard.compose.PlacardDocument


class PdfRenderer:
	"""
	Writes pages to a PDF file.

	Callers work in a top-left, y-down page space; the renderer flips it
	onto reportlab's bottom-left, y-up space.
	"""

	def __init__(self, output_path: pathlib.Path | str) -> None:
		self.output_path = pathlib.Path(output_path)
		self.pdf = reportlab.pdfgen.canvas.Canvas(str(self.output_path))
		self.page_height = 0.0
		self.page_count = 0

	def begin_page(self, width: float, height: float) -> None:
		self.pdf.setPageSize((width, height))
		self.page_height = height

	def fill_rect(self, x: float, y: float, width: float, height: float, color: int) -> None:
		"""
		Fill a rectangle given by its top-left corner.

		Args:
			x: Left edge.
			y: Top edge.
			width: Rectangle width.
			height: Rectangle height.
			color: Packed 0xRRGGBB fill color.
		"""
		red, green, blue = pdf_placard.config.split_rgb(color)
		self.pdf.setFillColorRGB(red, green, blue)
		self.pdf.rect(x, self.page_height - y - height, width, height, stroke=0, fill=1)

	def draw_char(self, placement: GlyphPlacement, font_name: str, color: int) -> None:
		"""
		Draw one character with its scale and rotation.

		Args:
			placement: Glyph origin and transform in y-down space.
			font_name: Registered font name.
			color: Packed 0xRRGGBB text color.
		"""
		red, green, blue = pdf_placard.config.split_rgb(color)
		self.pdf.saveState()
		self.pdf.setFillColorRGB(red, green, blue)
		self.pdf.translate(placement.x, self.page_height - placement.y)
		# enter y-down space, transform, then back to y-up glyph space
		self.pdf.scale(1, -1)
		self.pdf.scale(placement.scale_x, placement.scale_y)
		if placement.rotation:
			self.pdf.rotate(placement.rotation)
		self.pdf.scale(1, -1)
		self.pdf.setFont(font_name, placement.font_size)
		self.pdf.drawString(0, 0, placement.char)
		self.pdf.restoreState()

	def end_page(self) -> None:
		self.pdf.showPage()
		self.page_count += 1

	def finish(self) -> None:
		self.pdf.save()


#============================================
def draw_page(renderer, page: PageLayout, font_name: str, text_color: int) -> None:
	"""
	Send one laid out page to a renderer.

	Args:
		renderer: Object with begin_page, fill_rect, draw_char and end_page.
		page: Page layout.
		font_name: Registered font name.
		text_color: Packed 0xRRGGBB text color.
	"""
	renderer.begin_page(page.width, page.height)
	for band in page.bands:
		renderer.fill_rect(band.x, band.y, band.width, band.height, band.color)
	for placement in page.placements:
		renderer.draw_char(placement, font_name, text_color)
	renderer.end_page()


#============================================
def render_document(document: PlacardDocument, output_path: pathlib.Path | str) -> int:
	"""
	Write a placard document to a PDF file.

	A document without pages still gets one blank page, so the file is
	a valid PDF.

	Args:
		document: Laid out document.
		output_path: Output PDF path.

	Returns:
		Number of pages written.
	"""
	font_name = document.provider.register()
	config = document.config
	pages = document.pages
	if not pages:
		pages = [PageLayout(config.page_width, config.page_height, [], [])]
	renderer = PdfRenderer(output_path)
	for page in pages:
		draw_page(renderer, page, font_name, config.text_color)
	renderer.finish()
	return renderer.page_count
