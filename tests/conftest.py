"""
Pytest configuration for local imports and generated input PDFs.
"""

# Standard Library
import os
import pathlib
import sys

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

# PIP3 modules
import pypdf
import pytest
import reportlab.lib.pagesizes
import reportlab.pdfgen.canvas


#============================================
def write_numbered_pdf(
	path: pathlib.Path,
	page_count: int,
	page_size: tuple[float, float] = reportlab.lib.pagesizes.letter,
) -> pathlib.Path:
	"""
	Write a PDF whose pages show "Page N" over a filled square.

	Args:
		path: Output path.
		page_count: Number of pages.
		page_size: Page (width, height) in points.

	Returns:
		The output path.
	"""
	width, height = page_size
	pdf = reportlab.pdfgen.canvas.Canvas(str(path), pagesize=page_size, pageCompression=0)
	for number in range(1, page_count + 1):
		side = min(width, height) / 3.0
		pdf.rect((width - side) / 2.0, (height - side) / 2.0, side, side, stroke=0, fill=1)
		pdf.setFont("Helvetica", 24)
		pdf.drawCentredString(width / 2.0, height - 72.0, f"Page {number}")
		pdf.showPage()
	pdf.save()
	return path


#============================================
def rewrite_pages(path: pathlib.Path, output_path: pathlib.Path, edit) -> pathlib.Path:
	"""
	Copy a PDF, passing every page through an edit callback.

	Args:
		path: Source PDF.
		output_path: Destination PDF.
		edit: Callable taking (index, page).

	Returns:
		The output path.
	"""
	reader = pypdf.PdfReader(str(path))
	writer = pypdf.PdfWriter()
	for index, page in enumerate(reader.pages):
		added = writer.add_page(page)
		edit(index, added)
	writer.write(str(output_path))
	return output_path


@pytest.fixture
def numbered_pdf(tmp_path: pathlib.Path):
	"""
	Factory fixture writing numbered letter-size PDFs into tmp_path.
	"""

	def factory(page_count: int, page_size: tuple[float, float] = reportlab.lib.pagesizes.letter) -> pathlib.Path:
		path = tmp_path / f"input_{page_count}.pdf"
		return write_numbered_pdf(path, page_count, page_size)

	return factory
