"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import pdf_booklet as pb
import pdf_booklet.errors


PAGES_PER_SHEET = 4
MIN_SHEETS_PER_SECTION = 1
MAX_SHEETS_PER_SECTION = 6

DEFAULT_PAGE_SIZE = "Letter"
PAGE_SIZES = {
	"A0": reportlab.lib.pagesizes.A0,
	"A1": reportlab.lib.pagesizes.A1,
	"A2": reportlab.lib.pagesizes.A2,
	"A3": reportlab.lib.pagesizes.A3,
	"A4": reportlab.lib.pagesizes.A4,
	"A5": reportlab.lib.pagesizes.A5,
	"A6": reportlab.lib.pagesizes.A6,
	"Legal": reportlab.lib.pagesizes.LEGAL,
	"Letter": reportlab.lib.pagesizes.LETTER,
}

LEFT_LAYER_PREFIX = "left"
RIGHT_LAYER_PREFIX = "right"
PROGRESS_BAR_WIDTH = 20
FLOAT_TOLERANCE = 1e-4


@dataclasses.dataclass
class BookletConfig:
	target_paper: str = DEFAULT_PAGE_SIZE
	sheets_per_section: int = 1
	rotate_reverse: bool = True
	first_page: int = 0
	last_page: int | None = None

	#============================================
	def validate(self) -> None:
		"""
		Check values that do not depend on the input document.
		"""
		resolve_page_size(self.target_paper)
		if not MIN_SHEETS_PER_SECTION <= self.sheets_per_section <= MAX_SHEETS_PER_SECTION:
			raise pb.errors.InputRangeError(
				f"sheets per section must be between {MIN_SHEETS_PER_SECTION} "
				f"and {MAX_SHEETS_PER_SECTION}, got {self.sheets_per_section}"
			)

	#============================================
	def section_size(self) -> int:
		"""
		Number of input pages held by one section.
		"""
		return PAGES_PER_SHEET * self.sheets_per_section


@dataclasses.dataclass
class PageWindow:
	"""
	Half-open page window [first, last) into a document of page_count pages.

	Setting either end past its bound clamps it to that bound. If the new
	value crosses the other end, the other end is dragged along.
	"""
	page_count: int
	first: int = 0
	last: int = 0

	def set_first(self, page: int) -> None:
		if page < 0:
			self.first = 0
			return
		if page > self.page_count:
			page = self.page_count
		if page > self.last:
			self.last = page
		self.first = page

	def set_last(self, page: int) -> None:
		if page > self.page_count:
			self.last = self.page_count
			return
		if page < 0:
			page = 0
		if page < self.first:
			self.first = page
		self.last = page

	def __len__(self) -> int:
		return self.last - self.first


@dataclasses.dataclass
class ImpositionResult:
	input_pages: int
	first_page: int
	last_page: int
	sections: int
	output_pages: int
	blank_halves: int
	target_paper: str


#============================================
def resolve_page_size(name: str) -> tuple[float, float]:
	"""
	Resolve a paper size name to portrait (width, height) in points.

	Args:
		name: Paper size name such as "A4" or "letter".

	Returns:
		Tuple of (width, height).
	"""
	for key, size in PAGE_SIZES.items():
		if key.lower() == name.strip().lower():
			return (float(size[0]), float(size[1]))
	choices = ", ".join(PAGE_SIZES)
	raise ValueError(f"unknown paper size {name!r}, expected one of: {choices}")


#============================================
def resolve_page_window(config: BookletConfig, page_count: int) -> PageWindow:
	"""
	Clamp the configured page range against the input document.

	Args:
		config: Booklet configuration.
		page_count: Number of pages in the input document.

	Returns:
		PageWindow holding a non-empty range.
	"""
	window = PageWindow(page_count=page_count, first=0, last=page_count)
	if config.last_page is not None:
		window.set_last(config.last_page)
	window.set_first(config.first_page)
	if len(window) == 0:
		raise pb.errors.InputRangeError(
			f"no pages to impose: window [{window.first}, {window.last}) "
			f"of a {page_count} page document is empty"
		)
	return window
