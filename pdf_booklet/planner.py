"""
Signature planning for saddle-stitched sections.

A section of k nested sheets holds S = 4k page slots. Pages are taken from
the outside in, in pairs (p[0], p[S-1]), (p[1], p[S-2]), ... so that folding
the stacked sheets along one spine gives reading order:

	front of sheet s: top = p[S-1-2s], bottom = p[2s]
	back of sheet s:  top = p[2s+1],   bottom = p[S-2-2s]

Slots past the end of the input become blank placements.
"""

# Standard Library
import dataclasses
import enum

# local repo modules
import pdf_booklet as pb
import pdf_booklet.config


PAGES_PER_SHEET = pb.config.PAGES_PER_SHEET


class Side(enum.Enum):
	FRONT = "front"
	BACK = "back"


class Half(enum.Enum):
	TOP = "top"
	BOTTOM = "bottom"


@dataclasses.dataclass(frozen=True)
class Placement:
	src: int | None
	sheet: int
	side: Side
	half: Half

	@property
	def is_blank(self) -> bool:
		return self.src is None


#============================================
def section_starts(first: int, last: int, sheets_per_section: int) -> list[tuple[int, int]]:
	"""
	Split a page window into section ranges.

	Args:
		first: First page index (inclusive).
		last: Last page index (exclusive).
		sheets_per_section: Sheets folded together per section.

	Returns:
		List of (start, end) page index pairs, end exclusive.
	"""
	if sheets_per_section < 1:
		raise ValueError(f"sheets per section must be at least 1, got {sheets_per_section}")
	step = PAGES_PER_SHEET * sheets_per_section
	ranges: list[tuple[int, int]] = []
	for start in range(first, last, step):
		ranges.append((start, min(start + step, last)))
	return ranges


#============================================
def plan_section(first: int, last: int, sheets_per_section: int) -> list[Placement]:
	"""
	Plan one section.

	Args:
		first: First page index of the section (inclusive).
		last: Last page index of the section (exclusive).
		sheets_per_section: Sheets folded together per section.

	Returns:
		Exactly 4 * sheets_per_section placements in output order:
		front sheet 0, back sheet 0, front sheet 1, ...
	"""
	slots = PAGES_PER_SHEET * sheets_per_section
	if last - first > slots:
		raise ValueError(f"section [{first}, {last}) holds more than {slots} pages")
	pages = list(range(first, last))

	def page_at(slot: int) -> int | None:
		if slot < len(pages):
			return pages[slot]
		return None

	plan: list[Placement] = []
	for sheet in range(sheets_per_section):
		plan.append(Placement(page_at(slots - 1 - 2 * sheet), sheet, Side.FRONT, Half.TOP))
		plan.append(Placement(page_at(2 * sheet), sheet, Side.FRONT, Half.BOTTOM))
		plan.append(Placement(page_at(2 * sheet + 1), sheet, Side.BACK, Half.TOP))
		plan.append(Placement(page_at(slots - 2 - 2 * sheet), sheet, Side.BACK, Half.BOTTOM))
	return plan


#============================================
def plan_sections(first: int, last: int, sheets_per_section: int) -> list[list[Placement]]:
	"""
	Plan every section of a page window.

	Args:
		first: First page index (inclusive).
		last: Last page index (exclusive).
		sheets_per_section: Sheets folded together per section.

	Returns:
		List of section plans.
	"""
	return [
		plan_section(start, end, sheets_per_section)
		for start, end in section_starts(first, last, sheets_per_section)
	]


#============================================
def group_faces(plan: list[Placement]) -> list[tuple[Placement, Placement]]:
	"""
	Pair placements into output faces.

	Args:
		plan: Section plan from plan_section.

	Returns:
		List of (top, bottom) placement pairs in output order.
	"""
	faces: list[tuple[Placement, Placement]] = []
	for index in range(0, len(plan), 2):
		top, bottom = plan[index], plan[index + 1]
		if (top.sheet, top.side) != (bottom.sheet, bottom.side):
			raise ValueError(f"placements {index} and {index + 1} are not on the same face")
		faces.append((top, bottom))
	return faces


#============================================
def fold_reading_order(plan: list[Placement]) -> list[int | None]:
	"""
	Read a folded section the way a reader meets its pages.

	Opening the folded section, the reader walks inward through the sheets
	(bottom of each front, then top of its back) and then outward again
	(bottom of each back, then top of its front).

	Args:
		plan: Section plan from plan_section.

	Returns:
		Source page indices (None for blanks) in reading order.
	"""
	by_position = {(item.sheet, item.side, item.half): item.src for item in plan}
	sheets = len(plan) // PAGES_PER_SHEET
	order: list[int | None] = []
	for sheet in range(sheets):
		order.append(by_position[(sheet, Side.FRONT, Half.BOTTOM)])
		order.append(by_position[(sheet, Side.BACK, Half.TOP)])
	for sheet in reversed(range(sheets)):
		order.append(by_position[(sheet, Side.BACK, Half.BOTTOM)])
		order.append(by_position[(sheet, Side.FRONT, Half.TOP)])
	return order
