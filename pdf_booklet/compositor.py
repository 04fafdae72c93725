"""
Face composition and rotate-and-fit onto the target paper.

A face is one side of one sheet. Its two source pages are laid out at 1:1
scale side by side on an oversized landscape page (top placement on the
left, bottom placement on the right). The composed face is then rotated a
quarter turn, uniformly scaled and centred onto the portrait target paper
with a single transform at the head of its content stream.
"""

# Standard Library
import dataclasses
import enum
import typing

# local repo modules
import pdf_booklet as pb
import pdf_booklet.config
import pdf_booklet.geometry
import pdf_booklet.planner


Rect = pb.geometry.Rect
Affine = pb.geometry.Affine
Placement = pb.planner.Placement
Side = pb.planner.Side
Half = pb.planner.Half

LEFT_LAYER_PREFIX = pb.config.LEFT_LAYER_PREFIX
RIGHT_LAYER_PREFIX = pb.config.RIGHT_LAYER_PREFIX


class Rotation(enum.Enum):
	CW = "cw"
	CCW = "ccw"

	@property
	def degrees(self) -> int:
		# counter-clockwise matrix angle
		if self is Rotation.CW:
			return 270
		return 90


@dataclasses.dataclass
class OutputFace:
	sheet: int
	side: Side
	left: Placement
	right: Placement
	left_rect: Rect
	right_rect: Rect

	@property
	def rect(self) -> Rect:
		return face_rect(self.left_rect, self.right_rect)

	@property
	def blank_halves(self) -> int:
		return int(self.left.is_blank) + int(self.right.is_blank)


@dataclasses.dataclass
class CompositionContext:
	"""
	State threaded through the composition of a single face.
	"""
	backend: typing.Any
	source: typing.Any
	output: typing.Any
	face: OutputFace
	page_index: int
	page: typing.Any = None


#============================================
def face_rect(left: Rect, right: Rect) -> Rect:
	"""
	Landscape destination rect holding two pages side by side.

	Args:
		left: Crop box size of the left page.
		right: Crop box size of the right page.

	Returns:
		Rect of summed widths and the larger height.
	"""
	return Rect(left.width + right.width, max(left.height, right.height))


#============================================
def build_face(
	top: Placement,
	bottom: Placement,
	crop_box: typing.Callable[[int], Rect],
) -> OutputFace | None:
	"""
	Build the face for a pair of placements.

	A blank slot takes the size of its partner page, so the face keeps both
	halves and the blank half stays empty.

	Args:
		top: Top placement, laid out on the left.
		bottom: Bottom placement, laid out on the right.
		crop_box: Lookup from source page index to its crop box size.

	Returns:
		OutputFace, or None when both placements are blank.
	"""
	if top.is_blank and bottom.is_blank:
		return None
	if top.is_blank:
		right_rect = crop_box(bottom.src)
		left_rect = right_rect
	elif bottom.is_blank:
		left_rect = crop_box(top.src)
		right_rect = left_rect
	else:
		left_rect = crop_box(top.src)
		right_rect = crop_box(bottom.src)
	return OutputFace(
		sheet=top.sheet,
		side=top.side,
		left=top,
		right=bottom,
		left_rect=left_rect,
		right_rect=right_rect,
	)


#============================================
def layer_transforms(face: OutputFace) -> tuple[Affine, Affine]:
	"""
	Placement transforms of the left and right source pages.

	Args:
		face: Face being composed.

	Returns:
		Tuple of (left transform, right transform).
	"""
	return (Affine.identity(), Affine.translation(face.left_rect.width, 0.0))


#============================================
def rotation_for(side: Side, rotate_reverse: bool) -> Rotation:
	"""
	Choose the quarter turn of a face.

	Args:
		side: Sheet side of the face.
		rotate_reverse: Rotate back faces opposite to front faces.

	Returns:
		Rotation direction.
	"""
	if side is Side.BACK and rotate_reverse:
		return Rotation.CW
	return Rotation.CCW


#============================================
def target_region(target: Rect, half: Half | None) -> tuple[float, float, float, float]:
	"""
	Region of the target paper a face is fitted into.

	Args:
		target: Portrait target paper.
		half: TOP or BOTTOM half, or None for the full sheet.

	Returns:
		Region box (x0, y0, x1, y1).
	"""
	if half is Half.TOP:
		return (0.0, target.height / 2.0, target.width, target.height)
	if half is Half.BOTTOM:
		return (0.0, 0.0, target.width, target.height / 2.0)
	return target.box()


#============================================
def fit_scale(face: Rect, target: Rect, direction: Rotation, half: Half | None = None) -> float:
	"""
	Uniform scale fitting the rotated face into the target region.

	Args:
		face: Composed face crop box.
		target: Portrait target paper.
		direction: Quarter turn direction.
		half: Optional target half.

	Returns:
		Scale factor.
	"""
	rotated = pb.geometry.transform_rect(face, Affine.rotation(direction.degrees))
	if rotated.width <= 0.0 or rotated.height <= 0.0:
		raise ValueError(f"cannot fit an empty face of {face.width} x {face.height}")
	x0, y0, x1, y1 = target_region(target, half)
	return min((x1 - x0) / rotated.width, (y1 - y0) / rotated.height)


#============================================
def fit_transform(face: Rect, target: Rect, direction: Rotation, half: Half | None = None) -> Affine:
	"""
	Transform rotating a face a quarter turn and centring it on the target.

	The transform is translate(region centre) . rotate . scale . translate(-face
	centre), applied right to left on face coordinates.

	Args:
		face: Composed face crop box.
		target: Portrait target paper.
		direction: Quarter turn direction.
		half: Optional target half; None fits the whole sheet.

	Returns:
		Combined transform.
	"""
	scale = fit_scale(face, target, direction, half)
	x0, y0, x1, y1 = target_region(target, half)
	return pb.geometry.compose(
		Affine.translation((x0 + x1) / 2.0, (y0 + y1) / 2.0),
		Affine.rotation(direction.degrees),
		Affine.scaling(scale),
		Affine.translation(-face.width / 2.0, -face.height / 2.0),
	)


#============================================
def compose_face(context: CompositionContext) -> typing.Any:
	"""
	Materialize a face as a new output page with its source pages as layers.

	Args:
		context: Composition context; its page is set to the new page.

	Returns:
		Backend page handle.
	"""
	face = context.face
	backend = context.backend
	context.page = backend.new_page(context.output, face.rect)
	left_transform, right_transform = layer_transforms(face)
	layers = (
		(face.left, left_transform, LEFT_LAYER_PREFIX),
		(face.right, right_transform, RIGHT_LAYER_PREFIX),
	)
	for placement, transform, prefix in layers:
		if placement.is_blank:
			continue
		form = backend.import_as_form(context.source, placement.src, context.output)
		backend.append_layer(context.page, form, transform, f"{prefix}{context.page_index}")
	return context.page


#============================================
def fit_face(context: CompositionContext, target: Rect, direction: Rotation) -> Affine:
	"""
	Rotate and scale a composed face onto the target paper.

	Args:
		context: Composition context holding the composed page.
		target: Portrait target paper.
		direction: Quarter turn direction.

	Returns:
		The transform written to the page.
	"""
	transform = fit_transform(context.face.rect, target, direction)
	context.backend.prepend_transform(context.page, transform)
	context.backend.set_boxes(context.page, target, target)
	return transform
