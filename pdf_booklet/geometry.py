"""
Rectangles and affine transforms in PDF user space.
"""

# Standard Library
import dataclasses

# PIP3 modules
import pypdf


# cos/sin of quarter turns, indexed by (degrees // 90) % 4
QUARTER_TURNS = {
	0: (1.0, 0.0),
	1: (0.0, 1.0),
	2: (-1.0, 0.0),
	3: (0.0, -1.0),
}


@dataclasses.dataclass(frozen=True)
class Rect:
	width: float
	height: float

	def __post_init__(self) -> None:
		if self.width < 0.0 or self.height < 0.0:
			raise ValueError(f"rect dimensions must be non-negative: {self.width} x {self.height}")

	def box(self) -> tuple[float, float, float, float]:
		return (0.0, 0.0, self.width, self.height)


@dataclasses.dataclass(frozen=True)
class Affine:
	"""
	2D affine transform [[a, b], [c, d], [e, f]].

	A point maps as (x, y) -> (a*x + c*y + e, b*x + d*y + f), which is the
	operand order of the PDF "cm" operator and of pypdf.Transformation.ctm.
	Arithmetic goes through pypdf.Transformation.
	"""
	a: float = 1.0
	b: float = 0.0
	c: float = 0.0
	d: float = 1.0
	e: float = 0.0
	f: float = 0.0

	@classmethod
	def from_transformation(cls, transformation: pypdf.Transformation) -> "Affine":
		return cls(*(float(value) for value in transformation.ctm))

	def to_transformation(self) -> pypdf.Transformation:
		return pypdf.Transformation(self.as_tuple())

	@classmethod
	def identity(cls) -> "Affine":
		return cls.from_transformation(pypdf.Transformation())

	@classmethod
	def translation(cls, tx: float, ty: float) -> "Affine":
		return cls.from_transformation(pypdf.Transformation().translate(tx, ty))

	@classmethod
	def rotation(cls, degrees: int) -> "Affine":
		"""
		Counter-clockwise rotation by a multiple of 90 degrees.

		Built from QUARTER_TURNS so the zero entries stay exactly zero.

		Args:
			degrees: Angle in degrees, multiple of 90.

		Returns:
			Exact rotation transform.
		"""
		if degrees % 90 != 0:
			raise ValueError(f"rotation must be a multiple of 90 degrees, got {degrees}")
		cos, sin = QUARTER_TURNS[(degrees // 90) % 4]
		return cls.from_transformation(pypdf.Transformation((cos, sin, -sin, cos, 0.0, 0.0)))

	@classmethod
	def scaling(cls, factor: float) -> "Affine":
		return cls.from_transformation(pypdf.Transformation().scale(factor, factor))

	def then(self, other: "Affine") -> "Affine":
		"""
		Transform applying self first, then other.

		Args:
			other: Transform applied after this one.

		Returns:
			Combined transform.
		"""
		combined = self.to_transformation().transform(other.to_transformation())
		return Affine.from_transformation(combined)

	def apply(self, x: float, y: float) -> tuple[float, float]:
		point = self.to_transformation().apply_on((x, y))
		return (float(point[0]), float(point[1]))

	def as_tuple(self) -> tuple[float, float, float, float, float, float]:
		return (self.a, self.b, self.c, self.d, self.e, self.f)

	def is_identity(self, tolerance: float = 0.0) -> bool:
		return all(
			abs(value - expected) <= tolerance
			for value, expected in zip(self.as_tuple(), Affine().as_tuple())
		)


#============================================
def compose(*transforms: Affine) -> Affine:
	"""
	Compose transforms so that compose(t1, t2, t3)(p) == t1(t2(t3(p))).

	This matches emitting "t1 cm t2 cm t3 cm" in that order at the head of
	a content stream.

	Args:
		transforms: Transforms, outermost first.

	Returns:
		Combined transform.
	"""
	result = Affine.identity()
	for transform in reversed(transforms):
		result = result.then(transform)
	return result


#============================================
def transform_box(
	box: tuple[float, float, float, float],
	transform: Affine,
) -> tuple[float, float, float, float]:
	"""
	Axis-aligned bounding box of a box under a transform.

	Args:
		box: Bounding box (x0, y0, x1, y1).
		transform: Transform to apply.

	Returns:
		Bounding box (x0, y0, x1, y1).
	"""
	x0, y0, x1, y1 = box
	corners = [transform.apply(x, y) for x, y in ((x0, y0), (x1, y0), (x0, y1), (x1, y1))]
	x_values = [point[0] for point in corners]
	y_values = [point[1] for point in corners]
	return (min(x_values), min(y_values), max(x_values), max(y_values))


#============================================
def transform_rect(rect: Rect, transform: Affine) -> Rect:
	"""
	Size of the bounding rect of a rect placed at the origin, under a transform.

	Args:
		rect: Source rect.
		transform: Transform to apply.

	Returns:
		Rect with the bounding box width and height.
	"""
	x0, y0, x1, y1 = transform_box(rect.box(), transform)
	return Rect(x1 - x0, y1 - y0)


#============================================
def boxes_close(
	box_a: tuple[float, float, float, float],
	box_b: tuple[float, float, float, float],
	tolerance: float,
) -> bool:
	"""
	Check whether two boxes match within a tolerance.

	Args:
		box_a: First bounding box.
		box_b: Second bounding box.
		tolerance: Allowed absolute difference per coordinate.

	Returns:
		True if all coordinates are within tolerance.
	"""
	return all(abs(left - right) <= tolerance for left, right in zip(box_a, box_b))
