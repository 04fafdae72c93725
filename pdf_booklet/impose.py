"""
Imposition driver: sections -> faces -> output pages.
"""

# Standard Library
import os

# local repo modules
import pdf_booklet as pb
import pdf_booklet.backend
import pdf_booklet.compositor
import pdf_booklet.config
import pdf_booklet.errors
import pdf_booklet.geometry
import pdf_booklet.planner
import pdf_booklet.progress


BookletConfig = pb.config.BookletConfig
ImpositionResult = pb.config.ImpositionResult
Rect = pb.geometry.Rect
Placement = pb.planner.Placement
CompositionContext = pb.compositor.CompositionContext
ProgressSink = pb.progress.ProgressSink


#============================================
def impose_section(
	backend: pb.backend.PdfBackend,
	source: object,
	output: object,
	plan: list[Placement],
	target: Rect,
	rotate_reverse: bool,
	first_page_index: int,
) -> tuple[int, int]:
	"""
	Emit the output pages of one section.

	Args:
		backend: PDF backend.
		source: Input document handle.
		output: Output document handle.
		plan: Section plan.
		target: Portrait target paper.
		rotate_reverse: Rotate back faces opposite to front faces.
		first_page_index: Index the next output page will get.

	Returns:
		Tuple of (pages emitted, blank halves on emitted pages).
	"""

	def crop_box(index: int) -> Rect:
		return backend.crop_box(source, index)

	emitted = 0
	blank_halves = 0
	for top, bottom in pb.planner.group_faces(plan):
		face = pb.compositor.build_face(top, bottom, crop_box)
		if face is None:
			continue
		context = CompositionContext(
			backend=backend,
			source=source,
			output=output,
			face=face,
			page_index=first_page_index + emitted,
		)
		pb.compositor.compose_face(context)
		direction = pb.compositor.rotation_for(face.side, rotate_reverse)
		pb.compositor.fit_face(context, target, direction)
		emitted += 1
		blank_halves += face.blank_halves
	return emitted, blank_halves


#============================================
def impose(
	input_path: str | os.PathLike,
	output_path: str | os.PathLike,
	config: BookletConfig | None = None,
	progress: ProgressSink | None = None,
	backend: pb.backend.PdfBackend | None = None,
) -> ImpositionResult:
	"""
	Build a saddle-stitch booklet PDF from an input PDF.

	Args:
		input_path: Source PDF path.
		output_path: Destination PDF path.
		config: Booklet configuration, defaults to BookletConfig().
		progress: Progress sink checked for cancellation between sections.
		backend: PDF backend, defaults to PypdfBackend.

	Returns:
		ImpositionResult summary.
	"""
	if config is None:
		config = BookletConfig()
	if progress is None:
		progress = pb.progress.NullProgress()
	if backend is None:
		backend = pb.backend.PypdfBackend()
	config.validate()
	target = Rect(*pb.config.resolve_page_size(config.target_paper))

	source = backend.open(input_path)
	output = None
	try:
		page_count = backend.page_count(source)
		window = pb.config.resolve_page_window(config, page_count)
		output = backend.new_output()
		sections = pb.planner.section_starts(window.first, window.last, config.sheets_per_section)
		output_pages = 0
		blank_halves = 0
		for start, end in sections:
			if progress.is_cancelled():
				raise pb.errors.Cancelled(f"cancelled before pages {start + 1} to {end}")
			plan = pb.planner.plan_section(start, end, config.sheets_per_section)
			emitted, blanks = impose_section(
				backend,
				source,
				output,
				plan,
				target,
				config.rotate_reverse,
				output_pages,
			)
			output_pages += emitted
			blank_halves += blanks
			progress.report(100 * end // window.last)
		if progress.is_cancelled():
			raise pb.errors.Cancelled("cancelled before saving")
		backend.save(output, output_path)
	finally:
		if output is not None:
			backend.close(output)
		backend.close(source)

	return ImpositionResult(
		input_pages=page_count,
		first_page=window.first,
		last_page=window.last,
		sections=len(sections),
		output_pages=output_pages,
		blank_halves=blank_halves,
		target_paper=config.target_paper,
	)
