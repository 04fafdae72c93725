"""
PDF backend contract and its pypdf implementation.

The imposition core only talks to a PdfBackend: it loads the input,
queries crop boxes, imports source pages as form XObjects, creates output
pages, places forms on them, rewrites their boxes and saves the result.
"""

# Standard Library
import abc
import contextlib
import dataclasses
import os
import pathlib
import tempfile
import typing

# PIP3 modules
import pypdf
import pypdf.errors
import pypdf.generic

# local repo modules
import pdf_booklet as pb
import pdf_booklet.errors
import pdf_booklet.geometry


Rect = pb.geometry.Rect
Affine = pb.geometry.Affine

NameObject = pypdf.generic.NameObject
DictionaryObject = pypdf.generic.DictionaryObject
ArrayObject = pypdf.generic.ArrayObject
FloatObject = pypdf.generic.FloatObject
NumberObject = pypdf.generic.NumberObject
RectangleObject = pypdf.generic.RectangleObject
DecodedStreamObject = pypdf.generic.DecodedStreamObject
ContentStream = pypdf.generic.ContentStream

# failures pypdf surfaces on malformed documents besides its own errors
PDF_FAILURES = (pypdf.errors.PyPdfError, OSError, KeyError, ValueError)


class PdfBackend(abc.ABC):
	"""
	Operations the imposition core needs from a PDF library.
	"""

	@abc.abstractmethod
	def open(self, path: str | os.PathLike) -> typing.Any:
		"""Parse an input PDF. Raises InputReadError."""

	@abc.abstractmethod
	def page_count(self, document: typing.Any) -> int:
		"""Number of pages in an input document."""

	@abc.abstractmethod
	def crop_box(self, document: typing.Any, index: int) -> Rect:
		"""Visible size of input page index."""

	@abc.abstractmethod
	def new_output(self) -> typing.Any:
		"""Create an empty writable document."""

	@abc.abstractmethod
	def import_as_form(self, source: typing.Any, index: int, output: typing.Any) -> typing.Any:
		"""Import source page index into output as a reusable form XObject."""

	@abc.abstractmethod
	def new_page(self, output: typing.Any, rect: Rect) -> typing.Any:
		"""Append a page whose media, crop and art boxes all equal rect."""

	@abc.abstractmethod
	def append_layer(self, page: typing.Any, form: typing.Any, transform: Affine, name: str) -> None:
		"""Draw form on page at transform; name is unique per page."""

	@abc.abstractmethod
	def prepend_transform(self, page: typing.Any, transform: Affine) -> None:
		"""Insert transform at the head of the page content stream."""

	@abc.abstractmethod
	def set_boxes(self, page: typing.Any, media: Rect, crop: Rect) -> None:
		"""Replace the media and crop boxes of a page."""

	@abc.abstractmethod
	def save(self, output: typing.Any, path: str | os.PathLike) -> None:
		"""Write output to path. Raises OutputWriteError."""

	@abc.abstractmethod
	def close(self, document: typing.Any) -> None:
		"""Release a document obtained from open or new_output."""


@dataclasses.dataclass
class SourceDocument:
	path: pathlib.Path
	handle: typing.BinaryIO | None
	reader: pypdf.PdfReader | None


@dataclasses.dataclass
class OutputDocument:
	writer: pypdf.PdfWriter | None
	pages: int = 0


@dataclasses.dataclass
class OutputPage:
	page: pypdf.PageObject
	index: int
	layer_names: set[str] = dataclasses.field(default_factory=set)


@dataclasses.dataclass
class FormHandle:
	reference: pypdf.generic.IndirectObject
	width: float
	height: float


#============================================
def page_form_matrix(box: tuple[float, float, float, float], rotation: int) -> Affine:
	"""
	Matrix mapping a page crop box upright onto the origin.

	Args:
		box: Crop box (x0, y0, x1, y1) in page space.
		rotation: Page /Rotate value, clockwise degrees.

	Returns:
		Transform from page space to upright form space.
	"""
	upright = pb.geometry.compose(
		Affine.rotation(-rotation),
		Affine.translation(-box[0], -box[1]),
	)
	x0, y0, _x1, _y1 = pb.geometry.transform_box(box, upright)
	return pb.geometry.compose(Affine.translation(-x0, -y0), upright)


@contextlib.contextmanager
def backend_errors(operation: str) -> typing.Iterator[None]:
	"""
	Convert PDF library failures into BackendError.

	Args:
		operation: Operation name used in the error message.
	"""
	try:
		yield
	except pb.errors.BookletError:
		raise
	except PDF_FAILURES as error:
		raise pb.errors.BackendError(f"{operation} failed: {error}") from error


class PypdfBackend(PdfBackend):
	"""
	PdfBackend built on pypdf.
	"""

	def open(self, path: str | os.PathLike) -> SourceDocument:
		path = pathlib.Path(path)
		handle = None
		try:
			handle = path.open("rb")
			reader = pypdf.PdfReader(handle)
			if reader.is_encrypted and not reader.decrypt(""):
				raise pb.errors.InputReadError(f"{path} is encrypted")
			# force the page tree to load so malformed files fail here
			len(reader.pages)
		except pb.errors.BookletError:
			if handle is not None:
				handle.close()
			raise
		except PDF_FAILURES as error:
			if handle is not None:
				handle.close()
			raise pb.errors.InputReadError(f"cannot read {path}: {error}") from error
		return SourceDocument(path=path, handle=handle, reader=reader)

	def page_count(self, document: SourceDocument) -> int:
		with backend_errors("page count"):
			return len(document.reader.pages)

	def _source_page(self, document: SourceDocument, index: int) -> pypdf.PageObject:
		count = self.page_count(document)
		if not 0 <= index < count:
			raise pb.errors.BackendError(f"page index {index} outside 0..{count - 1}")
		return document.reader.pages[index]

	def _crop_geometry(self, page: pypdf.PageObject) -> tuple[tuple[float, float, float, float], int]:
		box = page.cropbox
		bounds = (float(box.left), float(box.bottom), float(box.right), float(box.top))
		rotation = int(page.rotation or 0) % 360
		if rotation % 90 != 0:
			rotation = 0
		return bounds, rotation

	def crop_box(self, document: SourceDocument, index: int) -> Rect:
		with backend_errors(f"crop box of page {index}"):
			page = self._source_page(document, index)
			bounds, rotation = self._crop_geometry(page)
			return pb.geometry.transform_rect(
				Rect(bounds[2] - bounds[0], bounds[3] - bounds[1]),
				Affine.rotation(rotation),
			)

	def new_output(self) -> OutputDocument:
		return OutputDocument(writer=pypdf.PdfWriter())

	def import_as_form(self, source: SourceDocument, index: int, output: OutputDocument) -> FormHandle:
		with backend_errors(f"import of page {index}"):
			page = self._source_page(source, index)
			bounds, rotation = self._crop_geometry(page)
			contents = page.get_contents()
			data = contents.get_data() if contents is not None else b""
			resources = page.get(NameObject("/Resources"))
			if resources is None:
				resources = DictionaryObject()
			else:
				resources = resources.get_object().clone(output.writer)

			matrix = page_form_matrix(bounds, rotation)
			form = DecodedStreamObject()
			form.set_data(data)
			form.update({
				NameObject("/Type"): NameObject("/XObject"),
				NameObject("/Subtype"): NameObject("/Form"),
				NameObject("/FormType"): NumberObject(1),
				NameObject("/BBox"): ArrayObject([FloatObject(value) for value in bounds]),
				NameObject("/Matrix"): ArrayObject([FloatObject(value) for value in matrix.to_transformation().ctm]),
				NameObject("/Resources"): resources,
			})
			size = self.crop_box(source, index)
			return FormHandle(
				reference=output.writer._add_object(form),
				width=size.width,
				height=size.height,
			)

	def new_page(self, output: OutputDocument, rect: Rect) -> OutputPage:
		with backend_errors("new page"):
			page = output.writer.add_blank_page(width=rect.width, height=rect.height)
			box = RectangleObject([0, 0, rect.width, rect.height])
			page.mediabox = box
			page.cropbox = RectangleObject(box)
			page.artbox = RectangleObject(box)
			page[NameObject("/Resources")] = DictionaryObject({
				NameObject("/XObject"): DictionaryObject(),
			})
			stream = DecodedStreamObject()
			stream.set_data(b"")
			page[NameObject("/Contents")] = output.writer._add_object(stream)
			handle = OutputPage(page=page, index=output.pages)
			output.pages += 1
			return handle

	def append_layer(self, page: OutputPage, form: FormHandle, transform: Affine, name: str) -> None:
		if name in page.layer_names:
			raise pb.errors.BackendError(f"layer {name!r} already exists on output page {page.index}")
		with backend_errors(f"append layer {name}"):
			resources = page.page[NameObject("/Resources")]
			resources[NameObject("/XObject")][NameObject(f"/{name}")] = form.reference
			content = page.page.get_contents()
			content.operations = content.operations + [
				([], b"q"),
				([FloatObject(value) for value in transform.to_transformation().ctm], b"cm"),
				([NameObject(f"/{name}")], b"Do"),
				([], b"Q"),
			]
			page.page.replace_contents(content)
		page.layer_names.add(name)

	def prepend_transform(self, page: OutputPage, transform: Affine) -> None:
		with backend_errors("prepend transform"):
			page.page.add_transformation(transform.to_transformation())

	def set_boxes(self, page: OutputPage, media: Rect, crop: Rect) -> None:
		with backend_errors("set boxes"):
			page.page.mediabox = RectangleObject([0, 0, media.width, media.height])
			page.page.cropbox = RectangleObject([0, 0, crop.width, crop.height])

	def save(self, output: OutputDocument, path: str | os.PathLike) -> None:
		path = pathlib.Path(path)
		temp_path = None
		replaced = False
		try:
			with tempfile.NamedTemporaryFile(
				"wb",
				dir=path.parent,
				prefix=f".{path.name}.",
				suffix=".partial",
				delete=False,
			) as handle:
				temp_path = pathlib.Path(handle.name)
				output.writer.write(handle)
			os.replace(temp_path, path)
			replaced = True
		except PDF_FAILURES as error:
			raise pb.errors.OutputWriteError(f"cannot write {path}: {error}") from error
		finally:
			if not replaced and temp_path is not None:
				temp_path.unlink(missing_ok=True)

	def close(self, document: SourceDocument | OutputDocument) -> None:
		if isinstance(document, SourceDocument):
			if document.handle is not None:
				document.handle.close()
			document.handle = None
			document.reader = None
		else:
			document.writer = None
