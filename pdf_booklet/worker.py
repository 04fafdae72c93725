"""
Run an imposition on a background thread with cooperative cancellation.
"""

# Standard Library
import concurrent.futures
import os
import typing

# local repo modules
import pdf_booklet as pb
import pdf_booklet.config
import pdf_booklet.impose
import pdf_booklet.progress


class ImpositionWorker:
	"""
	Single background task wrapping pb.impose.impose.

	Progress callbacks run on the worker thread; callers that own a UI
	loop must marshal them back themselves.
	"""

	def __init__(
		self,
		input_path: str | os.PathLike,
		output_path: str | os.PathLike,
		config: pb.config.BookletConfig | None = None,
		on_progress: typing.Callable[[int], None] | None = None,
		backend: typing.Any = None,
	) -> None:
		self.input_path = input_path
		self.output_path = output_path
		self.config = config
		self.backend = backend
		self.progress = pb.progress.CallbackProgress(on_progress)
		self._executor: concurrent.futures.ThreadPoolExecutor | None = None
		self._future: concurrent.futures.Future | None = None

	def start(self) -> concurrent.futures.Future:
		if self._future is not None:
			raise RuntimeError("worker already started")
		self._executor = concurrent.futures.ThreadPoolExecutor(
			max_workers=1,
			thread_name_prefix="pdf-booklet",
		)
		self._future = self._executor.submit(
			pb.impose.impose,
			self.input_path,
			self.output_path,
			self.config,
			self.progress,
			self.backend,
		)
		self._executor.shutdown(wait=False)
		return self._future

	def cancel(self) -> None:
		self.progress.cancel()

	def done(self) -> bool:
		return self._future is not None and self._future.done()

	def result(self, timeout: float | None = None) -> pb.config.ImpositionResult:
		"""
		Wait for the run and return its result.

		Args:
			timeout: Seconds to wait, None waits forever.

		Returns:
			ImpositionResult; errors raised by the run propagate.
		"""
		if self._future is None:
			raise RuntimeError("worker not started")
		return self._future.result(timeout=timeout)
