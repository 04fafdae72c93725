"""
Progress sinks for the imposition driver.
"""

# Standard Library
import threading
import typing

# local repo modules
import pdf_booklet as pb
import pdf_booklet.config


PROGRESS_BAR_WIDTH = pb.config.PROGRESS_BAR_WIDTH


class ProgressSink(typing.Protocol):
	def report(self, percent: int) -> None:
		...

	def is_cancelled(self) -> bool:
		...


class NullProgress:
	"""
	Sink that ignores progress and never cancels.
	"""

	def report(self, percent: int) -> None:
		return None

	def is_cancelled(self) -> bool:
		return False


class CallbackProgress:
	"""
	Sink forwarding percentages to a callback, cancelled through cancel().
	"""

	def __init__(self, callback: typing.Callable[[int], None] | None = None) -> None:
		self._callback = callback
		self._cancelled = threading.Event()

	def report(self, percent: int) -> None:
		if self._callback is not None:
			self._callback(percent)

	def cancel(self) -> None:
		self._cancelled.set()

	def is_cancelled(self) -> bool:
		return self._cancelled.is_set()


class ConsoleProgress(CallbackProgress):
	"""
	Sink drawing a progress bar on stdout.
	"""

	def __init__(self, prefix: str = "Sections") -> None:
		super().__init__(self._draw)
		self.prefix = prefix

	def _draw(self, percent: int) -> None:
		print_progress(self.prefix, percent)
		if percent >= 100:
			print()


#============================================
def print_progress(prefix: str, percent: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		percent: Completion percentage, 0 to 100.
	"""
	percent = max(0, min(100, percent))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {percent}%", end="\r")
