"""
Error kinds raised while building a booklet.
"""


class BookletError(Exception):
	"""
	Base class for every failure the imposition core reports.
	"""


class InputReadError(BookletError):
	"""
	Input PDF is missing, unreadable, or malformed.
	"""


class InputRangeError(BookletError):
	"""
	Configured page window or section size cannot be satisfied.
	"""


class BackendError(BookletError):
	"""
	A PDF backend operation failed.
	"""


class OutputWriteError(BookletError):
	"""
	Saving the output document failed.
	"""


class Cancelled(BookletError):
	"""
	Cooperative cancellation fired before the run completed.
	"""
