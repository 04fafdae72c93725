import pytest

import pdf_booklet as pb
import pdf_booklet.config
import pdf_booklet.errors


BookletConfig = pb.config.BookletConfig
PageWindow = pb.config.PageWindow


#============================================
@pytest.mark.parametrize("value", range(-3, 14))
@pytest.mark.parametrize("first, last", [(0, 10), (3, 7), (5, 5), (0, 0), (10, 10)])
def test_window_setters_keep_ordering(value: int, first: int, last: int) -> None:
	"""
	Both setters keep 0 <= first <= last <= page_count.
	"""
	for setter in ("set_first", "set_last"):
		window = PageWindow(page_count=10, first=first, last=last)
		getattr(window, setter)(value)
		assert 0 <= window.first <= window.last <= window.page_count


#============================================
def test_set_first_drags_last_up() -> None:
	window = PageWindow(page_count=10, first=0, last=4)
	window.set_first(6)
	assert (window.first, window.last) == (6, 6)
	window.set_first(50)
	assert (window.first, window.last) == (10, 10)


#============================================
def test_set_first_negative_resets_to_zero() -> None:
	window = PageWindow(page_count=10, first=5, last=8)
	window.set_first(-4)
	assert (window.first, window.last) == (0, 8)


#============================================
def test_set_last_drags_first_down() -> None:
	window = PageWindow(page_count=10, first=6, last=9)
	window.set_last(2)
	assert (window.first, window.last) == (2, 2)
	window.set_last(-1)
	assert (window.first, window.last) == (0, 0)


#============================================
def test_set_last_clamps_to_page_count() -> None:
	window = PageWindow(page_count=10, first=2, last=5)
	window.set_last(99)
	assert (window.first, window.last) == (2, 10)
	assert len(window) == 8


#============================================
def test_resolve_window_defaults_to_whole_document() -> None:
	window = pb.config.resolve_page_window(BookletConfig(), 12)
	assert (window.first, window.last) == (0, 12)


#============================================
def test_resolve_window_clamps_configured_range() -> None:
	config = BookletConfig(first_page=3, last_page=40)
	window = pb.config.resolve_page_window(config, 12)
	assert (window.first, window.last) == (3, 12)


#============================================
def test_resolve_window_rejects_empty_range() -> None:
	with pytest.raises(pb.errors.InputRangeError):
		pb.config.resolve_page_window(BookletConfig(first_page=12), 12)
	with pytest.raises(pb.errors.InputRangeError):
		pb.config.resolve_page_window(BookletConfig(), 0)


#============================================
def test_page_sizes_resolve_case_insensitively() -> None:
	assert pb.config.resolve_page_size("letter") == (612.0, 792.0)
	assert pb.config.resolve_page_size("Legal") == (612.0, 1008.0)
	width, height = pb.config.resolve_page_size("A4")
	assert abs(width - 595.2756) < 0.001 and abs(height - 841.8898) < 0.001
	for name in ("A0", "A1", "A2", "A3", "A5", "A6"):
		width, height = pb.config.resolve_page_size(name)
		assert width < height


#============================================
def test_unknown_page_size_rejected() -> None:
	with pytest.raises(ValueError, match="Letter"):
		pb.config.resolve_page_size("Tabloid")


#============================================
@pytest.mark.parametrize("sheets", [0, 7, -1])
def test_validate_rejects_section_size(sheets: int) -> None:
	with pytest.raises(pb.errors.InputRangeError):
		BookletConfig(sheets_per_section=sheets).validate()


#============================================
def test_section_size() -> None:
	config = BookletConfig(sheets_per_section=3)
	config.validate()
	assert config.section_size() == 12
