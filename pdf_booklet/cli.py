"""
CLI entry points for PDF booklet imposition.
"""

# Standard Library
import argparse
import sys
import time

# local repo modules
import pdf_booklet as pb
import pdf_booklet.config
import pdf_booklet.errors
import pdf_booklet.impose
import pdf_booklet.progress


BookletConfig = pb.config.BookletConfig

DEFAULT_PAGE_SIZE = pb.config.DEFAULT_PAGE_SIZE
PAGE_SIZES = pb.config.PAGE_SIZES
MIN_SHEETS_PER_SECTION = pb.config.MIN_SHEETS_PER_SECTION
MAX_SHEETS_PER_SECTION = pb.config.MAX_SHEETS_PER_SECTION


#============================================
def build_config(args: argparse.Namespace) -> BookletConfig:
	"""
	Build booklet config from CLI args.

	Page numbers on the command line are 1-based and inclusive; the config
	holds a 0-based half-open window.

	Args:
		args: Parsed argparse namespace.

	Returns:
		BookletConfig.
	"""
	first_page = 0
	if args.first_page is not None:
		first_page = args.first_page - 1
	config = BookletConfig(
		target_paper=args.paper,
		sheets_per_section=args.sheets,
		rotate_reverse=args.rotate_reverse,
		first_page=first_page,
		last_page=args.last_page,
	)
	return config


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv[1:].

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Impose a PDF as a saddle-stitched booklet.")
	parser.add_argument("input_path", help="Source PDF.")
	parser.add_argument("output_path", help="Booklet PDF to write.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument(
		"-p", "--paper", dest="paper", choices=list(PAGE_SIZES), default=DEFAULT_PAGE_SIZE,
		help="Target paper size.",
	)
	layout_group.add_argument(
		"-s", "--sheets", dest="sheets", type=int,
		choices=range(MIN_SHEETS_PER_SECTION, MAX_SHEETS_PER_SECTION + 1),
		default=MIN_SHEETS_PER_SECTION, metavar="N",
		help=f"Sheets per section ({MIN_SHEETS_PER_SECTION}-{MAX_SHEETS_PER_SECTION}).",
	)
	layout_group.add_argument(
		"-r", "--rotate-reverse", dest="rotate_reverse", action="store_true",
		help="Rotate the back of each sheet opposite to the front.",
	)
	layout_group.add_argument(
		"-R", "--no-rotate-reverse", dest="rotate_reverse", action="store_false",
		help="Rotate both sides of each sheet the same way.",
	)

	range_group = parser.add_argument_group("Page range")
	range_group.add_argument(
		"-f", "--first-page", dest="first_page", type=int, default=None,
		help="First page to include (1-based).",
	)
	range_group.add_argument(
		"-l", "--last-page", dest="last_page", type=int, default=None,
		help="Last page to include (1-based, inclusive).",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-q", "--quiet", dest="quiet", action="store_true", help="Print nothing on success.")

	parser.set_defaults(rotate_reverse=True, quiet=False)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> pb.config.ImpositionResult:
	"""
	Run the imposition described by the CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ImpositionResult.
	"""
	config = build_config(args)
	if not args.quiet:
		print("PDF booklet imposition")
		print(f"Input PDF: {args.input_path}")
		print(f"Output PDF: {args.output_path}")
		print(f"Paper: {config.target_paper}")
		print(f"Sheets per section: {config.sheets_per_section} ({config.section_size()} pages)")
		print(f"Rotate reverse: {config.rotate_reverse}")
		if args.first_page is not None or args.last_page is not None:
			print(f"Requested pages: {args.first_page or 1} to {args.last_page or 'end'}")

	progress = pb.progress.NullProgress()
	if not args.quiet:
		progress = pb.progress.ConsoleProgress()

	start_time = time.perf_counter()
	result = pb.impose.impose(args.input_path, args.output_path, config, progress)
	total_time = time.perf_counter() - start_time

	if not args.quiet:
		print(f"Input pages: {result.input_pages}")
		print(f"Pages imposed: {result.first_page + 1} to {result.last_page}")
		print(f"Sections: {result.sections}")
		print(f"Output pages: {result.output_pages}")
		print(f"Blank halves: {result.blank_halves}")
		print(f"Timing: total={total_time:.2f}s")
		print(f"File created: {args.output_path}")
	return result


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Args:
		argv: Argument list, defaults to sys.argv[1:].

	Returns:
		Process exit code.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except KeyboardInterrupt:
		print("\nError: cancelled", file=sys.stderr)
		return 130
	except (pb.errors.BookletError, ValueError) as error:
		print(f"\nError: {error}", file=sys.stderr)
		return 1
	return 0
