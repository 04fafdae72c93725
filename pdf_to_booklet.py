#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Impose a PDF as a saddle-stitched booklet.
"""

import sys

import pdf_booklet.cli


if __name__ == "__main__":
	sys.exit(pdf_booklet.cli.main())
