#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render text as a large placard filling a PDF page.
"""

# local repo modules
import pdf_placard.cli


if __name__ == "__main__":
	pdf_placard.cli.main()
