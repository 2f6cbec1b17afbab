"""Detect whether the program is on PATH, add it there, or explain how to by hand."""