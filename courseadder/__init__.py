"""
courseadder – tolerant course/section matcher for dual listbox registration widgets.
"""
