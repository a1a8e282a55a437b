"""Desktop front end for the progression unit.

`form` holds the window state without any GUI toolkit; `window` binds it to
tkinter.
"""
