"""Small tkinter window around `PredictionForm`."""

from __future__ import annotations
import tkinter as tk
from train.linear_unit import LinearUnit
from .form import PredictionForm


WINDOW_SIZE = "300x300"


def run_window(unit: LinearUnit) -> None:
    form = PredictionForm(unit)

    root = tk.Tk()
    root.geometry(WINDOW_SIZE)
    root.title(form.title())

    first = tk.StringVar(master=root)
    second = tk.StringVar(master=root)
    prediction = tk.StringVar(master=root)

    def _on_first(*_) -> None:
        form.on_first_input_changed(first.get())
        _sync()

    def _on_second(*_) -> None:
        form.on_second_input_changed(second.get())
        _sync()

    def _sync() -> None:
        prediction.set(form.prediction)
        root.title(form.title())

    first.trace_add("write", _on_first)
    second.trace_add("write", _on_second)

    tk.Entry(root, textvariable=first, justify="center").pack(fill="x", pady=4)
    tk.Entry(root, textvariable=second, justify="center").pack(fill="x", pady=4)
    tk.Label(root, textvariable=prediction, font=("TkDefaultFont", 50)).pack()

    root.mainloop()
