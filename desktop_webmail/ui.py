"""Tkinter dialog asking the user for a webmail provider."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import List, Optional, Set

from .controller import Selection, SelectionCancelled
from .models import Preference, Provider
from .registry import ProviderRegistry


class DisplayUnavailableError(RuntimeError):
    """Raised when no Tk display can be opened."""


class SelectionDialog:
    """Provider chooser with an "Ask again" toggle and OK / Cancel buttons."""

    def __init__(self, root: tk.Tk, registry: ProviderRegistry, preference: Preference) -> None:
        self.root = root
        self.registry = registry
        self.providers: List[Provider] = registry.sorted_by_name()
        self.labels: List[str] = display_labels(self.providers)
        self.selection: Optional[Selection] = None

        self.provider_var = tk.StringVar()
        self.ask_again_var = tk.BooleanVar(value=not preference.remember)

        self._build_ui()
        self._select_default(preference.default_provider)

    def _build_ui(self) -> None:
        self.root.title("Webmail Configuration")
        self.root.resizable(False, False)
        self.root.columnconfigure(0, weight=1)
        self.root.protocol("WM_DELETE_WINDOW", self.on_cancel)

        frame = ttk.Frame(self.root, padding="12")
        frame.grid(row=0, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)

        ttk.Label(frame, text="Select your webmail provider:").grid(row=0, column=0, columnspan=2, sticky="w")

        self.combo = ttk.Combobox(
            frame,
            textvariable=self.provider_var,
            values=self.labels,
            state="readonly",
            width=36,
        )
        self.combo.grid(row=1, column=0, columnspan=2, sticky="we", pady=(8, 8))

        self.ask_again_check = ttk.Checkbutton(frame, text="Ask again", variable=self.ask_again_var)
        self.ask_again_check.grid(row=2, column=0, columnspan=2, sticky="w", pady=(0, 12))

        ttk.Button(frame, text="OK", command=self.on_ok).grid(row=3, column=0, sticky="e", padx=(0, 8))
        ttk.Button(frame, text="Cancel", command=self.on_cancel).grid(row=3, column=1, sticky="e")

        self.root.bind("<Return>", lambda _event: self.on_ok())
        self.root.bind("<Escape>", lambda _event: self.on_cancel())

    def _select_default(self, name: str) -> None:
        default = self.registry.find(name)
        if default is None:
            return
        # the sort is stable, so the first entry by load order comes first here too
        for index, provider in enumerate(self.providers):
            if provider is default:
                self.combo.current(index)
                return

    def selected_provider(self) -> Optional[Provider]:
        label = self.provider_var.get()
        if label not in self.labels:
            return None
        return self.providers[self.labels.index(label)]

    def on_ok(self) -> None:
        provider = self.selected_provider()
        if provider is None:
            return
        self.selection = Selection(provider=provider, remember=not self.ask_again_var.get())
        self.root.destroy()

    def on_cancel(self) -> None:
        self.selection = None
        self.root.destroy()


def display_labels(providers: List[Provider]) -> List[str]:
    """Combobox labels; repeated names get a counter so every entry is reachable."""

    used: Set[str] = set()
    labels: List[str] = []
    for provider in providers:
        label = provider.name
        count = 1
        while label in used:
            count += 1
            label = f"{provider.name} ({count})"
        used.add(label)
        labels.append(label)
    return labels


def select_provider(registry: ProviderRegistry, preference: Preference) -> Selection:
    """Show the dialog and block until the user confirms or cancels."""

    try:
        root = tk.Tk()
    except tk.TclError as exc:
        raise DisplayUnavailableError("The provider dialog needs a graphical display.") from exc
    dialog = SelectionDialog(root, registry, preference)
    root.mainloop()
    if dialog.selection is None:
        raise SelectionCancelled()
    return dialog.selection
