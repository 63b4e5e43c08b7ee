"""ViewModel package for UI state and command surfaces.

Call context:
    ``renewdash/web_ui/main.py`` imports concrete viewmodels from this package
    to bind NiceGUI widget callbacks to state transitions.

Dependencies:
    Modules in this package depend on domain types, use-case errors and the
    app-level timer scheduler only. HTTP adapters stay outside.
"""
