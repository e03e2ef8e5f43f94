"""
Core building blocks shared by every layer: settings, logging setup,
the error taxonomy and the thread‑safe user storage.
"""
