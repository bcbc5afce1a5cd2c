# -*- coding: utf-8 -*-
"""Display implementations for tasktray (Textual TUI)."""
