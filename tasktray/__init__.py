# -*- coding: utf-8 -*-
"""tasktray: a terminal todo manager built on Textual."""

__version__ = "0.1.0"
