# -*- coding: utf-8 -*-
"""Frontend components for tasktray."""
