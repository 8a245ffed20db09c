# -*- coding: utf-8 -*-
# Prism: Spectral colorimetry for calibration and test workflows
#
# Copyright (c) 2026 opticsWolf
#
# SPDX-License-Identifier: LGPL-3.0-or-later

"""
Project metadata for the opticsWolf Prism.
"""

from typing import Final

# Metadata Definitions
__title__: Final[str] = "Prism"
__description__: Final[str] = (
    "Spectral colorimetry: spectra to CIE XYZ to encoded and quantised RGB, "
    "with reference colour-chart fixtures for pipeline validation."
)
__version__: Final[str] = "0.1.0"
__author__: Final[str] = "opticsWolf"
__license__: Final[str] = "LGPL-3.0-or-later"
__copyright__: Final[str] = "Copyright (c) 2026 opticsWolf"

def metadata_summary() -> dict[str, str]:
    """Returns a dictionary of project metadata for introspection."""
    return {
        "title": __title__,
        "version": __version__,
        "author": __author__,
        "license": __license__,
        "description": __description__,
        "copyright": __copyright__,
    }
