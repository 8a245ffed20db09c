# -*- coding: utf-8 -*-
"""
Prism: Spectral colorimetry for calibration and test workflows
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Static reference data: standard observers, illuminants and colour-chart
fixtures.  Tables are loaded once at import and exposed read-only.
"""
