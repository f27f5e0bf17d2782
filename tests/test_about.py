# -*- coding: utf-8 -*-
"""
Emission: Colour management for multi-channel light emitters
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Tests for the project metadata.
"""

import __about__


class TestMetadata:
    def test_summary_keys(self):
        summary = __about__.metadata_summary()
        assert set(summary) == {"title", "version", "license", "description", "copyright"}
        assert summary["title"] == "Emission"

    def test_version_matches_module(self):
        assert __about__.metadata_summary()["version"] == __about__.__version__ == "0.1.0"
