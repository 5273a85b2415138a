# Copyright 2025 Spencer Williams
#
# Use of this source code is governed by an MIT license:
# https://github.com/sw23/life-model/blob/main/LICENSE

"""Tests for the net worth projection engine."""

from ..log import configure_logging

# Keep engine info events out of test output
configure_logging("WARNING")
