"""Tests for version comparison and range evaluation."""

import pytest
from packaging.version import InvalidVersion

from node_versions.comparator import (
    compare_versions,
    is_absolute_version,
    significant_version,
    sort_versions,
    within_range,
)


def test_compare_significant_versions():
    assert compare_versions("4", "8") == -1
    assert compare_versions("8", "4") == 1
    assert compare_versions("10", "10") == 0
    assert compare_versions("0.10", "0.8") == 1
    assert compare_versions("0.12", "4") == -1


def test_line_equals_its_absolute_releases():
    assert compare_versions("4", "4.9.1") == 0
    assert compare_versions("0.12.18", "0.12") == 0
    assert compare_versions("14.15.0", "14.14.0") == 1
    assert compare_versions("v14.15.0", "14") == 0


def test_invalid_version_raises():
    with pytest.raises(InvalidVersion):
        compare_versions("latest", "4")


def test_sort_versions_is_numeric():
    assert sort_versions(["10", "0.10", "4", "0.8", "16"]) == ["0.8", "0.10", "4", "10", "16"]


def test_version_shape_helpers():
    assert is_absolute_version("14.15.0")
    assert is_absolute_version("v0.12.18")
    assert not is_absolute_version("14")
    assert not is_absolute_version("0.12")
    assert significant_version("14.15.0") == "14"
    assert significant_version("0.12.18") == "0.12"
    assert significant_version("v8") == "8"


def test_within_range():
    assert within_range("0.12", "<4")
    assert not within_range("4", "<4")
    assert within_range("12", ">=10 <14")
    assert not within_range("14", ">=10 <14")
    assert within_range("16", ">=10 <14 || 16")
    assert within_range("14.15.0", "14")
    assert within_range("8", ">= 8")
    assert within_range("14.15.0", "=14")
    assert within_range("12", "==12")
    assert not within_range("12", "==14")
    assert not within_range("13", "=14")


@pytest.mark.parametrize("expression", ["", "   ", "<4 ||", "latest", "~4"])
def test_within_range_rejects_bad_expressions(expression):
    with pytest.raises(ValueError):
        within_range("4", expression)
