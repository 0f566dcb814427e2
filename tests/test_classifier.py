"""Tests for lifecycle classification against a fixed clock."""

from datetime import timedelta

import pytest

from node_versions.classifier import LifecycleClassifier
from node_versions.errors import LookupMissError, NotReadyError
from node_versions.models import ClassificationContext

from conftest import SIGNIFICANT


def _status(**overrides):
    status = {
        "active": False,
        "activeOrCurrent": False,
        "current": False,
        "esm": False,
        "latestActive": False,
        "latestCurrent": False,
        "latestMaintenance": False,
        "lts": True,
        "maintained": False,
        "maintainedOrLTS": True,
        "maintenance": False,
        "released": True,
        "vercel": False,
    }
    status.update(overrides)
    return status


# Expected status of each line on 2020-11-03.
EXPECTED = {
    "0.8": _status(),
    "0.10": _status(),
    "0.12": _status(),
    "4": _status(),
    "8": _status(),
    "10": _status(latestMaintenance=True, maintained=True, maintenance=True, vercel=True),
    "12": _status(active=True, activeOrCurrent=True, esm=True, maintained=True, vercel=True),
    "13": _status(esm=True, lts=False, maintainedOrLTS=False),
    "14": _status(
        active=True, activeOrCurrent=True, esm=True, latestActive=True, maintained=True
    ),
    "15": _status(
        activeOrCurrent=True,
        current=True,
        esm=True,
        latestCurrent=True,
        lts=False,
        maintained=True,
    ),
    "16": _status(esm=True, maintainedOrLTS=False, released=False),
}


@pytest.mark.parametrize("version", list(EXPECTED))
def test_status_on_fixed_date(nv, version):
    actual = nv.classify(version).to_dict(camel_case=True)

    assert actual == EXPECTED[version]
    assert list(actual) == list(EXPECTED[version])


@pytest.mark.parametrize("version", list(EXPECTED))
def test_single_flag_filters_agree_with_status(nv, version):
    for flag, result in nv.classify(version).to_dict(camel_case=True).items():
        assert nv.admits(version, {flag: True}) is result, f"{version} {flag}"


def test_collective_filtering(nv):
    versions = list(EXPECTED)
    flags = list(_status())
    for flag in flags:
        expected = [version for version in versions if EXPECTED[version][flag]]
        assert nv.filter(versions, {flag: True}) == expected, flag


def test_maintenance_line_is_not_active(nv):
    status = nv.classify("10")

    assert status.maintenance is True
    assert status.active is False


def test_vercel_allow_list(nv):
    assert nv.classify("12").vercel is True
    assert nv.classify("14").vercel is True
    assert nv.classify("13").vercel is False


def test_absolute_releases(nv):
    fermium = nv.classify("14.15.0")
    assert fermium.active is True
    assert fermium.lts is True
    assert fermium.released is True
    assert fermium.latest_active is True

    before_lts = nv.classify("14.14.0")
    assert before_lts.active is False
    assert before_lts.lts is False
    assert before_lts.maintained is True

    current = nv.classify("15.0.0")
    assert current.current is True
    assert current.lts is False

    dubnium = nv.classify("10.23.0")
    assert dubnium.maintenance is True
    assert dubnium.active is False


def test_historical_absolute_release_is_lts_without_label(nv):
    status = nv.classify("0.12.18")

    assert status.lts is True
    assert status.maintained_or_lts is True
    assert status.maintained is False


def test_absolute_release_date_decides_released(nv):
    nv.set_clock("2020-10-25")
    classifier = nv.classifier()

    assert classifier.is_released("14.14.0") is True
    assert classifier.is_released("14.15.0") is False


@pytest.mark.parametrize("version", ["0.6", "0.9", "0.11"])
def test_untracked_lines_classify_as_false(nv, version):
    status = nv.classify(version).to_dict()

    assert not any(status.values())


def test_unknown_line_is_a_lookup_miss(nv):
    with pytest.raises(LookupMissError):
        nv.classify("17")


def test_unknown_release_is_a_lookup_miss(nv):
    with pytest.raises(LookupMissError):
        nv.classifier().is_released("14.99.0")


def test_clock_predicates_need_preload(unloaded):
    classifier = unloaded.classifier()

    with pytest.raises(NotReadyError):
        classifier.is_active("14")
    with pytest.raises(NotReadyError):
        classifier.is_released("14")
    with pytest.raises(NotReadyError):
        unloaded.classify("14")


def test_clock_free_predicates_work_before_preload(unloaded):
    classifier = unloaded.classifier()

    assert classifier.is_esm("12") is True
    assert classifier.is_esm("10") is False
    assert classifier.is_vercel("14.15.0") is True


def test_latest_predicates_need_aggregates(unloaded):
    unloaded.data.preload()
    classifier = LifecycleClassifier(
        unloaded.data, ClassificationContext(now=unloaded.now())
    )

    assert classifier.is_current("15") is True
    with pytest.raises(NotReadyError):
        classifier.is_latest_current("15")


def test_unknown_predicate_name(nv):
    with pytest.raises(ValueError):
        nv.classifier().predicate("supported")


@pytest.mark.parametrize("when", ["2016-01-01", "2018-06-01", "2020-11-03", "2021-06-01"])
def test_active_implies_maintained_or_lts(nv, when):
    nv.set_clock(when)
    classifier = nv.classifier()

    for version in SIGNIFICANT:
        if classifier.is_active(version):
            assert classifier.is_maintained_or_lts(version), version


def test_phases_do_not_overlap(nv):
    for version in SIGNIFICANT:
        entry = nv.schedule.lookup(version)
        if entry.lts is None or entry.maintenance is None:
            continue
        for boundary in (entry.start, entry.lts, entry.maintenance):
            nv.set_clock(boundary + timedelta(days=1))
            classifier = nv.classifier()
            phases = [
                classifier.is_current(version),
                classifier.is_active(version),
                classifier.is_maintenance(version),
            ]
            assert phases.count(True) == 1, (version, boundary)


def test_classification_reads_clock_at_call_time(nv):
    assert nv.classify("16").released is False

    nv.set_clock("2021-05-01")

    assert nv.classify("16").released is True
    assert nv.classify("16").current is True
