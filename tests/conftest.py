"""Shared schedule and release fixtures; no test touches the network."""

import json
from pathlib import Path

import pytest

from node_versions import NodeVersions


SCHEDULE = {
    "v0.8": {"start": "2012-06-25", "end": "2014-07-31"},
    "v0.10": {"start": "2013-03-11", "end": "2016-10-31"},
    "v0.12": {"start": "2015-02-06", "end": "2016-12-31"},
    "v4": {
        "start": "2015-09-08",
        "lts": "2015-10-12",
        "maintenance": "2017-04-01",
        "end": "2018-04-30",
        "codename": "Argon",
    },
    "v5": {"start": "2015-10-29", "maintenance": "2016-04-30", "end": "2016-06-30"},
    "v6": {
        "start": "2016-04-26",
        "lts": "2016-10-18",
        "maintenance": "2018-04-30",
        "end": "2019-04-30",
        "codename": "Boron",
    },
    "v7": {"start": "2016-10-25", "maintenance": "2017-04-30", "end": "2017-06-30"},
    "v8": {
        "start": "2017-05-30",
        "lts": "2017-10-31",
        "maintenance": "2019-01-01",
        "end": "2019-12-31",
        "codename": "Carbon",
    },
    "v9": {"start": "2017-10-01", "maintenance": "2018-04-01", "end": "2018-06-30"},
    "v10": {
        "start": "2018-04-24",
        "lts": "2018-10-30",
        "maintenance": "2020-05-19",
        "end": "2021-04-30",
        "codename": "Dubnium",
    },
    "v11": {"start": "2018-10-23", "maintenance": "2019-04-22", "end": "2019-06-01"},
    "v12": {
        "start": "2019-04-23",
        "lts": "2019-10-21",
        "maintenance": "2020-11-30",
        "end": "2022-04-30",
        "codename": "Erbium",
    },
    "v13": {"start": "2019-10-22", "maintenance": "2020-04-01", "end": "2020-06-01"},
    "v14": {
        "start": "2020-04-21",
        "lts": "2020-10-27",
        "maintenance": "2021-10-19",
        "end": "2023-04-30",
        "codename": "Fermium",
    },
    "v15": {"start": "2020-10-20", "maintenance": "2021-04-01", "end": "2021-06-01"},
    "v16": {
        "start": "2021-04-20",
        "lts": "2021-10-26",
        "maintenance": "2022-10-18",
        "end": "2024-04-30",
        "codename": "Gallium",
    },
}

RELEASES = [
    {"version": "v15.0.0", "date": "2020-10-20", "lts": False},
    {"version": "v14.15.0", "date": "2020-10-27", "lts": "Fermium"},
    {"version": "v14.14.0", "date": "2020-10-15", "lts": False},
    {"version": "v13.14.0", "date": "2020-04-29", "lts": False},
    {"version": "v12.19.0", "date": "2020-10-06", "lts": "Erbium"},
    {"version": "v10.23.0", "date": "2020-10-27", "lts": "Dubnium"},
    {"version": "v4.9.1", "date": "2018-03-29", "lts": "Argon"},
    {"version": "v0.12.18", "date": "2017-02-22", "lts": False},
    {"version": "v0.10.48", "date": "2016-10-18", "lts": False},
]

SIGNIFICANT = [key.lstrip("v") for key in SCHEDULE]


def make_versions(now="2020-11-03", **kwargs) -> NodeVersions:
    kwargs.setdefault("schedule_fetcher", lambda: SCHEDULE)
    kwargs.setdefault("releases_fetcher", lambda: RELEASES)
    return NodeVersions(now=now, **kwargs)


@pytest.fixture
def unloaded():
    return make_versions()


@pytest.fixture
def nv():
    return make_versions().preload()


@pytest.fixture
def source_files(tmp_path: Path):
    schedule_file = tmp_path / "schedule.json"
    releases_file = tmp_path / "index.json"
    schedule_file.write_text(json.dumps(SCHEDULE), encoding="utf-8")
    releases_file.write_text(json.dumps(RELEASES), encoding="utf-8")
    return schedule_file, releases_file
