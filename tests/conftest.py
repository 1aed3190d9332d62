"""Shared fixtures for mindnode-tools tests."""

import copy

import pytest

from mindnode_tools import RawDocument
from mindnode_tools.dimensions import Dimensions

SAMPLE_MAP = {
    "title": "Physics",
    "nodes": [
        {
            "id": 1,
            "title": {
                "text": '<p style="text-align:center;"><a href="https://en.wikipedia.org/wiki/Physics">'
                "\U0001F4D6 Physics</a></p>",
                "maxWidth": 200,
            },
            "note": {"text": "<p>Start here if you think this can be improved in any way  please say thanks</p>"},
            "location": {"x": 0, "y": 0},
            "shapeStyle": {"borderStrokeStyle": {"color": "#ff0000"}},
            "nodes": [
                {
                    "id": 11,
                    "title": {"text": "<p>Mechanics</p>"},
                    "location": {"x": 10, "y": 20},
                    "nodes": [
                        {
                            "id": 111,
                            "title": {"text": "<p>Kinematics</p>"},
                            "location": "{30, 40}",
                            "nodes": [],
                        },
                    ],
                },
                {
                    "id": 12,
                    "title": {"text": "<p>Optics</p>"},
                    "location": {"x": -10, "y": 20},
                    "nodes": [],
                },
            ],
        },
        {
            "id": 2,
            "title": {"text": "<p>Chemistry</p>"},
            "location": {"x": 300, "y": 0},
            "nodes": [
                {
                    "id": 21,
                    "title": {"text": "<p>Organic</p>"},
                    "location": {"x": 310, "y": 20},
                    "nodes": [],
                },
            ],
        },
    ],
    "connections": [
        {
            "startNodeID": 1,
            "endNodeID": 2,
            "wayPointOffset": {"x": 5, "y": -5},
            "title": {"text": "<p>related</p>"},
        },
        {
            "startNodeID": 2,
            "endNodeID": 1,
            "wayPointOffset": {"x": 0, "y": 0},
        },
    ],
}


class ScriptedRandom:
    """Returns pre-set draws in order, standing in for random.Random."""

    def __init__(self, values):
        self.values = iter(values)

    def random(self):
        return next(self.values)


def fixed_measure(markup, constraints, style_class):
    return Dimensions(width=100, height=30)


@pytest.fixture
def sample_map():
    return copy.deepcopy(SAMPLE_MAP)


@pytest.fixture
def sample_document(sample_map):
    return RawDocument.from_dict(sample_map)


@pytest.fixture
def measure():
    return fixed_measure


@pytest.fixture
def scripted_random():
    return ScriptedRandom
