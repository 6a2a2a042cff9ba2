# test/conftest.py
import os

import pytest

from fis.engine import InferenceEngine
from fis.membership import MembershipKind

CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config")

DIST_MIN, DIST_MAX = 1.0, 21.0
SPEED_MIN, SPEED_MAX = 0.81, 3.31


def config_path(name: str) -> str:
    return os.path.join(CONFIG_DIR, name)


@pytest.fixture
def pass_speed_engine():
    """
    Two-rule Low/High engine with mirrored shoulders:
    distance [1, 21] -> speed [0.81, 3.31].
    """
    engine = InferenceEngine("pass_speed")
    engine.add_membership_function("distanceLow", DIST_MIN, DIST_MIN, DIST_MIN, DIST_MAX, 1, MembershipKind.INPUT)
    engine.add_membership_function("distanceHigh", DIST_MIN, DIST_MAX, DIST_MAX, DIST_MAX, 1, MembershipKind.INPUT)
    engine.add_membership_function("speedLow", SPEED_MIN, SPEED_MIN, SPEED_MIN, SPEED_MAX, 1, MembershipKind.OUTPUT)
    engine.add_membership_function("speedHigh", SPEED_MIN, SPEED_MAX, SPEED_MAX, SPEED_MAX, 1, MembershipKind.OUTPUT)
    engine.add_rule(["distanceLow"], ["speedLow"])
    engine.add_rule(["distanceHigh"], ["speedHigh"])
    return engine


@pytest.fixture
def singleton_engine():
    """
    Low/High engine on [0, 10] -> [100, 200] whose output sets are single
    points at the ends of the output range.
    """
    engine = InferenceEngine("singleton")
    engine.add_membership_function("low", 0, 0, 0, 10, 1, MembershipKind.INPUT)
    engine.add_membership_function("high", 0, 10, 10, 10, 1, MembershipKind.INPUT)
    engine.add_membership_function("outLow", 100, 100, 100, 100, 1, MembershipKind.OUTPUT)
    engine.add_membership_function("outHigh", 200, 200, 200, 200, 1, MembershipKind.OUTPUT)
    engine.add_rule(["low"], ["outLow"])
    engine.add_rule(["high"], ["outHigh"])
    return engine
